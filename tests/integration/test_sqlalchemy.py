"""Integration tests: build → execute through a SQLAlchemy connection.

Uses an in-memory SQLite engine, so no server is required.  Skips when
SQLAlchemy is not installed.
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest

sqlalchemy = pytest.importorskip("sqlalchemy", reason="sqlalchemy required for adapter tests")

from fluentql.connection.sqlalchemy import SQLAlchemyConnection  # noqa: E402
from fluentql.database import Database  # noqa: E402
from fluentql.errors import DatabaseConnectionError  # noqa: E402
from fluentql.schema.converters import sqlalchemy_table_names  # noqa: E402
from tests.fixtures import DDL, DEPARTMENTS, USERS  # noqa: E402

pytestmark = pytest.mark.integration

USER_COLUMNS = ["id", "name", "email", "age", "vip", "dept_id"]


@pytest.fixture()
def sa_conn() -> Iterator[sqlalchemy.Connection]:
    engine = sqlalchemy.create_engine("sqlite://")
    with engine.connect() as conn:
        for statement in DDL.split(";"):
            if statement.strip():
                conn.exec_driver_sql(statement)
        conn.commit()
        yield conn
    engine.dispose()


@pytest.fixture()
def sa_db(sa_conn) -> Database:
    db = Database(
        SQLAlchemyConnection(sa_conn),
        table_fetcher=lambda: sqlalchemy_table_names(sa_conn),
    )
    departments = db.table("departments").insert(["id", "name"])
    for row in DEPARTMENTS:
        departments.values(row)
    departments.execute()
    users = db.table("users").insert(USER_COLUMNS)
    for row in USERS:
        users.values(row)
    users.execute()
    return db


def test_seeded_through_multi_row_insert(sa_db: Database):
    assert sa_db.table("users").count() == len(USERS)
    assert sa_db.table("departments").count() == len(DEPARTMENTS)


def test_select_with_group_and_join(sa_db: Database):
    rows = (
        sa_db.table("users", "u")
        .select(["u.id", "d.name AS dept"])
        .join("departments d", "d.id", "=", "u.dept_id")
        .where("u.age", ">=", 18)
        .where(lambda g: g.where("u.vip", 1).or_where("d.name", "Engineering"))
        .order_by("u.id")
        .get()
    )
    assert rows == [
        {"id": 1, "dept": "Engineering"},
        {"id": 4, "dept": "Sales"},
        {"id": 6, "dept": "Engineering"},
    ]


def test_paginate(sa_db: Database):
    page = sa_db.table("users").select(["id"]).order_by("id").paginate(3, 3)
    assert page.items == [{"id": 7}]
    assert page.total == 7
    assert page.has_prev and not page.has_next


def test_insert_get_id(sa_db: Database):
    assert sa_db.table("departments").insert({"name": "Legal"}).insert_get_id() == "4"


def test_update_and_guarded_delete(sa_db: Database):
    assert sa_db.table("users").update({"vip": 1}).where_null("email").execute() == 2
    assert sa_db.table("users").delete().execute() == 0
    assert sa_db.table("users").where("vip", 1).count() == 4


def test_transaction_commit_and_rollback(sa_db: Database, sa_conn):
    sa_db.transactional(lambda q: q.table("departments").insert({"name": "Ops"}).execute())
    assert not sa_conn.in_transaction()

    def boom(q):
        q.table("departments").insert({"name": "Legal"}).execute()
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError):
        sa_db.transactional(boom)
    names = [r["name"] for r in sa_db.table("departments").select("name").get()]
    assert "Ops" in names
    assert "Legal" not in names


def test_schema_cache(sa_db: Database):
    assert sa_db.schema.tables >= {"users", "departments"}


def test_closed_connection_cannot_prepare(sa_conn):
    conn = SQLAlchemyConnection(sa_conn)
    sa_conn.close()
    with pytest.raises(DatabaseConnectionError):
        conn.prepare("SELECT 1")


def test_read_then_failed_transaction_rolls_back(sa_db: Database, sa_conn):
    assert len(sa_db.table("departments").get()) == len(DEPARTMENTS)
    assert not sa_conn.in_transaction()

    def boom(q):
        q.table("departments").insert({"name": "Legal"}).execute()
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError):
        sa_db.transactional(boom)
    names = [r["name"] for r in sa_db.table("departments").select("name").get()]
    assert "Legal" not in names


def test_write_outside_transaction_is_committed(sa_db: Database, sa_conn):
    sa_db.table("departments").insert({"name": "Ops"}).execute()
    assert not sa_conn.in_transaction()
    sa_conn.rollback()
    assert sa_db.table("departments").where("name", "Ops").count() == 1


def test_rows_survive_autocommit(sa_db: Database):
    stmt = sa_db.table("users").select(["id"]).order_by("id").run()
    assert stmt.fetch() == {"id": 1}
    assert len(stmt.fetch_all()) == len(USERS) - 1
    assert stmt.fetch() is None
