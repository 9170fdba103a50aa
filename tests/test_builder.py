"""Unit tests for QueryBuilder terminal operations against a fake connection."""

from __future__ import annotations

from fluentql.query.builder import QueryBuilder
from tests.fixtures import FakeConnection


def test_run_binds_every_value(fake):
    QueryBuilder(fake).table("users").where("id", 7).where_in("role", ["a", "b"]).run()
    assert fake.last.sql == "SELECT * FROM users WHERE id = :p1 AND role IN (:p2,:p3)"
    assert fake.last.bindings == {"p1": 7, "p2": "a", "p3": "b"}
    assert fake.last.executed


def test_get_returns_all_rows():
    fake = FakeConnection(results=[[{"id": 1}, {"id": 2}]])
    assert QueryBuilder(fake).table("users").get() == [{"id": 1}, {"id": 2}]


def test_first_sets_limit_when_unset():
    fake = FakeConnection(results=[[{"id": 1}]])
    b = QueryBuilder(fake).table("users")
    assert b.first() == {"id": 1}
    assert fake.last.sql == "SELECT * FROM users LIMIT 1"
    assert b.state.limit == 1


def test_first_keeps_existing_limit():
    fake = FakeConnection(results=[[{"id": 1}]])
    QueryBuilder(fake).table("users").limit(5).first()
    assert fake.last.sql == "SELECT * FROM users LIMIT 5"


def test_first_returns_none_without_rows(fake):
    assert QueryBuilder(fake).table("users").first() is None


def test_value():
    fake = FakeConnection(results=[[{"name": "Ada", "id": 1}]])
    assert QueryBuilder(fake).table("users").value("name") == "Ada"


def test_value_missing_row_or_column(fake):
    assert QueryBuilder(fake).table("users").value("name") is None
    fake.results = [[{"id": 1}]]
    assert QueryBuilder(fake).table("users").value("name") is None


def test_count_swaps_and_restores_columns():
    fake = FakeConnection(results=[[{"cnt": 7}]])
    b = QueryBuilder(fake).table("users").select(["id", "name"]).where("age", ">", 18)
    assert b.count() == 7
    assert fake.last.sql == "SELECT COUNT(*) AS cnt FROM users WHERE age > :p1"
    assert b.state.columns == ["id", "name"]
    assert b.state.limit is None


def test_count_restores_columns_on_error():
    class Broken(FakeConnection):
        def prepare(self, sql):
            raise RuntimeError("gone")

    b = QueryBuilder(Broken()).table("users").select(["id"])
    try:
        b.count()
    except RuntimeError:
        pass
    assert b.state.columns == ["id"]


def test_count_without_rows_is_zero(fake):
    assert QueryBuilder(fake).table("users").count() == 0


def test_execute_returns_affected_rows():
    fake = FakeConnection(affected=3)
    affected = QueryBuilder(fake).table("users").update({"vip": 1}).where("age", "<", 18).execute()
    assert affected == 3
    assert fake.last.sql == "UPDATE users SET vip = :p1 WHERE age < :p2"
    assert fake.last.bindings == {"p1": 1, "p2": 18}


def test_unconditioned_delete_reaches_connection_as_no_op(fake):
    QueryBuilder(fake).table("users").delete().execute()
    assert fake.last.sql == "DELETE FROM users WHERE 1=0"


def test_insert_get_id():
    fake = FakeConnection(insert_id="99")
    new_id = QueryBuilder(fake).table("users").insert({"name": "Ada"}).insert_get_id()
    assert new_id == "99"
    assert fake.last.sql == "INSERT INTO users (name) VALUES (:p1)"


def test_last_insert_id(fake):
    assert QueryBuilder(fake).last_insert_id() == "42"


def test_statement_kind_is_exposed_on_state():
    b = QueryBuilder().table("t").insert({"a": 1})
    assert b.state.kind.value == "INSERT"
