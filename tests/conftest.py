"""Shared pytest fixtures for fluentQL unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from fluentql.connection.sqlite import SQLiteConnection
from fluentql.database import Database
from fluentql.schema.converters import sqlite_table_names
from tests.fixtures import FakeConnection, make_sqlite_db


@pytest.fixture()
def fake() -> FakeConnection:
    """Recording connection that returns no rows."""
    return FakeConnection()


@pytest.fixture()
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    conn = make_sqlite_db()
    yield conn
    conn.close()


@pytest.fixture()
def db(sqlite_conn: sqlite3.Connection) -> Database:
    """Database facade over the seeded in-memory SQLite database."""
    return Database(
        SQLiteConnection(sqlite_conn),
        table_fetcher=lambda: sqlite_table_names(sqlite_conn),
    )
