"""Adapter exposing a :mod:`sqlite3` connection as a fluentQL Connection."""
from __future__ import annotations

import sqlite3
from typing import Any, Optional

from fluentql.connection.base import Row
from fluentql.errors import DatabaseConnectionError


class SQLiteStatement:
    """Collects bindings and runs them on a dedicated cursor.

    ``sqlite3`` compiles statements lazily, so syntax errors surface from
    :meth:`execute` as :class:`sqlite3.Error` and are not wrapped.

    In its default mode ``sqlite3`` silently opens a transaction before any
    INSERT, UPDATE or DELETE.  When no transaction was open before the
    statement ran, that implicit one is committed right away (or rolled back
    if the statement failed), so a statement outside ``begin_transaction``
    behaves as autocommit.
    """

    def __init__(self, conn: sqlite3.Connection, cursor: sqlite3.Cursor, sql: str) -> None:
        self._conn = conn
        self._cursor = cursor
        self._sql = sql
        self._params: dict[str, Any] = {}

    def bind_value(self, name: str, value: Any) -> None:
        self._params[name.lstrip(":")] = value

    def execute(self) -> None:
        autocommit = not self._conn.in_transaction
        try:
            self._cursor.execute(self._sql, self._params)
        except sqlite3.Error:
            if autocommit and self._conn.in_transaction:
                self._conn.rollback()
            raise
        if autocommit and self._conn.in_transaction:
            self._conn.commit()

    def fetch_all(self) -> list[Row]:
        return [self._to_row(r) for r in self._cursor.fetchall()]

    def fetch(self) -> Optional[Row]:
        row = self._cursor.fetchone()
        return None if row is None else self._to_row(row)

    def row_count(self) -> int:
        return self._cursor.rowcount

    def _to_row(self, raw: Any) -> Row:
        if isinstance(raw, sqlite3.Row):
            return dict(zip(raw.keys(), raw))
        names = [d[0] for d in self._cursor.description or ()]
        return dict(zip(names, raw))


class SQLiteConnection:
    """Wraps a :class:`sqlite3.Connection`.

    Rows come back as plain dicts regardless of the connection's
    ``row_factory``.  Statements run outside a transaction are committed
    as they execute; a transaction opened with ``BEGIN`` on the raw
    connection is joined, not committed.

    Args:
        conn: An open ``sqlite3`` connection; the caller keeps ownership.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def raw(self) -> sqlite3.Connection:
        return self._conn

    def prepare(self, sql: str) -> SQLiteStatement:
        try:
            cursor = self._conn.cursor()
        except sqlite3.ProgrammingError as exc:
            raise DatabaseConnectionError(f"Cannot prepare statement: {exc}", sql=sql) from exc
        return SQLiteStatement(self._conn, cursor, sql)

    def last_insert_id(self) -> str:
        (rowid,) = self._conn.execute("SELECT last_insert_rowid()").fetchone()
        return str(rowid)

    def in_transaction(self) -> bool:
        return self._conn.in_transaction

    def begin_transaction(self) -> None:
        self._conn.execute("BEGIN")

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()
