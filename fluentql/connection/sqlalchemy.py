"""Adapter exposing a SQLAlchemy ``Connection`` as a fluentQL Connection.

Statements run through :func:`sqlalchemy.text`, which takes ``:name``
placeholders on every backend, so builders used with this adapter should
render with the default ``sqlite`` target.

Install the optional dependency before using this module::

    pip install "fluentql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine

    engine = create_engine("postgresql+psycopg://app@localhost/app")
    with engine.connect() as conn:
        db = Database(SQLAlchemyConnection(conn))
        rows = db.table("users").where("active", 1).get()
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError

from fluentql.connection.base import Row
from fluentql.errors import DatabaseConnectionError

if TYPE_CHECKING:
    from sqlalchemy import Connection, CursorResult, RootTransaction


class SQLAlchemyStatement:
    """Runs one ``text()`` clause and buffers its result.

    SQLAlchemy 2.0 opens a transaction on the first statement of any kind.
    When no transaction was open before this statement ran, the rows,
    row count and last row id are read first and the implicit transaction
    is committed (or rolled back on failure), so statements outside
    ``begin_transaction`` behave as autocommit.
    """

    def __init__(self, owner: SQLAlchemyConnection, sql: str) -> None:
        self._owner = owner
        self._clause = text(sql)
        self._params: dict[str, Any] = {}
        self._rows: list[Row] | None = None
        self._rowcount = -1
        self._cursor = 0

    def bind_value(self, name: str, value: Any) -> None:
        self._params[name.lstrip(":")] = value

    def execute(self) -> None:
        conn = self._owner.raw
        autocommit = not conn.in_transaction()
        try:
            result = conn.execute(self._clause, self._params)
            self._rowcount = result.rowcount
            self._owner._last_insert_id = _lastrowid(result)
            self._rows = (
                [dict(m) for m in result.mappings().all()] if result.returns_rows else []
            )
        except SQLAlchemyError:
            if autocommit and conn.in_transaction():
                conn.rollback()
            raise
        self._cursor = 0
        if autocommit and conn.in_transaction():
            conn.commit()

    def fetch_all(self) -> list[Row]:
        rows = self._require_rows()
        remaining, self._cursor = rows[self._cursor:], len(rows)
        return remaining

    def fetch(self) -> Optional[Row]:
        rows = self._require_rows()
        if self._cursor >= len(rows):
            return None
        row = rows[self._cursor]
        self._cursor += 1
        return row

    def row_count(self) -> int:
        self._require_rows()
        return self._rowcount

    def _require_rows(self) -> list[Row]:
        if self._rows is None:
            raise DatabaseConnectionError("Statement has not been executed.", sql=str(self._clause))
        return self._rows


class SQLAlchemyConnection:
    """Wraps an open :class:`sqlalchemy.engine.Connection`.

    ``last_insert_id()`` reports the ``lastrowid`` of the most recent
    statement executed through this adapter, which SQLite and MySQL drivers
    populate.  A transaction already open on the wrapped connection (begun
    by the caller) is joined, not committed.

    Args:
        conn: An open SQLAlchemy connection; the caller keeps ownership.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn
        self._tx: RootTransaction | None = None
        self._last_insert_id = "0"

    @property
    def raw(self) -> Connection:
        return self._conn

    def prepare(self, sql: str) -> SQLAlchemyStatement:
        if self._conn.closed:
            raise DatabaseConnectionError("Cannot prepare statement: connection is closed.", sql=sql)
        return SQLAlchemyStatement(self, sql)

    def last_insert_id(self) -> str:
        return self._last_insert_id

    def in_transaction(self) -> bool:
        return self._conn.in_transaction()

    def begin_transaction(self) -> None:
        self._tx = self._conn.begin()

    def commit(self) -> None:
        tx, self._tx = self._tx, None
        if tx is not None:
            tx.commit()
        else:
            self._conn.commit()

    def rollback(self) -> None:
        tx, self._tx = self._tx, None
        if tx is not None:
            tx.rollback()
        else:
            self._conn.rollback()


def _lastrowid(result: CursorResult) -> str:
    try:
        rowid = result.lastrowid
    except InvalidRequestError:
        return "0"
    return "0" if rowid is None else str(rowid)
