"""Connection protocol and the built-in sqlite3 adapter.

The SQLAlchemy adapter lives in :mod:`fluentql.connection.sqlalchemy` and is
imported explicitly, since SQLAlchemy is an optional dependency.
"""
from fluentql.connection.base import Connection, Row, Statement
from fluentql.connection.sqlite import SQLiteConnection, SQLiteStatement

__all__ = [
    "Connection",
    "Row",
    "SQLiteConnection",
    "SQLiteStatement",
    "Statement",
]
