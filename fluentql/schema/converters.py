"""Table-name fetchers for :class:`~fluentql.schema.tables.SchemaCache`.

SQLAlchemy fetcher
------------------
:func:`sqlalchemy_table_names` uses SQLAlchemy's inspector and works with
any backend SQLAlchemy supports.  Install the optional dependency first::

    pip install "fluentql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from fluentql.schema.converters import sqlalchemy_table_names
    from fluentql.schema.tables import SchemaCache

    engine = create_engine("sqlite:///app.db")
    cache = SchemaCache(lambda: sqlalchemy_table_names(engine))
"""
from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy import Connection, Engine


def sqlite_table_names(conn: sqlite3.Connection) -> list[str]:
    """Return user table names from a :mod:`sqlite3` connection."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' "
        "AND name NOT LIKE 'sqlite_%' ORDER BY name"
    )
    try:
        return [row[0] for row in cursor.fetchall()]
    finally:
        cursor.close()


def sqlalchemy_table_names(
    bind: Engine | Connection,
    *,
    schema: str | None = None,
) -> list[str]:
    """Return table names visible to a SQLAlchemy engine or connection.

    Args:
        bind: A :class:`sqlalchemy.engine.Engine` or open
            :class:`sqlalchemy.engine.Connection`.
        schema: Optional database schema name (e.g. ``"public"``).

    Returns:
        Table names as reported by the SQLAlchemy inspector.
    """
    from sqlalchemy import inspect

    return list(inspect(bind).get_table_names(schema=schema))
