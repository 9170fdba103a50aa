"""fluentQL – a fluent, injection-safe SQL query builder.

Chain calls, render parameterized SQL, execute it on a borrowed connection.

Public API
----------
``QueryBuilder``
    Chainable SELECT / INSERT / UPDATE / DELETE builder with terminal
    operations (``get``, ``first``, ``value``, ``count``, ``execute``,
    ``insert_get_id``, ``paginate``, ``transactional``).

``Database``
    Hands out builders bound to one connection and owns its
    ``SchemaCache``.

Re-exported types
-----------------
``QueryConfig``, ``CompiledSQL``, ``Page``, ``WhereGroup``,
``SQLiteConnection``, ``SchemaCache``, and all error classes.

Extensibility
-------------
New dialect compilers can be registered via::

    from fluentql.compile.registry import CompilerFactory

    @CompilerFactory.register("duckdb")
    class DuckDBCompiler(SQLCompiler):
        ...

After registration, pass ``compiler=CompilerFactory.create("duckdb")`` to
``QueryBuilder``.
"""

from __future__ import annotations

from fluentql.compile import (
    CompiledSQL,
    CompilerFactory,
    MySQLCompiler,
    PostgresCompiler,
    SQLCompiler,
    SQLiteCompiler,
)
from fluentql.config import QueryConfig
from fluentql.connection import Connection, SQLiteConnection, Statement
from fluentql.database import Database
from fluentql.errors import (
    ArityMismatchError,
    ConfigurationError,
    DatabaseConnectionError,
    DataMissingError,
    FluentQLError,
    GroupingImbalanceError,
    MissingColumnValueError,
    StatementKindError,
)
from fluentql.query import Page, Paginator, QueryBuilder, WhereGroup
from fluentql.schema import SchemaCache, StatementKind
from fluentql.schema.converters import sqlalchemy_table_names, sqlite_table_names

__all__ = [
    # Core
    "QueryBuilder",
    "WhereGroup",
    "Database",
    "QueryConfig",
    "StatementKind",
    # Pagination
    "Page",
    "Paginator",
    # Compilation
    "CompiledSQL",
    "CompilerFactory",
    "SQLCompiler",
    "SQLiteCompiler",
    "PostgresCompiler",
    "MySQLCompiler",
    # Connections
    "Connection",
    "Statement",
    "SQLiteConnection",
    # Schema cache
    "SchemaCache",
    "sqlite_table_names",
    "sqlalchemy_table_names",
    # Errors
    "FluentQLError",
    "ConfigurationError",
    "StatementKindError",
    "DataMissingError",
    "ArityMismatchError",
    "MissingColumnValueError",
    "GroupingImbalanceError",
    "DatabaseConnectionError",
]
