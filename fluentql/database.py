"""Database facade: one connection, one configuration, many builders.

``Database`` is an explicitly constructed object, so several databases can
coexist and nothing is bootstrapped globally.  It also owns the
:class:`~fluentql.schema.tables.SchemaCache` for its connection.

Example::

    import sqlite3

    db = Database(SQLiteConnection(sqlite3.connect("app.db")))
    user_id = db.table("users").insert({"name": "Ada"}).insert_get_id()

    def move(q):
        q.table("accounts").update({"balance": 0}).where("id", 1).execute()
        return db.table("audit").insert({"event": "reset"}).insert_get_id()

    db.transactional(move)
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from fluentql.config import QueryConfig
from fluentql.connection.base import Connection
from fluentql.connection.transaction import transactional
from fluentql.query.builder import QueryBuilder
from fluentql.schema.tables import SchemaCache, TableFetcher

T = TypeVar("T")


class Database:
    """Hands out builders bound to one connection.

    Args:
        connection: Connection shared by every builder.
        config: Settings passed to every builder.
        table_fetcher: Source of table names for :attr:`schema`.  Without
            one, ``has_table`` lookups report no tables.
    """

    def __init__(
        self,
        connection: Connection,
        config: QueryConfig | None = None,
        table_fetcher: TableFetcher | None = None,
    ) -> None:
        self._conn = connection
        self._config = config or QueryConfig()
        self._schema = SchemaCache(table_fetcher or (lambda: ()))

    @property
    def connection(self) -> Connection:
        return self._conn

    @property
    def config(self) -> QueryConfig:
        return self._config

    @property
    def schema(self) -> SchemaCache:
        return self._schema

    def query(self) -> QueryBuilder:
        return QueryBuilder(self._conn, self._config)

    def table(self, name: str, alias: str | None = None) -> QueryBuilder:
        return self.query().table(name, alias)

    def transactional(self, callback: Callable[[QueryBuilder], T]) -> T:
        """Run ``callback`` with a fresh builder inside one transaction."""
        return transactional(self._conn, lambda: callback(self.query()))

    def last_insert_id(self) -> str:
        return self._conn.last_insert_id()
