"""Table-existence cache.

``SchemaCache`` is an explicitly owned object: whoever needs table lookups
holds an instance and calls :meth:`SchemaCache.invalidate` after DDL.  There
is no process-global state, so two databases never share a cache.

Example::

    cache = SchemaCache(lambda: sqlite_table_names(conn))
    if not cache.has_table("users"):
        ...
    conn.execute("CREATE TABLE users (...)")
    cache.invalidate()
"""
from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

logger = structlog.get_logger(__name__)

#: Callable returning the table names currently visible to a connection.
TableFetcher = Callable[[], Iterable[object]]


class SchemaCache:
    """Lazily loaded, explicitly invalidated set of table names.

    Args:
        fetcher: Returns the raw table names.  Non-string and blank entries
            are skipped; names are stripped of surrounding whitespace.
    """

    def __init__(self, fetcher: TableFetcher) -> None:
        self._fetcher = fetcher
        self._tables: frozenset[str] | None = None

    @property
    def loaded(self) -> bool:
        return self._tables is not None

    @property
    def tables(self) -> frozenset[str]:
        """All cached table names, loading them on first access."""
        return self._load()

    def preload(self) -> None:
        """Fetch the table list now instead of on first lookup."""
        self._load()

    def has_table(self, table: str) -> bool:
        if not table:
            return False
        return table in self._load()

    def invalidate(self) -> None:
        """Forget the cached names; the next lookup fetches again."""
        self._tables = None

    def _load(self) -> frozenset[str]:
        if self._tables is not None:
            return self._tables
        names: set[str] = set()
        for raw in self._fetcher():
            if not isinstance(raw, str):
                continue
            name = raw.strip()
            if name:
                names.add(name)
        self._tables = frozenset(names)
        logger.info("schema_cache_loaded", table_count=len(self._tables))
        return self._tables
