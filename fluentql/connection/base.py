"""Connection protocol consumed by the query builder.

The builder never opens, pools or closes connections; it borrows one for
the duration of a render + execute call.  Any object providing these
methods works — see :mod:`fluentql.connection.sqlite` and
:mod:`fluentql.connection.sqlalchemy` for the bundled adapters.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Protocol, runtime_checkable

#: A fetched row: column name -> value.
Row = Mapping[str, Any]


@runtime_checkable
class Statement(Protocol):
    """A prepared statement bound to one SQL string."""

    def bind_value(self, name: str, value: Any) -> None: ...

    def execute(self) -> None: ...

    def fetch_all(self) -> list[Row]: ...

    def fetch(self) -> Optional[Row]: ...

    def row_count(self) -> int: ...


@runtime_checkable
class Connection(Protocol):
    """A live database handle."""

    def prepare(self, sql: str) -> Statement:
        """Prepare ``sql``.

        Raises:
            DatabaseConnectionError: If the statement cannot be prepared.
        """
        ...

    def last_insert_id(self) -> str: ...

    def in_transaction(self) -> bool: ...

    def begin_transaction(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
