"""WHERE-clause writers shared by the builder and its group handles.

:class:`WhereClauseMixin` appends tokens to whatever list ``_where_tokens``
returns.  :class:`QueryBuilder` points it at its own WHERE list and
:class:`WhereGroup` at the very same list, so a grouping callback writes
straight into the builder between an open and a close marker.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar, Union

from fluentql.schema.predicates import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    Connector,
    GroupClose,
    GroupOpen,
    Predicate,
    PredicateToken,
    RawFragment,
    ValueListPredicate,
)

W = TypeVar("W", bound="WhereClauseMixin")

_MISSING: Any = object()

#: First argument accepted by ``where``: a column, an equality map, or a grouping callback.
WhereTarget = Union[str, Mapping[str, Any], Callable[["WhereGroup"], Any]]


class WhereClauseMixin(ABC):
    """Fluent WHERE methods; every method returns ``self``."""

    @abstractmethod
    def _where_tokens(self) -> list[PredicateToken]:
        """Return the token list these methods append to."""

    def where(
        self: W,
        column: WhereTarget,
        op_or_value: Any = _MISSING,
        value: Any = _MISSING,
        connector: str = "AND",
    ) -> W:
        """Add a comparison, an equality map, or a parenthesised group.

        ``where("a", 1)`` means ``a = 1``; ``where("a", ">", 1)`` uses the
        given operator.  A mapping expands to equalities where only the first
        uses ``connector``.  A callable receives a :class:`WhereGroup` whose
        predicates are wrapped in parentheses.
        """
        tokens = self._where_tokens()
        conn = Connector.coerce(connector)

        if callable(column):
            tokens.append(GroupOpen(conn))
            try:
                column(WhereGroup(tokens))
            finally:
                tokens.append(GroupClose())
            return self

        if isinstance(column, Mapping):
            for key, val in column.items():
                self.where(str(key), "=", val, conn)
                conn = Connector.AND
            return self

        if op_or_value is _MISSING:
            raise TypeError(f"where('{column}') requires a value.")
        if value is _MISSING:
            op, value = "=", op_or_value
        else:
            op = str(op_or_value).strip()
        tokens.append(Predicate(conn, column, op, value))
        return self

    def or_where(
        self: W,
        column: WhereTarget,
        op_or_value: Any = _MISSING,
        value: Any = _MISSING,
    ) -> W:
        return self.where(column, op_or_value, value, "OR")

    def where_in(
        self: W,
        column: str,
        values: Iterable[Any],
        connector: str = "AND",
        negated: bool = False,
    ) -> W:
        """``column IN (...)``; an empty list becomes ``1=0`` (``1=1`` negated)."""
        items = tuple(values)
        conn = Connector.coerce(connector)
        if not items:
            guard = ALWAYS_TRUE if negated else ALWAYS_FALSE
            self._where_tokens().append(RawFragment(conn, guard))
        else:
            self._where_tokens().append(ValueListPredicate(conn, column, items, negated))
        return self

    def where_not_in(self: W, column: str, values: Iterable[Any], connector: str = "AND") -> W:
        return self.where_in(column, values, connector, negated=True)

    def or_where_in(self: W, column: str, values: Iterable[Any]) -> W:
        return self.where_in(column, values, "OR")

    def or_where_not_in(self: W, column: str, values: Iterable[Any]) -> W:
        return self.where_in(column, values, "OR", negated=True)

    def where_null(self: W, column: str, connector: str = "AND", negated: bool = False) -> W:
        check = "IS NOT NULL" if negated else "IS NULL"
        return self.where_raw(f"{column} {check}", connector)

    def where_not_null(self: W, column: str, connector: str = "AND") -> W:
        return self.where_null(column, connector, negated=True)

    def or_where_null(self: W, column: str) -> W:
        return self.where_null(column, "OR")

    def or_where_not_null(self: W, column: str) -> W:
        return self.where_null(column, "OR", negated=True)

    def where_like(
        self: W,
        column: str,
        pattern: str,
        connector: str = "AND",
        negated: bool = False,
    ) -> W:
        op = "NOT LIKE" if negated else "LIKE"
        self._where_tokens().append(Predicate(Connector.coerce(connector), column, op, pattern))
        return self

    def where_not_like(self: W, column: str, pattern: str, connector: str = "AND") -> W:
        return self.where_like(column, pattern, connector, negated=True)

    def or_where_like(self: W, column: str, pattern: str) -> W:
        return self.where_like(column, pattern, "OR")

    def where_raw(self: W, sql: str, connector: str = "AND") -> W:
        """Append a literal condition.  Never interpolate user input here."""
        self._where_tokens().append(RawFragment(Connector.coerce(connector), sql))
        return self

    def or_where_raw(self: W, sql: str) -> W:
        return self.where_raw(sql, "OR")


class WhereGroup(WhereClauseMixin):
    """Handle passed to grouping callbacks.

    It owns nothing: every call appends to the builder's WHERE list.
    """

    def __init__(self, tokens: list[PredicateToken]) -> None:
        self._tokens = tokens

    def _where_tokens(self) -> list[PredicateToken]:
        return self._tokens
