"""Predicate tokens for WHERE and HAVING clauses.

A clause is a flat, ordered list of tokens.  Structured predicates, raw
fragments and group markers all live in the same list; the predicate
compiler turns the list into a boolean expression.  Values are kept on the
tokens and only bound to placeholders at render time.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Connector(str, Enum):
    """Boolean connector joining a token to the preceding one."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def coerce(cls, value: str | Connector) -> Connector:
        """Anything other than ``OR`` (case-insensitive) is ``AND``."""
        if isinstance(value, Connector):
            return value
        return cls.OR if str(value).strip().upper() == "OR" else cls.AND


@dataclass(frozen=True)
class Predicate:
    """A single ``<column> <operator> <value>`` comparison.

    Attributes:
        connector: Connector to the preceding token.
        column: Column or expression, rendered verbatim.
        operator: Comparison operator, rendered verbatim.
        value: Scalar bound to one placeholder.
    """

    connector: Connector
    column: str
    operator: str
    value: Any


@dataclass(frozen=True)
class ValueListPredicate:
    """``<column> IN (...)`` / ``NOT IN (...)`` with one placeholder per value.

    Only built for non-empty value lists; empty lists degrade to a
    :class:`RawFragment` guard.
    """

    connector: Connector
    column: str
    values: tuple[Any, ...]
    negated: bool = False

    @property
    def operator(self) -> str:
        return "NOT IN" if self.negated else "IN"


@dataclass(frozen=True)
class RawFragment:
    """Literal SQL condition, rendered verbatim with no bindings."""

    connector: Connector
    sql: str


@dataclass(frozen=True)
class GroupOpen:
    """Opens a parenthesised sub-expression."""

    connector: Connector


@dataclass(frozen=True)
class GroupClose:
    """Closes the innermost open sub-expression."""


#: Any token that may appear in a WHERE / HAVING list.
PredicateToken = Union[Predicate, ValueListPredicate, RawFragment, GroupOpen, GroupClose]

#: Literal conditions used in place of empty value lists and unguarded mutations.
ALWAYS_FALSE = "1=0"
ALWAYS_TRUE = "1=1"
