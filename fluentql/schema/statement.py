"""Statement intent collected by the query builder.

``QueryState`` is the single mutable record a :class:`~fluentql.query.builder.QueryBuilder`
writes into.  Renderers only read it.  Join specs are pydantic models;
everything mutated by chained calls is a plain dataclass.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

from fluentql.errors import ArityMismatchError, MissingColumnValueError
from fluentql.schema.predicates import PredicateToken


class StatementKind(str, Enum):
    """SQL operation category a builder renders."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class JoinSpec(BaseModel):
    """A single ``<KIND> JOIN <table> ON <left> <op> <right>`` entry.

    Attributes:
        kind: SQL join type.
        table: Joined table, optionally with an alias (``"roles r"``).
        left: Left-hand ON expression.
        operator: ON comparison operator.
        right: Right-hand ON expression.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["INNER", "LEFT", "RIGHT"] = "INNER"
    table: str
    left: str
    operator: str = "="
    right: str


# ---------------------------------------------------------------------------
# Insert payload variants
# ---------------------------------------------------------------------------


@dataclass
class SingleRowInsert:
    """One row given as a ``column -> value`` mapping."""

    data: dict[str, Any]


@dataclass
class ColumnInsert:
    """Declared column list plus any number of positional rows.

    Rows are validated against the column count when they are added, so a
    rendered payload is always rectangular.
    """

    columns: list[str]
    rows: list[list[Any]] = field(default_factory=list)

    def add_row(self, row: Sequence[Any]) -> None:
        values = list(row)
        if len(values) != len(self.columns):
            raise ArityMismatchError(
                f"VALUES count ({len(values)}) does not match INSERT column "
                f"count ({len(self.columns)}).",
                expected=len(self.columns),
                actual=len(values),
            )
        self.rows.append(values)

    def add_mapping(self, row: Mapping[str, Any]) -> None:
        for column in self.columns:
            if column not in row:
                raise MissingColumnValueError(column, self.columns)
        self.rows.append([row[column] for column in self.columns])


InsertPayload = Union[SingleRowInsert, ColumnInsert]


# ---------------------------------------------------------------------------
# Builder state
# ---------------------------------------------------------------------------


@dataclass
class QueryState:
    """Everything a render reads.

    Attributes:
        table: Target table (required before any render).
        alias: Table alias, applied to SELECT only.
        kind: Statement kind; the last kind-setting call wins.
        columns: SELECT list.
        joins: Join specs in registration order.
        wheres: WHERE token list.
        having: HAVING token list.
        group_by: GROUP BY expressions.
        order_by: ``"<expr> ASC|DESC"`` strings.
        limit: Row limit, if any.
        offset: Row offset, if any.
        insert: Insert payload, if any.
        update: Update payload.
    """

    table: str | None = None
    alias: str | None = None
    kind: StatementKind | None = StatementKind.SELECT
    columns: list[str] = field(default_factory=lambda: ["*"])
    joins: list[JoinSpec] = field(default_factory=list)
    wheres: list[PredicateToken] = field(default_factory=list)
    having: list[PredicateToken] = field(default_factory=list)
    group_by: list[str] = field(default_factory=list)
    order_by: list[str] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    insert: InsertPayload | None = None
    update: dict[str, Any] = field(default_factory=dict)

    @property
    def is_grouped(self) -> bool:
        return bool(self.group_by or self.having)
