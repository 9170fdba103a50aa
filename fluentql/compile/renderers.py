"""Statement-level SQL renderers.

Each class renders exactly one statement kind from a
:class:`~fluentql.schema.statement.QueryState`.  All of them share one
:class:`~fluentql.compile.context.RenderContext`, so every placeholder in a
statement comes from the same binder.

Classes
-------
SelectRenderer   — ``SELECT … FROM … [JOIN] [WHERE] [GROUP BY] [HAVING] [ORDER BY] [LIMIT] [OFFSET]``
InsertRenderer   — ``INSERT INTO … (…) VALUES (…)[, (…)]``
UpdateRenderer   — ``UPDATE … SET … WHERE …`` (guarded)
DeleteRenderer   — ``DELETE FROM … WHERE …`` (guarded)
CountRenderer    — derived ``COUNT(*)`` query used for pagination totals
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from fluentql.compile.context import RenderContext
from fluentql.compile.predicates import PredicateCompiler
from fluentql.errors import ConfigurationError, DataMissingError, StatementKindError
from fluentql.schema.statement import (
    ColumnInsert,
    JoinSpec,
    QueryState,
    SingleRowInsert,
    StatementKind,
)

#: Select list used by count queries; the row is read back by this alias.
COUNT_COLUMN = "COUNT(*) AS cnt"
COUNT_ALIAS = "cnt"


def target_table(state: QueryState, with_alias: bool = True) -> str:
    """Return the table reference, raising if none is set."""
    if not state.table:
        raise ConfigurationError("No table set. Call .table(...) first.", clause="FROM")
    if with_alias and state.alias:
        return f"{state.table} {state.alias}"
    return state.table


class StatementRenderer(ABC):
    """Shared wiring for the concrete renderers."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx
        self._pred = PredicateCompiler(ctx)

    @abstractmethod
    def render(self, state: QueryState) -> str:
        """Return the SQL for ``state``, binding values through the context."""


class SelectRenderer(StatementRenderer):
    """Builds a full ``SELECT`` statement."""

    def render(
        self,
        state: QueryState,
        columns: Sequence[str] | None = None,
        include_tail: bool = True,
    ) -> str:
        """Render ``state`` as a SELECT.

        Args:
            state: Builder state.
            columns: Replacement select list (the state is left untouched).
            include_tail: When ``False`` the ORDER BY, LIMIT and OFFSET
                clauses are left out, as count queries require.
        """
        table = target_table(state)
        parts = [f"SELECT {', '.join(columns or state.columns)}", f"FROM {table}"]
        parts.extend(_render_join(j) for j in state.joins)

        where_sql = self._pred.clause("WHERE", state.wheres)
        if where_sql:
            parts.append(where_sql)

        if state.group_by:
            parts.append(f"GROUP BY {', '.join(state.group_by)}")

        having_sql = self._pred.clause("HAVING", state.having)
        if having_sql:
            parts.append(having_sql)

        if include_tail:
            if state.order_by:
                parts.append(f"ORDER BY {', '.join(state.order_by)}")
            if state.limit is not None:
                parts.append(f"LIMIT {state.limit}")
            if state.offset is not None:
                parts.append(f"OFFSET {state.offset}")

        return " ".join(parts)


class CountRenderer(StatementRenderer):
    """Builds the derived ``COUNT(*)`` query for a SELECT state.

    Grouped selects are wrapped in a derived table so the total counts
    groups rather than rows; plain selects swap their select list.
    """

    def render(self, state: QueryState) -> str:
        select = SelectRenderer(self._ctx)
        if state.is_grouped:
            inner = select.render(state, include_tail=False)
            return f"SELECT {COUNT_COLUMN} FROM ({inner}) AS _sub"
        return select.render(state, columns=[COUNT_COLUMN], include_tail=False)


class InsertRenderer(StatementRenderer):
    """Builds single-row and multi-row ``INSERT`` statements."""

    def render(self, state: QueryState) -> str:
        table = target_table(state, with_alias=False)
        payload = state.insert

        if isinstance(payload, SingleRowInsert) and payload.data:
            columns = list(payload.data)
            placeholders = [self._ctx.placeholder(payload.data[c]) for c in columns]
            return (
                f"INSERT INTO {table} ({','.join(columns)}) "
                f"VALUES ({','.join(placeholders)})"
            )

        if isinstance(payload, ColumnInsert) and payload.columns and payload.rows:
            rows_sql = []
            for row in payload.rows:
                placeholders = [self._ctx.placeholder(v) for v in row]
                rows_sql.append(f"({','.join(placeholders)})")
            return (
                f"INSERT INTO {table} ({','.join(payload.columns)}) "
                f"VALUES {', '.join(rows_sql)}"
            )

        raise DataMissingError("INSERT")


class UpdateRenderer(StatementRenderer):
    """Builds ``UPDATE … SET …`` with the guarded WHERE clause."""

    def render(self, state: QueryState) -> str:
        table = target_table(state, with_alias=False)
        if not state.update:
            raise DataMissingError("UPDATE")
        sets = [f"{col} = {self._ctx.placeholder(val)}" for col, val in state.update.items()]
        where_sql = self._pred.clause("WHERE", state.wheres, guarded=True)
        return f"UPDATE {table} SET {', '.join(sets)} {where_sql}"


class DeleteRenderer(StatementRenderer):
    """Builds ``DELETE FROM …`` with the guarded WHERE clause."""

    def render(self, state: QueryState) -> str:
        table = target_table(state, with_alias=False)
        where_sql = self._pred.clause("WHERE", state.wheres, guarded=True)
        return f"DELETE FROM {table} {where_sql}"


RENDERERS: dict[StatementKind, type[StatementRenderer]] = {
    StatementKind.SELECT: SelectRenderer,
    StatementKind.INSERT: InsertRenderer,
    StatementKind.UPDATE: UpdateRenderer,
    StatementKind.DELETE: DeleteRenderer,
}


def render_statement(ctx: RenderContext, state: QueryState) -> str:
    """Render ``state`` with the renderer registered for its kind.

    Raises:
        ConfigurationError: If no table is set.
        StatementKindError: If the kind is unset or unknown.
    """
    target_table(state)
    renderer_cls = RENDERERS.get(state.kind) if state.kind is not None else None
    if renderer_cls is None:
        raise StatementKindError(f"Unknown statement kind: {state.kind!r}", kind=state.kind)
    return renderer_cls(ctx).render(state)


def _render_join(join: JoinSpec) -> str:
    return f"{join.kind} JOIN {join.table} ON {join.left} {join.operator} {join.right}"
