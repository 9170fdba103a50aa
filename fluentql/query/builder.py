"""Fluent query builder.

``QueryBuilder`` collects intent through chained calls into a
:class:`~fluentql.schema.statement.QueryState` and renders it on demand via
the statement renderers.  Terminal calls hand the rendered SQL and its
bindings to the borrowed :class:`~fluentql.connection.base.Connection`.

Example::

    users = (
        QueryBuilder(conn)
        .table("users", "u")
        .select(["u.id", "u.name"])
        .left_join("roles r", "r.id", "=", "u.role_id")
        .where("u.age", ">", 18)
        .where(lambda g: g.where("r.name", "admin").or_where("u.vip", 1))
        .order_by("u.name")
        .get()
    )

Placeholders
------------
The binder counter lives as long as the builder.  Every render clears the
binding set but keeps counting, so ``get_bindings()`` always matches the SQL
of the most recent render and no placeholder name is ever issued twice.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, TypeVar, Union

import structlog

from fluentql.compile.base import CompiledSQL, SQLCompiler
from fluentql.compile.binder import Binder, BinderSnapshot
from fluentql.compile.context import RenderContext
from fluentql.compile.registry import CompilerFactory
from fluentql.compile.renderers import COUNT_ALIAS, COUNT_COLUMN, CountRenderer, render_statement
from fluentql.config import QueryConfig
from fluentql.connection.base import Connection, Row, Statement
from fluentql.connection.transaction import transactional
from fluentql.errors import ArityMismatchError, ConfigurationError, StatementKindError
from fluentql.query.clauses import WhereClauseMixin
from fluentql.schema.predicates import Connector, Predicate, PredicateToken
from fluentql.schema.statement import (
    ColumnInsert,
    JoinSpec,
    QueryState,
    SingleRowInsert,
    StatementKind,
)

if TYPE_CHECKING:
    from fluentql.query.paginator import Page

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BuilderSnapshot:
    """Render-affecting fields saved by :meth:`QueryBuilder.preserved_state`."""

    binder: BinderSnapshot
    columns: list[str]
    order_by: list[str]
    limit: int | None
    offset: int | None


class QueryBuilder(WhereClauseMixin):
    """Compiles chained calls to parameterized SQL and executes it.

    Args:
        connection: Connection used by terminal calls.  Optional when only
            rendering (``to_sql`` / ``compile``).
        config: Builder settings; defaults to ``QueryConfig()``.
        compiler: Explicit dialect compiler; by default one is created from
            ``config.target`` through :class:`CompilerFactory`.
    """

    def __init__(
        self,
        connection: Connection | None = None,
        config: QueryConfig | None = None,
        compiler: SQLCompiler | None = None,
    ) -> None:
        self._conn = connection
        self._config = config or QueryConfig()
        self._compiler = compiler or CompilerFactory.create(self._config.target)
        self._binder = Binder()
        self._ctx = RenderContext(compiler=self._compiler, binder=self._binder)
        self._state = QueryState()

    @property
    def config(self) -> QueryConfig:
        return self._config

    @property
    def state(self) -> QueryState:
        """The collected intent (read it, don't mutate it)."""
        return self._state

    def _where_tokens(self) -> list[PredicateToken]:
        return self._state.wheres

    # ------------------------------------------------------------------
    # Statement setup
    # ------------------------------------------------------------------

    def table(self, name: str, alias: str | None = None) -> QueryBuilder:
        self._state.table = name
        self._state.alias = alias
        return self

    def select(self, columns: Union[str, Sequence[str]] = "*") -> QueryBuilder:
        self._state.kind = StatementKind.SELECT
        self._state.columns = _as_list(columns)
        return self

    def insert(self, data: Union[Mapping[str, Any], Sequence[str]]) -> QueryBuilder:
        """Start an INSERT.

        A mapping is a single row; a sequence of column names starts column
        mode, to be followed by :meth:`values`.
        """
        if isinstance(data, Mapping):
            self._state.kind = StatementKind.INSERT
            self._state.insert = SingleRowInsert(dict(data))
            return self
        if isinstance(data, str):
            return self.insert_columns([data])
        return self.insert_columns(data)

    def insert_columns(self, columns: Sequence[str]) -> QueryBuilder:
        self._state.kind = StatementKind.INSERT
        self._state.insert = ColumnInsert(columns=list(columns))
        return self

    def values(self, row: Sequence[Any]) -> QueryBuilder:
        """Append one positional row in the declared column order.

        Raises:
            ArityMismatchError: If no columns were declared or the row has
                the wrong number of values.
        """
        payload = self._state.insert
        if (
            self._state.kind is not StatementKind.INSERT
            or not isinstance(payload, ColumnInsert)
            or not payload.columns
        ):
            raise ArityMismatchError(
                "Call insert_columns([col1, col2, ...]) before values([...]).",
                actual=len(row),
            )
        payload.add_row(row)
        return self

    def insert_row(self, row: Mapping[str, Any]) -> QueryBuilder:
        """Append a row given as a mapping.

        The first row fixes the column order; later rows are matched by
        column name and extra keys are ignored.

        Raises:
            MissingColumnValueError: If ``row`` lacks a declared column.
        """
        payload = self._state.insert
        if self._state.kind is not StatementKind.INSERT or not isinstance(payload, ColumnInsert):
            payload = ColumnInsert(columns=list(row))
        elif not payload.columns:
            payload.columns = list(row)
        payload.add_mapping(row)
        self._state.kind = StatementKind.INSERT
        self._state.insert = payload
        return self

    def update(self, data: Mapping[str, Any]) -> QueryBuilder:
        self._state.kind = StatementKind.UPDATE
        self._state.update = dict(data)
        return self

    def delete(self) -> QueryBuilder:
        self._state.kind = StatementKind.DELETE
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(
        self,
        table: str,
        left: str,
        op: str,
        right: str,
        kind: str = "INNER",
    ) -> QueryBuilder:
        self._state.joins.append(
            JoinSpec(kind=kind.upper(), table=table, left=left, operator=op, right=right)
        )
        return self

    def left_join(self, table: str, left: str, op: str, right: str) -> QueryBuilder:
        return self.join(table, left, op, right, "LEFT")

    def right_join(self, table: str, left: str, op: str, right: str) -> QueryBuilder:
        return self.join(table, left, op, right, "RIGHT")

    # ------------------------------------------------------------------
    # Grouping, ordering, paging
    # ------------------------------------------------------------------

    def having(self, column: str, op: str, value: Any, connector: str = "AND") -> QueryBuilder:
        self._state.having.append(Predicate(Connector.coerce(connector), column, op, value))
        return self

    def or_having(self, column: str, op: str, value: Any) -> QueryBuilder:
        return self.having(column, op, value, "OR")

    def group_by(self, *columns: Union[str, Sequence[str]]) -> QueryBuilder:
        for col in columns:
            self._state.group_by.extend(_as_list(col))
        return self

    def order_by(self, expr: str, direction: str = "ASC") -> QueryBuilder:
        direction = "DESC" if direction.strip().upper() == "DESC" else "ASC"
        self._state.order_by.append(f"{expr} {direction}")
        return self

    def limit(self, n: int) -> QueryBuilder:
        self._state.limit = max(0, int(n))
        return self

    def offset(self, n: int) -> QueryBuilder:
        self._state.offset = max(0, int(n))
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def compile(self) -> CompiledSQL:
        """Render the current statement.

        Raises:
            ConfigurationError: If no table is set.
            StatementKindError: If the statement kind is unknown.
            DataMissingError: If an INSERT / UPDATE has no payload.
            GroupingImbalanceError: If group markers do not pair up.
        """
        return self._render(lambda: render_statement(self._ctx, self._state))

    def compile_count(self) -> CompiledSQL:
        """Render the derived ``COUNT(*)`` query for the current SELECT."""
        self._require_kind(StatementKind.SELECT, "compile_count()")
        return self._render(lambda: CountRenderer(self._ctx).render(self._state))

    def to_sql(self) -> str:
        return self.compile().sql

    def get_bindings(self) -> dict[str, Any]:
        """Bindings of the most recent render, in placeholder order."""
        return dict(self._binder.params)

    def _render(self, render: Callable[[], str]) -> CompiledSQL:
        self._binder.reset()
        sql = render()
        return CompiledSQL(
            sql=sql,
            params=dict(self._binder.params),
            dialect=self._compiler.dialect_name,
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self) -> Statement:
        """Render, execute and return the executed statement handle."""
        return self.run_compiled(self.compile())

    def run_compiled(self, compiled: CompiledSQL) -> Statement:
        conn = self._require_connection()
        stmt = conn.prepare(compiled.sql)
        for name, value in compiled.params.items():
            stmt.bind_value(name, value)
        stmt.execute()
        logger.debug(
            "query_executed",
            kind=self._state.kind.value if self._state.kind else None,
            sql=compiled.sql,
            binding_count=len(compiled.params),
        )
        return stmt

    def get(self) -> list[Row]:
        return self.run().fetch_all()

    def first(self) -> Optional[Row]:
        """Return the first row or ``None``; sets ``LIMIT 1`` if no limit is set."""
        if self._state.limit is None:
            self._state.limit = 1
        return self.run().fetch()

    def value(self, column: str) -> Any:
        row = self.first()
        if row is None:
            return None
        return row.get(column)

    def count(self) -> int:
        """Return ``COUNT(*)`` for the current SELECT, keeping the column list."""
        self._require_kind(StatementKind.SELECT, "count()")
        original = self._state.columns
        self._state.columns = [COUNT_COLUMN]
        try:
            row = self.run().fetch()
        finally:
            self._state.columns = original
        return int(row[COUNT_ALIAS]) if row else 0

    def execute(self) -> int:
        """Run the statement and return the affected row count."""
        return self.run().row_count()

    def insert_get_id(self) -> str:
        self._require_kind(StatementKind.INSERT, "insert_get_id()")
        self.run()
        return self._require_connection().last_insert_id()

    def last_insert_id(self) -> str:
        return self._require_connection().last_insert_id()

    def paginate(self, page: int = 1, per_page: int | None = None) -> Page:
        from fluentql.query.paginator import Paginator

        return Paginator(self).paginate(page, per_page)

    def transactional(self, callback: Callable[[QueryBuilder], T]) -> T:
        """Run ``callback(self)`` in a transaction unless one is already open."""
        return transactional(self._require_connection(), lambda: callback(self))

    # ------------------------------------------------------------------
    # State snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> BuilderSnapshot:
        return BuilderSnapshot(
            binder=self._binder.snapshot(),
            columns=list(self._state.columns),
            order_by=list(self._state.order_by),
            limit=self._state.limit,
            offset=self._state.offset,
        )

    def restore(self, snapshot: BuilderSnapshot) -> None:
        self._binder.restore(snapshot.binder)
        self._state.columns = list(snapshot.columns)
        self._state.order_by = list(snapshot.order_by)
        self._state.limit = snapshot.limit
        self._state.offset = snapshot.offset

    @contextmanager
    def preserved_state(self) -> Iterator[QueryBuilder]:
        """Restore bindings, counter, columns, ordering, limit and offset on exit."""
        saved = self.snapshot()
        try:
            yield self
        finally:
            self.restore(saved)

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _require_connection(self) -> Connection:
        if self._conn is None:
            raise ConfigurationError("No connection configured for this builder.")
        return self._conn

    def _require_kind(self, kind: StatementKind, caller: str) -> None:
        if self._state.kind is not kind:
            raise StatementKindError(
                f"{caller} requires a {kind.value} statement, not {self._state.kind!r}.",
                kind=self._state.kind,
            )


def _as_list(columns: Union[str, Sequence[str]]) -> list[str]:
    if isinstance(columns, str):
        return [columns]
    return list(columns)
