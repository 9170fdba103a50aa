"""Pagination on top of a SELECT builder.

The total comes from a *derived* count query rendered from the builder's
current state.  Both the count and the page fetch run inside
:meth:`~fluentql.query.builder.QueryBuilder.preserved_state`, so the
builder's bindings, placeholder counter, columns, ordering, limit and offset
are exactly as they were once ``paginate`` returns or raises.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ConfigDict

from fluentql.compile.renderers import COUNT_ALIAS

if TYPE_CHECKING:
    from fluentql.query.builder import QueryBuilder

logger = structlog.get_logger(__name__)


class Page(BaseModel):
    """One page of results.

    Attributes:
        items: Rows of the requested page.
        total: Row (or group) count across all pages.
        page: 1-based page number actually used.
        per_page: Page size actually used.
        page_count: ``ceil(total / per_page)``.
        has_prev: ``page > 1``.
        has_next: ``page < page_count``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    items: list[dict[str, Any]]
    total: int
    page: int
    per_page: int
    page_count: int
    has_prev: bool
    has_next: bool


class Paginator:
    """Runs the count query and the page query for one builder."""

    def __init__(self, builder: QueryBuilder) -> None:
        self._builder = builder

    def paginate(self, page: int = 1, per_page: int | None = None) -> Page:
        """Fetch page ``page`` (clamped to >= 1) of ``per_page`` rows."""
        page = max(1, int(page))
        per_page = self._builder.config.clamp_per_page(per_page)

        with self._builder.preserved_state() as builder:
            total = self.count_total()
            rows = builder.limit(per_page).offset((page - 1) * per_page).get()

        page_count = math.ceil(total / per_page)
        return Page(
            items=[dict(r) for r in rows],
            total=total,
            page=page,
            per_page=per_page,
            page_count=page_count,
            has_prev=page > 1,
            has_next=page < page_count,
        )

    def count_total(self) -> int:
        """Run the derived count query without disturbing the builder."""
        with self._builder.preserved_state() as builder:
            compiled = builder.compile_count()
            row = builder.run_compiled(compiled).fetch()
        total = int(row[COUNT_ALIAS]) if row else 0
        logger.debug(
            "paginate_count",
            grouped=self._builder.state.is_grouped,
            total=total,
        )
        return total
