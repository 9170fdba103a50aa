"""Runtime configuration for builders and the database facade."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

#: Built-in compiler targets.
DialectTarget = Literal["sqlite", "postgres", "mysql"]


class QueryConfig(BaseModel):
    """Settings shared by every builder created from one configuration.

    Attributes:
        target: Dialect compiler to render with.  ``"sqlite"`` renders
            ``:name`` placeholders, which is also what SQLAlchemy expects.
        default_per_page: Page size used by ``paginate()`` when none is given.
        max_per_page: Optional upper bound applied to requested page sizes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: DialectTarget = "sqlite"
    default_per_page: int = Field(default=20, ge=1)
    max_per_page: int | None = Field(default=None, ge=1)

    def clamp_per_page(self, per_page: int | None) -> int:
        """Return a usable page size: at least 1, at most ``max_per_page``."""
        size = self.default_per_page if per_page is None else max(1, per_page)
        if self.max_per_page is not None:
            size = min(size, self.max_per_page)
        return size
