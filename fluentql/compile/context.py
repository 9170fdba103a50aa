"""Render context value object.

Packages the ``(compiler, binder)`` pair shared by the predicate compiler
and every statement renderer during one render.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fluentql.compile.base import SQLCompiler
from fluentql.compile.binder import Binder


@dataclass(frozen=True)
class RenderContext:
    """Context for rendering statements of one builder.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
        binder: The builder's placeholder allocator.
    """

    compiler: SQLCompiler
    binder: Binder

    def placeholder(self, value: Any) -> str:
        """Bind ``value`` and return the dialect placeholder for it."""
        return self.compiler.param_placeholder(self.binder.bind(value))
