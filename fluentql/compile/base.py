"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines the dialect hooks the renderers call.
- ``SQLiteCompiler``, ``PostgresCompiler`` and ``MySQLCompiler`` override the
  dialect-specific steps (currently the parameter placeholder style).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful render.

    Attributes:
        sql: The rendered SQL string with named placeholders.
        params: Ordered ``name -> value`` bindings; exactly one entry per
            placeholder in ``sql``.
        dialect: The target dialect (``'sqlite'``, ``'postgres'``, ``'mysql'``).
    """

    sql: str
    params: dict[str, Any]
    dialect: str


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    A builder renders for exactly one compiler; statements are never
    translated between dialects.
    """

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name as issued by the binder (e.g. ``'p1'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""
