"""Placeholder allocation and value bindings.

One :class:`Binder` lives as long as its builder.  The counter only moves
forward, so placeholder names are never reused, while the binding set is
cleared at the start of every render so it always mirrors the SQL text that
render produced.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BinderSnapshot:
    """Saved binder state, see :meth:`Binder.snapshot`."""

    params: dict[str, Any]
    counter: int


@dataclass
class Binder:
    """Issues ``p1``, ``p2``, … and records their values in call order."""

    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    @property
    def counter(self) -> int:
        return self._counter

    def bind(self, value: Any) -> str:
        """Store ``value`` and return its placeholder name."""
        self._counter += 1
        name = f"p{self._counter}"
        self.params[name] = value
        return name

    def reset(self) -> None:
        """Drop the current bindings; the counter keeps its position."""
        self.params = {}

    def snapshot(self) -> BinderSnapshot:
        return BinderSnapshot(params=dict(self.params), counter=self._counter)

    def restore(self, snapshot: BinderSnapshot) -> None:
        self.params = dict(snapshot.params)
        self._counter = snapshot.counter
