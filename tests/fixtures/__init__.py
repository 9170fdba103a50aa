"""Test fixtures: sample DDL, seed rows and a recording fake connection."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Optional

DDL = """
CREATE TABLE departments (
    id          INTEGER PRIMARY KEY,
    name        TEXT NOT NULL
);
CREATE TABLE users (
    id          INTEGER PRIMARY KEY,
    name        TEXT NOT NULL,
    email       TEXT,
    age         INTEGER NOT NULL,
    vip         INTEGER NOT NULL DEFAULT 0,
    dept_id     INTEGER REFERENCES departments(id)
);
"""

DEPARTMENTS = [(1, "Engineering"), (2, "Sales"), (3, "Support")]

USERS = [
    (1, "Ada",     "ada@example.com",   36, 1, 1),
    (2, "Brian",   "brian@example.com", 17, 0, 1),
    (3, "Chidi",   None,                29, 0, 2),
    (4, "Dana",    "dana@example.com",  41, 1, 2),
    (5, "Eve",     "eve@example.com",   15, 0, 2),
    (6, "Farid",   None,                52, 0, 1),
    (7, "Grace",   "grace@example.com", 23, 0, None),
]


def make_sqlite_db() -> sqlite3.Connection:
    """Return an in-memory database with the sample schema and rows."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(DDL)
    conn.executemany("INSERT INTO departments VALUES (?,?)", DEPARTMENTS)
    conn.executemany("INSERT INTO users VALUES (?,?,?,?,?,?)", USERS)
    conn.commit()
    return conn


# ---------------------------------------------------------------------------
# Recording fake connection
# ---------------------------------------------------------------------------


@dataclass
class FakeStatement:
    sql: str
    rows: list[dict[str, Any]]
    affected: int
    bindings: dict[str, Any] = field(default_factory=dict)
    executed: bool = False
    _cursor: int = 0

    def bind_value(self, name: str, value: Any) -> None:
        self.bindings[name] = value

    def execute(self) -> None:
        self.executed = True

    def fetch_all(self) -> list[dict[str, Any]]:
        rows, self._cursor = self.rows[self._cursor:], len(self.rows)
        return rows

    def fetch(self) -> Optional[dict[str, Any]]:
        if self._cursor >= len(self.rows):
            return None
        row = self.rows[self._cursor]
        self._cursor += 1
        return row

    def row_count(self) -> int:
        return self.affected


class FakeConnection:
    """Records every prepared statement and transaction call.

    ``results`` is a queue of row lists handed to successive statements;
    when it runs dry statements return no rows.
    """

    def __init__(
        self,
        results: list[list[dict[str, Any]]] | None = None,
        affected: int = 0,
        insert_id: str = "42",
    ) -> None:
        self.results = list(results or [])
        self.affected = affected
        self.insert_id = insert_id
        self.statements: list[FakeStatement] = []
        self.calls: list[str] = []
        self._in_tx = False

    def prepare(self, sql: str) -> FakeStatement:
        rows = self.results.pop(0) if self.results else []
        stmt = FakeStatement(sql=sql, rows=rows, affected=self.affected)
        self.statements.append(stmt)
        return stmt

    def last_insert_id(self) -> str:
        return self.insert_id

    def in_transaction(self) -> bool:
        return self._in_tx

    def begin_transaction(self) -> None:
        self.calls.append("begin")
        self._in_tx = True

    def commit(self) -> None:
        self.calls.append("commit")
        self._in_tx = False

    def rollback(self) -> None:
        self.calls.append("rollback")
        self._in_tx = False

    @property
    def last(self) -> FakeStatement:
        return self.statements[-1]
