"""WHERE / HAVING predicate compiler.

The compiler streams a flat token list (see :mod:`fluentql.schema.predicates`)
and keeps an *after-open* flag.  The flag starts set, so the first token of
the whole expression never carries a connector; a group open sets it again,
so the first token inside parentheses never carries one either.  Values are
bound in the same order the placeholders appear in the SQL text.

Example token list and output::

    [Predicate(AND, "a", "=", 1),
     GroupOpen(AND),
       Predicate(AND, "b", "=", 2),
       Predicate(OR, "c", "=", 3),
     GroupClose()]

    a = :p1 AND (b = :p2 OR c = :p3)
"""
from __future__ import annotations

from collections.abc import Sequence

from fluentql.compile.context import RenderContext
from fluentql.errors import GroupingImbalanceError
from fluentql.schema.predicates import (
    ALWAYS_FALSE,
    GroupClose,
    GroupOpen,
    Predicate,
    PredicateToken,
    RawFragment,
    ValueListPredicate,
)


class PredicateCompiler:
    """Compiles predicate token lists to boolean SQL expressions."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def compile(self, tokens: Sequence[PredicateToken], clause: str = "WHERE") -> str:
        """Render ``tokens`` to an expression, or ``""`` if nothing renders.

        Groups with no content are dropped together with their connector.

        Raises:
            GroupingImbalanceError: If open and close markers do not pair up.
        """
        sql = ""
        after_open = True
        # (length of sql before the open marker, after_open before it,
        #  length of sql right after it)
        stack: list[tuple[int, bool, int]] = []

        for token in tokens:
            if isinstance(token, GroupOpen):
                before = len(sql)
                opener = "(" if after_open else f"{token.connector.value} ("
                sql = _append(sql, opener)
                stack.append((before, after_open, len(sql)))
                after_open = True
                continue

            if isinstance(token, GroupClose):
                if not stack:
                    raise GroupingImbalanceError(
                        f"Group close without a matching open in {clause}.",
                        clause=clause,
                    )
                before, prev_after_open, opened_at = stack.pop()
                if len(sql) == opened_at:
                    sql = sql[:before]
                    after_open = prev_after_open
                else:
                    sql += ")"
                    after_open = False
                continue

            body = self._render(token)
            sql = _append(sql, body if after_open else f"{token.connector.value} {body}")
            after_open = False

        if stack:
            raise GroupingImbalanceError(
                f"{len(stack)} group(s) left open in {clause}.", clause=clause
            )
        return sql

    def clause(
        self,
        keyword: str,
        tokens: Sequence[PredicateToken],
        guarded: bool = False,
    ) -> str:
        """Render ``"<keyword> <expr>"``, the guard, or ``""``.

        Args:
            keyword: ``"WHERE"`` or ``"HAVING"``.
            tokens: Token list for the clause.
            guarded: When set, an empty expression renders ``1=0`` so a
                mutating statement can never touch every row.
        """
        expr = self.compile(tokens, clause=keyword)
        if expr:
            return f"{keyword} {expr}"
        if guarded:
            return f"{keyword} {ALWAYS_FALSE}"
        return ""

    def _render(self, token: PredicateToken) -> str:
        if isinstance(token, Predicate):
            return f"{token.column} {token.operator} {self._ctx.placeholder(token.value)}"
        if isinstance(token, ValueListPredicate):
            placeholders = ",".join(self._ctx.placeholder(v) for v in token.values)
            return f"{token.column} {token.operator} ({placeholders})"
        if isinstance(token, RawFragment):
            return token.sql
        raise TypeError(f"Unknown predicate token: {type(token).__name__}")


def _append(sql: str, part: str) -> str:
    if not sql or sql.endswith("("):
        return sql + part
    return f"{sql} {part}"
