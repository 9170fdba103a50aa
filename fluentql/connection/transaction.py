"""Flat transaction scope on top of a Connection.

Nested calls do not open savepoints: when the connection already reports
an open transaction, the callback simply runs inside it and the outermost
scope decides whether to commit or roll back.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import structlog

from fluentql.connection.base import Connection

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def transactional(conn: Connection, fn: Callable[[], T]) -> T:
    """Run ``fn`` inside a transaction on ``conn``.

    Commits when ``fn`` returns; rolls back and re-raises when it raises.
    """
    if conn.in_transaction():
        return fn()

    conn.begin_transaction()
    logger.debug("transaction_begin")
    try:
        result = fn()
    except BaseException as exc:
        conn.rollback()
        logger.warning("transaction_rollback", error=repr(exc))
        raise
    conn.commit()
    logger.debug("transaction_commit")
    return result
