"""Unit tests for transactional scopes."""

from __future__ import annotations

import pytest

from fluentql.database import Database
from fluentql.query.builder import QueryBuilder


def test_commit_on_success(fake):
    b = QueryBuilder(fake).table("users")
    result = b.transactional(lambda q: q.insert({"name": "Ada"}).execute() or "done")
    assert result == "done"
    assert fake.calls == ["begin", "commit"]
    assert fake.last.sql == "INSERT INTO users (name) VALUES (:p1)"


def test_callback_receives_the_builder(fake):
    b = QueryBuilder(fake)
    assert b.transactional(lambda q: q) is b


def test_rollback_and_reraise_on_error(fake):
    def boom(q):
        q.table("users").delete().where("id", 1).execute()
        raise ValueError("bad")

    with pytest.raises(ValueError, match="bad"):
        QueryBuilder(fake).transactional(boom)
    assert fake.calls == ["begin", "rollback"]


def test_existing_transaction_is_reused(fake):
    fake.begin_transaction()
    fake.calls.clear()
    QueryBuilder(fake).transactional(lambda q: None)
    assert fake.calls == []
    assert fake.in_transaction()


def test_nested_scopes_commit_once(fake):
    db = Database(fake)

    def outer(q):
        db.transactional(lambda inner: inner.table("a").insert({"x": 1}).execute())
        return q.table("b").insert({"y": 2}).execute()

    db.transactional(outer)
    assert fake.calls == ["begin", "commit"]
    assert [s.sql for s in fake.statements] == [
        "INSERT INTO a (x) VALUES (:p1)",
        "INSERT INTO b (y) VALUES (:p1)",
    ]


def test_inner_failure_rolls_back_outer(fake):
    db = Database(fake)

    def outer(q):
        db.transactional(lambda inner: 1 / 0)

    with pytest.raises(ZeroDivisionError):
        db.transactional(outer)
    assert fake.calls == ["begin", "rollback"]
