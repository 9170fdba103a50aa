"""fluentQL builder facade and pagination."""
from fluentql.query.builder import BuilderSnapshot, QueryBuilder
from fluentql.query.clauses import WhereClauseMixin, WhereGroup
from fluentql.query.paginator import Page, Paginator

__all__ = [
    "BuilderSnapshot",
    "Page",
    "Paginator",
    "QueryBuilder",
    "WhereClauseMixin",
    "WhereGroup",
]
