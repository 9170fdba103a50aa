"""fluentQL statement model and schema helpers."""
from fluentql.schema.predicates import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    Connector,
    GroupClose,
    GroupOpen,
    Predicate,
    PredicateToken,
    RawFragment,
    ValueListPredicate,
)
from fluentql.schema.statement import (
    ColumnInsert,
    InsertPayload,
    JoinSpec,
    QueryState,
    SingleRowInsert,
    StatementKind,
)
from fluentql.schema.tables import SchemaCache

__all__ = [
    "ALWAYS_FALSE",
    "ALWAYS_TRUE",
    "ColumnInsert",
    "Connector",
    "GroupClose",
    "GroupOpen",
    "InsertPayload",
    "JoinSpec",
    "Predicate",
    "PredicateToken",
    "QueryState",
    "RawFragment",
    "SchemaCache",
    "SingleRowInsert",
    "StatementKind",
    "ValueListPredicate",
]
