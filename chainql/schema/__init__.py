"""chainQL binding model: values, clauses and the Bindings accumulator."""
from chainql.schema.bindings import (
    Bindings,
    MutationEntry,
    Predicate,
    PredicateGroup,
    RawSelect,
    SelectItem,
    SubquerySelect,
    SubqueryValue,
    Value,
    to_value,
)
from chainql.schema.clauses import (
    AggregateSelect,
    AliasSelect,
    ColumnSelect,
    DistinctSelect,
    JoinClause,
    OrderByItem,
)
from chainql.schema.expressions import (
    Action,
    AggregateFunction,
    Connector,
    Direction,
    JoinKind,
    Operator,
)
from chainql.schema.values import (
    ArrayValue,
    BooleanValue,
    FloatValue,
    IntegerValue,
    NullValue,
    StringValue,
    to_scalar,
)

__all__ = [
    "Action",
    "AggregateFunction",
    "Connector",
    "Direction",
    "JoinKind",
    "Operator",
    "ArrayValue",
    "BooleanValue",
    "FloatValue",
    "IntegerValue",
    "NullValue",
    "StringValue",
    "to_scalar",
    "AggregateSelect",
    "AliasSelect",
    "ColumnSelect",
    "DistinctSelect",
    "JoinClause",
    "OrderByItem",
    "RawSelect",
    "Bindings",
    "MutationEntry",
    "Predicate",
    "PredicateGroup",
    "SelectItem",
    "SubquerySelect",
    "SubqueryValue",
    "Value",
    "to_value",
]
