"""Enums and constants for the chainQL binding model.

Operators, connectors, join kinds, directions and aggregate functions are
closed sets.  Each enum carries its SQL keyword as its value so the compiler
renders them without a lookup table.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Statement kind
# ---------------------------------------------------------------------------


class Action(str, Enum):
    """The statement kind a set of bindings represents."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# ---------------------------------------------------------------------------
# Predicate operators
# ---------------------------------------------------------------------------


class Operator(str, Enum):
    """Comparison operators usable in WHERE and HAVING predicates."""

    EQUAL = "="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"
    BETWEEN = "BETWEEN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"


class Connector(str, Enum):
    """Boolean connective joining a predicate to the one before it."""

    AND = "AND"
    OR = "OR"


#: Operators whose negation is another member of ``Operator``.
NEGATED_OPERATORS: dict[Operator, Operator] = {
    Operator.EQUAL: Operator.NOT_EQUAL,
    Operator.NOT_EQUAL: Operator.EQUAL,
    Operator.LIKE: Operator.NOT_LIKE,
    Operator.NOT_LIKE: Operator.LIKE,
    Operator.IN: Operator.NOT_IN,
    Operator.NOT_IN: Operator.IN,
    Operator.IS_NULL: Operator.IS_NOT_NULL,
    Operator.IS_NOT_NULL: Operator.IS_NULL,
}

#: Operators that take no right-hand operand.
NULL_OPERATORS: frozenset[Operator] = frozenset({Operator.IS_NULL, Operator.IS_NOT_NULL})

#: Operators whose right-hand operand is a parenthesized list.
MEMBERSHIP_OPERATORS: frozenset[Operator] = frozenset({Operator.IN, Operator.NOT_IN})

# ---------------------------------------------------------------------------
# Joins, ordering, aggregates
# ---------------------------------------------------------------------------


class JoinKind(str, Enum):
    """SQL join type.  ``INNER`` renders as a bare ``JOIN``."""

    INNER = "JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    FULL = "FULL JOIN"


class Direction(str, Enum):
    """ORDER BY direction."""

    ASC = "ASC"
    DESC = "DESC"


class AggregateFunction(str, Enum):
    """Aggregate functions available as select items."""

    COUNT = "COUNT"
    MIN = "MIN"
    MAX = "MAX"
    SUM = "SUM"
    AVG = "AVG"


#: Built-in aggregate function names.
AGGREGATE_FUNCTIONS: frozenset[str] = frozenset(fn.value for fn in AggregateFunction)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_aggregate_call(expression: str) -> bool:
    """Return True when ``expression`` is an aggregate call such as ``AVG(x)``.

    Args:
        expression: Raw expression text from an aliased select item.

    Returns:
        ``True`` if the text starts with an aggregate name followed by ``(``.
    """
    head, sep, _ = expression.strip().partition("(")
    return bool(sep) and head.strip().upper() in AGGREGATE_FUNCTIONS
