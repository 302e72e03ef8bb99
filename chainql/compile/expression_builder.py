"""Value and predicate SQL renderers.

``ValueBuilder`` and ``PredicateBuilder`` share a module because predicates
are rendered almost entirely in terms of their values.

Both receive a *build function* (``Callable[[Bindings], str]``) used to
compile embedded sub-statements.  The function is supplied by
:class:`~chainql.compile.builder.StatementBuilder`; it validates and compiles
the nested bindings independently, so no render state is shared between the
outer and inner statements.
"""
from __future__ import annotations

from typing import Callable

from chainql.errors import CompilationError
from chainql.schema.bindings import Bindings, Predicate, PredicateGroup, SubqueryValue, Value
from chainql.schema.expressions import (
    MEMBERSHIP_OPERATORS,
    NEGATED_OPERATORS,
    NULL_OPERATORS,
    Connector,
    Operator,
)
from chainql.schema.values import (
    ArrayValue,
    BooleanValue,
    FloatValue,
    IntegerValue,
    NullValue,
    StringValue,
)

BuildFn = Callable[[Bindings], str]

_EXCLUDING_OPERATORS = frozenset(
    {Operator.IS_NOT_NULL, Operator.NOT_EQUAL, Operator.NOT_IN, Operator.NOT_LIKE}
)


# ---------------------------------------------------------------------------
# Value builder
# ---------------------------------------------------------------------------


class ValueBuilder:
    """Renders typed values as inline SQL literals.

    Args:
        build_fn: Compiles an embedded sub-statement to SQL.
    """

    def __init__(self, build_fn: BuildFn) -> None:
        self._build_fn = build_fn

    def build(self, value: Value) -> str:
        """Render ``value`` as a SQL fragment."""
        if isinstance(value, StringValue):
            escaped = value.value.replace("'", "''")
            return f"'{escaped}'"
        if isinstance(value, BooleanValue):
            return "TRUE" if value.value else "FALSE"
        if isinstance(value, (IntegerValue, FloatValue)):
            return str(value.value)
        if isinstance(value, NullValue):
            return "NULL"
        if isinstance(value, ArrayValue):
            return f"({', '.join(self.build(item) for item in value.items)})"
        if isinstance(value, SubqueryValue):
            return f"({self._build_fn(value.bindings)})"
        raise CompilationError(
            f"Unknown value type: {type(value).__name__}", clause="value"
        )


# ---------------------------------------------------------------------------
# Predicate builder
# ---------------------------------------------------------------------------


class PredicateBuilder:
    """Renders predicate lists and nested groups for WHERE and HAVING.

    Args:
        value_builder: Renders right-hand operands.
    """

    def __init__(self, value_builder: ValueBuilder) -> None:
        self._values = value_builder

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_list(
        self,
        predicates: list[Predicate],
        groups: list[PredicateGroup] | None = None,
    ) -> str:
        """Render predicates followed by groups, joined by their connectors.

        The connector of the first rendered unit is dropped; every other
        unit is prefixed by its own connector exactly as declared.
        """
        units: list[tuple[Connector, str]] = [
            (p.connector, self.build(p)) for p in predicates
        ]
        for group in groups or []:
            if group.is_empty:
                continue
            units.append((group.connector, self.build_group(group)))

        if not units:
            return ""
        sql = units[0][1]
        for connector, unit_sql in units[1:]:
            sql += f" {connector.value} {unit_sql}"
        return sql

    def build_group(self, group: PredicateGroup) -> str:
        """Render one group as a single parenthesized unit."""
        return f"({self.build_list(group.predicates, group.groups)})"

    def build(self, predicate: Predicate) -> str:
        """Render a single predicate."""
        column = predicate.column
        value = predicate.value

        if predicate.operator in NULL_OPERATORS or isinstance(value, NullValue):
            return self._build_null(column, predicate.operator, predicate.negated)

        operator = predicate.operator
        if predicate.negated and operator in NEGATED_OPERATORS:
            operator = NEGATED_OPERATORS[operator]
            negated = False
        else:
            negated = predicate.negated

        if operator is Operator.BETWEEN:
            return self._build_between(column, value, negated)

        if operator in MEMBERSHIP_OPERATORS:
            rendered = self._build_membership_value(value)
        else:
            rendered = self._values.build(value)

        sql = f"{column} {operator.value} {rendered}"
        return f"NOT {sql}" if negated else sql

    # ------------------------------------------------------------------
    # Operator-specific renderers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_null(column: str, operator: Operator, negated: bool) -> str:
        # Operators that already exclude their operand flip to IS NOT NULL.
        is_not = operator in _EXCLUDING_OPERATORS
        if negated:
            is_not = not is_not
        return f"{column} IS NOT NULL" if is_not else f"{column} IS NULL"

    def _build_between(self, column: str, value: Value, negated: bool) -> str:
        if not isinstance(value, ArrayValue) or len(value.items) != 2:
            raise CompilationError(
                f"BETWEEN on '{column}' needs exactly two bounds.", clause="WHERE"
            )
        low = self._values.build(value.items[0])
        high = self._values.build(value.items[1])
        keyword = "NOT BETWEEN" if negated else "BETWEEN"
        return f"{column} {keyword} {low} AND {high}"

    def _build_membership_value(self, value: Value) -> str:
        if isinstance(value, (ArrayValue, SubqueryValue)):
            return self._values.build(value)
        # A lone scalar is a one-element list.
        return f"({self._values.build(value)})"
