"""Semantic / aggregation-rule validator.

Validates rules that relate clauses to the projection: HAVING needs an
aggregate or grouped column, and GROUP BY / ORDER BY may only reference
columns the statement actually projects.
"""

from __future__ import annotations

from chainql.errors import (
    GroupByWithNonSelectedOrAggregateFunctionError,
    HavingClauseWithoutAggregateFunctionError,
    OrderByWithNonSelectedOrAggregateFunctionError,
)
from chainql.schema.bindings import Bindings


class SemanticValidator:
    """Validates HAVING, GROUP BY and ORDER BY against the select list."""

    def validate_having(self, bindings: Bindings) -> None:
        """Raise if a HAVING column is neither an aggregate alias nor grouped.

        Raises:
            HavingClauseWithoutAggregateFunctionError: With the column.
        """
        if not bindings.having:
            return
        allowed = bindings.aggregate_aliases() | set(bindings.group_by)
        for predicate in bindings.having:
            if predicate.column not in allowed:
                raise HavingClauseWithoutAggregateFunctionError(predicate.column)

    def validate_group_by(self, bindings: Bindings) -> None:
        """Raise if a GROUP BY column is not projected.

        Raises:
            GroupByWithNonSelectedOrAggregateFunctionError: With the column.
        """
        if not bindings.group_by:
            return
        projected = bindings.projected_names()
        for column in bindings.group_by:
            if column not in projected:
                raise GroupByWithNonSelectedOrAggregateFunctionError(column)

    def validate_order_by(self, bindings: Bindings) -> None:
        """Raise if an ORDER BY column is not projected.

        ``SELECT *`` projects every column, so the check only applies when
        select items were given.

        Raises:
            OrderByWithNonSelectedOrAggregateFunctionError: With the column.
        """
        if not bindings.order_by or not bindings.select:
            return
        projected = bindings.projected_names()
        for item in bindings.order_by:
            if item.column not in projected:
                raise OrderByWithNonSelectedOrAggregateFunctionError(item.column)
