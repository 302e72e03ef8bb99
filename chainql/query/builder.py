"""Fluent statement builder.

Every method appends to the builder's :class:`~chainql.schema.bindings.Bindings`
and returns the builder, so calls chain::

    sql = (
        chainql.query()
        .table("flights")
        .select("origin_airport")
        .select_avg("startup_time_in_minutes", "startup_time_in_minutes_avg")
        .join("airports", "flights.destination_airport", "airports.iata_code")
        .where("origin_airport", "AMS")
        .where_not_null("gate_number")
        .where_closure(lambda q: q.where_gte("flight_duration", 120)
                                  .or_where_like("airports.city", "%NY%"))
        .group_by("origin_airport")
        .having_gt("startup_time_in_minutes_avg", 120)
        .order_by_asc("startup_time_in_minutes_avg")
        .limit(20)
        .sql()
    )

Nothing is checked while chaining (apart from value types); the validator
runs when :meth:`QueryBuilder.sql` or :meth:`QueryBuilder.pretty_sql` is
called.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Self

from chainql.compile.builder import compile_bindings
from chainql.compile.formatter import format_sql
from chainql.query.where import WhereClauseMixin, as_columns, unwrap_statement
from chainql.schema.bindings import (
    Bindings,
    MutationEntry,
    Predicate,
    PredicateGroup,
    RawSelect,
    SubquerySelect,
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
    AggregateFunction,
    Connector,
    Direction,
    JoinKind,
    Operator,
)
from chainql.settings import FormatOptions


class QueryBuilder(WhereClauseMixin):
    """Accumulates the clauses of one SQL statement.

    Always obtained via :func:`chainql.query` (or :func:`chainql.subquery`
    for a statement that will be embedded in another one).
    """

    def __init__(self) -> None:
        self._bindings = Bindings()

    @property
    def bindings(self) -> Bindings:
        """The accumulated bindings."""
        return self._bindings

    # ------------------------------------------------------------------
    # Target and switches
    # ------------------------------------------------------------------

    def table(self, name: str) -> Self:
        """Set the target table.  A later call replaces the earlier one."""
        self._bindings.table = name
        return self

    def skip_validation(self) -> Self:
        """Compile without running the validator.

        Invalid bindings then compile to whatever SQL they describe.
        """
        self._bindings.checks_enabled = False
        return self

    # ------------------------------------------------------------------
    # SELECT
    # ------------------------------------------------------------------

    def select(self, columns: str | Iterable[str]) -> Self:
        """Select one column or several."""
        for column in as_columns(columns):
            self._bindings.select.append(ColumnSelect(column=column))
        return self

    def select_as(self, expression: Any, alias: str) -> Self:
        """Select ``expression AS alias``.

        ``expression`` is column/expression text, or a sub-statement which
        renders as ``(SELECT …) AS alias``.
        """
        expression = unwrap_statement(expression)
        if isinstance(expression, Bindings):
            self._bindings.select.append(SubquerySelect(bindings=expression, alias=alias))
        else:
            self._bindings.select.append(AliasSelect(expression=expression, alias=alias))
        return self

    def _select_aggregate(self, function: AggregateFunction, column: str, alias: str) -> Self:
        self._bindings.select.append(
            AggregateSelect(function=function, column=column, alias=alias)
        )
        return self

    def select_count(self, column: str, alias: str) -> Self:
        return self._select_aggregate(AggregateFunction.COUNT, column, alias)

    def select_min(self, column: str, alias: str) -> Self:
        return self._select_aggregate(AggregateFunction.MIN, column, alias)

    def select_max(self, column: str, alias: str) -> Self:
        return self._select_aggregate(AggregateFunction.MAX, column, alias)

    def select_sum(self, column: str, alias: str) -> Self:
        return self._select_aggregate(AggregateFunction.SUM, column, alias)

    def select_avg(self, column: str, alias: str) -> Self:
        return self._select_aggregate(AggregateFunction.AVG, column, alias)

    def select_distinct(self, columns: str | Iterable[str]) -> Self:
        """Select columns under ``SELECT DISTINCT``."""
        for column in as_columns(columns):
            self._bindings.select.append(DistinctSelect(column=column))
        return self

    def select_raw(self, fragment: str, values: Iterable[Any] = ()) -> Self:
        """Select a raw fragment; each ``?`` takes the next value in order."""
        self._bindings.select.append(
            RawSelect(
                fragment=fragment,
                values=[to_value(unwrap_statement(v)) for v in values],
            )
        )
        return self

    # ------------------------------------------------------------------
    # INSERT / UPDATE / DELETE
    # ------------------------------------------------------------------

    @staticmethod
    def _entries(values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[MutationEntry]:
        pairs = values.items() if isinstance(values, Mapping) else values
        return [
            MutationEntry(column=column, value=to_value(unwrap_statement(value)))
            for column, value in pairs
        ]

    def insert(self, column: str, value: Any) -> Self:
        """Add one ``column``/``value`` pair to an INSERT."""
        self._bindings.insert.extend(self._entries([(column, value)]))
        return self

    def insert_many(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Self:
        """Add several pairs, in iteration order."""
        self._bindings.insert.extend(self._entries(values))
        return self

    def update(self, column: str, value: Any) -> Self:
        """Add one ``column = value`` assignment to an UPDATE."""
        self._bindings.update.extend(self._entries([(column, value)]))
        return self

    def update_many(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Self:
        self._bindings.update.extend(self._entries(values))
        return self

    def delete(self) -> Self:
        """Turn the statement into a DELETE."""
        self._bindings.delete = True
        return self

    # ------------------------------------------------------------------
    # WHERE hooks
    # ------------------------------------------------------------------

    def _append_predicate(self, predicate: Predicate) -> None:
        self._bindings.where.append(predicate)

    def _append_group(self, group: PredicateGroup) -> None:
        self._bindings.where_groups.append(group)

    # ------------------------------------------------------------------
    # JOIN
    # ------------------------------------------------------------------

    def _join(self, table: str, left: str, right: str, kind: JoinKind) -> Self:
        self._bindings.joins.append(JoinClause(table=table, left=left, right=right, kind=kind))
        return self

    def join(self, table: str, left: str, right: str) -> Self:
        """``JOIN table ON left = right``."""
        return self._join(table, left, right, JoinKind.INNER)

    def left_join(self, table: str, left: str, right: str) -> Self:
        return self._join(table, left, right, JoinKind.LEFT)

    def right_join(self, table: str, left: str, right: str) -> Self:
        return self._join(table, left, right, JoinKind.RIGHT)

    def full_join(self, table: str, left: str, right: str) -> Self:
        return self._join(table, left, right, JoinKind.FULL)

    # ------------------------------------------------------------------
    # GROUP BY / HAVING
    # ------------------------------------------------------------------

    def group_by(self, columns: str | Iterable[str]) -> Self:
        """Group by one column or several; repeats are ignored."""
        for column in as_columns(columns):
            if column not in self._bindings.group_by:
                self._bindings.group_by.append(column)
        return self

    def _having(self, column: str, operator: Operator, value: Any, negated: bool = False) -> Self:
        self._bindings.having.append(
            Predicate(
                column=column,
                operator=operator,
                value=to_value(unwrap_statement(value)),
                connector=Connector.AND,
                negated=negated,
            )
        )
        return self

    def having(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.EQUAL, value)

    def having_not(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.EQUAL, value, negated=True)

    def having_gt(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.GREATER_THAN, value)

    def having_gte(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.GREATER_THAN_OR_EQUAL, value)

    def having_lt(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.LESS_THAN, value)

    def having_lte(self, column: str, value: Any) -> Self:
        return self._having(column, Operator.LESS_THAN_OR_EQUAL, value)

    # ------------------------------------------------------------------
    # ORDER BY / LIMIT / OFFSET
    # ------------------------------------------------------------------

    def order_by_asc(self, column: str) -> Self:
        self._bindings.order_by.append(OrderByItem(column=column, direction=Direction.ASC))
        return self

    def order_by_desc(self, column: str) -> Self:
        self._bindings.order_by.append(OrderByItem(column=column, direction=Direction.DESC))
        return self

    def limit(self, value: int) -> Self:
        """Set LIMIT.

        Raises:
            pydantic.ValidationError: If ``value`` is negative.
        """
        self._bindings.limit = value
        return self

    def offset(self, value: int) -> Self:
        """Set OFFSET.

        Raises:
            pydantic.ValidationError: If ``value`` is negative.
        """
        self._bindings.offset = value
        return self

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def sql(self) -> str:
        """Validate (unless skipped) and compile to a single-line SQL string.

        Raises:
            ValidationError: (or subclass) on the first violation.
        """
        return compile_bindings(self._bindings)

    def pretty_sql(self, options: FormatOptions | None = None) -> str:
        """Like :meth:`sql`, then re-indented and keyword-cased.

        Args:
            options: Formatting options; defaults to ``FormatOptions()``.
        """
        return format_sql(self.sql(), options)


class SubqueryBuilder(QueryBuilder):
    """A statement meant to be embedded in another one.

    Pass it wherever a value is accepted (``where``, ``where_in``,
    ``select_as``, ``insert``…).  The embedding statement takes a copy of
    its bindings and compiles it, parenthesized, in place.
    """
