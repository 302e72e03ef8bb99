"""Predicate builders shared by statements and nested groups.

``WhereClauseMixin`` implements every ``where_*`` / ``or_where_*`` method in
terms of two hooks, ``_append_predicate`` and ``_append_group``.
:class:`~chainql.query.builder.QueryBuilder` appends to its bindings'
top-level WHERE; :class:`PredicateGroupBuilder` appends to the group it is
filling for ``where_closure`` / ``or_where_closure``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Self

from chainql.schema.bindings import Bindings, Predicate, PredicateGroup, to_value
from chainql.schema.expressions import MEMBERSHIP_OPERATORS, Connector, Operator
from chainql.schema.values import ArrayValue, to_scalar

GroupFn = Callable[["PredicateGroupBuilder"], "PredicateGroupBuilder | None"]


def unwrap_statement(raw: Any) -> Any:
    """Replace builders (also inside lists) with a copy of their bindings.

    The copy gives the embedding statement sole ownership of the nested
    bindings, so later calls on the source builder cannot reach it.
    """
    if isinstance(raw, (list, tuple)):
        return [unwrap_statement(item) for item in raw]
    bindings = getattr(raw, "bindings", None)
    if isinstance(bindings, Bindings):
        return bindings.model_copy(deep=True)
    return raw


def as_columns(columns: str | Iterable[str]) -> list[str]:
    """Accept a single column name or an iterable of names."""
    if isinstance(columns, str):
        return [columns]
    return list(columns)


class WhereClauseMixin(ABC):
    """Fluent WHERE predicate builders.

    Subclasses implement :meth:`_append_predicate` and :meth:`_append_group`.
    """

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _append_predicate(self, predicate: Predicate) -> None:
        """Store one predicate."""

    @abstractmethod
    def _append_group(self, group: PredicateGroup) -> None:
        """Store one finished group."""

    def _add_condition(
        self,
        column: str,
        operator: Operator,
        value: Any,
        connector: Connector,
        negated: bool = False,
    ) -> Self:
        if operator in MEMBERSHIP_OPERATORS and isinstance(value, (list, tuple)) and not value:
            raise TypeError(f"IN on '{column}' needs at least one value.")
        self._append_predicate(
            Predicate(
                column=column,
                operator=operator,
                value=to_value(unwrap_statement(value)),
                connector=connector,
                negated=negated,
            )
        )
        return self

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def where(self, column: str, value: Any) -> Self:
        """``column = value`` (``IS NULL`` for ``None``)."""
        return self._add_condition(column, Operator.EQUAL, value, Connector.AND)

    def or_where(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.EQUAL, value, Connector.OR)

    def where_not(self, column: str, value: Any) -> Self:
        """``column != value`` (``IS NOT NULL`` for ``None``)."""
        return self._add_condition(column, Operator.EQUAL, value, Connector.AND, negated=True)

    def or_where_not(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.EQUAL, value, Connector.OR, negated=True)

    # ------------------------------------------------------------------
    # Ordering comparisons
    # ------------------------------------------------------------------

    def where_gt(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.GREATER_THAN, value, Connector.AND)

    def or_where_gt(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.GREATER_THAN, value, Connector.OR)

    def where_gte(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.GREATER_THAN_OR_EQUAL, value, Connector.AND)

    def or_where_gte(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.GREATER_THAN_OR_EQUAL, value, Connector.OR)

    def where_lt(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.LESS_THAN, value, Connector.AND)

    def or_where_lt(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.LESS_THAN, value, Connector.OR)

    def where_lte(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.LESS_THAN_OR_EQUAL, value, Connector.AND)

    def or_where_lte(self, column: str, value: Any) -> Self:
        return self._add_condition(column, Operator.LESS_THAN_OR_EQUAL, value, Connector.OR)

    # ------------------------------------------------------------------
    # BETWEEN
    # ------------------------------------------------------------------

    def _add_between(
        self, column: str, low: Any, high: Any, connector: Connector, negated: bool
    ) -> Self:
        bounds = ArrayValue(items=[to_scalar(low), to_scalar(high)])
        return self._add_condition(column, Operator.BETWEEN, bounds, connector, negated)

    def where_between(self, column: str, low: Any, high: Any) -> Self:
        """``column BETWEEN low AND high``."""
        return self._add_between(column, low, high, Connector.AND, negated=False)

    def or_where_between(self, column: str, low: Any, high: Any) -> Self:
        return self._add_between(column, low, high, Connector.OR, negated=False)

    def where_not_between(self, column: str, low: Any, high: Any) -> Self:
        return self._add_between(column, low, high, Connector.AND, negated=True)

    def or_where_not_between(self, column: str, low: Any, high: Any) -> Self:
        return self._add_between(column, low, high, Connector.OR, negated=True)

    # ------------------------------------------------------------------
    # LIKE
    # ------------------------------------------------------------------

    def where_like(self, column: str, pattern: str) -> Self:
        return self._add_condition(column, Operator.LIKE, pattern, Connector.AND)

    def or_where_like(self, column: str, pattern: str) -> Self:
        return self._add_condition(column, Operator.LIKE, pattern, Connector.OR)

    def where_not_like(self, column: str, pattern: str) -> Self:
        return self._add_condition(column, Operator.LIKE, pattern, Connector.AND, negated=True)

    def or_where_not_like(self, column: str, pattern: str) -> Self:
        return self._add_condition(column, Operator.LIKE, pattern, Connector.OR, negated=True)

    # ------------------------------------------------------------------
    # IN
    # ------------------------------------------------------------------

    def where_in(self, column: str, values: Any) -> Self:
        """``column IN (…)``; ``values`` may be a list or a sub-statement."""
        return self._add_condition(column, Operator.IN, values, Connector.AND)

    def or_where_in(self, column: str, values: Any) -> Self:
        return self._add_condition(column, Operator.IN, values, Connector.OR)

    def where_not_in(self, column: str, values: Any) -> Self:
        return self._add_condition(column, Operator.IN, values, Connector.AND, negated=True)

    def or_where_not_in(self, column: str, values: Any) -> Self:
        return self._add_condition(column, Operator.IN, values, Connector.OR, negated=True)

    # ------------------------------------------------------------------
    # NULL checks (single column or several)
    # ------------------------------------------------------------------

    def _add_null(self, columns: str | Iterable[str], connector: Connector, negated: bool) -> Self:
        for column in as_columns(columns):
            self._add_condition(column, Operator.IS_NULL, None, connector, negated)
        return self

    def where_null(self, columns: str | Iterable[str]) -> Self:
        return self._add_null(columns, Connector.AND, negated=False)

    def or_where_null(self, columns: str | Iterable[str]) -> Self:
        return self._add_null(columns, Connector.OR, negated=False)

    def where_not_null(self, columns: str | Iterable[str]) -> Self:
        return self._add_null(columns, Connector.AND, negated=True)

    def or_where_not_null(self, columns: str | Iterable[str]) -> Self:
        return self._add_null(columns, Connector.OR, negated=True)

    # ------------------------------------------------------------------
    # Nested groups
    # ------------------------------------------------------------------

    def _add_group(self, fn: GroupFn, connector: Connector) -> Self:
        child = PredicateGroupBuilder(connector)
        result = fn(child)
        self._append_group((result or child).group)
        return self

    def where_closure(self, fn: GroupFn) -> Self:
        """AND a parenthesized group populated by ``fn``.

        ``fn`` receives a fresh :class:`PredicateGroupBuilder`::

            q.where_closure(lambda g: g.where("a", 1).or_where("b", 2))
        """
        return self._add_group(fn, Connector.AND)

    def or_where_closure(self, fn: GroupFn) -> Self:
        """OR a parenthesized group populated by ``fn``."""
        return self._add_group(fn, Connector.OR)


class PredicateGroupBuilder(WhereClauseMixin):
    """Scoped builder that fills one :class:`PredicateGroup`.

    Args:
        connector: How the finished group joins the unit before it.
    """

    def __init__(self, connector: Connector = Connector.AND) -> None:
        self._group = PredicateGroup(connector=connector)

    @property
    def group(self) -> PredicateGroup:
        return self._group

    def _append_predicate(self, predicate: Predicate) -> None:
        self._group.predicates.append(predicate)

    def _append_group(self, group: PredicateGroup) -> None:
        self._group.groups.append(group)
