"""The binding accumulator and the recursive parts of the model.

``Bindings`` is the state one statement accumulates while the fluent API is
chained.  It is append-only: every mutator adds entries, only ``table`` is
overwritten.  Sub-statements embedded as values or select items own their
own ``Bindings``, so the model is a strict ownership tree.

The action (SELECT / INSERT / UPDATE / DELETE) is not stored; it is derived
from which clause lists are populated.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

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
    Connector,
    Operator,
    is_aggregate_call,
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

_FORBID = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Sub-statement carriers
# ---------------------------------------------------------------------------


class SubqueryValue(BaseModel):
    """A nested statement used as a value: ``id = (SELECT ...)``."""

    model_config = _FORBID

    kind: Literal["subquery"] = "subquery"
    bindings: Bindings


class SubquerySelect(BaseModel):
    """A nested statement projected as a column: ``(SELECT ...) AS alias``."""

    model_config = _FORBID

    kind: Literal["subquery"] = "subquery"
    bindings: Bindings
    alias: str

    @property
    def output_name(self) -> str | None:
        return self.alias


Value = Annotated[
    Union[
        StringValue,
        IntegerValue,
        FloatValue,
        BooleanValue,
        NullValue,
        ArrayValue,
        SubqueryValue,
    ],
    Field(discriminator="kind"),
]


class RawSelect(BaseModel):
    """A raw fragment with ``?`` placeholders filled positionally.

    Attributes:
        fragment: SQL text, e.g. ``"flight_duration * ? AS delay"``.
        values: Values substituted for each ``?`` in order; a sub-statement
            renders parenthesized.
    """

    model_config = _FORBID

    kind: Literal["raw"] = "raw"
    fragment: str
    values: list[Value] = Field(default_factory=list)

    @property
    def placeholder_count(self) -> int:
        return self.fragment.count("?")

    @property
    def output_name(self) -> str | None:
        return None


SelectItem = Annotated[
    Union[
        ColumnSelect,
        AliasSelect,
        AggregateSelect,
        RawSelect,
        DistinctSelect,
        SubquerySelect,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single comparison in a WHERE or HAVING clause.

    Attributes:
        column: Left-hand column or alias.
        operator: Comparison operator.
        value: Right-hand value.  ``BETWEEN`` stores ``[low, high]`` as an
            array; null checks store ``NullValue``.
        connector: How this predicate joins the one before it.
        negated: Render the complement of ``operator``.
    """

    model_config = _FORBID

    column: str
    operator: Operator
    value: Value = Field(default_factory=NullValue)
    connector: Connector = Connector.AND
    negated: bool = False


class PredicateGroup(BaseModel):
    """A parenthesized cluster of predicates and nested groups.

    Attributes:
        connector: How the whole group joins the unit before it.
        predicates: Child predicates, rendered first.
        groups: Child groups, rendered after the predicates.
    """

    model_config = _FORBID

    connector: Connector = Connector.AND
    predicates: list[Predicate] = Field(default_factory=list)
    groups: list[PredicateGroup] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.predicates and not any(not g.is_empty for g in self.groups)


class MutationEntry(BaseModel):
    """One ``column = value`` pair of an INSERT or UPDATE."""

    model_config = _FORBID

    column: str
    value: Value


# ---------------------------------------------------------------------------
# Binding accumulator
# ---------------------------------------------------------------------------


class Bindings(BaseModel):
    """Everything one statement has accumulated so far.

    Attributes:
        table: Target table (last write wins).
        select: Select items in declaration order.
        insert: INSERT column/value entries in declaration order.
        update: UPDATE column/value entries in declaration order.
        delete: Marks the statement as a DELETE.
        joins: JOIN clauses in declaration order.
        where: Top-level WHERE predicates.
        where_groups: Top-level WHERE groups, rendered after ``where``.
        group_by: GROUP BY columns, de-duplicated, in declaration order.
        having: HAVING predicates.
        order_by: ORDER BY items in declaration order.
        limit: Optional LIMIT.
        offset: Optional OFFSET.
        checks_enabled: Run the validator before compiling.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    table: str | None = None
    select: list[SelectItem] = Field(default_factory=list)
    insert: list[MutationEntry] = Field(default_factory=list)
    update: list[MutationEntry] = Field(default_factory=list)
    delete: bool = False
    joins: list[JoinClause] = Field(default_factory=list)
    where: list[Predicate] = Field(default_factory=list)
    where_groups: list[PredicateGroup] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    having: list[Predicate] = Field(default_factory=list)
    order_by: list[OrderByItem] = Field(default_factory=list)
    limit: NonNegativeInt | None = None
    offset: NonNegativeInt | None = None
    checks_enabled: bool = True

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def action(self) -> Action:
        """The statement kind, derived from which clauses are populated."""
        if self.select:
            return Action.SELECT
        if self.insert:
            return Action.INSERT
        if self.update:
            return Action.UPDATE
        if self.delete:
            return Action.DELETE
        return Action.SELECT

    @property
    def has_where(self) -> bool:
        return bool(self.where) or any(not g.is_empty for g in self.where_groups)

    def output_names(self) -> list[str]:
        """Output column names of the select items, in declaration order.

        Raw fragments contribute no name.
        """
        return [item.output_name for item in self.select if item.output_name is not None]

    def aggregate_aliases(self) -> set[str]:
        """Aliases that name an aggregate result.

        Includes ``select_count(...)``-style items and aliased expressions
        whose text is an aggregate call such as ``AVG(x)``.
        """
        aliases: set[str] = set()
        for item in self.select:
            if isinstance(item, AggregateSelect):
                aliases.add(item.alias)
            elif isinstance(item, AliasSelect) and is_aggregate_call(item.expression):
                aliases.add(item.alias)
        return aliases

    def projected_names(self) -> set[str]:
        """Names GROUP BY / ORDER BY may reference.

        Plain and distinct columns, aliased expressions (both the expression
        text and the alias), aggregate aliases and sub-statement aliases.
        """
        names: set[str] = set()
        for item in self.select:
            if isinstance(item, (ColumnSelect, DistinctSelect)):
                names.add(item.column)
            elif isinstance(item, AliasSelect):
                names.add(item.expression)
                names.add(item.alias)
            elif isinstance(item, (AggregateSelect, SubquerySelect)):
                names.add(item.alias)
        return names


def to_value(raw: Any) -> Value:
    """Coerce a Python literal, a ``Bindings`` or a typed value into ``Value``.

    A one-element list holding a ``Bindings`` is the IN-list form of a
    sub-statement and becomes a :class:`SubqueryValue`.  Lists that mix
    sub-statements with other elements have no rendering and are rejected.

    Args:
        raw: Literal, list of literals, ``Bindings`` or typed value.

    Returns:
        A typed ``Value``.

    Raises:
        TypeError: On unsupported types or mixed sub-statement lists.
    """
    if isinstance(raw, SubqueryValue):
        return raw
    if isinstance(raw, Bindings):
        return SubqueryValue(bindings=raw)
    if isinstance(raw, (list, tuple)) and any(isinstance(item, Bindings) for item in raw):
        if len(raw) == 1:
            return SubqueryValue(bindings=raw[0])
        raise TypeError(
            "A sub-statement in a value list must be its only element."
        )
    return to_scalar(raw)


# Resolve forward references across the recursive model.
SubqueryValue.model_rebuild()
SubquerySelect.model_rebuild()
RawSelect.model_rebuild()
Predicate.model_rebuild()
PredicateGroup.model_rebuild()
MutationEntry.model_rebuild()
Bindings.model_rebuild()
