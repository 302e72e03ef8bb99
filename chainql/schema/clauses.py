"""Pydantic models for the clauses a statement is built from.

Select items are a discriminated union on ``kind``.  The sub-statement
variant (``SubquerySelect``), raw fragments (``RawSelect``) and the predicate
models that carry values are defined in :mod:`chainql.schema.bindings`
next to the recursive ``Bindings`` type.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from chainql.schema.expressions import AggregateFunction, Direction, JoinKind

_FORBID = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# SELECT items
# ---------------------------------------------------------------------------


class ColumnSelect(BaseModel):
    """A bare column: ``origin``."""

    model_config = _FORBID

    kind: Literal["column"] = "column"
    column: str

    @property
    def output_name(self) -> str | None:
        return self.column


class AliasSelect(BaseModel):
    """An aliased expression: ``airports.city AS destination_city``.

    Attributes:
        expression: Column or expression text, rendered verbatim.
        alias: Output column name.
    """

    model_config = _FORBID

    kind: Literal["alias"] = "alias"
    expression: str
    alias: str

    @property
    def output_name(self) -> str | None:
        return self.alias


class AggregateSelect(BaseModel):
    """An aggregate application: ``AVG(flight_duration) AS avg_duration``."""

    model_config = _FORBID

    kind: Literal["aggregate"] = "aggregate"
    function: AggregateFunction
    column: str
    alias: str

    @property
    def output_name(self) -> str | None:
        return self.alias


class DistinctSelect(BaseModel):
    """A column selected under ``SELECT DISTINCT``."""

    model_config = _FORBID

    kind: Literal["distinct"] = "distinct"
    column: str

    @property
    def output_name(self) -> str | None:
        return self.column


# ---------------------------------------------------------------------------
# JOIN / ORDER BY
# ---------------------------------------------------------------------------


class JoinClause(BaseModel):
    """A single JOIN entry.

    Attributes:
        table: Joined table name.
        left: Qualified column on the left of ``ON ... = ...``.
        right: Qualified column on the right.
        kind: Join type; ``INNER`` renders as bare ``JOIN``.
    """

    model_config = _FORBID

    table: str
    left: str
    right: str
    kind: JoinKind = JoinKind.INNER


class OrderByItem(BaseModel):
    """A single ORDER BY column.

    Attributes:
        column: Column or alias to order by.
        direction: Sort direction.
    """

    model_config = _FORBID

    column: str
    direction: Direction = Direction.ASC
