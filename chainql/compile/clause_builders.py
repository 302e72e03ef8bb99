"""Clause-level SQL builders.

Each class handles exactly one SQL clause.  Select items and mutation
values that embed sub-statements are rendered through the shared
:class:`~chainql.compile.expression_builder.ValueBuilder`, whose build
function compiles the nested bindings independently.

Classes
-------
SelectClauseBuilder   : ``SELECT [DISTINCT] <items>``
JoinClauseBuilder     : ``[LEFT|RIGHT|FULL] JOIN … ON …``
InsertClauseBuilder   : ``INSERT INTO t (…) VALUES (…)``
UpdateClauseBuilder   : ``UPDATE t SET …``
OrderByClauseBuilder  : ``ORDER BY … ASC|DESC``
"""
from __future__ import annotations

from chainql.compile.expression_builder import BuildFn, ValueBuilder
from chainql.errors import CompilationError
from chainql.schema.bindings import (
    Bindings,
    MutationEntry,
    RawSelect,
    SelectItem,
    SubquerySelect,
)
from chainql.schema.clauses import (
    AggregateSelect,
    AliasSelect,
    ColumnSelect,
    DistinctSelect,
    JoinClause,
    OrderByItem,
)


class SelectClauseBuilder:
    """Builds the ``SELECT [DISTINCT] …`` clause.

    Without select items the projection is ``*``.  When any item is a
    distinct marker the whole projection is prefixed with ``DISTINCT``.
    """

    def __init__(self, value_builder: ValueBuilder, build_fn: BuildFn) -> None:
        self._values = value_builder
        self._build_fn = build_fn

    def build(self, bindings: Bindings) -> str:
        if not bindings.select:
            return "SELECT *"

        has_distinct = any(isinstance(item, DistinctSelect) for item in bindings.select)
        prefix = "SELECT DISTINCT" if has_distinct else "SELECT"
        items = [self._build_item(item) for item in bindings.select]
        return f"{prefix} {', '.join(items)}"

    def _build_item(self, item: SelectItem) -> str:
        if isinstance(item, (ColumnSelect, DistinctSelect)):
            return item.column
        if isinstance(item, AliasSelect):
            return f"{item.expression} AS {item.alias}"
        if isinstance(item, AggregateSelect):
            return f"{item.function.value}({item.column}) AS {item.alias}"
        if isinstance(item, RawSelect):
            return self._build_raw(item)
        if isinstance(item, SubquerySelect):
            return f"({self._build_fn(item.bindings)}) AS {item.alias}"
        raise CompilationError(
            f"Unknown select item type: {type(item).__name__}", clause="SELECT"
        )

    def _build_raw(self, item: RawSelect) -> str:
        # Extra placeholders stay as '?' when validation was skipped.
        parts = item.fragment.split("?")
        sql = parts[0]
        for index, part in enumerate(parts[1:]):
            if index < len(item.values):
                sql += self._values.build(item.values[index])
            else:
                sql += "?"
            sql += part
        return sql


class JoinClauseBuilder:
    """Builds a single ``JOIN … ON …`` fragment."""

    def build(self, join: JoinClause) -> str:
        return f"{join.kind.value} {join.table} ON {join.left} = {join.right}"


class InsertClauseBuilder:
    """Builds ``INSERT INTO <table> (<columns>) VALUES (<values>)``."""

    def __init__(self, value_builder: ValueBuilder) -> None:
        self._values = value_builder

    def build(self, table: str, entries: list[MutationEntry]) -> str:
        columns = ", ".join(entry.column for entry in entries)
        values = ", ".join(self._values.build(entry.value) for entry in entries)
        return f"INSERT INTO {table} ({columns}) VALUES ({values})"


class UpdateClauseBuilder:
    """Builds ``UPDATE <table> SET <column> = <value>, …``."""

    def __init__(self, value_builder: ValueBuilder) -> None:
        self._values = value_builder

    def build(self, table: str, entries: list[MutationEntry]) -> str:
        assignments = ", ".join(
            f"{entry.column} = {self._values.build(entry.value)}" for entry in entries
        )
        return f"UPDATE {table} SET {assignments}"


class OrderByClauseBuilder:
    """Builds ``ORDER BY <column> ASC|DESC, …``."""

    def build(self, items: list[OrderByItem]) -> str:
        return "ORDER BY " + ", ".join(f"{o.column} {o.direction.value}" for o in items)
