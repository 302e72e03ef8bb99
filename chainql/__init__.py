"""chainQL: a fluent, validating SQL statement builder.

Chain clauses, then compile.

Public API
----------
``query``
    Start a new statement.

``subquery``
    Start a statement that will be embedded in another one as a value or a
    select item.

``compile_bindings``
    Validate and compile a :class:`Bindings` directly (what ``sql()`` does).

Re-exported types
-----------------
``QueryBuilder``, ``SubqueryBuilder``, ``PredicateGroupBuilder``,
``Bindings``, ``FormatOptions`` and all error classes.

Example::

    import chainql

    sql = (
        chainql.query()
        .table("flights")
        .select("origin")
        .where_gt("flight_duration", 120)
        .or_where_closure(lambda g: g.where_like("city", "%NY%"))
        .sql()
    )
    # SELECT origin FROM flights WHERE flight_duration > 120 OR (city LIKE '%NY%')
"""

from __future__ import annotations

from chainql.compile.builder import StatementBuilder, compile_bindings
from chainql.compile.formatter import format_sql
from chainql.errors import (
    CannotApplyClauseError,
    CannotApplyClauseOnDeleteError,
    CannotApplyClauseOnInsertError,
    CannotApplyClauseOnSelectError,
    CannotApplyClauseOnUpdateError,
    ChainQLError,
    CompilationError,
    DuplicatedColumnNamesError,
    GroupByWithNonSelectedOrAggregateFunctionError,
    HavingClauseWithoutAggregateFunctionError,
    MissingPlaceholdersError,
    MissingTableError,
    OrderByWithNonSelectedOrAggregateFunctionError,
    ValidationError,
)
from chainql.query.builder import QueryBuilder, SubqueryBuilder
from chainql.query.where import PredicateGroupBuilder
from chainql.schema.bindings import Bindings
from chainql.settings import FormatOptions
from chainql.validate.validator import BindingsValidator

__all__ = [
    # Entry points
    "query",
    "subquery",
    "compile_bindings",
    "format_sql",
    # Builders
    "QueryBuilder",
    "SubqueryBuilder",
    "PredicateGroupBuilder",
    # Model
    "Bindings",
    # Pipeline
    "BindingsValidator",
    "StatementBuilder",
    # Config
    "FormatOptions",
    # Errors
    "ChainQLError",
    "ValidationError",
    "MissingTableError",
    "DuplicatedColumnNamesError",
    "MissingPlaceholdersError",
    "HavingClauseWithoutAggregateFunctionError",
    "GroupByWithNonSelectedOrAggregateFunctionError",
    "OrderByWithNonSelectedOrAggregateFunctionError",
    "CannotApplyClauseError",
    "CannotApplyClauseOnSelectError",
    "CannotApplyClauseOnInsertError",
    "CannotApplyClauseOnUpdateError",
    "CannotApplyClauseOnDeleteError",
    "CompilationError",
]


def query() -> QueryBuilder:
    """Start a new statement."""
    return QueryBuilder()


def subquery() -> SubqueryBuilder:
    """Start a statement to embed in another statement.

    ::

        longest = chainql.subquery().table("flights").select_max("duration", "max_duration")
        chainql.query().table("flights").where("duration", longest).sql()
        # SELECT * FROM flights WHERE duration = (SELECT MAX(duration) AS max_duration FROM flights)
    """
    return SubqueryBuilder()
