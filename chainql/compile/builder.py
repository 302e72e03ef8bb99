"""Core Bindings → SQL compilation logic.

``StatementBuilder`` is the top-level renderer.  It wires together the
clause-level and expression-level sub-builders, then assembles the statement
in a fixed clause order.  It performs no validation of its own: callers go
through :func:`compile_bindings`, which runs
:class:`~chainql.validate.validator.BindingsValidator` first unless the
bindings opted out.

Sub-builder hierarchy
---------------------
StatementBuilder
  ├── ValueBuilder          (expression_builder.py)
  ├── PredicateBuilder      (expression_builder.py)
  ├── SelectClauseBuilder   (clause_builders.py)
  ├── JoinClauseBuilder     (clause_builders.py)
  ├── InsertClauseBuilder   (clause_builders.py)
  ├── UpdateClauseBuilder   (clause_builders.py)
  └── OrderByClauseBuilder  (clause_builders.py)

Sub-statements
--------------
Embedded sub-statements are compiled through ``build_fn``, which defaults to
:func:`compile_bindings`.  Each nested statement is therefore validated and
rendered independently, with its own sub-builder graph; the renderer is
reentrant and keeps no state between calls.
"""

from __future__ import annotations

import logging

from chainql.compile.clause_builders import (
    InsertClauseBuilder,
    JoinClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
    UpdateClauseBuilder,
)
from chainql.compile.expression_builder import BuildFn, PredicateBuilder, ValueBuilder
from chainql.errors import CompilationError
from chainql.schema.bindings import Bindings
from chainql.schema.expressions import Action
from chainql.validate.validator import BindingsValidator

logger = logging.getLogger(__name__)


def compile_bindings(bindings: Bindings) -> str:
    """Validate (unless disabled) and compile ``bindings`` to SQL.

    Args:
        bindings: The accumulated bindings of one statement.

    Returns:
        The SQL string.

    Raises:
        ValidationError: (or subclass) if validation is enabled and fails.
    """
    if bindings.checks_enabled:
        BindingsValidator().validate(bindings)
    else:
        logger.debug("Validation skipped for %s statement", bindings.action.value)
    return StatementBuilder().build(bindings)


class StatementBuilder:
    """Renders validated bindings to a single SQL string.

    Args:
        build_fn: Optional callable compiling embedded sub-statements.
            Defaults to :func:`compile_bindings`.
    """

    def __init__(self, build_fn: BuildFn | None = None) -> None:
        self._build_fn = build_fn or compile_bindings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, bindings: Bindings) -> str:
        """Compile ``bindings`` to SQL.

        Args:
            bindings: Bindings that passed validation, or opted out of it.

        Returns:
            The SQL string.

        Raises:
            CompilationError: If a mutation statement has no table.
        """
        sub_builders = self._make_sub_builders()
        action = bindings.action

        if action is Action.SELECT:
            sql = self._build_select(bindings, sub_builders)
        else:
            sql = self._build_mutation(bindings, action, sub_builders)

        logger.debug("Compiled %s statement: %s", action.value, sql)
        return sql

    # ------------------------------------------------------------------
    # SELECT
    # ------------------------------------------------------------------

    def _build_select(self, bindings: Bindings, sub_builders: dict) -> str:
        parts: list[str] = [sub_builders["select"].build(bindings)]

        if bindings.table:
            parts.append(f"FROM {bindings.table}")

        for join in bindings.joins:
            parts.append(sub_builders["join"].build(join))

        self._append_where(parts, bindings, sub_builders)

        if bindings.group_by:
            parts.append(f"GROUP BY {', '.join(bindings.group_by)}")

        if bindings.having:
            parts.append(f"HAVING {sub_builders['pred'].build_list(bindings.having)}")

        if bindings.order_by:
            parts.append(sub_builders["order_by"].build(bindings.order_by))

        if bindings.limit is not None:
            parts.append(f"LIMIT {bindings.limit}")

        if bindings.offset is not None:
            parts.append(f"OFFSET {bindings.offset}")

        return " ".join(parts)

    # ------------------------------------------------------------------
    # INSERT / UPDATE / DELETE
    # ------------------------------------------------------------------

    def _build_mutation(self, bindings: Bindings, action: Action, sub_builders: dict) -> str:
        if not bindings.table:
            raise CompilationError(
                f"{action.value} statement has no table.", clause=action.value
            )

        if action is Action.INSERT:
            return sub_builders["insert"].build(bindings.table, bindings.insert)

        if action is Action.UPDATE:
            parts = [sub_builders["update"].build(bindings.table, bindings.update)]
        else:
            parts = [f"DELETE FROM {bindings.table}"]

        self._append_where(parts, bindings, sub_builders)
        return " ".join(parts)

    @staticmethod
    def _append_where(parts: list[str], bindings: Bindings, sub_builders: dict) -> None:
        if bindings.has_where:
            where_sql = sub_builders["pred"].build_list(bindings.where, bindings.where_groups)
            parts.append(f"WHERE {where_sql}")

    # ------------------------------------------------------------------
    # Sub-builder wiring
    # ------------------------------------------------------------------

    def _make_sub_builders(self) -> dict:
        """Construct the sub-builder graph for one compilation run."""
        value_builder = ValueBuilder(self._build_fn)
        return {
            "value": value_builder,
            "pred": PredicateBuilder(value_builder),
            "select": SelectClauseBuilder(value_builder, self._build_fn),
            "join": JoinClauseBuilder(),
            "insert": InsertClauseBuilder(value_builder),
            "update": UpdateClauseBuilder(value_builder),
            "order_by": OrderByClauseBuilder(),
        }
