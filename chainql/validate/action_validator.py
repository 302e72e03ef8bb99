"""Clause / action compatibility validator.

A statement is exactly one of SELECT, INSERT, UPDATE or DELETE.  This
validator rejects clauses that the statement's action cannot render instead
of silently dropping them.
"""

from __future__ import annotations

from chainql.errors import (
    CannotApplyClauseError,
    CannotApplyClauseOnDeleteError,
    CannotApplyClauseOnInsertError,
    CannotApplyClauseOnSelectError,
    CannotApplyClauseOnUpdateError,
)
from chainql.schema.bindings import Bindings
from chainql.schema.expressions import Action

#: Clause keywords illegal per action, in the order they are checked.
_FORBIDDEN_CLAUSES: dict[Action, tuple[str, ...]] = {
    Action.SELECT: ("INSERT", "UPDATE", "DELETE"),
    Action.INSERT: (
        "JOIN", "WHERE", "GROUP BY", "HAVING", "ORDER BY", "LIMIT", "OFFSET",
        "UPDATE", "DELETE",
    ),
    Action.UPDATE: ("JOIN", "GROUP BY", "HAVING", "ORDER BY", "LIMIT", "OFFSET", "DELETE"),
    Action.DELETE: ("JOIN", "GROUP BY", "HAVING", "ORDER BY", "LIMIT", "OFFSET"),
}

_ERRORS: dict[Action, type[CannotApplyClauseError]] = {
    Action.SELECT: CannotApplyClauseOnSelectError,
    Action.INSERT: CannotApplyClauseOnInsertError,
    Action.UPDATE: CannotApplyClauseOnUpdateError,
    Action.DELETE: CannotApplyClauseOnDeleteError,
}


class ActionValidator:
    """Validates that every populated clause is legal for the action."""

    def validate(self, bindings: Bindings) -> None:
        """Raise on the first clause the action cannot carry.

        Raises:
            CannotApplyClauseError: The action-specific subclass, carrying
                the clause keyword.
        """
        action = bindings.action
        present = self._present_clauses(bindings)
        for clause in _FORBIDDEN_CLAUSES[action]:
            if clause in present:
                raise _ERRORS[action](clause)

    @staticmethod
    def _present_clauses(bindings: Bindings) -> set[str]:
        flags = {
            "JOIN": bool(bindings.joins),
            "WHERE": bindings.has_where,
            "GROUP BY": bool(bindings.group_by),
            "HAVING": bool(bindings.having),
            "ORDER BY": bool(bindings.order_by),
            "LIMIT": bindings.limit is not None,
            "OFFSET": bindings.offset is not None,
            "INSERT": bool(bindings.insert),
            "UPDATE": bool(bindings.update),
            "DELETE": bindings.delete,
        }
        return {clause for clause, present in flags.items() if present}
