"""Bindings validation orchestrator.

``BindingsValidator`` is the public entry point.  It wires together the
focused sub-validators and drives them in a fixed order, raising the first
violation it finds.

Sub-validator hierarchy
-----------------------
BindingsValidator
  ├── ProjectionValidator (projection_validator.py) : duplicate names, placeholders
  ├── SemanticValidator   (semantic_validator.py)   : HAVING / GROUP BY / ORDER BY
  └── ActionValidator     (action_validator.py)     : clause / action compatibility

Sub-statements embedded in the bindings are not walked here.  Each one is
validated on its own when the compiler renders it, under its own
``checks_enabled`` switch.
"""
from __future__ import annotations

import logging

from chainql.errors import MissingTableError, ValidationError
from chainql.schema.bindings import Bindings
from chainql.validate.action_validator import ActionValidator
from chainql.validate.projection_validator import ProjectionValidator
from chainql.validate.semantic_validator import SemanticValidator

logger = logging.getLogger(__name__)


class BindingsValidator:
    """Validates one statement's bindings before compilation.

    Checks, in order:
    1. Table presence.
    2. Duplicate output column names.
    3. Raw fragment placeholder arity.
    4. HAVING requires an aggregate alias or grouped column.
    5. GROUP BY columns must be projected.
    6. ORDER BY columns must be projected.
    7. Clause / action compatibility.

    Fail-fast: the first violation is raised as a subclass of
    ``ValidationError``; errors are never aggregated.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, bindings: Bindings) -> None:
        """Validate ``bindings`` and raise on the first violation found.

        Args:
            bindings: The accumulated bindings of one statement.

        Raises:
            ValidationError: (or subclass) on the first violation.
        """
        sub_validators = self._make_sub_validators()
        try:
            self._validate_table(bindings)
            sub_validators["projection"].validate_duplicates(bindings)
            sub_validators["projection"].validate_placeholders(bindings)
            sub_validators["semantic"].validate_having(bindings)
            sub_validators["semantic"].validate_group_by(bindings)
            sub_validators["semantic"].validate_order_by(bindings)
            sub_validators["action"].validate(bindings)
        except ValidationError as exc:
            logger.debug("Rejected %s statement: %s", bindings.action.value, exc.code)
            raise

    # ------------------------------------------------------------------
    # Clause validation helpers
    # ------------------------------------------------------------------

    def _validate_table(self, bindings: Bindings) -> None:
        if not bindings.table:
            raise MissingTableError()

    # ------------------------------------------------------------------
    # Sub-validator wiring
    # ------------------------------------------------------------------

    def _make_sub_validators(self) -> dict:
        """Construct sub-validators for one validation run."""
        return {
            "projection": ProjectionValidator(),
            "semantic": SemanticValidator(),
            "action": ActionValidator(),
        }
