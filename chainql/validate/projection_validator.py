"""Select-list validator.

Checks the projection on its own: output names must be unique and raw
fragments must receive exactly one value per ``?`` placeholder.
"""

from __future__ import annotations

from chainql.errors import DuplicatedColumnNamesError, MissingPlaceholdersError
from chainql.schema.bindings import Bindings, RawSelect


class ProjectionValidator:
    """Validates the select items of one statement."""

    def validate_duplicates(self, bindings: Bindings) -> None:
        """Raise on the first output name that was already seen.

        Raises:
            DuplicatedColumnNamesError: With the repeated name.
        """
        seen: set[str] = set()
        for name in bindings.output_names():
            if name in seen:
                raise DuplicatedColumnNamesError(name)
            seen.add(name)

    def validate_placeholders(self, bindings: Bindings) -> None:
        """Raise if a raw fragment's placeholder count and values differ.

        Raises:
            MissingPlaceholdersError: With the offending fragment.
        """
        for item in bindings.select:
            if not isinstance(item, RawSelect):
                continue
            if item.placeholder_count != len(item.values):
                raise MissingPlaceholdersError(
                    item.fragment, item.placeholder_count, len(item.values)
                )
