"""Typed scalar value models for predicates, mutations and raw fragments.

Every literal a caller passes to the fluent API is coerced into one of the
models below.  The ``kind`` field is the discriminator, so a raw dict such as
``{"kind": "integer", "value": 5}`` parses into the right model as well.

Sub-statement values live in :mod:`chainql.schema.bindings` because they own
a complete :class:`~chainql.schema.bindings.Bindings`.

Usage::

    from chainql.schema.values import IntegerValue, to_scalar

    assert to_scalar(5) == IntegerValue(value=5)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

_FORBID = ConfigDict(extra="forbid", frozen=True)


class StringValue(BaseModel):
    """A text literal, rendered single-quoted."""

    model_config = _FORBID

    kind: Literal["string"] = "string"
    value: str


class IntegerValue(BaseModel):
    """An integer literal, rendered as-is."""

    model_config = _FORBID

    kind: Literal["integer"] = "integer"
    value: int


class FloatValue(BaseModel):
    """A floating-point literal, rendered as-is."""

    model_config = _FORBID

    kind: Literal["float"] = "float"
    value: float


class BooleanValue(BaseModel):
    """A boolean literal, rendered ``TRUE`` / ``FALSE``."""

    model_config = _FORBID

    kind: Literal["boolean"] = "boolean"
    value: bool


class NullValue(BaseModel):
    """SQL ``NULL``.  In a predicate it becomes ``IS NULL`` / ``IS NOT NULL``."""

    model_config = _FORBID

    kind: Literal["null"] = "null"


#: Values allowed inside an array.
ArrayItem = Annotated[
    Union[StringValue, IntegerValue, FloatValue, BooleanValue],
    Field(discriminator="kind"),
]


class ArrayValue(BaseModel):
    """A list of scalars, rendered as a parenthesized comma list."""

    model_config = _FORBID

    kind: Literal["array"] = "array"
    items: list[ArrayItem] = Field(default_factory=list)


ScalarValue = Annotated[
    Union[StringValue, IntegerValue, FloatValue, BooleanValue, NullValue, ArrayValue],
    Field(discriminator="kind"),
]

#: Parse a raw dict into a typed scalar value.
SCALAR_ADAPTER: TypeAdapter[ScalarValue] = TypeAdapter(ScalarValue)

_SCALAR_TYPES = (StringValue, IntegerValue, FloatValue, BooleanValue, NullValue, ArrayValue)


def to_scalar(raw: Any) -> ScalarValue:
    """Coerce a Python literal into a typed scalar value.

    ``bool`` is checked before ``int`` because it is an ``int`` subclass.

    Args:
        raw: ``str``, ``int``, ``float``, ``bool``, ``None``, a list/tuple of
            those, an already-typed value, or a ``{"kind": ...}`` dict.

    Returns:
        A typed scalar value.

    Raises:
        TypeError: If ``raw`` has no scalar representation.
    """
    if isinstance(raw, _SCALAR_TYPES):
        return raw
    if raw is None:
        return NullValue()
    if isinstance(raw, bool):
        return BooleanValue(value=raw)
    if isinstance(raw, int):
        return IntegerValue(value=raw)
    if isinstance(raw, float):
        return FloatValue(value=raw)
    if isinstance(raw, str):
        return StringValue(value=raw)
    if isinstance(raw, (list, tuple)):
        items = [to_scalar(item) for item in raw]
        for item in items:
            if isinstance(item, (NullValue, ArrayValue)):
                raise TypeError(f"Array elements must be scalars, got {item.kind!r}.")
        return ArrayValue(items=items)
    if isinstance(raw, dict):
        return SCALAR_ADAPTER.validate_python(raw)
    raise TypeError(f"Unsupported value type: {type(raw).__name__}")
