"""Configuration models for chainQL.

``FormatOptions`` controls the pretty printer used by
:meth:`~chainql.query.builder.QueryBuilder.pretty_sql`::

    from chainql import FormatOptions, query

    sql = query().table("flights").select("origin").pretty_sql(
        FormatOptions(indent_width=2, uppercase=False)
    )
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class FormatOptions(BaseModel):
    """Options passed to the SQL pretty printer.

    Attributes:
        indent_width: Spaces per indentation level.
        uppercase: Upper-case SQL keywords.
        strip_comments: Drop comments from the output.
        wrap_after: Wrap column lists after this many characters
            (``None`` = never).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    indent_width: PositiveInt = 4
    uppercase: bool = True
    strip_comments: bool = False
    wrap_after: PositiveInt | None = Field(default=None)
