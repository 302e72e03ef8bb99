"""Pretty printer for compiled SQL.

Delegates to :mod:`sqlparse`, which only re-indents and re-cases the text;
the statement's tokens are left untouched.
"""
from __future__ import annotations

import sqlparse

from chainql.settings import FormatOptions


def format_sql(sql: str, options: FormatOptions | None = None) -> str:
    """Re-indent ``sql`` and normalise keyword case.

    Args:
        sql: A compiled SQL statement.
        options: Formatting options; defaults to ``FormatOptions()``.

    Returns:
        The formatted statement.
    """
    if options is None:
        options = FormatOptions()

    kwargs: dict = {
        "reindent": True,
        "indent_width": options.indent_width,
        "strip_comments": options.strip_comments,
    }
    if options.uppercase:
        kwargs["keyword_case"] = "upper"
    if options.wrap_after is not None:
        kwargs["wrap_after"] = options.wrap_after
    return sqlparse.format(sql, **kwargs)
