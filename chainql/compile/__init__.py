"""chainQL compilation layer: Bindings → SQL."""
from chainql.compile.builder import StatementBuilder, compile_bindings
from chainql.compile.formatter import format_sql

__all__ = [
    "StatementBuilder",
    "compile_bindings",
    "format_sql",
]
