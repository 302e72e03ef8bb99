"""Unit tests for the sqlparse-backed pretty printer."""
from __future__ import annotations

import pydantic
import pytest

from chainql.compile.formatter import format_sql
from chainql.settings import FormatOptions


def _squash(sql: str) -> str:
    return " ".join(sql.split())


def test_pretty_sql_breaks_clauses_onto_lines(flights):
    q = (
        flights.select(["origin_airport", "destination_airport"])
        .where("origin_airport", "AMS")
        .order_by_asc("origin_airport")
    )
    pretty = q.pretty_sql()
    assert "\nFROM flights" in pretty
    assert "\nWHERE origin_airport = 'AMS'" in pretty
    assert "\nORDER BY origin_airport ASC" in pretty


def test_pretty_sql_keeps_tokens(flights):
    q = (
        flights.select(["origin_airport", "destination_airport"])
        .where("origin_airport", "AMS")
        .order_by_asc("origin_airport")
    )
    assert _squash(q.pretty_sql()) == q.sql()


def test_keywords_uppercased_by_default():
    pretty = format_sql("select origin from flights")
    assert pretty.startswith("SELECT origin")
    assert "FROM flights" in pretty


def test_keyword_case_left_alone_when_disabled():
    pretty = format_sql("select origin from flights", FormatOptions(uppercase=False))
    assert pretty.startswith("select origin")
    assert "from flights" in pretty


def test_strip_comments():
    pretty = format_sql(
        "SELECT origin -- departure\nFROM flights", FormatOptions(strip_comments=True)
    )
    assert "departure" not in pretty


def test_options_are_validated():
    with pytest.raises(pydantic.ValidationError):
        FormatOptions(indent_width=0)
    with pytest.raises(pydantic.ValidationError):
        FormatOptions(colour=True)


def test_pretty_sql_validates_first():
    import chainql

    with pytest.raises(chainql.MissingTableError):
        chainql.query().pretty_sql()
