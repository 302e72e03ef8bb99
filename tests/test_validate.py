"""Unit tests for BindingsValidator."""
from __future__ import annotations

import pytest

import chainql
from chainql.errors import (
    CannotApplyClauseError,
    CannotApplyClauseOnDeleteError,
    CannotApplyClauseOnInsertError,
    CannotApplyClauseOnSelectError,
    CannotApplyClauseOnUpdateError,
    DuplicatedColumnNamesError,
    GroupByWithNonSelectedOrAggregateFunctionError,
    HavingClauseWithoutAggregateFunctionError,
    MissingPlaceholdersError,
    MissingTableError,
    OrderByWithNonSelectedOrAggregateFunctionError,
    ValidationError,
)
from chainql.schema.bindings import Bindings
from chainql.schema.clauses import ColumnSelect
from chainql.validate.validator import BindingsValidator


def test_valid_select_passes():
    bindings = Bindings(table="flights", select=[ColumnSelect(column="id")])
    BindingsValidator().validate(bindings)


def test_missing_table():
    with pytest.raises(MissingTableError) as exc_info:
        chainql.query().select("id").sql()
    assert exc_info.value.code == "MISSING_TABLE"


def test_missing_table_checked_first():
    # Duplicates are present too, but the table check runs first.
    with pytest.raises(MissingTableError):
        chainql.query().select("id").select("id").sql()


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


def test_duplicated_column_names(flights):
    with pytest.raises(DuplicatedColumnNamesError) as exc_info:
        flights.select("origin_airport").select("origin_airport").sql()
    assert exc_info.value.column == "origin_airport"


def test_alias_collides_with_column(flights):
    with pytest.raises(DuplicatedColumnNamesError) as exc_info:
        flights.select("duration").select_max("flight_duration", "duration").sql()
    assert exc_info.value.column == "duration"


def test_raw_fragments_have_no_output_name(flights):
    sql = flights.select_raw("1").select_raw("1").sql()
    assert sql == "SELECT 1, 1 FROM flights"


def test_missing_placeholders(flights):
    with pytest.raises(MissingPlaceholdersError) as exc_info:
        flights.select_raw("flight_duration * ? + ?", [5]).sql()
    assert exc_info.value.fragment == "flight_duration * ? + ?"
    assert exc_info.value.details == {
        "fragment": "flight_duration * ? + ?",
        "expected": 2,
        "supplied": 1,
    }


def test_too_many_placeholder_values(flights):
    with pytest.raises(MissingPlaceholdersError):
        flights.select_raw("flight_duration * ?", [5, 6]).sql()


# ---------------------------------------------------------------------------
# HAVING / GROUP BY / ORDER BY
# ---------------------------------------------------------------------------


def test_having_without_aggregate(flights):
    with pytest.raises(HavingClauseWithoutAggregateFunctionError) as exc_info:
        flights.having("origin_airport", "AMS").sql()
    assert exc_info.value.column == "origin_airport"


def test_having_on_plain_alias_is_rejected(flights):
    with pytest.raises(HavingClauseWithoutAggregateFunctionError):
        (
            flights.select_as("origin_airport", "origin")
            .group_by("origin_airport")
            .having("origin", "AMS")
            .sql()
        )


def test_group_by_without_selected_column(flights):
    with pytest.raises(GroupByWithNonSelectedOrAggregateFunctionError) as exc_info:
        flights.group_by("origin_airport").sql()
    assert exc_info.value.column == "origin_airport"


def test_group_by_other_column(flights):
    with pytest.raises(GroupByWithNonSelectedOrAggregateFunctionError) as exc_info:
        flights.select("origin_airport").group_by(["origin_airport", "gate_number"]).sql()
    assert exc_info.value.column == "gate_number"


def test_order_by_not_selected(flights):
    with pytest.raises(OrderByWithNonSelectedOrAggregateFunctionError) as exc_info:
        flights.select("destination_airport").order_by_asc("origin_airport").sql()
    assert exc_info.value.column == "origin_airport"


def test_order_by_alias_expression_text(flights):
    sql = flights.select_as("airports.city", "city").order_by_asc("airports.city").sql()
    assert sql == "SELECT airports.city AS city FROM flights ORDER BY airports.city ASC"


# ---------------------------------------------------------------------------
# Clause / action compatibility
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "build, error, clause",
    [
        (lambda q: q.select("id").insert("id", 1), CannotApplyClauseOnSelectError, "INSERT"),
        (lambda q: q.select("id").update("id", 1), CannotApplyClauseOnSelectError, "UPDATE"),
        (lambda q: q.select("id").delete(), CannotApplyClauseOnSelectError, "DELETE"),
        (lambda q: q.insert("id", 1).where("id", 1), CannotApplyClauseOnInsertError, "WHERE"),
        (
            lambda q: q.insert("id", 1).join("airports", "a", "b"),
            CannotApplyClauseOnInsertError,
            "JOIN",
        ),
        (lambda q: q.insert("id", 1).limit(1), CannotApplyClauseOnInsertError, "LIMIT"),
        (lambda q: q.insert("id", 1).update("id", 2), CannotApplyClauseOnInsertError, "UPDATE"),
        (
            lambda q: q.update("id", 1).join("airports", "a", "b"),
            CannotApplyClauseOnUpdateError,
            "JOIN",
        ),
        (lambda q: q.update("id", 1).order_by_asc("id"), CannotApplyClauseOnUpdateError, "ORDER BY"),
        (lambda q: q.update("id", 1).offset(3), CannotApplyClauseOnUpdateError, "OFFSET"),
        (lambda q: q.update("id", 1).delete(), CannotApplyClauseOnUpdateError, "DELETE"),
        (
            lambda q: q.delete().join("airports", "a", "b"),
            CannotApplyClauseOnDeleteError,
            "JOIN",
        ),
        (lambda q: q.delete().limit(1), CannotApplyClauseOnDeleteError, "LIMIT"),
    ],
)
def test_clause_not_allowed(flights, build, error, clause):
    with pytest.raises(error) as exc_info:
        build(flights).sql()
    assert isinstance(exc_info.value, CannotApplyClauseError)
    assert exc_info.value.clause == clause


def test_clause_error_response():
    with pytest.raises(CannotApplyClauseOnDeleteError) as exc_info:
        chainql.query().table("flights").delete().limit(1).sql()
    assert exc_info.value.to_error_response() == {
        "error": "CLAUSE_NOT_ALLOWED_ON_DELETE",
        "message": "LIMIT is not allowed in DELETE statements.",
        "details": {"action": "DELETE", "clause": "LIMIT"},
    }


# ---------------------------------------------------------------------------
# Opting out and sub-statements
# ---------------------------------------------------------------------------


def test_skip_validation_compiles_invalid_bindings(flights):
    sql = flights.skip_validation().select("id").select("id").group_by("gate_number").sql()
    assert sql == "SELECT id, id FROM flights GROUP BY gate_number"


def test_skip_validation_without_table():
    assert chainql.query().skip_validation().sql() == "SELECT *"


def test_invalid_subquery_fails_outer_statement(flights):
    bad = chainql.subquery().table("flights").select("id").group_by("gate_number")
    with pytest.raises(GroupByWithNonSelectedOrAggregateFunctionError):
        flights.where_in("id", [bad]).sql()


def test_subquery_keeps_its_own_switch(flights):
    bad = chainql.subquery().table("flights").select("id").group_by("gate_number").skip_validation()
    sql = flights.where_in("id", [bad]).sql()
    assert sql == (
        "SELECT * FROM flights WHERE id IN (SELECT id FROM flights GROUP BY gate_number)"
    )


def test_outer_skip_does_not_cover_subquery(flights):
    bad = chainql.subquery().select("id")
    with pytest.raises(MissingTableError):
        flights.skip_validation().where_in("id", [bad]).sql()


def test_all_validation_errors_share_base():
    with pytest.raises(ValidationError):
        chainql.query().sql()
