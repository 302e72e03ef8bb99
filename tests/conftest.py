"""Shared pytest fixtures for chainQL unit and integration tests."""
from __future__ import annotations

import pytest

import chainql
from chainql import QueryBuilder, SubqueryBuilder


@pytest.fixture()
def flights() -> QueryBuilder:
    """A fresh statement targeting ``flights``."""
    return chainql.query().table("flights")


@pytest.fixture()
def long_flight_ids() -> SubqueryBuilder:
    """Ids of flights longer than two hours."""
    return (
        chainql.subquery()
        .table("flights")
        .select("id")
        .where_gt("flight_duration", 120)
    )
