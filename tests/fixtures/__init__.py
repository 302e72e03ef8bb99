"""Test fixtures: sample flights DDL and seed rows."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent

AIRPORTS = [
    ("AMS", "Amsterdam", "Netherlands"),
    ("FRA", "Frankfurt", "Germany"),
    ("JFK", "New York", "United States"),
    ("LGA", "New York", "United States"),
]

#: (id, flight_number, origin_airport, destination_airport, flight_duration,
#:  number_of_passengers, gate_number, departure_time, is_cancelled)
FLIGHTS = [
    (1, "KL601", "AMS", "JFK", 480, 310, "D7", "2024-05-01 09:00", 0),
    (2, "LH400", "FRA", "JFK", 510, 280, None, "2024-05-01 10:30", 0),
    (3, "KL1761", "AMS", "FRA", 70, 120, "B12", "2024-05-01 07:15", 0),
    (4, "LH991", "FRA", "AMS", 75, 95, "A3", None, 1),
    (5, "DL48", "JFK", "AMS", 420, 250, None, "2024-05-02 18:00", 0),
    (6, "AA100", "LGA", "FRA", 455, 180, "C1", "2024-05-02 20:45", 0),
]


def load_ddl() -> str:
    """Return the sample SQLite DDL."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
