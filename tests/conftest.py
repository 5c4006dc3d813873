"""
Shared fixtures: a recording psycopg2 stand-in for SQL-shape tests and a
seeded in-memory store for behaviour tests.
"""

import pytest

from repositories.memory_repo import InMemoryStore
from services.unit_of_work import memory_unit_of_work


class FakeCursor:
    """Records every execute() and replays scripted results in order."""

    def __init__(self, connection):
        self._connection = connection
        self._rows: list = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self._connection.executed.append((sql, params))
        result = self._connection.results.pop(0) if self._connection.results else []
        if isinstance(result, Exception):
            raise result
        if isinstance(result, int):
            self._rows, self.rowcount = [], result
        else:
            self._rows, self.rowcount = list(result), len(result)

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None


class FakeConnection:
    """
    Minimal psycopg2 connection double.

    `results` holds one entry per statement: a list of row tuples, an int
    rowcount for writes, or an exception to raise.
    """

    def __init__(self, results=None):
        self.results = list(results or [])
        self.executed: list[tuple] = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def store():
    """Store with the default statuses and three specialties."""
    s = InMemoryStore()
    for name in ("Active", "Inactive"):
        new_id = s.next_id("status")
        s.statuses[new_id] = {"id": new_id, "name": name}
    for name, duration in (("Cardiology", 30), ("Dermatology", 20), ("Pediatrics", 40)):
        new_id = s.next_id("specialty")
        s.specialties[new_id] = {"id": new_id, "name": name, "scheduled_duration": duration}
    return s


@pytest.fixture
def uow_factory(store):
    return memory_unit_of_work(store)
