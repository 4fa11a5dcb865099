"""
Shared fixtures and fakes for sql/ module tests.

Key fixtures:
- fake_database: execution service recording every query it receives
- cities_result: RawResult with three city rows
- database_factory: FakeDatabase built from rows, columns or an error
- slow_database: FakeDatabase whose queries take 50 ms
"""

import time

import pytest

from pgcursor.models.results import ColumnDescriptor, RawResult


class FakeDatabase:
    """Execution service stub that records calls and returns a canned result."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result if result is not None else RawResult()
        self.error = error
        self.delay = delay
        self.calls = []

    def query(self, sql, args=None):
        self.calls.append((sql, list(args or [])))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


def make_result(rows, columns=None):
    """Build a RawResult from a list of dicts."""
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    return RawResult(
        rows=tuple(rows),
        columns=tuple(ColumnDescriptor(name) for name in columns),
        row_count=len(rows)
    )


@pytest.fixture
def cities_result():
    return make_result([
        {'id': 1, 'name': 'Amsterdam', 'population': 921402},
        {'id': 2, 'name': 'Rotterdam', 'population': 655468},
        {'id': 3, 'name': 'Utrecht', 'population': 361924},
    ])


@pytest.fixture
def fake_database(cities_result):
    return FakeDatabase(result=cities_result)


@pytest.fixture
def empty_database():
    return FakeDatabase(result=make_result([], columns=['id', 'name']))


@pytest.fixture
def slow_database(cities_result):
    """FakeDatabase that blocks for 50 ms per query."""
    return FakeDatabase(result=cities_result, delay=0.05)


@pytest.fixture
def database_factory():
    """Factory building a FakeDatabase around the given rows or error."""
    def factory(rows=None, columns=None, error=None):
        return FakeDatabase(result=make_result(rows or [], columns), error=error)

    return factory
