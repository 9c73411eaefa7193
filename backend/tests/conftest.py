"""
Shared fixtures: an in-memory stand-in for the Supabase client and an API client bound to it.
"""

import os
import time
from collections import defaultdict
from datetime import datetime
from uuid import uuid4

import pytest

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from fastapi.testclient import TestClient  # noqa: E402

from timetable_api.core.dependencies import get_db  # noqa: E402
from timetable_api.main import app  # noqa: E402


def _comparable(value):
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


class FakeResult:
    def __init__(self, data: list[dict]):
        self.data = data


class FakeQuery:
    """Records one table operation and its filters, applied on execute()."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.operation = "select"
        self.payload = None
        self.on_conflict = ""
        self.ignore_duplicates = False
        self.filters = []

    # ── Operations ──

    def select(self, *columns):
        self.operation = "select"
        return self

    def insert(self, payload):
        self.operation = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "", ignore_duplicates: bool = False):
        self.operation = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, payload):
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # ── Filters ──

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: _comparable(row.get(column)) >= _comparable(value))
        return self

    def lt(self, column, value):
        self.filters.append(lambda row: _comparable(row.get(column)) < _comparable(value))
        return self

    def contains(self, column, values):
        self.filters.append(lambda row: all(v in (row.get(column) or []) for v in values))
        return self

    def _matches(self, row: dict) -> bool:
        return all(check(row) for check in self.filters)

    def execute(self) -> FakeResult:
        self.db.calls.append((self.table, self.operation))
        if self.db.latency:
            time.sleep(self.db.latency)
        self.db.raise_if_failing(self.table, self.operation)
        rows = self.db.tables[self.table]

        if self.operation == "select":
            return FakeResult([dict(row) for row in rows if self._matches(row)])

        if self.operation == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for payload in payloads:
                row = dict(payload)
                row.setdefault("id", str(uuid4()))
                rows.append(row)
                inserted.append(dict(row))
            return FakeResult(inserted)

        if self.operation == "upsert":
            keys = [k.strip() for k in self.on_conflict.split(",") if k.strip()] or ["id"]
            existing = next(
                (row for row in rows if all(row.get(k) == self.payload.get(k) for k in keys)),
                None,
            )
            if existing is not None:
                if self.ignore_duplicates:
                    return FakeResult([])
                existing.update(self.payload)
                return FakeResult([dict(existing)])
            row = dict(self.payload)
            rows.append(row)
            return FakeResult([dict(row)])

        if self.operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResult(updated)

        if self.operation == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResult([dict(row) for row in removed])

        raise AssertionError(f"unsupported operation {self.operation}")


class FakeSupabase:
    """Just enough of supabase.Client for the services: table() query chains."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str], int | None] = {}
        self.latency = 0.0  # seconds each execute() blocks, like a network round trip

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, operation: str, times: int | None = None) -> None:
        """Make the next `times` calls (all calls when None) of an operation raise."""
        self._failures[(table, operation)] = times

    def raise_if_failing(self, table: str, operation: str) -> None:
        key = (table, operation)
        if key not in self._failures:
            return
        remaining = self._failures[key]
        if remaining is not None:
            if remaining <= 1:
                del self._failures[key]
            else:
                self._failures[key] = remaining - 1
        raise RuntimeError(f"store unavailable: {operation} {table}")

    def rows(self, table: str) -> list[dict]:
        return self.tables[table]

    def writes(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[1] != "select"]


@pytest.fixture
def db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
