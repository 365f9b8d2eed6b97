"""Shared fixtures: an in-memory stand-in for the Supabase client."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable

import pytest


@dataclass
class FakeResponse:
    data: Any
    count: int | None = None


class FakeQuery:
    """Chainable query builder over one in-memory table."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._operation = "select"
        self._payload: Any = None
        self._filters: list[Callable[[dict], bool]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, *columns: str, count: str | None = None) -> "FakeQuery":
        self._operation = "select"
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self._operation = "insert"
        self._payload = payload
        return self

    def update(self, values: dict) -> "FakeQuery":
        self._operation = "update"
        self._payload = values
        return self

    def delete(self) -> "FakeQuery":
        self._operation = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: list) -> "FakeQuery":
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matching(self) -> list[dict]:
        return [row for row in self._db.tables.setdefault(self._table, []) if all(f(row) for f in self._filters)]

    def execute(self) -> FakeResponse:
        if self._table in self._db.failing_tables:
            raise RuntimeError(f"{self._table} is unavailable")
        self._db.queries.append((self._table, self._operation))
        table = self._db.tables.setdefault(self._table, [])

        if self._operation == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for row in payload:
                stored = dict(row)
                stored.setdefault("id", f"{self._table}-{next(self._db.ids)}")
                stored.setdefault("created_at", f"2026-01-01T00:00:{next(self._db.ticks):02d}+00:00")
                table.append(stored)
                inserted.append(dict(stored))
            return FakeResponse(data=inserted)

        matching = self._matching()
        if self._operation == "update":
            for row in matching:
                row.update(self._payload)
            return FakeResponse(data=[dict(row) for row in matching])
        if self._operation == "delete":
            for row in matching:
                table.remove(row)
            return FakeResponse(data=[dict(row) for row in matching])

        result = [dict(row) for row in matching]
        if self._order:
            column, desc = self._order
            result.sort(key=lambda row: row.get(column) or "", reverse=desc)
        if self._limit is not None:
            result = result[: self._limit]
        return FakeResponse(data=result, count=len(matching))


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict) -> None:
        self._db = db
        self._name = name
        self._params = params

    def execute(self) -> FakeResponse:
        self._db.rpc_calls.append((self._name, dict(self._params)))
        handler = self._db.rpc_handlers.get(self._name)
        if handler is None:
            return FakeResponse(data=[])
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return FakeResponse(data=handler(self._params))
        return FakeResponse(data=handler)


class FakeFunctions:
    def __init__(self) -> None:
        self.invocations: list[tuple[str, dict]] = []
        self.error: Exception | None = None

    def invoke(self, name: str, invoke_options: dict | None = None) -> dict:
        self.invocations.append((name, (invoke_options or {}).get("body", {})))
        if self.error is not None:
            raise self.error
        return {"ok": True}


class FakeSupabase:
    """Just enough of ``supabase.Client`` for the persistence layer."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.rpc_handlers: dict[str, Any] = {}
        self.rpc_calls: list[tuple[str, dict]] = []
        self.queries: list[tuple[str, str]] = []
        self.failing_tables: set[str] = set()
        self.functions = FakeFunctions()
        self.ids = itertools.count(1)
        self.ticks = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    from src.salon.db import supabase as supabase_module
    from src.salon.persistence import client as client_module

    fake = FakeSupabase()
    monkeypatch.setattr(client_module, "get_supabase_client", lambda: fake)
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: fake)
    return fake


@pytest.fixture
def no_supabase(monkeypatch: pytest.MonkeyPatch) -> None:
    from src.salon.db import supabase as supabase_module
    from src.salon.persistence import client as client_module

    monkeypatch.setattr(client_module, "get_supabase_client", lambda: None)
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: None)
