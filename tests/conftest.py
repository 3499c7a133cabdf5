# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the Supabase client (tables, the
#   session RPC and storage buckets) so no test touches the network
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from lib.supabase_client import SupabaseClient

PUBLIC_URL_BASE = "https://test-project.supabase.co/storage/v1/object/public"


# =============================================================================
# Fake Supabase Client
# =============================================================================

class FakeAPIError(Exception):
    """Mimics postgrest.APIError (exposes .message)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FakeQuery:
    """Chainable query builder over in-memory rows."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.filters: dict[str, Any] = {}
        self.values: dict[str, Any] | None = None
        self.single_row = False

    def select(self, columns: str = "*"):
        return self

    def update(self, values: dict[str, Any]):
        self.values = values
        return self

    def eq(self, column: str, value: Any):
        self.filters[column] = value
        return self

    def single(self):
        self.single_row = True
        return self

    def limit(self, count: int):
        return self

    def execute(self):
        if self.table in self.db.failing_tables:
            raise FakeAPIError(f"relation {self.table} is unavailable")

        rows = [
            row for row in self.db.tables.get(self.table, [])
            if all(row.get(k) == v for k, v in self.filters.items())
        ]

        if self.values is not None:
            if self.db.update_error:
                raise FakeAPIError(self.db.update_error)
            for row in rows:
                row.update(self.values)
            self.db.updates.append((self.table, dict(self.filters), dict(self.values)))
            return SimpleNamespace(data=[dict(row) for row in rows])

        if self.single_row:
            if len(rows) != 1:
                raise FakeAPIError(
                    "JSON object requested, multiple (or no) rows returned (PGRST116)"
                )
            return SimpleNamespace(data=dict(rows[0]))

        return SimpleNamespace(data=[dict(row) for row in rows])


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        if self.db.rpc_error:
            raise FakeAPIError(self.db.rpc_error)
        return SimpleNamespace(data=self.db.sessions.get(self.params["p_session_token"]))


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def upload(self, path: str, file: bytes, file_options: dict[str, str] | None = None):
        if self.db.storage_error:
            raise FakeAPIError(self.db.storage_error)
        self.db.objects[(self.name, path)] = {
            "content": file,
            "options": dict(file_options or {}),
        }
        self.db.uploads.append((self.name, path))
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"{PUBLIC_URL_BASE}/{self.name}/{path}"


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self.db, bucket)

    def list_buckets(self):
        return [SimpleNamespace(name=name) for name in self.db.buckets]


class FakeSupabase:
    """In-memory stand-in for supabase.Client."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {
            "communities": [],
            "businesses": [],
        }
        self.sessions: dict[str, str] = {}
        self.buckets = ["communities", "businesses"]
        self.objects: dict[tuple[str, str], dict[str, Any]] = {}
        self.uploads: list[tuple[str, str]] = []
        self.updates: list[tuple[str, dict, dict]] = []
        self.rpc_calls: list[tuple[str, dict]] = []
        self.failing_tables: set[str] = set()
        self.rpc_error: str | None = None
        self.storage_error: str | None = None
        self.update_error: str | None = None
        self.storage = FakeStorage(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)

    def row(self, table: str, row_id: str) -> dict[str, Any] | None:
        for row in self.tables.get(table, []):
            if row["id"] == row_id:
                return row
        return None


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """
    Install a FakeSupabase as the shared client.

    Seeded with:
    - session "token-u1" -> user "u1", "token-u2" -> user "u2"
    - community C1 (owned by u1), community C2 (owned by u2)
    - business B1 (owned by u1)
    """
    db = FakeSupabase()
    db.sessions = {"token-u1": "u1", "token-u2": "u2"}
    db.tables["communities"] = [
        {"id": "C1", "name": "Founders Circle", "created_by": "u1", "cover_image_url": None},
        {"id": "C2", "name": "Growth Hackers", "created_by": "u2", "cover_image_url": None},
    ]
    db.tables["businesses"] = [
        {"id": "B1", "name": "Acme Roasters", "owner_id": "u1", "logo_url": None},
    ]

    SupabaseClient._instance = db
    yield db
    SupabaseClient.reset()


@pytest.fixture
def client(fake_supabase):
    """TestClient bound to the app with the fake Supabase installed."""
    from app.main import app

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def png_bytes():
    """A 2 MB payload with a PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * (2 * 1024 * 1024 - 8)
