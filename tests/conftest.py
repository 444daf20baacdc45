# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the Supabase store that records
#   every call, so tests can assert when the store was (not) touched
# - Provides an app/TestClient wired to that store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.models.roles import ROLE_TABLES, Role
from lib.supabase_client import StorageError, StoreError

TEST_SECRET = "test-jwt-secret-0123456789"


# =============================================================================
# In-memory store
# =============================================================================

class InMemoryStore:
    """
    Store double with the SupabaseStore interface.

    - Identity tables enforce unique phone and user_id like the real schema
    - `calls` records (operation, table_or_bucket) for every call
    - `fail_inserts` / `fail_uploads` make the next calls fail
    """

    UNIQUE_COLUMNS = ("phone", "user_id")

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.objects: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_inserts: str | None = None
        self.fail_uploads: str | None = None
        self._next_id = 1

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("insert", table))
        if self.fail_inserts:
            raise StoreError(self.fail_inserts, table=table)

        rows = self.tables.setdefault(table, [])
        if table in ROLE_TABLES.values():
            for column in self.UNIQUE_COLUMNS:
                if any(existing.get(column) == row.get(column) for existing in rows):
                    raise StoreError(
                        f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        table=table,
                    )

        created = {"id": self._next_id, **row}
        self._next_id += 1
        rows.append(created)
        return dict(created)

    def select_all(self, table: str) -> list[dict[str, Any]]:
        self.calls.append(("select_all", table))
        return [dict(row) for row in self.tables.get(table, [])]

    def select_one(self, table: str, column: str, value: Any) -> dict[str, Any] | None:
        self.calls.append(("select_one", table))
        # PostgREST filter values travel as query-string text
        for row in self.tables.get(table, []):
            if str(row.get(column)) == str(value):
                return dict(row)
        return None

    def upload(self, bucket: str, key: str, content: bytes, content_type: str) -> str:
        self.calls.append(("upload", bucket))
        if self.fail_uploads:
            raise StorageError(self.fail_uploads, bucket=bucket, key=key)
        self.objects[(bucket, key)] = (content, content_type)
        return key


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with a fast bcrypt cost so tests stay quick."""
    return Settings(
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        _env_file=None,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tokens(app):
    """The app's token issuer."""
    return app.state.context.tokens


@pytest.fixture
def auth_header(tokens):
    """Build an Authorization header for a subject/role."""
    def _header(role: Role, subject_id: str = "U-1") -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue(subject_id, role)}"}
    return _header


@pytest.fixture
def signup(client):
    """Create an account through the API and return the response JSON."""
    def _signup(role: str, user_id: str = "U-1", phone: str = "9000000001",
                password: str = "s3cret-pass", full_name: str = "Test User") -> dict:
        response = client.post("/api/auth/signup", json={
            "user_id": user_id,
            "full_name": full_name,
            "phone": phone,
            "password": password,
            "role": role,
        })
        assert response.status_code == 200, response.text
        return response.json()
    return _signup
