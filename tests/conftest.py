"""
Pytest configuration and fixtures for the LinkUp backend tests.
"""

import os
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

# Set test environment before importing app modules
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient

from app.core.dependencies import get_storage
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import clear_auth_cache

VALID_TOKEN = "valid-token"
AUTH_HEADERS = {"Authorization": f"Bearer {VALID_TOKEN}"}
USER_ID = "user-1"


def make_query(data=None):
    """Chainable PostgREST query double; every builder call returns itself."""
    query = MagicMock()
    for method in ("select", "insert", "update", "upsert", "delete", "eq", "in_", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [])
    return query


def result(data):
    return MagicMock(data=data)


@pytest.fixture(autouse=True)
def _reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def mock_supabase():
    """Mock Supabase client: one query double per table, token auth for VALID_TOKEN."""
    client = MagicMock()
    tables = {}

    def table(name):
        if name not in tables:
            tables[name] = make_query()
        return tables[name]

    def get_user(jwt=None):
        if jwt == VALID_TOKEN:
            return SimpleNamespace(user=SimpleNamespace(id=USER_ID, email="ada@example.com"))
        raise Exception("invalid JWT: unable to parse or verify signature")

    client.table.side_effect = table
    client.auth.get_user.side_effect = get_user
    return client


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.upload_file.side_effect = lambda content, key, content_type="image/jpeg": key
    storage.delete_file.return_value = True
    return storage


@pytest.fixture
def client(mock_supabase, storage):
    from app.main import app

    app.dependency_overrides[get_supabase] = lambda: mock_supabase
    app.dependency_overrides[get_service_supabase] = lambda: mock_supabase
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()
