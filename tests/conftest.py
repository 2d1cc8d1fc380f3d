# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
from typing import Generator

from main import create_app
from core.session_store import get_session_store
from dependencies.auth import get_current_owner
from models.auth import OwnerIdentity, TenantSession
from tests.fakes import FakeSupabase


CLIENT_FACTORIES = (
    "core.data_access.get_supabase_client",
    "core.supabase_client.get_supabase_client",
    "services.auth_service.get_supabase_client",
    "dependencies.auth.get_supabase_client",
)


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_supabase():
    """Route every Supabase client lookup to one in-memory fake."""
    fake = FakeSupabase()
    patchers = [patch(target, return_value=fake) for target in CLIENT_FACTORIES]
    for p in patchers:
        p.start()
    yield fake
    for p in patchers:
        p.stop()


@pytest.fixture
def mock_owner():
    return OwnerIdentity(
        id="owner-id",
        email="owner@pg.com",
        access_token="owner-token",
    )


@pytest.fixture
def owner_client(app, client, mock_owner):
    """Test client with the owner session check bypassed."""
    app.dependency_overrides[get_current_owner] = lambda: mock_owner
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def tenant_headers():
    """Build bearer headers for a tenant session opened for a users row."""
    def make(user: dict) -> dict:
        token = get_session_store().create(TenantSession.store_values(user))
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture(autouse=True)
def reset_sessions():
    """Reset the session store before each test."""
    get_session_store().clear()
    yield
    get_session_store().clear()
