"""
Test configuration and fixtures for the Estate Listing API.
Wires the in-memory Supabase client and mailer into the app through dependency overrides.
"""

import os

# Settings are read at import time; configure the environment before importing the app
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ["ENVIRONMENT"] = "testing"
os.environ["MAIL_USER"] = "mailer@example.com"
os.environ["MAIL_TO"] = "ops@example.com"
os.environ["EXPOSE_ERROR_DETAILS"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.config import settings
from app.services.notifier import ContactNotifier
from app.utils.dependencies import (
    get_auth_client,
    get_contact_notifier,
    get_supabase
)
from tests.factories import (
    ADMIN_TOKEN,
    FLAGLESS_TOKEN,
    USER_TOKEN,
    PropertyFactory,
    ReviewFactory
)
from tests.fakes import FakeMailer, FakeSupabaseClient, FakeUser


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    """
    Fake Supabase project with three identities:
    an admin, a user without an admin row and a user whose row has is_admin false.
    """
    client = FakeSupabaseClient()
    client.auth.add_user(FakeUser("admin-uid", "admin@example.com"), ADMIN_TOKEN, password="admin-pass")
    client.auth.add_user(FakeUser("user-uid", "user@example.com"), USER_TOKEN, password="user-pass")
    client.auth.add_user(FakeUser("flagless-uid", "flagless@example.com"), FLAGLESS_TOKEN)
    client.seed("admin_users", {"auth_user_id": "admin-uid", "is_admin": True})
    client.seed("admin_users", {"auth_user_id": "flagless-uid", "is_admin": False})
    client.calls.clear()
    return client


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def client(fake_supabase: FakeSupabaseClient, mailer: FakeMailer) -> TestClient:
    """Create a test client with the Supabase client and mailer overridden."""
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_client] = lambda: fake_supabase
    app.dependency_overrides[get_contact_notifier] = lambda: ContactNotifier(mailer, settings.operator_inbox)
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def test_property(fake_supabase: FakeSupabaseClient) -> dict:
    return PropertyFactory.create_property(fake_supabase)


@pytest.fixture
def test_review(fake_supabase: FakeSupabaseClient) -> dict:
    return ReviewFactory.create_review(fake_supabase)


@pytest.fixture
def flagless_headers() -> dict:
    return {"Authorization": f"Bearer {FLAGLESS_TOKEN}"}
