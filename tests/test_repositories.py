"""
Tests for the Supabase-backed repository layer.
"""

import pytest

from app.repositories import AdminUserRepository, PropertyRepository, ReviewRepository
from app.utils.exceptions import RepositoryError
from tests.factories import PropertyFactory, ReviewFactory
from tests.fakes import FakeSupabaseClient


class TestBaseRepository:
    """Test generic CRUD through the property and review repositories."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, fake_supabase: FakeSupabaseClient):
        repo = ReviewRepository(fake_supabase)

        created = await repo.create(ReviewFactory.create_review_data())
        fetched = await repo.get_by_id(created["id"])

        assert fetched == created
        assert fetched["createdAt"] is not None

    @pytest.mark.asyncio
    async def test_get_by_string_id(self, fake_supabase: FakeSupabaseClient):
        prop = PropertyFactory.create_property(fake_supabase)

        fetched = await PropertyRepository(fake_supabase).get_by_id(str(prop["id"]))

        assert fetched["name"] == prop["name"]

    @pytest.mark.asyncio
    async def test_get_missing(self, fake_supabase: FakeSupabaseClient):
        assert await PropertyRepository(fake_supabase).get_by_id(999) is None
        assert await PropertyRepository(fake_supabase).exists(999) is False

    @pytest.mark.asyncio
    async def test_update_applies_only_given_columns(self, fake_supabase: FakeSupabaseClient):
        prop = PropertyFactory.create_property(fake_supabase)

        updated = await PropertyRepository(fake_supabase).update(prop["id"], {"price": 1})

        assert updated["price"] == 1
        assert updated["owner"] == prop["owner"]

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, fake_supabase: FakeSupabaseClient):
        assert await ReviewRepository(fake_supabase).update(999, {"ratings": 2}) is None

    @pytest.mark.asyncio
    async def test_delete(self, fake_supabase: FakeSupabaseClient):
        review = ReviewFactory.create_review(fake_supabase)
        repo = ReviewRepository(fake_supabase)

        await repo.delete(review["id"])

        assert await repo.list_all() == []

    @pytest.mark.asyncio
    async def test_client_failure_wrapped(self, fake_supabase: FakeSupabaseClient):
        fake_supabase.fail_tables["reviews"] = "socket closed"

        with pytest.raises(RepositoryError) as exc_info:
            await ReviewRepository(fake_supabase).list_all()
        assert exc_info.value.detail == "socket closed"


class TestPropertyRepository:

    @pytest.mark.asyncio
    async def test_get_images(self, fake_supabase: FakeSupabaseClient):
        prop = PropertyFactory.create_property(fake_supabase, images=["u1", "u2"])

        assert await PropertyRepository(fake_supabase).get_images(prop["id"]) == ["u1", "u2"]

    @pytest.mark.asyncio
    async def test_get_images_null_column(self, fake_supabase: FakeSupabaseClient):
        prop = PropertyFactory.create_property(fake_supabase, images=None)

        assert await PropertyRepository(fake_supabase).get_images(prop["id"]) == []

    @pytest.mark.asyncio
    async def test_get_images_missing_property(self, fake_supabase: FakeSupabaseClient):
        assert await PropertyRepository(fake_supabase).get_images(999) is None

    @pytest.mark.asyncio
    async def test_set_images(self, fake_supabase: FakeSupabaseClient):
        prop = PropertyFactory.create_property(fake_supabase)

        images = await PropertyRepository(fake_supabase).set_images(prop["id"], ["u3"])

        assert images == ["u3"]
        assert fake_supabase.tables["properties"][0]["images"] == ["u3"]


class TestAdminUserRepository:

    @pytest.mark.asyncio
    async def test_get_by_auth_user_id(self, fake_supabase: FakeSupabaseClient):
        row = await AdminUserRepository(fake_supabase).get_by_auth_user_id("admin-uid")

        assert row == {"auth_user_id": "admin-uid", "is_admin": True}

    @pytest.mark.asyncio
    async def test_get_by_unknown_auth_user_id(self, fake_supabase: FakeSupabaseClient):
        assert await AdminUserRepository(fake_supabase).get_by_auth_user_id("nobody") is None

    @pytest.mark.asyncio
    async def test_ensure_admin_is_idempotent(self, fake_supabase: FakeSupabaseClient):
        repo = AdminUserRepository(fake_supabase)

        await repo.ensure_admin("new-admin")
        await repo.ensure_admin("new-admin")
        await repo.ensure_admin("flagless-uid")

        rows = fake_supabase.tables["admin_users"]
        assert len([r for r in rows if r["auth_user_id"] == "new-admin"]) == 1
        assert (await repo.get_by_auth_user_id("flagless-uid"))["is_admin"] is True
