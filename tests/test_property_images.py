"""
Tests for attaching and detaching property images.
"""

from fastapi.testclient import TestClient

from app.config import settings
from app.utils.dependencies import get_settings_dep
from app.main import app
from tests.factories import PROPERTY_IMAGE_PREFIX, PropertyFactory
from tests.fakes import FakeSupabaseClient


def png_file(name: str = "photo.png", size: int = 16):
    return ("files", (name, b"\x89PNG" + b"0" * size, "image/png"))


class TestAttachImages:
    """Test POST /admin/properties/{id}/upload-images."""

    def test_attach_two_images(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            files=[png_file("a.png"), png_file("b.png")],
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Uploaded"
        assert len(data["images"]) == 2
        for url in data["images"]:
            assert url.startswith(f"{PROPERTY_IMAGE_PREFIX}properties/{test_property['id']}/")
            assert url.endswith(".png")

        bucket = fake_supabase.storage.buckets["property-images"]
        assert len(bucket) == 2
        assert fake_supabase.tables["properties"][0]["images"] == data["images"]

    def test_attach_appends_to_existing_images(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        existing = f"{PROPERTY_IMAGE_PREFIX}properties/old.png"
        prop = PropertyFactory.create_property(fake_supabase, images=[existing])

        response = client.post(
            f"/admin/properties/{prop['id']}/upload-images",
            files=[png_file()],
            headers=admin_headers
        )

        assert response.status_code == 200
        images = response.json()["images"]
        assert len(images) == 2
        assert images[0] == existing

    def test_attach_to_property_with_null_images(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        prop = PropertyFactory.create_property(fake_supabase, images=None)

        response = client.post(
            f"/admin/properties/{prop['id']}/upload-images",
            files=[png_file()],
            headers=admin_headers
        )

        assert response.status_code == 200
        assert len(response.json()["images"]) == 1

    def test_attach_missing_property(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.post("/admin/properties/999/upload-images", files=[png_file()], headers=admin_headers)

        assert response.status_code == 404
        assert fake_supabase.storage.upload_calls == 0

    def test_attach_without_files(self, client: TestClient, test_property: dict, admin_headers: dict):
        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            data={"note": "no files"},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_attach_too_many_files(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        """More than ten files is rejected before anything is uploaded."""
        files = [png_file(f"{i}.png") for i in range(11)]

        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            files=files,
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Too many files (maximum: 10)"
        assert fake_supabase.storage.upload_calls == 0
        assert fake_supabase.tables["properties"][0]["images"] == []

    def test_attach_oversized_file(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        """One oversized file rejects the whole batch before any upload."""
        app.dependency_overrides[get_settings_dep] = lambda: settings.model_copy(update={"max_file_size": 1024})

        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            files=[png_file("small.png", 10), png_file("big.png", 2048)],
            headers=admin_headers
        )

        assert response.status_code == 413
        assert "big.png" in response.json()["message"]
        assert fake_supabase.storage.upload_calls == 0

    def test_attach_partial_upload_failure(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        """Objects stored before a failed upload are removed and images stay unchanged."""
        fake_supabase.storage.fail_upload_on = 2

        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            files=[png_file("a.png"), png_file("b.png"), png_file("c.png")],
            headers=admin_headers
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Upload failed"
        assert fake_supabase.storage.buckets["property-images"] == {}
        assert fake_supabase.tables["properties"][0]["images"] == []

    def test_attach_requires_admin(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, user_headers: dict):
        response = client.post(
            f"/admin/properties/{test_property['id']}/upload-images",
            files=[png_file()],
            headers=user_headers
        )

        assert response.status_code == 403
        assert fake_supabase.storage.upload_calls == 0


class TestDetachImage:
    """Test DELETE /admin/properties/{id}/images."""

    def _attach(self, client: TestClient, property_id, headers: dict, count: int = 2) -> list:
        response = client.post(
            f"/admin/properties/{property_id}/upload-images",
            files=[png_file(f"{i}.png") for i in range(count)],
            headers=headers
        )
        assert response.status_code == 200
        return response.json()["images"]

    def test_attach_then_detach(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        images = self._attach(client, test_property["id"], admin_headers)
        removed_key = images[0][len(PROPERTY_IMAGE_PREFIX):]

        response = client.request(
            "DELETE",
            f"/admin/properties/{test_property['id']}/images",
            json={"url": images[0]},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Removed", "images": [images[1]]}
        bucket = fake_supabase.storage.buckets["property-images"]
        assert removed_key not in bucket
        assert len(bucket) == 1
        assert fake_supabase.tables["properties"][0]["images"] == [images[1]]

    def test_detach_url_not_on_property(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        images = self._attach(client, test_property["id"], admin_headers)

        response = client.request(
            "DELETE",
            f"/admin/properties/{test_property['id']}/images",
            json={"url": f"{PROPERTY_IMAGE_PREFIX}properties/elsewhere.png"},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "URL not found on property"
        assert fake_supabase.tables["properties"][0]["images"] == images
        assert fake_supabase.storage.remove_calls == 0

    def test_detach_unrecognized_url(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        foreign = "https://cdn.example.com/photos/house.png"
        prop = PropertyFactory.create_property(fake_supabase, images=[foreign])

        response = client.request(
            "DELETE",
            f"/admin/properties/{prop['id']}/images",
            json={"url": foreign},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Unrecognized storage URL"
        assert fake_supabase.tables["properties"][0]["images"] == [foreign]
        assert fake_supabase.storage.remove_calls == 0

    def test_detach_storage_failure_keeps_images(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        images = self._attach(client, test_property["id"], admin_headers)
        fake_supabase.storage.fail_remove = True

        response = client.request(
            "DELETE",
            f"/admin/properties/{test_property['id']}/images",
            json={"url": images[0]},
            headers=admin_headers
        )

        assert response.status_code == 500
        assert fake_supabase.tables["properties"][0]["images"] == images

    def test_detach_missing_url(self, client: TestClient, test_property: dict, admin_headers: dict):
        response = client.request(
            "DELETE",
            f"/admin/properties/{test_property['id']}/images",
            json={},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_detach_missing_property(self, client: TestClient, admin_headers: dict):
        response = client.request(
            "DELETE",
            "/admin/properties/999/images",
            json={"url": f"{PROPERTY_IMAGE_PREFIX}properties/999/a.png"},
            headers=admin_headers
        )

        assert response.status_code == 404
