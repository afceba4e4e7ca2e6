"""
Tests for property listing endpoints.
"""

from fastapi.testclient import TestClient

from tests.factories import PropertyFactory
from tests.fakes import FakeSupabaseClient


class TestPublicPropertyEndpoints:
    """Test public read endpoints."""

    def test_list_properties_empty(self, client: TestClient):
        response = client.get("/properties")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_properties(self, client: TestClient, fake_supabase: FakeSupabaseClient):
        PropertyFactory.create_property(fake_supabase, name="First")
        PropertyFactory.create_property(fake_supabase, name="Second")

        response = client.get("/properties")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["First", "Second"]

    def test_get_property(self, client: TestClient, test_property: dict):
        response = client.get(f"/properties/{test_property['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_property["id"]
        assert data["exactAddress"] == "12 MG Road, Pune"
        assert data["bhkType"] == "2"

    def test_get_missing_property(self, client: TestClient):
        response = client.get("/properties/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Property not found with ID: 999"}

    def test_list_properties_database_failure(self, client: TestClient, fake_supabase: FakeSupabaseClient):
        fake_supabase.fail_tables["properties"] = "connection reset by peer"

        response = client.get("/properties")

        assert response.status_code == 500
        assert response.json() == {"message": "Error fetching properties", "error": "connection reset by peer"}


class TestCreateProperty:
    """Test admin property creation."""

    def test_create_property(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.post("/admin/properties", json=PropertyFactory.create_property_data(), headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Sunrise Residency"
        assert data["exactAddress"] == "12 MG Road, Pune"
        assert data["images"] == []
        assert data["created_by"] == "admin-uid"
        assert len(fake_supabase.tables["properties"]) == 1

    def test_create_property_numeric_bhk_type(self, client: TestClient, admin_headers: dict):
        response = client.post("/admin/properties", json=PropertyFactory.create_property_data(bhkType=3), headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["bhkType"] == "3"

    def test_create_property_missing_required_field(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        """Each required field is enforced and nothing is written on failure."""
        for field in ("name", "owner", "price", "area", "exactAddress", "bhkType", "location"):
            payload = PropertyFactory.create_property_data()
            del payload[field]

            response = client.post("/admin/properties", json=payload, headers=admin_headers)

            assert response.status_code == 400, field
            assert response.json()["message"] == "Missing required fields"

        assert fake_supabase.tables["properties"] == []

    def test_create_property_blank_field(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        payload = PropertyFactory.create_property_data(location="   ")

        response = client.post("/admin/properties", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        assert fake_supabase.tables["properties"] == []

    def test_create_property_non_positive_price(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.post("/admin/properties", json=PropertyFactory.create_property_data(price=0), headers=admin_headers)

        assert response.status_code == 400
        assert "price" in response.json()["error"]
        assert fake_supabase.tables["properties"] == []

    def test_create_property_requires_admin(self, client: TestClient, fake_supabase: FakeSupabaseClient, user_headers: dict):
        response = client.post("/admin/properties", json=PropertyFactory.create_property_data(), headers=user_headers)

        assert response.status_code == 403
        assert fake_supabase.tables["properties"] == []

    def test_create_property_database_failure(self, client: TestClient, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        fake_supabase.fail_tables["properties"] = "duplicate key value"

        response = client.post("/admin/properties", json=PropertyFactory.create_property_data(), headers=admin_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Error creating property"


class TestUpdateProperty:
    """Test admin partial updates."""

    def test_update_property_partial(self, client: TestClient, test_property: dict, admin_headers: dict):
        response = client.put(
            f"/admin/properties/{test_property['id']}",
            json={"price": 9000000, "amenities": "Lift, parking, gym"},
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Property updated successfully"
        assert data["property"]["price"] == 9000000
        assert data["property"]["amenities"] == "Lift, parking, gym"
        # Untouched fields keep their values
        assert data["property"]["name"] == "Sunrise Residency"
        assert data["property"]["exactAddress"] == "12 MG Road, Pune"

    def test_update_property_camel_case_field(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.put(
            f"/admin/properties/{test_property['id']}",
            json={"exactAddress": "14 MG Road, Pune"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert fake_supabase.tables["properties"][0]["exactAddress"] == "14 MG Road, Pune"

    def test_update_missing_property(self, client: TestClient, admin_headers: dict):
        response = client.put("/admin/properties/999", json={"price": 1}, headers=admin_headers)

        assert response.status_code == 404

    def test_update_property_no_fields(self, client: TestClient, test_property: dict, admin_headers: dict):
        response = client.put(f"/admin/properties/{test_property['id']}", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    def test_update_property_clear_required_field(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.put(f"/admin/properties/{test_property['id']}", json={"name": None}, headers=admin_headers)

        assert response.status_code == 400
        assert fake_supabase.tables["properties"][0]["name"] == "Sunrise Residency"

    def test_update_property_blank_required_text(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.put(
            f"/admin/properties/{test_property['id']}",
            json={"name": "   ", "location": " "},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        assert fake_supabase.tables["properties"][0]["name"] == "Sunrise Residency"
        assert fake_supabase.tables["properties"][0]["location"] == test_property["location"]

    def test_update_property_strips_text(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.put(f"/admin/properties/{test_property['id']}", json={"owner": "  S. Rao "}, headers=admin_headers)

        assert response.status_code == 200
        assert fake_supabase.tables["properties"][0]["owner"] == "S. Rao"


class TestDeleteProperty:
    """Test admin deletion."""

    def test_delete_property(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient, admin_headers: dict):
        response = client.delete(f"/admin/properties/{test_property['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Property deleted successfully"}
        assert fake_supabase.tables["properties"] == []

        assert client.get(f"/properties/{test_property['id']}").status_code == 404

    def test_delete_missing_property(self, client: TestClient, admin_headers: dict):
        response = client.delete("/admin/properties/999", headers=admin_headers)

        assert response.status_code == 404

    def test_delete_property_requires_token(self, client: TestClient, test_property: dict, fake_supabase: FakeSupabaseClient):
        response = client.delete(f"/admin/properties/{test_property['id']}")

        assert response.status_code == 403
        assert len(fake_supabase.tables["properties"]) == 1
