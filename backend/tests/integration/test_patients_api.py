"""
Integration tests for the patient endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from core.database import get_db
from main import app


@pytest.fixture
def client(session_factory):
    """Test client whose requests use the test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


class TestPatientEndpoints:
    """Test patient CRUD over HTTP."""

    def test_register(self, client, sample_patient_data):
        response = client.post("/api/patients", json=sample_patient_data)

        assert response.status_code == 201
        assert response.headers["location"] == "/api/patients/1"
        data = response.json()
        assert data["national_id"] == "12345678901"
        assert "password" not in data
        assert "password_hash" not in data

    def test_register_with_formatted_national_id(self, client, sample_patient_data):
        sample_patient_data["national_id"] = "123.456.789-01"

        response = client.post("/api/patients", json=sample_patient_data)

        assert response.status_code == 201
        assert response.json()["national_id"] == "12345678901"

    def test_duplicate_national_id(self, client, sample_patient_data):
        client.post("/api/patients", json=sample_patient_data)

        response = client.post("/api/patients", json=sample_patient_data)

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    @pytest.mark.parametrize("field, value", [
        ("age", 130),
        ("technical_level", -1),
        ("password", "123"),
        ("national_id", "123"),
        ("name", "J"),
    ])
    def test_invalid_fields(self, client, sample_patient_data, field, value):
        sample_patient_data[field] = value

        assert client.post("/api/patients", json=sample_patient_data).status_code == 400

    def test_get_and_find_by_national_id(self, client, sample_patient_data):
        client.post("/api/patients", json=sample_patient_data)

        assert client.get("/api/patients/1").json()["name"] == "Carlos Lima"
        assert client.get("/api/patients/national-id/12345678901").json()["id"] == 1

    def test_find_by_malformed_national_id(self, client):
        assert client.get("/api/patients/national-id/123").status_code == 400

    def test_get_missing(self, client):
        assert client.get("/api/patients/9").status_code == 404

    def test_list_ordered_by_name(self, client, sample_patient_data):
        client.post("/api/patients", json=sample_patient_data)
        client.post("/api/patients", json={**sample_patient_data, "name": "Ana Maria", "national_id": "10987654321"})

        response = client.get("/api/patients")

        assert [p["name"] for p in response.json()["patients"]] == ["Ana Maria", "Carlos Lima"]

    def test_update(self, client, sample_patient_data):
        client.post("/api/patients", json=sample_patient_data)

        response = client.put("/api/patients/1", json={"technical_level": 7})

        assert response.status_code == 200
        assert response.json()["technical_level"] == 7
        assert response.json()["age"] == 67

    def test_delete(self, client, sample_patient_data):
        client.post("/api/patients", json=sample_patient_data)

        assert client.delete("/api/patients/1").status_code == 204
        assert client.get("/api/patients/1").status_code == 404

    @pytest.mark.parametrize("bad_id", [0, 2**31, 99999999999999999999])
    def test_out_of_range_id(self, client, bad_id):
        assert client.get(f"/api/patients/{bad_id}").status_code == 400
        assert client.put(f"/api/patients/{bad_id}", json={"age": 30}).status_code == 400

    def test_update_with_only_null_fields(self, client, sample_patient_data):
        patient_id = client.post("/api/patients", json=sample_patient_data).json()["id"]

        response = client.put(f"/api/patients/{patient_id}", json={"name": None, "age": None})

        assert response.status_code == 400
        assert client.get(f"/api/patients/{patient_id}").json()["age"] == 67
