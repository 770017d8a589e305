"""
Integration tests for patient login and token verification.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from core.database import get_db
from main import app
from services.jwt_service import jwt_service
from tests.utils import create_jwt_token


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


@pytest.fixture
def registered_patient(client, sample_patient_data):
    response = client.post("/api/patients", json=sample_patient_data)
    assert response.status_code == 201
    return sample_patient_data


class TestLogin:
    """Test the login endpoint."""

    def test_login_returns_patient_token(self, client, registered_patient):
        response = client.post("/api/auth/login", json={
            "national_id": registered_patient["national_id"],
            "password": registered_patient["password"],
        })

        assert response.status_code == 200
        payload = jwt_service.verify_token(response.json()["token"])
        assert payload is not None
        assert payload.sub == "12345678901"
        assert payload.groups == ["PATIENT"]

    def test_login_accepts_formatted_national_id(self, client, registered_patient):
        response = client.post("/api/auth/login", json={
            "national_id": "123.456.789-01",
            "password": registered_patient["password"],
        })

        assert response.status_code == 200

    def test_wrong_password(self, client, registered_patient):
        response = client.post("/api/auth/login", json={
            "national_id": registered_patient["national_id"],
            "password": "errada1",
        })

        assert response.status_code == 401

    def test_unknown_patient(self, client):
        response = client.post("/api/auth/login", json={
            "national_id": "99999999999",
            "password": "senha12",
        })

        assert response.status_code == 401


class TestVerify:
    """Test the token verification endpoint."""

    def test_verify_valid_token(self, client, registered_patient):
        token = client.post("/api/auth/login", json={
            "national_id": registered_patient["national_id"],
            "password": registered_patient["password"],
        }).json()["token"]

        response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["subject"] == "12345678901"
        assert response.json()["groups"] == ["PATIENT"]

    def test_verify_without_token(self, client):
        assert client.get("/api/auth/verify").status_code == 401

    def test_verify_expired_token(self, client):
        token = create_jwt_token("12345678901", ["PATIENT"], expires_in=timedelta(minutes=-5))

        response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
