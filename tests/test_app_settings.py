"""Tests that an application honours the settings it was built with."""

import pytest
from fastapi.testclient import TestClient

from prooflog.config import get_settings
from prooflog.database import get_db
from prooflog.main import create_app
from prooflog.services.auth import verify_session
from prooflog.services.errors import InvalidSession


@pytest.fixture
def staging_settings(settings):
    return settings.model_copy(
        update={
            "environment": "staging",
            "jwt_secret": "app-specific-secret",
            "session_cookie_name": "sid",
            "upload_url_expiration_seconds": 30,
        }
    )


@pytest.fixture
def staging_client(db, staging_settings):
    """Client for an application built with non-default settings."""
    staging_app = create_app(staging_settings)

    def override_get_db():
        yield db

    staging_app.dependency_overrides[get_db] = override_get_db
    with TestClient(staging_app) as test_client:
        yield test_client
    staging_app.dependency_overrides.clear()


def cookie_value(set_cookie: str) -> tuple[str, str]:
    name, _, value = set_cookie.split(";", 1)[0].partition("=")
    return name, value


def register(client) -> tuple[str, dict]:
    response = client.post(
        "/api/v1/auth/register", json={"email": "stage@example.com", "password": "password123"}
    )
    assert response.status_code == 201
    client.cookies.clear()
    return response.headers["set-cookie"], response.json()["user"]


def test_register_uses_configured_cookie(staging_client):
    set_cookie, _ = register(staging_client)

    name, token = cookie_value(set_cookie)
    assert name == "sid"
    assert token
    assert "secure" in set_cookie.lower()


def test_token_signed_with_app_secret(staging_client, staging_settings):
    set_cookie, user = register(staging_client)
    _, token = cookie_value(set_cookie)

    assert verify_session(token, staging_settings) == user["id"]
    with pytest.raises(InvalidSession):
        verify_session(token, get_settings())


def test_session_read_from_configured_cookie(staging_client):
    set_cookie, user = register(staging_client)
    _, token = cookie_value(set_cookie)

    response = staging_client.get("/api/v1/auth/me", headers={"Cookie": f"sid={token}"})
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]

    response = staging_client.get("/api/v1/auth/me", headers={"Cookie": f"token={token}"})
    assert response.status_code == 401


def test_logout_clears_configured_cookie(staging_client):
    set_cookie, _ = register(staging_client)
    _, token = cookie_value(set_cookie)

    response = staging_client.post("/api/v1/auth/logout", headers={"Cookie": f"sid={token}"})
    assert response.status_code == 200
    cleared = response.headers["set-cookie"].lower()
    assert cleared.startswith("sid=")
    assert "max-age=0" in cleared


def test_upload_grant_uses_configured_window(staging_client):
    set_cookie, _ = register(staging_client)
    _, token = cookie_value(set_cookie)
    headers = {"Cookie": f"sid={token}"}

    entry = staging_client.post(
        "/api/v1/entries",
        headers=headers,
        json={"type": "Project", "title": "Staging", "description": "Notes", "date": "2026-01-01"},
    )
    assert entry.status_code == 201, entry.text

    response = staging_client.post(
        "/api/v1/uploads/presign",
        headers=headers,
        json={
            "entry_id": entry.json()["entry"]["id"],
            "file_name": "certificate.pdf",
            "content_type": "application/pdf",
            "size": 2048,
        },
    )
    assert response.status_code == 200, response.text
    assert response.json()["expires_in"] == 30
