"""Tests for main API endpoints."""

from fastapi.testclient import TestClient


def test_root_endpoint(client: TestClient) -> None:
    """Test root endpoint describes the API."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"name": "SalonHub API", "version": "0.1.0", "docs": "/docs"}


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "ok"}


def test_protected_endpoint_requires_token(client: TestClient) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401


def test_invalid_body_is_reported_as_bad_request(client: TestClient) -> None:
    response = client.post("/api/v1/auth/register", json={"email": "x"})
    assert response.status_code == 400
    data = response.json()
    assert data["detail"] == "Invalid request data"
    assert {"body.password", "body.name", "body.tenant_slug"} <= {
        item["field"] for item in data["details"]
    }
