"""Tests for tenant endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from salonhub.domain.tenancy.entities.tenant import Tenant


class TestCreateTenant:
    """Test suite for POST /tenants/."""

    def test_super_admin_creates_tenant(
        self, client: TestClient, super_admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/tenants/",
            headers=super_admin_headers,
            json={"name": "Curl Up & Dye", "slug": "Curl-Up", "plan": "PROFESSIONAL"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["slug"] == "curl-up"
        assert data["status"] == "ACTIVE"
        assert data["limits"] == {"max_branches": 3, "max_staff": 25, "max_services": 100}

        listed = client.get("/api/v1/tenants/", headers=super_admin_headers)
        assert [t["slug"] for t in listed.json()] == ["curl-up"]

    def test_slug_must_be_unique(
        self, client: TestClient, tenant: Tenant, super_admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/tenants/",
            headers=super_admin_headers,
            json={"name": "Another Glow", "slug": tenant.slug},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_slug(self, client: TestClient, super_admin_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/tenants/",
            headers=super_admin_headers,
            json={"name": "Bad Slug", "slug": "no spaces allowed"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_tenant_admin_cannot_create_tenant(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/tenants/", headers=admin_headers, json={"name": "Mine", "slug": "mine"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestReadTenant:
    def test_admin_reads_own_tenant_only(
        self,
        client: TestClient,
        tenant: Tenant,
        other_tenant: Tenant,
        admin_headers: dict[str, str],
    ) -> None:
        own = client.get(f"/api/v1/tenants/{tenant.id}", headers=admin_headers)
        assert own.status_code == status.HTTP_200_OK
        assert own.json()["name"] == "Glow Studio"

        other = client.get(f"/api/v1/tenants/{other_tenant.id}", headers=admin_headers)
        assert other.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_tenant(self, client: TestClient, super_admin_headers: dict[str, str]) -> None:
        response = client.get(
            "/api/v1/tenants/00000000-0000-0000-0000-000000000000", headers=super_admin_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTenantLifecycle:
    def test_change_plan(
        self, client: TestClient, other_tenant: Tenant, super_admin_headers: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/tenants/{other_tenant.id}/plan",
            headers=super_admin_headers,
            json={"plan": "ENTERPRISE"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["plan"] == "ENTERPRISE"
        assert response.json()["limits"]["max_branches"] is None

    def test_suspend_and_activate(
        self, client: TestClient, tenant: Tenant, super_admin_headers: dict[str, str]
    ) -> None:
        suspended = client.post(f"/api/v1/tenants/{tenant.id}/suspend", headers=super_admin_headers)
        assert suspended.json()["status"] == "SUSPENDED"

        plan = client.put(
            f"/api/v1/tenants/{tenant.id}/plan",
            headers=super_admin_headers,
            json={"plan": "BASIC"},
        )
        assert plan.status_code == status.HTTP_400_BAD_REQUEST

        activated = client.post(f"/api/v1/tenants/{tenant.id}/activate", headers=super_admin_headers)
        assert activated.json()["status"] == "ACTIVE"

    def test_cancellation_is_final(
        self, client: TestClient, tenant: Tenant, super_admin_headers: dict[str, str]
    ) -> None:
        cancelled = client.post(f"/api/v1/tenants/{tenant.id}/cancel", headers=super_admin_headers)
        assert cancelled.json()["status"] == "CANCELLED"

        response = client.post(f"/api/v1/tenants/{tenant.id}/activate", headers=super_admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["rule"] == "tenant_cancelled"

    def test_tenant_admin_cannot_change_plan(
        self, client: TestClient, tenant: Tenant, admin_headers: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/tenants/{tenant.id}/plan", headers=admin_headers, json={"plan": "ENTERPRISE"}
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
