"""Tests for user management endpoints."""

from collections.abc import Callable

from fastapi import status
from fastapi.testclient import TestClient

from salonhub.domain.identity.entities.user import User, UserRole
from salonhub.domain.tenancy.entities.tenant import Tenant


class TestGetMe:
    def test_get_me(
        self, client: TestClient, tenant_admin: User, admin_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/users/me", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["email"] == "owner@glow.test"
        assert data["role"] == "TENANT_ADMIN"
        assert data["locked"] is False


class TestCreateUser:
    """Test suite for POST /users/."""

    def test_admin_creates_staff_in_own_tenant(
        self,
        client: TestClient,
        tenant: Tenant,
        other_tenant: Tenant,
        admin_headers: dict[str, str],
    ) -> None:
        response = client.post(
            "/api/v1/users/",
            headers=admin_headers,
            json={
                "email": "stylist@glow.test",
                "password": "stylist-pass",
                "name": "Sam Stylist",
                "role": "STAFF",
                "tenant_id": str(other_tenant.id),
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["role"] == "STAFF"
        # Tenant admins always create users in their own tenant
        assert data["tenant_id"] == str(tenant.id)

        login = client.post(
            "/api/v1/auth/login",
            data={"username": "stylist@glow.test", "password": "stylist-pass"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_cannot_assign_own_role(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/",
            headers=admin_headers,
            json={
                "email": "coadmin@glow.test",
                "password": "coadmin-pass",
                "name": "Co Admin",
                "role": "TENANT_ADMIN",
            },
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"] == "AuthorizationError"

    def test_customer_cannot_create_users(
        self, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/",
            headers=customer_headers,
            json={
                "email": "friend@glow.test",
                "password": "friend-pass",
                "name": "Friend",
                "role": "CUSTOMER",
            },
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_super_admin_creates_tenant_admin(
        self, client: TestClient, other_tenant: Tenant, super_admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/",
            headers=super_admin_headers,
            json={
                "email": "owner@shear.test",
                "password": "owner-pass",
                "name": "Shear Owner",
                "role": "TENANT_ADMIN",
                "tenant_id": str(other_tenant.id),
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["tenant_id"] == str(other_tenant.id)

    def test_duplicate_email(
        self, client: TestClient, customer: User, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/",
            headers=admin_headers,
            json={
                "email": customer.email,
                "password": "whatever-pass",
                "name": "Duplicate",
                "role": "CUSTOMER",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUnlockUser:
    def test_admin_unlocks_locked_customer(
        self,
        client: TestClient,
        customer: User,
        admin_headers: dict[str, str],
    ) -> None:
        for _ in range(5):
            client.post(
                "/api/v1/auth/login", data={"username": customer.email, "password": "bad-guess"}
            )

        response = client.post(f"/api/v1/users/{customer.id}/unlock", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["locked"] is False
        login = client.post(
            "/api/v1/auth/login",
            data={"username": customer.email, "password": "correct-horse-battery"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_admin_cannot_unlock_other_tenant(
        self,
        client: TestClient,
        other_tenant: Tenant,
        user_factory: Callable[..., User],
        admin_headers: dict[str, str],
    ) -> None:
        outsider = user_factory("client@shear.test", role=UserRole.CUSTOMER, tenant_id=other_tenant.id)

        response = client.post(f"/api/v1/users/{outsider.id}/unlock", headers=admin_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_user(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/users/00000000-0000-0000-0000-000000000000/unlock", headers=admin_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
