"""Tests for authentication and session endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from salonhub.domain.identity.entities.user import MAX_FAILED_LOGINS, User
from salonhub.domain.tenancy.entities.tenant import Tenant

TEST_PASSWORD = "correct-horse-battery"


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> dict[str, str]:
    response = client.post(
        "/api/v1/auth/login", data={"username": email, "password": password}
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestRegister:
    """Test suite for POST /auth/register."""

    def test_register_customer(self, client: TestClient, tenant: Tenant) -> None:
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": "New.Client@Example.com",
                "password": "s3cret-pass",
                "name": "New Client",
                "tenant_slug": "glow-studio",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        tokens = response.json()
        assert tokens["token_type"] == "bearer"
        assert tokens["refresh_token"]

        me = client.get("/api/v1/users/me", headers=bearer(tokens["access_token"]))
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["email"] == "new.client@example.com"
        assert me.json()["role"] == "CUSTOMER"
        assert me.json()["tenant_id"] == str(tenant.id)

    def test_register_duplicate_email(
        self, client: TestClient, customer: User, tenant: Tenant
    ) -> None:
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": customer.email,
                "password": "s3cret-pass",
                "name": "Copy Cat",
                "tenant_slug": tenant.slug,
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Email already registered"

    def test_register_unknown_tenant(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": "someone@example.com",
                "password": "s3cret-pass",
                "name": "Someone",
                "tenant_slug": "nowhere",
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_register_short_password(self, client: TestClient, tenant: Tenant) -> None:
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": "someone@example.com",
                "password": "short",
                "name": "Someone",
                "tenant_slug": tenant.slug,
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLogin:
    """Test suite for POST /auth/login."""

    def test_login_success(self, client: TestClient, customer: User) -> None:
        tokens = login(client, customer.email)

        me = client.get("/api/v1/users/me", headers=bearer(tokens["access_token"]))
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["id"] == str(customer.id)
        assert me.json()["last_login_at"] is not None

    def test_login_wrong_password(self, client: TestClient, customer: User) -> None:
        response = client.post(
            "/api/v1/auth/login", data={"username": customer.email, "password": "wrong-pass"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Incorrect email or password"

    def test_login_unknown_email(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/login", data={"username": "ghost@example.com", "password": "whatever"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Incorrect email or password"

    def test_account_locks_after_repeated_failures(
        self, client: TestClient, customer: User
    ) -> None:
        for _ in range(MAX_FAILED_LOGINS - 1):
            response = client.post(
                "/api/v1/auth/login", data={"username": customer.email, "password": "nope-nope"}
            )
            assert response.status_code == status.HTTP_401_UNAUTHORIZED

        response = client.post(
            "/api/v1/auth/login", data={"username": customer.email, "password": "nope-nope"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Account is locked"

        # Even the right password is refused now
        response = client.post(
            "/api/v1/auth/login", data={"username": customer.email, "password": TEST_PASSWORD}
        )
        assert response.json()["detail"] == "Account is locked"


class TestTokens:
    """Test suite for refresh, logout and session management."""

    def test_refresh_with_body(self, client: TestClient, customer: User) -> None:
        tokens = login(client, customer.email)

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )

        assert response.status_code == status.HTTP_200_OK
        refreshed = response.json()
        me = client.get("/api/v1/users/me", headers=bearer(refreshed["access_token"]))
        assert me.status_code == status.HTTP_200_OK

    def test_refresh_rejects_access_token(self, client: TestClient, customer: User) -> None:
        tokens = login(client, customer.email)
        client.cookies.clear()

        response = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_requires_token(self, client: TestClient) -> None:
        response = client.post("/api/v1/auth/refresh", json={})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_revokes_session(self, client: TestClient, customer: User) -> None:
        tokens = login(client, customer.email)
        headers = bearer(tokens["access_token"])

        response = client.post("/api/v1/auth/logout", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        assert client.get("/api/v1/users/me", headers=headers).status_code == 401
        client.cookies.clear()
        refresh = client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert refresh.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_and_terminate_sessions(self, client: TestClient, customer: User) -> None:
        first = login(client, customer.email)
        second = login(client, customer.email)

        response = client.get("/api/v1/auth/sessions", headers=bearer(second["access_token"]))

        assert response.status_code == status.HTTP_200_OK
        sessions = response.json()
        assert len(sessions) == 2
        assert [s["current"] for s in sessions].count(True) == 1
        other = next(s for s in sessions if not s["current"])

        response = client.delete(
            f"/api/v1/auth/sessions/{other['id']}", headers=bearer(second["access_token"])
        )
        assert response.status_code == status.HTTP_200_OK
        assert client.get("/api/v1/users/me", headers=bearer(first["access_token"])).status_code == 401
        assert (
            client.get("/api/v1/users/me", headers=bearer(second["access_token"])).status_code
            == 200
        )

    def test_cannot_terminate_foreign_session(
        self,
        client: TestClient,
        customer: User,
        tenant_admin: User,
        admin_headers: dict[str, str],
    ) -> None:
        login(client, customer.email)
        customer_tokens = login(client, customer.email)
        sessions = client.get(
            "/api/v1/auth/sessions", headers=bearer(customer_tokens["access_token"])
        ).json()

        response = client.delete(
            f"/api/v1/auth/sessions/{sessions[0]['id']}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestPasswordChange:
    """Test suite for POST /auth/password."""

    def test_change_password(
        self, client: TestClient, customer: User, customer_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/auth/password",
            headers=customer_headers,
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-secret"},
        )

        assert response.status_code == status.HTTP_200_OK
        login(client, customer.email, "brand-new-secret")

    def test_wrong_current_password(
        self, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/auth/password",
            headers=customer_headers,
            json={"current_password": "not-my-password", "new_password": "brand-new-secret"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Current password is incorrect"
