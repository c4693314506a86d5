"""Tests for salon, branch, service and staff endpoints."""

from decimal import Decimal
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from salonhub.domain.identity.entities.user import UserRole
from salonhub.domain.tenancy.entities.tenant import Tenant


class TestCreateSalon:
    """Test suite for POST /salons/."""

    def test_admin_creates_salon_in_own_tenant(
        self, client: TestClient, tenant: Tenant, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/salons/",
            headers=admin_headers,
            json={"name": "Glow Downtown", "description": "Cuts and colour"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["tenant_id"] == str(tenant.id)
        assert data["branches"] == []
        assert data["settings"]["allow_online_booking"] is True
        assert data["settings"]["booking_confirmation_required"] is False

        listed = client.get("/api/v1/salons/", headers=admin_headers)
        assert [s["name"] for s in listed.json()] == ["Glow Downtown"]

    def test_admin_cannot_create_salon_for_other_tenant(
        self, client: TestClient, other_tenant: Tenant, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/salons/",
            headers=admin_headers,
            json={"name": "Hostile Takeover", "tenant_id": str(other_tenant.id)},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_super_admin_must_name_tenant(
        self, client: TestClient, super_admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/salons/", headers=super_admin_headers, json={"name": "Nowhere"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_customer_cannot_create_salon(
        self, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/v1/salons/", headers=customer_headers, json={"name": "Mine"})
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestBranches:
    def test_add_branch_with_default_hours(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        branch_payload: dict[str, Any],
    ) -> None:
        salon = client.post("/api/v1/salons/", headers=admin_headers, json={"name": "Glow"}).json()

        response = client.post(
            f"/api/v1/salons/{salon['id']}/branches", headers=admin_headers, json=branch_payload
        )

        assert response.status_code == status.HTTP_201_CREATED
        branch = response.json()
        assert branch["phone"] == "5551234567"
        assert branch["timezone"] == "UTC"
        assert branch["operating_hours"]["monday"]["open"] == "09:00"
        assert branch["operating_hours"]["saturday"]["close"] == "17:00"
        assert branch["operating_hours"]["sunday"] is None
        assert branch["settings"]["min_booking_notice_hours"] == 2

    def test_plan_limit_on_branches(
        self,
        client: TestClient,
        other_tenant: Tenant,
        user_factory: Any,
        auth_headers_for: Any,
        branch_payload: dict[str, Any],
    ) -> None:
        """The basic plan allows a single branch."""
        owner = user_factory(
            "owner@shear.test", role=UserRole.TENANT_ADMIN, tenant_id=other_tenant.id
        )
        headers = auth_headers_for(owner)
        salon = client.post("/api/v1/salons/", headers=headers, json={"name": "Shear"}).json()
        url = f"/api/v1/salons/{salon['id']}/branches"

        assert client.post(url, headers=headers, json=branch_payload).status_code == 201
        response = client.post(url, headers=headers, json={**branch_payload, "name": "Second"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["rule"] == "plan_limit_exceeded"

    def test_plan_limit_spans_salons_of_tenant(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        branch_payload: dict[str, Any],
        glow_salon: dict[str, str],
    ) -> None:
        """The branch of Glow Downtown uses up the basic plan for the whole tenant."""
        second = client.post(
            "/api/v1/salons/", headers=admin_headers, json={"name": "Glow Uptown"}
        ).json()

        response = client.post(
            f"/api/v1/salons/{second['id']}/branches", headers=admin_headers, json=branch_payload
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["rule"] == "plan_limit_exceeded"

    def test_update_branch_settings(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        url = (
            f"/api/v1/salons/{glow_salon['salon_id']}"
            f"/branches/{glow_salon['branch_id']}/settings"
        )

        response = client.put(
            url,
            headers=admin_headers,
            json={"min_booking_notice_hours": 24, "wifi_available": True},
        )

        assert response.status_code == status.HTTP_200_OK
        settings = response.json()["settings"]
        assert settings["min_booking_notice_hours"] == 24
        assert settings["wifi_available"] is True
        assert settings["max_advance_booking_days"] == 60

    def test_invalid_timezone(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        branch_payload: dict[str, Any],
    ) -> None:
        salon = client.post("/api/v1/salons/", headers=admin_headers, json={"name": "Glow"}).json()

        response = client.post(
            f"/api/v1/salons/{salon['id']}/branches",
            headers=admin_headers,
            json={**branch_payload, "timezone": "Mars/Olympus_Mons"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["field"] == "timezone"

    def test_operating_status(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        url = f"/api/v1/salons/{glow_salon['salon_id']}/operating-status"

        monday = client.get(
            url,
            headers=admin_headers,
            params={"at": "2030-01-07T10:00:00+00:00", "branch_id": glow_salon["branch_id"]},
        )
        sunday = client.get(url, headers=admin_headers, params={"at": "2030-01-06T10:00:00Z"})

        assert monday.status_code == status.HTTP_200_OK
        assert monday.json()["is_open"] is True
        assert sunday.json()["is_open"] is False

    def test_update_operating_hours(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/salons/{glow_salon['salon_id']}/branches/{glow_salon['branch_id']}"
            "/operating-hours",
            headers=admin_headers,
            json={"sunday": {"open": "10:00", "close": "14:00"}},
        )

        assert response.status_code == status.HTTP_200_OK
        hours = response.json()["operating_hours"]
        assert hours["sunday"]["open"] == "10:00"
        assert hours["monday"] is None


class TestServices:
    def test_service_menu(
        self, client: TestClient, customer_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.get(
            f"/api/v1/salons/{glow_salon['salon_id']}/services", headers=customer_headers
        )

        assert response.status_code == status.HTTP_200_OK
        services = {s["name"]: s for s in response.json()}
        assert set(services) == {"Haircut", "Colour"}
        assert Decimal(services["Haircut"]["price"]["amount"]) == Decimal(40)
        assert services["Colour"]["requires_deposit"] is True

    def test_customer_cannot_change_prices(
        self, client: TestClient, customer_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/salons/{glow_salon['salon_id']}/services/{glow_salon['haircut_id']}/price",
            headers=customer_headers,
            json={"price": {"amount": "1.00", "currency": "USD"}},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_price_and_deposit(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        base = f"/api/v1/salons/{glow_salon['salon_id']}/services/{glow_salon['haircut_id']}"

        price = client.put(
            f"{base}/price",
            headers=admin_headers,
            json={"price": {"amount": "55.00", "currency": "USD"}},
        )
        assert price.status_code == status.HTTP_200_OK
        assert Decimal(price.json()["price"]["amount"]) == Decimal(55)

        deposit = client.put(
            f"{base}/deposit",
            headers=admin_headers,
            json={"amount": {"amount": "10.00", "currency": "USD"}},
        )
        assert deposit.json()["requires_deposit"] is True

        too_high = client.put(
            f"{base}/deposit",
            headers=admin_headers,
            json={"amount": {"amount": "80.00", "currency": "USD"}},
        )
        assert too_high.status_code == status.HTTP_400_BAD_REQUEST

        removed = client.delete(f"{base}/deposit", headers=admin_headers)
        assert removed.json()["requires_deposit"] is False
        assert removed.json()["deposit"] is None

    def test_price_must_use_salon_currency(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/salons/{glow_salon['salon_id']}/services/{glow_salon['haircut_id']}/price",
            headers=admin_headers,
            json={"price": {"amount": "45.00", "currency": "EUR"}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["rule"] == "currency_mismatch"

    def test_deactivate_hides_service(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        salon_url = f"/api/v1/salons/{glow_salon['salon_id']}"
        response = client.post(
            f"{salon_url}/services/{glow_salon['colour_id']}/deactivate", headers=admin_headers
        )
        assert response.json()["is_active"] is False

        menu = client.get(f"{salon_url}/services", headers=admin_headers).json()
        assert [s["name"] for s in menu] == ["Haircut"]

        client.post(f"{salon_url}/services/{glow_salon['colour_id']}/activate", headers=admin_headers)
        assert len(client.get(f"{salon_url}/services", headers=admin_headers).json()) == 2

    def test_remove_service(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        salon_url = f"/api/v1/salons/{glow_salon['salon_id']}"

        response = client.delete(
            f"{salon_url}/services/{glow_salon['haircut_id']}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        salon = client.get(salon_url, headers=admin_headers).json()
        assert [s["name"] for s in salon["services"]] == ["Colour"]


class TestStaff:
    def test_staff_is_listed_on_salon(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        salon = client.get(f"/api/v1/salons/{glow_salon['salon_id']}", headers=admin_headers).json()

        [stylist] = salon["staff"]
        assert stylist["name"] == "Sam"
        assert stylist["branch_id"] == glow_salon["branch_id"]
        assert stylist["specialties"] == ["hair"]
        assert Decimal(stylist["commission_rate"]) == Decimal(40)

    def test_staff_needs_known_branch(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.post(
            f"/api/v1/salons/{glow_salon['salon_id']}/branches"
            "/00000000-0000-0000-0000-000000000000/staff",
            headers=admin_headers,
            json={"name": "Ghost", "email": "ghost@glow.test"},
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSettings:
    def test_patch_settings(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/salons/{glow_salon['salon_id']}/settings",
            headers=admin_headers,
            json={"booking_confirmation_required": True},
        )

        assert response.status_code == status.HTTP_200_OK
        settings = response.json()["settings"]
        assert settings["booking_confirmation_required"] is True
        assert settings["allow_online_booking"] is True

    def test_currency_change_rejected_while_services_priced(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/salons/{glow_salon['salon_id']}/settings",
            headers=admin_headers,
            json={"default_currency": "EUR"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"]["rule"] == "currency_mismatch"
        salon = client.get(f"/api/v1/salons/{glow_salon['salon_id']}", headers=admin_headers)
        assert salon.json()["settings"]["default_currency"] == "USD"


class TestSalonDetails:
    """Test suite for PATCH /salons/{salon_id}."""

    def test_rename_salon(
        self, client: TestClient, admin_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/salons/{glow_salon['salon_id']}",
            headers=admin_headers,
            json={"name": "Glow Flagship", "logo": "https://cdn.glow.test/logo.png"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Glow Flagship"
        assert data["logo"] == "https://cdn.glow.test/logo.png"
        assert len(data["branches"]) == 1

    def test_customer_cannot_rename_salon(
        self, client: TestClient, customer_headers: dict[str, str], glow_salon: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/salons/{glow_salon['salon_id']}",
            headers=customer_headers,
            json={"name": "Mine Now"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
