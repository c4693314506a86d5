"""Pytest configuration and fixtures."""

import os

# Settings are read on import, so the test environment must be in place first.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-thirty-two-bytes"
os.environ["REFRESH_TOKEN_SECRET_KEY"] = "test-refresh-secret-key-with-thirty-two-bytes"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

import salonhub.models  # noqa: E402, F401
from salonhub.database import Base, build_engine, get_db  # noqa: E402
from salonhub.domain.common.value_objects import TenantId  # noqa: E402
from salonhub.domain.identity.entities.session import AuthSession  # noqa: E402
from salonhub.domain.identity.entities.user import User, UserRole  # noqa: E402
from salonhub.domain.tenancy.entities.tenant import Tenant, TenantPlan  # noqa: E402
from salonhub.infrastructure.identity.repositories.session_repository import (  # noqa: E402
    SessionRepository,
)
from salonhub.infrastructure.identity.repositories.user_repository import (  # noqa: E402
    UserRepository,
)
from salonhub.infrastructure.identity.services.password_service import (  # noqa: E402
    hash_password,
)
from salonhub.infrastructure.identity.services.token_service import (  # noqa: E402
    create_token_pair,
    session_ttl,
)
from salonhub.infrastructure.tenancy.repositories.tenant_repository import (  # noqa: E402
    TenantRepository,
)
from salonhub.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"

# Create test engine (in-memory SQLite shared across threads)
test_engine = build_engine("sqlite://")

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

UserFactory = Callable[..., User]
HeadersFactory = Callable[[User], dict[str, str]]


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def create_tenant(
    db_session: Session, name: str, slug: str, plan: TenantPlan = TenantPlan.BASIC
) -> Tenant:
    tenant = Tenant.create(name=name, slug=slug, plan=plan)
    TenantRepository(db_session).save(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def tenant(db_session: Session) -> Tenant:
    """An active tenant on the professional plan."""
    return create_tenant(db_session, "Glow Studio", "glow-studio", TenantPlan.PROFESSIONAL)


@pytest.fixture
def other_tenant(db_session: Session) -> Tenant:
    return create_tenant(db_session, "Shear Bliss", "shear-bliss")


@pytest.fixture
def user_factory(db_session: Session) -> UserFactory:
    """Return a helper that stores a user with TEST_PASSWORD."""

    def factory(
        email: str,
        role: UserRole = UserRole.CUSTOMER,
        tenant_id: TenantId | None = None,
        name: str = "Test User",
    ) -> User:
        user = User.create(
            email=email,
            name=name,
            role=role,
            tenant_id=tenant_id,
            hashed_password=hash_password(TEST_PASSWORD),
        )
        UserRepository(db_session).save(user)
        db_session.commit()
        return user

    return factory


@pytest.fixture
def auth_headers_for(db_session: Session) -> HeadersFactory:
    """Return a helper that opens a session for a user and builds bearer headers."""

    def factory(user: User) -> dict[str, str]:
        session = AuthSession.create(user_id=user.id, tenant_id=user.tenant_id, ttl=session_ttl())
        SessionRepository(db_session).save(session)
        db_session.commit()
        tokens = create_token_pair(user.id, session.id)
        return {"Authorization": f"Bearer {tokens.access_token}"}

    return factory


@pytest.fixture
def super_admin(user_factory: UserFactory) -> User:
    return user_factory("root@salonhub.test", role=UserRole.SUPER_ADMIN, name="Root")


@pytest.fixture
def tenant_admin(user_factory: UserFactory, tenant: Tenant) -> User:
    return user_factory("owner@glow.test", role=UserRole.TENANT_ADMIN, tenant_id=tenant.id)


@pytest.fixture
def customer(user_factory: UserFactory, tenant: Tenant) -> User:
    return user_factory("client@glow.test", role=UserRole.CUSTOMER, tenant_id=tenant.id)


@pytest.fixture
def super_admin_headers(super_admin: User, auth_headers_for: HeadersFactory) -> dict[str, str]:
    return auth_headers_for(super_admin)


@pytest.fixture
def admin_headers(tenant_admin: User, auth_headers_for: HeadersFactory) -> dict[str, str]:
    return auth_headers_for(tenant_admin)


@pytest.fixture
def customer_headers(customer: User, auth_headers_for: HeadersFactory) -> dict[str, str]:
    return auth_headers_for(customer)


BRANCH_PAYLOAD: dict[str, Any] = {
    "name": "Main Street",
    "address": {
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    },
    "phone": "555-123-4567",
    "email": "main@glow.test",
}


@pytest.fixture
def branch_payload() -> dict[str, Any]:
    """Body for POST /salons/{id}/branches; opens Monday to Saturday, 09:00-17:00 UTC."""
    return {**BRANCH_PAYLOAD, "address": dict(BRANCH_PAYLOAD["address"])}


@pytest.fixture
def glow_salon(
    client: TestClient, admin_headers: dict[str, str], branch_payload: dict[str, Any]
) -> dict[str, str]:
    """
    A salon of the ``tenant`` fixture built through the API.

    Returns the ids of the salon, its branch, a haircut (45 min, $40), a
    colour service (90 min, $120 with a $30 deposit) and a hair stylist.
    """
    salon = client.post("/api/v1/salons/", headers=admin_headers, json={"name": "Glow Downtown"})
    assert salon.status_code == 201, salon.text
    salon_id = salon.json()["id"]

    branch = client.post(
        f"/api/v1/salons/{salon_id}/branches", headers=admin_headers, json=branch_payload
    )
    assert branch.status_code == 201, branch.text
    branch_id = branch.json()["id"]

    haircut = client.post(
        f"/api/v1/salons/{salon_id}/services",
        headers=admin_headers,
        json={
            "name": "Haircut",
            "category": "hair",
            "duration": 45,
            "price": {"amount": "40.00", "currency": "USD"},
        },
    )
    colour = client.post(
        f"/api/v1/salons/{salon_id}/services",
        headers=admin_headers,
        json={
            "name": "Colour",
            "category": "colour",
            "duration": 90,
            "price": {"amount": "120.00", "currency": "USD"},
            "deposit": {"amount": "30.00", "currency": "USD"},
        },
    )
    stylist = client.post(
        f"/api/v1/salons/{salon_id}/branches/{branch_id}/staff",
        headers=admin_headers,
        json={
            "name": "Sam",
            "email": "sam@glow.test",
            "role": "STYLIST",
            "specialties": ["hair"],
            "commission_rate": "40",
        },
    )
    for response in (haircut, colour, stylist):
        assert response.status_code == 201, response.text

    return {
        "salon_id": salon_id,
        "branch_id": branch_id,
        "haircut_id": haircut.json()["id"],
        "colour_id": colour.json()["id"],
        "stylist_id": stylist.json()["id"],
    }
