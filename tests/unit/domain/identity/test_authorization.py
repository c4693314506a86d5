"""Tests for role based access control."""

import pytest

from salonhub.domain.common.exceptions import AuthorizationError
from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.identity.authorization import (
    Action,
    AuthorizationPolicy,
    Permission,
    Resource,
    permissions_for,
)
from salonhub.domain.identity.entities.user import User, UserRole

TENANT = TenantId.generate()
OTHER_TENANT = TenantId.generate()


def make_user(role: UserRole, tenant_id: TenantId | None = TENANT) -> User:
    return User.create(
        email=f"{role.value.lower()}@glow.test",
        name=role.value.title(),
        role=role,
        tenant_id=None if role == UserRole.SUPER_ADMIN else tenant_id,
    )


@pytest.fixture
def policy() -> AuthorizationPolicy:
    return AuthorizationPolicy()


def test_higher_actions_imply_lower_ones() -> None:
    assert Action.MANAGE.implies(Action.READ)
    assert Action.WRITE.implies(Action.WRITE)
    assert not Action.READ.implies(Action.WRITE)


def test_super_admin_can_do_anything(policy: AuthorizationPolicy) -> None:
    admin = make_user(UserRole.SUPER_ADMIN)
    assert policy.can(admin, Resource.TENANTS, Action.MANAGE)
    assert policy.can(admin, Resource.AUDIT_LOGS, Action.MANAGE, OTHER_TENANT)


@pytest.mark.parametrize(
    ("role", "resource", "action", "allowed"),
    [
        (UserRole.TENANT_ADMIN, Resource.SALONS, Action.MANAGE, True),
        (UserRole.TENANT_ADMIN, Resource.TENANTS, Action.MANAGE, False),
        (UserRole.TENANT_ADMIN, Resource.AUDIT_LOGS, Action.READ, True),
        (UserRole.SALON_MANAGER, Resource.SALONS, Action.MANAGE, False),
        (UserRole.BRANCH_MANAGER, Resource.BRANCHES, Action.WRITE, True),
        (UserRole.BRANCH_MANAGER, Resource.BRANCHES, Action.MANAGE, False),
        (UserRole.STAFF, Resource.APPOINTMENTS, Action.WRITE, True),
        (UserRole.RECEPTIONIST, Resource.AUDIT_LOGS, Action.READ, False),
        (UserRole.CUSTOMER, Resource.SERVICES, Action.READ, True),
        (UserRole.CUSTOMER, Resource.APPOINTMENTS, Action.WRITE, True),
        (UserRole.CUSTOMER, Resource.SERVICES, Action.WRITE, False),
        (UserRole.CUSTOMER, Resource.USERS, Action.READ, False),
    ],
)
def test_role_matrix(
    policy: AuthorizationPolicy,
    role: UserRole,
    resource: Resource,
    action: Action,
    allowed: bool,
) -> None:
    assert policy.can(make_user(role), resource, action, TENANT) is allowed


def test_tenant_isolation(policy: AuthorizationPolicy) -> None:
    admin = make_user(UserRole.TENANT_ADMIN)
    assert policy.can(admin, Resource.SALONS, Action.READ, TENANT)
    assert not policy.can(admin, Resource.SALONS, Action.READ, OTHER_TENANT)


def test_locked_or_inactive_users_can_do_nothing(policy: AuthorizationPolicy) -> None:
    admin = make_user(UserRole.TENANT_ADMIN)
    admin.lock()
    assert not policy.can(admin, Resource.SALONS, Action.READ, TENANT)

    root = make_user(UserRole.SUPER_ADMIN)
    root.deactivate()
    assert not policy.can(root, Resource.TENANTS, Action.READ)


def test_ensure_raises(policy: AuthorizationPolicy) -> None:
    with pytest.raises(AuthorizationError):
        policy.ensure(make_user(UserRole.CUSTOMER), Resource.SALONS, Action.WRITE, TENANT)


def test_roles_can_only_be_assigned_downwards(policy: AuthorizationPolicy) -> None:
    manager = make_user(UserRole.SALON_MANAGER)
    policy.ensure_can_assign_role(manager, UserRole.STAFF)
    with pytest.raises(AuthorizationError):
        policy.ensure_can_assign_role(manager, UserRole.SALON_MANAGER)
    with pytest.raises(AuthorizationError):
        policy.ensure_can_assign_role(manager, UserRole.TENANT_ADMIN)

    policy.ensure_can_assign_role(make_user(UserRole.SUPER_ADMIN), UserRole.SUPER_ADMIN)


def test_permissions_for_lists_explicit_grants() -> None:
    granted = permissions_for(UserRole.CUSTOMER)
    assert Permission(Resource.APPOINTMENTS, Action.WRITE) in granted
    assert str(Permission(Resource.SALONS, Action.READ)) == "salons:read"
    assert len(granted) == 4
