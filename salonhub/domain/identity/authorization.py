"""
Role based access control with tenant isolation.

Each role grants an action level per resource. Actions are ordered
``READ < WRITE < DELETE < MANAGE``; holding a level implies every level
below it. Super admins may do anything anywhere; everyone else may only act
inside their own tenant.
"""

from dataclasses import dataclass
from enum import StrEnum

from salonhub.domain.common.exceptions import AuthorizationError
from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.identity.entities.user import User, UserRole


class Resource(StrEnum):
    TENANTS = "tenants"
    SALONS = "salons"
    BRANCHES = "branches"
    SERVICES = "services"
    STAFF = "staff"
    APPOINTMENTS = "appointments"
    CUSTOMERS = "customers"
    AUDIT_LOGS = "audit_logs"
    USERS = "users"
    SETTINGS = "settings"


class Action(StrEnum):
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    MANAGE = "manage"

    @property
    def rank(self) -> int:
        return _ACTION_RANKS[self]

    def implies(self, other: "Action") -> bool:
        return self.rank >= other.rank


_ACTION_RANKS: dict[Action, int] = {
    Action.READ: 1,
    Action.WRITE: 2,
    Action.DELETE: 3,
    Action.MANAGE: 4,
}


@dataclass(frozen=True)
class Permission:
    resource: Resource
    action: Action

    def __str__(self) -> str:
        return f"{self.resource.value}:{self.action.value}"


_R = Resource
_A = Action

ROLE_PERMISSIONS: dict[UserRole, dict[Resource, Action]] = {
    UserRole.SUPER_ADMIN: {resource: _A.MANAGE for resource in Resource},
    UserRole.TENANT_ADMIN: {
        _R.TENANTS: _A.READ,
        _R.SALONS: _A.MANAGE,
        _R.BRANCHES: _A.MANAGE,
        _R.SERVICES: _A.MANAGE,
        _R.STAFF: _A.MANAGE,
        _R.APPOINTMENTS: _A.MANAGE,
        _R.CUSTOMERS: _A.MANAGE,
        _R.AUDIT_LOGS: _A.READ,
        _R.USERS: _A.MANAGE,
        _R.SETTINGS: _A.MANAGE,
    },
    UserRole.SALON_MANAGER: {
        _R.TENANTS: _A.READ,
        _R.SALONS: _A.WRITE,
        _R.BRANCHES: _A.MANAGE,
        _R.SERVICES: _A.MANAGE,
        _R.STAFF: _A.MANAGE,
        _R.APPOINTMENTS: _A.MANAGE,
        _R.CUSTOMERS: _A.WRITE,
        _R.AUDIT_LOGS: _A.READ,
        _R.USERS: _A.WRITE,
    },
    UserRole.BRANCH_MANAGER: {
        _R.SALONS: _A.READ,
        _R.BRANCHES: _A.WRITE,
        _R.SERVICES: _A.READ,
        _R.STAFF: _A.WRITE,
        _R.APPOINTMENTS: _A.MANAGE,
        _R.CUSTOMERS: _A.WRITE,
    },
    UserRole.STAFF: {
        _R.SALONS: _A.READ,
        _R.BRANCHES: _A.READ,
        _R.SERVICES: _A.READ,
        _R.APPOINTMENTS: _A.WRITE,
        _R.CUSTOMERS: _A.READ,
    },
    UserRole.RECEPTIONIST: {
        _R.SALONS: _A.READ,
        _R.BRANCHES: _A.READ,
        _R.SERVICES: _A.READ,
        _R.APPOINTMENTS: _A.WRITE,
        _R.CUSTOMERS: _A.WRITE,
    },
    UserRole.CUSTOMER: {
        _R.SALONS: _A.READ,
        _R.BRANCHES: _A.READ,
        _R.SERVICES: _A.READ,
        _R.APPOINTMENTS: _A.WRITE,
    },
}


def permissions_for(role: UserRole) -> list[Permission]:
    """Explicitly granted permissions of a role (implied lower actions excluded)."""
    return [
        Permission(resource=resource, action=action)
        for resource, action in ROLE_PERMISSIONS.get(role, {}).items()
    ]


class AuthorizationPolicy:
    """Answers whether a user may perform an action on a resource of a tenant."""

    def can(
        self,
        user: User,
        resource: Resource,
        action: Action,
        tenant_id: TenantId | None = None,
    ) -> bool:
        """
        Check a permission.

        Args:
            user: Acting user
            resource: Resource being accessed
            action: Requested action
            tenant_id: Tenant owning the resource, when it has one

        Returns:
            True if the role grants ``action`` (or a higher action) and the
            resource is inside the user's tenant
        """
        if not user.can_authenticate():
            return False
        if user.is_super_admin:
            return True
        if tenant_id is not None and not user.belongs_to(tenant_id):
            return False
        granted = ROLE_PERMISSIONS.get(user.role, {}).get(resource)
        return granted is not None and granted.implies(action)

    def ensure(
        self,
        user: User,
        resource: Resource,
        action: Action,
        tenant_id: TenantId | None = None,
    ) -> None:
        """
        Raises:
            AuthorizationError: If :meth:`can` denies the request
        """
        if not self.can(user, resource, action, tenant_id):
            raise AuthorizationError(
                f"Role {user.role.value} may not {action.value} {resource.value}"
            )

    def ensure_can_assign_role(self, user: User, role: UserRole) -> None:
        """Users may only hand out roles strictly below their own."""
        if not user.is_super_admin and not user.role.outranks(role):
            raise AuthorizationError(f"Role {user.role.value} may not assign {role.value}")
