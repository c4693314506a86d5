"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from salonhub.domain.common.clock import utcnow
from salonhub.domain.common.entity import Entity
from salonhub.domain.common.exceptions import BusinessRuleViolationError
from salonhub.domain.common.validation import require_text
from salonhub.domain.common.value_objects import Email, TenantId, UserId

MAX_FAILED_LOGINS = 5


class UserRole(StrEnum):
    SUPER_ADMIN = "SUPER_ADMIN"
    TENANT_ADMIN = "TENANT_ADMIN"
    SALON_MANAGER = "SALON_MANAGER"
    BRANCH_MANAGER = "BRANCH_MANAGER"
    STAFF = "STAFF"
    RECEPTIONIST = "RECEPTIONIST"
    CUSTOMER = "CUSTOMER"

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    def outranks(self, other: "UserRole") -> bool:
        return self.level > other.level


_ROLE_LEVELS: dict[UserRole, int] = {
    UserRole.SUPER_ADMIN: 100,
    UserRole.TENANT_ADMIN: 90,
    UserRole.SALON_MANAGER: 80,
    UserRole.BRANCH_MANAGER: 70,
    UserRole.STAFF: 50,
    UserRole.RECEPTIONIST: 40,
    UserRole.CUSTOMER: 10,
}


@dataclass(eq=False)
class User(Entity[UserId]):
    """
    User entity: customers and salon staff accounts.

    Business Rules:
    - Email must be unique (enforced at repository level)
    - Every user except a super admin belongs to a tenant
    - The account locks after MAX_FAILED_LOGINS consecutive failed logins
    - Password hashing is an infrastructure concern (not stored as plain text)
    """

    id: UserId
    email: str
    name: str
    role: UserRole = UserRole.CUSTOMER
    tenant_id: TenantId | None = None
    hashed_password: str | None = None
    is_active: bool = True
    locked: bool = False
    failed_login_attempts: int = 0
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.email = Email(self.email).value
        self.name = require_text(self.name, "name")
        if self.tenant_id is None and self.role != UserRole.SUPER_ADMIN:
            raise BusinessRuleViolationError(
                "tenant_required", "Only super admins may exist outside a tenant"
            )

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def has_password(self) -> bool:
        """Check if this user has a password set."""
        return self.hashed_password is not None

    def can_authenticate(self) -> bool:
        return self.is_active and not self.locked

    def belongs_to(self, tenant_id: TenantId | None) -> bool:
        return self.tenant_id is not None and self.tenant_id == tenant_id

    def record_login(self) -> None:
        self.failed_login_attempts = 0
        self.last_login_at = utcnow()
        self._touch()

    def record_failed_login(self) -> None:
        """Count a failed login and lock the account once the limit is reached."""
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= MAX_FAILED_LOGINS:
            self.locked = True
        self._touch()

    def lock(self) -> None:
        self.locked = True
        self._touch()

    def unlock(self) -> None:
        self.locked = False
        self.failed_login_attempts = 0
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    def change_role(self, role: UserRole) -> None:
        if role != UserRole.SUPER_ADMIN and self.tenant_id is None:
            raise BusinessRuleViolationError(
                "tenant_required", "Only super admins may exist outside a tenant"
            )
        self.role = role
        self._touch()

    def update_password(self, new_hashed_password: str) -> None:
        """
        Update the user's password.

        Args:
            new_hashed_password: The new hashed password (hashing done by infrastructure)
        """
        self.hashed_password = new_hashed_password
        self._touch()

    @classmethod
    def create(
        cls,
        email: str,
        name: str,
        role: UserRole = UserRole.CUSTOMER,
        tenant_id: TenantId | None = None,
        hashed_password: str | None = None,
    ) -> "User":
        """
        Create a new user.

        Raises:
            ValidationError: If email or name is invalid
            BusinessRuleViolationError: If a non super admin has no tenant
        """
        now = utcnow()
        return cls(
            id=UserId.generate(),
            email=email,
            name=name,
            role=role,
            tenant_id=tenant_id,
            hashed_password=hashed_password,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        email: str,
        name: str,
        role: UserRole,
        tenant_id: TenantId | None,
        hashed_password: str | None,
        is_active: bool,
        locked: bool,
        failed_login_attempts: int,
        last_login_at: datetime | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            email=email,
            name=name,
            role=role,
            tenant_id=tenant_id,
            hashed_password=hashed_password,
            is_active=is_active,
            locked=locked,
            failed_login_attempts=failed_login_attempts,
            last_login_at=last_login_at,
            created_at=created_at,
            updated_at=updated_at,
        )
