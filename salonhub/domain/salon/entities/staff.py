"""Staff entity: a person working at a branch."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum

from salonhub.domain.common.entity import Entity
from salonhub.domain.common.exceptions import BusinessRuleViolationError
from salonhub.domain.common.validation import optional_text, require_text
from salonhub.domain.common.value_objects import BranchId, Email, Money, PhoneNumber, StaffId

MAX_COMMISSION_RATE = Decimal(100)


class StaffRole(StrEnum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STYLIST = "STYLIST"
    RECEPTIONIST = "RECEPTIONIST"
    ASSISTANT = "ASSISTANT"


def _commission_rate(rate: Decimal | int | float | str) -> Decimal:
    try:
        value = Decimal(str(rate))
    except InvalidOperation:
        value = Decimal(-1)
    if not value.is_finite() or not 0 <= value <= MAX_COMMISSION_RATE:
        raise BusinessRuleViolationError(
            "invalid_commission_rate", "Commission rate must be between 0 and 100"
        )
    return value.quantize(Decimal("0.01"))


@dataclass(eq=False)
class Staff(Entity[StaffId]):
    """
    A staff member assigned to one branch.

    Business Rules:
    - Commission rate is a percentage between 0 and 100
    - Admins and managers may perform any service; others only their specialties
    - An inactive staff member performs nothing
    """

    id: StaffId
    branch_id: BranchId
    name: str
    email: Email
    role: StaffRole = StaffRole.STYLIST
    phone: PhoneNumber | None = None
    specialties: list[str] = field(default_factory=list)
    commission_rate: Decimal = Decimal(0)
    is_active: bool = True
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = require_text(self.name, "name")
        self.bio = optional_text(self.bio, "bio")
        self.commission_rate = _commission_rate(self.commission_rate)
        self.specialties = list(dict.fromkeys(s.strip() for s in self.specialties if s.strip()))

    def can_perform_service(self, category: str) -> bool:
        if not self.is_active:
            return False
        if self.role in (StaffRole.ADMIN, StaffRole.MANAGER):
            return True
        return category in self.specialties

    def calculate_commission(self, amount: Money) -> Money:
        return amount.multiply(self.commission_rate / 100)

    def update_commission_rate(self, rate: Decimal | int | float | str) -> None:
        self.commission_rate = _commission_rate(rate)
        self._touch()

    def add_specialty(self, specialty: str) -> None:
        specialty = specialty.strip()
        if specialty and specialty not in self.specialties:
            self.specialties.append(specialty)
            self._touch()

    def remove_specialty(self, specialty: str) -> None:
        if specialty in self.specialties:
            self.specialties.remove(specialty)
            self._touch()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    @classmethod
    def create(
        cls,
        branch_id: BranchId,
        name: str,
        email: Email,
        role: StaffRole = StaffRole.STYLIST,
        phone: PhoneNumber | None = None,
        specialties: list[str] | None = None,
        commission_rate: Decimal | int | float | str = 0,
        avatar: str | None = None,
        bio: str | None = None,
    ) -> "Staff":
        now = datetime.now(UTC)
        return cls(
            id=StaffId.generate(),
            branch_id=branch_id,
            name=name,
            email=email,
            role=role,
            phone=phone,
            specialties=list(specialties or []),
            commission_rate=_commission_rate(commission_rate),
            avatar=avatar,
            bio=bio,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: StaffId,
        branch_id: BranchId,
        name: str,
        email: Email,
        role: StaffRole,
        phone: PhoneNumber | None,
        specialties: list[str],
        commission_rate: Decimal,
        is_active: bool,
        avatar: str | None,
        bio: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Staff":
        """Reconstitute a staff member from persistence."""
        return cls(
            id=id,
            branch_id=branch_id,
            name=name,
            email=email,
            role=role,
            phone=phone,
            specialties=specialties,
            commission_rate=commission_rate,
            is_active=is_active,
            avatar=avatar,
            bio=bio,
            created_at=created_at,
            updated_at=updated_at,
        )
