"""Service entity: something a salon offers, with a price and duration."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from salonhub.domain.common.entity import Entity
from salonhub.domain.common.exceptions import BusinessRuleViolationError
from salonhub.domain.common.validation import optional_text, require_text
from salonhub.domain.common.value_objects import Money, SalonId, ServiceId

MAX_CATEGORY_LENGTH = 100


def _validate_duration(duration: int) -> None:
    if not isinstance(duration, int) or duration <= 0:
        raise BusinessRuleViolationError("invalid_duration", "Service duration must be positive")


def _validate_deposit(deposit: Money, price: Money) -> None:
    if deposit.currency != price.currency:
        raise BusinessRuleViolationError(
            "currency_mismatch", "Deposit must use the same currency as the price"
        )
    if deposit.is_greater_than(price):
        raise BusinessRuleViolationError(
            "deposit_exceeds_price", "Deposit cannot exceed the service price"
        )


@dataclass(eq=False)
class Service(Entity[ServiceId]):
    """
    A bookable service.

    Business Rules:
    - Duration is a positive number of minutes
    - A deposit amount is required when a deposit is flagged
    - The deposit never exceeds the price and shares its currency
    """

    id: ServiceId
    salon_id: SalonId
    name: str
    category: str
    duration: int
    price: Money
    description: str | None = None
    is_active: bool = True
    requires_deposit: bool = False
    deposit_amount: Money | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = require_text(self.name, "name")
        self.category = require_text(self.category, "category", MAX_CATEGORY_LENGTH)
        self.description = optional_text(self.description, "description")
        _validate_duration(self.duration)
        if self.requires_deposit:
            if self.deposit_amount is None:
                raise BusinessRuleViolationError(
                    "missing_deposit", "Deposit amount required when deposit is required"
                )
            _validate_deposit(self.deposit_amount, self.price)
        else:
            self.deposit_amount = None

    def update_price(self, price: Money) -> None:
        """
        Change the price.

        Raises:
            BusinessRuleViolationError: If the current deposit would exceed
                the new price
        """
        if self.requires_deposit and self.deposit_amount is not None:
            _validate_deposit(self.deposit_amount, price)
        self.price = price
        self._touch()

    def update_duration(self, duration: int) -> None:
        _validate_duration(duration)
        self.duration = duration
        self._touch()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    def set_deposit_required(self, amount: Money) -> None:
        _validate_deposit(amount, self.price)
        self.requires_deposit = True
        self.deposit_amount = amount
        self._touch()

    def remove_deposit_requirement(self) -> None:
        self.requires_deposit = False
        self.deposit_amount = None
        self._touch()

    @classmethod
    def create(
        cls,
        salon_id: SalonId,
        name: str,
        category: str,
        duration: int,
        price: Money,
        description: str | None = None,
        deposit_amount: Money | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "Service":
        now = datetime.now(UTC)
        return cls(
            id=ServiceId.generate(),
            salon_id=salon_id,
            name=name,
            category=category,
            duration=duration,
            price=price,
            description=description,
            requires_deposit=deposit_amount is not None,
            deposit_amount=deposit_amount,
            metadata=dict(metadata or {}),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ServiceId,
        salon_id: SalonId,
        name: str,
        category: str,
        duration: int,
        price: Money,
        description: str | None,
        is_active: bool,
        requires_deposit: bool,
        deposit_amount: Money | None,
        metadata: dict[str, Any],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Service":
        """Reconstitute a service from persistence."""
        return cls(
            id=id,
            salon_id=salon_id,
            name=name,
            category=category,
            duration=duration,
            price=price,
            description=description,
            is_active=is_active,
            requires_deposit=requires_deposit,
            deposit_amount=deposit_amount,
            metadata=metadata,
            created_at=created_at,
            updated_at=updated_at,
        )
