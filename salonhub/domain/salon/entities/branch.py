"""Branch entity: a physical location of a salon."""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from salonhub.domain.common.entity import Entity
from salonhub.domain.common.exceptions import ValidationError
from salonhub.domain.common.validation import require_text
from salonhub.domain.common.value_object import ValueObject
from salonhub.domain.common.value_objects import Address, BranchId, Email, PhoneNumber, SalonId
from salonhub.domain.salon.operating_hours import OperatingHours

DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True)
class BranchSettings(ValueObject):
    """Booking window and amenities of a branch."""

    max_advance_booking_days: int = 60
    min_booking_notice_hours: int = 2
    allow_walk_ins: bool = True
    parking_available: bool = False
    wheelchair_accessible: bool = False
    wifi_available: bool = False

    def __post_init__(self) -> None:
        if self.max_advance_booking_days < 1:
            raise ValidationError(
                "Advance booking window must be at least one day",
                field="max_advance_booking_days",
                value=self.max_advance_booking_days,
            )
        if self.min_booking_notice_hours < 0:
            raise ValidationError(
                "Booking notice cannot be negative",
                field="min_booking_notice_hours",
                value=self.min_booking_notice_hours,
            )

    def to_primitive(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_primitive(cls, data: dict[str, Any] | None) -> "BranchSettings":
        return cls(**(data or {}))


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise ValidationError("Unknown timezone", field="timezone", value=name) from err


@dataclass(eq=False)
class Branch(Entity[BranchId]):
    """
    A salon location with its own timezone and opening hours.

    Business Rules:
    - Timezone must be a valid IANA name
    - An inactive branch is never open
    """

    id: BranchId
    salon_id: SalonId
    name: str
    address: Address
    phone: PhoneNumber
    email: Email
    timezone: str = DEFAULT_TIMEZONE
    operating_hours: OperatingHours = field(default_factory=OperatingHours)
    settings: BranchSettings = field(default_factory=BranchSettings)
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = require_text(self.name, "name")
        _zone(self.timezone)

    @property
    def zone(self) -> ZoneInfo:
        return _zone(self.timezone)

    def local_time(self, at: datetime) -> datetime:
        """Convert ``at`` to branch local time; naive values are taken as UTC."""
        if at.tzinfo is None:
            at = at.replace(tzinfo=UTC)
        return at.astimezone(self.zone)

    def is_within_operating_hours(self, at: datetime) -> bool:
        """
        Check whether the branch is open at the given instant.

        Args:
            at: Instant to check, converted to the branch timezone

        Returns:
            True if the branch is active and ``at`` falls inside that day's
            opening hours and outside its breaks
        """
        if not self.is_active:
            return False
        local = self.local_time(at)
        day = self.operating_hours.for_day(local.weekday())
        if day is None:
            return False
        return day.is_open_at(local.strftime("%H:%M"))

    def is_open_between(self, start: datetime, end: datetime) -> bool:
        """Check that the branch stays open for the whole local-day interval."""
        if not self.is_active:
            return False
        local_start = self.local_time(start)
        local_end = self.local_time(end)
        if local_start.date() != local_end.date():
            return False
        day = self.operating_hours.for_day(local_start.weekday())
        if day is None:
            return False
        return day.covers(local_start.strftime("%H:%M"), local_end.strftime("%H:%M"))

    def update_operating_hours(self, hours: OperatingHours) -> None:
        self.operating_hours = hours
        self._touch()

    def update_settings(self, settings: BranchSettings) -> None:
        self.settings = settings
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
        salon_id: SalonId,
        name: str,
        address: Address,
        phone: PhoneNumber,
        email: Email,
        timezone: str = DEFAULT_TIMEZONE,
        operating_hours: OperatingHours | None = None,
        settings: BranchSettings | None = None,
    ) -> "Branch":
        now = datetime.now(UTC)
        return cls(
            id=BranchId.generate(),
            salon_id=salon_id,
            name=name,
            address=address,
            phone=phone,
            email=email,
            timezone=timezone,
            operating_hours=operating_hours or OperatingHours(),
            settings=settings or BranchSettings(),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: BranchId,
        salon_id: SalonId,
        name: str,
        address: Address,
        phone: PhoneNumber,
        email: Email,
        timezone: str,
        operating_hours: OperatingHours,
        settings: BranchSettings,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Branch":
        """Reconstitute a branch from persistence."""
        return cls(
            id=id,
            salon_id=salon_id,
            name=name,
            address=address,
            phone=phone,
            email=email,
            timezone=timezone,
            operating_hours=operating_hours,
            settings=settings,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )
