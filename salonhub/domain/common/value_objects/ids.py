from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class TenantId(EntityId):
    """Strongly-typed tenant identifier."""


@dataclass(frozen=True)
class SalonId(EntityId):
    """Strongly-typed salon identifier."""


@dataclass(frozen=True)
class BranchId(EntityId):
    """Strongly-typed branch identifier."""


@dataclass(frozen=True)
class ServiceId(EntityId):
    """Strongly-typed service identifier."""


@dataclass(frozen=True)
class StaffId(EntityId):
    """Strongly-typed staff member identifier."""


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class SessionId(EntityId):
    """Strongly-typed authentication session identifier."""


@dataclass(frozen=True)
class BookingId(EntityId):
    """Strongly-typed booking identifier."""


@dataclass(frozen=True)
class BookingLineId(EntityId):
    """Strongly-typed booking line identifier."""


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Strongly-typed payment identifier."""
