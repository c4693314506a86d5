"""
Base class for Domain Events.

Domain Events represent something significant that happened in the domain.
They are immutable records of past occurrences that other parts of the
system can react to.

Example:
    @dataclass(frozen=True)
    class BranchAdded(SalonEvent):
        EVENT_TYPE: ClassVar[str] = "salon.branch.added"

        branch_id: BranchId
        branch_name: str
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar
from uuid import UUID, uuid4


def _to_primitive(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_primitive"):
        return value.to_primitive()
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _to_primitive(item) for key, item in value.items()}
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for Domain Events.

    Domain Events are:
    - Immutable (frozen dataclass)
    - Named in past tense (BranchAdded, not AddBranch)
    - Self-contained (carry all data needed to understand what happened)
    - Timestamped (when the event occurred)
    - Correlated (events raised by one request can share a correlation id)

    Subclasses should be decorated with @dataclass(frozen=True),
    set EVENT_TYPE and expose ``aggregate_id`` (a property) and
    ``tenant_id`` (a field).
    """

    EVENT_TYPE: ClassVar[str] = ""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    correlation_id: UUID = field(default_factory=uuid4)
    version: int = 1

    @property
    def event_type(self) -> str:
        """Return the dotted event type name used for routing and storage."""
        return self.EVENT_TYPE or self.__class__.__name__

    def payload(self) -> dict[str, object]:
        """Event-specific attributes, without the envelope fields."""
        envelope = {"event_id", "occurred_at", "correlation_id", "version"}
        return {
            f.name: _to_primitive(getattr(self, f.name))
            for f in fields(self)
            if f.name not in envelope
        }

    def to_dict(self) -> dict[str, object]:
        """Convert event to dictionary for serialization."""
        result: dict[str, object] = {
            f.name: _to_primitive(getattr(self, f.name)) for f in fields(self)
        }
        result["event_type"] = self.event_type
        return result
