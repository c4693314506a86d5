"""
Aggregate roots: Tenant, Salon, Booking and User.

An aggregate root owns a cluster of entities (a salon owns its branches,
services and staff; a booking owns its lines). Outside code holds
references to the root only, and every change that other parts of the
system care about is recorded as a domain event on the root.

Example:
    @dataclass(eq=False)
    class Salon(AggregateRoot[SalonId]):
        id: SalonId
        tenant_id: TenantId
        name: str

        def add_branch(self, branch: Branch, tenant: Tenant) -> None:
            ...
            self._record_event(BranchAdded(...))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Entity that guards the invariants of its aggregate and records events.

    Recorded events stay on the aggregate until the unit of work that
    tracks it commits; they are then written to the audit log and
    published.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Events recorded since the last collection, without clearing them."""
        return list(self._events)

    def collect_events(self) -> list[DomainEvent]:
        """Hand over the recorded events and forget them."""
        events, self._events = self._events, []
        return events
