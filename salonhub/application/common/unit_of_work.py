"""
Unit of Work port.

A use case opens a unit of work, saves the aggregates it changed through
their repositories, tracks them, and commits. The commit is the single
point where the changes, their audit trail and the publication of their
domain events happen together.

Example:
    with self.uow:
        salon.add_branch(branch, tenant)
        self.salon_repository.save(salon)
        self.uow.track(salon)
        self.uow.set_actor(actor.id)
        self.uow.commit()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

from salonhub.domain.common import AggregateRoot, DomainEvent
from salonhub.domain.common.value_objects import UserId

EventHandler = Callable[[DomainEvent], None]


class UnitOfWork(ABC):
    """
    Transaction boundary of one use case.

    Leaving the ``with`` block through an exception rolls back; leaving it
    normally does nothing, so ``commit()`` must be called explicitly.
    """

    def __init__(self) -> None:
        self._tracked: list[AggregateRoot[Any]] = []
        self._handlers: list[EventHandler] = []
        self.actor_id: UserId | None = None

    @abstractmethod
    def commit(self) -> None:
        """Persist the changes, then dispatch the collected events."""

    @abstractmethod
    def rollback(self) -> None: ...

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()

    def track(self, aggregate: AggregateRoot[Any]) -> None:
        """Register an aggregate whose events are collected on commit."""
        if all(tracked is not aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def set_actor(self, user_id: UserId | None) -> None:
        """Record who performs the changes, for the audit trail."""
        self.actor_id = user_id

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear the domain events of every tracked aggregate."""
        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()
        return events

    def register_event_handler(self, handler: EventHandler) -> None:
        """Call ``handler`` for each event after a successful commit."""
        self._handlers.append(handler)
