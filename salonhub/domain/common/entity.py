"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Example:
    @dataclass(eq=False)
    class Staff(Entity[StaffId]):
        id: StaffId
        name: str

        def rename(self, name: str) -> None:
            self.name = name
            self._touch()
"""

from abc import ABC
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .exceptions import ValidationError
from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs are value objects that wrap a UUID.
    They provide type safety to prevent mixing up IDs of different entities.

    Example:
        @dataclass(frozen=True)
        class SalonId(EntityId):
            pass

        salon_id = SalonId.generate()
        branch_id = BranchId(salon_id.value)
        # These are different types and never compare equal
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise ValidationError(
                f"{self.__class__.__name__} must wrap a UUID", field="id", value=self.value
            )

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Create a new random identifier."""
        return cls(uuid4())

    @classmethod
    def from_string(cls, raw: str) -> Self:
        """Parse an identifier from its string form."""
        try:
            return cls(UUID(str(raw)))
        except ValueError as err:
            raise ValidationError(
                f"Invalid {cls.__name__}", field="id", value=raw
            ) from err

    def to_primitive(self) -> str:
        """Convert to primitive for serialization."""
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Have lifecycle (created, modified, deleted)

    Subclasses must have an 'id' attribute of type IdType and should be
    declared with ``@dataclass(eq=False)`` so identity equality is kept.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def _touch(self) -> None:
        """Stamp the entity as modified."""
        self.updated_at = datetime.now(UTC)
