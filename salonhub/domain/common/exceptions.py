"""
Errors raised by the domain layer.

Each carries a human readable ``message`` and a ``details`` dict that the
API returns verbatim, so clients can branch on ``details["rule"]`` or
``details["field"]`` instead of parsing text. The HTTP status for each
class is decided in ``salonhub.exceptions``.
"""


class DomainError(Exception):
    """Root of every error the domain raises on purpose."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} ({self.details})"


class ValidationError(DomainError):
    """A single attribute is malformed: a bad slug, a negative price, an unknown timezone."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    The request is well formed but the current state forbids it.

    ``rule`` is a stable snake_case code such as ``plan_limit_exceeded``
    or ``time_slot_unavailable``.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """An aggregate would end up inconsistent, e.g. a booking without lines."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        super().__init__(
            f"Invariant violation in {aggregate}: {invariant}",
            {"aggregate": aggregate, "invariant": invariant},
        )
        self.aggregate = aggregate
        self.invariant = invariant


class AuthorizationError(DomainError):
    """The acting user's role or tenant does not allow the operation."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(message)
