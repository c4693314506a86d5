"""Salon domain exceptions."""

from salonhub.domain.common.exceptions import EntityNotFoundError


class SalonNotFoundError(EntityNotFoundError):
    """Raised when a salon cannot be found."""

    def __init__(self, salon_id: object) -> None:
        super().__init__("Salon", salon_id)


class BranchNotFoundError(EntityNotFoundError):
    """Raised when a branch is not part of the salon."""

    def __init__(self, branch_id: object) -> None:
        super().__init__("Branch", branch_id)


class ServiceNotFoundError(EntityNotFoundError):
    """Raised when a service is not offered by the salon."""

    def __init__(self, service_id: object) -> None:
        super().__init__("Service", service_id)


class StaffNotFoundError(EntityNotFoundError):
    """Raised when a staff member is not part of the salon."""

    def __init__(self, staff_id: object) -> None:
        super().__init__("Staff", staff_id)
