"""Salon context schemas."""

from salonhub.infrastructure.salon.schemas.salon_schemas import (
    BranchCreateRequest,
    BranchResponse,
    BranchSettingsSchema,
    DepositRequest,
    OperatingHoursSchema,
    OperatingStatusResponse,
    PriceUpdateRequest,
    SalonCreateRequest,
    SalonResponse,
    SalonSettingsUpdateRequest,
    SalonSummaryResponse,
    SalonUpdateRequest,
    ServiceCreateRequest,
    ServiceResponse,
    StaffCreateRequest,
    StaffResponse,
)

__all__ = [
    "BranchCreateRequest",
    "BranchResponse",
    "BranchSettingsSchema",
    "DepositRequest",
    "OperatingHoursSchema",
    "OperatingStatusResponse",
    "PriceUpdateRequest",
    "SalonCreateRequest",
    "SalonResponse",
    "SalonSettingsUpdateRequest",
    "SalonSummaryResponse",
    "SalonUpdateRequest",
    "ServiceCreateRequest",
    "ServiceResponse",
    "StaffCreateRequest",
    "StaffResponse",
]
