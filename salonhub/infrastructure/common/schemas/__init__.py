"""Common schemas shared across contexts."""

from salonhub.infrastructure.common.schemas.money import MoneySchema
from salonhub.infrastructure.common.schemas.response_wrappers import (
    PaginatedResponse,
    SuccessResponse,
)

__all__ = [
    "MoneySchema",
    "PaginatedResponse",
    "SuccessResponse",
]
