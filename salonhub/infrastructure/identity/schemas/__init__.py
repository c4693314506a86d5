"""Identity context schemas."""

from salonhub.infrastructure.identity.schemas.user_schemas import (
    PasswordChangeRequest,
    SessionResponse,
    UserCreateRequest,
    UserDetailsResponse,
    UserRegisterRequest,
)

__all__ = [
    "PasswordChangeRequest",
    "SessionResponse",
    "UserCreateRequest",
    "UserDetailsResponse",
    "UserRegisterRequest",
]
