"""HTTP-level exceptions and the mapping of domain errors to status codes."""

from fastapi import HTTPException
from starlette import status

from salonhub.domain.common.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)
from salonhub.domain.identity.exceptions import (
    AccountLockedError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    PasswordVerificationError,
    RegistrationDisabledError,
)
from salonhub.domain.tenancy.exceptions import TenantSlugTakenError

CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

# Checked in order; the first matching class wins.
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (AccountLockedError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (RegistrationDisabledError, status.HTTP_403_FORBIDDEN),
    (EmailAlreadyExistsError, status.HTTP_400_BAD_REQUEST),
    (TenantSlugTakenError, status.HTTP_400_BAD_REQUEST),
    (PasswordVerificationError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_400_BAD_REQUEST),
    (InvariantViolationError, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(error: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
