import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from starlette import status

from salonhub.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from salonhub.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from salonhub.application.identity.use_cases.user_management_use_case import (
    UserManagementUseCase,
)
from salonhub.config import get_settings
from salonhub.core import container
from salonhub.domain.common.value_objects import SessionId
from salonhub.domain.identity.exceptions import (
    AccountLockedError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    PasswordVerificationError,
    RegistrationDisabledError,
)
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.common.rate_limit import limiter
from salonhub.infrastructure.common.schemas import SuccessResponse
from salonhub.infrastructure.identity.dependencies import CurrentUser, get_access_claims
from salonhub.infrastructure.identity.schemas import (
    PasswordChangeRequest,
    SessionResponse,
    UserRegisterRequest,
)
from salonhub.infrastructure.identity.services.token_service import (
    TokenClaims,
    TokenWithRefresh,
    session_ttl,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()

REFRESH_COOKIE = "refresh_token"
REFRESH_COOKIE_PATH = f"{settings.API_V1_PREFIX}/auth"


class RefreshTokenRequest(BaseModel):
    """Request body for refresh token (used by non-browser clients)."""

    refresh_token: str | None = None


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Set the refresh token as an httpOnly cookie."""
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
        max_age=int(session_ttl().total_seconds()),
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
    )


def _client_details(request: Request) -> tuple[str | None, str | None]:
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # type: ignore[misc]
async def register(
    request: Request,
    response: Response,
    register_data: UserRegisterRequest,
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> TokenWithRefresh:
    """
    Register a customer account with a salon tenant.

    Returns a token pair so the customer is logged in right away.
    """
    try:
        _, token_pair = use_case.register_customer(
            register_data.email,
            register_data.password,
            register_data.name,
            register_data.tenant_slug,
        )
    except RegistrationDisabledError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User registration is currently disabled",
        ) from None
    except EmailAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        ) from None
    set_refresh_cookie(response, token_pair.refresh_token)
    return token_pair


@router.post("/login")
@limiter.limit("5/minute")  # type: ignore[misc]
async def login(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> TokenWithRefresh:
    # OAuth2PasswordRequestForm uses 'username' field, but we use it for email
    ip_address, user_agent = _client_details(request)
    try:
        _, token_pair = use_case.authenticate_user(
            form_data.username, form_data.password, ip_address, user_agent
        )
    except AccountLockedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is locked",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    set_refresh_cookie(response, token_pair.refresh_token)
    return token_pair


@router.post("/refresh")
@limiter.limit("10/minute")  # type: ignore[misc]
async def refresh(
    request: Request,
    response: Response,
    body: RefreshTokenRequest | None = None,
    refresh_token: Annotated[str | None, Cookie()] = None,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> TokenWithRefresh:
    """
    Refresh the access token using a refresh token.

    The refresh token can be provided either:
    - In an httpOnly cookie (for web clients)
    - In the request body (for mobile clients)
    """
    token = refresh_token
    if not token and body and body.refresh_token:
        token = body.refresh_token

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token required",
        )

    try:
        _, token_pair = use_case.refresh_access_token(token)
    except InvalidCredentialsError:
        _clear_refresh_cookie(response)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from None
    set_refresh_cookie(response, token_pair.refresh_token)
    return token_pair


@router.post("/logout")
async def logout(
    response: Response,
    current_user: CurrentUser,
    claims: Annotated[TokenClaims, Depends(get_access_claims)],
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> SuccessResponse:
    """End the session behind the access token and clear the refresh cookie."""
    use_case.logout(current_user, claims.session_id)
    _clear_refresh_cookie(response)
    return SuccessResponse(success=True, message="Logged out successfully")


@router.get("/sessions")
async def list_sessions(
    current_user: CurrentUser,
    claims: Annotated[TokenClaims, Depends(get_access_claims)],
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> list[SessionResponse]:
    """List the caller's active sessions, marking the one in use."""
    return [
        SessionResponse.from_domain(session, current=session.id == claims.session_id)
        for session in use_case.list_sessions(current_user)
    ]


@router.delete("/sessions/{session_id}")
async def terminate_session(
    session_id: UUID,
    current_user: CurrentUser,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> SuccessResponse:
    use_case.terminate_session(current_user, SessionId(session_id))
    return SuccessResponse(success=True, message="Session terminated")


@router.post("/password")
async def change_password(
    current_user: CurrentUser,
    change_data: PasswordChangeRequest,
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> SuccessResponse:
    try:
        use_case.change_password(
            current_user, change_data.current_password, change_data.new_password
        )
    except PasswordVerificationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        ) from None
    logger.info(f"Password changed for user {current_user.id}")
    return SuccessResponse(success=True, message="Password changed")
