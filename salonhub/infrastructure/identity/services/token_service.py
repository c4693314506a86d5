"""Token creation and verification service."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel

from salonhub.config import get_settings
from salonhub.domain.common.value_objects import SessionId, UserId

ALGORITHM = "HS256"


class TokenWithRefresh(BaseModel):
    """DTO for token pair with access and refresh tokens."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: UserId
    session_id: SessionId


def _secret_key() -> str:
    return get_settings().SECRET_KEY


def _refresh_secret_key() -> str:
    settings = get_settings()
    return settings.REFRESH_TOKEN_SECRET_KEY or settings.SECRET_KEY


def session_ttl() -> timedelta:
    """Lifetime of a login session and of its refresh tokens."""
    return timedelta(days=get_settings().SESSION_EXPIRE_DAYS)


def create_access_token(user_id: UserId, session_id: SessionId) -> str:
    """Create an access token for a user session."""
    expire = datetime.now(UTC) + timedelta(minutes=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": str(user_id), "sid": str(session_id), "exp": expire, "type": "access"}
    return jwt.encode(to_encode, _secret_key(), algorithm=ALGORITHM)


def create_refresh_token(user_id: UserId, session_id: SessionId) -> str:
    """Create a refresh token bound to a user session."""
    expire = datetime.now(UTC) + session_ttl()
    to_encode = {"sub": str(user_id), "sid": str(session_id), "exp": expire, "type": "refresh"}
    return jwt.encode(to_encode, _refresh_secret_key(), algorithm=ALGORITHM)


def _claims(payload: dict[str, object]) -> TokenClaims | None:
    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not isinstance(user_id, str) or not isinstance(session_id, str):
        return None
    return TokenClaims(user_id=UserId(UUID(user_id)), session_id=SessionId(UUID(session_id)))


def verify_access_token(token: str) -> TokenClaims | None:
    """Verify an access token and return its claims if valid."""
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
        # Reject refresh tokens - they should only be used at the /refresh endpoint
        if payload.get("type") != "access":
            return None
        return _claims(payload)
    except (InvalidTokenError, ValueError):
        return None


def verify_refresh_token(token: str) -> TokenClaims | None:
    """Verify a refresh token and return its claims if valid."""
    try:
        payload = jwt.decode(token, _refresh_secret_key(), algorithms=[ALGORITHM])
        if payload.get("type") != "refresh":
            return None
        return _claims(payload)
    except (InvalidTokenError, ValueError):
        return None


def create_token_pair(user_id: UserId, session_id: SessionId) -> TokenWithRefresh:
    """Create a token pair (access + refresh) for a user session."""
    return TokenWithRefresh(
        access_token=create_access_token(user_id, session_id),
        refresh_token=create_refresh_token(user_id, session_id),
        token_type="bearer",  # noqa: S106
        expires_in=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60,  # Convert to seconds
    )
