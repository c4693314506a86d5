"""Pydantic schemas for users, registration and sessions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from salonhub.domain.identity.entities.session import AuthSession
from salonhub.domain.identity.entities.user import User, UserRole


class UserRegisterRequest(BaseModel):
    """Customer self-registration with a tenant."""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)
    tenant_slug: str = Field(..., min_length=1, max_length=63)


class UserCreateRequest(BaseModel):
    """Account created by an administrator."""

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole
    tenant_id: UUID | None = Field(
        default=None, description="Tenant of the account; only super admins may choose it"
    )


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class UserDetailsResponse(BaseModel):
    id: UUID
    email: str
    name: str
    role: UserRole
    tenant_id: UUID | None
    is_active: bool
    locked: bool
    last_login_at: datetime | None

    @classmethod
    def from_domain(cls, user: User) -> "UserDetailsResponse":
        return cls(
            id=user.id.value,
            email=user.email,
            name=user.name,
            role=user.role,
            tenant_id=user.tenant_id.value if user.tenant_id else None,
            is_active=user.is_active,
            locked=user.locked,
            last_login_at=user.last_login_at,
        )


class SessionResponse(BaseModel):
    id: UUID
    created_at: datetime | None
    expires_at: datetime
    ip_address: str | None
    user_agent: str | None
    current: bool = False

    @classmethod
    def from_domain(cls, session: AuthSession, current: bool = False) -> "SessionResponse":
        return cls(
            id=session.id.value,
            created_at=session.created_at,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            current=current,
        )
