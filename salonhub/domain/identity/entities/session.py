"""Authentication session entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from salonhub.domain.common.clock import as_utc, utcnow
from salonhub.domain.common.entity import Entity
from salonhub.domain.common.value_objects import SessionId, TenantId, UserId

MAX_USER_AGENT_LENGTH = 500


@dataclass(eq=False)
class AuthSession(Entity[SessionId]):
    """
    A login of one user on one device.

    Access and refresh tokens carry the session id, so terminating the
    session revokes every token issued for it.
    """

    id: SessionId
    user_id: UserId
    tenant_id: TenantId | None
    expires_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    active: bool = True

    def __post_init__(self) -> None:
        self.expires_at = as_utc(self.expires_at)
        if self.user_agent:
            self.user_agent = self.user_agent[:MAX_USER_AGENT_LENGTH]

    def is_valid(self, now: datetime | None = None) -> bool:
        return self.active and (now or utcnow()) < self.expires_at

    def extend(self, ttl: timedelta, now: datetime | None = None) -> None:
        self.expires_at = (now or utcnow()) + ttl
        self._touch()

    def terminate(self) -> None:
        self.active = False
        self._touch()

    @classmethod
    def create(
        cls,
        user_id: UserId,
        tenant_id: TenantId | None,
        ttl: timedelta,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> "AuthSession":
        now = utcnow()
        return cls(
            id=SessionId.generate(),
            user_id=user_id,
            tenant_id=tenant_id,
            expires_at=now + ttl,
            created_at=now,
            updated_at=now,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @classmethod
    def create_with_id(
        cls,
        id: SessionId,
        user_id: UserId,
        tenant_id: TenantId | None,
        expires_at: datetime,
        created_at: datetime,
        updated_at: datetime,
        ip_address: str | None,
        user_agent: str | None,
        active: bool,
    ) -> "AuthSession":
        """Reconstitute a session from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            tenant_id=tenant_id,
            expires_at=expires_at,
            created_at=created_at,
            updated_at=updated_at,
            ip_address=ip_address,
            user_agent=user_agent,
            active=active,
        )
