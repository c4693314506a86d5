from datetime import timedelta
from typing import Protocol

from salonhub.domain.common.value_objects import SessionId, UserId
from salonhub.infrastructure.identity.services.token_service import TokenClaims, TokenWithRefresh


class TokenServiceProtocol(Protocol):
    @property
    def session_ttl(self) -> timedelta: ...

    def create_token_pair(self, user_id: UserId, session_id: SessionId) -> TokenWithRefresh: ...

    def verify_refresh_token(self, token: str) -> TokenClaims | None: ...
