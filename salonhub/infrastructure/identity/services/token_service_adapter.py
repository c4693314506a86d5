from datetime import timedelta

from salonhub.domain.common.value_objects import SessionId, UserId
from salonhub.infrastructure.identity.services import token_service
from salonhub.infrastructure.identity.services.token_service import TokenClaims, TokenWithRefresh


class TokenServiceAdapter:
    """Adapter wrapping token service functions for DI."""

    @property
    def session_ttl(self) -> timedelta:
        return token_service.session_ttl()

    def create_token_pair(self, user_id: UserId, session_id: SessionId) -> TokenWithRefresh:
        return token_service.create_token_pair(user_id, session_id)

    def verify_refresh_token(self, token: str) -> TokenClaims | None:
        return token_service.verify_refresh_token(token)
