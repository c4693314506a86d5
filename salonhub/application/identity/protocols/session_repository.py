from typing import Protocol

from salonhub.domain.common.value_objects import SessionId, UserId
from salonhub.domain.identity.entities.session import AuthSession


class SessionRepositoryProtocol(Protocol):
    def find_by_id(self, session_id: SessionId) -> AuthSession | None: ...

    def find_active_for_user(self, user_id: UserId) -> list[AuthSession]: ...

    def save(self, session: AuthSession) -> AuthSession: ...
