"""Use case for authentication and session operations."""

import structlog

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.identity.protocols.password_service import PasswordServiceProtocol
from salonhub.application.identity.protocols.session_repository import SessionRepositoryProtocol
from salonhub.application.identity.protocols.token_service import TokenServiceProtocol
from salonhub.application.identity.protocols.user_repository import UserRepositoryProtocol
from salonhub.domain.common.value_objects import SessionId, UserId
from salonhub.domain.identity.entities.session import AuthSession
from salonhub.domain.identity.entities.user import User
from salonhub.domain.identity.exceptions import (
    AccountLockedError,
    InvalidCredentialsError,
    SessionNotFoundError,
    UserNotFoundError,
)
from salonhub.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


class AuthenticationUseCase:
    """Use case for authentication operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        session_repository: SessionRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
        uow: UnitOfWork,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.session_repository = session_repository
        self.password_service = password_service
        self.token_service = token_service
        self.uow = uow

    def authenticate_user(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[User, TokenWithRefresh]:
        """
        Authenticate a user with email and password and open a session.

        Args:
            email: User's email address
            password: User's plain text password
            ip_address: Client address recorded on the session
            user_agent: Client user agent recorded on the session

        Returns:
            Tuple of (authenticated user, token pair)

        Raises:
            InvalidCredentialsError: If credentials are invalid
            AccountLockedError: If the account is locked or deactivated
        """
        user = self.user_repository.find_by_email(email)

        # Use constant-time comparison to prevent timing attacks
        if not user:
            self.password_service.verify_password(password, self.password_service.get_dummy_hash())
            raise InvalidCredentialsError

        if not user.can_authenticate():
            raise AccountLockedError

        if not user.hashed_password or not self.password_service.verify_password(
            password, user.hashed_password
        ):
            user.record_failed_login()
            with self.uow:
                self.user_repository.save(user)
                self.uow.commit()
            logger.warning(
                "login_failed", user_id=str(user.id), attempts=user.failed_login_attempts
            )
            if user.locked:
                raise AccountLockedError
            raise InvalidCredentialsError

        session = AuthSession.create(
            user_id=user.id,
            tenant_id=user.tenant_id,
            ttl=self.token_service.session_ttl,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        user.record_login()
        with self.uow:
            self.user_repository.save(user)
            self.session_repository.save(session)
            self.uow.commit()

        token_pair = self.token_service.create_token_pair(user.id, session.id)

        logger.info("user_authenticated", user_id=str(user.id), session_id=str(session.id))

        return user, token_pair

    def refresh_access_token(self, refresh_token: str) -> tuple[User, TokenWithRefresh]:
        """
        Refresh access token using a refresh token.

        The session the token belongs to must still be valid; it is extended
        by the session lifetime.

        Raises:
            InvalidCredentialsError: If the token, session or user is invalid
        """
        claims = self.token_service.verify_refresh_token(refresh_token)
        if claims is None:
            raise InvalidCredentialsError

        session = self.session_repository.find_by_id(claims.session_id)
        if session is None or session.user_id != claims.user_id or not session.is_valid():
            raise InvalidCredentialsError

        user = self.user_repository.find_by_id(claims.user_id)
        if not user or not user.can_authenticate():
            raise InvalidCredentialsError

        session.extend(self.token_service.session_ttl)
        with self.uow:
            self.session_repository.save(session)
            self.uow.commit()

        token_pair = self.token_service.create_token_pair(user.id, session.id)

        logger.info("access_token_refreshed", user_id=str(user.id), session_id=str(session.id))

        return user, token_pair

    def logout(self, user: User, session_id: SessionId) -> None:
        """Terminate the session the caller's tokens belong to."""
        self.terminate_session(user, session_id)

    def list_sessions(self, user: User) -> list[AuthSession]:
        sessions = self.session_repository.find_active_for_user(user.id)
        return sorted(
            (session for session in sessions if session.is_valid()),
            key=lambda session: session.created_at or session.expires_at,
            reverse=True,
        )

    def terminate_session(self, user: User, session_id: SessionId) -> None:
        """
        Terminate one of the user's sessions.

        Raises:
            SessionNotFoundError: If the session does not belong to the user
        """
        session = self.session_repository.find_by_id(session_id)
        if session is None or session.user_id != user.id:
            raise SessionNotFoundError(session_id.value)
        if not session.active:
            return

        session.terminate()
        with self.uow:
            self.session_repository.save(session)
            self.uow.commit()

        logger.info("session_terminated", user_id=str(user.id), session_id=str(session_id))

    def get_authenticated_user(self, user_id: UserId, session_id: SessionId) -> User:
        """
        Resolve the user behind an access token.

        Raises:
            InvalidCredentialsError: If the session was terminated or expired,
                or the user can no longer log in
        """
        session = self.session_repository.find_by_id(session_id)
        if session is None or session.user_id != user_id or not session.is_valid():
            raise InvalidCredentialsError

        user = self.user_repository.find_by_id(user_id)
        if not user or not user.can_authenticate():
            raise InvalidCredentialsError
        return user

    def get_user_by_id(self, user_id: UserId) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If user is not found
        """
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id.value)
        return user
