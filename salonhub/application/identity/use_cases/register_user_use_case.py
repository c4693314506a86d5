"""Use case for customer self-registration."""

import structlog

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.identity.protocols.password_service import PasswordServiceProtocol
from salonhub.application.identity.protocols.session_repository import SessionRepositoryProtocol
from salonhub.application.identity.protocols.token_service import TokenServiceProtocol
from salonhub.application.identity.protocols.user_repository import UserRepositoryProtocol
from salonhub.application.tenancy.protocols.tenant_repository import TenantRepositoryProtocol
from salonhub.domain.identity.entities.session import AuthSession
from salonhub.domain.identity.entities.user import User, UserRole
from salonhub.domain.identity.exceptions import EmailAlreadyExistsError, RegistrationDisabledError
from salonhub.domain.tenancy.exceptions import TenantNotFoundError
from salonhub.feature_flags import is_user_registrations_enabled
from salonhub.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


class RegisterUserUseCase:
    """Use case for user registration operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        session_repository: SessionRepositoryProtocol,
        tenant_repository: TenantRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
        uow: UnitOfWork,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.session_repository = session_repository
        self.tenant_repository = tenant_repository
        self.password_service = password_service
        self.token_service = token_service
        self.uow = uow

    def register_customer(
        self, email: str, password: str, name: str, tenant_slug: str
    ) -> tuple[User, TokenWithRefresh]:
        """
        Register a customer account with a tenant.

        Args:
            email: User's email address
            password: User's plain text password (will be hashed)
            name: Display name
            tenant_slug: Slug of the tenant the customer books with

        Returns:
            Tuple of (created user, token pair for immediate login)

        Raises:
            RegistrationDisabledError: If registration is disabled via feature flag
            TenantNotFoundError: If no active tenant has the slug
            EmailAlreadyExistsError: If email is already registered
        """
        if not is_user_registrations_enabled():
            raise RegistrationDisabledError

        tenant = self.tenant_repository.find_by_slug(tenant_slug)
        if tenant is None or not tenant.is_active():
            raise TenantNotFoundError(tenant_slug)

        hashed_password = self.password_service.hash_password(password)
        user = User.create(
            email=email,
            name=name,
            role=UserRole.CUSTOMER,
            tenant_id=tenant.id,
            hashed_password=hashed_password,
        )
        if self.user_repository.email_exists(user.email):
            raise EmailAlreadyExistsError(user.email)

        user.record_login()
        session = AuthSession.create(
            user_id=user.id, tenant_id=tenant.id, ttl=self.token_service.session_ttl
        )
        with self.uow:
            self.user_repository.save(user)
            self.session_repository.save(session)
            self.uow.commit()

        token_pair = self.token_service.create_token_pair(user.id, session.id)

        logger.info("user_registered", user_id=str(user.id), tenant_id=str(tenant.id))

        return user, token_pair
