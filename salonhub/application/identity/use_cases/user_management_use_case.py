"""Use case for managing user accounts."""

import structlog

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.identity.protocols.password_service import PasswordServiceProtocol
from salonhub.application.identity.protocols.user_repository import UserRepositoryProtocol
from salonhub.domain.common.value_objects import TenantId, UserId
from salonhub.domain.identity.authorization import Action, AuthorizationPolicy, Resource
from salonhub.domain.identity.entities.user import User, UserRole
from salonhub.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    PasswordVerificationError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


class UserManagementUseCase:
    """Create staff accounts, change passwords and unlock accounts."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        uow: UnitOfWork,
        policy: AuthorizationPolicy,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.password_service = password_service
        self.uow = uow
        self.policy = policy

    def create_user(
        self,
        actor: User,
        email: str,
        password: str,
        name: str,
        role: UserRole,
        tenant_id: TenantId | None = None,
    ) -> User:
        """
        Create an account inside a tenant.

        Args:
            actor: User creating the account
            email: Email address of the new account
            password: Initial plain text password
            name: Display name
            role: Role of the new account, strictly below the actor's own
            tenant_id: Tenant of the account, defaults to the actor's tenant

        Returns:
            The created user

        Raises:
            AuthorizationError: If the actor may not create users or assign the role
            EmailAlreadyExistsError: If email is already registered
        """
        tenant_id = tenant_id if actor.is_super_admin else actor.tenant_id
        self.policy.ensure(actor, Resource.USERS, Action.WRITE, tenant_id)
        self.policy.ensure_can_assign_role(actor, role)

        user = User.create(
            email=email,
            name=name,
            role=role,
            tenant_id=tenant_id if role != UserRole.SUPER_ADMIN else None,
            hashed_password=self.password_service.hash_password(password),
        )
        if self.user_repository.email_exists(user.email):
            raise EmailAlreadyExistsError(user.email)

        with self.uow:
            self.user_repository.save(user)
            self.uow.set_actor(actor.id)
            self.uow.commit()

        logger.info("user_created", user_id=str(user.id), role=role.value, actor_id=str(actor.id))
        return user

    def ensure_super_admin(self, email: str, password: str, name: str = "Administrator") -> User:
        """Create the initial super admin account unless the email is taken."""
        existing = self.user_repository.find_by_email(email)
        if existing is not None:
            return existing

        user = User.create(
            email=email,
            name=name,
            role=UserRole.SUPER_ADMIN,
            hashed_password=self.password_service.hash_password(password),
        )
        with self.uow:
            self.user_repository.save(user)
            self.uow.commit()

        logger.info("super_admin_created", user_id=str(user.id))
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> User:
        """
        Change the caller's password.

        Raises:
            PasswordVerificationError: If current_password is incorrect
        """
        if not user.hashed_password or not self.password_service.verify_password(
            current_password, user.hashed_password
        ):
            raise PasswordVerificationError

        user.update_password(self.password_service.hash_password(new_password))
        with self.uow:
            self.user_repository.save(user)
            self.uow.commit()

        logger.info("user_password_changed", user_id=str(user.id))
        return user

    def unlock_user(self, actor: User, user_id: UserId) -> User:
        user = self.user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id.value)
        self.policy.ensure(actor, Resource.USERS, Action.WRITE, user.tenant_id)
        self.policy.ensure_can_assign_role(actor, user.role)

        user.unlock()
        with self.uow:
            self.user_repository.save(user)
            self.uow.set_actor(actor.id)
            self.uow.commit()

        logger.info("user_unlocked", user_id=str(user.id), actor_id=str(actor.id))
        return user
