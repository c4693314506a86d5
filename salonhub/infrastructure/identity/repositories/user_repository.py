"""Repository for User domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from salonhub.domain.common.value_objects import UserId
from salonhub.domain.identity.entities.user import User
from salonhub.domain.identity.exceptions import EmailAlreadyExistsError
from salonhub.infrastructure.identity.mappers.user_mapper import UserMapper
from salonhub.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        orm_model = self.db.get(UserORM, user_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        """
        Find a user by email.

        Args:
            email: The user's email address, compared case-insensitively

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserORM).where(UserORM.email == email.strip().lower())
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def email_exists(self, email: str) -> bool:
        stmt = select(UserORM.id).where(UserORM.email == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def save(self, user: User) -> User:
        """
        Stage a user entity for the current transaction.

        Raises:
            EmailAlreadyExistsError: If another user already has the email
        """
        orm_model = self.db.get(UserORM, user.id.value)
        if orm_model is None:
            self.db.add(self.mapper.to_orm(user))
            try:
                self.db.flush()
            except IntegrityError as e:
                self.db.rollback()
                # Check if it's a unique constraint violation on email
                if "email" in str(e.orig):
                    raise EmailAlreadyExistsError(user.email) from e
                raise
            logger.info(f"Created user with email: {user.email} (id={user.id})")
            return user

        self.mapper.to_orm(user, orm_model)
        self.db.flush()
        return user
