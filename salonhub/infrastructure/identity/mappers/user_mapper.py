"""Mapper for User ORM ↔ Domain conversion."""

from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.value_objects import TenantId, UserId
from salonhub.domain.identity.entities.user import User, UserRole
from salonhub.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=orm_model.email,
            name=orm_model.name,
            role=UserRole(orm_model.role),
            tenant_id=TenantId(orm_model.tenant_id) if orm_model.tenant_id else None,
            hashed_password=orm_model.hashed_password,
            is_active=orm_model.is_active,
            locked=orm_model.locked,
            failed_login_attempts=orm_model.failed_login_attempts,
            last_login_at=as_utc(orm_model.last_login_at) if orm_model.last_login_at else None,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model is None:
            orm_model = UserORM(id=domain_entity.id.value, created_at=domain_entity.created_at)

        orm_model.email = domain_entity.email
        orm_model.name = domain_entity.name
        orm_model.role = domain_entity.role.value
        orm_model.tenant_id = domain_entity.tenant_id.value if domain_entity.tenant_id else None
        orm_model.hashed_password = domain_entity.hashed_password
        orm_model.is_active = domain_entity.is_active
        orm_model.locked = domain_entity.locked
        orm_model.failed_login_attempts = domain_entity.failed_login_attempts
        orm_model.last_login_at = domain_entity.last_login_at
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
