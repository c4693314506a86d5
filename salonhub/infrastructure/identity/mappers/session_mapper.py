"""Mapper for AuthSession ORM ↔ Domain conversion."""

from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.value_objects import SessionId, TenantId, UserId
from salonhub.domain.identity.entities.session import AuthSession
from salonhub.models import AuthSession as AuthSessionORM


class SessionMapper:
    def to_domain(self, orm_model: AuthSessionORM) -> AuthSession:
        return AuthSession.create_with_id(
            id=SessionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            tenant_id=TenantId(orm_model.tenant_id) if orm_model.tenant_id else None,
            expires_at=as_utc(orm_model.expires_at),
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
            ip_address=orm_model.ip_address,
            user_agent=orm_model.user_agent,
            active=orm_model.active,
        )

    def to_orm(
        self, domain_entity: AuthSession, orm_model: AuthSessionORM | None = None
    ) -> AuthSessionORM:
        if orm_model is None:
            orm_model = AuthSessionORM(
                id=domain_entity.id.value,
                user_id=domain_entity.user_id.value,
                tenant_id=domain_entity.tenant_id.value if domain_entity.tenant_id else None,
                ip_address=domain_entity.ip_address,
                user_agent=domain_entity.user_agent,
                created_at=domain_entity.created_at,
            )

        orm_model.expires_at = domain_entity.expires_at
        orm_model.active = domain_entity.active
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
