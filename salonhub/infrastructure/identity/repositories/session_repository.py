"""Repository for login sessions."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from salonhub.domain.common.value_objects import SessionId, UserId
from salonhub.domain.identity.entities.session import AuthSession
from salonhub.infrastructure.identity.mappers.session_mapper import SessionMapper
from salonhub.models import AuthSession as AuthSessionORM


class SessionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SessionMapper()

    def find_by_id(self, session_id: SessionId) -> AuthSession | None:
        orm_model = self.db.get(AuthSessionORM, session_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_active_for_user(self, user_id: UserId) -> list[AuthSession]:
        stmt = (
            select(AuthSessionORM)
            .where(AuthSessionORM.user_id == user_id.value, AuthSessionORM.active.is_(True))
            .order_by(AuthSessionORM.created_at.desc())
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def save(self, session: AuthSession) -> AuthSession:
        orm_model = self.db.get(AuthSessionORM, session.id.value)
        if orm_model is None:
            self.db.add(self.mapper.to_orm(session))
        else:
            self.mapper.to_orm(session, orm_model)
        self.db.flush()
        return session
