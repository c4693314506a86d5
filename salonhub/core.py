from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from salonhub.application.audit.use_cases.audit_log_use_case import AuditLogUseCase
from salonhub.application.booking.use_cases.booking_use_case import BookingUseCase
from salonhub.application.identity.use_cases.authentication_use_case import AuthenticationUseCase
from salonhub.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from salonhub.application.identity.use_cases.user_management_use_case import (
    UserManagementUseCase,
)
from salonhub.application.salon.use_cases.salon_use_case import SalonUseCase
from salonhub.application.tenancy.use_cases.tenant_use_case import TenantUseCase
from salonhub.domain.booking.services.booking_planner import BookingPlanner
from salonhub.domain.identity.authorization import AuthorizationPolicy
from salonhub.infrastructure.audit.repositories.audit_log_repository import AuditLogRepository
from salonhub.infrastructure.booking.repositories.booking_repository import BookingRepository
from salonhub.infrastructure.common.event_bus import EventBus
from salonhub.infrastructure.common.unit_of_work import SqlAlchemyUnitOfWork
from salonhub.infrastructure.identity.repositories.session_repository import SessionRepository
from salonhub.infrastructure.identity.repositories.user_repository import UserRepository
from salonhub.infrastructure.identity.services.password_service_adapter import PasswordServiceAdapter
from salonhub.infrastructure.identity.services.token_service_adapter import TokenServiceAdapter
from salonhub.infrastructure.salon.repositories.salon_repository import SalonRepository
from salonhub.infrastructure.tenancy.repositories.tenant_repository import TenantRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    event_bus = providers.Singleton(EventBus)
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, db=db, event_bus=event_bus)

    # Repositories
    tenant_repository = providers.Factory(TenantRepository, db=db)
    salon_repository = providers.Factory(SalonRepository, db=db)
    booking_repository = providers.Factory(BookingRepository, db=db)
    audit_log_repository = providers.Factory(AuditLogRepository, db=db)

    # Identity repositories and services
    user_repository = providers.Factory(UserRepository, db=db)
    session_repository = providers.Factory(SessionRepository, db=db)
    password_service = providers.Singleton(PasswordServiceAdapter)
    token_service = providers.Singleton(TokenServiceAdapter)

    # Domain services (pure domain logic, no db)
    authorization_policy = providers.Singleton(AuthorizationPolicy)
    booking_planner = providers.Factory(BookingPlanner)

    # Tenancy and salon use cases
    tenant_use_case = providers.Factory(
        TenantUseCase,
        tenant_repository=tenant_repository,
        uow=unit_of_work,
        policy=authorization_policy,
    )

    salon_use_case = providers.Factory(
        SalonUseCase,
        salon_repository=salon_repository,
        tenant_repository=tenant_repository,
        uow=unit_of_work,
        policy=authorization_policy,
    )

    # Booking use cases
    booking_use_case = providers.Factory(
        BookingUseCase,
        booking_repository=booking_repository,
        salon_repository=salon_repository,
        user_repository=user_repository,
        uow=unit_of_work,
        policy=authorization_policy,
        planner=booking_planner,
    )

    audit_log_use_case = providers.Factory(
        AuditLogUseCase,
        audit_log_repository=audit_log_repository,
        policy=authorization_policy,
    )

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        session_repository=session_repository,
        password_service=password_service,
        token_service=token_service,
        uow=unit_of_work,
    )

    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        session_repository=session_repository,
        tenant_repository=tenant_repository,
        password_service=password_service,
        token_service=token_service,
        uow=unit_of_work,
    )

    user_management_use_case = providers.Factory(
        UserManagementUseCase,
        user_repository=user_repository,
        password_service=password_service,
        uow=unit_of_work,
        policy=authorization_policy,
    )


# Initialize container
container = Container()
