"""Use case for tenant lifecycle operations."""

import structlog

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.tenancy.protocols.tenant_repository import TenantRepositoryProtocol
from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.identity.authorization import Action, AuthorizationPolicy, Resource
from salonhub.domain.identity.entities.user import User
from salonhub.domain.tenancy.entities.tenant import Tenant, TenantPlan, TenantSettings
from salonhub.domain.tenancy.exceptions import TenantNotFoundError, TenantSlugTakenError

logger = structlog.get_logger(__name__)


class TenantUseCase:
    """Create tenants and move them between plans and statuses."""

    def __init__(
        self,
        tenant_repository: TenantRepositoryProtocol,
        uow: UnitOfWork,
        policy: AuthorizationPolicy,
    ) -> None:
        """Initialize use case with dependencies."""
        self.tenant_repository = tenant_repository
        self.uow = uow
        self.policy = policy

    def create_tenant(
        self,
        actor: User,
        name: str,
        slug: str,
        plan: TenantPlan = TenantPlan.BASIC,
        settings: TenantSettings | None = None,
    ) -> Tenant:
        """
        Create a new tenant.

        Args:
            actor: User performing the operation (must manage tenants)
            name: Display name
            slug: URL-friendly unique identifier
            plan: Initial subscription plan
            settings: Optional tenant settings

        Returns:
            The created tenant

        Raises:
            AuthorizationError: If the actor may not create tenants
            TenantSlugTakenError: If the slug is already used
        """
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE)
        tenant = Tenant.create(name=name, slug=slug, plan=plan, settings=settings)
        if self.tenant_repository.slug_exists(tenant.slug):
            raise TenantSlugTakenError(tenant.slug)

        self._commit(tenant, actor)
        logger.info("tenant_created", tenant_id=str(tenant.id), slug=tenant.slug)
        return tenant

    def get_tenant(self, actor: User, tenant_id: TenantId) -> Tenant:
        self.policy.ensure(actor, Resource.TENANTS, Action.READ, tenant_id)
        return self._load(tenant_id)

    def list_tenants(self, actor: User) -> list[Tenant]:
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE)
        return self.tenant_repository.list_all()

    def change_plan(self, actor: User, tenant_id: TenantId, plan: TenantPlan) -> Tenant:
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE, tenant_id)
        tenant = self._load(tenant_id)
        tenant.update_plan(plan)
        self._commit(tenant, actor)
        logger.info("tenant_plan_changed", tenant_id=str(tenant_id), plan=plan.value)
        return tenant

    def suspend_tenant(self, actor: User, tenant_id: TenantId) -> Tenant:
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE, tenant_id)
        tenant = self._load(tenant_id)
        tenant.suspend()
        self._commit(tenant, actor)
        return tenant

    def activate_tenant(self, actor: User, tenant_id: TenantId) -> Tenant:
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE, tenant_id)
        tenant = self._load(tenant_id)
        tenant.activate()
        self._commit(tenant, actor)
        return tenant

    def cancel_tenant(self, actor: User, tenant_id: TenantId) -> Tenant:
        self.policy.ensure(actor, Resource.TENANTS, Action.MANAGE, tenant_id)
        tenant = self._load(tenant_id)
        tenant.cancel()
        self._commit(tenant, actor)
        logger.info("tenant_cancelled", tenant_id=str(tenant_id))
        return tenant

    def _load(self, tenant_id: TenantId) -> Tenant:
        tenant = self.tenant_repository.find_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id.value)
        return tenant

    def _commit(self, tenant: Tenant, actor: User) -> None:
        with self.uow:
            self.tenant_repository.save(tenant)
            self.uow.track(tenant)
            self.uow.set_actor(actor.id)
            self.uow.commit()
