"""Tests for the Tenant aggregate."""

import pytest

from salonhub.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from salonhub.domain.tenancy.entities.tenant import (
    PlanLimits,
    Tenant,
    TenantPlan,
    TenantSettings,
    TenantStatus,
)
from salonhub.domain.tenancy.events import TenantCreated, TenantPlanChanged, TenantStatusChanged


def make_tenant(plan: TenantPlan = TenantPlan.BASIC) -> Tenant:
    tenant = Tenant.create(name="Glow Studio", slug="glow-studio", plan=plan)
    tenant.collect_events()
    return tenant


class TestTenantCreation:
    def test_create_records_event(self) -> None:
        tenant = Tenant.create(name="Glow Studio", slug="Glow-Studio")

        assert tenant.slug == "glow-studio"
        assert tenant.status == TenantStatus.ACTIVE
        assert tenant.is_active()
        events = tenant.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], TenantCreated)
        assert events[0].event_type == "tenant.created"
        assert events[0].payload()["slug"] == "glow-studio"

    @pytest.mark.parametrize("slug", ["", "has space", "under_score", "-leading", "a" * 64])
    def test_invalid_slug_rejected(self, slug: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Tenant.create(name="Glow", slug=slug)
        assert exc_info.value.field == "slug"

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Tenant.create(name="   ", slug="glow")

    def test_settings_round_trip_through_primitive(self) -> None:
        settings = TenantSettings(custom_branding=True, features=("sms",))
        assert TenantSettings.from_primitive(settings.to_primitive()) == settings


class TestPlanLimits:
    def test_limits_per_plan(self) -> None:
        assert PlanLimits.for_plan(TenantPlan.BASIC) == PlanLimits(1, 5, 20)
        assert PlanLimits.for_plan(TenantPlan.PROFESSIONAL) == PlanLimits(3, 25, 100)
        assert PlanLimits.for_plan(TenantPlan.ENTERPRISE) == PlanLimits(None, None, None)

    def test_allows(self) -> None:
        assert PlanLimits.allows(3, 2)
        assert not PlanLimits.allows(3, 3)
        assert PlanLimits.allows(None, 10_000)

    def test_basic_plan_allows_one_branch(self) -> None:
        tenant = make_tenant()
        tenant.ensure_can_add_branch(0)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            tenant.ensure_can_add_branch(1)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_enterprise_is_unlimited(self) -> None:
        tenant = make_tenant(TenantPlan.ENTERPRISE)
        tenant.ensure_can_add_staff(1000)
        tenant.ensure_can_add_service(1000)

    def test_inactive_tenant_cannot_grow(self) -> None:
        tenant = make_tenant(TenantPlan.ENTERPRISE)
        tenant.suspend()
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            tenant.ensure_can_add_service(0)
        assert exc_info.value.rule == "tenant_inactive"


class TestTenantLifecycle:
    def test_update_plan_records_event(self) -> None:
        tenant = make_tenant()
        tenant.update_plan(TenantPlan.PROFESSIONAL)

        assert tenant.plan == TenantPlan.PROFESSIONAL
        [event] = tenant.collect_events()
        assert isinstance(event, TenantPlanChanged)
        assert event.old_plan == "BASIC"
        assert event.new_plan == "PROFESSIONAL"

    def test_update_to_same_plan_is_noop(self) -> None:
        tenant = make_tenant()
        tenant.update_plan(TenantPlan.BASIC)
        assert tenant.collect_events() == []

    def test_inactive_tenant_cannot_change_plan(self) -> None:
        tenant = make_tenant()
        tenant.suspend()
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            tenant.update_plan(TenantPlan.ENTERPRISE)
        assert exc_info.value.rule == "tenant_inactive"

    def test_suspend_and_activate(self) -> None:
        tenant = make_tenant()
        tenant.suspend()
        tenant.activate()

        assert tenant.is_active()
        events = tenant.collect_events()
        assert [type(e) for e in events] == [TenantStatusChanged, TenantStatusChanged]
        assert events[0].new_status == "SUSPENDED"
        assert events[1].new_status == "ACTIVE"

    def test_cancelled_tenant_is_final(self) -> None:
        tenant = make_tenant()
        tenant.cancel()

        assert tenant.status == TenantStatus.CANCELLED
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            tenant.activate()
        assert exc_info.value.rule == "tenant_cancelled"
        with pytest.raises(BusinessRuleViolationError):
            tenant.suspend()
