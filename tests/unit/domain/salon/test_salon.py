"""Tests for the Salon aggregate."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from salonhub.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from salonhub.domain.common.value_objects import Address, Email, Money, PhoneNumber, ServiceId
from salonhub.domain.salon.entities.branch import Branch, BranchSettings
from salonhub.domain.salon.entities.salon import Salon, SalonSettings
from salonhub.domain.salon.entities.service import Service
from salonhub.domain.salon.entities.staff import Staff, StaffRole
from salonhub.domain.salon.events import (
    BranchAdded,
    BranchOperatingHoursUpdated,
    SalonCreated,
    ServicePriceUpdated,
    ServiceUpdated,
    StaffAddedToBranch,
)
from salonhub.domain.salon.exceptions import BranchNotFoundError, ServiceNotFoundError
from salonhub.domain.salon.operating_hours import OperatingHours
from salonhub.domain.tenancy.entities.tenant import Tenant, TenantPlan

# Monday 2030-01-07
MONDAY_10AM = datetime(2030, 1, 7, 10, 0, tzinfo=UTC)


@pytest.fixture
def tenant() -> Tenant:
    tenant = Tenant.create(name="Glow Studio", slug="glow-studio", plan=TenantPlan.BASIC)
    tenant.collect_events()
    return tenant


@pytest.fixture
def salon(tenant: Tenant) -> Salon:
    return Salon.create(tenant_id=tenant.id, name="Glow Downtown")


def make_branch(salon: Salon, name: str = "Main Street") -> Branch:
    return Branch.create(
        salon_id=salon.id,
        name=name,
        address=Address("1 Main St", "Springfield", "IL", "62701", "US"),
        phone=PhoneNumber("+1 555 123 4567"),
        email=Email("main@glow.test"),
        operating_hours=OperatingHours.uniform("09:00", "17:00"),
    )


def make_service(salon: Salon, name: str = "Haircut", price: str = "40.00") -> Service:
    return Service.create(
        salon_id=salon.id,
        name=name,
        category="hair",
        duration=45,
        price=Money(Decimal(price)),
    )


class TestSalonCreation:
    def test_create_records_event(self, salon: Salon) -> None:
        [event] = salon.collect_events()
        assert isinstance(event, SalonCreated)
        assert event.aggregate_id == salon.id
        assert event.name == "Glow Downtown"

    def test_default_settings(self, salon: Salon) -> None:
        assert salon.settings.allow_online_booking
        assert not salon.settings.booking_confirmation_required
        assert salon.settings.default_currency == "USD"

    def test_invalid_currency_in_settings(self) -> None:
        with pytest.raises(ValidationError):
            SalonSettings(default_currency="DOLLARS")


class TestBranches:
    def test_add_branch(self, salon: Salon, tenant: Tenant) -> None:
        salon.collect_events()
        branch = make_branch(salon)

        salon.add_branch(branch, tenant)

        assert salon.get_branch(branch.id) is branch
        [event] = salon.collect_events()
        assert isinstance(event, BranchAdded)
        assert event.branch_name == "Main Street"

    def test_branch_limit_of_plan(self, salon: Salon, tenant: Tenant) -> None:
        salon.add_branch(make_branch(salon), tenant)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_branch(make_branch(salon, "Second"), tenant)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_branch_limit_counts_other_salons(self, salon: Salon, tenant: Tenant) -> None:
        # The tenant already runs a branch in another salon
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_branch(make_branch(salon), tenant, tenant_branch_count=1)
        assert exc_info.value.rule == "plan_limit_exceeded"
        assert salon.branches == {}

    def test_update_branch_settings(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)

        salon.update_branch_settings(
            branch.id, BranchSettings(min_booking_notice_hours=24, parking_available=True)
        )

        assert branch.settings.min_booking_notice_hours == 24
        assert branch.settings.parking_available
        with pytest.raises(BranchNotFoundError):
            salon.update_branch_settings(make_branch(salon).id, BranchSettings())

    def test_other_tenant_cannot_add_branch(self, salon: Salon) -> None:
        stranger = Tenant.create(name="Other", slug="other", plan=TenantPlan.ENTERPRISE)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_branch(make_branch(salon), stranger)
        assert exc_info.value.rule == "tenant_mismatch"

    def test_suspended_tenant_cannot_add_branch(self, salon: Salon, tenant: Tenant) -> None:
        tenant.suspend()
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_branch(make_branch(salon), tenant)
        assert exc_info.value.rule == "tenant_inactive"

    def test_update_operating_hours(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)
        salon.collect_events()

        salon.update_branch_operating_hours(branch.id, OperatingHours.uniform("08:00", "20:00"))

        assert branch.operating_hours.for_day("monday").closes_at == "20:00"
        [event] = salon.collect_events()
        assert isinstance(event, BranchOperatingHoursUpdated)
        assert event.operating_hours["monday"]["open"] == "08:00"

    def test_unknown_branch(self, salon: Salon) -> None:
        other = make_branch(salon)
        with pytest.raises(BranchNotFoundError):
            salon.update_branch_operating_hours(other.id, OperatingHours())

    def test_operating_hours_by_branch(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)

        assert salon.is_within_operating_hours(MONDAY_10AM)
        assert salon.is_within_operating_hours(MONDAY_10AM, branch.id)
        assert not salon.is_within_operating_hours(MONDAY_10AM.replace(hour=20))

        salon.deactivate_branch(branch.id)
        assert not salon.is_within_operating_hours(MONDAY_10AM, branch.id)

    def test_unknown_branch_is_closed(self, salon: Salon) -> None:
        assert not salon.is_within_operating_hours(MONDAY_10AM, make_branch(salon).id)


class TestServices:
    def test_add_service_records_created(self, salon: Salon, tenant: Tenant) -> None:
        salon.collect_events()
        service = make_service(salon)

        salon.add_service(service, tenant)

        assert salon.get_available_services() == [service]
        [event] = salon.collect_events()
        assert isinstance(event, ServiceUpdated)
        assert event.operation == ServiceUpdated.CREATED

    def test_service_limit_of_plan(self, salon: Salon, tenant: Tenant) -> None:
        for i in range(20):
            salon.add_service(make_service(salon, f"Service {i}"), tenant)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_service(make_service(salon, "One too many"), tenant)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_service_limit_counts_other_salons(self, salon: Salon, tenant: Tenant) -> None:
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_service(make_service(salon), tenant, tenant_service_count=20)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_service_priced_in_salon_currency(self, salon: Salon, tenant: Tenant) -> None:
        service = Service.create(
            salon_id=salon.id,
            name="Haircut",
            category="hair",
            duration=45,
            price=Money(Decimal(40), "EUR"),
        )
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_service(service, tenant)
        assert exc_info.value.rule == "currency_mismatch"
        assert salon.services == {}

    def test_price_update_keeps_salon_currency(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.update_service_price(service.id, Money(Decimal(40), "EUR"))

        assert exc_info.value.rule == "currency_mismatch"
        assert service.price == Money(Decimal("40.00"))

    def test_update_price_records_old_and_new(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)
        salon.collect_events()

        salon.update_service_price(service.id, Money(Decimal("55.00")))

        assert service.price == Money(Decimal("55.00"))
        [event] = salon.collect_events()
        assert isinstance(event, ServicePriceUpdated)
        assert event.old_price == Money(Decimal("40.00"))
        assert event.payload()["new_price"] == {"amount": "55.00", "currency": "USD"}

    def test_same_price_records_nothing(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)
        salon.collect_events()

        salon.update_service_price(service.id, Money(Decimal("40.00")))

        assert salon.collect_events() == []

    def test_deposit_cannot_exceed_price(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.require_service_deposit(service.id, Money(Decimal("40.01")))
        assert exc_info.value.rule == "deposit_exceeds_price"

    def test_deposit_lifecycle(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)

        salon.require_service_deposit(service.id, Money(Decimal(10)))
        assert service.requires_deposit
        assert service.deposit_amount == Money(Decimal(10))

        salon.remove_service_deposit(service.id)
        assert not service.requires_deposit
        assert service.deposit_amount is None

    def test_deactivated_service_is_unavailable(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)

        salon.deactivate_service(service.id)

        assert salon.get_available_services() == []

    def test_remove_service(self, salon: Salon, tenant: Tenant) -> None:
        service = make_service(salon)
        salon.add_service(service, tenant)
        salon.collect_events()

        salon.remove_service(service.id)

        assert salon.get_service(service.id) is None
        [event] = salon.collect_events()
        assert event.operation == ServiceUpdated.DELETED
        with pytest.raises(ServiceNotFoundError):
            salon.remove_service(service.id)

    def test_unknown_service(self, salon: Salon) -> None:
        with pytest.raises(ServiceNotFoundError):
            salon.update_service_price(ServiceId.generate(), Money(Decimal(1)))


class TestStaff:
    def test_add_staff(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)
        salon.collect_events()
        staff = Staff.create(
            branch_id=branch.id, name="Sam", email=Email("sam@glow.test"), specialties=["hair"]
        )

        salon.add_staff(branch.id, staff, tenant)

        assert salon.staff_for_branch(branch.id) == [staff]
        [event] = salon.collect_events()
        assert isinstance(event, StaffAddedToBranch)
        assert event.role == "STYLIST"

    def test_staff_limit_counts_all_branches(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)
        for i in range(5):
            salon.add_staff(
                branch.id,
                Staff.create(branch_id=branch.id, name=f"S{i}", email=Email(f"s{i}@glow.test")),
                tenant,
            )
        extra = Staff.create(branch_id=branch.id, name="Extra", email=Email("x@glow.test"))
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_staff(branch.id, extra, tenant)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_staff_limit_counts_other_salons(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)
        staff = Staff.create(branch_id=branch.id, name="Sam", email=Email("sam@glow.test"))
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_staff(branch.id, staff, tenant, tenant_staff_count=5)
        assert exc_info.value.rule == "plan_limit_exceeded"

    def test_staff_must_belong_to_the_branch(self, salon: Salon, tenant: Tenant) -> None:
        branch = make_branch(salon)
        salon.add_branch(branch, tenant)
        elsewhere = make_branch(salon, "Elsewhere")
        staff = Staff.create(branch_id=elsewhere.id, name="Sam", email=Email("sam@glow.test"))
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.add_staff(branch.id, staff, tenant)
        assert exc_info.value.rule == "branch_mismatch"

    def test_can_perform_service(self) -> None:
        stylist = Staff.create(
            branch_id=make_branch(Salon.create(tenant_id=Tenant.create("T", "t").id, name="S")).id,
            name="Sam",
            email=Email("sam@glow.test"),
            specialties=["hair", " nails ", "hair"],
        )
        assert stylist.specialties == ["hair", "nails"]
        assert stylist.can_perform_service("hair")
        assert not stylist.can_perform_service("massage")

        stylist.deactivate()
        assert not stylist.can_perform_service("hair")

    def test_managers_perform_everything(self, salon: Salon) -> None:
        manager = Staff.create(
            branch_id=make_branch(salon).id,
            name="Max",
            email=Email("max@glow.test"),
            role=StaffRole.MANAGER,
        )
        assert manager.can_perform_service("massage")

    def test_commission(self, salon: Salon) -> None:
        staff = Staff.create(
            branch_id=make_branch(salon).id,
            name="Sam",
            email=Email("sam@glow.test"),
            commission_rate="12.5",
        )
        assert staff.calculate_commission(Money(Decimal(80))) == Money(Decimal(10))
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            staff.update_commission_rate(101)
        assert exc_info.value.rule == "invalid_commission_rate"


class TestSettings:
    def test_update_settings(self, salon: Salon) -> None:
        salon.update_settings(booking_confirmation_required=True, default_currency="eur")

        assert salon.settings.booking_confirmation_required
        assert salon.settings.default_currency == "EUR"

    def test_unknown_setting(self, salon: Salon) -> None:
        with pytest.raises(ValidationError) as exc_info:
            salon.update_settings(loyalty_points=True)
        assert exc_info.value.field == "settings"

    def test_currency_change_blocked_by_priced_services(
        self, salon: Salon, tenant: Tenant
    ) -> None:
        salon.add_service(make_service(salon), tenant)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            salon.update_settings(default_currency="EUR")

        assert exc_info.value.rule == "currency_mismatch"
        assert salon.settings.default_currency == "USD"
        # Other settings still change freely
        salon.update_settings(tax_rate=Decimal("8.25"))
        assert salon.settings.tax_rate == Decimal("8.25")


class TestDetails:
    def test_update_details(self, salon: Salon) -> None:
        salon.update_details(name="Glow Uptown", description="Cuts and colour", logo="glow.png")

        assert salon.name == "Glow Uptown"
        assert salon.description == "Cuts and colour"
        assert salon.logo == "glow.png"

    def test_omitted_fields_are_kept(self, salon: Salon) -> None:
        salon.update_details(description="Cuts and colour", logo="glow.png")

        salon.update_details(logo="")

        assert salon.name == "Glow Downtown"
        assert salon.description == "Cuts and colour"
        assert salon.logo is None

    def test_blank_name_rejected(self, salon: Salon) -> None:
        with pytest.raises(ValidationError):
            salon.update_details(name="   ")
