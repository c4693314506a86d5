"""Tests for operating hours and branch opening checks."""

from datetime import UTC, datetime

import pytest

from salonhub.domain.common.exceptions import ValidationError
from salonhub.domain.common.value_objects import Address, Email, PhoneNumber, SalonId
from salonhub.domain.salon.entities.branch import Branch
from salonhub.domain.salon.operating_hours import DayHours, OperatingHours, TimeRange


def make_branch(timezone: str = "UTC", hours: OperatingHours | None = None) -> Branch:
    return Branch.create(
        salon_id=SalonId.generate(),
        name="Main Street",
        address=Address("1 Main St", "Springfield", "IL", "62701", "US"),
        phone=PhoneNumber("5551234567"),
        email=Email("main@glow.test"),
        timezone=timezone,
        operating_hours=hours or OperatingHours.uniform("09:00", "17:00"),
    )


class TestDayHours:
    def test_open_at_is_inclusive_of_closing_time(self) -> None:
        day = DayHours(opens_at="09:00", closes_at="17:00")
        assert day.is_open_at("09:00")
        assert day.is_open_at("17:00")
        assert not day.is_open_at("08:59")
        assert not day.is_open_at("17:01")

    def test_breaks_close_the_day(self) -> None:
        day = DayHours(breaks=(TimeRange("12:00", "13:00"),))
        assert not day.is_open_at("12:30")
        assert day.is_open_at("13:00")
        assert not day.covers("11:30", "12:30")
        assert day.covers("13:00", "14:00")

    def test_closed_day(self) -> None:
        day = DayHours(closed=True)
        assert not day.is_open_at("10:00")
        assert not day.covers("10:00", "11:00")

    def test_covers_requires_whole_interval(self) -> None:
        day = DayHours(opens_at="09:00", closes_at="17:00")
        assert day.covers("16:00", "17:00")
        assert not day.covers("16:30", "17:30")

    @pytest.mark.parametrize(
        ("opens_at", "closes_at"), [("9:00", "17:00"), ("09:00", "24:00"), ("17:00", "09:00")]
    )
    def test_invalid_hours(self, opens_at: str, closes_at: str) -> None:
        with pytest.raises(ValidationError):
            DayHours(opens_at=opens_at, closes_at=closes_at)

    def test_break_outside_opening_hours(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DayHours(opens_at="09:00", closes_at="17:00", breaks=(TimeRange("08:00", "09:30"),))
        assert exc_info.value.field == "breaks"


class TestOperatingHours:
    def test_uniform_defaults_to_monday_to_saturday(self) -> None:
        hours = OperatingHours.uniform("09:00", "17:00")
        assert hours.for_day("saturday") is not None
        assert hours.for_day("sunday") is None
        assert hours.for_day(0) == hours.for_day("monday")

    def test_round_trip_through_primitive(self) -> None:
        hours = OperatingHours(
            monday=DayHours(breaks=(TimeRange("12:00", "12:30"),)),
            friday=DayHours(opens_at="10:00", closes_at="20:00"),
        )
        assert OperatingHours.from_primitive(hours.to_primitive()) == hours

    def test_unknown_weekday(self) -> None:
        with pytest.raises(ValidationError):
            OperatingHours.from_primitive({"funday": {"open": "09:00", "close": "10:00"}})


class TestBranchHours:
    def test_invalid_timezone(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_branch(timezone="Mars/Olympus_Mons")
        assert exc_info.value.field == "timezone"

    def test_checks_use_branch_local_time(self) -> None:
        """09:00-17:00 in New York is 14:00-22:00 UTC in January."""
        branch = make_branch(timezone="America/New_York")
        monday_utc = datetime(2030, 1, 7, 15, 0, tzinfo=UTC)

        assert branch.is_within_operating_hours(monday_utc)
        assert not branch.is_within_operating_hours(monday_utc.replace(hour=13))

    def test_is_open_between(self) -> None:
        branch = make_branch()
        start = datetime(2030, 1, 7, 16, 0, tzinfo=UTC)

        assert branch.is_open_between(start, start.replace(hour=17))
        assert not branch.is_open_between(start, start.replace(hour=18))

    def test_interval_over_midnight_is_never_open(self) -> None:
        branch = make_branch(hours=OperatingHours.uniform("00:00", "23:59", days=("monday", "tuesday")))
        assert not branch.is_open_between(
            datetime(2030, 1, 7, 23, 0, tzinfo=UTC), datetime(2030, 1, 8, 0, 30, tzinfo=UTC)
        )

    def test_sunday_is_closed_by_default(self) -> None:
        branch = make_branch()
        assert not branch.is_within_operating_hours(datetime(2030, 1, 6, 10, 0, tzinfo=UTC))

    def test_inactive_branch_is_closed(self) -> None:
        branch = make_branch()
        branch.deactivate()
        assert not branch.is_within_operating_hours(datetime(2030, 1, 7, 10, 0, tzinfo=UTC))
