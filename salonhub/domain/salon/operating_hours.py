"""
Operating hours value objects.

Times are ``HH:MM`` strings in the branch's local timezone. Zero padded
24h strings compare correctly as plain strings, which keeps the checks
simple and the persisted form human readable.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from salonhub.domain.common.exceptions import ValidationError
from salonhub.domain.common.value_object import ValueObject

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _validate_time(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not _TIME_PATTERN.match(value):
        raise ValidationError("Time must use the HH:MM format", field=field_name, value=value)
    return value


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """Half-open ``[start, end)`` interval within a day, e.g. a lunch break."""

    start: str
    end: str

    def __post_init__(self) -> None:
        _validate_time(self.start, "start")
        _validate_time(self.end, "end")
        if self.start >= self.end:
            raise ValidationError("Break must end after it starts", field="end", value=self.end)

    def contains(self, time_of_day: str) -> bool:
        return self.start <= time_of_day < self.end

    def to_primitive(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class DayHours(ValueObject):
    """
    Opening hours for one weekday.

    A day is open from ``opens_at`` to ``closes_at`` inclusive, except during
    breaks.
    """

    opens_at: str = "09:00"
    closes_at: str = "17:00"
    closed: bool = False
    breaks: tuple[TimeRange, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _validate_time(self.opens_at, "open")
        _validate_time(self.closes_at, "close")
        if self.closed:
            return
        if self.opens_at >= self.closes_at:
            raise ValidationError(
                "Closing time must be after opening time", field="close", value=self.closes_at
            )
        for interval in self.breaks:
            if interval.start < self.opens_at or interval.end > self.closes_at:
                raise ValidationError(
                    "Breaks must fall within opening hours",
                    field="breaks",
                    value=interval.to_primitive(),
                )

    def is_open_at(self, time_of_day: str) -> bool:
        if self.closed:
            return False
        if not self.opens_at <= time_of_day <= self.closes_at:
            return False
        return not any(interval.contains(time_of_day) for interval in self.breaks)

    def covers(self, start: str, end: str) -> bool:
        """Check that the whole ``[start, end)`` interval is open and avoids breaks."""
        if self.closed or start >= end:
            return False
        if start < self.opens_at or end > self.closes_at:
            return False
        return not any(b.start < end and start < b.end for b in self.breaks)

    def to_primitive(self) -> dict[str, Any]:
        return {
            "open": self.opens_at,
            "close": self.closes_at,
            "closed": self.closed,
            "breaks": [interval.to_primitive() for interval in self.breaks],
        }

    @classmethod
    def from_primitive(cls, data: dict[str, Any]) -> "DayHours":
        return cls(
            opens_at=data.get("open", "09:00"),
            closes_at=data.get("close", "17:00"),
            closed=bool(data.get("closed", False)),
            breaks=tuple(
                TimeRange(start=b["start"], end=b["end"]) for b in data.get("breaks") or ()
            ),
        )


@dataclass(frozen=True)
class OperatingHours(ValueObject):
    """Weekly schedule; a missing day means the branch is closed that day."""

    monday: DayHours | None = None
    tuesday: DayHours | None = None
    wednesday: DayHours | None = None
    thursday: DayHours | None = None
    friday: DayHours | None = None
    saturday: DayHours | None = None
    sunday: DayHours | None = None

    def for_day(self, weekday: str | int) -> DayHours | None:
        """Hours for a weekday name or ``datetime.weekday()`` index."""
        name = WEEKDAYS[weekday] if isinstance(weekday, int) else weekday.lower()
        if name not in WEEKDAYS:
            raise ValidationError("Unknown weekday", field="weekday", value=weekday)
        return getattr(self, name)

    def to_primitive(self) -> dict[str, Any]:
        return {
            day: hours.to_primitive()
            for day in WEEKDAYS
            if (hours := getattr(self, day)) is not None
        }

    @classmethod
    def from_primitive(cls, data: dict[str, Any] | None) -> "OperatingHours":
        data = data or {}
        unknown = set(data) - set(WEEKDAYS)
        if unknown:
            raise ValidationError(
                "Unknown weekday in operating hours", field="operating_hours", value=sorted(unknown)
            )
        return cls(**{day: DayHours.from_primitive(hours) for day, hours in data.items()})

    @classmethod
    def uniform(cls, opens_at: str, closes_at: str, days: tuple[str, ...] = WEEKDAYS[:6]) -> "OperatingHours":
        """Same hours on every listed day (Monday to Saturday by default)."""
        hours = DayHours(opens_at=opens_at, closes_at=closes_at)
        return cls(**dict.fromkeys(days, hours))
