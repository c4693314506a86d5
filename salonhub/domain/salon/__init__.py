"""Salon bounded context: salons, branches, services and staff."""

from .entities.branch import Branch, BranchSettings
from .entities.salon import Salon, SalonSettings
from .entities.service import Service
from .entities.staff import Staff, StaffRole
from .exceptions import (
    BranchNotFoundError,
    SalonNotFoundError,
    ServiceNotFoundError,
    StaffNotFoundError,
)
from .operating_hours import WEEKDAYS, DayHours, OperatingHours, TimeRange

__all__ = [
    "WEEKDAYS",
    "Branch",
    "BranchNotFoundError",
    "BranchSettings",
    "DayHours",
    "OperatingHours",
    "Salon",
    "SalonNotFoundError",
    "SalonSettings",
    "Service",
    "ServiceNotFoundError",
    "Staff",
    "StaffNotFoundError",
    "StaffRole",
    "TimeRange",
]
