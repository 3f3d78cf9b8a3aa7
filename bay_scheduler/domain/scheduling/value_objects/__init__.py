"""
Value Objects for Bay Scheduling Domain

Immutable value objects representing dates, periods, calendars and the
enumerations shared across the domain.
"""

from .business_calendar import BusinessCalendar, us_holidays
from .enums import (
    AssignmentStatus,
    BayLoadStatus,
    Granularity,
    GridScale,
    Phase,
    ProjectStatus,
    Timeframe,
    UtilizationModel,
)
from .period import Period, PhaseWindow, as_date, days_between, inclusive_days

__all__ = [
    "AssignmentStatus",
    "BayLoadStatus",
    "BusinessCalendar",
    "Granularity",
    "GridScale",
    "Period",
    "Phase",
    "PhaseWindow",
    "ProjectStatus",
    "Timeframe",
    "UtilizationModel",
    "as_date",
    "days_between",
    "inclusive_days",
    "us_holidays",
]
