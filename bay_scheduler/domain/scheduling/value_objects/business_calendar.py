"""
Business Calendar Value Objects

US federal-style holiday calendar used to count production working days and
to snap scheduling dates onto business days.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from functools import lru_cache

# Fixed-date holidays as (month, day); moved to Friday/Monday when they fall
# on a weekend.
FIXED_HOLIDAYS: dict[tuple[int, int], str] = {
    (1, 1): "New Year's Day",
    (7, 4): "Independence Day",
    (11, 11): "Veterans Day",
    (12, 25): "Christmas Day",
}

# (month, weekday Monday=0, occurrence; -1 means last)
FLOATING_HOLIDAYS: dict[str, tuple[int, int, int]] = {
    "Martin Luther King Jr. Day": (1, 0, 3),
    "Presidents' Day": (2, 0, 3),
    "Memorial Day": (5, 0, -1),
    "Labor Day": (9, 0, 1),
    "Columbus Day": (10, 0, 2),
    "Thanksgiving": (11, 3, 4),
}


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the ``n``-th occurrence of ``weekday`` in a month.

    Args:
        year: Calendar year
        month: Month (1-12)
        weekday: Weekday (Monday=0, Sunday=6)
        n: Occurrence (1-5), or -1 for the last occurrence

    Returns:
        Date of the requested weekday
    """
    if n < 0:
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        return last_day - timedelta(days=(last_day.weekday() - weekday) % 7)

    first_day = date(year, month, 1)
    first_match = first_day + timedelta(days=(weekday - first_day.weekday()) % 7)
    return first_match + timedelta(weeks=n - 1)


@lru_cache(maxsize=64)
def us_holidays(year: int) -> dict[date, str]:
    """Observed US holidays for ``year`` keyed by date."""
    holidays: dict[date, str] = {}

    for (month, day), name in FIXED_HOLIDAYS.items():
        observed = date(year, month, day)
        if observed.weekday() == 6:
            observed += timedelta(days=1)
        elif observed.weekday() == 5:
            observed -= timedelta(days=1)
        holidays[observed] = name

    for name, (month, weekday, n) in FLOATING_HOLIDAYS.items():
        holidays[nth_weekday_of_month(year, month, weekday, n)] = name

    return holidays


@dataclass(frozen=True)
class BusinessCalendar:
    """
    Monday-Friday working calendar with observed US holidays.

    ``extra_holidays`` adds plant shutdown days on top of the standard list.
    """

    working_weekdays: frozenset[int] = frozenset({0, 1, 2, 3, 4})
    observe_us_holidays: bool = True
    extra_holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self):
        for weekday in self.working_weekdays:
            if not 0 <= weekday <= 6:
                raise ValueError(
                    f"Invalid weekday: {weekday}. Must be 0-6 (Monday=0, Sunday=6)"
                )

    @classmethod
    def standard_calendar(cls) -> BusinessCalendar:
        return cls()

    def holiday_name(self, day: date) -> str | None:
        if day in self.extra_holidays:
            return "Plant shutdown"
        if self.observe_us_holidays:
            return us_holidays(day.year).get(day)
        return None

    def is_business_day(self, day: date) -> bool:
        if day.weekday() not in self.working_weekdays:
            return False
        return self.holiday_name(day) is None

    def count_working_days(self, start: date, end: date) -> int | None:
        """
        Count business days in the closed range ``[start, end]``.

        Returns:
            Number of working days, or None if ``start`` is after ``end``
        """
        if start > end:
            return None

        working_days = 0
        current = start
        while current <= end:
            if self.is_business_day(current):
                working_days += 1
            current += timedelta(days=1)
        return working_days

    def next_business_day(self, day: date) -> date:
        """Return ``day`` itself if it is a business day, else the next one."""
        if not self.working_weekdays:
            raise ValueError("Calendar has no working weekdays")
        while not self.is_business_day(day):
            day += timedelta(days=1)
        return day

    def previous_business_day(self, day: date) -> date:
        """Return ``day`` itself if it is a business day, else the previous one."""
        if not self.working_weekdays:
            raise ValueError("Calendar has no working weekdays")
        while not self.is_business_day(day):
            day -= timedelta(days=1)
        return day
