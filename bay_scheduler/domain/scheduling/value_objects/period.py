"""
Date-range value objects.

All ranges in the scheduling domain are whole calendar days. ``Period`` and
``PhaseWindow`` are closed intervals: both ``start`` and ``end`` are days
inside the range.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

ONE_DAY = timedelta(days=1)


def as_date(value: date | datetime | None) -> date:
    """Truncate a datetime to its calendar date; ``None`` means today."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date, end: date) -> int:
    """Signed whole-day difference ``end - start``."""
    return (end - start).days


def inclusive_days(start: date, end: date) -> int:
    """Number of days in the closed range ``[start, end]`` (may be <= 0)."""
    return days_between(start, end) + 1


def start_of_week(day: date, week_starts_on: int = 0) -> date:
    """First day of the week containing ``day`` (``week_starts_on``: Monday=0)."""
    return day - timedelta(days=(day.weekday() - week_starts_on) % 7)


@dataclass(frozen=True)
class Period:
    """A reporting bucket with inclusive bounds and a display label."""

    start: date
    end: date
    label: str

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Period end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        return inclusive_days(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class PhaseWindow:
    """The closed day range a manufacturing phase occupies."""

    start: date
    end: date

    @property
    def duration_days(self) -> int:
        return inclusive_days(self.start, self.end)

    def overlap_days(self, start: date, end: date) -> int:
        """Days shared with the closed range ``[start, end]``; 0 when disjoint."""
        if self.end < start or self.start > end:
            return 0
        return max(0, inclusive_days(max(self.start, start), min(self.end, end)))
