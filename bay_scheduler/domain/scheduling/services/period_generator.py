"""
Period Generator

Splits a calendar year into consecutive reporting buckets. Historical views
cover the year up to today; future views cover today through year end. The
buckets always form a gapless, non-overlapping cover of that range, with the
first and last bucket truncated at the range edges.
"""

import logging
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from ....core.config import settings
from ..value_objects.enums import Granularity, Timeframe
from ..value_objects.period import Period, as_date, start_of_week

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 9998


def _unit_bounds(day: date, granularity: Granularity, week_starts_on: int) -> tuple[date, date]:
    """Calendar unit containing ``day`` as (first day, last day)."""
    if granularity == Granularity.WEEK:
        start = start_of_week(day, week_starts_on)
        return start, start + timedelta(days=6)
    if granularity == Granularity.MONTH:
        start = day.replace(day=1)
        return start, start + relativedelta(months=1, days=-1)
    if granularity == Granularity.QUARTER:
        start = date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)
        return start, start + relativedelta(months=3, days=-1)
    start = date(day.year, 1, 1)
    return start, date(day.year, 12, 31)


def _label(start: date, granularity: Granularity) -> str:
    if granularity == Granularity.WEEK:
        return start.strftime("%b %d")
    if granularity == Granularity.MONTH:
        return start.strftime("%b")
    if granularity == Granularity.QUARTER:
        return f"Q{(start.month - 1) // 3 + 1}"
    return str(start.year)


def _valid_range(year: int, timeframe: Timeframe, today: date) -> tuple[date, date] | None:
    year_start = date(year, 1, 1)
    year_end = date(year, 12, 31)
    if timeframe == Timeframe.HISTORICAL:
        start, end = year_start, min(year_end, today)
    else:
        start, end = max(year_start, today), year_end
    if end < start:
        return None
    return start, end


def generate_periods(
    year: int,
    granularity: Granularity | str,
    timeframe: Timeframe | str,
    now: date | datetime | None = None,
    week_starts_on: int | None = None,
) -> list[Period]:
    """
    Generate ordered reporting periods for ``year``.

    Args:
        year: Calendar year to cover
        granularity: week, month, quarter or year
        timeframe: historical (year start up to now) or future (now to year end)
        now: Reference day; defaults to today
        week_starts_on: First weekday of a week bucket (Monday=0); defaults
            to the configured reporting week start

    Returns:
        Periods in chronological order; empty for invalid input or when the
        requested range lies entirely outside the year
    """
    try:
        granularity = Granularity(granularity)
        timeframe = Timeframe(timeframe)
    except ValueError:
        logger.debug(
            "Unsupported period request granularity=%r timeframe=%r",
            granularity,
            timeframe,
        )
        return []
    if not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        return []

    if week_starts_on is None:
        week_starts_on = settings.PERIOD_WEEK_STARTS_ON

    bounds = _valid_range(year, timeframe, as_date(now))
    if bounds is None:
        return []
    range_start, range_end = bounds

    periods: list[Period] = []
    cursor = range_start
    while cursor <= range_end:
        unit_start, unit_end = _unit_bounds(cursor, granularity, week_starts_on)
        start = max(unit_start, range_start)
        end = min(unit_end, range_end)
        periods.append(Period(start=start, end=end, label=_label(start, granularity)))
        cursor = end + timedelta(days=1)

    return periods


def fiscal_weeks_for_month(year: int, month: int) -> list[Period]:
    """
    Monday-start weeks intersecting a month, numbered from 1.

    The first week starts on the Monday on or before the 1st; every week's end
    is capped at the last day of the month.
    """
    first_day = date(year, month, 1)
    last_day = first_day + relativedelta(months=1, days=-1)

    weeks: list[Period] = []
    week_start = start_of_week(first_day, 0)
    number = 1
    while week_start <= last_day:
        week_end = min(week_start + timedelta(days=6), last_day)
        label = (
            f"Week {number}: {week_start.strftime('%b')} {week_start.day}"
            f" - {week_end.strftime('%b')} {week_end.day}"
        )
        weeks.append(Period(start=week_start, end=week_end, label=label))
        week_start += timedelta(days=7)
        number += 1
    return weeks
