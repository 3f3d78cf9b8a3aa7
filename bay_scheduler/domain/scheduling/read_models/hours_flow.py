"""
Hours flow read model.

Aggregates project labor hours into per-period series for the capacity
dashboard. Historical views report hours earned by delivered projects and the
phase hours that fell in each period; future views project scheduled hours of
open projects across the periods their bay assignment spans. Every period also
carries the shop capacity line and a running cumulative total.
"""

import logging
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from ....core.config import settings
from ..entities.assignment import ScheduleAssignment
from ..entities.project import Project
from ..entities.snapshot import ScheduleSnapshot
from ..services.period_generator import generate_periods
from ..services.phase_projector import phase_breakdown
from ..value_objects.enums import Granularity, Phase, ProjectStatus, Timeframe
from ..value_objects.period import ONE_DAY, Period, as_date

logger = logging.getLogger(__name__)

# Average number of working weeks in one period of each granularity.
WEEKS_PER_PERIOD: dict[Granularity, float] = {
    Granularity.WEEK: 1.0,
    Granularity.MONTH: 4.33,
    Granularity.QUARTER: 13.0,
    Granularity.YEAR: 52.0,
}

HIGH_UTILIZATION_PERCENT = 90.0
LOW_UTILIZATION_PERCENT = 60.0
PEAK_CAPACITY_RATIO = 0.9

PROJECTABLE_STATUSES = frozenset({ProjectStatus.ACTIVE, ProjectStatus.PENDING})


class HoursFlowPoint(BaseModel):
    """Hours for one reporting period, rounded to whole hours."""

    period: str
    start: date
    end: date
    earned: int = Field(ge=0, default=0)
    projected: int = Field(ge=0, default=0)
    capacity: int = Field(ge=0, default=0)
    cumulative: int = Field(ge=0, default=0)
    phases: dict[Phase, int] = Field(default_factory=dict)

    @property
    def load_ratio(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.projected / self.capacity


class HoursFlowInsight(BaseModel):
    type: Literal["positive", "negative", "neutral"]
    message: str


class HoursFlowSeries(BaseModel):
    year: int
    granularity: Granularity
    timeframe: Timeframe
    points: list[HoursFlowPoint] = Field(default_factory=list)
    insights: list[HoursFlowInsight] = Field(default_factory=list)


def period_capacity(granularity: Granularity, manual_capacity: float | None = None) -> float:
    """Shop capacity in hours for one period."""
    if manual_capacity:
        return manual_capacity
    return (
        WEEKS_PER_PERIOD[granularity]
        * settings.DEFAULT_HOURS_PER_PERSON_PER_WEEK
        * settings.HOURS_FLOW_RESOURCE_COUNT
    )


class HoursFlowReadModel:
    """
    Read model for earned and projected hours per reporting period.

    Only projects that hold at least one bay assignment contribute.
    """

    def __init__(self, snapshot: ScheduleSnapshot):
        self.snapshot = snapshot
        self._assignments_by_project: dict[int, list[ScheduleAssignment]] = {}
        for assignment in sorted(snapshot.assignments, key=lambda a: a.start_date):
            self._assignments_by_project.setdefault(assignment.project_id, []).append(
                assignment
            )

    def get_hours_flow(
        self,
        year: int,
        granularity: Granularity | str,
        timeframe: Timeframe | str,
        now: date | datetime | None = None,
        manual_capacity: float | None = None,
    ) -> HoursFlowSeries:
        """
        Build the hours flow series for one year.

        Args:
            year: Calendar year to report on
            granularity: week, month, quarter or year buckets
            timeframe: historical (earned) or future (projected)
            now: Reference day; defaults to today
            manual_capacity: Capacity per period overriding the staffing default

        Returns:
            Series with one point per period and the derived insights
        """
        granularity = Granularity(granularity)
        timeframe = Timeframe(timeframe)
        if manual_capacity is None:
            manual_capacity = settings.HOURS_FLOW_MANUAL_CAPACITY

        periods = generate_periods(year, granularity, timeframe, as_date(now))
        capacity = round(period_capacity(granularity, manual_capacity))

        points: list[HoursFlowPoint] = []
        cumulative = 0
        for period in periods:
            if timeframe == Timeframe.HISTORICAL:
                earned, phases = self._historical_hours(period)
                projected = 0.0
            else:
                projected, phases = self._projected_hours(period)
                earned = 0.0

            point = HoursFlowPoint(
                period=period.label,
                start=period.start,
                end=period.end,
                earned=round(earned),
                projected=round(projected),
                capacity=capacity,
                phases={phase: round(hours) for phase, hours in phases.items()},
            )
            cumulative += point.earned if timeframe == Timeframe.HISTORICAL else point.projected
            point.cumulative = cumulative
            points.append(point)

        logger.debug(
            "Hours flow %s %s/%s: %d periods, cumulative %d",
            year,
            granularity.value,
            timeframe.value,
            len(points),
            cumulative,
        )
        return HoursFlowSeries(
            year=year,
            granularity=granularity,
            timeframe=timeframe,
            points=points,
            insights=hours_flow_insights(points),
        )

    def _scheduled_projects(self) -> list[Project]:
        return [
            project
            for project in self.snapshot.projects
            if project.total_hours and project.id in self._assignments_by_project
        ]

    def _historical_hours(self, period: Period) -> tuple[float, dict[Phase, float]]:
        earned = 0.0
        phases = dict.fromkeys(Phase, 0.0)

        for project in self._scheduled_projects():
            project_end = project.completion_date
            if project.start_date is None or project_end is None:
                continue
            if project.start_date > period.end or project_end < period.start:
                continue

            # Delivered projects book all earned hours in their delivery period.
            if project.status == ProjectStatus.DELIVERED and period.contains(project_end):
                earned += project.total_hours * (project.percent_complete or 0) / 100

            for phase, hours in phase_breakdown(project, period.start, period.end).items():
                phases[phase] += hours

        return earned, phases

    def _projected_hours(self, period: Period) -> tuple[float, dict[Phase, float]]:
        projected = 0.0
        phases = dict.fromkeys(Phase, 0.0)

        for project in self._scheduled_projects():
            if project.status not in PROJECTABLE_STATUSES:
                continue
            assignment = self._assignments_by_project[project.id][0]
            if assignment.end_date < period.start or assignment.start_date > period.end:
                continue

            schedule_days = assignment.span_days
            if schedule_days <= 0:
                continue
            overlap_days = (
                min(assignment.end_date, period.end + ONE_DAY)
                - max(assignment.start_date, period.start)
            ).days
            period_hours = project.total_hours * overlap_days / schedule_days

            projected += period_hours
            for phase in Phase:
                phases[phase] += period_hours * project.phase_percentage(phase) / 100

        return projected, phases


def hours_flow_insights(points: list[HoursFlowPoint]) -> list[HoursFlowInsight]:
    """Utilization, peak period and dominant phase observations for a series."""
    if not points:
        return []

    insights: list[HoursFlowInsight] = []

    total_projected = sum(p.projected for p in points)
    total_capacity = sum(p.capacity for p in points)
    utilization = total_projected / total_capacity * 100 if total_capacity else 0.0

    if utilization > HIGH_UTILIZATION_PERCENT:
        insights.append(
            HoursFlowInsight(
                type="negative",
                message=f"High utilization at {utilization:.1f}% - consider resource expansion",
            )
        )
    elif utilization < LOW_UTILIZATION_PERCENT:
        insights.append(
            HoursFlowInsight(
                type="neutral",
                message=(
                    f"Utilization at {utilization:.1f}% - capacity available for new projects"
                ),
            )
        )
    else:
        insights.append(
            HoursFlowInsight(
                type="positive", message=f"Healthy utilization at {utilization:.1f}%"
            )
        )

    peak = max(points, key=lambda p: p.projected)
    if peak.projected > peak.capacity * PEAK_CAPACITY_RATIO:
        insights.append(
            HoursFlowInsight(
                type="negative",
                message=(
                    f"Capacity constraint in {peak.period} - "
                    f"{peak.projected:,} hours needed"
                ),
            )
        )

    phase_totals = dict.fromkeys(Phase, 0)
    for point in points:
        for phase, hours in point.phases.items():
            phase_totals[phase] += hours
    dominant = max(Phase, key=lambda phase: phase_totals[phase])
    if phase_totals[dominant] > 0:
        insights.append(
            HoursFlowInsight(
                type="neutral",
                message=(
                    f"{dominant.value.upper()} phase dominates with "
                    f"{phase_totals[dominant]:,} hours"
                ),
            )
        )

    return insights
