"""
Utilization Calculator

Two independent capacity models over the active bays of a snapshot:

* Occupancy (system of record): how many open assignments a bay holds.
  0 -> 0%, 1 -> 50%, 2 or more -> 100%. Fleet value is the mean.
* Weighted peak load (auxiliary): scheduled hours spread evenly over each
  assignment's days, accumulated per week over a rolling horizon with later
  weeks discounted, and compared against the bay's weekly staff capacity at
  the busiest week.

The models answer different questions and are reported separately; callers
pick one explicitly.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from pydantic import Field

from ....core.config import settings
from ...shared.base import ValueObject
from ..entities.assignment import ScheduleAssignment
from ..entities.bay import Bay
from ..entities.project import Project
from ..value_objects.enums import BayLoadStatus, UtilizationModel
from ..value_objects.period import as_date, start_of_week

logger = logging.getLogger(__name__)

UNDERUTILIZED_THRESHOLD = 30.0
OVERLOADED_THRESHOLD = 85.0


class UtilizationReport(ValueObject):
    """Per-bay and fleet utilization percentages under one model."""

    model: UtilizationModel
    bay_utilization: dict[int, float] = Field(default_factory=dict)
    fleet_utilization: float = Field(ge=0.0, default=0.0)

    @property
    def is_system_of_record(self) -> bool:
        return self.model == UtilizationModel.OCCUPANCY


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


# Occupancy model


def occupancy_percentage(open_assignment_count: int) -> float:
    if open_assignment_count <= 0:
        return 0.0
    if open_assignment_count == 1:
        return 50.0
    return 100.0


def occupancy_utilization(
    bays: Iterable[Bay],
    assignments: Iterable[ScheduleAssignment],
    now: date | datetime | None = None,
) -> UtilizationReport:
    """Occupancy-count utilization for every active bay."""
    today = as_date(now)
    assignments = list(assignments)

    bay_utilization: dict[int, float] = {}
    for bay in bays:
        if not bay.active:
            continue
        open_count = sum(
            1 for a in assignments if a.bay_id == bay.id and a.is_open_on(today)
        )
        bay_utilization[bay.id] = occupancy_percentage(open_count)

    fleet = _mean(list(bay_utilization.values()))
    logger.debug(
        "Occupancy utilization %.1f%% across %d active bays", fleet, len(bay_utilization)
    )
    return UtilizationReport(
        model=UtilizationModel.OCCUPANCY,
        bay_utilization=bay_utilization,
        fleet_utilization=fleet,
    )


# Weighted peak-load model


def decay_factor(week_index: int) -> float:
    """Weight of a week ``week_index`` weeks after the current one."""
    return max(
        settings.PEAK_LOAD_DECAY_FLOOR,
        1 - week_index * settings.PEAK_LOAD_DECAY_STEP,
    )


def _overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """Days shared by the half-open ranges ``[start, end)`` and ``[window_start, window_end)``."""
    return max(0, (min(end, window_end) - max(start, window_start)).days)


def _scheduled_hours(
    assignment: ScheduleAssignment, projects_by_id: dict[int, Project]
) -> float | None:
    if assignment.total_hours is not None:
        return assignment.total_hours
    project = projects_by_id.get(assignment.project_id)
    if project is None:
        return None
    return project.total_hours


def weekly_load(
    bay: Bay,
    assignments: Iterable[ScheduleAssignment],
    projects_by_id: dict[int, Project],
    today: date,
) -> list[float]:
    """Discounted scheduled hours for each week of the horizon, current week first."""
    horizon = settings.PEAK_LOAD_HORIZON_WEEKS
    first_week = start_of_week(today, settings.UTILIZATION_WEEK_STARTS_ON)
    weeks = [0.0] * horizon

    for assignment in assignments:
        if assignment.bay_id != bay.id or not assignment.is_open_on(today):
            continue
        duration_days = assignment.span_days
        if duration_days <= 0:
            continue
        hours = _scheduled_hours(assignment, projects_by_id)
        if not hours:
            continue
        hours_per_day = hours / duration_days

        for week_index in range(horizon):
            week_start = first_week + timedelta(weeks=week_index)
            overlap = _overlap_days(
                assignment.start_date,
                assignment.end_date,
                week_start,
                week_start + timedelta(days=7),
            )
            if overlap:
                weeks[week_index] += hours_per_day * overlap * decay_factor(week_index)

    return weeks


def peak_load_percentage(bay: Bay, load: list[float]) -> float:
    capacity = bay.weekly_capacity_hours
    if capacity <= 0:
        return 0.0
    peak = max(load, default=0.0)
    return min(100.0, peak / capacity * 100)


def peak_load_utilization(
    bays: Iterable[Bay],
    assignments: Iterable[ScheduleAssignment],
    projects: Iterable[Project] = (),
    now: date | datetime | None = None,
) -> UtilizationReport:
    """Weighted peak-week utilization for every active, staffed bay."""
    today = as_date(now)
    assignments = list(assignments)
    projects_by_id = {project.id: project for project in projects}

    bay_utilization: dict[int, float] = {}
    for bay in bays:
        if not bay.active or not bay.staffed:
            continue
        load = weekly_load(bay, assignments, projects_by_id, today)
        bay_utilization[bay.id] = peak_load_percentage(bay, load)

    fleet = _mean(list(bay_utilization.values()))
    logger.debug(
        "Peak-load utilization %.1f%% across %d staffed bays", fleet, len(bay_utilization)
    )
    return UtilizationReport(
        model=UtilizationModel.PEAK_LOAD,
        bay_utilization=bay_utilization,
        fleet_utilization=fleet,
    )


def calculate_utilization(
    bays: Iterable[Bay],
    assignments: Iterable[ScheduleAssignment],
    model: UtilizationModel | str | None = None,
    now: date | datetime | None = None,
    projects: Iterable[Project] = (),
) -> UtilizationReport:
    """
    Compute utilization under the requested model.

    Args:
        bays: Bays from the store snapshot
        assignments: Assignments from the store snapshot
        model: occupancy or peak_load; defaults to the configured model
        now: Reference day; defaults to today
        projects: Projects, used by peak_load for assignments without hours

    Returns:
        Report labelled with the model that produced it
    """
    model = UtilizationModel(model or settings.DEFAULT_UTILIZATION_MODEL)
    if model == UtilizationModel.PEAK_LOAD:
        return peak_load_utilization(bays, assignments, projects, now)
    return occupancy_utilization(bays, assignments, now)


# Status labels


class BayStatusInfo(ValueObject):
    status: str
    description: str


def bay_status_info(utilization: float) -> BayStatusInfo:
    """Display status for an occupancy percentage (a bay value or the fleet mean)."""
    if utilization == 0:
        return BayStatusInfo(status="Available", description="No projects currently assigned")
    if utilization == 50:
        return BayStatusInfo(
            status="Near Capacity", description="1 project assigned (50% capacity)"
        )
    if utilization == 100:
        return BayStatusInfo(
            status="At Capacity", description="2+ projects assigned (100% capacity)"
        )
    if utilization < 25:
        return BayStatusInfo(
            status="Mostly Available", description="Most bays have no projects assigned"
        )
    if utilization < 75:
        return BayStatusInfo(
            status="Mixed Capacity",
            description="Mix of available and near-capacity bays",
        )
    return BayStatusInfo(
        status="Mostly At Capacity", description="Most bays are at full capacity"
    )


class BayLoadAssessment(ValueObject):
    bay_id: int
    bay_name: str
    team_name: str
    team_type: str
    staff_count: int
    weekly_capacity: float
    utilization: int
    status: BayLoadStatus
    description: str
    recommendations: list[str] = Field(default_factory=list)


_RECOMMENDATIONS: dict[BayLoadStatus, list[str]] = {
    BayLoadStatus.UNDERUTILIZED: [
        "Assign additional projects to increase utilization",
        "Consider temporarily reassigning staff to other teams",
        "Check for upcoming projects that can be scheduled earlier",
    ],
    BayLoadStatus.OVERLOADED: [
        "Redistribute projects to less utilized teams where possible",
        "Consider adding temporary staff to handle peak workload",
        "Review project timelines for potential adjustments",
        "Identify tasks that could be subcontracted",
    ],
    BayLoadStatus.BALANCED: [
        "Maintain current staffing and project allocation",
        "Monitor for changes in project scope that may affect capacity",
        "Prepare contingency plans for unexpected staffing changes",
    ],
}


def classify_bay_load(bay: Bay, utilization: float) -> BayLoadAssessment:
    """Classify a bay's capacity-based utilization into a load status."""
    if utilization < UNDERUTILIZED_THRESHOLD:
        status = BayLoadStatus.UNDERUTILIZED
        description = (
            f"{bay.name} is significantly underutilized. Consider assigning more projects."
        )
    elif utilization > OVERLOADED_THRESHOLD:
        status = BayLoadStatus.OVERLOADED
        description = (
            f"{bay.name} is approaching or exceeding capacity. "
            "Consider redistributing workload."
        )
    else:
        status = BayLoadStatus.BALANCED
        description = f"{bay.name} has a balanced workload."

    return BayLoadAssessment(
        bay_id=bay.id,
        bay_name=bay.name,
        team_name=bay.team or "General",
        team_type=bay.team_type,
        staff_count=bay.staff_count or 0,
        weekly_capacity=bay.weekly_capacity_hours,
        utilization=round(utilization),
        status=status,
        description=description,
        recommendations=list(_RECOMMENDATIONS[status]),
    )


def assess_bays(bays: Iterable[Bay], report: UtilizationReport) -> list[BayLoadAssessment]:
    """Load assessments for every bay present in ``report``."""
    return [
        classify_bay_load(bay, report.bay_utilization[bay.id])
        for bay in bays
        if bay.id in report.bay_utilization
    ]


def overall_load_insight(assessments: list[BayLoadAssessment]) -> str:
    overloaded = sum(1 for a in assessments if a.status == BayLoadStatus.OVERLOADED)
    underutilized = sum(
        1 for a in assessments if a.status == BayLoadStatus.UNDERUTILIZED
    )

    if overloaded and underutilized:
        return (
            "Opportunity to balance workload by shifting projects from "
            "overloaded teams to underutilized teams."
        )
    if overloaded:
        return "Some teams are overloaded. Consider hiring additional staff or redistributing work."
    if underutilized and underutilized == len(assessments):
        return (
            "All teams are underutilized. Consider taking on more projects "
            "or adjusting staffing levels."
        )
    if underutilized:
        return "Some teams have capacity for additional projects."
    return (
        "Team workloads are well-balanced across all bays. "
        "Maintaining this balance will optimize productivity."
    )
