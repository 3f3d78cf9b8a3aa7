"""
Phase-aligned weekly bay utilization.

Splits each assignment's date span into manufacturing phases by the project's
phase percentages and counts, per bay and week, the distinct projects with a
hands-on phase (production, IT, NTC) active in that week.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from pydantic import BaseModel, Field

from ..entities.assignment import ScheduleAssignment
from ..entities.bay import Bay
from ..entities.project import Project
from ..entities.snapshot import ScheduleSnapshot
from ..value_objects.enums import Phase
from ..value_objects.period import PhaseWindow, as_date, start_of_week

ALIGNED_PHASES = (Phase.PRODUCTION, Phase.IT, Phase.NTC)
EXCLUDED_TEAMS = frozenset({"LIBBY"})
DEFAULT_WEEKS = 26


class PhaseAlignment(BaseModel):
    project_id: int
    project_number: str
    phase: Phase
    start_date: date
    end_date: date


class WeeklyBayUtilization(BaseModel):
    week_start: date
    week_end: date
    bay_id: int
    bay_name: str
    team_name: str
    aligned_phases: list[PhaseAlignment] = Field(default_factory=list)
    project_count: int = Field(ge=0, default=0)
    utilization_percentage: int = Field(ge=0, default=0)

    @property
    def week_key(self) -> str:
        return self.week_start.isoformat()


class TeamWeekUtilization(BaseModel):
    team_name: str
    week_start: date
    project_count: int = Field(ge=0, default=0)
    utilization_percentage: int = Field(ge=0, default=0)
    aligned_phases: list[PhaseAlignment] = Field(default_factory=list)


def aligned_utilization_percentage(project_count: int) -> int:
    """0 -> 0, 1 -> 50, 2 -> 85, 3 or more -> 115."""
    if project_count <= 0:
        return 0
    if project_count == 1:
        return 50
    if project_count == 2:
        return 85
    return 115


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def schedule_phase_windows(
    assignment: ScheduleAssignment, project: Project
) -> dict[Phase, PhaseWindow]:
    """
    Consecutive phase windows laid over an assignment's span.

    Each phase lasts ``round(span_days * percentage / 100)`` days and starts
    where the previous one ended, so with the default percentages the last
    phases run past the assignment end.
    """
    total_days = assignment.span_days
    windows: dict[Phase, PhaseWindow] = {}
    cursor = assignment.start_date
    for phase in Phase:
        days = _round_half_up(total_days * project.phase_percentage(phase) / 100)
        end = cursor + timedelta(days=days)
        windows[phase] = PhaseWindow(start=cursor, end=end)
        cursor = end
    return windows


def phase_alignments_for_week(
    week_start: date,
    week_end: date,
    bay_id: int,
    assignments: Iterable[ScheduleAssignment],
    projects_by_id: dict[int, Project],
) -> list[PhaseAlignment]:
    alignments: list[PhaseAlignment] = []
    for assignment in assignments:
        if assignment.bay_id != bay_id or assignment.is_complete:
            continue
        project = projects_by_id.get(assignment.project_id)
        if project is None:
            continue
        windows = schedule_phase_windows(assignment, project)
        for phase in ALIGNED_PHASES:
            window = windows[phase]
            if window.overlap_days(week_start, week_end):
                alignments.append(
                    PhaseAlignment(
                        project_id=project.id,
                        project_number=project.project_number,
                        phase=phase,
                        start_date=window.start,
                        end_date=window.end,
                    )
                )
    return alignments


def _counts_toward_utilization(bay: Bay) -> bool:
    return bool(bay.team) and bay.team.upper() not in EXCLUDED_TEAMS


class WeeklyUtilizationReadModel:
    """Weekly, phase-aligned utilization for bays and teams."""

    def __init__(self, snapshot: ScheduleSnapshot):
        self.snapshot = snapshot
        self._projects_by_id = snapshot.projects_by_id()

    def get_weekly_utilization(
        self,
        start: date | datetime | None = None,
        weeks: int = DEFAULT_WEEKS,
    ) -> list[WeeklyBayUtilization]:
        """
        Utilization for each counted bay over ``weeks`` Monday-start weeks.

        Args:
            start: Any day in the first week; defaults to today
            weeks: Number of weeks to report

        Returns:
            Rows ordered by week, then by bay in snapshot order
        """
        first_week = start_of_week(as_date(start), 0)
        bays = [bay for bay in self.snapshot.bays if _counts_toward_utilization(bay)]

        rows: list[WeeklyBayUtilization] = []
        for offset in range(weeks):
            week_start = first_week + timedelta(weeks=offset)
            week_end = week_start + timedelta(days=6)
            for bay in bays:
                aligned = phase_alignments_for_week(
                    week_start,
                    week_end,
                    bay.id,
                    self.snapshot.assignments,
                    self._projects_by_id,
                )
                project_count = len({a.project_id for a in aligned})
                rows.append(
                    WeeklyBayUtilization(
                        week_start=week_start,
                        week_end=week_end,
                        bay_id=bay.id,
                        bay_name=bay.name,
                        team_name=bay.team or "Unknown",
                        aligned_phases=aligned,
                        project_count=project_count,
                        utilization_percentage=aligned_utilization_percentage(
                            project_count
                        ),
                    )
                )
        return rows

    def get_current_week_team_utilization(
        self, team_name: str, now: date | datetime | None = None
    ) -> TeamWeekUtilization:
        """Distinct projects aligned this week across all bays of one team."""
        week_start = start_of_week(as_date(now), 0)
        week_end = week_start + timedelta(days=6)

        aligned: list[PhaseAlignment] = []
        for bay in self.snapshot.bays:
            if bay.team != team_name:
                continue
            aligned.extend(
                phase_alignments_for_week(
                    week_start,
                    week_end,
                    bay.id,
                    self.snapshot.assignments,
                    self._projects_by_id,
                )
            )

        project_count = len({a.project_id for a in aligned})
        return TeamWeekUtilization(
            team_name=team_name,
            week_start=week_start,
            project_count=project_count,
            utilization_percentage=aligned_utilization_percentage(project_count),
            aligned_phases=aligned,
        )
