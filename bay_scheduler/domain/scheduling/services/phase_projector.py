"""
Phase Hour Projector

Spreads a project's labor hours over reporting periods. Each manufacturing
phase owns ``total_hours * percentage / 100`` hours, distributed evenly over
the days of the phase; a period receives the share of those hours that falls
on its days.

A phase runs from its start milestone up to, but not including, the next
milestone in its fallback chain (e.g. fabrication ends the day before paint
starts). Missing milestones or missing total hours are normal for projects
that have not reached a phase and contribute zero hours.
"""

from datetime import date, timedelta

from ..entities.project import Project
from ..value_objects.enums import Phase
from ..value_objects.period import PhaseWindow


def phase_window(project: Project, phase: Phase | str) -> PhaseWindow | None:
    """Closed day range of ``phase``, or None when a milestone is missing."""
    start, boundary = project.phase_milestones(Phase(phase))
    if start is None or boundary is None:
        return None
    return PhaseWindow(start=start, end=boundary - timedelta(days=1))


def total_phase_hours(project: Project, phase: Phase | str) -> float:
    """Hours budgeted to ``phase`` regardless of dates."""
    if not project.total_hours:
        return 0.0
    return project.total_hours * project.phase_percentage(Phase(phase)) / 100


def phase_hours(
    project: Project,
    phase: Phase | str,
    period_start: date,
    period_end: date,
) -> float:
    """
    Hours of ``phase`` falling inside the closed range ``[period_start, period_end]``.

    Args:
        project: Project with total hours, phase percentages and milestones
        phase: One of fab, paint, production, it, ntc, qc
        period_start: First day of the reporting period
        period_end: Last day of the reporting period

    Returns:
        Non-negative hours; 0 when data is missing or the phase and period
        do not intersect
    """
    window = phase_window(project, phase)
    if window is None or not project.total_hours:
        return 0.0

    duration = window.duration_days
    if duration <= 0:
        return 0.0

    overlap = window.overlap_days(period_start, period_end)
    if overlap <= 0:
        return 0.0

    return total_phase_hours(project, phase) * overlap / duration


def phase_breakdown(
    project: Project, period_start: date, period_end: date
) -> dict[Phase, float]:
    """Hours per phase for one period, in production order."""
    return {
        phase: phase_hours(project, phase, period_start, period_end)
        for phase in Phase
    }
