"""
Conflict Detector

Answers whether a candidate date range collides with an existing assignment
in the same bay. Both ends of every range are inclusive, so two assignments
that merely touch (one ends the day the other starts) still conflict.
Completed assignments no longer occupy their bay and are ignored.

None of these functions raise; the accept/reject decision belongs to the
caller.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from ..entities.assignment import ScheduleAssignment


def _overlaps(start: date, end: date, other: ScheduleAssignment) -> bool:
    return start <= other.end_date and end >= other.start_date


def find_conflict(
    bay_id: int,
    start_date: date | None,
    end_date: date | None,
    exclude_assignment_id: int | None = None,
    assignments: Iterable[ScheduleAssignment] = (),
) -> ScheduleAssignment | None:
    """
    Find the first assignment in ``bay_id`` that collides with the range.

    Args:
        bay_id: Bay the candidate range would occupy
        start_date: First day of the candidate range
        end_date: Last day of the candidate range
        exclude_assignment_id: Assignment to ignore (the one being moved)
        assignments: Assignments to check against, in any order

    Returns:
        The colliding assignment, or None
    """
    if start_date is None or end_date is None or end_date < start_date:
        return None

    for existing in assignments or ():
        if existing.bay_id != bay_id:
            continue
        if exclude_assignment_id is not None and existing.id == exclude_assignment_id:
            continue
        if existing.is_complete:
            continue
        if _overlaps(start_date, end_date, existing):
            return existing
    return None


def has_conflict(
    bay_id: int,
    start_date: date | None,
    end_date: date | None,
    exclude_assignment_id: int | None = None,
    assignments: Iterable[ScheduleAssignment] = (),
) -> bool:
    """True when the range collides with an assignment in ``bay_id``."""
    return (
        find_conflict(bay_id, start_date, end_date, exclude_assignment_id, assignments)
        is not None
    )


def find_all_conflicts(
    assignments: Iterable[ScheduleAssignment],
) -> list[tuple[ScheduleAssignment, ScheduleAssignment]]:
    """
    Report every pair of open assignments sharing a bay and overlapping.

    Pairs are ordered by (bay, start date) so reports are stable.
    """
    by_bay: dict[int, list[ScheduleAssignment]] = defaultdict(list)
    for assignment in assignments:
        if not assignment.is_complete:
            by_bay[assignment.bay_id].append(assignment)

    conflicts = []
    for bay_id in sorted(by_bay):
        timeline = sorted(by_bay[bay_id], key=lambda a: (a.start_date, a.id))
        for i, first in enumerate(timeline):
            for second in timeline[i + 1 :]:
                if second.start_date > first.end_date:
                    break
                conflicts.append((first, second))
    return conflicts
