"""
Rescheduling Service

Creates, moves, re-statuses and removes bay assignments. Every write is
checked against the conflict detector first and nothing is written when the
check fails. Check and commit happen inside a per-bay critical section so two
requests against the same bay are applied one after the other; requests
against different bays do not wait on each other.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from datetime import date, timedelta

from ....core.config import settings
from ....core.observability import record_operation
from ...shared.base import DomainService
from ...shared.exceptions import (
    AssignmentNotFoundError,
    BayNotFoundError,
    ProjectNotFoundError,
    ScheduleConflictError,
    ValidationError,
)
from ..entities.assignment import ScheduleAssignment
from ..repositories.schedule_store import ScheduleStore
from ..value_objects.business_calendar import BusinessCalendar
from ..value_objects.enums import AssignmentStatus, GridScale
from .conflict_detector import find_conflict

logger = logging.getLogger(__name__)


def default_duration_days(grid_scale: GridScale | str) -> int:
    """Length of a new assignment dropped on a grid of the given zoom level."""
    return settings.grid_default_durations[GridScale(grid_scale).value]


class BayLockRegistry:
    """One lock per bay id, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def lock_for(self, bay_id: int) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(bay_id, threading.Lock())

    @contextmanager
    def hold(self, *bay_ids: int) -> Iterator[None]:
        """Hold the locks of all given bays, acquired in ascending id order."""
        with ExitStack() as stack:
            for bay_id in sorted(set(bay_ids)):
                stack.enter_context(self.lock_for(bay_id))
            yield


class ReschedulingService(DomainService):
    """
    Service for placing projects into bays.

    Args:
        store: Schedule store holding bays, projects and assignments
        locks: Lock registry; share one registry between services that
            write to the same store
        calendar: When given, start dates are moved forward to the next
            business day before scheduling
    """

    def __init__(
        self,
        store: ScheduleStore,
        locks: BayLockRegistry | None = None,
        calendar: BusinessCalendar | None = None,
    ) -> None:
        self._store = store
        self._locks = locks or BayLockRegistry()
        self._calendar = calendar

    def _align(self, start_date: date) -> date:
        if self._calendar is None:
            return start_date
        return self._calendar.next_business_day(start_date)

    def _require_assignment(self, assignment_id: int) -> ScheduleAssignment:
        assignment = self._store.get_assignment(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    def _require_bay(self, bay_id: int) -> None:
        if self._store.get_bay(bay_id) is None:
            raise BayNotFoundError(bay_id)

    def _check_conflict(
        self,
        operation: str,
        bay_id: int,
        start_date: date,
        end_date: date,
        exclude_assignment_id: int | None = None,
    ) -> None:
        conflict = find_conflict(
            bay_id,
            start_date,
            end_date,
            exclude_assignment_id,
            self._store.list_assignments(),
        )
        if conflict is not None:
            record_operation(operation, "conflict")
            logger.info(
                "%s rejected: bay %s %s..%s collides with assignment %s",
                operation,
                bay_id,
                start_date,
                end_date,
                conflict.id,
            )
            raise ScheduleConflictError(conflict)

    def move(
        self, assignment_id: int, new_bay_id: int, new_start_date: date
    ) -> ScheduleAssignment:
        """
        Move an assignment to a bay and start date, keeping its length.

        Returns:
            The committed assignment

        Raises:
            AssignmentNotFoundError: If the assignment does not exist
            BayNotFoundError: If the target bay does not exist
            ScheduleConflictError: If the target range is occupied
        """
        self._require_bay(new_bay_id)
        new_start = self._align(new_start_date)

        while True:
            current = self._require_assignment(assignment_id)
            with self._locks.hold(current.bay_id, new_bay_id):
                assignment = self._require_assignment(assignment_id)
                if assignment.bay_id != current.bay_id:
                    # Moved by another request while we waited; lock its new bay.
                    continue

                new_end = new_start + timedelta(days=assignment.span_days)
                self._check_conflict(
                    "move", new_bay_id, new_start, new_end, assignment.id
                )
                moved = self._store.save_assignment(
                    assignment.model_copy(
                        update={
                            "bay_id": new_bay_id,
                            "start_date": new_start,
                            "end_date": new_end,
                        }
                    )
                )

            record_operation("move", "success")
            logger.info(
                "Moved assignment %s from bay %s to bay %s (%s..%s)",
                moved.id,
                current.bay_id,
                new_bay_id,
                new_start,
                new_end,
            )
            return moved

    def create(
        self,
        project_id: int,
        bay_id: int,
        start_date: date,
        grid_scale: GridScale | str = GridScale.WEEK,
        duration_days: int | None = None,
    ) -> ScheduleAssignment:
        """
        Schedule a project into a bay.

        Args:
            project_id: Project being placed
            bay_id: Target bay
            start_date: First day of the assignment
            grid_scale: Grid zoom level the project was dropped on; selects
                the default length (day 7, week 14, month 30 days)
            duration_days: Explicit length, overriding the grid default

        Raises:
            ProjectNotFoundError: If the project does not exist
            BayNotFoundError: If the bay does not exist
            ValidationError: If the length is not positive
            ScheduleConflictError: If the range is occupied
        """
        if self._store.get_project(project_id) is None:
            raise ProjectNotFoundError(project_id)
        self._require_bay(bay_id)

        if duration_days is None:
            duration_days = default_duration_days(grid_scale)
        if duration_days <= 0:
            raise ValidationError("duration_days", duration_days, "must be positive")

        start = self._align(start_date)
        end = start + timedelta(days=duration_days)

        with self._locks.hold(bay_id):
            self._check_conflict("create", bay_id, start, end)
            created = self._store.add_assignment(project_id, bay_id, start, end)

        record_operation("create", "success")
        logger.info(
            "Scheduled project %s in bay %s (%s..%s) as assignment %s",
            project_id,
            bay_id,
            start,
            end,
            created.id,
        )
        return created

    def transition_status(
        self, assignment_id: int, status: AssignmentStatus | str
    ) -> ScheduleAssignment:
        """
        Change an assignment's status.

        Reopening a complete assignment puts it back into its bay's timeline,
        so that transition is conflict-checked.
        """
        status = AssignmentStatus(status)
        while True:
            current = self._require_assignment(assignment_id)
            with self._locks.hold(current.bay_id):
                assignment = self._require_assignment(assignment_id)
                if assignment.bay_id != current.bay_id:
                    continue
                if assignment.is_complete and status != AssignmentStatus.COMPLETE:
                    self._check_conflict(
                        "transition",
                        assignment.bay_id,
                        assignment.start_date,
                        assignment.end_date,
                        assignment.id,
                    )
                updated = self._store.save_assignment(
                    assignment.model_copy(update={"status": status})
                )

            record_operation("transition", "success")
            logger.info(
                "Assignment %s status %s -> %s",
                assignment_id,
                assignment.status.value,
                status.value,
            )
            return updated

    def unschedule(self, assignment_id: int) -> ScheduleAssignment:
        """Remove an assignment, returning what was removed."""
        while True:
            current = self._require_assignment(assignment_id)
            with self._locks.hold(current.bay_id):
                assignment = self._require_assignment(assignment_id)
                if assignment.bay_id != current.bay_id:
                    continue
                self._store.delete_assignment(assignment_id)

            record_operation("unschedule", "success")
            logger.info(
                "Unscheduled assignment %s from bay %s", assignment_id, assignment.bay_id
            )
            return assignment
