"""In-process schedule store for tests and local runs."""

import itertools
import logging
import threading
from collections.abc import Iterable
from datetime import date

from ..domain.scheduling.entities.assignment import ScheduleAssignment
from ..domain.scheduling.entities.bay import Bay
from ..domain.scheduling.entities.project import Project
from ..domain.scheduling.entities.snapshot import ScheduleSnapshot
from ..domain.scheduling.repositories.schedule_store import ScheduleStore
from ..domain.scheduling.value_objects.enums import AssignmentStatus
from ..domain.shared.exceptions import AssignmentNotFoundError

logger = logging.getLogger(__name__)


class InMemoryScheduleStore(ScheduleStore):
    """Dictionary-backed store; every call is atomic under one lock."""

    def __init__(
        self,
        bays: Iterable[Bay] = (),
        projects: Iterable[Project] = (),
        assignments: Iterable[ScheduleAssignment] = (),
    ) -> None:
        self._lock = threading.RLock()
        self._bays = {bay.id: bay for bay in bays}
        self._projects = {project.id: project for project in projects}
        self._assignments = {a.id: a for a in assignments}
        self._ids = itertools.count(max(self._assignments, default=0) + 1)

    @classmethod
    def from_snapshot(cls, snapshot: ScheduleSnapshot) -> "InMemoryScheduleStore":
        return cls(snapshot.bays, snapshot.projects, snapshot.assignments)

    def list_bays(self) -> list[Bay]:
        with self._lock:
            return list(self._bays.values())

    def list_projects(self) -> list[Project]:
        with self._lock:
            return list(self._projects.values())

    def list_assignments(self) -> list[ScheduleAssignment]:
        with self._lock:
            return list(self._assignments.values())

    def get_bay(self, bay_id: int) -> Bay | None:
        with self._lock:
            return self._bays.get(bay_id)

    def get_project(self, project_id: int) -> Project | None:
        with self._lock:
            return self._projects.get(project_id)

    def get_assignment(self, assignment_id: int) -> ScheduleAssignment | None:
        with self._lock:
            return self._assignments.get(assignment_id)

    def add_assignment(
        self,
        project_id: int,
        bay_id: int,
        start_date: date,
        end_date: date,
        status: AssignmentStatus = AssignmentStatus.SCHEDULED,
    ) -> ScheduleAssignment:
        with self._lock:
            assignment = ScheduleAssignment(
                id=next(self._ids),
                project_id=project_id,
                bay_id=bay_id,
                start_date=start_date,
                end_date=end_date,
                status=status,
            )
            self._assignments[assignment.id] = assignment
            logger.debug("Stored assignment %s in bay %s", assignment.id, bay_id)
            return assignment

    def save_assignment(self, assignment: ScheduleAssignment) -> ScheduleAssignment:
        with self._lock:
            if assignment.id not in self._assignments:
                raise AssignmentNotFoundError(assignment.id)
            self._assignments[assignment.id] = assignment
            return assignment

    def delete_assignment(self, assignment_id: int) -> bool:
        with self._lock:
            return self._assignments.pop(assignment_id, None) is not None
