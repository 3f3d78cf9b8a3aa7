"""
Schedule Store Interface

Defines the contract for the external store that owns bays, projects and
schedule assignments. The scheduling core only reads bays and projects and
only writes assignments.
"""

from abc import ABC, abstractmethod
from datetime import date

from ..entities.assignment import ScheduleAssignment
from ..entities.bay import Bay
from ..entities.project import Project
from ..entities.snapshot import ScheduleSnapshot
from ..value_objects.enums import AssignmentStatus


class ScheduleStore(ABC):
    """
    Abstract store interface for bay scheduling records.

    Implementations must make each single write atomic; cross-call
    consistency (check-then-commit) is the rescheduler's responsibility.
    """

    @abstractmethod
    def list_bays(self) -> list[Bay]:
        pass

    @abstractmethod
    def list_projects(self) -> list[Project]:
        pass

    @abstractmethod
    def list_assignments(self) -> list[ScheduleAssignment]:
        pass

    @abstractmethod
    def get_bay(self, bay_id: int) -> Bay | None:
        pass

    @abstractmethod
    def get_project(self, project_id: int) -> Project | None:
        pass

    @abstractmethod
    def get_assignment(self, assignment_id: int) -> ScheduleAssignment | None:
        pass

    @abstractmethod
    def add_assignment(
        self,
        project_id: int,
        bay_id: int,
        start_date: date,
        end_date: date,
        status: AssignmentStatus = AssignmentStatus.SCHEDULED,
    ) -> ScheduleAssignment:
        """
        Persist a new assignment.

        Returns:
            The stored assignment with its store-assigned id
        """
        pass

    @abstractmethod
    def save_assignment(self, assignment: ScheduleAssignment) -> ScheduleAssignment:
        """Replace an existing assignment by id."""
        pass

    @abstractmethod
    def delete_assignment(self, assignment_id: int) -> bool:
        """
        Remove an assignment.

        Returns:
            True if an assignment was removed
        """
        pass

    def snapshot(self) -> ScheduleSnapshot:
        """Read every record the core needs for one computation."""
        return ScheduleSnapshot.of(
            bays=self.list_bays(),
            projects=self.list_projects(),
            assignments=self.list_assignments(),
        )
