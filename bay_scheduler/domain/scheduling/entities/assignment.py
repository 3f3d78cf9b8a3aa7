"""Schedule assignment record."""

from datetime import date

from pydantic import Field

from ...shared.base import StoreRecord
from ..value_objects.enums import AssignmentStatus


class ScheduleAssignment(StoreRecord):
    """A time-bounded occupancy of a bay by a project."""

    project_id: int
    bay_id: int
    start_date: date
    end_date: date
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    total_hours: float | None = Field(default=None, ge=0)

    @property
    def is_complete(self) -> bool:
        return self.status == AssignmentStatus.COMPLETE

    @property
    def span_days(self) -> int:
        """Whole days from start to end; moves preserve this span."""
        return (self.end_date - self.start_date).days

    def is_open_on(self, day: date) -> bool:
        """Not complete and not yet ended as of ``day``."""
        return not self.is_complete and self.end_date >= day
