"""Records consumed from the external schedule store."""

from .assignment import ScheduleAssignment
from .bay import Bay
from .project import DEFAULT_PHASE_PERCENTAGES, PHASE_MILESTONES, Project
from .snapshot import ScheduleSnapshot

__all__ = [
    "Bay",
    "DEFAULT_PHASE_PERCENTAGES",
    "PHASE_MILESTONES",
    "Project",
    "ScheduleAssignment",
    "ScheduleSnapshot",
]
