"""Immutable view of the external store used for one computation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .assignment import ScheduleAssignment
from .bay import Bay
from .project import Project


@dataclass(frozen=True)
class ScheduleSnapshot:
    bays: tuple[Bay, ...]
    projects: tuple[Project, ...]
    assignments: tuple[ScheduleAssignment, ...]

    @classmethod
    def of(
        cls,
        bays: Iterable[Bay] = (),
        projects: Iterable[Project] = (),
        assignments: Iterable[ScheduleAssignment] = (),
    ) -> ScheduleSnapshot:
        return cls(tuple(bays), tuple(projects), tuple(assignments))

    @classmethod
    def from_records(cls, data: dict) -> ScheduleSnapshot:
        """Build a snapshot from raw store rows (camelCase or snake_case keys)."""
        return cls.of(
            bays=(Bay.model_validate(row) for row in data.get("bays", ())),
            projects=(Project.model_validate(row) for row in data.get("projects", ())),
            assignments=(
                ScheduleAssignment.model_validate(row)
                for row in data.get("assignments", ())
            ),
        )

    def projects_by_id(self) -> dict[int, Project]:
        return {project.id: project for project in self.projects}

    def assignments_for_bay(self, bay_id: int) -> list[ScheduleAssignment]:
        return [a for a in self.assignments if a.bay_id == bay_id]
