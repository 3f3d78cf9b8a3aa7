"""
Test fixtures and factories for bay scheduling records.

Factories build valid records with sensible defaults so each test only states
the fields it cares about.
"""

import itertools
from datetime import date

import pytest

from bay_scheduler.domain.scheduling.entities.assignment import ScheduleAssignment
from bay_scheduler.domain.scheduling.entities.bay import Bay
from bay_scheduler.domain.scheduling.entities.project import Project
from bay_scheduler.domain.scheduling.entities.snapshot import ScheduleSnapshot
from bay_scheduler.domain.scheduling.value_objects.enums import AssignmentStatus
from bay_scheduler.infrastructure.memory_store import InMemoryScheduleStore


class BayFactory:
    _ids = itertools.count(1)

    @classmethod
    def create(cls, **overrides) -> Bay:
        bay_id = overrides.pop("id", None) or next(cls._ids)
        fields = {
            "id": bay_id,
            "name": f"Bay {bay_id}",
            "bay_number": bay_id,
            "team": "General",
            "staff_count": 2,
        }
        fields.update(overrides)
        return Bay(**fields)


class ProjectFactory:
    _ids = itertools.count(1)

    @classmethod
    def create(cls, **overrides) -> Project:
        project_id = overrides.pop("id", None) or next(cls._ids)
        fields = {
            "id": project_id,
            "project_number": f"P-{project_id:04d}",
            "name": f"Project {project_id}",
            "total_hours": 1000,
        }
        fields.update(overrides)
        return Project(**fields)


class AssignmentFactory:
    _ids = itertools.count(1000)

    @classmethod
    def create(
        cls,
        bay_id: int,
        start_date: date,
        end_date: date,
        project_id: int = 1,
        status: AssignmentStatus = AssignmentStatus.SCHEDULED,
        **overrides,
    ) -> ScheduleAssignment:
        return ScheduleAssignment(
            id=overrides.pop("id", None) or next(cls._ids),
            project_id=project_id,
            bay_id=bay_id,
            start_date=start_date,
            end_date=end_date,
            status=status,
            **overrides,
        )


@pytest.fixture
def bay_factory():
    return BayFactory


@pytest.fixture
def project_factory():
    return ProjectFactory


@pytest.fixture
def assignment_factory():
    return AssignmentFactory


@pytest.fixture
def two_bays():
    """Two staffed bays with fixed ids 1 and 2."""
    return [
        BayFactory.create(id=1, name="Bay 1", staff_count=2),
        BayFactory.create(id=2, name="Bay 2", staff_count=2),
    ]


@pytest.fixture
def project():
    return ProjectFactory.create(id=10, total_hours=1000)


@pytest.fixture
def store(two_bays, project):
    """In-memory store with two bays, one project and one assignment (id 5)."""
    return InMemoryScheduleStore(
        bays=two_bays,
        projects=[project],
        assignments=[
            AssignmentFactory.create(
                id=5,
                bay_id=1,
                project_id=project.id,
                start_date=date(2025, 2, 1),
                end_date=date(2025, 2, 8),
            )
        ],
    )


@pytest.fixture
def snapshot(store) -> ScheduleSnapshot:
    return store.snapshot()
