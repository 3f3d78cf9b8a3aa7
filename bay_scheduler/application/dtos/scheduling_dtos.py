"""
Scheduling Data Transfer Objects.

Request and response bodies for the bay scheduling API.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ...domain.scheduling.entities.assignment import ScheduleAssignment
from ...domain.scheduling.services.utilization import (
    BayLoadAssessment,
    BayStatusInfo,
)
from ...domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    GridScale,
    UtilizationModel,
)


class CreateAssignmentRequest(BaseModel):
    """DTO for scheduling a project into a bay."""

    project_id: int = Field(..., description="Project to schedule")
    bay_id: int = Field(..., description="Target bay")
    start_date: date = Field(..., description="First day of the assignment")
    grid_scale: GridScale = Field(
        GridScale.WEEK, description="Grid zoom level; selects the default length"
    )
    duration_days: int | None = Field(
        None, description="Explicit length in days, overriding the grid default"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "project_id": 42,
                "bay_id": 3,
                "start_date": "2025-03-03",
                "grid_scale": "week",
            }
        }
    )


class MoveAssignmentRequest(BaseModel):
    """DTO for moving an assignment to another bay and/or start date."""

    bay_id: int = Field(..., description="Target bay")
    start_date: date = Field(..., description="New first day; the length is kept")


class StatusChangeRequest(BaseModel):
    status: AssignmentStatus


class AssignmentResponse(BaseModel):
    """DTO for a schedule assignment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    bay_id: int
    start_date: date
    end_date: date
    status: AssignmentStatus
    total_hours: float | None = None

    @classmethod
    def from_assignment(cls, assignment: ScheduleAssignment) -> "AssignmentResponse":
        return cls.model_validate(assignment)


class ConflictCheckResponse(BaseModel):
    has_conflict: bool
    conflicting_assignment: AssignmentResponse | None = None


class UtilizationResponse(BaseModel):
    """DTO for a utilization report under one model."""

    model: UtilizationModel
    is_system_of_record: bool
    as_of: date
    bay_utilization: dict[int, float] = Field(default_factory=dict)
    fleet_utilization: float = 0.0
    fleet_status: BayStatusInfo | None = Field(
        None, description="Status label; occupancy model only"
    )
    assessments: list[BayLoadAssessment] = Field(
        default_factory=list, description="Load classification; peak_load model only"
    )
    load_insight: str | None = None
