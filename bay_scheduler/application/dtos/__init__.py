from .scheduling_dtos import (
    AssignmentResponse,
    ConflictCheckResponse,
    CreateAssignmentRequest,
    MoveAssignmentRequest,
    StatusChangeRequest,
    UtilizationResponse,
)

__all__ = [
    "AssignmentResponse",
    "ConflictCheckResponse",
    "CreateAssignmentRequest",
    "MoveAssignmentRequest",
    "StatusChangeRequest",
    "UtilizationResponse",
]
