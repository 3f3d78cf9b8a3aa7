"""
Domain Exceptions

Custom exceptions for bay scheduling errors with type discrimination.
A scheduling conflict is a recoverable outcome: the error carries the
assignment that blocked the request so callers can report it.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..scheduling.entities.assignment import ScheduleAssignment


class ErrorType(str, Enum):
    """Category of a domain error; drives the HTTP status it maps to."""

    VALIDATION = "validation"
    RESOURCE_CONFLICT = "resource_conflict"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"


class DomainError(Exception):
    """Failure raised by the scheduling core, carrying structured details."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Body used in HTTP error responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when a scheduling request is malformed."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
    ) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Validation failed for field '{field_name}': {message}",
            ErrorType.VALIDATION,
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
            },
        )


class ResourceConflictError(DomainError):
    """A request collides with something already holding the resource."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.RESOURCE_CONFLICT, details)


class ScheduleConflictError(ResourceConflictError):
    """Raised when a bay is already occupied for the requested dates."""

    def __init__(self, conflicting: "ScheduleAssignment") -> None:
        details = {
            "conflicting_assignment_id": conflicting.id,
            "bay_id": conflicting.bay_id,
            "project_id": conflicting.project_id,
            "start_date": conflicting.start_date.isoformat(),
            "end_date": conflicting.end_date.isoformat(),
        }
        super().__init__(
            f"Bay {conflicting.bay_id} is already scheduled from "
            f"{conflicting.start_date} to {conflicting.end_date} "
            f"(assignment {conflicting.id})",
            details,
        )
        self.conflicting_assignment = conflicting


class EntityNotFoundError(DomainError):
    """Base class for lookups that found nothing."""

    entity_type = "entity"

    def __init__(self, entity_id: int) -> None:
        super().__init__(
            f"{self.entity_type.capitalize()} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            {f"{self.entity_type}_id": entity_id, "entity_type": self.entity_type},
        )
        self.entity_id = entity_id


class AssignmentNotFoundError(EntityNotFoundError):
    entity_type = "assignment"


class BayNotFoundError(EntityNotFoundError):
    entity_type = "bay"


class ProjectNotFoundError(EntityNotFoundError):
    entity_type = "project"


class AuthorizationError(DomainError):
    """Raised when a role lacks the permission an operation needs."""

    def __init__(self, role: str, permission: str) -> None:
        super().__init__(
            f"Role '{role}' lacks permission '{permission}'",
            ErrorType.AUTHORIZATION,
            {"role": role, "permission": permission},
        )
        self.role = role
        self.permission = permission
