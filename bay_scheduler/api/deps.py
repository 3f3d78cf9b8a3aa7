"""
API Dependencies

Dependency injection for the bay scheduling routes: the schedule store and
rescheduler held on the application state, and role-based permission checks.

Authentication happens upstream; the caller's role arrives in the
``X-User-Role`` header. A missing or unknown role grants nothing.
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from bay_scheduler.core.rbac import SchedulingPermission, SchedulingRole, check_permission
from bay_scheduler.domain.scheduling.repositories.schedule_store import ScheduleStore
from bay_scheduler.domain.scheduling.services.rescheduler import ReschedulingService
from bay_scheduler.domain.shared.exceptions import AuthorizationError


def get_store(request: Request) -> ScheduleStore:
    return request.app.state.store


def get_rescheduler(request: Request) -> ReschedulingService:
    return request.app.state.rescheduler


StoreDep = Annotated[ScheduleStore, Depends(get_store)]
ReschedulerDep = Annotated[ReschedulingService, Depends(get_rescheduler)]


def get_current_role(
    x_user_role: Annotated[str | None, Header()] = None,
) -> str:
    return (x_user_role or SchedulingRole.PENDING.value).strip().lower()


CurrentRole = Annotated[str, Depends(get_current_role)]


def require_permission(permission: SchedulingPermission) -> Callable[[str], str]:
    """
    Build a dependency that rejects callers whose role lacks ``permission``.

    Returns:
        Dependency returning the caller's role when allowed
    """

    def permission_checker(role: CurrentRole) -> str:
        try:
            check_permission(role, permission)
        except AuthorizationError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=e.to_dict()
            ) from e
        return role

    return permission_checker
