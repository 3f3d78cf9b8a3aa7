"""
Role-Based Access Control (RBAC)

Role hierarchy and permission matrix for bay scheduling. Checks are pure
functions of (role, permission); the HTTP layer resolves the caller's role and
enforces the result.
"""

import logging
from enum import Enum

from ..domain.shared.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


class SchedulingRole(str, Enum):
    """Roles in ascending order of privilege."""

    PENDING = "pending"  # Registered, awaiting approval
    VIEWER = "viewer"  # Read-only access
    EDITOR = "editor"  # Schedule creation and changes
    ADMIN = "admin"  # Full access


class SchedulingPermission(str, Enum):
    # Schedule permissions
    SCHEDULE_READ = "schedule:read"
    SCHEDULE_CREATE = "schedule:create"
    SCHEDULE_MODIFY = "schedule:modify"
    SCHEDULE_DELETE = "schedule:delete"

    # Capacity and reporting
    UTILIZATION_VIEW = "utilization:view"
    REPORT_VIEW = "report:view"

    # Admin permissions
    SYSTEM_CONFIG = "system:config"


ROLE_LEVELS: dict[SchedulingRole, int] = {
    SchedulingRole.PENDING: 0,
    SchedulingRole.VIEWER: 1,
    SchedulingRole.EDITOR: 2,
    SchedulingRole.ADMIN: 3,
}

_READ_PERMISSIONS = {
    SchedulingPermission.SCHEDULE_READ,
    SchedulingPermission.UTILIZATION_VIEW,
    SchedulingPermission.REPORT_VIEW,
}

_EDIT_PERMISSIONS = _READ_PERMISSIONS | {
    SchedulingPermission.SCHEDULE_CREATE,
    SchedulingPermission.SCHEDULE_MODIFY,
    SchedulingPermission.SCHEDULE_DELETE,
}

# Role-Permission Matrix; each role includes everything below it
ROLE_PERMISSIONS: dict[SchedulingRole, frozenset[SchedulingPermission]] = {
    SchedulingRole.PENDING: frozenset(),
    SchedulingRole.VIEWER: frozenset(_READ_PERMISSIONS),
    SchedulingRole.EDITOR: frozenset(_EDIT_PERMISSIONS),
    SchedulingRole.ADMIN: frozenset(SchedulingPermission),
}


def _as_role(role: SchedulingRole | str | None) -> SchedulingRole | None:
    if role is None:
        return None
    try:
        return SchedulingRole(role)
    except ValueError:
        return None


def has_role(role: SchedulingRole | str | None, required: SchedulingRole | str) -> bool:
    """True when ``role`` is at or above ``required`` in the hierarchy."""
    resolved = _as_role(role)
    if resolved is None:
        return False
    return ROLE_LEVELS[resolved] >= ROLE_LEVELS[SchedulingRole(required)]


def is_allowed(
    role: SchedulingRole | str | None, permission: SchedulingPermission | str
) -> bool:
    """Whether ``role`` grants ``permission``. Unknown roles grant nothing."""
    resolved = _as_role(role)
    if resolved is None:
        return False
    return SchedulingPermission(permission) in ROLE_PERMISSIONS[resolved]


def can_edit(role: SchedulingRole | str | None) -> bool:
    return has_role(role, SchedulingRole.EDITOR)


def is_view_only(role: SchedulingRole | str | None) -> bool:
    return _as_role(role) == SchedulingRole.VIEWER


def check_permission(
    role: SchedulingRole | str | None, permission: SchedulingPermission | str
) -> None:
    """
    Raise unless ``role`` grants ``permission``.

    Raises:
        AuthorizationError: If the permission is not granted
    """
    if not is_allowed(role, permission):
        role_name = role.value if isinstance(role, SchedulingRole) else str(role)
        permission_name = SchedulingPermission(permission).value
        logger.warning("Permission denied: role=%s permission=%s", role_name, permission_name)
        raise AuthorizationError(role_name, permission_name)
