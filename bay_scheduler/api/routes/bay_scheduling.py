"""
Bay Scheduling API Routes.

Endpoints for placing projects into manufacturing bays, checking bay
conflicts, and reading utilization and hours-flow projections. The routes
only translate HTTP to domain calls and domain errors to status codes.
"""

from datetime import date
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bay_scheduler.api.deps import ReschedulerDep, StoreDep, require_permission
from bay_scheduler.application.dtos.scheduling_dtos import (
    AssignmentResponse,
    ConflictCheckResponse,
    CreateAssignmentRequest,
    MoveAssignmentRequest,
    StatusChangeRequest,
    UtilizationResponse,
)
from bay_scheduler.core.rbac import SchedulingPermission
from bay_scheduler.domain.scheduling.read_models.hours_flow import (
    HoursFlowReadModel,
    HoursFlowSeries,
)
from bay_scheduler.domain.scheduling.read_models.weekly_utilization import (
    WeeklyBayUtilization,
    WeeklyUtilizationReadModel,
)
from bay_scheduler.domain.scheduling.services.conflict_detector import find_conflict
from bay_scheduler.domain.scheduling.services.period_generator import MAX_YEAR, MIN_YEAR
from bay_scheduler.domain.scheduling.services.utilization import (
    assess_bays,
    bay_status_info,
    calculate_utilization,
    overall_load_insight,
)
from bay_scheduler.domain.scheduling.value_objects.enums import (
    Granularity,
    Timeframe,
    UtilizationModel,
)
from bay_scheduler.domain.shared.exceptions import BayNotFoundError, DomainError, ErrorType

router = APIRouter()

_STATUS_BY_ERROR_TYPE = {
    ErrorType.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorType.RESOURCE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
}


def _raise_http(error: DomainError) -> NoReturn:
    raise HTTPException(
        status_code=_STATUS_BY_ERROR_TYPE.get(error.error_type, status.HTTP_400_BAD_REQUEST),
        detail=error.to_dict(),
    ) from error


@router.get(
    "/bays/{bay_id}/conflicts",
    summary="Check a bay for conflicts",
    response_model=ConflictCheckResponse,
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_READ))],
)
def check_bay_conflict(
    bay_id: int,
    store: StoreDep,
    start_date: date = Query(..., description="First day of the candidate range"),
    end_date: date = Query(..., description="Last day of the candidate range"),
    exclude_id: int | None = Query(None, description="Assignment to ignore"),
) -> ConflictCheckResponse:
    """Report whether ``[start_date, end_date]`` collides with the bay's schedule."""
    if store.get_bay(bay_id) is None:
        _raise_http(BayNotFoundError(bay_id))

    conflict = find_conflict(
        bay_id, start_date, end_date, exclude_id, store.list_assignments()
    )
    return ConflictCheckResponse(
        has_conflict=conflict is not None,
        conflicting_assignment=(
            AssignmentResponse.from_assignment(conflict) if conflict else None
        ),
    )


@router.get(
    "/utilization",
    summary="Bay and fleet utilization",
    response_model=UtilizationResponse,
    dependencies=[Depends(require_permission(SchedulingPermission.UTILIZATION_VIEW))],
)
def get_utilization(
    store: StoreDep,
    model: UtilizationModel | None = Query(
        None, description="occupancy (system of record) or peak_load"
    ),
    as_of: date | None = Query(None, description="Reference day; defaults to today"),
) -> UtilizationResponse:
    snapshot = store.snapshot()
    as_of = as_of or date.today()
    report = calculate_utilization(
        snapshot.bays, snapshot.assignments, model, as_of, snapshot.projects
    )

    response = UtilizationResponse(
        model=report.model,
        is_system_of_record=report.is_system_of_record,
        as_of=as_of,
        bay_utilization=report.bay_utilization,
        fleet_utilization=report.fleet_utilization,
    )
    if report.is_system_of_record:
        response.fleet_status = bay_status_info(report.fleet_utilization)
    else:
        response.assessments = assess_bays(snapshot.bays, report)
        response.load_insight = overall_load_insight(response.assessments)
    return response


@router.get(
    "/utilization/weekly",
    summary="Phase-aligned weekly bay utilization",
    response_model=list[WeeklyBayUtilization],
    dependencies=[Depends(require_permission(SchedulingPermission.UTILIZATION_VIEW))],
)
def get_weekly_utilization(
    store: StoreDep,
    start: date | None = Query(None, description="Any day in the first week"),
    weeks: int = Query(26, ge=1, le=104),
) -> list[WeeklyBayUtilization]:
    return WeeklyUtilizationReadModel(store.snapshot()).get_weekly_utilization(
        start, weeks
    )


@router.get(
    "/hours-flow",
    summary="Earned and projected hours per period",
    response_model=HoursFlowSeries,
    dependencies=[Depends(require_permission(SchedulingPermission.REPORT_VIEW))],
)
def get_hours_flow(
    store: StoreDep,
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    granularity: Granularity = Query(Granularity.MONTH),
    timeframe: Timeframe = Query(Timeframe.FUTURE),
    as_of: date | None = Query(None, description="Reference day; defaults to today"),
    manual_capacity: float | None = Query(None, gt=0),
) -> HoursFlowSeries:
    return HoursFlowReadModel(store.snapshot()).get_hours_flow(
        year, granularity, timeframe, as_of, manual_capacity
    )


@router.get(
    "/schedules",
    summary="List bay assignments",
    response_model=list[AssignmentResponse],
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_READ))],
)
def list_assignments(
    store: StoreDep,
    bay_id: int | None = Query(None, description="Filter by bay"),
) -> list[AssignmentResponse]:
    return [
        AssignmentResponse.from_assignment(a)
        for a in sorted(store.list_assignments(), key=lambda a: (a.bay_id, a.start_date))
        if bay_id is None or a.bay_id == bay_id
    ]


@router.post(
    "/schedules",
    summary="Schedule a project into a bay",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid assignment data"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Project or bay not found"},
        409: {"description": "Bay already scheduled for these dates"},
    },
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_CREATE))],
)
def create_assignment(
    request: CreateAssignmentRequest, rescheduler: ReschedulerDep
) -> AssignmentResponse:
    try:
        assignment = rescheduler.create(
            request.project_id,
            request.bay_id,
            request.start_date,
            grid_scale=request.grid_scale,
            duration_days=request.duration_days,
        )
    except DomainError as e:
        _raise_http(e)
    return AssignmentResponse.from_assignment(assignment)


@router.put(
    "/schedules/{assignment_id}/move",
    summary="Move an assignment",
    response_model=AssignmentResponse,
    responses={
        404: {"description": "Assignment or bay not found"},
        409: {"description": "Bay already scheduled for these dates"},
    },
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_MODIFY))],
)
def move_assignment(
    assignment_id: int, request: MoveAssignmentRequest, rescheduler: ReschedulerDep
) -> AssignmentResponse:
    try:
        assignment = rescheduler.move(assignment_id, request.bay_id, request.start_date)
    except DomainError as e:
        _raise_http(e)
    return AssignmentResponse.from_assignment(assignment)


@router.patch(
    "/schedules/{assignment_id}/status",
    summary="Change an assignment's status",
    response_model=AssignmentResponse,
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_MODIFY))],
)
def change_assignment_status(
    assignment_id: int, request: StatusChangeRequest, rescheduler: ReschedulerDep
) -> AssignmentResponse:
    try:
        assignment = rescheduler.transition_status(assignment_id, request.status)
    except DomainError as e:
        _raise_http(e)
    return AssignmentResponse.from_assignment(assignment)


@router.delete(
    "/schedules/{assignment_id}",
    summary="Remove an assignment",
    response_model=AssignmentResponse,
    dependencies=[Depends(require_permission(SchedulingPermission.SCHEDULE_DELETE))],
)
def delete_assignment(
    assignment_id: int, rescheduler: ReschedulerDep
) -> AssignmentResponse:
    try:
        assignment = rescheduler.unschedule(assignment_id)
    except DomainError as e:
        _raise_http(e)
    return AssignmentResponse.from_assignment(assignment)
