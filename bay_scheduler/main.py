import time

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware

from bay_scheduler.api.main import api_router
from bay_scheduler.core.config import settings
from bay_scheduler.core.observability import (
    bind_correlation_id,
    get_logger,
    record_request,
    setup_structured_logging,
)
from bay_scheduler.domain.scheduling.repositories.schedule_store import ScheduleStore
from bay_scheduler.domain.scheduling.services.rescheduler import ReschedulingService
from bay_scheduler.domain.scheduling.value_objects.business_calendar import BusinessCalendar
from bay_scheduler.infrastructure.memory_store import InMemoryScheduleStore

logger = get_logger(__name__)


CORRELATION_HEADER = "X-Correlation-ID"


def _endpoint_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation id, then logs and times it."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = bind_correlation_id(request.headers.get(CORRELATION_HEADER))
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - started
            record_request(request.method, _endpoint_label(request), 500, elapsed)
            logger.exception(
                "Unhandled error while serving request",
                method=request.method,
                path=request.url.path,
                duration_seconds=round(elapsed, 4),
            )
            raise

        elapsed = time.perf_counter() - started
        endpoint = _endpoint_label(request)
        record_request(request.method, endpoint, response.status_code, elapsed)
        response.headers[CORRELATION_HEADER] = correlation_id
        logger.info(
            "Request served",
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_seconds=round(elapsed, 4),
        )
        return response



def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


def create_app(
    store: ScheduleStore | None = None,
    calendar: BusinessCalendar | None = None,
) -> FastAPI:
    """
    Build the API application around a schedule store.

    Args:
        store: Store holding bays, projects and assignments; an empty
            in-memory store when omitted
        calendar: Business calendar used to align new start dates
    """
    setup_structured_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Manufacturing bay scheduling and capacity projection API",
        version="0.1.0",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.store = store if store is not None else InMemoryScheduleStore()
    app.state.rescheduler = ReschedulingService(app.state.store, calendar=calendar)

    app.add_middleware(ObservabilityMiddleware)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    logger.info(
        "Application configured",
        project_name=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        api_version=settings.API_V1_STR,
        metrics_enabled=settings.ENABLE_METRICS,
    )
    return app


app = create_app()
