"""
Logging and metrics for the bay scheduler.

Log records are rendered by structlog and tagged with the service name,
environment and the correlation id of the request being served. Prometheus
counters track HTTP traffic and the outcome of every schedule write.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

_correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "bay_scheduler_correlation_id", default=""
)

HTTP_REQUESTS = Counter(
    "bay_scheduler_http_requests_total",
    "HTTP requests served, by route template and status code",
    ["method", "endpoint", "status"],
)

HTTP_LATENCY = Histogram(
    "bay_scheduler_http_request_duration_seconds",
    "Time spent serving an HTTP request",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

SCHEDULE_OPERATIONS = Counter(
    "bay_scheduler_operations_total",
    "Schedule writes by operation (create, move, transition, unschedule) and outcome",
    ["operation", "status"],
)


def _tag_record(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    correlation_id = _correlation_id.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def _renderer() -> Any:
    if settings.LOG_FORMAT == "console":
        return structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
    return structlog.processors.JSONRenderer()


def setup_structured_logging() -> None:
    """Route stdlib and structlog output through one renderer on stdout."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _tag_record,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def current_correlation_id() -> str:
    return _correlation_id.get()


def bind_correlation_id(correlation_id: str | None = None) -> str:
    """
    Attach a correlation id to everything logged in the current context.

    A fresh UUID is generated when the caller did not supply one.
    """
    correlation_id = correlation_id or uuid.uuid4().hex
    _correlation_id.set(correlation_id)
    return correlation_id


def record_operation(operation: str, status: str) -> None:
    if settings.ENABLE_METRICS:
        SCHEDULE_OPERATIONS.labels(operation=operation, status=status).inc()


def record_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    if not settings.ENABLE_METRICS:
        return
    HTTP_REQUESTS.labels(method=method, endpoint=endpoint, status=str(status_code)).inc()
    HTTP_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)
