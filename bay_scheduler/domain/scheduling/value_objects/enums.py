"""Enumerations used across the bay scheduling domain."""

from enum import Enum


class AssignmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    MAINTENANCE = "maintenance"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    DELAYED = "delayed"
    CRITICAL = "critical"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    ARCHIVED = "archived"


class Phase(str, Enum):
    """Manufacturing phases in production order."""

    FAB = "fab"
    PAINT = "paint"
    PRODUCTION = "production"
    IT = "it"
    NTC = "ntc"
    QC = "qc"


class Granularity(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class Timeframe(str, Enum):
    HISTORICAL = "historical"
    FUTURE = "future"


class GridScale(str, Enum):
    """Zoom level of the scheduling grid a project was dropped on."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class UtilizationModel(str, Enum):
    OCCUPANCY = "occupancy"
    PEAK_LOAD = "peak_load"


class BayLoadStatus(str, Enum):
    UNDERUTILIZED = "underutilized"
    BALANCED = "balanced"
    OVERLOADED = "overloaded"
