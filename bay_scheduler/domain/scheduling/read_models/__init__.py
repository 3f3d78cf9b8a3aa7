"""
Read models for scheduling domain projections.

These models provide dashboard views computed from a schedule snapshot,
separate from the rescheduling write path.
"""

from .hours_flow import HoursFlowPoint, HoursFlowReadModel, HoursFlowSeries
from .weekly_utilization import (
    TeamWeekUtilization,
    WeeklyBayUtilization,
    WeeklyUtilizationReadModel,
)

__all__ = [
    "HoursFlowPoint",
    "HoursFlowReadModel",
    "HoursFlowSeries",
    "TeamWeekUtilization",
    "WeeklyBayUtilization",
    "WeeklyUtilizationReadModel",
]
