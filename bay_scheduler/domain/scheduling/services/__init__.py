"""
Domain Services

Scheduling logic that spans several records: conflict detection, reporting
periods, phase hour projection, bay utilization and rescheduling.
"""

from .conflict_detector import find_all_conflicts, find_conflict, has_conflict
from .period_generator import fiscal_weeks_for_month, generate_periods
from .phase_projector import phase_breakdown, phase_hours, phase_window
from .rescheduler import BayLockRegistry, ReschedulingService, default_duration_days
from .utilization import UtilizationReport, calculate_utilization

__all__ = [
    "BayLockRegistry",
    "ReschedulingService",
    "UtilizationReport",
    "calculate_utilization",
    "default_duration_days",
    "find_all_conflicts",
    "find_conflict",
    "fiscal_weeks_for_month",
    "generate_periods",
    "has_conflict",
    "phase_breakdown",
    "phase_hours",
    "phase_window",
]
