"""Store interfaces for the scheduling domain."""

from .schedule_store import ScheduleStore

__all__ = ["ScheduleStore"]
