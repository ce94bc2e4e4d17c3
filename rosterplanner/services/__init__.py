"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .schedule_service import DayRecord, DayRecordSourceProtocol, ScheduleService

__all__ = ["DayRecord", "DayRecordSourceProtocol", "ScheduleService"]
