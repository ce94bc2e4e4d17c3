"""
Domain layer - Pure business logic without external dependencies.
"""

from .assembler import DayScheduleAssembler, resolve_day
from .availability_parser import parse_availability, parse_person
from .exceptions import DayRecordError, RosterPlannerError, RosterStructureError
from .models import (
    AvailabilityKind,
    DataQualityWarning,
    DayInput,
    Decision,
    ParsedCell,
    PersonAvailability,
    Role,
    RosterEntry,
    ScheduleResult,
    ScheduleStatus,
)
from .roster_resolver import RosterResolver
from .time_windows import TimeWindow, intersect, overlap_minutes

__all__ = [
    "AvailabilityKind",
    "DataQualityWarning",
    "DayInput",
    "DayRecordError",
    "DayScheduleAssembler",
    "Decision",
    "ParsedCell",
    "PersonAvailability",
    "Role",
    "RosterEntry",
    "RosterPlannerError",
    "RosterResolver",
    "RosterStructureError",
    "ScheduleResult",
    "ScheduleStatus",
    "TimeWindow",
    "intersect",
    "overlap_minutes",
    "parse_availability",
    "parse_person",
    "resolve_day",
]
