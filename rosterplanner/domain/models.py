"""
Domain models for roster availability and day schedules.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pendulum import Date

from .time_windows import TimeWindow, overlap_minutes


class Role(Enum):
    MAIN = "MAIN"
    SUB = "SUB"
    COACH = "COACH"


class AvailabilityKind(Enum):
    """
    Closed set of states a single person can be in for one day.
    """
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    MALFORMED = "malformed"
    ABSENT = "absent"


class ScheduleStatus(Enum):
    OFF_DAY = "OFF_DAY"
    FULL_ROSTER = "FULL_ROSTER"
    WITH_SUBS = "WITH_SUBS"
    NOT_ENOUGH = "NOT_ENOUGH"


@dataclass(frozen=True)
class ParsedCell:
    """
    Result of parsing one raw availability cell.

    Invariant: a window is present exactly when the kind is AVAILABLE,
    and an error message is present exactly when the kind is MALFORMED.
    """
    kind: AvailabilityKind
    raw_value: str
    window: Optional[TimeWindow] = None
    error: Optional[str] = None

    def __post_init__(self):
        if (self.kind is AvailabilityKind.AVAILABLE) != (self.window is not None):
            raise ValueError(f"Only available cells carry a window, got {self.kind.value} with {self.window}")
        if (self.kind is AvailabilityKind.MALFORMED) != (self.error is not None):
            raise ValueError(f"Only malformed cells carry an error, got {self.kind.value}")

    @property
    def available(self) -> bool:
        return self.kind is AvailabilityKind.AVAILABLE

    @property
    def was_valid(self) -> bool:
        return self.kind is not AvailabilityKind.MALFORMED


@dataclass(frozen=True)
class PersonAvailability:
    """
    One person's parsed availability for a single day.
    """
    name: str
    role: Role
    cell: ParsedCell

    @property
    def kind(self) -> AvailabilityKind:
        return self.cell.kind

    @property
    def available(self) -> bool:
        return self.cell.available

    @property
    def was_valid(self) -> bool:
        return self.cell.was_valid

    @property
    def window(self) -> Optional[TimeWindow]:
        return self.cell.window

    @property
    def raw_value(self) -> str:
        return self.cell.raw_value


@dataclass(frozen=True)
class RosterEntry:
    """A named roster slot together with its raw cell value."""
    name: str
    raw: str


@dataclass(frozen=True)
class DayInput:
    """
    The unparsed row for one day, as supplied by the caller.

    ``absent`` holds names of people with a registered absence for the date;
    their cell value is ignored.
    """
    date: Date
    mains: Tuple[RosterEntry, ...]
    subs: Tuple[RosterEntry, ...] = ()
    coach: Optional[RosterEntry] = None
    reason: str = ""
    focus: str = ""
    off_day: bool = False
    absent: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Decision:
    """
    The resolver's verdict for one day, before any formatting.

    ``blocking`` names whoever prevents the day from being playable: mains
    left uncovered and an unavailable coach.
    """
    status: ScheduleStatus
    common_time_range: Optional[TimeWindow] = None
    unavailable_mains: Tuple[str, ...] = ()
    required_subs: Tuple[str, ...] = ()
    blocking: Tuple[str, ...] = ()
    no_common_window: bool = False


@dataclass(frozen=True)
class DataQualityWarning:
    """A cell that could not be parsed and was treated as unavailable."""
    name: str
    role: Role
    raw_value: str
    message: str

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value}): '{self.raw_value}' - {self.message}"


@dataclass(frozen=True)
class ScheduleResult:
    """
    Final, immutable outcome for one day.
    """
    date: Date
    date_formatted: str
    weekday: str
    reason: str
    focus: str
    status: ScheduleStatus
    common_time_range: Optional[TimeWindow]
    available_main_count: int
    available_sub_count: int
    available_coach_count: int
    unavailable_mains: Tuple[str, ...]
    required_subs: Tuple[str, ...]
    available_subs: Tuple[str, ...]
    blocking: Tuple[str, ...]
    people: Tuple[PersonAvailability, ...]
    warnings: Tuple[DataQualityWarning, ...]
    can_proceed: bool
    status_message: str

    @property
    def overlap_minutes(self) -> int:
        return overlap_minutes(self.common_time_range)

    def people_with_role(self, role: Role) -> Tuple[PersonAvailability, ...]:
        return tuple(person for person in self.people if person.role is role)
