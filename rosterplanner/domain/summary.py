"""
Condensed views of a ScheduleResult for dashboards and change notifications.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import AvailabilityKind, Role, ScheduleResult, ScheduleStatus

LABEL_UNKNOWN = "Unknown"
LABEL_OFF_DAY = "Off-Day"
LABEL_ABLE_TO_PLAY = "Able to play"
LABEL_ALMOST_THERE = "Almost there"
LABEL_INSUFFICIENT = "Insufficient players"

STATUS_RANK: Dict[ScheduleStatus, int] = {
    ScheduleStatus.OFF_DAY: 0,
    ScheduleStatus.NOT_ENOUGH: 1,
    ScheduleStatus.WITH_SUBS: 2,
    ScheduleStatus.FULL_ROSTER: 3,
}


@dataclass(frozen=True)
class ScheduleDetail:
    """Who is in, who is out, and a short label for one day."""
    label: str
    start: Optional[str]
    end: Optional[str]
    available_players: Tuple[str, ...]
    unavailable_players: Tuple[str, ...]
    no_response_players: Tuple[str, ...]
    absent_players: Tuple[str, ...]


def summarize(result: ScheduleResult) -> ScheduleDetail:
    """
    Reduce a result to the lists a dashboard shows for the main roster.

    A main with an empty cell has not responded yet. If no non-absent main
    has responded, the label is ``Unknown`` unless the day is an off-day.
    """
    mains = result.people_with_role(Role.MAIN)

    available = tuple(p.name for p in mains if p.available)
    unavailable = tuple(p.name for p in mains if p.kind is AvailabilityKind.UNAVAILABLE)
    no_response = tuple(p.name for p in mains if _no_response(p.kind, p.raw_value))
    absent = tuple(p.name for p in result.people if p.kind is AvailabilityKind.ABSENT)

    present_mains = [p for p in mains if p.kind is not AvailabilityKind.ABSENT]
    nobody_answered = (
        result.status is not ScheduleStatus.OFF_DAY
        and bool(present_mains)
        and all(_no_response(p.kind, p.raw_value) for p in present_mains)
    )

    window = result.common_time_range
    return ScheduleDetail(
        label=LABEL_UNKNOWN if nobody_answered else status_label(result),
        start=window.start_label if window else None,
        end=window.end_label if window else None,
        available_players=available,
        unavailable_players=unavailable,
        no_response_players=no_response,
        absent_players=absent,
    )


def status_label(result: ScheduleResult) -> str:
    if result.status is ScheduleStatus.OFF_DAY:
        return LABEL_OFF_DAY
    if result.can_proceed:
        return LABEL_ABLE_TO_PLAY

    if _shortfall(result) == 1:
        return LABEL_ALMOST_THERE
    return LABEL_INSUFFICIENT


def _shortfall(result: ScheduleResult) -> int:
    """Number of people still missing: uncovered main slots plus a missing coach."""
    roster_size = len(result.people_with_role(Role.MAIN))
    players = min(result.available_main_count + result.available_sub_count, roster_size)
    coach_missing = 0 if result.available_coach_count else 1
    return roster_size - players + coach_missing


def has_status_improved(old: ScheduleStatus, new: ScheduleStatus) -> bool:
    """True when ``new`` is strictly better for playing than ``old``."""
    return STATUS_RANK[new] > STATUS_RANK[old]


def _no_response(kind: AvailabilityKind, raw_value: str) -> bool:
    return kind is AvailabilityKind.MALFORMED and not raw_value.strip()
