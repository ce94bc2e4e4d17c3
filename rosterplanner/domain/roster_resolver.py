"""
Core decision logic: can the team play on a given day, and with whom?

Pure domain logic without any external dependencies (no storage, no I/O).
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .exceptions import RosterStructureError
from .models import Decision, PersonAvailability, ScheduleStatus
from .time_windows import TimeWindow, intersect

logger = logging.getLogger(__name__)

DEFAULT_MAIN_ROSTER_SIZE = 5
DEFAULT_OFF_DAY_KEYWORDS = ("off",)


class RosterResolver:
    """
    Decides the schedule status for one day from parsed availability.

    Rules are evaluated in order and the first one that applies wins:
    1. OFF_DAY - the day is flagged as a rest day
    2. FULL_ROSTER - every main is available (needs coach and a common window)
    3. WITH_SUBS - missing mains are covered by subs in roster order,
       otherwise NOT_ENOUGH
    """

    def __init__(
        self,
        main_roster_size: int = DEFAULT_MAIN_ROSTER_SIZE,
        off_day_keywords: Iterable[str] = DEFAULT_OFF_DAY_KEYWORDS,
    ):
        if main_roster_size < 1:
            raise ValueError(f"main_roster_size must be at least 1, got {main_roster_size}")
        self.main_roster_size = main_roster_size
        self.off_day_keywords = tuple(keyword.lower() for keyword in off_day_keywords)
        self._off_day_patterns = [
            re.compile(rf"\b{re.escape(keyword)}\b") for keyword in self.off_day_keywords
        ]

    def resolve(
        self,
        mains: Sequence[PersonAvailability],
        subs: Sequence[PersonAvailability],
        coach: Optional[PersonAvailability],
        reason: str = "",
        off_day: bool = False,
    ) -> Decision:
        """
        Resolve one day.

        Args:
            mains: Parsed main players, exactly ``main_roster_size`` of them
            subs: Parsed subs in roster-declared order
            coach: Parsed coach record
            reason: Free-text reason of the day, checked for off-day keywords
            off_day: Explicit off-day flag from the caller

        Returns:
            The Decision for the day

        Raises:
            RosterStructureError: If the roster shape is wrong
        """
        self.validate_structure(mains, coach)

        rules: Tuple[Callable[[], Optional[Decision]], ...] = (
            lambda: self._off_day_rule(reason, off_day),
            lambda: self._full_roster_rule(mains, coach),
        )

        for rule in rules:
            decision = rule()
            if decision is not None:
                break
        else:
            decision = self._with_subs_rule(mains, subs, coach)

        logger.debug("Resolved day as %s", decision.status.value)
        return decision

    def validate_structure(
        self,
        mains: Sequence[PersonAvailability],
        coach: Optional[PersonAvailability],
    ) -> None:
        """Raise RosterStructureError when the day does not have the roster shape."""
        if len(mains) != self.main_roster_size:
            raise RosterStructureError(
                f"Expected {self.main_roster_size} main players, got {len(mains)}"
            )
        if coach is None:
            raise RosterStructureError("No coach record supplied for the day")

    def is_off_day(self, reason: str, off_day: bool = False) -> bool:
        """Check the explicit flag, then the reason text for an off-day keyword."""
        if off_day:
            return True
        text = reason.lower()
        return any(pattern.search(text) for pattern in self._off_day_patterns)

    def _off_day_rule(self, reason: str, off_day: bool) -> Optional[Decision]:
        if not self.is_off_day(reason, off_day):
            return None
        return Decision(status=ScheduleStatus.OFF_DAY)

    def _full_roster_rule(
        self,
        mains: Sequence[PersonAvailability],
        coach: PersonAvailability,
    ) -> Optional[Decision]:
        if _unavailable(mains):
            return None

        if not coach.available:
            return Decision(status=ScheduleStatus.NOT_ENOUGH, blocking=(coach.name,))

        return self._decide_window(
            ScheduleStatus.FULL_ROSTER,
            participants=[*mains, coach],
            unavailable_mains=(),
            required_subs=(),
        )

    def _with_subs_rule(
        self,
        mains: Sequence[PersonAvailability],
        subs: Sequence[PersonAvailability],
        coach: PersonAvailability,
    ) -> Decision:
        missing = _unavailable(mains)
        unavailable_names = tuple(person.name for person in missing)
        selected = select_subs(subs, len(missing))

        blocking: List[str] = [person.name for person in missing[len(selected):]]
        if not coach.available:
            blocking.append(coach.name)

        if blocking:
            logger.debug(
                "Cannot cover %d missing main(s) with %d sub(s), coach available: %s",
                len(missing), len(selected), coach.available,
            )
            return Decision(
                status=ScheduleStatus.NOT_ENOUGH,
                unavailable_mains=unavailable_names,
                blocking=tuple(blocking),
            )

        present = [person for person in mains if person.available]
        return self._decide_window(
            ScheduleStatus.WITH_SUBS,
            participants=[*present, *selected, coach],
            unavailable_mains=unavailable_names,
            required_subs=tuple(person.name for person in selected),
        )

    @staticmethod
    def _decide_window(
        status: ScheduleStatus,
        participants: Sequence[PersonAvailability],
        unavailable_mains: Tuple[str, ...],
        required_subs: Tuple[str, ...],
    ) -> Decision:
        windows: List[TimeWindow] = [person.window for person in participants]
        common = intersect(windows)

        if common is None:
            logger.debug("No common window across %d participants", len(participants))
            return Decision(
                status=ScheduleStatus.NOT_ENOUGH,
                unavailable_mains=unavailable_mains,
                no_common_window=True,
            )

        return Decision(
            status=status,
            common_time_range=common,
            unavailable_mains=unavailable_mains,
            required_subs=required_subs,
        )


def select_subs(subs: Sequence[PersonAvailability], needed: int) -> List[PersonAvailability]:
    """
    Pick up to ``needed`` available subs, first come first served in roster order.
    """
    selected: List[PersonAvailability] = []
    for sub in subs:
        if len(selected) == needed:
            break
        if sub.available:
            selected.append(sub)
    return selected


def _unavailable(people: Sequence[PersonAvailability]) -> List[PersonAvailability]:
    return [person for person in people if not person.available]
