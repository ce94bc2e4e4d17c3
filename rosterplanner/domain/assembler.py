"""
Packages a resolver decision into the ScheduleResult handed to callers.

No decisions are made here, only counting and formatting.
"""

from typing import Optional, Sequence

from .availability_parser import parse_person
from .models import (
    DataQualityWarning,
    DayInput,
    Decision,
    PersonAvailability,
    Role,
    ScheduleResult,
    ScheduleStatus,
)
from .roster_resolver import RosterResolver

DATE_FORMAT = "DD.MM.YYYY"


class DayScheduleAssembler:
    """
    Builds ScheduleResult objects with a deterministic status message.
    """

    def __init__(self, locale: str = "en"):
        self.locale = locale

    def assemble(
        self,
        day: DayInput,
        people: Sequence[PersonAvailability],
        decision: Decision,
    ) -> ScheduleResult:
        mains = [person for person in people if person.role is Role.MAIN]
        subs = [person for person in people if person.role is Role.SUB]
        coaches = [person for person in people if person.role is Role.COACH]

        off_day = decision.status is ScheduleStatus.OFF_DAY
        available_subs = tuple(person.name for person in subs if person.available)

        return ScheduleResult(
            date=day.date,
            date_formatted=day.date.format(DATE_FORMAT),
            weekday=day.date.format("dddd", locale=self.locale),
            reason=day.reason,
            focus=day.focus,
            status=decision.status,
            common_time_range=decision.common_time_range,
            available_main_count=0 if off_day else _count_available(mains),
            available_sub_count=0 if off_day else len(available_subs),
            available_coach_count=0 if off_day else _count_available(coaches),
            unavailable_mains=decision.unavailable_mains,
            required_subs=decision.required_subs,
            available_subs=() if off_day else available_subs,
            blocking=decision.blocking,
            people=tuple(people),
            warnings=tuple(
                DataQualityWarning(
                    name=person.name,
                    role=person.role,
                    raw_value=person.raw_value,
                    message=person.cell.error,
                )
                for person in people
                if not off_day and not person.was_valid
            ),
            can_proceed=decision.status in (ScheduleStatus.FULL_ROSTER, ScheduleStatus.WITH_SUBS),
            status_message=self.format_status_message(day, decision),
        )

    @staticmethod
    def format_status_message(day: DayInput, decision: Decision) -> str:
        """
        Human-readable summary of a decision.

        Examples:
            Full roster available 18:00-21:00 (180 min)
            With 1 sub(s): Sub1 for Main3, 18:00-21:00 (180 min)
            Not enough players: Main2, Main3 unavailable
        """
        status = decision.status
        window = decision.common_time_range

        if status is ScheduleStatus.OFF_DAY:
            return f"Off-Day ({day.reason})" if day.reason.strip() else "Off-Day"

        window_text = f"{window} ({window.duration_minutes()} min)" if window else ""

        if status is ScheduleStatus.FULL_ROSTER:
            return f"Full roster available {window_text}"

        if status is ScheduleStatus.WITH_SUBS:
            pairs = ", ".join(
                f"{sub} for {main}"
                for sub, main in zip(decision.required_subs, decision.unavailable_mains)
            )
            return f"With {len(decision.required_subs)} sub(s): {pairs}, {window_text}"

        if decision.no_common_window:
            return "Not enough players: no common time window"
        if decision.blocking:
            return f"Not enough players: {', '.join(decision.blocking)} unavailable"
        return "Not enough players"


def resolve_day(
    day: DayInput,
    *,
    resolver: Optional[RosterResolver] = None,
    assembler: Optional[DayScheduleAssembler] = None,
) -> ScheduleResult:
    """
    Parse, resolve and assemble one day.

    Raises:
        RosterStructureError: If the day does not have the expected roster shape
    """
    resolver = resolver or RosterResolver()
    assembler = assembler or DayScheduleAssembler()

    mains = [parse_person(entry, Role.MAIN, entry.name in day.absent) for entry in day.mains]
    subs = [parse_person(entry, Role.SUB, entry.name in day.absent) for entry in day.subs]
    coach = (
        parse_person(day.coach, Role.COACH, day.coach.name in day.absent)
        if day.coach is not None
        else None
    )

    decision = resolver.resolve(mains, subs, coach, reason=day.reason, off_day=day.off_day)

    people = [*mains, *subs] + ([coach] if coach is not None else [])
    return assembler.assemble(day, people, decision)


def _count_available(people: Sequence[PersonAvailability]) -> int:
    return sum(1 for person in people if person.available)
