"""
Application services for resolving stored day records.

The service coordinates fetching raw day records through a source adapter and
delegates the actual decision to the domain-level ``RosterResolver``. Keeping
the source behind a protocol lets tests swap in a simple stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Protocol

from pendulum import Date

from ..config import AppConfig, RosterMember
from ..domain.assembler import resolve_day
from ..domain.models import DayInput, RosterEntry, ScheduleResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayRecord:
    """
    One stored day as the host application keeps it: cells keyed by name.
    """
    date: Date
    cells: Dict[str, str] = field(default_factory=dict)
    reason: str = ""
    focus: str = ""
    off_day: bool = False
    absent: FrozenSet[str] = field(default_factory=frozenset)


class DayRecordSourceProtocol(Protocol):
    """Protocol describing where day records come from."""

    async def get_day_records(self, start: Date, end: Date) -> List[DayRecord]:
        """Return the stored records between start and end (inclusive)."""


class ScheduleService:
    """
    Orchestrates day-record retrieval and day resolution.
    """

    def __init__(self, source: DayRecordSourceProtocol, config: AppConfig) -> None:
        self._source = source
        self._config = config
        self._resolver = config.build_resolver()
        self._assembler = config.build_assembler()

    async def resolve_range(self, start: Date, end: Date) -> List[ScheduleResult]:
        """
        Resolve every stored day between start and end, ordered by date.

        Raises:
            RosterStructureError: If a record cannot form a complete roster
        """
        records = await self._source.get_day_records(start, end)
        ordered = sorted(records, key=lambda record: record.date)
        return [self.resolve_record(record) for record in ordered]

    async def resolve_date(self, date: Date) -> Optional[ScheduleResult]:
        """Resolve a single date, or None when nothing is stored for it."""
        results = await self.resolve_range(date, date)
        for result in results:
            if result.date == date:
                return result
        return None

    def resolve_record(self, record: DayRecord) -> ScheduleResult:
        """Resolve one record and log any data-quality problems it carries."""
        result = resolve_day(
            self.build_day_input(record),
            resolver=self._resolver,
            assembler=self._assembler,
        )

        for warning in result.warnings:
            logger.warning("Unreadable availability on %s: %s", result.date_formatted, warning)

        return result

    def build_day_input(self, record: DayRecord) -> DayInput:
        """
        Map a name-keyed record onto the configured roster slots.

        Members without a cell get an empty one, which resolves as no response.
        """
        roster = self._config.roster
        cells = self._normalize_cells(record.cells)

        absent = frozenset(
            member.name
            for member in roster.members()
            if any(member.matches(name) for name in record.absent)
        )

        return DayInput(
            date=record.date,
            mains=tuple(self._entry(member, cells) for member in roster.mains),
            subs=tuple(self._entry(member, cells) for member in roster.subs),
            coach=self._entry(roster.coach, cells),
            reason=record.reason,
            focus=record.focus,
            off_day=record.off_day,
            absent=absent,
        )

    def _normalize_cells(self, cells: Dict[str, str]) -> Dict[str, str]:
        """
        Re-key cells by canonical member name; unknown names are dropped.
        """
        normalized: Dict[str, str] = {}

        for identifier, raw in cells.items():
            member = self._config.find_member(identifier)
            if member is None:
                logger.debug("Ignoring cell for unknown roster name '%s'", identifier)
                continue
            normalized[member.name] = "" if raw is None else str(raw)

        return normalized

    @staticmethod
    def _entry(member: RosterMember, cells: Dict[str, str]) -> RosterEntry:
        return RosterEntry(name=member.name, raw=cells.get(member.name, ""))
