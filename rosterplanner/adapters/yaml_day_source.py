"""
Day-record source backed by a YAML file, for local use and testing.
"""

import datetime
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum
import yaml
from pendulum import Date

from ..domain.exceptions import DayRecordError
from ..services.schedule_service import DayRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "DD.MM.YYYY"


class YamlDaySource:
    """
    Loads day rows from a YAML list.

    Expected shape::

        - date: 15.01.2026
          reason: Training
          focus: Retakes
          availability:
            Alice: 18:00-21:00
            Bob: x
          absent: [Carol]
    """

    def __init__(self, path: Path, timezone: str = "Europe/Berlin"):
        self.path = path
        self.timezone = timezone

    async def get_day_records(self, start: Date, end: Date) -> List[DayRecord]:
        """Return the records whose date lies between start and end (inclusive)."""
        return [record for record in self.load() if start <= record.date <= end]

    def load(self) -> List[DayRecord]:
        """
        Read and convert every row in the file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            DayRecordError: If the file or one of its rows is invalid
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Day file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                rows = yaml.safe_load(f) or []
        except yaml.YAMLError as exc:
            raise DayRecordError(f"Invalid YAML in {self.path}: {exc}") from exc

        if not isinstance(rows, list):
            raise DayRecordError("Day file must contain a list of days at the root level.")

        records = [self._to_record(row) for row in rows]
        logger.debug("Loaded %d day record(s) from %s", len(records), self.path)
        return records

    def _to_record(self, row: Any) -> DayRecord:
        if not isinstance(row, dict):
            raise DayRecordError(f"Day entry must be a mapping, got: {row!r}")
        if "date" not in row:
            raise DayRecordError(f"Day entry without a date: {row!r}")

        availability: Dict[str, Any] = row.get("availability") or {}
        if not isinstance(availability, dict):
            raise DayRecordError(f"'availability' must be a mapping of name to value: {row!r}")

        absent = row.get("absent") or []
        if isinstance(absent, str):
            absent = [absent]
        if not isinstance(absent, list):
            raise DayRecordError(f"'absent' must be a name or a list of names: {row!r}")

        return DayRecord(
            date=self.parse_date(row["date"]),
            cells={str(name): "" if raw is None else str(raw) for name, raw in availability.items()},
            reason=str(row.get("reason") or ""),
            focus=str(row.get("focus") or ""),
            off_day=bool(row.get("off_day", False)),
            absent=frozenset(str(name) for name in absent),
        )

    def parse_date(self, value: Any) -> Date:
        """Accept ``DD.MM.YYYY`` strings or dates YAML already converted."""
        if isinstance(value, datetime.date):
            return pendulum.date(value.year, value.month, value.day)

        try:
            return pendulum.from_format(str(value).strip(), DATE_FORMAT, tz=self.timezone).date()
        except ValueError as exc:
            raise DayRecordError(f"Invalid date '{value}', expected {DATE_FORMAT}") from exc
