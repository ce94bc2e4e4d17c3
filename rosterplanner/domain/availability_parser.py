"""
Turns raw availability cells into parsed availability records.
"""

import re

from .models import AvailabilityKind, ParsedCell, PersonAvailability, Role, RosterEntry
from .time_windows import TimeWindow, parse_clock

UNAVAILABLE_TOKEN = "x"
ABSENT_VALUE = "absent"

_WINDOW_PATTERN = re.compile(r"^(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})$", re.ASCII)


def parse_availability(raw: str) -> ParsedCell:
    """
    Parse one raw cell value.

    ``x`` (any case) means unavailable, ``HH:MM-HH:MM`` means available in
    that window. Everything else, including an empty cell or a window that
    ends before it starts, is reported as malformed rather than guessed.
    """
    value = raw.strip()

    if value.lower() == UNAVAILABLE_TOKEN:
        return ParsedCell(kind=AvailabilityKind.UNAVAILABLE, raw_value=raw)

    if not value:
        return _malformed(raw, "no availability entered")

    match = _WINDOW_PATTERN.match(value)
    if not match:
        return _malformed(raw, "expected 'x' or a window like 18:00-21:00")

    try:
        start = parse_clock(match.group(1))
        end = parse_clock(match.group(2))
    except ValueError as exc:
        return _malformed(raw, str(exc))

    if start >= end:
        return _malformed(raw, f"window start {match.group(1)} is not before end {match.group(2)}")

    return ParsedCell(
        kind=AvailabilityKind.AVAILABLE,
        raw_value=raw,
        window=TimeWindow(start=start, end=end),
    )


def parse_person(entry: RosterEntry, role: Role, absent: bool = False) -> PersonAvailability:
    """Parse a roster slot; a registered absence overrides the cell value."""
    if absent:
        cell = ParsedCell(kind=AvailabilityKind.ABSENT, raw_value=ABSENT_VALUE)
    else:
        cell = parse_availability(entry.raw)
    return PersonAvailability(name=entry.name, role=role, cell=cell)


def _malformed(raw: str, message: str) -> ParsedCell:
    return ParsedCell(kind=AvailabilityKind.MALFORMED, raw_value=raw, error=message)
