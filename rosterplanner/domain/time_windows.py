"""
Wall-clock time windows and the small algebra the resolver needs.

Times are minute-of-day integers (00:00 = 0, 23:59 = 1439). All windows are
on the same day and in the same timezone, so no date arithmetic is involved.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

LAST_MINUTE_OF_DAY = 23 * 60 + 59


def parse_clock(text: str) -> int:
    """
    Parse an ``H:MM`` or ``HH:MM`` string into minutes since midnight.

    Raises:
        ValueError: If the text is not a valid clock time between 00:00 and 23:59
    """
    hours_text, sep, minutes_text = text.strip().partition(":")
    if not text.isascii() or not sep or not hours_text.isdigit() or not minutes_text.isdigit():
        raise ValueError(f"Not a clock time: '{text}'")
    if len(hours_text) > 2 or len(minutes_text) != 2:
        raise ValueError(f"Not a clock time: '{text}'")

    hours = int(hours_text)
    minutes = int(minutes_text)
    if hours > 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hours}")
    if minutes > 59:
        raise ValueError(f"Minute must be between 0 and 59, got {minutes}")

    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class TimeWindow:
    """
    An immutable wall-clock window within one day.

    Invariant: start must be before end.
    """
    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start <= LAST_MINUTE_OF_DAY or not 0 <= self.end <= LAST_MINUTE_OF_DAY:
            raise ValueError(
                f"Window bounds must lie between 00:00 and 23:59, got {self.start}-{self.end}"
            )
        if self.start >= self.end:
            raise ValueError(
                f"Start time {format_clock(self.start)} must be before end time {format_clock(self.end)}"
            )

    @classmethod
    def from_clock(cls, start: str, end: str) -> "TimeWindow":
        """Build a window from two ``HH:MM`` strings."""
        return cls(start=parse_clock(start), end=parse_clock(end))

    @property
    def start_label(self) -> str:
        return format_clock(self.start)

    @property
    def end_label(self) -> str:
        return format_clock(self.end)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window overlaps with another."""
        return self.start < other.end and self.end > other.start

    def intersect(self, other: "TimeWindow") -> Optional["TimeWindow"]:
        """
        Calculate the intersection of two windows.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeWindow(start=max(self.start, other.start), end=min(self.end, other.end))

    def __str__(self) -> str:
        return f"{self.start_label}-{self.end_label}"


def intersect(windows: Iterable[TimeWindow]) -> Optional[TimeWindow]:
    """
    Intersect any number of windows.

    Returns the window ``[max(starts), min(ends))`` when it is non-empty and
    None when the windows share no common minute. The result does not depend
    on the order of the input.

    Raises:
        ValueError: If no windows are given
    """
    window_list = list(windows)
    if not window_list:
        raise ValueError("Cannot intersect an empty collection of windows")

    latest_start = max(window.start for window in window_list)
    earliest_end = min(window.end for window in window_list)

    if latest_start >= earliest_end:
        return None

    return TimeWindow(start=latest_start, end=earliest_end)


def overlap_minutes(window: Optional[TimeWindow]) -> int:
    """Length of a resolved common window, 0 when there is none."""
    if window is None:
        return 0
    return window.duration_minutes()
