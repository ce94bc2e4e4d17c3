"""
Domain-specific exception hierarchy for the roster planner.
"""


class RosterPlannerError(Exception):
    """Base class for all application-level errors."""


class RosterStructureError(RosterPlannerError):
    """Raised when a day's input does not match the expected roster shape."""


class DayRecordError(RosterPlannerError):
    """Raised when a stored day record cannot be turned into a day input."""
