"""
Roster availability planner: decides whether a team can practice on a day.
"""

__version__ = "0.1.0"
