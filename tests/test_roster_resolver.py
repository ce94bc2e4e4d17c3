"""
Tests for the roster resolver.
"""

from typing import List, Sequence

import pytest

from rosterplanner.domain.availability_parser import parse_person
from rosterplanner.domain.exceptions import RosterStructureError
from rosterplanner.domain.models import PersonAvailability, Role, RosterEntry, ScheduleStatus
from rosterplanner.domain.roster_resolver import RosterResolver, select_subs
from rosterplanner.domain.time_windows import TimeWindow


def _people(role: Role, cells: Sequence[str], prefix: str) -> List[PersonAvailability]:
    return [
        parse_person(RosterEntry(name=f"{prefix}{index}", raw=raw), role)
        for index, raw in enumerate(cells, 1)
    ]


def _mains(*cells: str) -> List[PersonAvailability]:
    return _people(Role.MAIN, cells, "Main")


def _subs(*cells: str) -> List[PersonAvailability]:
    return _people(Role.SUB, cells, "Sub")


def _coach(raw: str = "09:00-23:00") -> PersonAvailability:
    return parse_person(RosterEntry(name="Coach", raw=raw), Role.COACH)


class TestRosterResolver:
    """Tests for RosterResolver.resolve."""

    def test_full_roster(self):
        """Five available mains and a coach with a shared slot play as is."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["09:00-12:00"] * 5), [], _coach("09:00-12:00"))

        assert decision.status is ScheduleStatus.FULL_ROSTER
        assert decision.common_time_range == TimeWindow.from_clock("09:00", "12:00")
        assert decision.required_subs == ()
        assert decision.unavailable_mains == ()

    def test_full_roster_window_includes_coach(self):
        """The coach narrows the common window."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["14:00-22:00"] * 5), [], _coach("18:00-23:00"))

        assert decision.common_time_range == TimeWindow.from_clock("18:00", "22:00")

    def test_all_available_but_disjoint(self):
        """Everyone available without a shared slot is not enough."""
        resolver = RosterResolver()
        mains = _mains("08:00-09:00", "10:00-11:00", "08:00-11:00", "08:00-11:00", "08:00-11:00")

        decision = resolver.resolve(mains, [], _coach("08:00-11:00"))

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.common_time_range is None
        assert decision.no_common_window

    def test_full_mains_without_coach(self):
        """An unavailable coach blocks an otherwise full roster."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["18:00-21:00"] * 5), [], _coach("x"))

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.blocking == ("Coach",)
        assert decision.common_time_range is None

    def test_with_one_sub(self):
        """One missing main is covered by the single available sub."""
        resolver = RosterResolver()
        mains = _mains("18:00-21:00", "x", "18:00-21:00", "18:00-21:00", "18:00-21:00")

        decision = resolver.resolve(mains, _subs("19:00-22:00"), _coach("18:00-22:00"))

        assert decision.status is ScheduleStatus.WITH_SUBS
        assert decision.required_subs == ("Sub1",)
        assert decision.unavailable_mains == ("Main2",)
        assert decision.common_time_range == TimeWindow.from_clock("19:00", "21:00")

    def test_subs_chosen_in_roster_order(self):
        """The first available subs in declared order fill the gaps."""
        resolver = RosterResolver()
        mains = _mains("x", "18:00-21:00", "x", "18:00-21:00", "18:00-21:00")
        subs = _subs("x", "18:00-21:00", "banana", "17:00-22:00", "18:00-21:00")

        decision = resolver.resolve(mains, subs, _coach())

        assert decision.status is ScheduleStatus.WITH_SUBS
        assert decision.required_subs == ("Sub2", "Sub4")
        assert decision.unavailable_mains == ("Main1", "Main3")

    def test_not_enough_subs(self):
        """Two missing mains with one available sub is not enough."""
        resolver = RosterResolver()
        mains = _mains("x", "x", "18:00-21:00", "18:00-21:00", "18:00-21:00")

        decision = resolver.resolve(mains, _subs("18:00-21:00", "x"), _coach())

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.unavailable_mains == ("Main1", "Main2")
        assert decision.blocking == ("Main2",)
        assert decision.required_subs == ()
        assert decision.common_time_range is None

    def test_nobody_available_without_subs(self):
        """With no one to call on, every main and the coach are blocking."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains("x", "x", "x", "x", "x"), [], _coach("x"))

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.blocking == ("Main1", "Main2", "Main3", "Main4", "Main5", "Coach")
        assert decision.required_subs == ()

    def test_subs_cover_but_coach_missing(self):
        """Sub coverage does not help when the coach is out."""
        resolver = RosterResolver()
        mains = _mains("x", "18:00-21:00", "18:00-21:00", "18:00-21:00", "18:00-21:00")

        decision = resolver.resolve(mains, _subs("18:00-21:00"), _coach("X"))

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.blocking == ("Coach",)
        assert decision.common_time_range is None

    def test_subs_cover_but_no_common_window(self):
        """Coverage without a shared slot is not enough."""
        resolver = RosterResolver()
        mains = _mains("x", "18:00-21:00", "18:00-21:00", "18:00-21:00", "18:00-21:00")

        decision = resolver.resolve(mains, _subs("10:00-12:00"), _coach())

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.no_common_window
        assert decision.unavailable_mains == ("Main1",)
        assert decision.required_subs == ()

    def test_malformed_main_counts_as_unavailable(self):
        """A main with an unreadable cell is replaced like an absent one."""
        resolver = RosterResolver()
        mains = _mains("18:00-21:00", "18:00-21:00", "later", "18:00-21:00", "21:00-18:00")

        decision = resolver.resolve(mains, _subs("18:00-21:00", "18:00-21:00"), _coach())

        assert decision.status is ScheduleStatus.WITH_SUBS
        assert decision.unavailable_mains == ("Main3", "Main5")
        assert decision.required_subs == ("Sub1", "Sub2")

    def test_malformed_coach_counts_as_unavailable(self):
        """An unreadable coach cell blocks the day like an x."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["18:00-21:00"] * 5), [], _coach(""))

        assert decision.status is ScheduleStatus.NOT_ENOUGH
        assert decision.blocking == ("Coach",)

    @pytest.mark.parametrize("reason", ["Day off", "OFF", "Off-Day"])
    def test_off_day_from_reason(self, reason):
        """An off-day keyword in the reason wins over any availability."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["18:00-21:00"] * 5), [], _coach(), reason=reason)

        assert decision.status is ScheduleStatus.OFF_DAY
        assert decision.common_time_range is None

    def test_off_day_keyword_must_be_a_word(self):
        """Words that merely contain the keyword do not make an off-day."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["18:00-21:00"] * 5), [], _coach(), reason="Official match prep")

        assert decision.status is ScheduleStatus.FULL_ROSTER

    def test_off_day_flag(self):
        """The explicit flag marks an off-day even with an empty reason."""
        resolver = RosterResolver()

        decision = resolver.resolve(_mains(*["x"] * 5), [], _coach("x"), off_day=True)

        assert decision.status is ScheduleStatus.OFF_DAY

    def test_custom_off_day_keywords(self):
        """Configured keywords replace the default."""
        resolver = RosterResolver(off_day_keywords=["Frei"])

        assert resolver.is_off_day("Heute frei")
        assert not resolver.is_off_day("Day off")

    def test_too_few_mains_is_structural_error(self):
        """Four main slots is a caller error, not a schedule status."""
        resolver = RosterResolver()

        with pytest.raises(RosterStructureError, match="Expected 5 main players, got 4"):
            resolver.resolve(_mains(*["18:00-21:00"] * 4), [], _coach())

    def test_missing_coach_is_structural_error(self):
        """A day without a coach record cannot be resolved."""
        resolver = RosterResolver()

        with pytest.raises(RosterStructureError):
            resolver.resolve(_mains(*["18:00-21:00"] * 5), [], None)

    def test_structure_checked_before_off_day(self):
        """Even an off-day needs a complete roster."""
        resolver = RosterResolver()

        with pytest.raises(RosterStructureError):
            resolver.resolve(_mains("x"), [], _coach(), reason="off")

    def test_custom_roster_size(self):
        """A smaller roster size changes what counts as complete."""
        resolver = RosterResolver(main_roster_size=3)

        decision = resolver.resolve(_mains(*["18:00-21:00"] * 3), [], _coach())

        assert decision.status is ScheduleStatus.FULL_ROSTER

    def test_invalid_roster_size(self):
        """A roster needs at least one main."""
        with pytest.raises(ValueError):
            RosterResolver(main_roster_size=0)

    def test_resolution_is_repeatable(self):
        """Identical input gives identical decisions."""
        resolver = RosterResolver()
        mains = _mains("x", "18:00-21:00", "18:00-21:00", "x", "18:00-21:00")
        subs = _subs("17:00-21:00", "18:00-20:00", "18:00-21:00")

        first = resolver.resolve(mains, subs, _coach())
        second = resolver.resolve(mains, subs, _coach())

        assert first == second


class TestSelectSubs:
    """Tests for select_subs."""

    def test_takes_first_available(self):
        """Only available subs are picked, in order, up to the need."""
        subs = _subs("x", "18:00-21:00", "18:00-21:00", "18:00-21:00")

        assert [sub.name for sub in select_subs(subs, 2)] == ["Sub2", "Sub3"]

    def test_returns_partial_when_short(self):
        """Fewer available subs than needed yields what exists."""
        subs = _subs("x", "18:00-21:00")

        assert [sub.name for sub in select_subs(subs, 3)] == ["Sub2"]
