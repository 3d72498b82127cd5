import pytest

from fantasy_draft_tracker.draft.models import BattingStats, PitchingStats, RosterConfig, RosterEntry, RosterSlot
from fantasy_draft_tracker.draft.roster import RosterAssignment
from tests.helpers import make_player, small_roster


def _roster(*slots: tuple[str, int]) -> RosterAssignment:
    return RosterAssignment(RosterConfig(slots=tuple(RosterSlot(position=p, count=c) for p, c in slots)))


class TestChoosePosition:
    def test_primary_position_when_open(self) -> None:
        roster = RosterAssignment(small_roster())
        assert roster.add(make_player("a", position="SS")).position == "SS"

    def test_full_primary_falls_to_next_eligible(self) -> None:
        roster = _roster(("SS", 1), ("UTIL", 1), ("BN", 2))
        roster.add(make_player("a", position="SS"))
        entry = roster.add(make_player("b", position="SS", positions=("SS", "UTIL")))
        assert entry.position == "UTIL"

    def test_eligible_list_scanned_in_order(self) -> None:
        roster = _roster(("SS", 1), ("2B", 1), ("UTIL", 1))
        roster.add(make_player("a", position="SS"))
        entry = roster.add(make_player("b", position="SS", positions=("SS", "2B", "UTIL")))
        assert entry.position == "2B"

    def test_overflow_lands_on_bench(self) -> None:
        roster = _roster(("C", 1), ("UTIL", 1), ("BN", 1))
        roster.add(make_player("a", position="C"))
        roster.add(make_player("b", position="C"))
        entry = roster.add(make_player("c", position="C"))
        assert entry.position == "BN"

    def test_bench_capacity_is_soft(self) -> None:
        roster = _roster(("C", 1), ("BN", 1))
        for i in range(4):
            roster.add(make_player(f"c{i}", position="C", positions=("C",)))
        assert roster.filled_positions() == {"C": 1, "BN": 3}
        assert roster.is_bench_overfull()

    def test_unconfigured_primary_uses_eligible_slot(self) -> None:
        roster = _roster(("UTIL", 1), ("BN", 1))
        entry = roster.add(make_player("a", position="DH", positions=("DH", "UTIL")))
        assert entry.position == "UTIL"

    def test_pitcher_without_p_slot_goes_to_bench(self) -> None:
        roster = _roster(("SP", 1), ("BN", 2))
        roster.add(make_player("a", position="SP"))
        assert roster.add(make_player("b", position="SP")).position == "BN"

    def test_explicit_eligible_position(self) -> None:
        roster = RosterAssignment(small_roster())
        entry = roster.add(make_player("a", position="SS", positions=("SS", "UTIL")), position="UTIL")
        assert entry.position == "UTIL"

    def test_explicit_bench(self) -> None:
        roster = RosterAssignment(small_roster())
        assert roster.add(make_player("a", position="SS"), position="BN").position == "BN"

    def test_explicit_ineligible_position_ignored(self) -> None:
        roster = RosterAssignment(small_roster())
        assert roster.add(make_player("a", position="SS"), position="C").position == "SS"

    def test_explicit_full_position_falls_back(self) -> None:
        roster = _roster(("SS", 1), ("UTIL", 1))
        roster.add(make_player("a", position="SS"))
        entry = roster.add(make_player("b", position="SS"), position="SS")
        assert entry.position == "UTIL"

    def test_typed_slots_never_exceed_capacity(self) -> None:
        config = small_roster()
        roster = RosterAssignment(config)
        for i in range(30):
            position = ("C", "1B", "SS", "OF", "SP", "RP")[i % 6]
            roster.add(make_player(f"p{i}", position=position))
        for position, filled in roster.filled_positions().items():
            if position != "BN":
                assert filled <= (config.capacity(position) or 0)


class TestCounts:
    def test_filled_and_available_slots(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("a", position="OF"))
        assert roster.filled_positions()["OF"] == 1
        assert roster.available_slots()["OF"] == 1
        assert roster.total_roster_spots() == 11
        assert roster.filled_roster_spots() == 1

    def test_counts_recomputed_after_remove(self) -> None:
        roster = _roster(("SS", 1), ("BN", 1))
        roster.add(make_player("a", position="SS"))
        roster.remove("a")
        assert roster.filled_positions()["SS"] == 0
        assert roster.add(make_player("b", position="SS")).position == "SS"

    def test_remove_unknown_returns_none(self) -> None:
        assert RosterAssignment(small_roster()).remove("ghost") is None


class TestMovePlayerPosition:
    def test_move_to_eligible_position(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("a", position="SS", positions=("SS", "UTIL")))
        assert roster.move_player_position("a", "UTIL")
        assert roster.find("a").position == "UTIL"  # type: ignore[union-attr]

    def test_move_to_bench(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("a", position="SS"))
        assert roster.move_player_position("a", "BN")
        assert roster.filled_positions()["BN"] == 1

    def test_ineligible_move_is_ignored(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("a", position="SS"))
        assert not roster.move_player_position("a", "C")
        assert roster.find("a").position == "SS"  # type: ignore[union-attr]

    def test_unknown_player_is_ignored(self) -> None:
        assert not RosterAssignment(small_roster()).move_player_position("ghost", "BN")

    def test_capacity_not_rechecked(self) -> None:
        roster = _roster(("SS", 1), ("UTIL", 1), ("BN", 2))
        roster.add(make_player("a", position="SS"))
        roster.add(make_player("b", position="SS"))
        assert roster.move_player_position("b", "SS")
        assert roster.filled_positions()["SS"] == 2


class TestStatTotals:
    def test_sums_counting_and_averages_rates(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("b1", position="1B", batting=BattingStats(hr=30, r=80, rbi=100, sb=5, avg=0.300)))
        roster.add(make_player("b2", position="OF", batting=BattingStats(hr=10, r=60, rbi=40, sb=25, avg=0.250)))
        roster.add(make_player("p1", position="SP", pitching=PitchingStats(w=12, so=200, era=3.0, whip=1.1)))
        roster.add(make_player("p2", position="RP", pitching=PitchingStats(sv=30, so=70, era=2.0, whip=0.9)))
        totals = roster.stat_totals()
        assert totals.hr == 40
        assert totals.sb == 30
        assert totals.avg == pytest.approx(0.275)
        assert totals.w == 12
        assert totals.sv == 30
        assert totals.so == 270
        assert totals.era == pytest.approx(2.5)
        assert totals.whip == pytest.approx(1.0)

    def test_empty_roster(self) -> None:
        totals = RosterAssignment(small_roster()).stat_totals()
        assert totals.avg == 0.0
        assert totals.era == 0.0


class TestLoadEntries:
    def test_keeps_valid_slots(self) -> None:
        roster = RosterAssignment(small_roster())
        player = make_player("a", position="SS")
        roster.load_entries([RosterEntry(player_id="a", position="UTIL", player=player)])
        assert roster.find("a").position == "UTIL"  # type: ignore[union-attr]

    def test_overflow_and_ineligible_slots_benched(self) -> None:
        roster = _roster(("SS", 1), ("BN", 1))
        first = make_player("a", position="SS")
        second = make_player("b", position="SS")
        catcher = make_player("c", position="C")
        roster.load_entries(
            [
                RosterEntry(player_id="a", position="SS", player=first),
                RosterEntry(player_id="b", position="SS", player=second),
                RosterEntry(player_id="c", position="SS", player=catcher),
            ]
        )
        assert [e.position for e in roster.entries] == ["SS", "BN", "BN"]

    def test_replaces_existing_entries(self) -> None:
        roster = RosterAssignment(small_roster())
        roster.add(make_player("old", position="C"))
        roster.load_entries([])
        assert roster.entries == ()
