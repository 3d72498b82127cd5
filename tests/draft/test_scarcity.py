import pytest

from fantasy_draft_tracker.draft.models import RosterConfig, RosterSlot
from fantasy_draft_tracker.draft.scarcity import (
    NEUTRAL_SCORE,
    need_scores,
    overall_score,
    position_scarcity,
    recommend,
)
from tests.helpers import make_player, small_roster


class TestNeedScores:
    def test_empty_position_scores_ten(self) -> None:
        assert need_scores(small_roster(), {})["OF"] == 10.0

    def test_partially_filled(self) -> None:
        assert need_scores(small_roster(), {"OF": 1})["OF"] == 5.0

    def test_full_position_clamps_to_one(self) -> None:
        assert need_scores(small_roster(), {"SS": 1})["SS"] == 1.0

    def test_overfilled_position_clamps_to_one(self) -> None:
        assert need_scores(small_roster(), {"SS": 3})["SS"] == 1.0

    def test_bench_and_empty_slots_skipped(self) -> None:
        config = RosterConfig(slots=(RosterSlot(position="C", count=0), RosterSlot(position="BN", count=4)))
        assert need_scores(config, {}) == {}


class TestPositionScarcity:
    def test_tier_one_and_two_penalties(self) -> None:
        available = [
            make_player("a", position="SS", adp=5),
            make_player("b", position="SS", adp=30),
            make_player("c", position="SS", adp=90),
        ]
        scarcity = position_scarcity(available)
        assert scarcity.counts == {"SS": 3}
        assert scarcity.tier_counts[1] == {"SS": 1}
        assert scarcity.tier_counts[3] == {"SS": 1}
        assert scarcity.scores["SS"] == 6.0

    def test_deep_position_clamps_to_one(self) -> None:
        available = [make_player(f"c{i}", position="C", adp=10 + i) for i in range(4)]
        assert position_scarcity(available).scores["C"] == 1.0

    def test_thin_position_clamps_to_ten(self) -> None:
        available = [make_player("late", position="1B", adp=180)]
        assert position_scarcity(available).scores["1B"] == 10.0

    def test_tiers_beyond_three_not_tracked(self) -> None:
        scarcity = position_scarcity([make_player("late", position="OF", adp=400)])
        assert all("OF" not in counts for counts in scarcity.tier_counts.values())


class TestOverallScore:
    def test_weighted_sum(self) -> None:
        player = make_player(projected_points=400.0, team="LAD")
        assert overall_score(player, need=10.0, scarcity=5.0, favorite_club="NYM") == pytest.approx(6.0)

    def test_favorite_team_bonus_is_exactly_twenty_percent(self) -> None:
        player = make_player(projected_points=400.0, team="NYM")
        plain = overall_score(player, need=10.0, scarcity=5.0, favorite_club="SDP")
        boosted = overall_score(player, need=10.0, scarcity=5.0, favorite_club="NYM")
        assert boosted == pytest.approx(plain * 1.2)

    def test_negative_points_lower_the_score(self) -> None:
        player = make_player(projected_points=-100.0)
        assert overall_score(player, need=1.0, scarcity=1.0, favorite_club=None) == pytest.approx(0.0)


class TestRecommend:
    def test_empty_pool(self) -> None:
        assert recommend([], {}, {}, "NYM") == []

    def test_sorted_best_first_and_limited(self) -> None:
        available = [make_player(f"p{i}", projected_points=100.0 * i) for i in range(15)]
        results = recommend(available, {}, {}, None)
        assert len(results) == 10
        assert results[0].player.player_id == "p14"
        scores = [r.overall_score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_input_order(self) -> None:
        available = [make_player("first"), make_player("second"), make_player("third")]
        results = recommend(available, {}, {}, None)
        assert [r.player.player_id for r in results] == ["first", "second", "third"]

    def test_unknown_position_scores_neutral(self) -> None:
        (result,) = recommend([make_player(position="DH", positions=("UTIL",))], {"SS": 10.0}, {}, None)
        assert result.need == NEUTRAL_SCORE
        assert result.scarcity == NEUTRAL_SCORE

    def test_favorite_club_flag_and_boost(self) -> None:
        mets = make_player("mets", team="NYM", projected_points=300.0)
        dodger = make_player("dodger", team="LAD", projected_points=300.0)
        results = recommend([dodger, mets], {}, {}, "NYM")
        assert [r.player.player_id for r in results] == ["mets", "dodger"]
        assert results[0].is_favorite_team
        assert not results[1].is_favorite_team
        assert results[0].overall_score == pytest.approx(results[1].overall_score * 1.2)

    def test_custom_limit(self) -> None:
        available = [make_player(f"p{i}") for i in range(5)]
        assert len(recommend(available, {}, {}, None, limit=3)) == 3
