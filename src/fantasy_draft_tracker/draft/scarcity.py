"""Position need, position scarcity and pick recommendations.

Three signals feed each recommendation:

* **need**: how empty the controlled team's slots are at the player's
  primary position, scaled to 1-10 (a full position still scores 1).
* **scarcity**: how few tier-1 and tier-2 players remain at that position,
  scaled to 1-10.
* **points**: projected fantasy points divided by 100.

Positions the roster or the pool does not model fall back to a neutral 5.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fantasy_draft_tracker.draft.models import PositionScarcity, Recommendation
from fantasy_draft_tracker.draft.positions import BENCH

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from fantasy_draft_tracker.draft.models import Player, RosterConfig

SCORE_MIN: float = 1.0
SCORE_MAX: float = 10.0
NEUTRAL_SCORE: float = 5.0

POINTS_SCALE: float = 100.0
POINTS_WEIGHT: float = 0.5
NEED_WEIGHT: float = 0.3
SCARCITY_WEIGHT: float = 0.2
FAVORITE_TEAM_BONUS: float = 1.2

TIER1_SCARCITY_PENALTY: int = 3
TIER2_SCARCITY_PENALTY: int = 1
TRACKED_TIERS: tuple[int, ...] = (1, 2, 3)

DEFAULT_RECOMMENDATION_LIMIT: int = 10


def _clamp(value: float) -> float:
    return min(SCORE_MAX, max(SCORE_MIN, value))


def need_scores(roster_config: RosterConfig, filled: Mapping[str, int]) -> dict[str, float]:
    needs: dict[str, float] = {}
    for slot in roster_config.slots:
        if slot.position == BENCH or slot.count <= 0:
            continue
        remaining = slot.count - filled.get(slot.position, 0)
        needs[slot.position] = _clamp(remaining / slot.count * 10)
    return needs


def position_scarcity(available: Iterable[Player]) -> PositionScarcity:
    counts: dict[str, int] = {}
    tier_counts: dict[int, dict[str, int]] = {tier: {} for tier in TRACKED_TIERS}
    for player in available:
        counts[player.position] = counts.get(player.position, 0) + 1
        tier = player.tier
        if tier in tier_counts:
            tier_counts[tier][player.position] = tier_counts[tier].get(player.position, 0) + 1

    scores: dict[str, float] = {}
    for position in counts:
        tier1 = tier_counts[1].get(position, 0)
        tier2 = tier_counts[2].get(position, 0)
        scores[position] = _clamp(10 - (tier1 * TIER1_SCARCITY_PENALTY + tier2 * TIER2_SCARCITY_PENALTY))
    return PositionScarcity(counts=counts, tier_counts=tier_counts, scores=scores)


def overall_score(player: Player, need: float, scarcity: float, favorite_club: str | None) -> float:
    team_bonus = FAVORITE_TEAM_BONUS if favorite_club is not None and player.team == favorite_club else 1.0
    points = player.projected_points / POINTS_SCALE
    return (points * POINTS_WEIGHT + need * NEED_WEIGHT + scarcity * SCARCITY_WEIGHT) * team_bonus


def recommend(
    available: Sequence[Player],
    needs: Mapping[str, float],
    scarcity: Mapping[str, float],
    favorite_club: str | None,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[Recommendation]:
    """Rank available players by overall score, best first.

    The sort is stable, so equal scores keep catalog order.
    """
    if not available:
        return []

    recommendations: list[Recommendation] = []
    for player in available:
        need = needs.get(player.position, NEUTRAL_SCORE)
        scarcity_score = scarcity.get(player.position, NEUTRAL_SCORE)
        recommendations.append(
            Recommendation(
                player=player,
                need=need,
                scarcity=scarcity_score,
                overall_score=overall_score(player, need, scarcity_score, favorite_club),
                is_favorite_team=favorite_club is not None and player.team == favorite_club,
            )
        )

    recommendations.sort(key=lambda r: r.overall_score, reverse=True)
    return recommendations[:limit]
