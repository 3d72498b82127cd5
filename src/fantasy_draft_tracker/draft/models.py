from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

UNKNOWN_ADP: float = 999.0

# Inclusive ADP ceilings for tiers 1-4; anything later is tier 5.
TIER_THRESHOLDS: tuple[float, ...] = (20, 50, 100, 150)


def tier_for_adp(adp: float) -> int:
    for tier, ceiling in enumerate(TIER_THRESHOLDS, start=1):
        if adp <= ceiling:
            return tier
    return len(TIER_THRESHOLDS) + 1


class PlayerType(Enum):
    BATTER = "batter"
    PITCHER = "pitcher"


class FavoriteTeam(Enum):
    METS = "mets"
    PADRES = "padres"

    @property
    def club(self) -> str:
        """League club abbreviation used in the player catalog."""
        return _FAVORITE_CLUBS[self]

    def toggled(self) -> FavoriteTeam:
        return FavoriteTeam.PADRES if self is FavoriteTeam.METS else FavoriteTeam.METS


_FAVORITE_CLUBS: dict[FavoriteTeam, str] = {
    FavoriteTeam.METS: "NYM",
    FavoriteTeam.PADRES: "SDP",
}


@dataclass(frozen=True)
class BattingStats:
    pa: int = 0
    ab: int = 0
    h: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    r: int = 0
    rbi: int = 0
    sb: int = 0
    bb: int = 0
    avg: float = 0.0
    obp: float = 0.0
    slg: float = 0.0


@dataclass(frozen=True)
class PitchingStats:
    w: int = 0
    l: int = 0  # noqa: E741
    era: float = 0.0
    g: int = 0
    gs: int = 0
    sv: int = 0
    ip: float = 0.0
    so: int = 0
    whip: float = 0.0


@dataclass(frozen=True)
class Player:
    player_id: str
    name: str
    team: str
    position: str
    positions: tuple[str, ...]
    adp: float = UNKNOWN_ADP
    projected_points: float = 0.0
    player_type: PlayerType = PlayerType.BATTER
    batting: BattingStats = field(default_factory=BattingStats)
    pitching: PitchingStats = field(default_factory=PitchingStats)
    is_two_way: bool = False

    def __post_init__(self) -> None:
        if not self.positions:
            msg = f"Player {self.player_id!r} must have at least one eligible position"
            raise ValueError(msg)

    @property
    def tier(self) -> int:
        return tier_for_adp(self.adp)

    @property
    def is_pitcher(self) -> bool:
        return self.player_type is PlayerType.PITCHER


@dataclass(frozen=True)
class RosterSlot:
    position: str
    count: int


@dataclass(frozen=True)
class RosterConfig:
    slots: tuple[RosterSlot, ...]

    def capacity(self, position: str) -> int | None:
        """Configured capacity for ``position``, or None when the position is not modeled."""
        for slot in self.slots:
            if slot.position == position:
                return slot.count
        return None

    @property
    def positions(self) -> tuple[str, ...]:
        return tuple(slot.position for slot in self.slots)

    @property
    def total_spots(self) -> int:
        return sum(slot.count for slot in self.slots)


@dataclass(frozen=True)
class DraftSettings:
    total_teams: int = 12
    draft_rounds: int = 23
    your_team_position: int = 3
    favorite_team: FavoriteTeam = FavoriteTeam.METS

    @property
    def your_team_index(self) -> int:
        return self.your_team_position - 1


@dataclass(frozen=True)
class Pick:
    player: Player
    pick_number: int
    team_index: int


@dataclass
class RosterEntry:
    player_id: str
    position: str
    player: Player


@dataclass(frozen=True)
class TurnInfo:
    current_pick: int
    round: int
    pick_in_round: int
    team_index: int
    is_your_turn: bool


@dataclass(frozen=True)
class PositionScarcity:
    counts: dict[str, int]
    tier_counts: dict[int, dict[str, int]]
    scores: dict[str, float]


@dataclass(frozen=True)
class Recommendation:
    player: Player
    need: float
    scarcity: float
    overall_score: float
    is_favorite_team: bool


@dataclass(frozen=True)
class StatTotals:
    hr: float = 0.0
    r: float = 0.0
    rbi: float = 0.0
    sb: float = 0.0
    avg: float = 0.0
    w: float = 0.0
    sv: float = 0.0
    so: float = 0.0
    era: float = 0.0
    whip: float = 0.0
