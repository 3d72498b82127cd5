"""Shared builders and fakes for draft tests."""

from __future__ import annotations

from fantasy_draft_tracker.draft.catalog import PlayerCatalog
from fantasy_draft_tracker.draft.errors import DataUnavailableError
from fantasy_draft_tracker.draft.models import (
    BattingStats,
    PitchingStats,
    Player,
    PlayerType,
    RosterConfig,
    RosterSlot,
)


def make_player(
    player_id: str = "p1",
    name: str | None = None,
    team: str = "LAD",
    position: str = "SS",
    positions: tuple[str, ...] | None = None,
    adp: float = 100.0,
    projected_points: float = 300.0,
    player_type: PlayerType | None = None,
    batting: BattingStats | None = None,
    pitching: PitchingStats | None = None,
) -> Player:
    if player_type is None:
        player_type = PlayerType.PITCHER if position in ("SP", "RP", "P") else PlayerType.BATTER
    if positions is None:
        positions = (position, "P") if player_type is PlayerType.PITCHER else (position, "UTIL")
    return Player(
        player_id=player_id,
        name=name or f"Player {player_id}",
        team=team,
        position=position,
        positions=positions,
        adp=adp,
        projected_points=projected_points,
        player_type=player_type,
        batting=batting or BattingStats(),
        pitching=pitching or PitchingStats(),
    )


def sample_catalog() -> PlayerCatalog:
    return PlayerCatalog(
        [
            make_player("judge", "Aaron Judge", team="NYY", position="OF", adp=2.0, projected_points=620.0),
            make_player("ohtani", "Shohei Ohtani", team="LAD", position="UTIL", positions=("UTIL",), adp=3.0),
            make_player("witt", "Bobby Witt Jr.", team="KC", position="SS", adp=4.0, projected_points=590.0),
            make_player("skenes", "Paul Skenes", team="PIT", position="SP", adp=15.0, projected_points=450.0),
            make_player("lindor", "Francisco Lindor", team="NYM", position="SS", adp=18.0, projected_points=540.0),
            make_player("alonso", "Pete Alonso", team="NYM", position="1B", adp=45.0, projected_points=480.0),
            make_player("machado", "Manny Machado", team="SDP", position="3B", adp=60.0, projected_points=470.0),
            make_player("diaz", "Edwin Diaz", team="NYM", position="RP", adp=90.0, projected_points=210.0),
            make_player("smith", "Will Smith", team="LAD", position="C", adp=120.0, projected_points=350.0),
            make_player("nimmo", "Brandon Nimmo", team="NYM", position="OF", adp=140.0, projected_points=400.0),
            make_player("kim", "Ha-Seong Kim", team="TB", position="SS", positions=("SS", "2B", "UTIL"), adp=200.0),
            make_player("bench", "Bench Guy", team="MIA", position="OF", adp=999.0, projected_points=50.0),
        ]
    )


def small_roster() -> RosterConfig:
    return RosterConfig(
        slots=(
            RosterSlot(position="C", count=1),
            RosterSlot(position="1B", count=1),
            RosterSlot(position="SS", count=1),
            RosterSlot(position="OF", count=2),
            RosterSlot(position="UTIL", count=1),
            RosterSlot(position="SP", count=2),
            RosterSlot(position="RP", count=1),
            RosterSlot(position="BN", count=2),
        )
    )


class FakeSnapshotStore:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.saves = 0

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, payload: str) -> None:
        self.saves += 1
        self.data[key] = payload

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FailingSnapshotStore:
    def load(self, key: str) -> str | None:
        raise DataUnavailableError("disk unavailable")

    def save(self, key: str, payload: str) -> None:
        raise DataUnavailableError("disk full")

    def delete(self, key: str) -> None:
        raise DataUnavailableError("disk unavailable")
