"""Player catalog: the fixed, ordered pool of draftable players.

The catalog is produced by an external ingestion step and handed to the draft
session once. ``load_catalog`` reads the merged projections JSON written by
that step; ``player_from_dict`` and ``player_to_dict`` are shared with the
snapshot format so drafted players survive a restart even if the catalog
changes underneath them.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

from fantasy_draft_tracker.draft.errors import DataUnavailableError
from fantasy_draft_tracker.draft.models import (
    UNKNOWN_ADP,
    BattingStats,
    PitchingStats,
    Player,
    PlayerType,
)
from fantasy_draft_tracker.draft.positions import eligible_positions, normalize_position
from fantasy_draft_tracker.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

_BATTING_KEYS: dict[str, str] = {
    "pa": "PA",
    "ab": "AB",
    "h": "H",
    "doubles": "2B",
    "triples": "3B",
    "hr": "HR",
    "r": "R",
    "rbi": "RBI",
    "sb": "SB",
    "bb": "BB",
    "avg": "AVG",
    "obp": "OBP",
    "slg": "SLG",
}

_PITCHING_KEYS: dict[str, str] = {
    "w": "W",
    "l": "L",
    "era": "ERA",
    "g": "G",
    "gs": "GS",
    "sv": "SV",
    "ip": "IP",
    "so": "SO",
    "whip": "WHIP",
}

_FLOAT_STATS: frozenset[str] = frozenset({"avg", "obp", "slg", "era", "ip", "whip"})


class PlayerCatalog:
    """Ordered, immutable collection of players keyed by ``player_id``."""

    def __init__(self, players: Iterable[Player]) -> None:
        ordered: list[Player] = []
        by_id: dict[str, Player] = {}
        for player in players:
            if player.player_id in by_id:
                logger.warning("Duplicate player id %s in catalog; keeping first entry", player.player_id)
                continue
            by_id[player.player_id] = player
            ordered.append(player)
        self._players = tuple(ordered)
        self._by_id = by_id

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._by_id

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    def get(self, player_id: str) -> Player | None:
        return self._by_id.get(player_id)

    def by_position(self, position: str) -> list[Player]:
        return sorted((p for p in self._players if position in p.positions), key=lambda p: p.adp)

    def top_by_points(self, limit: int = 25) -> list[Player]:
        return sorted(self._players, key=lambda p: p.projected_points, reverse=True)[:limit]


def _number(raw: object, default: float = 0.0) -> float:
    if raw is None or raw == "":
        return default
    try:
        number = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _stats_from_dict[S: (BattingStats, PitchingStats)](
    stats_type: type[S], keys: dict[str, str], raw: Mapping[str, Any] | None
) -> S:
    if not raw:
        return stats_type()
    values: dict[str, Any] = {}
    for attr, key in keys.items():
        number = _number(raw.get(key, raw.get(attr)))
        values[attr] = number if attr in _FLOAT_STATS else int(number)
    return stats_type(**values)


def _stats_to_dict(stats: BattingStats | PitchingStats, keys: dict[str, str]) -> dict[str, Any]:
    return {key: getattr(stats, attr) for attr, key in keys.items()}


def player_from_dict(raw: Mapping[str, Any]) -> Player:
    """Build a Player from a merged-projections record.

    Raises ``KeyError``, ``TypeError`` or ``ValueError`` when the record lacks
    an id or a name.
    """
    player_id = str(raw["id"])
    name = str(raw["name"])
    if not player_id or not name:
        msg = "player record needs a non-empty id and name"
        raise ValueError(msg)

    player_type = PlayerType(str(raw.get("type", PlayerType.BATTER.value)))
    raw_positions = raw.get("positions") or []
    if isinstance(raw_positions, str):
        raw_positions = raw_positions.split("/")
    primary_raw = raw.get("position") or (raw_positions[0] if raw_positions else "")
    positions = eligible_positions([str(primary_raw), *(str(p) for p in raw_positions)])
    primary = normalize_position(str(primary_raw)) if primary_raw else positions[0]

    points = raw.get("projectedPoints", raw.get("fantasyPoints"))
    adp = _number(raw.get("adp"), UNKNOWN_ADP) or UNKNOWN_ADP

    stats = raw.get("stats")
    if player_type is PlayerType.PITCHER:
        batting = BattingStats()
        pitching = _stats_from_dict(PitchingStats, _PITCHING_KEYS, stats)
    else:
        batting = _stats_from_dict(BattingStats, _BATTING_KEYS, stats)
        pitching = _stats_from_dict(PitchingStats, _PITCHING_KEYS, raw.get("pitchingStats"))

    return Player(
        player_id=player_id,
        name=name,
        team=str(raw.get("team") or ""),
        position=primary,
        positions=positions,
        adp=adp,
        projected_points=_number(points),
        player_type=player_type,
        batting=batting,
        pitching=pitching,
        is_two_way=bool(raw.get("isTwoWayPlayer", False)),
    )


def player_to_dict(player: Player) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": player.player_id,
        "name": player.name,
        "team": player.team,
        "position": player.position,
        "positions": list(player.positions),
        "adp": player.adp,
        "tier": player.tier,
        "projectedPoints": player.projected_points,
        "type": player.player_type.value,
        "isTwoWayPlayer": player.is_two_way,
    }
    if player.is_pitcher:
        record["stats"] = _stats_to_dict(player.pitching, _PITCHING_KEYS)
    else:
        record["stats"] = _stats_to_dict(player.batting, _BATTING_KEYS)
        record["pitchingStats"] = _stats_to_dict(player.pitching, _PITCHING_KEYS)
    return record


def build_catalog(records: Iterable[Mapping[str, Any]]) -> PlayerCatalog:
    """Build a catalog sorted by ADP, skipping records that cannot form a Player."""
    players: list[Player] = []
    skipped = 0
    for raw in records:
        try:
            players.append(player_from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            skipped += 1
            logger.debug("Skipping catalog record %r: %s", raw, e)
    if skipped:
        logger.warning("Skipped %d malformed catalog records", skipped)
    players.sort(key=lambda p: p.adp)
    return PlayerCatalog(players)


def load_catalog(path: Path) -> Result[PlayerCatalog, DataUnavailableError]:
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        return Err(DataUnavailableError(f"Could not read player catalog {path}: {e}"))
    if not isinstance(data, list):
        return Err(DataUnavailableError(f"Player catalog {path} must contain a JSON list"))
    catalog = build_catalog(r for r in data if isinstance(r, dict))
    logger.debug("Loaded %d players from %s", len(catalog), path)
    return Ok(catalog)
