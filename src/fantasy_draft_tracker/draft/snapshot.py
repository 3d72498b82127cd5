"""Snapshot format for saving and restoring a draft session.

A snapshot is a flat JSON-compatible record. Restoring is deliberately
forgiving: every field is validated on its own, and a missing or malformed
field simply leaves the session default in place. Unknown keys are ignored,
and the camelCase keys written by earlier versions of the tracker are read
as aliases.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fantasy_draft_tracker.draft.catalog import player_from_dict, player_to_dict
from fantasy_draft_tracker.draft.models import FavoriteTeam, Pick, RosterEntry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fantasy_draft_tracker.draft.catalog import PlayerCatalog
    from fantasy_draft_tracker.draft.models import Player

logger = logging.getLogger(__name__)

_ALIASES: dict[str, tuple[str, ...]] = {
    "draft_picks": ("draftedPlayers",),
    "your_roster": ("yourRoster",),
    "current_pick": ("currentPick",),
    "team_names": ("teamNames",),
    "total_teams": ("totalTeams",),
    "draft_rounds": ("draftRounds",),
    "your_team_position": ("yourTeamPosition",),
    "favorite_team": ("favoriteTeam",),
    "pick_number": ("pickNumber",),
    "team_index": ("teamIndex",),
    "player_id": ("playerId",),
    "player": ("playerData",),
}


class MalformedField(ValueError):
    """A snapshot field that cannot be restored."""


@dataclass(frozen=True)
class DraftSnapshot:
    picks: tuple[Pick, ...]
    roster: tuple[RosterEntry, ...]
    current_pick: int
    team_names: tuple[str, ...]
    total_teams: int
    draft_rounds: int
    your_team_position: int
    favorite_team: FavoriteTeam


@dataclass(frozen=True)
class RestoredFields:
    """Fields recovered from a stored snapshot; None means absent or malformed."""

    picks: tuple[Pick, ...] | None = None
    roster: tuple[RosterEntry, ...] | None = None
    current_pick: int | None = None
    team_names: tuple[str, ...] | None = None
    total_teams: int | None = None
    draft_rounds: int | None = None
    your_team_position: int | None = None
    favorite_team: FavoriteTeam | None = None


def snapshot_to_dict(snapshot: DraftSnapshot) -> dict[str, Any]:
    return {
        "draft_picks": [
            {
                "player": player_to_dict(pick.player),
                "pick_number": pick.pick_number,
                "team_index": pick.team_index,
            }
            for pick in snapshot.picks
        ],
        "your_roster": [
            {
                "player_id": entry.player_id,
                "position": entry.position,
                "player": player_to_dict(entry.player),
            }
            for entry in snapshot.roster
        ],
        "current_pick": snapshot.current_pick,
        "team_names": list(snapshot.team_names),
        "total_teams": snapshot.total_teams,
        "draft_rounds": snapshot.draft_rounds,
        "your_team_position": snapshot.your_team_position,
        "favorite_team": snapshot.favorite_team.value,
    }


def snapshot_to_json(snapshot: DraftSnapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot))


def _get(raw: Mapping[str, Any], key: str) -> Any:
    if key in raw:
        return raw[key]
    for alias in _ALIASES.get(key, ()):
        if alias in raw:
            return raw[alias]
    return None


def _positive_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise MalformedField(f"expected a positive integer, got {value!r}")
    return value


def _resolve_player(raw: Mapping[str, Any], catalog: PlayerCatalog | None) -> Player:
    record = _get(raw, "player")
    player_id = _get(raw, "player_id")
    if player_id is None and isinstance(record, dict):
        player_id = record.get("id")
    if catalog is not None and player_id is not None:
        player = catalog.get(str(player_id))
        if player is not None:
            return player
    if not isinstance(record, dict):
        raise MalformedField(f"no player record for {player_id!r}")
    try:
        return player_from_dict(record)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedField(f"bad player record: {e}") from e


def _parse_picks(value: Any, catalog: PlayerCatalog | None) -> tuple[Pick, ...]:
    if not isinstance(value, list):
        raise MalformedField("draft_picks must be a list")
    picks: list[Pick] = []
    for raw in value:
        if not isinstance(raw, dict):
            raise MalformedField("each pick must be an object")
        team_index = _get(raw, "team_index")
        if isinstance(team_index, bool) or not isinstance(team_index, int) or team_index < 0:
            raise MalformedField(f"bad team index {team_index!r}")
        picks.append(
            Pick(
                player=_resolve_player(raw, catalog),
                pick_number=_positive_int(_get(raw, "pick_number")),
                team_index=team_index,
            )
        )
    picks.sort(key=lambda p: p.pick_number)
    if [p.pick_number for p in picks] != list(range(1, len(picks) + 1)):
        raise MalformedField("pick numbers must run 1..n without gaps")
    if len({p.player.player_id for p in picks}) != len(picks):
        raise MalformedField("a player appears in more than one pick")
    return tuple(picks)


def _parse_roster(value: Any, catalog: PlayerCatalog | None) -> tuple[RosterEntry, ...]:
    if not isinstance(value, list):
        raise MalformedField("your_roster must be a list")
    entries: list[RosterEntry] = []
    for raw in value:
        if not isinstance(raw, dict):
            raise MalformedField("each roster entry must be an object")
        position = _get(raw, "position")
        if not isinstance(position, str) or not position:
            raise MalformedField(f"bad roster position {position!r}")
        player = _resolve_player(raw, catalog)
        entries.append(RosterEntry(player_id=player.player_id, position=position, player=player))
    return tuple(entries)


def _parse_team_names(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
        raise MalformedField("team_names must be a list of strings")
    return tuple(value)


def _parse_favorite_team(value: Any) -> FavoriteTeam:
    if not isinstance(value, str):
        raise MalformedField(f"favorite_team must be a string, got {value!r}")
    try:
        return FavoriteTeam(value.lower())
    except ValueError as e:
        raise MalformedField(str(e)) from e


def parse_snapshot(raw: Any, catalog: PlayerCatalog | None = None) -> RestoredFields:
    """Recover every well-formed field of a stored snapshot. Never raises."""
    if not isinstance(raw, dict):
        logger.warning("Ignoring snapshot that is not an object: %r", type(raw).__name__)
        return RestoredFields()

    parsers = {
        "picks": ("draft_picks", lambda v: _parse_picks(v, catalog)),
        "roster": ("your_roster", lambda v: _parse_roster(v, catalog)),
        "current_pick": ("current_pick", _positive_int),
        "team_names": ("team_names", _parse_team_names),
        "total_teams": ("total_teams", _positive_int),
        "draft_rounds": ("draft_rounds", _positive_int),
        "your_team_position": ("your_team_position", _positive_int),
        "favorite_team": ("favorite_team", _parse_favorite_team),
    }
    values: dict[str, Any] = {}
    for attr, (key, parse) in parsers.items():
        value = _get(raw, key)
        if value is None:
            continue
        try:
            values[attr] = parse(value)
        except MalformedField as e:
            logger.warning("Ignoring malformed snapshot field %s: %s", key, e)
    return RestoredFields(**values)


def snapshot_from_json(payload: str, catalog: PlayerCatalog | None = None) -> RestoredFields:
    try:
        raw = json.loads(payload)
    except ValueError as e:
        logger.warning("Ignoring unreadable snapshot: %s", e)
        return RestoredFields()
    return parse_snapshot(raw, catalog)
