"""Draft session: the single owner of ledger, roster and settings state.

A session is built by the caller and passed wherever draft state is needed.
Every successful mutation notifies the registered observers with a fresh
``DraftSnapshot``. Observers that fail with ``DataUnavailableError`` do not
interrupt the draft; the error is logged and queued for the caller to show
via ``drain_warnings``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Literal

from fantasy_draft_tracker.draft.errors import DataUnavailableError, InvalidStateError
from fantasy_draft_tracker.draft.ledger import DraftLedger
from fantasy_draft_tracker.draft.models import DraftSettings, FavoriteTeam, Player, RosterEntry, TurnInfo
from fantasy_draft_tracker.draft.positions import DEFAULT_ROSTER_CONFIG
from fantasy_draft_tracker.draft.roster import RosterAssignment
from fantasy_draft_tracker.draft.scarcity import (
    DEFAULT_RECOMMENDATION_LIMIT,
    need_scores,
    position_scarcity,
    recommend,
)
from fantasy_draft_tracker.draft.snapshot import DraftSnapshot

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fantasy_draft_tracker.draft.catalog import PlayerCatalog
    from fantasy_draft_tracker.draft.models import Pick, PositionScarcity, Recommendation, RosterConfig, StatTotals
    from fantasy_draft_tracker.draft.snapshot import RestoredFields

logger = logging.getLogger(__name__)

SnapshotObserver = Callable[[DraftSnapshot], None]
SortKey = Literal["adp", "points"]

_SETTING_ALIASES: dict[str, str] = {
    "totalTeams": "total_teams",
    "draftRounds": "draft_rounds",
    "yourTeamPosition": "your_team_position",
    "favoriteTeam": "favorite_team",
}


def default_team_names(total_teams: int) -> tuple[str, ...]:
    return tuple(f"Team {i + 1}" for i in range(total_teams))


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _coerce_favorite(value: object) -> FavoriteTeam | None:
    if isinstance(value, FavoriteTeam):
        return value
    try:
        return FavoriteTeam(str(value).lower())
    except ValueError:
        return None


class DraftSession:
    def __init__(
        self,
        catalog: PlayerCatalog,
        settings: DraftSettings | None = None,
        roster_config: RosterConfig = DEFAULT_ROSTER_CONFIG,
        team_names: tuple[str, ...] | None = None,
    ) -> None:
        self.catalog = catalog
        self._settings = settings or DraftSettings()
        self._ledger = DraftLedger(self._settings.total_teams)
        self._roster = RosterAssignment(roster_config)
        self._team_names = self._fit_team_names(team_names or (), self._settings.total_teams)
        self._observers: list[SnapshotObserver] = []
        self._warnings: list[DataUnavailableError] = []

    # -- observers -----------------------------------------------------------

    def subscribe(self, observer: SnapshotObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: SnapshotObserver) -> None:
        self._observers.remove(observer)

    def drain_warnings(self) -> list[DataUnavailableError]:
        warnings, self._warnings = self._warnings, []
        return warnings

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for observer in self._observers:
            try:
                observer(snapshot)
            except DataUnavailableError as e:
                logger.warning("Draft state not saved: %s", e)
                self._warnings.append(e)

    # -- state ---------------------------------------------------------------

    @property
    def settings(self) -> DraftSettings:
        return self._settings

    @property
    def roster_config(self) -> RosterConfig:
        return self._roster.roster_config

    @property
    def team_names(self) -> tuple[str, ...]:
        return self._team_names

    @property
    def picks(self) -> tuple[Pick, ...]:
        return self._ledger.picks

    @property
    def roster(self) -> tuple[RosterEntry, ...]:
        return self._roster.entries

    @property
    def current_pick(self) -> int:
        return self._ledger.current_pick

    @property
    def current_round(self) -> int:
        return self._ledger.current_round

    @property
    def current_pick_in_round(self) -> int:
        return self._ledger.current_pick_in_round

    @property
    def current_team_turn(self) -> int:
        return self._ledger.current_team_turn

    @property
    def is_your_turn(self) -> bool:
        return self.current_team_turn == self._settings.your_team_index

    def turn(self) -> TurnInfo:
        return TurnInfo(
            current_pick=self.current_pick,
            round=self.current_round,
            pick_in_round=self.current_pick_in_round,
            team_index=self.current_team_turn,
            is_your_turn=self.is_your_turn,
        )

    # -- actions -------------------------------------------------------------

    def _resolve_player(self, player: Player | str) -> Player:
        if isinstance(player, Player):
            return player
        found = self.catalog.get(player)
        if found is None:
            raise InvalidStateError(f"Unknown player id {player!r}")
        return found

    def draft_player(
        self,
        player: Player | str,
        team_index: int | None = None,
        position: str | None = None,
    ) -> Pick:
        """Record a pick for ``team_index`` (default: the team on the clock).

        Picks for the controlled team are also placed on its roster, in
        ``position`` when that slot is eligible and open.
        """
        resolved = self._resolve_player(player)
        pick = self._ledger.record_pick(resolved, team_index)
        if pick.team_index == self._settings.your_team_index:
            self._roster.add(resolved, position)
            if self._roster.is_bench_overfull():
                logger.info("Bench is over capacity after adding %s", resolved.name)
        self._emit()
        return pick

    def undo_last_pick(self) -> Pick | None:
        pick = self._ledger.undo_last_pick()
        if pick is None:
            return None
        self._roster.remove(pick.player.player_id)
        self._emit()
        return pick

    def move_player_position(self, player_id: str, new_position: str) -> bool:
        moved = self._roster.move_player_position(player_id, new_position)
        if moved:
            self._emit()
        return moved

    def update_settings(self, changes: Mapping[str, Any]) -> DraftSettings:
        """Apply the valid keys of a partial settings update.

        Out-of-range or unknown values are skipped without raising. A team
        count that would strand the controlled team's draft slot, or a team that
        already has picks, is skipped.
        """
        normalized = {_SETTING_ALIASES.get(k, k): v for k, v in changes.items()}
        current = self._settings

        total_teams = current.total_teams
        if "total_teams" in normalized:
            if _is_positive_int(normalized["total_teams"]):
                total_teams = normalized["total_teams"]
            else:
                logger.debug("Ignoring total_teams=%r", normalized["total_teams"])

        position = current.your_team_position
        if "your_team_position" in normalized:
            value = normalized["your_team_position"]
            if _is_positive_int(value) and value <= total_teams:
                position = value
            else:
                logger.debug("Ignoring your_team_position=%r", value)

        if position > total_teams:
            logger.debug("Ignoring total_teams=%d: team slot %d would not exist", total_teams, position)
            total_teams = current.total_teams

        teams_in_use = max((p.team_index + 1 for p in self._ledger.picks), default=0)
        if total_teams < teams_in_use:
            logger.debug("Ignoring total_teams=%d: picks already recorded for team %d", total_teams, teams_in_use)
            total_teams = current.total_teams

        draft_rounds = current.draft_rounds
        if "draft_rounds" in normalized:
            if _is_positive_int(normalized["draft_rounds"]):
                draft_rounds = normalized["draft_rounds"]
            else:
                logger.debug("Ignoring draft_rounds=%r", normalized["draft_rounds"])

        favorite = current.favorite_team
        if "favorite_team" in normalized:
            favorite = _coerce_favorite(normalized["favorite_team"]) or favorite

        for key in normalized.keys() - {"total_teams", "your_team_position", "draft_rounds", "favorite_team"}:
            logger.debug("Ignoring unknown setting %s", key)

        updated = DraftSettings(
            total_teams=total_teams,
            draft_rounds=draft_rounds,
            your_team_position=position,
            favorite_team=favorite,
        )
        if updated != current:
            self._apply_settings(updated)
            self._emit()
        return self._settings

    def _apply_settings(self, settings: DraftSettings) -> None:
        self._settings = settings
        self._ledger.total_teams = settings.total_teams
        self._team_names = self._fit_team_names(self._team_names, settings.total_teams)

    def set_favorite_team(self, team: FavoriteTeam | str) -> bool:
        favorite = _coerce_favorite(team)
        if favorite is None:
            logger.debug("Ignoring unsupported favorite team %r", team)
            return False
        if favorite is not self._settings.favorite_team:
            self._settings = replace(self._settings, favorite_team=favorite)
        self._emit()
        return True

    def toggle_favorite_team(self) -> FavoriteTeam:
        self._settings = replace(self._settings, favorite_team=self._settings.favorite_team.toggled())
        self._emit()
        return self._settings.favorite_team

    def update_team_name(self, index: int, name: str) -> bool:
        if not 0 <= index < len(self._team_names):
            logger.debug("Ignoring name for unknown team index %d", index)
            return False
        names = list(self._team_names)
        names[index] = name
        self._team_names = tuple(names)
        self._emit()
        return True

    def reset_draft(self) -> None:
        self._ledger.clear()
        self._roster.clear()
        self._emit()

    # -- snapshots -----------------------------------------------------------

    def snapshot(self) -> DraftSnapshot:
        return DraftSnapshot(
            picks=self._ledger.picks,
            roster=tuple(replace(entry) for entry in self._roster.entries),
            current_pick=self.current_pick,
            team_names=self._team_names,
            total_teams=self._settings.total_teams,
            draft_rounds=self._settings.draft_rounds,
            your_team_position=self._settings.your_team_position,
            favorite_team=self._settings.favorite_team,
        )

    def restore(self, fields: RestoredFields) -> None:
        """Rehydrate from stored fields, keeping current values for anything missing."""
        current = self._settings
        total_teams = fields.total_teams or current.total_teams
        position = fields.your_team_position or current.your_team_position
        if position > total_teams:
            logger.warning("Stored team slot %d exceeds %d teams; using defaults", position, total_teams)
            total_teams, position = current.total_teams, current.your_team_position
        self._apply_settings(
            DraftSettings(
                total_teams=total_teams,
                draft_rounds=fields.draft_rounds or current.draft_rounds,
                your_team_position=position,
                favorite_team=fields.favorite_team or current.favorite_team,
            )
        )
        if fields.team_names is not None:
            self._team_names = self._fit_team_names(fields.team_names, total_teams)

        picks = fields.picks if fields.picks is not None else ()
        if any(p.team_index >= total_teams for p in picks):
            logger.warning("Stored picks reference teams beyond %d; starting a fresh ledger", total_teams)
            picks = ()
        self._ledger = DraftLedger(total_teams, picks)
        if fields.current_pick is not None and fields.current_pick != self._ledger.current_pick:
            logger.warning(
                "Stored current pick %d disagrees with %d stored picks; using %d",
                fields.current_pick,
                len(picks),
                self._ledger.current_pick,
            )

        yours = {p.player.player_id for p in picks if p.team_index == self._settings.your_team_index}
        entries = [e for e in fields.roster or () if e.player_id in yours]
        if fields.roster and len(entries) < len(fields.roster):
            dropped = len(fields.roster) - len(entries)
            logger.warning("Dropped %d stored roster entries not drafted by your team", dropped)
        self._roster = RosterAssignment(self._roster.roster_config)
        self._roster.load_entries(entries)
        logger.debug("Restored %d picks and %d roster entries", len(picks), len(entries))

    @staticmethod
    def _fit_team_names(names: tuple[str, ...], total_teams: int) -> tuple[str, ...]:
        defaults = default_team_names(total_teams)
        return tuple(names[:total_teams]) + defaults[len(names) :]

    # -- queries -------------------------------------------------------------

    def available_players(self, sort_by: SortKey | None = None, position: str | None = None) -> list[Player]:
        drafted = self._ledger.drafted_ids()
        players = [p for p in self.catalog if p.player_id not in drafted]
        if position is not None:
            players = [p for p in players if position in p.positions]
        if sort_by == "adp":
            players.sort(key=lambda p: p.adp)
        elif sort_by == "points":
            players.sort(key=lambda p: p.projected_points, reverse=True)
        elif sort_by is not None:
            raise ValueError(f"Unknown sort key {sort_by!r}")
        return players

    def players_by_position(self, position: str) -> list[Player]:
        """Undrafted players eligible at ``position``, earliest ADP first."""
        return self.available_players(sort_by="adp", position=position)

    def top_players_by_points(self, limit: int = 25) -> list[Player]:
        return self.catalog.top_by_points(limit)

    def need_scores(self) -> dict[str, float]:
        return need_scores(self._roster.roster_config, self._roster.filled_positions())

    def position_scarcity(self) -> PositionScarcity:
        return position_scarcity(self.available_players())

    def recommendations(self, limit: int = DEFAULT_RECOMMENDATION_LIMIT) -> list[Recommendation]:
        available = self.available_players()
        return recommend(
            available,
            self.need_scores(),
            position_scarcity(available).scores,
            self._settings.favorite_team.club,
            limit=limit,
        )

    def draft_board(self) -> list[list[Pick | None]]:
        return self._ledger.draft_board(self._settings.draft_rounds)

    def team_drafts(self) -> list[list[Player]]:
        return self._ledger.team_drafts()

    def your_team(self) -> list[Player]:
        index = self._settings.your_team_index
        return [p.player for p in self._ledger.picks if p.team_index == index]

    def filled_positions(self) -> dict[str, int]:
        return self._roster.filled_positions()

    def available_slots(self) -> dict[str, int]:
        return self._roster.available_slots()

    def stat_totals(self) -> StatTotals:
        return self._roster.stat_totals()
