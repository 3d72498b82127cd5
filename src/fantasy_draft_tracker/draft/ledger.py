"""Draft ledger and snake-draft turn arithmetic.

Round 1 runs team 0 through team N-1, round 2 runs back from N-1 to 0, and
so on. Every turn-related value is a pure function of the overall pick number
and the team count, so the ledger stores nothing but the ordered picks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fantasy_draft_tracker.draft.errors import InvalidStateError
from fantasy_draft_tracker.draft.models import Pick

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fantasy_draft_tracker.draft.models import Player

logger = logging.getLogger(__name__)


def round_for_pick(pick_number: int, total_teams: int) -> int:
    return (pick_number - 1) // total_teams + 1


def pick_in_round(pick_number: int, total_teams: int) -> int:
    """1-based draft slot for ``pick_number``, mirrored on even rounds."""
    raw = (pick_number - 1) % total_teams + 1
    if round_for_pick(pick_number, total_teams) % 2 == 0:
        return total_teams - raw + 1
    return raw


def team_for_pick(pick_number: int, total_teams: int) -> int:
    """0-based index of the team on the clock at ``pick_number``."""
    return pick_in_round(pick_number, total_teams) - 1


def round_order(round_number: int, total_teams: int) -> list[int]:
    """Team indices in the order they pick during ``round_number``."""
    first = (round_number - 1) * total_teams + 1
    return [team_for_pick(n, total_teams) for n in range(first, first + total_teams)]


def generate_snake_order(total_teams: int, num_rounds: int) -> list[int]:
    """Return team indices in snake order for a whole draft: 0..n-1, n-1..0, ..."""
    order: list[int] = []
    for round_number in range(1, num_rounds + 1):
        order.extend(round_order(round_number, total_teams))
    return order


class DraftLedger:
    """Ordered log of picks for every team in the league."""

    def __init__(self, total_teams: int, picks: Iterable[Pick] = ()) -> None:
        self.total_teams = total_teams
        self._picks: list[Pick] = list(picks)

    @property
    def picks(self) -> tuple[Pick, ...]:
        return tuple(self._picks)

    def __len__(self) -> int:
        return len(self._picks)

    @property
    def current_pick(self) -> int:
        return len(self._picks) + 1

    @property
    def current_round(self) -> int:
        return round_for_pick(self.current_pick, self.total_teams)

    @property
    def current_pick_in_round(self) -> int:
        return pick_in_round(self.current_pick, self.total_teams)

    @property
    def current_team_turn(self) -> int:
        return team_for_pick(self.current_pick, self.total_teams)

    def drafted_ids(self) -> set[str]:
        return {pick.player.player_id for pick in self._picks}

    def is_drafted(self, player_id: str) -> bool:
        return any(pick.player.player_id == player_id for pick in self._picks)

    def record_pick(self, player: Player, team_index: int | None = None) -> Pick:
        if self.is_drafted(player.player_id):
            raise InvalidStateError(f"{player.name} ({player.player_id}) has already been drafted")
        team = self.current_team_turn if team_index is None else team_index
        if not 0 <= team < self.total_teams:
            raise InvalidStateError(f"Team index {team} is outside 0..{self.total_teams - 1}")

        pick = Pick(player=player, pick_number=self.current_pick, team_index=team)
        self._picks.append(pick)
        logger.debug("Pick %d: team %d takes %s", pick.pick_number, team, player.name)
        return pick

    def undo_last_pick(self) -> Pick | None:
        if not self._picks:
            return None
        pick = self._picks.pop()
        logger.debug("Undid pick %d (%s)", pick.pick_number, pick.player.name)
        return pick

    def clear(self) -> None:
        self._picks.clear()

    def team_drafts(self) -> list[list[Player]]:
        drafts: list[list[Player]] = [[] for _ in range(self.total_teams)]
        for pick in self._picks:
            # Picks recorded before a league shrink keep their original index.
            if pick.team_index < len(drafts):
                drafts[pick.team_index].append(pick.player)
        return drafts

    def draft_board(self, draft_rounds: int) -> list[list[Pick | None]]:
        """Grid of ``[round][team]`` cells filled from the pick log.

        The board always has ``draft_rounds`` rows and grows when picks run
        past the configured number of rounds.
        """
        rounds = max(draft_rounds, round_for_pick(len(self._picks), self.total_teams) if self._picks else 0)
        board: list[list[Pick | None]] = [[None] * self.total_teams for _ in range(rounds)]
        for pick in self._picks:
            row = round_for_pick(pick.pick_number, self.total_teams) - 1
            column = team_for_pick(pick.pick_number, self.total_teams)
            board[row][column] = pick
        return board
