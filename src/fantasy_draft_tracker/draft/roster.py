from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fantasy_draft_tracker.draft.models import RosterEntry, StatTotals
from fantasy_draft_tracker.draft.positions import BENCH

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fantasy_draft_tracker.draft.models import Player, RosterConfig

logger = logging.getLogger(__name__)


class RosterAssignment:
    """Slot assignment for the controlled team's roster.

    Filled counts are always recounted from the live entries so undo and
    manual moves never leave stale totals behind.
    """

    def __init__(self, roster_config: RosterConfig, entries: Iterable[RosterEntry] = ()) -> None:
        self.roster_config = roster_config
        self._entries: list[RosterEntry] = list(entries)

    @property
    def entries(self) -> tuple[RosterEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def find(self, player_id: str) -> RosterEntry | None:
        for entry in self._entries:
            if entry.player_id == player_id:
                return entry
        return None

    def filled_positions(self) -> dict[str, int]:
        filled = {position: 0 for position in self.roster_config.positions}
        for entry in self._entries:
            if entry.position in filled:
                filled[entry.position] += 1
        return filled

    def available_slots(self) -> dict[str, int]:
        filled = self.filled_positions()
        return {slot.position: slot.count - filled[slot.position] for slot in self.roster_config.slots}

    def total_roster_spots(self) -> int:
        return self.roster_config.total_spots

    def filled_roster_spots(self) -> int:
        return len(self._entries)

    def _has_room(self, position: str, filled: dict[str, int]) -> bool:
        capacity = self.roster_config.capacity(position)
        if not capacity:
            return False
        return filled.get(position, 0) < capacity

    def choose_position(self, player: Player, position: str | None = None) -> str:
        filled = self.filled_positions()

        if position is not None:
            if position == BENCH:
                return BENCH
            if position in player.positions and self._has_room(position, filled):
                return position
            logger.debug("Ignoring requested slot %s for %s", position, player.name)

        if self._has_room(player.position, filled):
            return player.position
        for candidate in player.positions:
            if self._has_room(candidate, filled):
                return candidate
        # Bench capacity is a soft ceiling; overflow is left for the caller to flag.
        return BENCH

    def add(self, player: Player, position: str | None = None) -> RosterEntry:
        slot = self.choose_position(player, position)
        entry = RosterEntry(player_id=player.player_id, position=slot, player=player)
        self._entries.append(entry)
        logger.debug("Rostered %s at %s", player.name, slot)
        return entry

    def remove(self, player_id: str) -> RosterEntry | None:
        for index, entry in enumerate(self._entries):
            if entry.player_id == player_id:
                return self._entries.pop(index)
        return None

    def clear(self) -> None:
        self._entries.clear()

    def load_entries(self, entries: Iterable[RosterEntry]) -> None:
        """Replace the roster with stored entries.

        A stored slot that is ineligible for the player or already full is
        moved to the bench.
        """
        self._entries.clear()
        for entry in entries:
            position = entry.position
            if position != BENCH and (
                position not in entry.player.positions or not self._has_room(position, self.filled_positions())
            ):
                logger.warning("Stored slot %s for %s is not available; benching", position, entry.player.name)
                position = BENCH
            self._entries.append(RosterEntry(player_id=entry.player_id, position=position, player=entry.player))

    def move_player_position(self, player_id: str, new_position: str) -> bool:
        """Reassign a rostered player. Capacity at the destination is not rechecked.

        Returns False without changing anything when the player is not
        rostered or is not eligible for ``new_position``.
        """
        entry = self.find(player_id)
        if entry is None:
            logger.debug("Move ignored: %s is not on the roster", player_id)
            return False
        if new_position != BENCH and new_position not in entry.player.positions:
            logger.debug("Move ignored: %s is not eligible at %s", entry.player.name, new_position)
            return False
        entry.position = new_position
        return True

    def is_bench_overfull(self) -> bool:
        capacity = self.roster_config.capacity(BENCH)
        return capacity is not None and self.filled_positions().get(BENCH, 0) > capacity

    def stat_totals(self) -> StatTotals:
        """Sum counting stats; AVG, ERA and WHIP are averaged per batter / pitcher."""
        hr = r = rbi = sb = avg = 0.0
        w = sv = so = era = whip = 0.0
        batters = pitchers = 0
        for entry in self._entries:
            player = entry.player
            if player.is_pitcher:
                pitchers += 1
                w += player.pitching.w
                sv += player.pitching.sv
                so += player.pitching.so
                era += player.pitching.era
                whip += player.pitching.whip
            else:
                batters += 1
                hr += player.batting.hr
                r += player.batting.r
                rbi += player.batting.rbi
                sb += player.batting.sb
                avg += player.batting.avg
        if batters:
            avg /= batters
        if pitchers:
            era /= pitchers
            whip /= pitchers
        return StatTotals(hr=hr, r=r, rbi=rbi, sb=sb, avg=avg, w=w, sv=sv, so=so, era=era, whip=whip)
