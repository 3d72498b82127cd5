from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import yaml

from fantasy_draft_tracker.draft.errors import DataUnavailableError
from fantasy_draft_tracker.draft.models import RosterConfig, RosterSlot

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

BENCH: str = "BN"
UTIL: str = "UTIL"
PITCHER: str = "P"

_POSITION_NORMALIZATIONS: dict[str, str] = {
    "LF": "OF",
    "CF": "OF",
    "RF": "OF",
    "DH": UTIL,
    "Util": UTIL,
    "CL": "RP",
}

_PITCHER_POSITIONS: frozenset[str] = frozenset({"SP", "RP", PITCHER})

DEFAULT_ROSTER_CONFIG: RosterConfig = RosterConfig(
    slots=(
        RosterSlot(position="C", count=1),
        RosterSlot(position="1B", count=1),
        RosterSlot(position="2B", count=1),
        RosterSlot(position="3B", count=1),
        RosterSlot(position="SS", count=1),
        RosterSlot(position="OF", count=3),
        RosterSlot(position=UTIL, count=1),
        RosterSlot(position="SP", count=5),
        RosterSlot(position="RP", count=3),
        RosterSlot(position=BENCH, count=6),
    )
)


def normalize_position(pos: str) -> str:
    return _POSITION_NORMALIZATIONS.get(pos.strip(), pos.strip())


def is_pitcher_position(pos: str) -> bool:
    return normalize_position(pos) in _PITCHER_POSITIONS


def eligible_positions(raw_positions: Iterable[str]) -> tuple[str, ...]:
    """Normalize and de-duplicate positions, appending the utility or generic pitcher marker.

    Batters always gain ``UTIL``; pitcher-only players gain ``P`` instead.
    """
    normalized = [normalize_position(p) for p in raw_positions if p.strip()]
    if not normalized:
        return (UTIL,)
    if all(p in _PITCHER_POSITIONS for p in normalized):
        normalized.append(PITCHER)
    else:
        normalized.append(UTIL)
    return tuple(dict.fromkeys(normalized))


def load_roster_config_file(path: Path) -> RosterConfig:
    """Read a ``slots:`` mapping of position to count.

    Raises ``DataUnavailableError`` when the file is missing, is not valid
    YAML or does not hold a position-to-count mapping.
    """
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise DataUnavailableError(f"Could not read roster config {path}: {e}") from e
    slots_data = data.get("slots", {}) if isinstance(data, dict) else None
    if not isinstance(slots_data, dict):
        raise DataUnavailableError(f"Roster config {path} must map 'slots' to position counts")
    slots: list[RosterSlot] = []
    for position, count in slots_data.items():
        try:
            slots.append(RosterSlot(position=normalize_position(str(position)), count=int(count)))
        except (TypeError, ValueError) as e:
            raise DataUnavailableError(f"Bad slot count for {position} in {path}: {count!r}") from e
    logger.debug("Loaded %d roster slots from %s", len(slots), path)
    return RosterConfig(slots=tuple(slots))
