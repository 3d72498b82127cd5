from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from fantasy_draft_tracker.draft.models import DraftSettings, FavoriteTeam, RosterConfig
from fantasy_draft_tracker.draft.positions import DEFAULT_ROSTER_CONFIG, load_roster_config_file

logger = logging.getLogger(__name__)


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_DEFAULTS: dict[str, object] = {
    "draft": {
        "total_teams": 12,
        "draft_rounds": 23,
        "your_team_position": 3,
        "favorite_team": "mets",
    },
    "roster": {
        "config_file": "",
    },
    "catalog": {
        "path": "data/merged_projections.json",
    },
    "store": {
        "db_path": "~/.config/fdt/draft.db",
        "session_key": "default",
    },
}


def create_config(
    yaml_path: str = "config.yaml",
    env_prefix: str = "FANTASY",
    defaults: dict[str, object] | None = None,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables (``FANTASY__DRAFT__TOTAL_TEAMS``).
        defaults: Default configuration values.
        overrides: Values that win over every other layer, e.g. from CLI flags.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _int_setting(cfg: AppConfig, key: str, default: int) -> int:
    # Env vars arrive as strings.
    try:
        value = int(str(cfg[key]))
    except (KeyError, ValueError):
        logger.warning("Invalid value for %s; using %d", key, default)
        return default
    if value < 1:
        logger.warning("%s must be positive; using %d", key, default)
        return default
    return value


def load_draft_settings(cfg: AppConfig | None = None) -> DraftSettings:
    if cfg is None:
        cfg = create_config()
    defaults = DraftSettings()
    total_teams = _int_setting(cfg, "draft.total_teams", defaults.total_teams)
    position = _int_setting(cfg, "draft.your_team_position", defaults.your_team_position)
    if position > total_teams:
        logger.warning("draft.your_team_position %d exceeds %d teams; using 1", position, total_teams)
        position = 1
    try:
        favorite = FavoriteTeam(str(cfg["draft.favorite_team"]).lower())
    except (KeyError, ValueError):
        logger.warning("Unsupported draft.favorite_team; using %s", defaults.favorite_team.value)
        favorite = defaults.favorite_team
    return DraftSettings(
        total_teams=total_teams,
        draft_rounds=_int_setting(cfg, "draft.draft_rounds", defaults.draft_rounds),
        your_team_position=position,
        favorite_team=favorite,
    )


def load_roster_config(cfg: AppConfig | None = None) -> RosterConfig:
    if cfg is None:
        cfg = create_config()
    raw_path = str(cfg["roster.config_file"])
    if not raw_path:
        return DEFAULT_ROSTER_CONFIG
    return load_roster_config_file(Path(raw_path).expanduser())
