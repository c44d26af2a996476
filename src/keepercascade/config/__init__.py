"""Configuration helpers for league keeper rules."""

from .rules import (
    DEFAULT_KEEPER_CONFIG,
    DEFAULT_PICK_VALUES,
    LeagueKeeperConfig,
    get_pick_value,
    keeper_planning_season,
    resolve_config,
)

__all__ = [
    "DEFAULT_KEEPER_CONFIG",
    "DEFAULT_PICK_VALUES",
    "LeagueKeeperConfig",
    "get_pick_value",
    "keeper_planning_season",
    "resolve_config",
]
