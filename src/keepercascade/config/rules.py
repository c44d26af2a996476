"""Keeper rule configuration for supported leagues."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Dict, Mapping, Optional


DEFAULT_PICK_VALUES: Mapping[int, float] = {
    1: 100,
    2: 85,
    3: 70,
    4: 55,
    5: 42,
    6: 32,
    7: 24,
    8: 18,
    9: 14,
    10: 11,
    11: 8,
    12: 6,
    13: 5,
    14: 4,
    15: 3,
    16: 2,
}


@dataclass(frozen=True)
class LeagueKeeperConfig:
    max_keepers: int = 7
    max_franchise_tags: int = 2
    max_regular_keepers: int = 5
    regular_keeper_max_years: int = 2
    undrafted_round: Optional[int] = 10
    franchise_tag_round: int = 1
    draft_rounds: int = 16
    minimum_round: int = 1
    cost_reduction_per_year: int = 1
    pick_values: Mapping[int, float] = field(default_factory=lambda: dict(DEFAULT_PICK_VALUES))

    def __post_init__(self) -> None:
        for name in ("max_keepers", "max_franchise_tags", "max_regular_keepers", "regular_keeper_max_years"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.draft_rounds < 1:
            raise ValueError(f"draft_rounds must be >= 1, got {self.draft_rounds}")
        if not 1 <= self.minimum_round <= self.draft_rounds:
            raise ValueError(f"minimum_round must be within 1..{self.draft_rounds}, got {self.minimum_round}")
        if not 1 <= self.franchise_tag_round <= self.draft_rounds:
            raise ValueError(
                f"franchise_tag_round must be within 1..{self.draft_rounds}, got {self.franchise_tag_round}"
            )
        if self.undrafted_round is not None and not 1 <= self.undrafted_round <= self.draft_rounds:
            raise ValueError(
                f"undrafted_round must be within 1..{self.draft_rounds}, got {self.undrafted_round}"
            )
        if self.cost_reduction_per_year < 0:
            raise ValueError("cost_reduction_per_year must be >= 0")


DEFAULT_KEEPER_CONFIG = LeagueKeeperConfig()

_CONFIG_FIELDS = frozenset(f.name for f in fields(LeagueKeeperConfig))


def resolve_config(settings: Optional[Mapping[str, Any]]) -> LeagueKeeperConfig:
    """Merge per-league settings over the defaults, raising KeyError if missing."""

    if settings is None:
        raise KeyError("League has no keeper settings configured")

    unknown = sorted(set(settings) - _CONFIG_FIELDS)
    if unknown:
        raise ValueError(f"Unknown keeper setting(s): {', '.join(unknown)}")

    values: Dict[str, Any] = dict(settings)
    if "pick_values" in values and values["pick_values"] is not None:
        values["pick_values"] = {int(k): float(v) for k, v in values["pick_values"].items()}
    return LeagueKeeperConfig(**values)


def get_pick_value(config: LeagueKeeperConfig, round_number: int) -> float:
    """Return the display value of a draft round, defaulting to 1."""

    return config.pick_values.get(round_number, 1)


def keeper_planning_season(today: Optional[date] = None) -> int:
    """Season that keeper selections made on ``today`` apply to."""

    today = today or date.today()
    # September onward the current season is underway; plan for next year's draft.
    if today.month >= 9:
        return today.year + 1
    return today.year
