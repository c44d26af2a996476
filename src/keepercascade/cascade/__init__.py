"""Keeper cost cascade engine."""

from .costs import BaseCost, KeeperCostError, compute_base_cost, count_years_kept, draft_round_for
from .engine import (
    CascadeConfigError,
    CascadeConflict,
    CascadeKeeperResult,
    CascadeResult,
    build_ownership,
    calculate_cascade,
)
from .ownership import DraftPickOwnership
from .projections import YearProjection, project_keeper_costs, value_trajectory

__all__ = [
    "BaseCost",
    "CascadeConfigError",
    "CascadeConflict",
    "CascadeKeeperResult",
    "CascadeResult",
    "DraftPickOwnership",
    "KeeperCostError",
    "YearProjection",
    "build_ownership",
    "calculate_cascade",
    "compute_base_cost",
    "count_years_kept",
    "draft_round_for",
    "project_keeper_costs",
    "value_trajectory",
]
