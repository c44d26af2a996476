"""Multi-year keeper cost projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Sequence

from keepercascade.config import LeagueKeeperConfig


ProjectionStatus = Literal["REGULAR", "FRANCHISE_ONLY", "INELIGIBLE"]
Trajectory = Literal["IMPROVING", "STABLE", "EXPIRING"]


@dataclass(frozen=True)
class YearProjection:
    season: int
    cost: int
    years_kept: int
    status: ProjectionStatus
    reason: str

    @property
    def is_eligible(self) -> bool:
        return self.status != "INELIGIBLE"


def project_keeper_costs(
    config: LeagueKeeperConfig,
    *,
    current_cost: int,
    years_kept: int,
    season: int,
    years: int = 3,
) -> List[YearProjection]:
    """Project a regular keeper's cost and eligibility for the next ``years`` seasons.

    ``years_kept`` counts the current season, so a first-year keeper passes 1.
    """

    max_years = config.regular_keeper_max_years
    projections: List[YearProjection] = []
    for offset in range(years):
        future_years = years_kept + offset
        cost = max(config.minimum_round, current_cost - offset * config.cost_reduction_per_year)
        if future_years > max_years:
            status: ProjectionStatus = "INELIGIBLE"
            reason = f"Exceeded max years ({future_years} > {max_years})"
        elif future_years == max_years:
            status = "FRANCHISE_ONLY"
            reason = "Final year - Franchise Tag only after this season"
        else:
            status = "REGULAR"
            reason = f"Round {cost} (Year {future_years} of {max_years})"
        projections.append(
            YearProjection(
                season=season + offset,
                cost=cost,
                years_kept=future_years,
                status=status,
                reason=reason,
            )
        )
    return projections


def value_trajectory(projections: Sequence[YearProjection]) -> Trajectory:
    eligible = [projection for projection in projections if projection.is_eligible]
    if len(eligible) <= 1:
        return "EXPIRING"
    if eligible[-1].cost < eligible[0].cost:
        return "IMPROVING"
    return "STABLE"
