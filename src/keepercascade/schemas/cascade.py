from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from keepercascade.cascade.engine import CascadeConflict, CascadeKeeperResult, CascadeResult


class CascadeKeeperResponse(BaseModel):
    player_id: str
    roster_id: str
    player_name: str
    type: Literal["FRANCHISE", "REGULAR"]
    years_kept: int
    base_cost: Optional[int]
    final_cost: Optional[int]
    cascade_steps: List[int]
    is_cascaded: bool
    conflicts_with: List[str]
    excluded_reason: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None
    roster_name: Optional[str] = None

    @classmethod
    def from_result(cls, keeper: CascadeKeeperResult, **extra: Optional[str]) -> "CascadeKeeperResponse":
        return cls(
            player_id=keeper.player_id,
            roster_id=keeper.roster_id,
            player_name=keeper.player_name,
            type=keeper.keeper_type.value,
            years_kept=keeper.years_kept,
            base_cost=keeper.base_cost,
            final_cost=keeper.final_cost,
            cascade_steps=list(keeper.cascade_steps),
            is_cascaded=keeper.is_cascaded,
            conflicts_with=list(keeper.conflicts_with),
            excluded_reason=keeper.excluded_reason,
            **extra,
        )


class CascadeConflictResponse(BaseModel):
    round: int
    slot_owner_id: str
    kept_player_id: str
    displaced_player_id: str
    outcome: Literal["cascaded", "unresolved", "no_available_round"]
    resolved_round: Optional[int] = None

    @classmethod
    def from_conflict(cls, conflict: CascadeConflict) -> "CascadeConflictResponse":
        return cls(
            round=conflict.round,
            slot_owner_id=conflict.slot_owner_id,
            kept_player_id=conflict.kept_player_id,
            displaced_player_id=conflict.displaced_player_id,
            outcome=conflict.outcome,
            resolved_round=conflict.resolved_round,
        )


class CascadeResponse(BaseModel):
    league_id: str
    season: int
    keepers: List[CascadeKeeperResponse]
    conflicts: List[CascadeConflictResponse] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    has_errors: bool = False

    @classmethod
    def from_result(cls, result: CascadeResult) -> "CascadeResponse":
        return cls(
            league_id=result.league_id,
            season=result.season,
            keepers=[CascadeKeeperResponse.from_result(keeper) for keeper in result.keepers],
            conflicts=[CascadeConflictResponse.from_conflict(conflict) for conflict in result.conflicts],
            errors=list(result.errors),
            warnings=list(result.warnings),
            has_errors=result.has_errors,
        )
