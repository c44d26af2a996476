from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .cascade import CascadeConflictResponse, CascadeKeeperResponse


class DraftBoardSlotResponse(BaseModel):
    roster_id: str
    roster_name: str
    status: Literal["keeper", "available", "traded"]
    pick_value: float
    keepers: List[CascadeKeeperResponse] = Field(default_factory=list)
    traded_to: Optional[str] = None
    acquired_from: List[str] = Field(default_factory=list)


class DraftBoardRoundResponse(BaseModel):
    round: int
    slots: List[DraftBoardSlotResponse]


class SimulationSummary(BaseModel):
    total_keepers: int
    cascaded_keepers: int
    excluded_keepers: int
    traded_picks: int


class SimulationResponse(BaseModel):
    league_id: str
    season: int
    draft_rounds: int
    total_rosters: int
    keepers: List[CascadeKeeperResponse]
    conflicts: List[CascadeConflictResponse]
    draft_board: List[DraftBoardRoundResponse]
    summary: SimulationSummary
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    has_errors: bool = False
