"""Pydantic models for JSON output."""

from .cascade import CascadeConflictResponse, CascadeKeeperResponse, CascadeResponse
from .simulation import (
    DraftBoardRoundResponse,
    DraftBoardSlotResponse,
    SimulationResponse,
    SimulationSummary,
)

__all__ = [
    "CascadeConflictResponse",
    "CascadeKeeperResponse",
    "CascadeResponse",
    "DraftBoardRoundResponse",
    "DraftBoardSlotResponse",
    "SimulationResponse",
    "SimulationSummary",
]
