"""Keeper declarations submitted by teams."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class KeeperType(str, Enum):
    FRANCHISE = "FRANCHISE"
    REGULAR = "REGULAR"


class KeeperInput(BaseModel):
    """Proposed keeper for the upcoming season."""

    player_id: str = Field(..., min_length=1)
    roster_id: str = Field(..., min_length=1)
    player_name: str = ""
    type: KeeperType = KeeperType.REGULAR

    model_config = ConfigDict(frozen=True)
