"""League snapshot records handed to the cascade engine by calling code."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from keepercascade.config import LeagueKeeperConfig
from keepercascade.models.keeper import KeeperType


class RosterRecord(BaseModel):
    roster_id: str = Field(..., min_length=1)
    team_name: Optional[str] = None
    owner_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        return self.team_name or self.owner_name or f"Team {self.roster_id}"


class PlayerRecord(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str
    position: Optional[str] = None
    team: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class DraftPickRecord(BaseModel):
    """A completed pick from a past draft."""

    season: int
    round: int = Field(..., ge=1)
    roster_id: str
    player_id: str

    model_config = ConfigDict(frozen=True)


class KeeperHistoryRecord(BaseModel):
    """A keeper that was finalized for a past season."""

    season: int
    player_id: str
    roster_id: str
    type: KeeperType = KeeperType.REGULAR
    final_cost: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class TransactionType(str, Enum):
    TRADE = "TRADE"
    WAIVER = "WAIVER"
    FREE_AGENT = "FREE_AGENT"


class PlayerTransactionRecord(BaseModel):
    """A player moving onto a roster outside the draft."""

    season: int
    player_id: str
    type: TransactionType
    to_roster_id: str
    from_roster_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TradedPickRecord(BaseModel):
    """Ownership change of a future draft pick."""

    season: int
    round: int = Field(..., ge=1)
    original_owner_id: str
    current_owner_id: str

    model_config = ConfigDict(frozen=True)


class LeagueSnapshot(BaseModel):
    """Everything the engine needs to know about one league, fetched up front."""

    league_id: str = Field(..., min_length=1)
    name: str = ""
    config: Optional[LeagueKeeperConfig] = None
    rosters: List[RosterRecord] = Field(default_factory=list)
    players: List[PlayerRecord] = Field(default_factory=list)
    draft_picks: List[DraftPickRecord] = Field(default_factory=list)
    keeper_history: List[KeeperHistoryRecord] = Field(default_factory=list)
    traded_picks: List[TradedPickRecord] = Field(default_factory=list)
    transactions: List[PlayerTransactionRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_roster(self, roster_id: str) -> Optional[RosterRecord]:
        return next((roster for roster in self.rosters if roster.roster_id == roster_id), None)

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        return next((player for player in self.players if player.player_id == player_id), None)

    def roster_ids(self) -> set[str]:
        return {roster.roster_id for roster in self.rosters}

    def traded_picks_for(self, season: int) -> List[TradedPickRecord]:
        return [pick for pick in self.traded_picks if pick.season == season]
