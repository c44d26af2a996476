"""Per-round draft board view of a cascade result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from keepercascade.cascade.engine import CascadeKeeperResult, CascadeResult
from keepercascade.cascade.ownership import DraftPickOwnership
from keepercascade.config import get_pick_value
from keepercascade.models import LeagueSnapshot


SlotStatus = Literal["keeper", "available", "traded"]


@dataclass(frozen=True)
class DraftBoardSlot:
    round: int
    roster_id: str
    roster_name: str
    status: SlotStatus
    pick_value: float
    keepers: Tuple[CascadeKeeperResult, ...] = ()
    traded_to: Optional[str] = None
    acquired_from: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DraftBoardRound:
    round: int
    slots: Tuple[DraftBoardSlot, ...]


@dataclass(frozen=True)
class DraftBoard:
    rounds: Tuple[DraftBoardRound, ...]

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    def slot(self, round_number: int, roster_id: str) -> DraftBoardSlot:
        for slot in self.rounds[round_number - 1].slots:
            if slot.roster_id == roster_id:
                return slot
        raise KeyError(f"No slot for roster {roster_id!r} in round {round_number}")


def build_draft_board(
    snapshot: LeagueSnapshot,
    result: CascadeResult,
    ownership: DraftPickOwnership,
) -> DraftBoard:
    """Lay keepers and traded picks out on a round-by-roster grid."""

    if snapshot.config is None:
        raise ValueError(f"League {snapshot.league_id} has no keeper configuration")
    config = snapshot.config

    names = {roster.roster_id: roster.display_name for roster in snapshot.rosters}
    placed: dict[Tuple[int, str], list[CascadeKeeperResult]] = {}
    for keeper in result.keepers:
        if keeper.final_cost is None:
            continue
        placed.setdefault((keeper.final_cost, keeper.roster_id), []).append(keeper)

    acquired: dict[Tuple[int, str], list[str]] = {}
    for roster in snapshot.rosters:
        for round_number, original in ownership.acquired(roster.roster_id):
            acquired.setdefault((round_number, roster.roster_id), []).append(names.get(original, original))

    rounds = []
    for round_number in range(1, config.draft_rounds + 1):
        slots = []
        for roster in snapshot.rosters:
            roster_id = roster.roster_id
            holder = ownership.effective_owner(round_number, roster_id)
            keepers = tuple(placed.get((round_number, roster_id), ()))
            traded_to = names.get(holder, holder) if holder != roster_id else None
            if keepers:
                status: SlotStatus = "keeper"
            elif traded_to is not None:
                status = "traded"
            else:
                status = "available"
            slots.append(
                DraftBoardSlot(
                    round=round_number,
                    roster_id=roster_id,
                    roster_name=names[roster_id],
                    status=status,
                    pick_value=get_pick_value(config, round_number),
                    keepers=keepers,
                    traded_to=traded_to,
                    acquired_from=tuple(acquired.get((round_number, roster_id), ())),
                )
            )
        rounds.append(DraftBoardRound(round=round_number, slots=tuple(slots)))
    return DraftBoard(rounds=tuple(rounds))
