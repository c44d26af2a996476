"""Base keeper cost and eligibility helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from keepercascade.config import LeagueKeeperConfig
from keepercascade.models import (
    DraftPickRecord,
    KeeperHistoryRecord,
    KeeperType,
    PlayerTransactionRecord,
    TransactionType,
)

MAX_YEARS_EXCEEDED = "maximum keeper years exceeded"


class KeeperCostError(ValueError):
    """Raised when a keeper has no usable cost basis."""


@dataclass(frozen=True)
class BaseCost:
    cost: int
    years_kept: int
    draft_round: Optional[int]
    reason: str


def count_years_kept(
    history: Iterable[KeeperHistoryRecord],
    player_id: str,
    roster_id: str,
    season: int,
) -> int:
    """Count consecutive seasons before ``season`` this roster kept the player."""

    kept_seasons = {
        record.season
        for record in history
        if record.player_id == player_id and record.roster_id == roster_id and record.season < season
    }
    years = 0
    check = season - 1
    while check in kept_seasons:
        years += 1
        check -= 1
    return years


EventKey = Tuple[int, int, int]


def _latest_acquisition(
    draft_picks: Sequence[DraftPickRecord],
    transactions: Sequence[PlayerTransactionRecord],
    player_id: str,
    roster_id: str,
    season: int,
    before: EventKey,
) -> Optional[Tuple[EventKey, Union[DraftPickRecord, PlayerTransactionRecord]]]:
    # A season's draft happens before any of that season's transactions.
    events: list[Tuple[EventKey, Union[DraftPickRecord, PlayerTransactionRecord]]] = []
    for pick in draft_picks:
        if pick.player_id == player_id and pick.roster_id == roster_id and pick.season < season:
            events.append(((pick.season, 0, -pick.round), pick))
    for idx, record in enumerate(transactions):
        if record.player_id == player_id and record.to_roster_id == roster_id and record.season <= season:
            events.append(((record.season, 1, idx), record))
    events = [event for event in events if event[0] < before]
    if not events:
        return None
    return max(events, key=lambda event: event[0])


def draft_round_for(
    draft_picks: Iterable[DraftPickRecord],
    player_id: str,
    roster_id: str,
    season: int,
    transactions: Iterable[PlayerTransactionRecord] = (),
) -> Optional[int]:
    """Draft round that sets the player's keeper cost for ``roster_id``.

    Uses the roster's most recent acquisition of the player before ``season``.
    A trade inherits the round from the sending roster, following the chain
    back to the original draft pick. Waiver and free-agent pickups have no
    draft round.
    """

    picks = list(draft_picks)
    moves = list(transactions)
    current = roster_id
    before: EventKey = (season + 1, 0, 0)
    while True:
        found = _latest_acquisition(picks, moves, player_id, current, season, before)
        if found is None:
            return None
        before, acquisition = found
        if isinstance(acquisition, DraftPickRecord):
            return acquisition.round
        if acquisition.type is not TransactionType.TRADE or acquisition.from_roster_id is None:
            return None
        current = acquisition.from_roster_id


def compute_base_cost(
    config: LeagueKeeperConfig,
    keeper_type: KeeperType,
    *,
    draft_round: Optional[int],
    years_kept: int,
) -> BaseCost:
    if keeper_type is KeeperType.FRANCHISE:
        return BaseCost(
            cost=config.franchise_tag_round,
            years_kept=years_kept,
            draft_round=draft_round,
            reason=f"Franchise tag = Round {config.franchise_tag_round}",
        )

    if draft_round is None:
        if config.undrafted_round is None:
            raise KeeperCostError("no draft history and no undrafted round configured")
        basis = config.undrafted_round
        label = f"Undrafted (Round {basis})"
    else:
        basis = draft_round
        label = f"Drafted in Round {basis}"

    cost = max(config.minimum_round, basis - years_kept * config.cost_reduction_per_year)
    return BaseCost(
        cost=cost,
        years_kept=years_kept,
        draft_round=draft_round,
        reason=f"{label} - {years_kept} year(s) kept = Round {cost}",
    )


def is_past_max_years(config: LeagueKeeperConfig, keeper_type: KeeperType, years_kept: int) -> bool:
    if keeper_type is KeeperType.FRANCHISE:
        return False
    return years_kept >= config.regular_keeper_max_years
