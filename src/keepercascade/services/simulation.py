"""Simulation and finalization routines built on the cascade engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from keepercascade.board import DraftBoard, build_draft_board
from keepercascade.cascade import CascadeConfigError, CascadeResult, build_ownership, calculate_cascade
from keepercascade.models import KeeperInput, LeagueSnapshot
from keepercascade.persistence import KeeperRecord, KeeperStore, utc_now
from keepercascade.schemas import (
    CascadeConflictResponse,
    CascadeKeeperResponse,
    DraftBoardRoundResponse,
    DraftBoardSlotResponse,
    SimulationResponse,
    SimulationSummary,
)


logger = logging.getLogger(__name__)

KeeperLike = Union[KeeperInput, Mapping[str, Any]]


class KeeperFinalizationError(RuntimeError):
    def __init__(self, message: str, errors: Sequence[str]):
        super().__init__(message)
        self.message = message
        self.errors: Tuple[str, ...] = tuple(errors)


@dataclass(frozen=True)
class FinalizeResult:
    league_id: str
    season: int
    updated_count: int
    result: CascadeResult


def _enriched_keeper(snapshot: LeagueSnapshot, keeper) -> CascadeKeeperResponse:
    player = snapshot.get_player(keeper.player_id)
    roster = snapshot.get_roster(keeper.roster_id)
    return CascadeKeeperResponse.from_result(
        keeper,
        position=player.position if player else None,
        team=player.team if player else None,
        roster_name=roster.display_name if roster else None,
    )


def _board_to_response(snapshot: LeagueSnapshot, board: DraftBoard) -> List[DraftBoardRoundResponse]:
    rounds = []
    for board_round in board.rounds:
        slots = [
            DraftBoardSlotResponse(
                roster_id=slot.roster_id,
                roster_name=slot.roster_name,
                status=slot.status,
                pick_value=slot.pick_value,
                keepers=[_enriched_keeper(snapshot, keeper) for keeper in slot.keepers],
                traded_to=slot.traded_to,
                acquired_from=list(slot.acquired_from),
            )
            for slot in board_round.slots
        ]
        rounds.append(DraftBoardRoundResponse(round=board_round.round, slots=slots))
    return rounds


def build_simulation(snapshot: LeagueSnapshot, result: CascadeResult) -> SimulationResponse:
    """Decorate an already computed cascade for display."""

    config = snapshot.config
    if config is None:
        raise CascadeConfigError(f"League {snapshot.league_id} has no keeper configuration")
    ownership = build_ownership(snapshot, result.season)
    board = build_draft_board(snapshot, result, ownership)

    summary = SimulationSummary(
        total_keepers=len(result.keepers),
        cascaded_keepers=sum(1 for keeper in result.keepers if keeper.is_cascaded),
        excluded_keepers=sum(1 for keeper in result.keepers if keeper.final_cost is None),
        traded_picks=len(ownership),
    )
    return SimulationResponse(
        league_id=result.league_id,
        season=result.season,
        draft_rounds=config.draft_rounds,
        total_rosters=len(snapshot.rosters),
        keepers=[_enriched_keeper(snapshot, keeper) for keeper in result.keepers],
        conflicts=[CascadeConflictResponse.from_conflict(conflict) for conflict in result.conflicts],
        draft_board=_board_to_response(snapshot, board),
        summary=summary,
        errors=list(result.errors),
        warnings=list(result.warnings),
        has_errors=result.has_errors,
    )


def simulate_cascade(
    snapshot: LeagueSnapshot,
    keepers: Iterable[KeeperLike],
    season: int,
) -> SimulationResponse:
    """Run the cascade and decorate it for display. Nothing is persisted."""

    result = calculate_cascade(snapshot.league_id, keepers, season, league=snapshot)
    return build_simulation(snapshot, result)


def record_cascade(result: CascadeResult, *, store: KeeperStore) -> FinalizeResult:
    """Write every keeper of a computed cascade in one batch.

    Refuses to write anything when the cascade reports errors.
    """

    if result.has_errors:
        logger.warning(
            "Refusing to finalize league %s season %d: %d error(s)",
            result.league_id,
            result.season,
            len(result.errors),
        )
        raise KeeperFinalizationError("Cascade calculation has errors", result.errors)

    now = utc_now()
    records = [
        KeeperRecord(
            league_id=result.league_id,
            season=result.season,
            roster_id=keeper.roster_id,
            player_id=keeper.player_id,
            player_name=keeper.player_name,
            keeper_type=keeper.keeper_type,
            # Stored count includes the season being finalized.
            years_kept=keeper.years_kept + 1,
            base_cost=keeper.base_cost,
            final_cost=keeper.final_cost,
            updated_at=now,
        )
        for keeper in result.keepers
    ]
    updated = store.save_keeper_costs(league_id=result.league_id, season=result.season, keepers=records)
    logger.info("Finalized %d keeper(s) for league %s season %d", updated, result.league_id, result.season)
    return FinalizeResult(league_id=result.league_id, season=result.season, updated_count=updated, result=result)


def finalize_cascade(
    snapshot: LeagueSnapshot,
    keepers: Iterable[KeeperLike],
    season: int,
    *,
    store: KeeperStore,
) -> FinalizeResult:
    """Compute the cascade and persist it with :func:`record_cascade`."""

    result = calculate_cascade(snapshot.league_id, keepers, season, league=snapshot)
    return record_cascade(result, store=store)


def with_stored_history(snapshot: LeagueSnapshot, store: KeeperStore) -> LeagueSnapshot:
    """Snapshot whose keeper history also includes the store's finalized seasons.

    Stored rows win over snapshot rows for the same season, player and roster.
    """

    stored = store.keeper_history(snapshot.league_id)
    if not stored:
        return snapshot
    keys = {(record.season, record.player_id, record.roster_id) for record in stored}
    merged = [
        record
        for record in snapshot.keeper_history
        if (record.season, record.player_id, record.roster_id) not in keys
    ]
    merged.extend(stored)
    logger.debug("Merged %d stored keeper record(s) into league %s", len(stored), snapshot.league_id)
    return snapshot.model_copy(update={"keeper_history": merged})
