"""Keeper cost cascade: base costs, slot collisions and cascade resolution."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from keepercascade.cascade.costs import (
    MAX_YEARS_EXCEEDED,
    KeeperCostError,
    compute_base_cost,
    count_years_kept,
    draft_round_for,
    is_past_max_years,
)
from keepercascade.cascade.ownership import DraftPickOwnership
from keepercascade.config import LeagueKeeperConfig
from keepercascade.models import KeeperInput, KeeperType, LeagueSnapshot


logger = logging.getLogger(__name__)

ConflictOutcome = Literal["cascaded", "unresolved", "no_available_round"]
Slot = Tuple[int, str]


class CascadeConfigError(RuntimeError):
    """Raised when a cascade cannot be computed at all for a league."""


@dataclass(frozen=True)
class CascadeKeeperResult:
    player_id: str
    roster_id: str
    player_name: str
    keeper_type: KeeperType
    years_kept: int
    base_cost: Optional[int]
    final_cost: Optional[int]
    cascade_steps: Tuple[int, ...]
    is_cascaded: bool
    conflicts_with: Tuple[str, ...]
    excluded_reason: Optional[str] = None


@dataclass(frozen=True)
class CascadeConflict:
    round: int
    slot_owner_id: str
    kept_player_id: str
    displaced_player_id: str
    outcome: ConflictOutcome
    resolved_round: Optional[int] = None


@dataclass(frozen=True)
class CascadeResult:
    league_id: str
    season: int
    keepers: Tuple[CascadeKeeperResult, ...]
    conflicts: Tuple[CascadeConflict, ...]
    errors: Tuple[str, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def keepers_for(self, roster_id: str) -> List[CascadeKeeperResult]:
        return [keeper for keeper in self.keepers if keeper.roster_id == roster_id]


@dataclass
class _WorkingKeeper:
    keeper: KeeperInput
    order: int
    years_kept: int = 0
    base_cost: Optional[int] = None
    final_cost: Optional[int] = None
    steps: List[int] = field(default_factory=list)
    conflicts_with: List[str] = field(default_factory=list)
    excluded_reason: Optional[str] = None

    @property
    def label(self) -> str:
        return self.keeper.player_name or self.keeper.player_id

    @property
    def placed_round(self) -> int:
        if self.final_cost is None:
            raise RuntimeError(f"{self.label} has no round assigned")
        return self.final_cost

    @property
    def active(self) -> bool:
        return self.excluded_reason is None and self.final_cost is not None

    def exclude(self, reason: str, errors: List[str]) -> None:
        self.excluded_reason = reason
        self.final_cost = None
        errors.append(f"{self.label}: {reason}")

    def to_result(self) -> CascadeKeeperResult:
        return CascadeKeeperResult(
            player_id=self.keeper.player_id,
            roster_id=self.keeper.roster_id,
            player_name=self.keeper.player_name,
            keeper_type=self.keeper.type,
            years_kept=self.years_kept,
            base_cost=self.base_cost,
            final_cost=self.final_cost,
            cascade_steps=tuple(self.steps),
            is_cascaded=self.final_cost is not None and self.final_cost != self.base_cost,
            conflicts_with=tuple(self.conflicts_with),
            excluded_reason=self.excluded_reason,
        )


def _coerce_inputs(keepers: Iterable[Union[KeeperInput, Mapping[str, Any]]]) -> List[KeeperInput]:
    return [
        keeper if isinstance(keeper, KeeperInput) else KeeperInput.model_validate(keeper)
        for keeper in keepers
    ]


def _assign_base_costs(
    league: LeagueSnapshot,
    config: LeagueKeeperConfig,
    working: Sequence[_WorkingKeeper],
    season: int,
    errors: List[str],
) -> None:
    rosters = league.roster_ids()
    seen: set[str] = set()

    for item in working:
        keeper = item.keeper
        if keeper.roster_id not in rosters:
            item.exclude(f"roster {keeper.roster_id} not found in league {league.league_id}", errors)
            continue
        if league.get_player(keeper.player_id) is None:
            item.exclude(f"player {keeper.player_id} not found", errors)
            continue
        if keeper.player_id in seen:
            item.exclude("player already submitted as a keeper", errors)
            continue
        seen.add(keeper.player_id)

        item.years_kept = count_years_kept(league.keeper_history, keeper.player_id, keeper.roster_id, season)
        draft_round = draft_round_for(
            league.draft_picks,
            keeper.player_id,
            keeper.roster_id,
            season,
            league.transactions,
        )
        try:
            base = compute_base_cost(config, keeper.type, draft_round=draft_round, years_kept=item.years_kept)
        except KeeperCostError as exc:
            item.exclude(str(exc), errors)
            continue

        item.base_cost = base.cost
        if is_past_max_years(config, keeper.type, item.years_kept):
            item.exclude(
                f"{MAX_YEARS_EXCEEDED} ({item.years_kept}/{config.regular_keeper_max_years})",
                errors,
            )
            continue
        if base.cost > config.draft_rounds:
            item.exclude(
                f"no available round (Round {base.cost} is past the {config.draft_rounds}-round draft)",
                errors,
            )
            continue
        item.final_cost = base.cost


def _apply_roster_caps(config: LeagueKeeperConfig, working: Sequence[_WorkingKeeper], errors: List[str]) -> None:
    by_roster: dict[str, List[_WorkingKeeper]] = defaultdict(list)
    for item in working:
        if item.active:
            by_roster[item.keeper.roster_id].append(item)

    for roster_id in sorted(by_roster):
        items = by_roster[roster_id]
        franchise = [item for item in items if item.keeper.type is KeeperType.FRANCHISE]
        regular = [item for item in items if item.keeper.type is KeeperType.REGULAR]
        for item in franchise[config.max_franchise_tags:]:
            item.exclude(
                f"exceeds max franchise tags ({len(franchise)}/{config.max_franchise_tags}) for roster {roster_id}",
                errors,
            )
        for item in regular[config.max_regular_keepers:]:
            item.exclude(
                f"exceeds max regular keepers ({len(regular)}/{config.max_regular_keepers}) for roster {roster_id}",
                errors,
            )
        remaining = [item for item in items if item.active]
        for item in remaining[config.max_keepers:]:
            item.exclude(
                f"exceeds max keepers ({len(remaining)}/{config.max_keepers}) for roster {roster_id}",
                errors,
            )


def _slot(item: _WorkingKeeper, ownership: DraftPickOwnership) -> Slot:
    return item.placed_round, ownership.effective_owner(item.placed_round, item.keeper.roster_id)


def _priority(item: _WorkingKeeper) -> Tuple[int, str]:
    # Fewer years kept holds the slot; player_id breaks ties.
    return item.years_kept, item.keeper.player_id


def _find_collisions(
    pool: Sequence[_WorkingKeeper],
    ownership: DraftPickOwnership,
) -> List[Tuple[Slot, List[_WorkingKeeper]]]:
    groups: dict[Slot, List[_WorkingKeeper]] = defaultdict(list)
    for item in pool:
        groups[_slot(item, ownership)].append(item)
    return [
        (slot, sorted(members, key=_priority))
        for slot, members in sorted(groups.items())
        if len(members) > 1
    ]


def _link(winner: _WorkingKeeper, loser: _WorkingKeeper) -> None:
    if loser.keeper.player_id not in winner.conflicts_with:
        winner.conflicts_with.append(loser.keeper.player_id)
    if winner.keeper.player_id not in loser.conflicts_with:
        loser.conflicts_with.append(winner.keeper.player_id)


def _next_free_round(
    loser: _WorkingKeeper,
    pool: Sequence[_WorkingKeeper],
    ownership: DraftPickOwnership,
) -> int:
    claimed = {_slot(other, ownership) for other in pool if other is not loser}
    next_round = loser.placed_round + 1
    while (next_round, ownership.effective_owner(next_round, loser.keeper.roster_id)) in claimed:
        next_round += 1
    return next_round


def _resolve_collisions(
    config: LeagueKeeperConfig,
    ownership: DraftPickOwnership,
    active: Sequence[_WorkingKeeper],
    errors: List[str],
    max_iterations: Optional[int],
) -> List[CascadeConflict]:
    pool = list(active)
    limit = max_iterations if max_iterations is not None else config.draft_rounds * len(pool)
    conflicts: List[CascadeConflict] = []

    iterations = 0
    collisions = _find_collisions(pool, ownership)
    while collisions and iterations < limit:
        iterations += 1
        for (round_number, owner), members in collisions:
            winner = members[0]
            for loser in members[1:]:
                _link(winner, loser)
                next_round = _next_free_round(loser, pool, ownership)
                if next_round > config.draft_rounds:
                    conflicts.append(
                        CascadeConflict(
                            round=round_number,
                            slot_owner_id=owner,
                            kept_player_id=winner.keeper.player_id,
                            displaced_player_id=loser.keeper.player_id,
                            outcome="no_available_round",
                        )
                    )
                    loser.exclude(f"no available round (cascaded past Round {config.draft_rounds})", errors)
                    pool.remove(loser)
                    continue
                logger.debug(
                    "Round %d slot of %s: %s keeps it, %s cascades to Round %d",
                    round_number,
                    owner,
                    winner.keeper.player_id,
                    loser.keeper.player_id,
                    next_round,
                )
                loser.final_cost = next_round
                loser.steps.append(next_round)
                conflicts.append(
                    CascadeConflict(
                        round=round_number,
                        slot_owner_id=owner,
                        kept_player_id=winner.keeper.player_id,
                        displaced_player_id=loser.keeper.player_id,
                        outcome="cascaded",
                        resolved_round=next_round,
                    )
                )
        collisions = _find_collisions(pool, ownership)

    if collisions:
        logger.warning(
            "Cascade stopped after %d iteration(s) with %d unresolved collision(s)",
            iterations,
            len(collisions),
        )
        for (round_number, owner), members in collisions:
            winner = members[0]
            for loser in members[1:]:
                _link(winner, loser)
                conflicts.append(
                    CascadeConflict(
                        round=round_number,
                        slot_owner_id=owner,
                        kept_player_id=winner.keeper.player_id,
                        displaced_player_id=loser.keeper.player_id,
                        outcome="unresolved",
                    )
                )
                loser.exclude(f"unresolved collision at Round {round_number}", errors)

    return conflicts


def _result_order(item: _WorkingKeeper) -> Tuple[str, bool, int, str, int]:
    return (
        item.keeper.roster_id,
        item.final_cost is None,
        item.final_cost or 0,
        item.keeper.player_id,
        item.order,
    )


def _final_year_warnings(config: LeagueKeeperConfig, working: Sequence[_WorkingKeeper]) -> List[str]:
    max_years = config.regular_keeper_max_years
    return [
        f"{item.label}: final year of keeper eligibility ({item.years_kept + 1}/{max_years})"
        for item in working
        if item.keeper.type is KeeperType.REGULAR
        and item.final_cost is not None
        and item.years_kept + 1 == max_years
    ]


def build_ownership(league: LeagueSnapshot, season: int) -> DraftPickOwnership:
    if league.config is None:
        raise CascadeConfigError(f"League {league.league_id} has no keeper configuration")
    return DraftPickOwnership.from_traded_picks(
        league.traded_picks,
        roster_ids=league.roster_ids(),
        draft_rounds=league.config.draft_rounds,
        season=season,
    )


def calculate_cascade(
    league_id: str,
    keepers: Iterable[Union[KeeperInput, Mapping[str, Any]]],
    season: int,
    *,
    league: Optional[LeagueSnapshot],
    max_iterations: Optional[int] = None,
) -> CascadeResult:
    """Assign draft-round costs to proposed keepers and resolve slot collisions.

    Per-keeper problems (unknown roster or player, too many years kept, roster
    caps, no round left) are collected in ``errors`` and only exclude the
    offending keeper. Regular keepers entering their last eligible year are
    listed in ``warnings``. A missing league or keeper configuration raises
    :class:`CascadeConfigError`.

    Franchise tags are reserved league-wide at ``franchise_tag_round``: they
    never enter collision resolution, so a regular keeper may share Round 1
    with a franchise tag on the same roster.
    """

    if league is None:
        raise CascadeConfigError(f"League {league_id} not found")
    if league.league_id != league_id:
        raise CascadeConfigError(f"Snapshot is for league {league.league_id}, not {league_id}")
    config = league.config
    if config is None:
        raise CascadeConfigError(f"League {league_id} has no keeper configuration")

    errors: List[str] = []
    working = [_WorkingKeeper(keeper=keeper, order=idx) for idx, keeper in enumerate(_coerce_inputs(keepers))]

    _assign_base_costs(league, config, working, season, errors)
    _apply_roster_caps(config, working, errors)

    ownership = build_ownership(league, season)
    regular = [item for item in working if item.active and item.keeper.type is KeeperType.REGULAR]
    conflicts = _resolve_collisions(config, ownership, regular, errors, max_iterations)
    warnings = _final_year_warnings(config, working)

    results = tuple(item.to_result() for item in sorted(working, key=_result_order))
    logger.info(
        "Cascade league=%s season=%d: %d keeper(s), %d cascaded, %d conflict(s), %d error(s)",
        league_id,
        season,
        len(results),
        sum(1 for keeper in results if keeper.is_cascaded),
        len(conflicts),
        len(errors),
    )
    return CascadeResult(
        league_id=league_id,
        season=season,
        keepers=results,
        conflicts=tuple(conflicts),
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
