"""Draft pick ownership after trades."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from keepercascade.models import TradedPickRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftPickOwnership:
    """Lookup of ``(round, original owner) -> current owner`` for one season.

    Only picks that changed hands are stored; every other pick still belongs
    to the roster it was originally assigned to.
    """

    draft_rounds: int
    roster_ids: Tuple[str, ...]
    _moves: Mapping[Tuple[int, str], str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_traded_picks(
        cls,
        traded_picks: Iterable[TradedPickRecord],
        *,
        roster_ids: Iterable[str],
        draft_rounds: int,
        season: Optional[int] = None,
    ) -> "DraftPickOwnership":
        known = tuple(sorted(set(roster_ids)))
        known_set = set(known)
        moves: dict[Tuple[int, str], str] = {}
        for pick in traded_picks:
            if season is not None and pick.season != season:
                continue
            if pick.original_owner_id == pick.current_owner_id:
                continue
            if pick.original_owner_id not in known_set or pick.current_owner_id not in known_set:
                logger.warning(
                    "Ignoring traded pick round %d %s -> %s: roster not in league",
                    pick.round,
                    pick.original_owner_id,
                    pick.current_owner_id,
                )
                continue
            if not 1 <= pick.round <= draft_rounds:
                logger.warning("Ignoring traded pick outside draft rounds: round %d", pick.round)
                continue
            moves[(pick.round, pick.original_owner_id)] = pick.current_owner_id
        return cls(draft_rounds=draft_rounds, roster_ids=known, _moves=MappingProxyType(moves))

    def effective_owner(self, round_number: int, roster_id: str) -> str:
        """Roster that currently holds ``roster_id``'s original pick in ``round_number``."""

        return self._moves.get((round_number, roster_id), roster_id)

    def owned_rounds(self, roster_id: str) -> set[int]:
        owned = {
            round_number
            for round_number in range(1, self.draft_rounds + 1)
            if self.effective_owner(round_number, roster_id) == roster_id
        }
        owned.update(round_number for (round_number, _), current in self._moves.items() if current == roster_id)
        return owned

    def traded_away(self, roster_id: str) -> dict[int, str]:
        """Rounds this roster no longer holds, mapped to the new owner."""

        return {
            round_number: current
            for (round_number, original), current in sorted(self._moves.items())
            if original == roster_id
        }

    def acquired(self, roster_id: str) -> list[Tuple[int, str]]:
        """``(round, original owner)`` pairs this roster picked up in trades."""

        return sorted(
            (round_number, original)
            for (round_number, original), current in self._moves.items()
            if current == roster_id
        )

    def __len__(self) -> int:
        return len(self._moves)
