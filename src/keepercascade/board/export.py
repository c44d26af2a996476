"""CSV export helpers for cascade results."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Mapping, Optional

from keepercascade.cascade.engine import CascadeResult


CASCADE_HEADERS: tuple[str, ...] = (
    "roster_id",
    "roster_name",
    "player_id",
    "player_name",
    "type",
    "years_kept",
    "base_cost",
    "final_cost",
    "cascaded",
    "cascade_steps",
    "conflicts_with",
    "excluded_reason",
)


def _cell(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def export_cascade_to_csv(
    result: CascadeResult,
    *,
    roster_names: Optional[Mapping[str, str]] = None,
) -> str:
    """Render one CSV row per keeper in result order."""

    names = roster_names or {}
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CASCADE_HEADERS)
    for keeper in result.keepers:
        writer.writerow([
            keeper.roster_id,
            names.get(keeper.roster_id, ""),
            keeper.player_id,
            keeper.player_name,
            keeper.keeper_type.value,
            keeper.years_kept,
            _cell(keeper.base_cost),
            _cell(keeper.final_cost),
            "yes" if keeper.is_cascaded else "no",
            " ".join(str(step) for step in keeper.cascade_steps),
            " ".join(keeper.conflicts_with),
            keeper.excluded_reason or "",
        ])
    return buffer.getvalue()


__all__ = [
    "CASCADE_HEADERS",
    "export_cascade_to_csv",
]
