"""Helpers to load proposed keeper CSVs and emit canonical inputs."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from keepercascade.models import KeeperInput, KeeperType


logger = logging.getLogger(__name__)

DEFAULT_KEEPERS_MAPPING = {
    "player_id": "player_id",
    "roster_id": "roster_id",
    "player_name": "player_name",
    "type": "type",
}

_TYPE_ALIASES: Mapping[str, KeeperType] = {
    "": KeeperType.REGULAR,
    "R": KeeperType.REGULAR,
    "REG": KeeperType.REGULAR,
    "REGULAR": KeeperType.REGULAR,
    "F": KeeperType.FRANCHISE,
    "FT": KeeperType.FRANCHISE,
    "FRANCHISE": KeeperType.FRANCHISE,
    "FRANCHISE TAG": KeeperType.FRANCHISE,
    "FRANCHISE_TAG": KeeperType.FRANCHISE,
}


class KeeperRow(BaseModel):
    raw_player_id: str
    raw_roster_id: str
    raw_player_name: str = ""
    raw_type: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "KeeperRow":
        def extract(key: str, *, default: str = "") -> str:
            spec = mapping.get(key, DEFAULT_KEEPERS_MAPPING.get(key))
            if spec is None:
                return default
            if "|" in spec:
                parts = [row.get(col.strip(), "").strip() for col in spec.split("|") if row.get(col.strip())]
                return " ".join(parts) if parts else default
            value = row.get(spec)
            return value.strip() if value is not None else default

        return cls(
            raw_player_id=extract("player_id"),
            raw_roster_id=extract("roster_id"),
            raw_player_name=extract("player_name"),
            raw_type=extract("type"),
        )


def parse_keeper_type(raw: Optional[str]) -> KeeperType:
    key = " ".join((raw or "").upper().split())
    if key not in _TYPE_ALIASES:
        raise ValueError(f"Unrecognised keeper type {raw!r}")
    return _TYPE_ALIASES[key]


def rows_to_inputs(rows: Sequence[KeeperRow]) -> List[KeeperInput]:
    inputs: List[KeeperInput] = []
    for line_number, row in enumerate(rows, start=2):
        if not row.raw_player_id or not row.raw_roster_id:
            logger.warning("Skipping keeper row %d: missing player or roster id", line_number)
            continue
        inputs.append(
            KeeperInput(
                player_id=row.raw_player_id,
                roster_id=row.raw_roster_id,
                player_name=row.raw_player_name,
                type=parse_keeper_type(row.raw_type),
            )
        )
    return inputs


def load_keepers_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[KeeperInput]:
    mapping = mapping or DEFAULT_KEEPERS_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [KeeperRow.from_mapping(row, mapping) for row in reader]
    return rows_to_inputs(rows)
