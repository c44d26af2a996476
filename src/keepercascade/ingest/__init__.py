"""Input adapters that normalize league snapshots and keeper selections."""

from .keepers import (
    DEFAULT_KEEPERS_MAPPING,
    KeeperRow,
    load_keepers_csv,
    parse_keeper_type,
    rows_to_inputs,
)
from .league import load_league_snapshot, snapshot_from_payload

__all__ = [
    "DEFAULT_KEEPERS_MAPPING",
    "KeeperRow",
    "load_keepers_csv",
    "load_league_snapshot",
    "parse_keeper_type",
    "rows_to_inputs",
    "snapshot_from_payload",
]
