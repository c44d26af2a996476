"""Canonical keeper and league records shared across ingestion and the engine."""

from .keeper import KeeperInput, KeeperType
from .league import (
    DraftPickRecord,
    KeeperHistoryRecord,
    LeagueSnapshot,
    PlayerRecord,
    PlayerTransactionRecord,
    RosterRecord,
    TradedPickRecord,
    TransactionType,
)

__all__ = [
    "DraftPickRecord",
    "KeeperHistoryRecord",
    "KeeperInput",
    "KeeperType",
    "LeagueSnapshot",
    "PlayerRecord",
    "PlayerTransactionRecord",
    "RosterRecord",
    "TradedPickRecord",
    "TransactionType",
]
