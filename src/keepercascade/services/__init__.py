"""Caller-facing routines that wrap the cascade engine."""

from .simulation import (
    FinalizeResult,
    KeeperFinalizationError,
    build_simulation,
    finalize_cascade,
    record_cascade,
    simulate_cascade,
    with_stored_history,
)

__all__ = [
    "FinalizeResult",
    "KeeperFinalizationError",
    "build_simulation",
    "finalize_cascade",
    "record_cascade",
    "simulate_cascade",
    "with_stored_history",
]
