"""Load league snapshots exported by the sync jobs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from keepercascade.config import resolve_config
from keepercascade.models import LeagueSnapshot


logger = logging.getLogger(__name__)


def snapshot_from_payload(payload: Mapping[str, Any]) -> LeagueSnapshot:
    """Build a snapshot from a decoded JSON payload.

    ``keeper_settings`` is merged over the default rules. When the block is
    absent the snapshot carries no configuration and the engine refuses it.
    """

    data = dict(payload)
    settings = data.pop("keeper_settings", None)
    config = resolve_config(settings) if settings is not None else None
    if config is None:
        logger.warning("League %s has no keeper_settings block", data.get("league_id"))
    return LeagueSnapshot.model_validate({**data, "config": config})


def load_league_snapshot(path: Path) -> LeagueSnapshot:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return snapshot_from_payload(payload)
