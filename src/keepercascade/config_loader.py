"""Persist and load keeper CSV column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

from keepercascade.ingest import DEFAULT_KEEPERS_MAPPING


@dataclass
class MappingProfile:
    keepers_mapping: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = sorted(set(self.keepers_mapping) - set(DEFAULT_KEEPERS_MAPPING))
        if unknown:
            raise ValueError(f"Unknown keeper column(s) in mapping: {', '.join(unknown)}")

    def merged(self, overrides: Mapping[str, str]) -> "MappingProfile":
        """Profile with ``overrides`` taking precedence over the stored columns."""

        return MappingProfile(keepers_mapping={**self.keepers_mapping, **overrides})

    @classmethod
    def load(cls, path: Path) -> "MappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(keepers_mapping=data.get("keepers_mapping", {}))

    def save(self, path: Path) -> None:
        path.write_text(json.dumps({"keepers_mapping": self.keepers_mapping}, indent=2), encoding="utf-8")
