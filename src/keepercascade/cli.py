"""Command-line interface for simulating and finalizing keeper cascades."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from keepercascade.board import export_cascade_to_csv
from keepercascade.cascade import CascadeConfigError, calculate_cascade
from keepercascade.config import keeper_planning_season
from keepercascade.config_loader import MappingProfile
from keepercascade.ingest import load_keepers_csv, load_league_snapshot
from keepercascade.persistence import KeeperStore
from keepercascade.services import (
    KeeperFinalizationError,
    build_simulation,
    record_cascade,
    with_stored_history,
)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute keeper costs and resolve draft slot cascades")
    parser.add_argument("snapshot", type=Path, help="Path to league snapshot JSON")
    parser.add_argument("keepers", type=Path, help="Path to proposed keepers CSV")
    parser.add_argument(
        "--season",
        type=int,
        default=None,
        help="Target season (defaults to the current keeper planning season)",
    )
    parser.add_argument(
        "--keepers-column",
        action="append",
        default=[],
        help="Mapping for keepers CSV columns (e.g., player_name=First|Last)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=Path("cascade.csv"), help="Output CSV path")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write the full simulation (draft board included) as JSON",
    )
    parser.add_argument(
        "--finalize",
        action="store_true",
        help="Write resolved costs to the keeper store (refused when there are errors)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=Path("keepers.sqlite"),
        help="Keeper store path; finalized history in an existing store feeds years kept",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-collision detail")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _preview(items: Sequence[str], limit: int = 5) -> str:
    preview = ", ".join(items[:limit])
    more = len(items) - limit
    suffix = f", +{more} more" if more > 0 else ""
    return f"{preview}{suffix}"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = MappingProfile.load(args.load_profile) if args.load_profile else MappingProfile()
    profile = profile.merged(_parse_mapping(args.keepers_column))
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")
    keepers_mapping = profile.keepers_mapping

    season = args.season or keeper_planning_season()
    snapshot = load_league_snapshot(args.snapshot)
    store = KeeperStore(args.db) if args.finalize or args.db.exists() else None
    if store is not None:
        snapshot = with_stored_history(snapshot, store)
    keepers = load_keepers_csv(args.keepers, mapping=keepers_mapping or None)

    try:
        result = calculate_cascade(snapshot.league_id, keepers, season, league=snapshot)
        simulation = build_simulation(snapshot, result)
    except CascadeConfigError as exc:
        print(f"Cannot compute cascade: {exc}")
        return 2

    summary = simulation.summary
    print(
        f"Season {season}: {summary.total_keepers} keepers, "
        f"{summary.cascaded_keepers} cascaded, {summary.excluded_keepers} excluded, "
        f"{summary.traded_picks} traded picks"
    )
    for conflict in simulation.conflicts:
        target = f"Round {conflict.resolved_round}" if conflict.resolved_round else conflict.outcome
        print(
            f"Round {conflict.round} ({conflict.slot_owner_id}): {conflict.kept_player_id} kept, "
            f"{conflict.displaced_player_id} -> {target}"
        )
    if simulation.errors:
        print(f"Errors: {_preview(simulation.errors)}")
    if simulation.warnings:
        print(f"Warnings: {_preview(simulation.warnings)}")

    if args.report:
        args.report.write_text(simulation.model_dump_json(indent=2), encoding="utf-8")
        print(f"Wrote simulation report to {args.report}")

    roster_names = {roster.roster_id: roster.display_name for roster in snapshot.rosters}
    if args.finalize and store is not None:
        try:
            finalized = record_cascade(result, store=store)
        except KeeperFinalizationError as exc:
            print(f"Finalization refused: {exc.message} ({len(exc.errors)} error(s))")
            return 1
        print(f"Updated {finalized.updated_count} keeper costs in {store.db_path}")

    args.output.write_text(export_cascade_to_csv(result, roster_names=roster_names), encoding="utf-8")
    print(f"Wrote cascade to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
