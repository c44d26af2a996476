import json
from pathlib import Path

import pytest

from keepercascade.ingest import (
    KeeperRow,
    load_keepers_csv,
    load_league_snapshot,
    parse_keeper_type,
    rows_to_inputs,
    snapshot_from_payload,
)
from keepercascade.models import KeeperType, TransactionType


def _sample_keepers() -> str:
    return """player_id,roster_id,player_name,type
p1,r1,Joe Quarterback,F
p2,r1,Rob Runner,
p3,r2,Sam Rusher,regular
,r2,Nobody,R
"""


def _sample_payload() -> dict:
    return {
        "league_id": "league-1",
        "name": "Sample Keeper League",
        "keeper_settings": {"undrafted_round": 8, "pick_values": {"1": 120}},
        "rosters": [{"roster_id": "r1", "team_name": "Gators"}, {"roster_id": "r2", "owner_name": "sam"}],
        "players": [{"player_id": "p1", "name": "Joe Quarterback", "position": "QB", "team": "CIN"}],
        "draft_picks": [{"season": 2025, "round": 3, "roster_id": "r1", "player_id": "p1"}],
        "keeper_history": [{"season": 2025, "player_id": "p1", "roster_id": "r1"}],
        "traded_picks": [{"season": 2026, "round": 2, "original_owner_id": "r1", "current_owner_id": "r2"}],
    }


def test_load_keepers_csv_default_mapping(tmp_path: Path):
    path = tmp_path / "keepers.csv"
    path.write_text(_sample_keepers(), encoding="utf-8")

    keepers = load_keepers_csv(path)

    assert [k.player_id for k in keepers] == ["p1", "p2", "p3"]
    assert keepers[0].type is KeeperType.FRANCHISE
    assert keepers[1].type is KeeperType.REGULAR
    assert keepers[2].player_name == "Sam Rusher"


def test_load_keepers_csv_custom_mapping(tmp_path: Path):
    path = tmp_path / "keepers.csv"
    path.write_text(
        "Id,Team,First Name,Last Name,Tag\n"
        "p7,r3,Will,Receiver,Franchise Tag\n",
        encoding="utf-8",
    )
    mapping = {"player_id": "Id", "roster_id": "Team", "player_name": "First Name|Last Name", "type": "Tag"}

    (keeper,) = load_keepers_csv(path, mapping=mapping)

    assert keeper.player_id == "p7"
    assert keeper.roster_id == "r3"
    assert keeper.player_name == "Will Receiver"
    assert keeper.type is KeeperType.FRANCHISE


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, KeeperType.REGULAR),
        ("reg", KeeperType.REGULAR),
        ("FT", KeeperType.FRANCHISE),
        ("franchise  tag", KeeperType.FRANCHISE),
    ],
)
def test_parse_keeper_type_aliases(raw, expected):
    assert parse_keeper_type(raw) is expected


def test_parse_keeper_type_rejects_unknown():
    with pytest.raises(ValueError, match="Unrecognised keeper type"):
        parse_keeper_type("rookie")


def test_rows_to_inputs_skips_rows_without_ids():
    rows = [
        KeeperRow(raw_player_id="p1", raw_roster_id=""),
        KeeperRow(raw_player_id="p2", raw_roster_id="r2", raw_type="F"),
    ]

    inputs = rows_to_inputs(rows)

    assert [k.player_id for k in inputs] == ["p2"]


def test_snapshot_from_payload_resolves_settings():
    snapshot = snapshot_from_payload(_sample_payload())

    assert snapshot.config is not None
    assert snapshot.config.undrafted_round == 8
    assert snapshot.config.pick_values == {1: 120.0}
    assert snapshot.get_roster("r2").display_name == "sam"
    assert snapshot.traded_picks_for(2026)[0].current_owner_id == "r2"
    assert snapshot.traded_picks_for(2027) == []


def test_snapshot_without_settings_has_no_config():
    payload = _sample_payload()
    del payload["keeper_settings"]

    snapshot = snapshot_from_payload(payload)

    assert snapshot.config is None


def test_snapshot_with_unknown_setting_raises():
    payload = _sample_payload()
    payload["keeper_settings"] = {"keepers_per_team": 3}

    with pytest.raises(ValueError):
        snapshot_from_payload(payload)


def test_load_league_snapshot(tmp_path: Path):
    path = tmp_path / "league.json"
    path.write_text(json.dumps(_sample_payload()), encoding="utf-8")

    snapshot = load_league_snapshot(path)

    assert snapshot.league_id == "league-1"
    assert snapshot.draft_picks[0].round == 3


def test_load_league_snapshot_rejects_non_object(tmp_path: Path):
    path = tmp_path / "league.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_league_snapshot(path)


def test_snapshot_reads_player_transactions():
    payload = _sample_payload()
    payload["transactions"] = [
        {"season": 2025, "player_id": "p1", "type": "TRADE", "from_roster_id": "r1", "to_roster_id": "r2"},
        {"season": 2025, "player_id": "p2", "type": "FREE_AGENT", "to_roster_id": "r1"},
    ]

    snapshot = snapshot_from_payload(payload)

    trade, pickup = snapshot.transactions
    assert trade.type is TransactionType.TRADE
    assert trade.from_roster_id == "r1"
    assert pickup.type is TransactionType.FREE_AGENT
    assert pickup.from_roster_id is None
