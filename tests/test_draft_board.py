import csv
from io import StringIO

import pytest

from keepercascade.board import build_draft_board, export_cascade_to_csv
from keepercascade.board.export import CASCADE_HEADERS
from keepercascade.cascade import build_ownership, calculate_cascade
from keepercascade.models import KeeperType

from tests.builders import LEAGUE_ID, SEASON, drafted, keeper, make_league, traded


def _cascade(league, keepers):
    return calculate_cascade(LEAGUE_ID, keepers, SEASON, league=league)


def test_board_marks_keepers_trades_and_open_slots():
    league = make_league(
        draft_rounds=8,
        undrafted_round=8,
        draft_picks=[drafted("p1", "r1", 5)],
        traded_picks=[traded(4, "r1", "r2")],
    )
    result = _cascade(league, [keeper("p1", "r1"), keeper("p2", "r3", KeeperType.FRANCHISE)])

    board = build_draft_board(league, result, build_ownership(league, SEASON))

    assert board.total_rounds == 8
    assert [slot.roster_id for slot in board.rounds[0].slots] == ["r1", "r2", "r3"]

    kept_slot = board.slot(5, "r1")
    assert kept_slot.status == "keeper"
    assert [k.player_id for k in kept_slot.keepers] == ["p1"]
    assert board.slot(1, "r3").status == "keeper"

    traded_slot = board.slot(4, "r1")
    assert traded_slot.status == "traded"
    assert traded_slot.traded_to == "Team R2"

    receiving = board.slot(4, "r2")
    assert receiving.status == "available"
    assert receiving.acquired_from == ("Team R1",)

    assert board.slot(2, "r2").status == "available"
    assert board.slot(1, "r1").pick_value == 100


def test_board_skips_excluded_keepers():
    league = make_league(draft_rounds=6, undrafted_round=6)
    result = _cascade(league, [keeper("p1", "r1"), keeper("p2", "r1")])

    board = build_draft_board(league, result, build_ownership(league, SEASON))

    assert [k.player_id for k in board.slot(6, "r1").keepers] == ["p1"]
    assert all(slot.status != "keeper" for board_round in board.rounds[:5] for slot in board_round.slots)


def test_board_slot_lookup_missing_roster():
    league = make_league(draft_rounds=4, undrafted_round=4)
    board = build_draft_board(league, _cascade(league, []), build_ownership(league, SEASON))

    with pytest.raises(KeyError):
        board.slot(1, "r9")


def test_export_cascade_csv_columns_and_rows():
    league = make_league(draft_picks=[drafted("p1", "r1", 5), drafted("p2", "r1", 5, season=2024)])
    result = _cascade(league, [keeper("p1", "r1"), keeper("p2", "r1"), keeper("p3", "r9")])

    text = export_cascade_to_csv(result, roster_names={"r1": "Team R1"})

    rows = list(csv.DictReader(StringIO(text)))
    assert tuple(rows[0].keys()) == CASCADE_HEADERS
    assert [row["player_id"] for row in rows] == ["p1", "p2", "p3"]

    p2 = rows[1]
    assert p2["roster_name"] == "Team R1"
    assert p2["type"] == "REGULAR"
    assert p2["base_cost"] == "5"
    assert p2["final_cost"] == "6"
    assert p2["cascaded"] == "yes"
    assert p2["cascade_steps"] == "6"
    assert p2["conflicts_with"] == "p1"

    p3 = rows[2]
    assert p3["roster_name"] == ""
    assert p3["final_cost"] == ""
    assert p3["cascaded"] == "no"
    assert p3["excluded_reason"] == "roster r9 not found in league league-1"
