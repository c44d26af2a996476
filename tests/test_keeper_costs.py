import pytest

from keepercascade.cascade import KeeperCostError, compute_base_cost, count_years_kept, draft_round_for
from keepercascade.cascade.costs import is_past_max_years
from keepercascade.config import LeagueKeeperConfig
from keepercascade.models import KeeperType, TransactionType

from tests.builders import drafted, kept, moved


def test_count_years_kept_requires_consecutive_seasons():
    history = kept("p1", "r1", 2022, 2024, 2025) + kept("p1", "r2", 2023)

    assert count_years_kept(history, "p1", "r1", 2026) == 2
    assert count_years_kept(history, "p1", "r1", 2025) == 1
    assert count_years_kept(history, "p1", "r2", 2026) == 0
    assert count_years_kept(history, "p1", "r2", 2024) == 1


def test_count_years_kept_ignores_current_and_future_seasons():
    history = kept("p1", "r1", 2026, 2027)

    assert count_years_kept(history, "p1", "r1", 2026) == 0


def test_draft_round_for_uses_latest_pick_by_roster():
    picks = [
        drafted("p1", "r1", 9, season=2022),
        drafted("p1", "r2", 2, season=2024),
        drafted("p1", "r1", 4, season=2023),
        drafted("p1", "r1", 1, season=2026),
    ]

    assert draft_round_for(picks, "p1", "r1", 2026) == 4
    assert draft_round_for(picks, "p1", "r2", 2026) == 2
    assert draft_round_for(picks, "p1", "r3", 2026) is None


def test_base_cost_subtracts_years_kept():
    config = LeagueKeeperConfig()

    base = compute_base_cost(config, KeeperType.REGULAR, draft_round=6, years_kept=1)

    assert base.cost == 5
    assert base.draft_round == 6
    assert base.reason == "Drafted in Round 6 - 1 year(s) kept = Round 5"


def test_base_cost_respects_custom_reduction_and_floor():
    config = LeagueKeeperConfig(cost_reduction_per_year=2, minimum_round=3)

    assert compute_base_cost(config, KeeperType.REGULAR, draft_round=9, years_kept=1).cost == 7
    assert compute_base_cost(config, KeeperType.REGULAR, draft_round=4, years_kept=1).cost == 3


def test_base_cost_for_undrafted_player():
    config = LeagueKeeperConfig(undrafted_round=12)

    base = compute_base_cost(config, KeeperType.REGULAR, draft_round=None, years_kept=0)

    assert base.cost == 12
    assert base.reason.startswith("Undrafted (Round 12)")


def test_base_cost_without_fallback_round_raises():
    config = LeagueKeeperConfig(undrafted_round=None)

    with pytest.raises(KeeperCostError):
        compute_base_cost(config, KeeperType.REGULAR, draft_round=None, years_kept=0)


def test_franchise_tag_cost_is_fixed():
    config = LeagueKeeperConfig(franchise_tag_round=3)

    base = compute_base_cost(config, KeeperType.FRANCHISE, draft_round=12, years_kept=4)

    assert base.cost == 3


def test_max_years_only_applies_to_regular_keepers():
    config = LeagueKeeperConfig(regular_keeper_max_years=2)

    assert is_past_max_years(config, KeeperType.REGULAR, 1) is False
    assert is_past_max_years(config, KeeperType.REGULAR, 2) is True
    assert is_past_max_years(config, KeeperType.FRANCHISE, 5) is False


def test_traded_player_inherits_drafting_round():
    picks = [drafted("p1", "r1", 3)]
    moves = [moved("p1", "r1", "r2")]

    assert draft_round_for(picks, "p1", "r2", 2026, moves) == 3
    assert draft_round_for(picks, "p1", "r2", 2026) is None


def test_trade_chain_is_followed_to_the_original_pick():
    picks = [drafted("p1", "r1", 6, season=2024)]
    moves = [moved("p1", "r1", "r2", season=2024), moved("p1", "r2", "r3", season=2025)]

    assert draft_round_for(picks, "p1", "r3", 2026, moves) == 6


def test_player_traded_back_to_drafting_roster():
    picks = [drafted("p1", "r1", 5, season=2023)]
    moves = [moved("p1", "r1", "r2", season=2024), moved("p1", "r2", "r1", season=2025)]

    assert draft_round_for(picks, "p1", "r1", 2026, moves) == 5


@pytest.mark.parametrize("kind", [TransactionType.WAIVER, TransactionType.FREE_AGENT])
def test_pickups_have_no_draft_round(kind):
    picks = [drafted("p1", "r1", 3, season=2024)]

    assert draft_round_for(picks, "p1", "r2", 2026, [moved("p1", None, "r2", kind=kind)]) is None
    # A later pickup replaces the roster's own earlier draft pick.
    assert draft_round_for(picks, "p1", "r1", 2026, [moved("p1", None, "r1", kind=kind)]) is None


def test_trade_of_a_waiver_pickup_has_no_draft_round():
    moves = [
        moved("p1", None, "r1", season=2025, kind=TransactionType.WAIVER),
        moved("p1", "r1", "r2", season=2025),
    ]

    assert draft_round_for([drafted("p1", "r3", 2, season=2024)], "p1", "r2", 2026, moves) is None
