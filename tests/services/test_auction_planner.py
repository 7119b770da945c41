from draftswipe.domain.player import PlayerRecord
from draftswipe.domain.tier import TierPriority
from draftswipe.draft.strategy_presets import STRATEGY_PRESETS
from draftswipe.services.auction_planner import MAX_NOMINATIONS, generate_auction_strategy, nomination_plan
from draftswipe.services.tier_generator import build_tiers
from tests.conftest import make_player


def _player(player_id: str, position: str, vorp: float, auction: int) -> PlayerRecord:
    return make_player(player_id, position, vorp, vorp=vorp, auction=auction)


def _qbs() -> list[PlayerRecord]:
    return [
        _player("qb1", "QB", 320, 60),
        _player("qb2", "QB", 310, 50),
        _player("qb3", "QB", 150, 10),
        _player("qb4", "QB", 140, 8),
    ]


def _rbs() -> list[PlayerRecord]:
    return [_player("rb1", "RB", 100, 55), _player("rb2", "RB", 99, 55), _player("rb3", "RB", 98, 55)]


class TestGenerateAuctionStrategy:
    def test_targets_from_liked_players(self) -> None:
        prefs = {"qb2": 1, "qb3": 1}
        plan = generate_auction_strategy(build_tiers(_qbs(), prefs), prefs)
        targets = {t.player.id: t for t in plan.target_values}
        assert set(targets) == {"qb2", "qb3"}
        # Tier averages are $55 and $9.
        assert targets["qb2"].max_bid == 61
        assert targets["qb2"].reason == "Good value in Elite tier"
        assert targets["qb3"].max_bid == 10
        assert targets["qb3"].reason == "Good value in High QB1 tier"

    def test_overpriced_liked_player_is_not_a_target(self) -> None:
        players = [_player("a", "WR", 100, 90), _player("b", "WR", 99, 10), _player("c", "WR", 98, 10)]
        prefs = {"a": 1}
        plan = generate_auction_strategy(build_tiers(players, prefs), prefs)
        assert plan.target_values == ()

    def test_allocation_spends_budget_less_bench(self) -> None:
        prefs = {"qb2": 1, "rb1": 1}
        plan = generate_auction_strategy(build_tiers([*_qbs(), *_rbs()], prefs), prefs, budget=200)
        assert plan.budget == 200
        assert plan.budget_allocation["QB"] == 90
        assert plan.budget_allocation["RB"] == 90
        assert plan.budget_allocation["WR"] == 0
        assert plan.budget_allocation["TE"] == 0

    def test_single_position_gets_everything(self) -> None:
        prefs = {"qb2": 1, "qb3": 1}
        plan = generate_auction_strategy(build_tiers(_qbs(), prefs), prefs, budget=150)
        assert plan.budget_allocation["QB"] == 130

    def test_nothing_liked_allocates_nothing(self) -> None:
        plan = generate_auction_strategy(build_tiers(_qbs(), {}), {})
        assert set(plan.budget_allocation.values()) == {0}
        assert plan.strategy is None

    def test_preset_weights_positions(self) -> None:
        prefs = {"qb2": 1, "rb1": 1}
        tiers = build_tiers([*_qbs(), *_rbs()], prefs)
        preset = STRATEGY_PRESETS["balanced"]
        plan = generate_auction_strategy(tiers, prefs, preset=preset)
        assert plan.strategy is preset
        assert plan.budget_allocation["RB"] > plan.budget_allocation["QB"]
        assert abs(sum(plan.budget_allocation.values()) - 180) <= 1


class TestNominationPlan:
    def test_expensive_fades_and_tier_breaks(self) -> None:
        prefs = {"qb1": -1}
        nominations = nomination_plan(build_tiers(_qbs(), prefs), prefs)
        assert [(n.player.id, n.priority) for n in nominations] == [
            ("qb1", TierPriority.HIGH),
            ("qb2", TierPriority.MEDIUM),
        ]
        assert nominations[0].reason == "Expensive player you fade - drain budgets"
        assert nominations[1].reason == "Force decision on tier break"

    def test_liked_player_above_break_not_nominated(self) -> None:
        prefs = {"qb2": 1}
        assert nomination_plan(build_tiers(_qbs(), prefs), prefs) == []

    def test_capped(self) -> None:
        players = [_player(f"wr{i}", "WR", 200 - i, 40) for i in range(12)]
        prefs = {p.id: -1 for p in players}
        nominations = nomination_plan(build_tiers(players, prefs), prefs)
        assert len(nominations) == MAX_NOMINATIONS
