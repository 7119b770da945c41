import pytest

from draftswipe.domain.draft_plan import TierContext
from draftswipe.domain.player import PlayerRecord
from draftswipe.draft.tables import DraftPlanSettings
from draftswipe.services.draft_planner import (
    assemble_target_pool,
    generate_round_targets,
    is_unrated_elite,
    position_reason,
    recommendation_priority,
    relevant_positions,
    round_context,
    round_strategy,
    score_candidate,
    snake_pick_number,
    tier_context,
)
from draftswipe.services.tier_generator import build_tiers
from tests.conftest import make_player


def _player(
    player_id: str,
    position: str,
    points: float,
    adp: float | None = None,
    vorp: float | None = None,
) -> PlayerRecord:
    return make_player(player_id, position, points, adp=adp, vorp=points - 100 if vorp is None else vorp)


def _roster() -> list[PlayerRecord]:
    players: list[PlayerRecord] = []
    for position, count, top, step in (("QB", 20, 300, 8), ("RB", 30, 280, 7), ("WR", 40, 260, 5), ("TE", 15, 180, 8)):
        players.extend(_player(f"{position.lower()}{i}", position, top - i * step) for i in range(count))
    return players


class TestSnakePickNumber:
    def test_odd_rounds_use_slot(self) -> None:
        assert snake_pick_number(1, 6, 12) == 6
        assert snake_pick_number(3, 6, 12) == 30

    def test_even_rounds_reverse(self) -> None:
        assert snake_pick_number(2, 6, 12) == 19
        assert snake_pick_number(2, 1, 12) == 24
        assert snake_pick_number(2, 12, 12) == 13


class TestAssembleTargetPool:
    def test_meh_or_better_plus_unrated_elites(self) -> None:
        roster = [
            _player("a", "RB", 150),
            _player("b", "WR", 140),
            _player("c", "QB", 200),
            _player("d", "WR", 210),
            _player("e", "WR", 100),
        ]
        pool, elite_ids = assemble_target_pool(roster, {"a": 1, "b": 0, "c": -1}, DraftPlanSettings(min_targets=2))
        assert [p.id for p in pool] == ["a", "b", "d"]
        assert elite_ids == frozenset({"d"})

    def test_backfills_with_best_unrated(self) -> None:
        roster = [_player("a", "RB", 150), _player("c", "QB", 200), _player("e", "WR", 100), _player("f", "TE", 90)]
        pool, _ = assemble_target_pool(roster, {"a": 1, "c": -1}, DraftPlanSettings(min_targets=3))
        assert [p.id for p in pool] == ["a", "e", "f"]

    def test_empty_prefs_backfill_plus_elites(self) -> None:
        pool, elite_ids = assemble_target_pool(_roster(), {})
        ids = [p.id for p in pool]
        assert len(ids) == len(set(ids))
        # te3 (156 points) misses the 60 best but is an unrated elite TE.
        assert "te3" in elite_ids
        assert elite_ids <= set(ids)
        assert len(ids) == 61

    def test_rated_player_is_never_unrated_elite(self) -> None:
        assert not is_unrated_elite(_player("d", "WR", 250), {"d": -1})
        assert is_unrated_elite(_player("d", "WR", 250), {})
        assert not is_unrated_elite(_player("k", "K", 250), {})


class TestScoring:
    def test_score_candidate(self) -> None:
        player = _player("a", "RB", 150, adp=24)
        # love 200 + ADP value (2 - 1) * 20 + need 30
        assert score_candidate(player, {"a": 2}, 1, {}, 12) == pytest.approx(250)

    def test_wait_and_reach_penalties(self) -> None:
        player = PlayerRecord(id="a", name="A", team="FA", position="QB", fantasy_pts=100, estimated_round=3)
        drafted = {"QB": 1}
        assert score_candidate(player, {}, 5, drafted, 12) == pytest.approx(-100)
        assert score_candidate(player, {}, 1, drafted, 12) == pytest.approx(-20)
        assert score_candidate(player, {}, 2, drafted, 12) == pytest.approx(0)

    def test_relevant_positions(self) -> None:
        assert relevant_positions(1, {}) == ("RB", "WR")
        assert relevant_positions(3, {}) == ("RB", "WR", "TE")
        assert relevant_positions(3, {"TE": 1}) == ("RB", "WR")
        assert relevant_positions(5, {}) == ("RB", "WR", "TE", "QB")
        assert relevant_positions(9, {"QB": 1, "TE": 1}) == ("RB", "WR", "TE", "QB")

    def test_recommendation_priority(self) -> None:
        neutral = TierContext(tier_number=2)
        # RB scarcity window covers rounds 1-6.
        assert recommendation_priority("RB", 1, neutral, {}) == 25
        assert recommendation_priority("RB", 5, neutral, {}) == 75
        last = TierContext(tier_number=1, is_last_in_tier=True, is_chasm=True)
        assert recommendation_priority("QB", 8, last, {}) == 40 + 30 + 20 + 25


class TestTierContext:
    def test_last_liked_player_in_tier(self) -> None:
        players = [_player("qb1", "QB", 420), _player("qb2", "QB", 410), _player("qb3", "QB", 250)]
        tiers = build_tiers(players, {"qb2": 1})
        context = tier_context(players[1], tiers["QB"])
        assert context.tier_number == 1
        assert context.is_last_in_tier
        assert context.is_chasm

    def test_not_last_when_tier_has_other_targets(self) -> None:
        players = [_player("qb1", "QB", 420), _player("qb2", "QB", 410)]
        tiers = build_tiers(players, {"qb1": 2, "qb2": 1})
        assert not tier_context(players[1], tiers["QB"]).is_last_in_tier

    def test_no_tiers(self) -> None:
        assert tier_context(_player("a", "QB", 100), None) == TierContext(tier_number=1)

    def test_player_outside_tiers(self) -> None:
        tiers = build_tiers([_player("qb1", "QB", 420)], {})
        assert tier_context(_player("x", "QB", 100), tiers["QB"]).tier_number == 99


class TestText:
    def test_position_reason_early(self) -> None:
        reason = position_reason("RB", 2, TierContext(tier_number=1), {}, 2)
        assert reason == "Elite workhorse back - foundation of championship teams (your love pick)"

    def test_position_reason_tier_break(self) -> None:
        reason = position_reason("TE", 6, TierContext(tier_number=1, is_last_in_tier=True), {}, 1)
        assert reason == "Reliable TE1 before the wasteland (your like pick)"

    def test_position_reason_needs(self) -> None:
        context = TierContext(tier_number=3)
        assert position_reason("WR", 6, context, {}, 0) == "Fill starting WR need (best available)"
        assert position_reason("WR", 6, context, {"WR": 1}, -1) == "Secure WR2 for lineup flexibility"
        assert position_reason("QB", 6, context, {"QB": 1}, 0) == "Depth and upside at QB (best available)"

    def test_round_strategy(self) -> None:
        assert round_strategy(1, {}, []).startswith("Foundation Pick")
        assert round_strategy(1, {}, [], limited_targets=True).startswith("Limited Targets")
        assert round_strategy(2, {"RB": 1}, []).startswith("Balance Your Core")
        assert round_strategy(3, {"RB": 1, "WR": 1}, [_player("te", "TE", 160)]).startswith("Positional Advantage")
        assert round_strategy(3, {"RB": 1, "WR": 1}, []).startswith("Build Your Flex")
        assert round_strategy(6, {}, []) == (
            "Complete Your Starters: Still need QB, TE, RB, WR - don't wait too long"
        )
        assert round_strategy(6, {"QB": 1, "TE": 1, "RB": 2, "WR": 2}, []).startswith("Best Player Available")
        assert round_strategy(9, {}, []).startswith("Upside Hunting")
        assert round_strategy(12, {}, []).startswith("Strategic Depth")
        assert round_strategy(15, {}, []).startswith("Swing for the Fences")

    def test_round_context(self) -> None:
        assert round_context(1, 1, 12) == "Early in round - more options available"
        assert round_context(6, 1, 12) == "Late in round - consider reaching for targets | Watch for position runs"
        assert round_context(3, 6, 12) == "Middle of round - balance value and need"


class TestGenerateRoundTargets:
    def test_sixteen_rounds_with_empty_prefs(self) -> None:
        roster = _roster()
        plan = generate_round_targets(roster, {}, build_tiers(roster, {}))
        assert [t.round for t in plan] == list(range(1, 17))
        assert [t.pick_number for t in plan][:3] == [6, 19, 30]
        assert plan[0].strategy.startswith("Limited Targets")
        for target in plan:
            assert len(target.recommendations) <= 4
            for rec in target.recommendations:
                assert 1 <= len(rec.targets) <= 3
                assert all(p.position == rec.position for p in rec.targets)

    def test_round_one_considers_only_rb_and_wr(self) -> None:
        roster = _roster()
        plan = generate_round_targets(roster, {}, build_tiers(roster, {}))
        assert {r.position for r in plan[0].recommendations} <= {"RB", "WR"}
        assert plan[0].recommendations

    def test_passed_players_never_recommended(self) -> None:
        roster = _roster()
        prefs = {"rb0": -1, "wr0": -1, "qb0": -1}
        plan = generate_round_targets(roster, prefs, build_tiers(roster, prefs))
        recommended = {p.id for t in plan for r in t.recommendations for p in r.targets}
        assert recommended.isdisjoint(prefs)

    def test_recommendations_sorted_by_priority(self) -> None:
        roster = _roster()
        plan = generate_round_targets(roster, {}, build_tiers(roster, {}))
        for target in plan:
            priorities = [r.priority for r in target.recommendations]
            assert priorities == sorted(priorities, reverse=True)

    def test_empty_roster_still_plans_every_round(self) -> None:
        plan = generate_round_targets([], {}, {}, league_size=10, draft_slot=10)
        assert len(plan) == 16
        assert all(t.recommendations == () for t in plan)
        assert plan[1].pick_number == 11
