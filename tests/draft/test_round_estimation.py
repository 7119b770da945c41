from draftswipe.draft.round_estimation import (
    estimate_round,
    estimate_rounds,
    position_ranks,
    round_from_position_rank,
)
from tests.conftest import make_player


class TestPositionRanks:
    def test_ranks_within_position(self) -> None:
        roster = [make_player("wr2", "WR", 150), make_player("rb1", "RB", 200), make_player("wr1", "WR", 180)]
        assert position_ranks(roster) == {"wr1": 1, "wr2": 2, "rb1": 1}


class TestRoundFromPositionRank:
    def test_first_round_ranks(self) -> None:
        assert round_from_position_rank("WR", 3) == 1
        assert round_from_position_rank("RB", 5) == 1

    def test_pattern_midpoint_rounds_half_up(self) -> None:
        # RB ranks 6-10 go in rounds 1-2.
        assert round_from_position_rank("RB", 6) == 2
        # QB1 goes in rounds 3-4.
        assert round_from_position_rank("QB", 1) == 4
        assert round_from_position_rank("TE", 1) == 3

    def test_deep_ranks(self) -> None:
        assert round_from_position_rank("WR", 70) == 14
        assert round_from_position_rank("QB", 120) == 12

    def test_unknown_position(self) -> None:
        assert round_from_position_rank("K", 1) == 10


class TestEstimateRound:
    def test_adp_wins(self) -> None:
        player = make_player("a", "WR", 150, adp=13, overall_rank=80)
        assert estimate_round(player, [player], league_size=12) == 2

    def test_overall_rank_without_adp(self) -> None:
        player = make_player("a", "WR", 150, overall_rank=25)
        assert estimate_round(player, [player], league_size=12) == 3

    def test_position_rank_fallback(self) -> None:
        roster = [make_player(f"qb{i}", "QB", 240 - i * 10) for i in range(8)]
        assert estimate_round(roster[0], roster, league_size=12) == 4
        assert estimate_round(roster[7], roster, league_size=12) == 10

    def test_elite_points_clamp(self) -> None:
        player = make_player("a", "RB", 260, adp=60)
        assert estimate_round(player, [player], league_size=12) == 2

    def test_unrated_elite_pins_ignore_adp(self) -> None:
        wr = make_player("wr", "WR", 245, adp=50)
        rb = make_player("rb", "RB", 210, adp=50)
        assert estimate_round(wr, [wr, rb], league_size=12, unrated_elite=True) == 1
        assert estimate_round(rb, [wr, rb], league_size=12, unrated_elite=True) == 2

    def test_player_outside_roster_ranked_by_points(self) -> None:
        roster = [make_player(f"te{i}", "TE", 200 - i * 10) for i in range(6)]
        outsider = make_player("new", "TE", 185)
        # Two tight ends outscore it, so it ranks TE3 (rounds 4-6).
        assert estimate_round(outsider, roster, league_size=12) == 5


class TestEstimateRounds:
    def test_fills_estimated_round_on_copies(self) -> None:
        player = make_player("a", "WR", 150, adp=30)
        [estimated] = estimate_rounds([player], [player], league_size=10)
        assert estimated.estimated_round == 3
        assert player.estimated_round is None
