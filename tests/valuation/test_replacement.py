import pytest

from draftswipe.valuation.replacement import compute_replacement_levels, replacement_index, replacement_levels
from tests.conftest import make_player


class TestReplacementIndex:
    def test_twelve_team_base_slots(self) -> None:
        assert replacement_index("QB", 12, 40) == 12
        assert replacement_index("RB", 12, 80) == 30
        assert replacement_index("WR", 12, 100) == 40
        assert replacement_index("TE", 12, 30) == 12

    def test_scales_with_league_size(self) -> None:
        assert replacement_index("QB", 10, 40) == 10
        assert replacement_index("RB", 10, 80) == 25
        # 40 / 12 * 10 = 33.33
        assert replacement_index("WR", 10, 100) == 33

    def test_rounds_half_up(self) -> None:
        # 30 / 12 * 5 = 12.5
        assert replacement_index("RB", 5, 80) == 13

    def test_other_positions_use_last_player(self) -> None:
        assert replacement_index("K", 12, 20) == 19
        assert replacement_index("DST", 12, 32) == 31


class TestComputeReplacementLevels:
    def test_baseline_is_player_at_index(self) -> None:
        levels = compute_replacement_levels({"QB": [float(300 - i) for i in range(20)]}, league_size=12)
        assert levels["QB"].replacement_index == 12
        assert levels["QB"].baseline == 288.0

    def test_pool_smaller_than_index_has_zero_baseline(self) -> None:
        levels = compute_replacement_levels({"QB": [320.0, 310.0, 150.0, 140.0]}, league_size=12)
        assert levels["QB"].baseline == 0.0

    def test_unsorted_input_is_ranked(self) -> None:
        levels = compute_replacement_levels({"K": [120.0, 150.0, 90.0]}, league_size=12)
        assert levels["K"].replacement_index == 2
        assert levels["K"].baseline == 90.0

    def test_from_players(self) -> None:
        players = [make_player(f"k{i}", "K", 100.0 + i) for i in range(5)]
        levels = replacement_levels(players, league_size=12)
        assert levels["K"].baseline == pytest.approx(100.0)
