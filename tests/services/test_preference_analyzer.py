import pytest

from draftswipe.domain.player import PlayerRecord
from draftswipe.services.preference_analyzer import analyze_preferences, compute_preference_stats, find_sleepers
from tests.conftest import make_player


def _roster() -> list[PlayerRecord]:
    return [
        make_player("rb1", "RB", 250, auction=40, team="ATL"),
        make_player("rb2", "RB", 120, auction=3, team="DET"),
        make_player("wr1", "WR", 210, auction=30, team="CIN"),
        make_player("wr2", "WR", 90, auction=2, team="HOU", rookie=True),
        make_player("qb1", "QB", 300, auction=20, team="BUF"),
        make_player("te1", "TE", 100, auction=1, team="KC"),
    ]


_PREFS = {"rb1": 2, "rb2": 1, "wr1": -1, "wr2": 2, "qb1": 0}


class TestComputePreferenceStats:
    def test_counts_and_distribution(self) -> None:
        stats = compute_preference_stats(_roster(), _PREFS)
        assert stats.position is None
        assert stats.total_rated == 5
        assert (stats.ratings.love, stats.ratings.like, stats.ratings.meh, stats.ratings.passed) == (2, 1, 1, 1)
        assert stats.distribution.love == pytest.approx(40)
        assert stats.distribution.passed == pytest.approx(20)
        assert stats.distribution.formatted() == {"love": "40.0", "like": "20.0", "meh": "20.0", "pass": "20.0"}

    def test_distribution_sums_to_hundred(self) -> None:
        prefs = {"rb1": 2, "rb2": 1, "wr1": 1}
        dist = compute_preference_stats(_roster(), prefs).distribution
        assert dist.love + dist.like + dist.meh + dist.passed == pytest.approx(100)

    def test_liked_by_position_sorted_by_points(self) -> None:
        stats = compute_preference_stats(_roster(), _PREFS)
        assert [p.id for p in stats.liked_by_position["RB"]] == ["rb1", "rb2"]
        assert [p.id for p in stats.liked_by_position["WR"]] == ["wr2"]
        assert stats.liked_by_position["QB"] == ()
        assert stats.elite_targets == {"QB": 0, "RB": 1, "WR": 0, "TE": 0}

    def test_value_metrics(self) -> None:
        metrics = compute_preference_stats(_roster(), _PREFS).value_metrics
        assert [p.id for p in metrics.low_value] == ["rb2", "wr2"]
        assert [p.id for p in metrics.high_value] == ["rb1"]
        assert [p.id for p in metrics.loved] == ["rb1", "wr2"]

    def test_sleepers_and_rookie_love(self) -> None:
        stats = compute_preference_stats(_roster(), _PREFS)
        assert [p.id for p in stats.sleepers] == ["wr2"]
        assert stats.rookie_love == 1

    def test_position_scope(self) -> None:
        stats = compute_preference_stats(_roster(), _PREFS, position="RB")
        assert stats.position == "RB"
        assert stats.total_rated == 2
        assert stats.liked_by_position["WR"] == ()

    def test_nothing_rated(self) -> None:
        stats = compute_preference_stats(_roster(), {})
        assert stats.total_rated == 0
        assert stats.distribution.love == 0
        assert stats.sleepers == ()


class TestFindSleepers:
    def test_capped_at_five(self) -> None:
        rated = [make_player("star", "WR", 1000), *(make_player(f"wr{i}", "WR", 50) for i in range(7))]
        sleepers = find_sleepers(rated, rated[1:])
        assert len(sleepers) == 5


class TestAnalyzePreferences:
    def test_overall_analysis(self) -> None:
        analysis = analyze_preferences(_roster(), _PREFS)
        assert analysis.archetype.key == "enthusiast"
        assert analysis.archetype.name == "The Fantasy Enthusiast"
        assert 0 < len(analysis.narratives) <= 6

    def test_narrative_limit(self) -> None:
        analysis = analyze_preferences(_roster(), _PREFS, narrative_limit=1)
        assert len(analysis.narratives) == 1

    def test_nothing_rated_is_balanced(self) -> None:
        analysis = analyze_preferences(_roster(), {})
        assert analysis.archetype.key == "balanced"
        assert analysis.archetype.description == "You maintain a measured approach"

    def test_position_fallback(self) -> None:
        analysis = analyze_preferences(_roster(), {}, position="TE")
        assert analysis.archetype.name == "The Balanced Builder"
        assert analysis.archetype.description == "You maintain flexibility at TE"
