from draftswipe.domain.player import PlayerRecord
from draftswipe.numbers import round_half_up
from draftswipe.valuation.models import ScoringRules


def fantasy_points(raw_stats: dict[str, float], rules: ScoringRules) -> float:
    """Season fantasy points for a stat line, rounded to 2 decimals."""
    total = sum(raw_stats.get(stat, 0.0) * weight for stat, weight in rules.weights().items())
    return round_half_up(total, 2)


def score_player(player: PlayerRecord, rules: ScoringRules) -> float:
    return fantasy_points(player.raw_stats, rules)
