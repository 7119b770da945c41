from draftswipe.valuation.models import (
    RECEPTION_CREDIT,
    ReplacementLevel,
    ScoringFormat,
    ScoringRules,
    ValuationConfig,
)
from draftswipe.valuation.replacement import compute_replacement_levels, replacement_index, replacement_levels
from draftswipe.valuation.scoring import fantasy_points, score_player
from draftswipe.valuation.valuator import auction_values, normalize_rows, valuate

__all__ = [
    "RECEPTION_CREDIT",
    "ReplacementLevel",
    "ScoringFormat",
    "ScoringRules",
    "ValuationConfig",
    "auction_values",
    "compute_replacement_levels",
    "fantasy_points",
    "normalize_rows",
    "replacement_index",
    "replacement_levels",
    "score_player",
    "valuate",
]
