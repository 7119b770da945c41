from draftswipe.services.auction_planner import generate_auction_strategy, nomination_plan
from draftswipe.services.draft_planner import assemble_target_pool, generate_round_targets, snake_pick_number
from draftswipe.services.draft_report import DraftReport, build_draft_report
from draftswipe.services.gm_archetypes import match_archetype
from draftswipe.services.narratives import generate_narratives, prioritize_narratives
from draftswipe.services.preference_analyzer import analyze_preferences, compute_preference_stats
from draftswipe.services.synergy import analyze_synergies
from draftswipe.services.tier_generator import analyze_tier_transitions, build_tiers, position_scarcity

__all__ = [
    "DraftReport",
    "analyze_preferences",
    "analyze_synergies",
    "analyze_tier_transitions",
    "assemble_target_pool",
    "build_draft_report",
    "build_tiers",
    "compute_preference_stats",
    "generate_auction_strategy",
    "generate_narratives",
    "generate_round_targets",
    "match_archetype",
    "nomination_plan",
    "position_scarcity",
    "prioritize_narratives",
    "snake_pick_number",
]
