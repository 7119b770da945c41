from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from draftswipe.domain.draft_plan import DraftSettings
from draftswipe.draft.tables import DEFAULT_PLAN_SETTINGS
from draftswipe.services.auction_planner import generate_auction_strategy
from draftswipe.services.draft_planner import generate_round_targets
from draftswipe.services.narratives import DEFAULT_NARRATIVE_LIMIT
from draftswipe.services.preference_analyzer import analyze_preferences
from draftswipe.services.synergy import analyze_synergies
from draftswipe.services.tier_generator import analyze_tier_transitions, build_tiers
from draftswipe.valuation.models import ValuationConfig
from draftswipe.valuation.valuator import valuate

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

    from draftswipe.domain.analysis import PreferenceAnalysis
    from draftswipe.domain.auction import AuctionPlan, AuctionStrategy
    from draftswipe.domain.draft_plan import RoundTarget
    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap
    from draftswipe.domain.synergy import SynergyReport
    from draftswipe.domain.tier import Tier, TierTransitions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftReport:
    players: tuple[PlayerRecord, ...]
    tiers: dict[str, list[Tier]]
    transitions: TierTransitions
    round_targets: tuple[RoundTarget, ...]
    analysis: PreferenceAnalysis
    auction: AuctionPlan
    synergies: SynergyReport


def build_draft_report(
    rows: Iterable[Mapping[str, Any]],
    prefs: PreferenceMap,
    valuation_config: ValuationConfig | None = None,
    draft_settings: DraftSettings | None = None,
    *,
    auction_preset: AuctionStrategy | None = None,
    narrative_limit: int = DEFAULT_NARRATIVE_LIMIT,
) -> DraftReport:
    """Run the whole prep pipeline for one roster and one set of ratings."""
    if valuation_config is None:
        valuation_config = ValuationConfig()
    if draft_settings is None:
        draft_settings = DraftSettings(league_size=valuation_config.league_size)

    players = valuate(rows, valuation_config)
    tiers = build_tiers(players, prefs)
    plan_settings = dataclasses.replace(DEFAULT_PLAN_SETTINGS, min_targets=draft_settings.min_targets)
    round_targets = generate_round_targets(
        players,
        prefs,
        tiers,
        league_size=draft_settings.league_size,
        draft_slot=draft_settings.draft_slot,
        settings=plan_settings,
    )
    logger.info("Built draft report for %d players (%d rated)", len(players), len(prefs))
    return DraftReport(
        players=tuple(players),
        tiers=tiers,
        transitions=analyze_tier_transitions(tiers),
        round_targets=tuple(round_targets),
        analysis=analyze_preferences(players, prefs, narrative_limit=narrative_limit),
        auction=generate_auction_strategy(tiers, prefs, valuation_config.budget_per_team, auction_preset),
        synergies=analyze_synergies(players, prefs),
    )
