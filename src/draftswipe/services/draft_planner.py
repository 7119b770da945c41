from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from draftswipe.domain.draft_plan import NEUTRAL_TIER_CONTEXT, Recommendation, RoundTarget, TierContext
from draftswipe.domain.player import SKILL_POSITIONS
from draftswipe.domain.preferences import Rating, is_liked
from draftswipe.draft.round_estimation import estimate_rounds
from draftswipe.draft.tables import (
    DEFAULT_PLAN_SETTINGS,
    ELITE_STRATEGY_THRESHOLDS,
    ELITE_UNRATED_CUTOFFS,
    ROUND_SCARCITY,
    DraftPlanSettings,
    positional_need,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap
    from draftswipe.domain.tier import Tier

logger = logging.getLogger(__name__)

_POSITION_REASONS: dict[str, dict[str, str]] = {
    "RB": {
        "early": "Elite workhorse back - foundation of championship teams",
        "tier_break": "Significant dropoff after this tier - secure reliable production",
        "late": "Lottery ticket RB with league-winning upside",
    },
    "WR": {
        "early": "Target hog with elite ceiling - consistent 15+ points weekly",
        "tier_break": "Last of the alpha receivers before committee approaches",
        "late": "Breakout candidate with clear path to targets",
    },
    "TE": {
        "early": "Positional advantage play - 5+ PPG edge over streaming",
        "tier_break": "Reliable TE1 before the wasteland",
        "late": "Upside TE with expanding role",
    },
    "QB": {
        "early": "Elite QB for set-and-forget consistency",
        "tier_break": "Last proven QB1 before streaming tier",
        "late": "High-upside QB2 or streaming option",
    },
}

_PREFERENCE_SUFFIX: dict[int, str] = {
    Rating.LOVE: " (your love pick)",
    Rating.LIKE: " (your like pick)",
    Rating.MEH: " (best available)",
}


def snake_pick_number(round_number: int, draft_slot: int, league_size: int) -> int:
    """Overall pick number for a draft slot; even rounds run in reverse."""
    return pick_in_round(round_number, draft_slot, league_size) + (round_number - 1) * league_size


def pick_in_round(round_number: int, draft_slot: int, league_size: int) -> int:
    return draft_slot if round_number % 2 == 1 else league_size - draft_slot + 1


def is_unrated_elite(player: PlayerRecord, prefs: PreferenceMap) -> bool:
    cutoff = ELITE_UNRATED_CUTOFFS.get(player.position)
    return player.id not in prefs and cutoff is not None and player.fantasy_pts >= cutoff


def assemble_target_pool(
    roster: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    settings: DraftPlanSettings = DEFAULT_PLAN_SETTINGS,
) -> tuple[list[PlayerRecord], frozenset[str]]:
    """Players the plan may recommend, plus the ids of the unrated elites among them.

    Starts from everything rated meh or better, tops up with the best unrated
    players when that is too thin to plan a draft, and always adds unrated
    players whose point totals are obviously elite.
    """
    pool = [p for p in roster if prefs.get(p.id, Rating.PASS) >= Rating.MEH]
    if len(pool) < settings.min_targets:
        unrated = sorted((p for p in roster if p.id not in prefs), key=lambda p: p.fantasy_pts, reverse=True)
        backfill = unrated[: settings.min_targets - len(pool)]
        pool.extend(backfill)
        logger.debug("Backfilled target pool with %d unrated players", len(backfill))

    included = {p.id for p in pool}
    elites = [p for p in roster if is_unrated_elite(p, prefs)]
    for p in elites:
        if p.id not in included:
            pool.append(p)
            included.add(p.id)
    if elites:
        logger.debug("Unrated elites in plan: %s", ", ".join(f"{p.name} ({p.position})" for p in elites))
    return pool, frozenset(p.id for p in elites)


def score_candidate(
    player: PlayerRecord,
    prefs: PreferenceMap,
    round_number: int,
    drafted: Mapping[str, int],
    league_size: int,
    settings: DraftPlanSettings = DEFAULT_PLAN_SETTINGS,
) -> float:
    score = prefs.get(player.id, 0) * settings.preference_weight
    if player.adp:
        score += (player.adp / league_size - round_number) * settings.adp_value_weight
    if drafted.get(player.position, 0) < positional_need(player.position, settings.roster_needs):
        score += settings.need_bonus
    if round_number <= settings.early_elite_last_round and player.fantasy_pts > settings.early_elite_points:
        score += settings.early_elite_bonus

    estimated = player.estimated_round if player.estimated_round is not None else round_number
    waited = round_number - estimated
    if waited > 0:
        score -= waited * settings.wait_penalty
    if waited < -1:
        score -= abs(waited) * settings.reach_penalty
    return score


def relevant_positions(round_number: int, drafted: Mapping[str, int]) -> tuple[str, ...]:
    if round_number > 8:
        return ("RB", "WR", "TE", "QB")
    positions = ["RB", "WR"]
    if round_number >= 3 and drafted.get("TE", 0) == 0:
        positions.append("TE")
    if round_number >= 5 and drafted.get("QB", 0) == 0:
        positions.append("QB")
    return tuple(positions)


def tier_context(player: PlayerRecord, position_tiers: Sequence[Tier] | None) -> TierContext:
    """Where a player sits in their position's tiers.

    A player is last in tier when they are the only liked or loved player left
    in it.
    """
    if not position_tiers:
        return TierContext(tier_number=1)
    for tier in position_tiers:
        if tier.contains(player.id):
            targets = {p.id for p in (*tier.loved_players, *tier.liked_players)}
            return TierContext(
                tier_number=tier.tier_number,
                is_last_in_tier=targets == {player.id},
                is_chasm=tier.is_chasm,
            )
    return NEUTRAL_TIER_CONTEXT


def position_reason(
    position: str,
    round_number: int,
    context: TierContext,
    drafted: Mapping[str, int],
    rating: int,
) -> str:
    count = drafted.get(position, 0)
    reasons = _POSITION_REASONS[position]
    if round_number <= 4:
        reason = reasons["early"]
    elif context.is_last_in_tier:
        reason = reasons["tier_break"]
    elif round_number >= 11:
        reason = reasons["late"]
    elif count == 0:
        reason = f"Fill starting {position} need"
    elif count == 1 and position not in ("QB", "TE"):
        reason = f"Secure {position}2 for lineup flexibility"
    else:
        reason = f"Depth and upside at {position}"
    return reason + _PREFERENCE_SUFFIX.get(rating, "")


def recommendation_priority(
    position: str,
    round_number: int,
    context: TierContext,
    drafted: Mapping[str, int],
) -> int:
    priority = 0
    count = drafted.get(position, 0)
    if count == 0 and position != "QB" and round_number >= 5:
        priority += 50
    if count == 0 and position == "QB" and round_number >= 8:
        priority += 40
    if context.is_last_in_tier:
        priority += 30
    if context.is_chasm:
        priority += 20
    window = ROUND_SCARCITY.get(position)
    if window is not None:
        priority += window.bonus(round_number)
    return priority


def _has_elite(position: str, players: Iterable[PlayerRecord]) -> bool:
    threshold = ELITE_STRATEGY_THRESHOLDS[position]
    return any(p.position == position and p.fantasy_pts >= threshold for p in players)


def round_strategy(
    round_number: int,
    drafted: Mapping[str, int],
    available: Sequence[PlayerRecord],
    limited_targets: bool = False,
) -> str:
    rb = drafted.get("RB", 0)
    wr = drafted.get("WR", 0)
    te = drafted.get("TE", 0)
    qb = drafted.get("QB", 0)

    if limited_targets and round_number == 1:
        return (
            "Limited Targets: Consider evaluating more players for better recommendations. "
            "Target best available talent."
        )

    if round_number <= 2:
        if rb == 0 and wr == 0:
            return "Foundation Pick: Target an elite RB or WR to anchor your team"
        if rb == 1 and wr == 0:
            return "Balance Your Core: Consider elite WR or double down on RB dominance"
        if rb == 0 and wr == 1:
            return "Critical Decision: Last chance for elite RB or embrace Zero-RB strategy"

    if round_number <= 4:
        if te == 0 and _has_elite("TE", available):
            return "Positional Advantage: Elite TE window - huge weekly edge available"
        if qb == 0 and _has_elite("QB", available):
            return "QB Sweet Spot: Top-tier QBs offer consistency and ceiling"
        return "Build Your Flex: Secure your third starter from RB/WR"

    if round_number <= 7:
        needs = [
            position
            for position, missing in (("QB", qb == 0), ("TE", te == 0), ("RB", rb < 2), ("WR", wr < 2))
            if missing
        ]
        if needs:
            return f"Complete Your Starters: Still need {', '.join(needs)} - don't wait too long"
        return "Best Player Available: Take value where it falls"

    if round_number <= 10:
        return "Upside Hunting: Target high-ceiling players and your favorite sleepers"
    if round_number <= 13:
        return "Strategic Depth: Handcuffs, rookies, and high-upside backups"
    return "Swing for the Fences: Dynasty stashes, elite handcuffs, and league winners"


def round_context(round_number: int, draft_slot: int, league_size: int) -> str:
    pick = pick_in_round(round_number, draft_slot, league_size)
    if pick <= 3:
        context = "Early in round - more options available"
    elif pick >= league_size - 2:
        context = "Late in round - consider reaching for targets"
    else:
        context = "Middle of round - balance value and need"
    if 5 <= round_number <= 10:
        context += " | Watch for position runs"
    return context


def generate_round_targets(
    players: Iterable[PlayerRecord],
    prefs: PreferenceMap,
    tiers: Mapping[str, Sequence[Tier]],
    league_size: int = 12,
    draft_slot: int = 6,
    settings: DraftPlanSettings = DEFAULT_PLAN_SETTINGS,
) -> list[RoundTarget]:
    """Build a round-by-round snake draft plan from the user's ratings.

    Args:
        players: The valuated roster.
        prefs: The user's ratings.
        tiers: Position tiers from ``build_tiers``, for tier-break context.
        league_size: Teams in the league.
        draft_slot: The user's 1-based pick position in odd rounds.
        settings: Scoring weights and pool sizes for the plan.

    Returns:
        One RoundTarget per round, always ``settings.rounds`` of them, each with
        at most ``settings.recommendations_per_round`` recommendations.
    """
    roster = list(players)
    pool, unrated_elite_ids = assemble_target_pool(roster, prefs, settings)
    pool = estimate_rounds(pool, roster, league_size, unrated_elite_ids=unrated_elite_ids, settings=settings)
    limited = sum(1 for p in pool if is_liked(prefs, p.id)) < settings.limited_targets

    by_round: dict[int, list[PlayerRecord]] = defaultdict(list)
    for p in pool:
        if p.estimated_round is not None and 1 <= p.estimated_round <= settings.rounds:
            by_round[p.estimated_round].append(p)

    drafted: dict[str, int] = dict.fromkeys(SKILL_POSITIONS, 0)
    plan: list[RoundTarget] = []
    for round_number in range(1, settings.rounds + 1):
        window = range(round_number - settings.candidate_window, round_number + settings.candidate_window + 1)
        candidates = [p for r in window for p in by_round.get(r, [])]
        scores = {p.id: score_candidate(p, prefs, round_number, drafted, league_size, settings) for p in candidates}
        ranked = sorted(candidates, key=lambda p: scores[p.id], reverse=True)

        recommendations: list[Recommendation] = []
        for position in relevant_positions(round_number, drafted):
            targets = [p for p in ranked if p.position == position][: settings.targets_per_position]
            if not targets:
                continue
            context = tier_context(targets[0], tiers.get(position))
            recommendations.append(
                Recommendation(
                    position=position,
                    reason=position_reason(position, round_number, context, drafted, prefs.get(targets[0].id, 0)),
                    targets=tuple(targets),
                    priority=recommendation_priority(position, round_number, context, drafted),
                )
            )
        recommendations.sort(key=lambda r: r.priority, reverse=True)

        plan.append(
            RoundTarget(
                round=round_number,
                pick_number=snake_pick_number(round_number, draft_slot, league_size),
                strategy=round_strategy(round_number, drafted, ranked, limited),
                context=round_context(round_number, draft_slot, league_size),
                recommendations=tuple(recommendations[: settings.recommendations_per_round]),
            )
        )
        if recommendations:
            drafted[recommendations[0].position] += 1
        logger.debug("Round %d: %d candidates, %d recommendations", round_number, len(ranked), len(recommendations))

    return plan
