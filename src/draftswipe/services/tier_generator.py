from __future__ import annotations

import logging
import statistics
from typing import TYPE_CHECKING

from draftswipe.domain.player import SKILL_POSITIONS
from draftswipe.domain.preferences import is_liked, is_loved
from draftswipe.domain.tier import (
    CriticalDecision,
    PositionScarcity,
    PriceRange,
    Tier,
    TierPriority,
    TierRecommendation,
    TierStats,
    TierTransitions,
)
from draftswipe.draft.tables import BASEMENT_VORP, MIN_TIER_SIZE, TIER_RULES, TierRules

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap

logger = logging.getLogger(__name__)


def build_tiers(
    players: Iterable[PlayerRecord],
    prefs: PreferenceMap,
    rules: Mapping[str, TierRules] = TIER_RULES,
) -> dict[str, list[Tier]]:
    """Group each skill position's players into VORP tiers.

    Args:
        players: Valuated players; positions without tier rules are ignored.
        prefs: The user's ratings, used for liked/loved members and advice.
        rules: Per-position cliff, size and natural-break settings.

    Returns:
        Position -> tiers in draft order. The tiers of a position partition its
        players, each tier ordered by descending VORP.
    """
    roster = list(players)
    tiers: dict[str, list[Tier]] = {}
    for position in SKILL_POSITIONS:
        if position not in rules:
            continue
        # sorted() is stable, so equal VORP keeps roster order.
        ranked = sorted((p for p in roster if p.position == position), key=lambda p: p.vorp, reverse=True)
        tiers[position] = _position_tiers(ranked, position, prefs, rules[position])
        logger.debug("Built %d %s tiers from %d players", len(tiers[position]), position, len(ranked))
    return tiers


def split_into_groups(ranked: Sequence[PlayerRecord], rules: TierRules) -> list[list[PlayerRecord]]:
    """Sequential cliff / size / natural-break grouping of VORP-sorted players."""
    groups: list[list[PlayerRecord]] = []
    current: list[PlayerRecord] = []

    for i, player in enumerate(ranked):
        if player.vorp <= BASEMENT_VORP:
            if current:
                groups.append(current)
            groups.append(list(ranked[i:]))
            current = []
            break

        if current:
            drop = current[-1].vorp - player.vorp
            big_enough = len(current) >= MIN_TIER_SIZE
            cliff = drop >= rules.cliff
            full = len(current) >= rules.max_size
            natural = i in rules.natural_breaks and len(groups) >= 2
            # A chasm-sized drop splits even a tier smaller than the minimum.
            if drop >= rules.chasm or (big_enough and (cliff or full or natural)):
                groups.append(current)
                current = []

        current.append(player)

    if current:
        groups.append(current)
    return groups


def _position_tiers(
    ranked: Sequence[PlayerRecord],
    position: str,
    prefs: PreferenceMap,
    rules: TierRules,
) -> list[Tier]:
    groups = split_into_groups(ranked, rules)
    tiers: list[Tier] = []
    for index, group in enumerate(groups):
        next_group = groups[index + 1] if index + 1 < len(groups) else None
        drop_to_next = group[-1].vorp - next_group[0].vorp if next_group else 0.0
        tiers.append(_make_tier(group, index + 1, position, prefs, rules, drop_to_next))
    return tiers


def _tier_quality(tier_number: int, rules: TierRules) -> str:
    return rules.qualities[min(tier_number - 1, len(rules.qualities) - 1)]


def _make_tier(
    players: list[PlayerRecord],
    tier_number: int,
    position: str,
    prefs: PreferenceMap,
    rules: TierRules,
    drop_to_next: float,
) -> Tier:
    liked = tuple(p for p in players if is_liked(prefs, p.id))
    loved = tuple(p for p in players if is_loved(prefs, p.id))
    quality = _tier_quality(tier_number, rules)
    prices = [p.auction for p in players]
    return Tier(
        position=position,
        tier_number=tier_number,
        quality=quality,
        players=tuple(players),
        liked_players=liked,
        loved_players=loved,
        stats=TierStats(
            avg_vorp=statistics.fmean(p.vorp for p in players),
            avg_points=statistics.fmean(p.fantasy_pts for p in players),
            min_vorp=players[-1].vorp,
            max_vorp=players[0].vorp,
            min_points=min(p.fantasy_pts for p in players),
            max_points=max(p.fantasy_pts for p in players),
        ),
        price_range=PriceRange(min=min(prices), avg=statistics.fmean(prices), max=max(prices)),
        recommendation=tier_recommendation(quality, len(liked), position),
        vorp_drop_to_next=round(drop_to_next, 2),
        is_chasm=drop_to_next >= rules.chasm,
    )


def tier_recommendation(quality: str, liked_count: int, position: str) -> TierRecommendation:
    has_targets = liked_count > 0
    if quality == "Elite":
        return TierRecommendation(
            priority=TierPriority.CRITICAL,
            strategy=(
                f"You have {liked_count} elite {position}s targeted. Secure at least one!"
                if has_targets
                else "No targets in elite tier. Be ready to pivot to other positions."
            ),
            timing="Rounds 1-3 for most, earlier for TE",
        )
    if "1" in quality and "Low" not in quality:
        return TierRecommendation(
            priority=TierPriority.HIGH,
            strategy=(
                f"Strong {position}1 options you like. Don't let them all pass by."
                if has_targets
                else "Consider best available at other positions."
            ),
            timing=f"Rounds {'4-6' if position == 'QB' else '2-5'}",
        )
    if "2" in quality:
        return TierRecommendation(
            priority=TierPriority.MEDIUM,
            strategy=(
                f"Good depth here with {liked_count} targets. Can wait if needed."
                if has_targets
                else "Similar production available later. Focus elsewhere."
            ),
            timing=f"Rounds {'7-10' if position == 'QB' else '5-8'}",
        )
    return TierRecommendation(
        priority=TierPriority.LOW,
        strategy="Replacement level. Only if you love them or need depth.",
        timing="Double-digit rounds or $1-3 in auction",
    )


def analyze_tier_transitions(tiers: Mapping[str, Sequence[Tier]]) -> TierTransitions:
    """Flag the tier breaks that force a decision and rank positions by scarcity."""
    decisions: list[CriticalDecision] = []
    for position, position_tiers in tiers.items():
        for index, tier in enumerate(position_tiers):
            if tier.is_chasm and tier.liked_players:
                decisions.append(
                    CriticalDecision(
                        position=position,
                        tier_number=tier.tier_number,
                        message=f"MAJOR DROPOFF after {tier.quality} {position}s! Last chance for this tier.",
                        players=tier.liked_players,
                        urgency=TierPriority.CRITICAL,
                    )
                )
            if len(tier.liked_players) == 1 and index < len(position_tiers) - 1:
                last = tier.liked_players[0]
                if len(position_tiers[index + 1].liked_players) >= 3:
                    message = f"{last.name} is last in tier, but you have options in next tier."
                    urgency = TierPriority.MEDIUM
                else:
                    message = f"{last.name} is your last {tier.quality} option!"
                    urgency = TierPriority.HIGH
                decisions.append(
                    CriticalDecision(
                        position=position,
                        tier_number=tier.tier_number,
                        message=message,
                        players=tier.liked_players,
                        urgency=urgency,
                    )
                )
    return TierTransitions(
        critical_decisions=tuple(decisions),
        position_priority=tuple(position_scarcity(tiers)),
    )


def position_scarcity(tiers: Mapping[str, Sequence[Tier]]) -> list[PositionScarcity]:
    scarcity: list[PositionScarcity] = []
    for position, position_tiers in tiers.items():
        top_tier_count = sum(len(t.liked_players) for t in position_tiers[:3])
        total_liked = sum(len(t.liked_players) for t in position_tiers)
        major_dropoffs = sum(1 for t in position_tiers if t.is_chasm)
        if top_tier_count == 0:
            priority = "SKIP_EARLY"
        elif top_tier_count <= 2:
            priority = "HIGH_PRIORITY"
        else:
            priority = "NORMAL"
        scarcity.append(
            PositionScarcity(
                position=position,
                top_tier_count=top_tier_count,
                total_liked=total_liked,
                major_dropoffs=major_dropoffs,
                scarcity_score=top_tier_count * 3 + major_dropoffs - total_liked * 0.5,
                priority=priority,
            )
        )
    return sorted(scarcity, key=lambda s: s.scarcity_score, reverse=True)
