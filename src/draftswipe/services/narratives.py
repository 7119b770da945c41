"""Plain-language narratives about a user's draft tendencies."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from draftswipe.domain.analysis import Narrative, NarrativePriority, NarrativeType
from draftswipe.domain.preferences import is_liked, is_loved, is_passed
from draftswipe.numbers import safe_ratio

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from draftswipe.domain.analysis import PreferenceStats
    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap

MIN_NARRATIVES = 3
DEFAULT_NARRATIVE_LIMIT = 6

# Consensus-elite pool sizes for full player pools; small pools use a third.
_ELITE_POOL_SIZES: dict[str, int] = {"QB": 10, "RB": 20, "WR": 25, "TE": 10}
_ELITE_POOL_SHARE = 0.33

_PRIORITY_ORDER: dict[NarrativePriority, int] = {
    NarrativePriority.HIGH: 3,
    NarrativePriority.MEDIUM: 2,
    NarrativePriority.LOW: 1,
}


def _names(players: Sequence[PlayerRecord], limit: int, sep: str = ", ") -> str:
    return sep.join(p.name for p in players[:limit])


def _by_points(players: Iterable[PlayerRecord]) -> list[PlayerRecord]:
    return sorted(players, key=lambda p: p.fantasy_pts, reverse=True)


def adaptive_elite_count(position: str, pool_size: int) -> int:
    return min(_ELITE_POOL_SIZES.get(position, 10), math.floor(pool_size * _ELITE_POOL_SHARE))


def _points_at(ranked: Sequence[PlayerRecord], count: int, default: float) -> float:
    """Points of the count-th best player, or ``default`` when there is no such player."""
    if count <= 0 or count > len(ranked) or not ranked[count - 1].fantasy_pts:
        return default
    return ranked[count - 1].fantasy_pts


def generate_narratives(
    stats: PreferenceStats,
    players: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None = None,
) -> list[Narrative]:
    """Every narrative that applies to a rating profile, unsorted."""
    narratives = personality_narratives(stats, position is not None)
    if position is None or position in ("RB", "WR"):
        narratives.extend(strategy_narratives(stats, players, prefs, position))
    if position is not None:
        narratives.extend(position_narratives(position, players, prefs))
    narratives.extend(contrarian_narratives(players, prefs, position))
    narratives.extend(risk_narratives(players, prefs, position))
    if len(narratives) < MIN_NARRATIVES:
        narratives.extend(fallback_narratives(stats, players, prefs, position))
    return narratives


def prioritize_narratives(narratives: Iterable[Narrative], limit: int = DEFAULT_NARRATIVE_LIMIT) -> list[Narrative]:
    """High priority first, then narratives that name players; stable otherwise."""
    ordered = sorted(
        narratives,
        key=lambda n: (-_PRIORITY_ORDER.get(n.priority, 0), not n.related_players),
    )
    return ordered[:limit]


def personality_narratives(stats: PreferenceStats, position_specific: bool) -> list[Narrative]:
    narratives: list[Narrative] = []
    dist = stats.distribution
    at_position = " at this position" if position_specific else ""

    if dist.love < 5:
        love = stats.ratings.love
        selectivity = (
            "extremely selective at this position" if position_specific else "one of the most selective drafters around"
        )
        narratives.append(
            Narrative(
                type=NarrativeType.PERSONALITY,
                priority=NarrativePriority.HIGH,
                title="The Perfectionist Scout",
                icon="🎯",
                summary=f"You loved only {love} player{'' if love == 1 else 's'}{at_position}.",
                full_text=(
                    f"With a love rate of just {dist.love:.1f}%, you're {selectivity}. "
                    "While others fall for every shiny name, you're waiting for perfection. When you do pull the "
                    "trigger it's with supreme confidence, so make sure you have contingency plans: your targets "
                    "will be in high demand."
                ),
                actionable=(
                    "Be prepared to reach for your loved players",
                    "Have backup plans if your targets get sniped",
                    f"Consider if you're being too harsh on {stats.total_rated} players"
                    if position_specific
                    else "Consider trading up in drafts to secure your guys",
                ),
            )
        )

    positive = dist.love + dist.like
    if positive > 60:
        narratives.append(
            Narrative(
                type=NarrativeType.PERSONALITY,
                priority=NarrativePriority.MEDIUM,
                title="The Eternal Optimist",
                icon="😊",
                summary=f"You see potential everywhere: {round(positive)}% positive ratings{at_position}!",
                full_text=(
                    "Your glass-half-full approach to player evaluation could be a superpower. While others nitpick "
                    "flaws, you're identifying upside. This positivity often finds league-winning values"
                    f"{at_position}. Just be careful not to overlook genuine red flags in your enthusiasm."
                ),
                actionable=(
                    "Trust your positive instincts on boom/bust players",
                    "Look for your liked players in the middle rounds",
                    "Your enthusiasm for this position could lead to reaching"
                    if position_specific
                    else "Don't be afraid to build unique roster constructions",
                ),
            )
        )

    if dist.passed > 40:
        narratives.append(
            Narrative(
                type=NarrativeType.PERSONALITY,
                priority=NarrativePriority.MEDIUM,
                title="The Skeptical Analyst",
                icon="🔍",
                summary=f"You passed on {dist.passed:.1f}% of players{at_position}; you know what you don't want.",
                full_text=(
                    f"Your critical eye is a draft day advantage. By eliminating {stats.ratings.passed} players from "
                    f"consideration, you've simplified your draft board significantly{at_position}. This clarity "
                    "prevents panic picks and reaches. Use your streamlined player pool to plan multiple draft paths."
                ),
                actionable=(
                    "Create detailed tiers from your remaining players",
                    "Be ready to pivot when runs happen",
                    'Your "do not draft" list is as valuable as your targets',
                ),
            )
        )
    return narratives


def strategy_narratives(
    stats: PreferenceStats,
    players: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None,
) -> list[Narrative]:
    narratives: list[Narrative] = []
    elite_rb = stats.elite_targets.get("RB", 0)
    elite_wr = stats.elite_targets.get("WR", 0)

    if position == "RB" and elite_rb >= 3:
        narratives.append(
            Narrative(
                type=NarrativeType.STRATEGY,
                priority=NarrativePriority.HIGH,
                title="Running Back Whisperer",
                icon="🏃",
                summary=f"You're targeting {elite_rb} elite RBs heavily.",
                full_text=(
                    "Your RB preference is clear: you want to dominate on the ground. This approach values floor "
                    "over ceiling and controls games through volume. The key is nailing those selections and having "
                    "the depth to support them."
                ),
                actionable=(
                    "Consider starting RB-RB in your draft",
                    "Target your favorite RBs aggressively",
                    "Don't forget to handcuff your top backs",
                ),
                related_players=tuple(p for p in players if p.position == "RB" and is_loved(prefs, p.id))[:5],
            )
        )

    if position == "WR" and elite_wr >= 4:
        narratives.append(
            Narrative(
                type=NarrativeType.STRATEGY,
                priority=NarrativePriority.HIGH,
                title="Air Raid Architect",
                icon="🎯",
                summary=f"You're loving {elite_wr} elite WRs.",
                full_text=(
                    "Your preference for wide receivers is clear. By focusing on the position with the most depth, "
                    "you're positioned to dominate through the air while finding RB value later."
                ),
                actionable=(
                    "Lock in your favorite WRs early",
                    "Be patient for RB value in middle rounds",
                    "Stack WRs with their QBs when possible",
                ),
                related_players=tuple(p for p in players if p.position == "WR" and is_loved(prefs, p.id))[:5],
            )
        )

    if position is None and abs(elite_rb - elite_wr) <= 1:
        narratives.append(
            Narrative(
                type=NarrativeType.STRATEGY,
                priority=NarrativePriority.MEDIUM,
                title="The Balanced Builder",
                icon="⚖️",
                summary="You maintain balance between RB and WR targets.",
                full_text=(
                    "Your balanced approach between RBs and WRs suggests adaptability. You're not married to any "
                    "single strategy, so you can capitalize on draft day value however the board falls."
                ),
                actionable=(
                    "Stay true to your board regardless of runs",
                    "Be the one who starts the second wave of a position run",
                    "Focus on best player available",
                ),
            )
        )
    return narratives


def position_narratives(position: str, players: Sequence[PlayerRecord], prefs: PreferenceMap) -> list[Narrative]:
    at_position = [p for p in players if p.position == position]
    loved = [p for p in at_position if is_loved(prefs, p.id)]
    match position:
        case "QB":
            return _qb_narratives(loved, at_position)
        case "RB":
            return _rb_narratives(loved)
        case "WR":
            return _wr_narratives(loved)
        case "TE":
            return _te_narratives(loved, at_position)
        case _:
            return []


def _qb_narratives(loved: list[PlayerRecord], qbs: list[PlayerRecord]) -> list[Narrative]:
    narratives: list[Narrative] = []
    ranked = _by_points(qbs)

    elite_threshold = _points_at(ranked, min(6, math.floor(len(qbs) * 0.25)), 300)
    elite = [p for p in loved if p.fantasy_pts >= elite_threshold]
    if len(elite) >= (1 if len(qbs) <= 25 else 2):
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.HIGH,
                title="Elite QB Theory Believer",
                icon="⚡",
                summary=f"You're targeting {len(elite)} elite QBs for a difference-making advantage.",
                full_text=(
                    f"Your love for elite QBs like {_names(elite, len(elite), ' and ')} shows you believe in paying "
                    "up for the position. The top QBs can provide a 5-8 point weekly advantage, a massive edge over "
                    "a full season. Just ensure you're not reaching too early and missing out on RB/WR depth."
                ),
                actionable=(
                    f"Target {elite[0].name} in rounds 3-5",
                    "Have a clear backup plan if your QB1 gets sniped",
                    "Consider stacking with their pass catchers",
                ),
            )
        )

    late_threshold = _points_at(ranked, min(12, math.floor(len(qbs) * 0.5)), 250)
    if all(p.fantasy_pts < late_threshold for p in loved):
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.MEDIUM,
                title="Late-Round QB Specialist",
                icon="🎲",
                summary="You're punting the QB position to load up elsewhere.",
                full_text=(
                    "By waiting on QB, you're following a time-tested strategy. The depth at QB means you can find "
                    "startable options late while building dominant RB/WR groups. Just make sure to grab two QBs "
                    "you believe in."
                ),
                actionable=(
                    "Wait until rounds 8-10 for your QB1",
                    "Target QBs with rushing upside for ceiling",
                    "Grab two QBs with different bye weeks",
                ),
            )
        )
    return narratives


def _rb_narratives(loved: list[PlayerRecord]) -> list[Narrative]:
    narratives: list[Narrative] = []

    young = [p for p in loved if p.rookie or (p.experience is not None and p.experience <= 2)]
    if len(young) >= 2:
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.MEDIUM,
                title="Youth Movement",
                icon="🌟",
                summary=f"You're betting on {len(young)} young RBs with upside.",
                full_text=(
                    f"Your faith in young backs like {_names(young, 2, ' and ')} says you're chasing upside and "
                    "breakout potential. Young RBs often provide the best fantasy value as their roles expand. "
                    "Balance them with some proven veterans for stability."
                ),
                actionable=(
                    "Target your young RBs a round early to ensure you get them",
                    "Mix in some proven veterans for stability",
                    "Monitor training camp reports closely for role changes",
                ),
            )
        )

    receivers = [p for p in loved if p.stat("receptions") > 50]
    if len(receivers) >= 2:
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.MEDIUM,
                title="PPR Specialist",
                icon="🎯",
                summary=f"You favor pass-catching backs with {len(receivers)} reception monsters targeted.",
                full_text=(
                    "Your love for receiving backs shows sophisticated thinking. In PPR formats these players provide "
                    f"both floor and ceiling. Players like {receivers[0].name} can be RB1s without dominating carries."
                ),
                actionable=(
                    "These backs are perfect for PPR leagues",
                    "They pair well with early-down bruisers",
                    "Target them in the middle rounds for value",
                ),
            )
        )
    return narratives


def _wr_narratives(loved: list[PlayerRecord]) -> list[Narrative]:
    big_play = [p for p in loved if safe_ratio(p.stat("rec_yds"), p.stat("receptions")) > 14]
    if len(big_play) < 2:
        return []
    return [
        Narrative(
            type=NarrativeType.POSITION,
            priority=NarrativePriority.MEDIUM,
            title="Big Play Hunter",
            icon="💥",
            summary="You favor explosive receivers who stretch the field.",
            full_text=(
                f"Your preference for deep threats like {_names(big_play, 2, ' and ')} shows you're not afraid of "
                "volatility. These players can win you weeks with a single catch but might also disappear at times. "
                "It pairs well with consistent players at other positions."
            ),
            actionable=(
                "Balance these boom/bust players with high-floor options",
                "They make excellent FLEX plays",
                "Target them in best ball formats especially",
            ),
        )
    ]


def _te_narratives(loved: list[PlayerRecord], tes: list[PlayerRecord]) -> list[Narrative]:
    narratives: list[Narrative] = []
    ranked = _by_points(tes)

    elite_threshold = _points_at(ranked, min(4, math.floor(len(tes) * 0.2)), 150)
    elite = [p for p in loved if p.fantasy_pts >= elite_threshold]
    if elite:
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.HIGH,
                title="Tight End Advantage Seeker",
                icon="🎪",
                summary=f"You're investing in the scarce TE position with {len(loved)} targets.",
                full_text=(
                    f"Your willingness to invest in elite TEs like {_names(elite, len(elite), ' and ')} shows "
                    "sophisticated thinking. An elite TE is often worth 8-10 points per week over streaming options."
                ),
                actionable=(
                    "Be willing to take your TE1 in rounds 2-4",
                    "Consider taking two top-8 TEs for trade leverage",
                    "Pair with late-round QB strategy for balance",
                ),
            )
        )

    late_threshold = _points_at(ranked, min(12, math.floor(len(tes) * 0.6)), 100)
    if all(p.fantasy_pts < late_threshold for p in loved):
        narratives.append(
            Narrative(
                type=NarrativeType.POSITION,
                priority=NarrativePriority.MEDIUM,
                title="Tight End Streamer",
                icon="🔄",
                summary="You're punting TE to focus resources elsewhere.",
                full_text=(
                    "By fading the TE position, you accept a weekly disadvantage there to build strength at RB/WR. "
                    "This works best if you're active on waivers and stream based on matchups."
                ),
                actionable=(
                    "Wait until round 10+ for your first TE",
                    "Draft 2-3 upside TEs late",
                    "Be aggressive on the waiver wire",
                    "Target TEs against weak defenses weekly",
                ),
            )
        )
    return narratives


def consensus_elites(players: Sequence[PlayerRecord], position: str | None) -> list[PlayerRecord]:
    """Top players by points: per position in the overall view, within ``position`` otherwise."""
    positions = (position,) if position is not None else ("QB", "RB", "WR", "TE")
    elites: list[PlayerRecord] = []
    for pos in positions:
        at_position = _by_points(p for p in players if p.position == pos)
        elites.extend(at_position[: adaptive_elite_count(pos, len(at_position))])
    return elites


def contrarian_narratives(
    players: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None,
) -> list[Narrative]:
    narratives: list[Narrative] = []
    relevant = [p for p in players if position is None or p.position == position]
    small_pool = len(relevant) <= 30
    subject = position or "players"

    faded = [p for p in consensus_elites(players, position) if is_passed(prefs, p.id)]
    if len(faded) >= (2 if small_pool else 3):
        scope = f"top-{adaptive_elite_count(position, len(relevant))}" if position else "top-tier"
        narratives.append(
            Narrative(
                type=NarrativeType.CONTRARIAN,
                priority=NarrativePriority.HIGH,
                title="The Contrarian",
                icon="🔄",
                summary=f"You're fading {len(faded)} consensus {scope} {subject}.",
                full_text=(
                    f"Your willingness to fade popular {subject} like {_names(faded, 3 if position else 5)} shows "
                    "independent thinking. Contrarian drafters who hit often build the most unique rosters. Just "
                    "ensure your fades are based on process, not gut feeling."
                ),
                actionable=(
                    "Document why you're fading each player",
                    "Be prepared for these players to fall to you anyway",
                    "Have contingency plans if you're wrong",
                    f"Trust your evaluation of {position}s" if position else "Stay consistent across positions",
                ),
                related_players=tuple(faded[:5]),
            )
        )

    ranked = _by_points(relevant)
    sleepers = [p for p in ranked[len(ranked) // 2 :] if is_loved(prefs, p.id)]
    if len(sleepers) >= (1 if small_pool else 2):
        narratives.append(
            Narrative(
                type=NarrativeType.CONTRARIAN,
                priority=NarrativePriority.MEDIUM,
                title="The Sleeper Hunter",
                icon="💎",
                summary=f"You've identified {len(sleepers)} deep {position or 'sleepers'} others will miss.",
                full_text=(
                    f"Your love for {f'lower-ranked {position}s' if position else 'players'} like "
                    f"{_names(sleepers, 3)} who are being overlooked shows you're doing your own research. These "
                    "are the picks that win leagues when they hit."
                ),
                actionable=(
                    "Don't reach too early for your sleepers",
                    "Target them 1-2 rounds before their ADP",
                    "Grab multiple shots at your sleeper thesis",
                    f"These {position}s could be league winners" if position else "Trust your evaluation process",
                ),
            )
        )
    return narratives


def risk_narratives(
    players: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None,
) -> list[Narrative]:
    narratives: list[Narrative] = []
    relevant = [p for p in players if position is None or p.position == position]
    loved = [p for p in relevant if is_loved(prefs, p.id)]
    small_pool = len(relevant) <= 50

    rookies = sum(1 for p in loved if p.rookie)
    young = sum(1 for p in loved if p.experience is not None and p.experience <= 2)
    veterans = sum(1 for p in loved if p.experience is not None and p.experience >= 8)
    min_veterans = 2 if small_pool else 3
    at_position = f" at {position}" if position else ""

    if rookies >= (1 if small_pool else 2) or (position is not None and young >= (2 if small_pool else 3)):
        second_year = f" and {young - rookies} second-year players" if young > rookies else ""
        narratives.append(
            Narrative(
                type=NarrativeType.RISK,
                priority=NarrativePriority.HIGH,
                title="High Risk, High Reward",
                icon="🎲",
                summary=f"You're betting big on youth{at_position} with {rookies} rookies{second_year} loved.",
                full_text=(
                    f"Your portfolio shows massive risk tolerance{at_position}. You're chasing league-winning upside "
                    "over safe floors, which needs strong contingency planning. "
                    + (
                        "Rookies often start slow but can explode in the second half."
                        if rookies
                        else "Young players have the highest ceiling but also the highest bust rate."
                    )
                ),
                actionable=(
                    "Balance your youth with some proven veterans",
                    "Have multiple shots at each thesis",
                    "Be patient: young players often need time",
                    f"Don't put all your {position} eggs in the youth basket"
                    if position
                    else "Diversify risk across positions",
                ),
            )
        )

    if rookies == 0 and veterans >= min_veterans and len(loved) >= min_veterans:
        narratives.append(
            Narrative(
                type=NarrativeType.RISK,
                priority=NarrativePriority.MEDIUM,
                title="The Safe Harbor",
                icon="🛡️",
                summary=f"You prefer proven veterans{at_position} over risky upside plays.",
                full_text=(
                    f"Your love for established veterans shows risk aversion{at_position}, and that's not bad. "
                    "Prioritizing floor over ceiling often leads to consistent playoff teams."
                ),
                actionable=(
                    "Your strategy works best in standard leagues",
                    "Consider taking 1-2 upside swings late",
                    "Focus on winning the draft, not the lottery",
                ),
            )
        )
    return narratives


def fallback_narratives(
    stats: PreferenceStats,
    players: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None,
) -> list[Narrative]:
    narratives: list[Narrative] = []
    relevant = [p for p in players if position is None or p.position == position]
    subject = position or "players"
    ratings = stats.ratings

    if stats.total_rated > 0:
        narratives.append(
            Narrative(
                type=NarrativeType.SUMMARY,
                priority=NarrativePriority.MEDIUM,
                title="Evaluation Summary",
                icon="📊",
                summary=f"You've evaluated {stats.total_rated} {subject} so far.",
                full_text=(
                    f"Your evaluations show {ratings.love} loved, {ratings.like} liked, {ratings.meh} neutral, and "
                    f"{ratings.passed} passed. "
                    + (
                        "You haven't found your must-have players yet. Keep swiping!"
                        if ratings.love == 0
                        else "You've identified some key targets to build around."
                    )
                ),
                actionable=(
                    "Keep swiping to find players you love"
                    if ratings.love == 0
                    else "Focus on securing your loved players",
                    "Use your tier rankings to plan draft strategy",
                    f"Consider evaluating more {position}s for better insights"
                    if position
                    else "Complete all positions for full analysis",
                ),
            )
        )

    loved = [p for p in relevant if is_loved(prefs, p.id)]
    if loved:
        narratives.append(
            Narrative(
                type=NarrativeType.TARGETS,
                priority=NarrativePriority.HIGH,
                title="Your Top Targets",
                icon="🎯",
                summary=f"You've identified {len(loved)} must-have {subject}.",
                full_text=(
                    f"Your top targets are {_names(loved, 3)}{' and others' if len(loved) > 3 else ''}. These "
                    "players will form the core of your draft strategy. Be prepared to reach for them if necessary."
                ),
                actionable=(
                    "Rank these players within your loved tier",
                    "Identify which rounds to target each player",
                    "Have backup plans if they get drafted early",
                ),
                related_players=tuple(loved[:5]),
            )
        )

    values = [p for p in relevant if is_liked(prefs, p.id) and p.auction <= 10]
    if values:
        narratives.append(
            Narrative(
                type=NarrativeType.VALUE,
                priority=NarrativePriority.MEDIUM,
                title="Value Finder",
                icon="💰",
                summary=f"You've spotted {len(values)} potential value picks.",
                full_text=(
                    f"Players like {_names(values, 2, ' and ')} offer strong value at their price points. These "
                    "late-round targets could be league winners if they hit."
                ),
                actionable=(
                    "Target these players in later rounds",
                    "Consider stacking multiple value picks",
                    "Monitor news for potential breakouts",
                ),
            )
        )
    return narratives


