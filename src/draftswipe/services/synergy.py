"""Relationships between the players a user likes: stacks, handcuffs, bye weeks, divisions."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from draftswipe.domain.analysis import NarrativePriority
from draftswipe.domain.preferences import Rating, is_liked, is_loved
from draftswipe.domain.synergy import (
    ByeWeekAnalysis,
    ByeWeekCluster,
    DivisionalStack,
    Handcuff,
    QBStack,
    SynergyInsight,
    SynergyReport,
    TeamStack,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap

logger = logging.getLogger(__name__)

DIVISIONS: dict[str, frozenset[str]] = {
    "AFC East": frozenset({"BUF", "MIA", "NE", "NYJ"}),
    "AFC North": frozenset({"BAL", "CIN", "CLE", "PIT"}),
    "AFC South": frozenset({"HOU", "IND", "JAX", "TEN"}),
    "AFC West": frozenset({"DEN", "KC", "LV", "LAC"}),
    "NFC East": frozenset({"DAL", "NYG", "PHI", "WSH", "WAS"}),
    "NFC North": frozenset({"CHI", "DET", "GB", "MIN"}),
    "NFC South": frozenset({"ATL", "CAR", "NO", "TB"}),
    "NFC West": frozenset({"ARI", "LAR", "SF", "SEA"}),
}

ELITE_STACK_QB_POINTS = 300
BYE_CLUSTER_SIZE = 3
CRITICAL_BYE_CLUSTER_SIZE = 5
DIVISION_STACK_SIZE = 3


def analyze_synergies(players: Iterable[PlayerRecord], prefs: PreferenceMap) -> SynergyReport:
    roster = list(players)
    qb_stacks = find_qb_stacks(roster, prefs)
    team_stacks = find_team_stacks(roster, prefs)
    handcuffs = find_handcuffs(roster, prefs)
    bye_weeks = analyze_bye_weeks(roster, prefs)
    divisional = find_divisional_stacks(roster, prefs)
    logger.debug(
        "Synergies: %d QB stacks, %d team stacks, %d handcuffs, %d bye clusters, %d divisional",
        len(qb_stacks),
        len(team_stacks),
        len(handcuffs),
        len(bye_weeks.clusters),
        len(divisional),
    )
    return SynergyReport(
        qb_stacks=tuple(qb_stacks),
        team_stacks=tuple(team_stacks),
        handcuffs=tuple(handcuffs),
        bye_weeks=bye_weeks,
        divisional_stacks=tuple(divisional),
        insights=tuple(synergy_insights(qb_stacks, team_stacks, handcuffs, bye_weeks)),
    )


def find_qb_stacks(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> list[QBStack]:
    """Liked QBs paired with same-team pass catchers rated meh or better, strongest first."""
    stacks: list[QBStack] = []
    for qb in roster:
        if qb.position != "QB" or not is_liked(prefs, qb.id):
            continue
        receivers = sorted(
            (
                p
                for p in roster
                if p.team == qb.team and p.position in ("WR", "TE") and prefs.get(p.id, Rating.PASS) >= Rating.MEH
            ),
            key=lambda p: prefs[p.id],
            reverse=True,
        )
        if not receivers:
            continue
        stacks.append(
            QBStack(
                qb=qb,
                receivers=tuple(receivers),
                team=qb.team,
                total_rating=prefs[qb.id] + sum(prefs[p.id] for p in receivers),
                strength=stack_strength(qb, receivers, prefs),
                narrative=_stack_narrative(qb, receivers, prefs),
            )
        )
    return sorted(stacks, key=lambda s: s.strength, reverse=True)


def stack_strength(qb: PlayerRecord, receivers: Sequence[PlayerRecord], prefs: PreferenceMap) -> float:
    strength = prefs.get(qb.id, 0) * 2 + sum(prefs.get(p.id, 0) * 1.5 for p in receivers)
    if qb.fantasy_pts > ELITE_STACK_QB_POINTS:
        strength += 2
    if sum(1 for p in receivers if is_loved(prefs, p.id)) >= 2:
        strength += 3
    return strength


def _stack_narrative(qb: PlayerRecord, receivers: Sequence[PlayerRecord], prefs: PreferenceMap) -> str:
    names = " and ".join(p.name for p in receivers[:2])
    if is_loved(prefs, qb.id) and any(is_loved(prefs, p.id) for p in receivers):
        return f"Elite stack alert! {qb.name} with {names} could win you weeks"
    if len(receivers) >= 3:
        return f"You're all-in on the {qb.team} passing game with {len(receivers)} targets"
    return f"Solid {qb.team} stack with {qb.name} and {names}"


def _liked_by_team(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> dict[str, list[PlayerRecord]]:
    teams: dict[str, list[PlayerRecord]] = defaultdict(list)
    for p in roster:
        if is_liked(prefs, p.id):
            teams[p.team].append(p)
    return teams


def find_team_stacks(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> list[TeamStack]:
    """Teams with two or more liked players, biggest first."""
    stacks: list[TeamStack] = []
    for team, liked in _liked_by_team(roster, prefs).items():
        if len(liked) < 2:
            continue
        players = sorted(liked, key=lambda p: p.fantasy_pts, reverse=True)
        positions = tuple(dict.fromkeys(p.position for p in players))
        if "QB" in positions and ("WR" in positions or "TE" in positions):
            stack_type = "passing-game"
            narrative = f"You're all-in on the {team} passing attack"
        elif sum(1 for p in players if p.position == "RB") > 1:
            stack_type = "backfield"
            narrative = f"You're targeting multiple {team} RBs - risky but could pay off"
        else:
            stack_type = "mixed"
            narrative = f"You believe in the {team} offense across multiple positions"
        stacks.append(
            TeamStack(
                team=team,
                players=tuple(players),
                positions=positions,
                total_projected_points=round(sum(p.fantasy_pts for p in players), 2),
                stack_type=stack_type,
                narrative=narrative,
                risk=_stack_risk(len(players), positions, stack_type),
            )
        )
    return sorted(stacks, key=lambda s: len(s.players), reverse=True)


def _stack_risk(size: int, positions: tuple[str, ...], stack_type: str) -> str:
    if size >= 4 or (size == 3 and "QB" not in positions) or stack_type == "backfield":
        return "high"
    if size == 2:
        return "low"
    return "moderate"


def find_handcuffs(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> list[Handcuff]:
    """Liked starting RBs and what the user did with their team's second back."""
    backfields: dict[str, list[PlayerRecord]] = defaultdict(list)
    for p in roster:
        if p.position == "RB":
            backfields[p.team].append(p)

    handcuffs: list[Handcuff] = []
    for team, backs in backfields.items():
        if len(backs) < 2:
            continue
        starter, backup = sorted(backs, key=lambda p: p.fantasy_pts, reverse=True)[:2]
        if not is_liked(prefs, starter.id):
            continue
        backup_rating = prefs.get(backup.id)
        if backup_rating is None:
            strategy = "unaware"
            narrative = f"Consider evaluating {backup.name} as a handcuff for {starter.name}"
        elif backup_rating >= Rating.MEH:
            strategy = "secured"
            narrative = f"Smart! You're protecting your {starter.name} investment with {backup.name}"
        else:
            strategy = "risky"
            narrative = f"You love {starter.name} but passed on handcuff {backup.name} - living dangerously"
        handcuffs.append(
            Handcuff(
                starter=starter,
                backup=backup,
                team=team,
                starter_rating=prefs[starter.id],
                backup_rating=backup_rating,
                strategy=strategy,
                narrative=narrative,
            )
        )
    return handcuffs


def analyze_bye_weeks(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> ByeWeekAnalysis:
    by_week: dict[int, list[PlayerRecord]] = defaultdict(list)
    for p in roster:
        if p.bye_week is not None and is_liked(prefs, p.id):
            by_week[p.bye_week].append(p)

    clusters = [
        ByeWeekCluster(
            week=week,
            players=tuple(players),
            severity="critical" if len(players) >= CRITICAL_BYE_CLUSTER_SIZE else "moderate",
            positions=tuple(dict.fromkeys(p.position for p in players)),
        )
        for week, players in sorted(by_week.items())
        if len(players) >= BYE_CLUSTER_SIZE
    ]
    if not clusters:
        return ByeWeekAnalysis(
            clusters=(),
            risk="low",
            narrative="Your bye weeks are well distributed",
            recommendation="No bye week concerns",
        )
    clusters.sort(key=lambda c: len(c.players), reverse=True)
    worst = clusters[0]
    return ByeWeekAnalysis(
        clusters=tuple(clusters),
        risk="high" if worst.severity == "critical" else "moderate",
        narrative=f"Week {worst.week} could be rough with {len(worst.players)} players on bye",
        recommendation="Consider diversifying bye weeks or plan to punt that week",
    )


def find_divisional_stacks(roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> list[DivisionalStack]:
    stacks: list[DivisionalStack] = []
    for division, teams in DIVISIONS.items():
        players = [p for p in roster if p.team in teams and is_liked(prefs, p.id)]
        if len(players) < DIVISION_STACK_SIZE:
            continue
        unique_teams = tuple(dict.fromkeys(p.team for p in players))
        stacks.append(
            DivisionalStack(
                division=division,
                players=tuple(players),
                teams=unique_teams,
                narrative=f"You're heavily invested in the {division} with {len(players)} players",
                risk="high" if len(unique_teams) == 1 else "moderate",
            )
        )
    return stacks


def synergy_insights(
    qb_stacks: Sequence[QBStack],
    team_stacks: Sequence[TeamStack],
    handcuffs: Sequence[Handcuff],
    bye_weeks: ByeWeekAnalysis,
) -> list[SynergyInsight]:
    insights: list[SynergyInsight] = []

    if qb_stacks:
        best = qb_stacks[0]
        insights.append(
            SynergyInsight(
                type="stack",
                priority=NarrativePriority.HIGH,
                title="Stack Attack Strategy",
                summary=f"Your best stack: {best.qb.name} with {best.receivers[0].name}",
                detail=best.narrative,
                actionable=(
                    "Prioritize securing both pieces of your stack",
                    "Consider reaching for the receiver if needed",
                    "Have backup stacks identified",
                ),
            )
        )

    heavy = [s for s in team_stacks if len(s.players) >= 3]
    if heavy:
        riskiest = heavy[0]
        insights.append(
            SynergyInsight(
                type="concentration",
                priority=NarrativePriority.HIGH if riskiest.risk == "high" else NarrativePriority.MEDIUM,
                title="Team Concentration Risk",
                summary=f"You have {len(riskiest.players)} {riskiest.team} players targeted",
                detail=f"This concentration in {riskiest.team} could boom or bust your season. {riskiest.narrative}",
                actionable=(
                    "Consider diversifying if this wasn't intentional",
                    "If intentional, own it and grab the whole offense",
                    "Have a plan B if the offense disappoints",
                ),
            )
        )

    risky = [h for h in handcuffs if h.strategy == "risky"]
    if risky:
        insights.append(
            SynergyInsight(
                type="handcuff",
                priority=NarrativePriority.MEDIUM,
                title="Handcuff Alert",
                summary=f"You're exposed with {len(risky)} unhandcuffed RBs",
                detail=". ".join(h.narrative for h in risky),
                actionable=tuple(f"Consider {h.backup.name} as insurance for {h.starter.name}" for h in risky),
            )
        )

    if bye_weeks.risk != "low":
        insights.append(
            SynergyInsight(
                type="schedule",
                priority=NarrativePriority.HIGH if bye_weeks.risk == "high" else NarrativePriority.MEDIUM,
                title="Bye Week Bottleneck",
                summary=bye_weeks.narrative,
                detail=f"You'll need to navigate {len(bye_weeks.clusters)} difficult bye weeks",
                actionable=(
                    bye_weeks.recommendation,
                    "Target players with different bye weeks",
                    "Plan your waiver strategy around these weeks",
                ),
            )
        )
    return insights
