from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from draftswipe.domain.analysis import (
    PreferenceAnalysis,
    PreferenceStats,
    RatingCounts,
    RatingDistribution,
    ValueMetrics,
)
from draftswipe.domain.player import SKILL_POSITIONS
from draftswipe.domain.preferences import Rating, is_liked, is_loved
from draftswipe.draft.tables import ELITE_UNRATED_CUTOFFS
from draftswipe.numbers import mean
from draftswipe.services.gm_archetypes import match_archetype
from draftswipe.services.narratives import DEFAULT_NARRATIVE_LIMIT, generate_narratives, prioritize_narratives

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap

logger = logging.getLogger(__name__)

LOW_VALUE_MAX_AUCTION = 5
HIGH_VALUE_MIN_AUCTION = 20
SLEEPER_POINTS_SHARE = 0.8
MAX_SLEEPERS = 5


def analyze_preferences(
    players: Iterable[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None = None,
    narrative_limit: int = DEFAULT_NARRATIVE_LIMIT,
) -> PreferenceAnalysis:
    """Summarize a user's ratings, classify them as a GM and explain their tendencies.

    Args:
        players: The valuated roster.
        prefs: The user's ratings.
        position: Restrict the analysis to one position; ``None`` for the
            overall view.
        narrative_limit: Maximum number of narratives returned.
    """
    roster = list(players)
    stats = compute_preference_stats(roster, prefs, position)
    archetype = match_archetype(stats, roster, prefs, position)
    narratives = prioritize_narratives(generate_narratives(stats, roster, prefs, position), narrative_limit)
    logger.debug(
        "Analyzed %d rated players (%s): %s, %d narratives",
        stats.total_rated,
        position or "overall",
        archetype.name,
        len(narratives),
    )
    return PreferenceAnalysis(stats=stats, archetype=archetype, narratives=tuple(narratives))


def compute_preference_stats(
    roster: Sequence[PlayerRecord],
    prefs: PreferenceMap,
    position: str | None = None,
) -> PreferenceStats:
    relevant = [p for p in roster if position is None or p.position == position]
    rated = [p for p in relevant if p.id in prefs]
    counts = RatingCounts(
        love=sum(1 for p in rated if prefs[p.id] == Rating.LOVE),
        like=sum(1 for p in rated if prefs[p.id] == Rating.LIKE),
        meh=sum(1 for p in rated if prefs[p.id] == Rating.MEH),
        passed=sum(1 for p in rated if prefs[p.id] == Rating.PASS),
    )

    liked_by_position = {
        pos: tuple(
            sorted(
                (p for p in relevant if p.position == pos and is_liked(prefs, p.id)),
                key=lambda p: p.fantasy_pts,
                reverse=True,
            )
        )
        for pos in SKILL_POSITIONS
    }
    elite_targets = {
        pos: sum(1 for p in liked if p.fantasy_pts >= ELITE_UNRATED_CUTOFFS[pos])
        for pos, liked in liked_by_position.items()
    }
    liked = [p for p in relevant if is_liked(prefs, p.id)]
    loved = tuple(p for p in relevant if is_loved(prefs, p.id))

    return PreferenceStats(
        position=position,
        ratings=counts,
        distribution=RatingDistribution.from_counts(counts),
        liked_by_position=liked_by_position,
        elite_targets=elite_targets,
        value_metrics=ValueMetrics(
            low_value=tuple(p for p in liked if p.auction <= LOW_VALUE_MAX_AUCTION),
            high_value=tuple(p for p in liked if p.auction >= HIGH_VALUE_MIN_AUCTION),
            loved=loved,
        ),
        sleepers=find_sleepers(rated, loved),
        rookie_love=sum(1 for p in loved if p.rookie),
    )


def find_sleepers(rated: Sequence[PlayerRecord], loved: Sequence[PlayerRecord]) -> tuple[PlayerRecord, ...]:
    """Loved players well below the average rated player at their position."""
    points_by_position: dict[str, list[float]] = defaultdict(list)
    for p in rated:
        points_by_position[p.position].append(p.fantasy_pts)

    sleepers: list[PlayerRecord] = []
    for p in loved:
        points = points_by_position.get(p.position)
        if not points:
            continue
        if p.fantasy_pts < mean(points) * SLEEPER_POINTS_SHARE:
            sleepers.append(p)
    return tuple(sleepers[:MAX_SLEEPERS])
