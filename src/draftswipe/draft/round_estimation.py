from __future__ import annotations

import dataclasses
import logging
import math
from collections import defaultdict
from typing import TYPE_CHECKING

from draftswipe.draft.tables import (
    DEFAULT_PLAN_SETTINGS,
    ELITE_ROUND_PINS,
    FIRST_ROUND_RANKS,
    ROUND_PATTERNS,
    UNKNOWN_POSITION_ROUND,
    UNMATCHED_RANK_ROUND,
    DraftPlanSettings,
    RoundPattern,
)
from draftswipe.numbers import round_half_up_int

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from draftswipe.domain.player import PlayerRecord

logger = logging.getLogger(__name__)


def position_ranks(roster: Iterable[PlayerRecord]) -> dict[str, int]:
    """1-based rank of every player within their position by fantasy points."""
    by_position: dict[str, list[PlayerRecord]] = defaultdict(list)
    for p in roster:
        by_position[p.position].append(p)
    ranks: dict[str, int] = {}
    for players in by_position.values():
        for rank, p in enumerate(sorted(players, key=lambda p: p.fantasy_pts, reverse=True), start=1):
            ranks.setdefault(p.id, rank)
    return ranks


def round_from_position_rank(
    position: str,
    rank: int,
    patterns: dict[str, tuple[RoundPattern, ...]] = ROUND_PATTERNS,
) -> int:
    first_round_cutoff = FIRST_ROUND_RANKS.get(position)
    if first_round_cutoff is not None and rank <= first_round_cutoff:
        return 1
    position_patterns = patterns.get(position)
    if position_patterns is None:
        return UNKNOWN_POSITION_ROUND
    for pattern in position_patterns:
        if rank <= pattern.max_rank:
            return round_half_up_int((pattern.first_round + pattern.last_round) / 2)
    return UNMATCHED_RANK_ROUND


def _rank_for(player: PlayerRecord, ranks: dict[str, int], roster: Sequence[PlayerRecord]) -> int:
    rank = ranks.get(player.id)
    if rank is not None:
        return rank
    # Not part of the roster: place it by how many same-position players outscore it.
    better = sum(1 for p in roster if p.position == player.position and p.fantasy_pts > player.fantasy_pts)
    return better + 1


def _pinned_round(player: PlayerRecord) -> int | None:
    for position, min_points, round_number in ELITE_ROUND_PINS:
        if player.position == position and player.fantasy_pts >= min_points:
            return round_number
    return None


def estimate_round(
    player: PlayerRecord,
    roster: Sequence[PlayerRecord],
    league_size: int,
    *,
    unrated_elite: bool = False,
    ranks: dict[str, int] | None = None,
    settings: DraftPlanSettings = DEFAULT_PLAN_SETTINGS,
) -> int:
    """Estimate the round a player is drafted in.

    Unrated elites are pinned to the rounds their point totals command.
    Otherwise ADP wins, then overall rank, then the position-rank table.
    Players above the elite points clamp never land after the clamp round.
    """
    if ranks is None:
        ranks = position_ranks(roster)

    estimated: int | None = _pinned_round(player) if unrated_elite else None
    if estimated is None:
        if not unrated_elite and player.adp is not None and player.adp > 0:
            estimated = math.ceil(player.adp / league_size)
        elif not unrated_elite and player.overall_rank is not None and player.overall_rank > 0:
            estimated = math.ceil(player.overall_rank / league_size)
        else:
            estimated = round_from_position_rank(player.position, _rank_for(player, ranks, roster))

    if player.fantasy_pts > settings.elite_points_clamp and estimated > settings.elite_clamp_round:
        logger.debug("Moving %s from round %d to %d", player.name, estimated, settings.elite_clamp_round)
        estimated = settings.elite_clamp_round
    return estimated


def estimate_rounds(
    players: Iterable[PlayerRecord],
    roster: Sequence[PlayerRecord],
    league_size: int,
    *,
    unrated_elite_ids: frozenset[str] = frozenset(),
    settings: DraftPlanSettings = DEFAULT_PLAN_SETTINGS,
) -> list[PlayerRecord]:
    """Return copies of ``players`` with ``estimated_round`` filled in."""
    ranks = position_ranks(roster)
    return [
        dataclasses.replace(
            p,
            estimated_round=estimate_round(
                p,
                roster,
                league_size,
                unrated_elite=p.id in unrated_elite_ids,
                ranks=ranks,
                settings=settings,
            ),
        )
        for p in players
    ]
