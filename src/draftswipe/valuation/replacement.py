from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from draftswipe.numbers import round_half_up_int
from draftswipe.valuation.models import BASE_LEAGUE_SIZE, BASE_REPLACEMENT_SLOTS, ReplacementLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from draftswipe.domain.player import PlayerRecord

logger = logging.getLogger(__name__)


def replacement_index(
    position: str,
    league_size: int,
    pool_size: int,
    base_slots: Mapping[str, int] = BASE_REPLACEMENT_SLOTS,
) -> int:
    """Zero-based index of the replacement-level player at a position.

    Positions with base slots scale them by league size; any other position
    (kickers, defenses) uses the last player in its pool.
    """
    if position in base_slots:
        return round_half_up_int(base_slots[position] / BASE_LEAGUE_SIZE * league_size)
    return pool_size - 1


def compute_replacement_levels(
    points_by_position: Mapping[str, Iterable[float]],
    league_size: int,
    base_slots: Mapping[str, int] = BASE_REPLACEMENT_SLOTS,
) -> dict[str, ReplacementLevel]:
    levels: dict[str, ReplacementLevel] = {}
    for position, points in points_by_position.items():
        ranked = sorted(points, reverse=True)
        index = replacement_index(position, league_size, len(ranked), base_slots)
        baseline = ranked[index] if 0 <= index < len(ranked) else 0.0
        levels[position] = ReplacementLevel(position=position, replacement_index=index, baseline=baseline)
        logger.debug("Replacement level %s: index=%d baseline=%.2f", position, index, baseline)
    return levels


def replacement_levels(
    players: Iterable[PlayerRecord],
    league_size: int,
    base_slots: Mapping[str, int] = BASE_REPLACEMENT_SLOTS,
) -> dict[str, ReplacementLevel]:
    points_by_position: dict[str, list[float]] = defaultdict(list)
    for p in players:
        points_by_position[p.position].append(p.fantasy_pts)
    return compute_replacement_levels(points_by_position, league_size, base_slots)
