from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from draftswipe.ingest.column_maps import has_identity, normalize_row
from draftswipe.numbers import round_half_up, round_half_up_int
from draftswipe.valuation.models import ValuationConfig
from draftswipe.valuation.replacement import replacement_levels
from draftswipe.valuation.scoring import fantasy_points

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from draftswipe.domain.player import PlayerRecord

logger = logging.getLogger(__name__)

AUCTION_FLOOR = 1


def _unique_id(player_id: str, index: int, seen: set[str]) -> str:
    if player_id not in seen:
        return player_id
    unique = f"{player_id}-{index}"
    attempt = 2
    while unique in seen:
        unique = f"{player_id}-{index}-{attempt}"
        attempt += 1
    logger.debug("Duplicate player id %r; using %r", player_id, unique)
    return unique


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[PlayerRecord]:
    """Normalize raw rows, dropping those without a name or position."""
    records: list[PlayerRecord] = []
    seen: set[str] = set()
    skipped = 0
    for index, row in enumerate(rows):
        if not has_identity(row):
            skipped += 1
            continue
        record = normalize_row(row, index)
        player_id = _unique_id(record.id, index, seen)
        seen.add(player_id)
        if player_id != record.id:
            record = dataclasses.replace(record, id=player_id)
        records.append(record)
    if skipped:
        logger.debug("Skipped %d rows missing a player name or position", skipped)
    return records


def auction_values(vorps: list[float], pool: float) -> list[int]:
    """Split the auction pool across positive-VORP players in proportion to VORP."""
    total_positive = sum(v for v in vorps if v > 0) or 1
    return [round_half_up_int(v / total_positive * pool) if v > 0 else AUCTION_FLOOR for v in vorps]


def valuate(rows: Iterable[Mapping[str, Any]], config: ValuationConfig | None = None) -> list[PlayerRecord]:
    """Derive fantasy points, VORP and auction dollars for every usable roster row.

    Args:
        rows: Raw roster rows with any of the tolerated header spellings.
        config: Scoring format, league size and auction budget. Defaults to a
            12-team PPR league with $200 budgets.

    Returns:
        New PlayerRecords in input order. All derived values come from one
        scoring ruleset and one set of replacement baselines.
    """
    if config is None:
        config = ValuationConfig()

    rules = config.scoring_rules
    scored = [dataclasses.replace(p, fantasy_pts=fantasy_points(p.raw_stats, rules)) for p in normalize_rows(rows)]
    if not scored:
        return []

    levels = replacement_levels(scored, config.league_size, config.replacement_slots)
    vorps = [round_half_up(p.fantasy_pts - levels[p.position].baseline, 2) for p in scored]
    dollars = auction_values(vorps, config.auction_pool)

    valuated = [
        dataclasses.replace(p, vorp=vorp, auction=auction)
        for p, vorp, auction in zip(scored, vorps, dollars, strict=True)
    ]
    logger.debug("Valuated %d players (%s, %d teams)", len(valuated), config.format, config.league_size)
    return valuated
