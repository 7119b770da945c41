from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from draftswipe.domain.auction import AuctionPlan, BidTarget, Nomination
from draftswipe.domain.preferences import is_passed
from draftswipe.domain.tier import TierPriority
from draftswipe.draft.strategy_presets import slot_weight
from draftswipe.numbers import round_half_up_int

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from draftswipe.domain.auction import AuctionStrategy
    from draftswipe.domain.preferences import PreferenceMap
    from draftswipe.domain.tier import Tier

logger = logging.getLogger(__name__)

BENCH_RESERVE = 20
TARGET_PRICE_TOLERANCE = 1.2
MAX_BID_MARKUP = 1.1
EXPENSIVE_FADE_PRICE = 30
MAX_NOMINATIONS = 10


def generate_auction_strategy(
    tiers: Mapping[str, Sequence[Tier]],
    prefs: PreferenceMap,
    budget: int = 200,
    preset: AuctionStrategy | None = None,
) -> AuctionPlan:
    """Split an auction budget across positions and pick bid targets and nominations.

    Positions earn budget from the tiers holding liked players, weighted
    toward the top tiers. The allocation is scaled so every position
    together spends ``budget`` less a bench reserve.
    """
    allocation: dict[str, int] = {}
    targets: list[BidTarget] = []
    for position, position_tiers in tiers.items():
        position_budget = 0.0
        for index, tier in enumerate(position_tiers):
            if not tier.liked_players:
                continue
            avg_price = tier.price_range.avg
            for player in tier.liked_players:
                if player.auction <= avg_price * TARGET_PRICE_TOLERANCE:
                    targets.append(
                        BidTarget(
                            player=player,
                            max_bid=math.ceil(avg_price * MAX_BID_MARKUP),
                            reason=f"Good value in {tier.quality} tier",
                        )
                    )
            tier_multiplier = max(1, 5 - index)
            position_budget += avg_price * min(len(tier.liked_players), 2) * tier_multiplier / 5
        if preset is not None:
            position_budget *= slot_weight(preset, position)
        allocation[position] = round_half_up_int(position_budget)

    total = sum(allocation.values())
    multiplier = (budget - BENCH_RESERVE) / total if total else 0.0
    allocation = {position: round_half_up_int(amount * multiplier) for position, amount in allocation.items()}
    logger.debug("Auction allocation for $%d: %s", budget, allocation)

    return AuctionPlan(
        budget=budget,
        budget_allocation=allocation,
        target_values=tuple(targets),
        nominations=tuple(nomination_plan(tiers, prefs)),
        strategy=preset,
    )


def nomination_plan(tiers: Mapping[str, Sequence[Tier]], prefs: PreferenceMap) -> list[Nomination]:
    """Players worth nominating: expensive fades first, then tier-break decisions."""
    nominations: list[Nomination] = []
    for position_tiers in tiers.values():
        if not position_tiers:
            continue
        for player in position_tiers[0].players:
            if is_passed(prefs, player.id) and player.auction > EXPENSIVE_FADE_PRICE:
                nominations.append(
                    Nomination(
                        player=player,
                        reason="Expensive player you fade - drain budgets",
                        priority=TierPriority.HIGH,
                    )
                )

    for position_tiers in tiers.values():
        for tier in position_tiers:
            # is_chasm marks the drop after a tier, so its last player sits right above the break.
            if not tier.is_chasm:
                continue
            last = tier.players[-1]
            if prefs.get(last.id, 0) <= 0:
                nominations.append(
                    Nomination(player=last, reason="Force decision on tier break", priority=TierPriority.MEDIUM)
                )
    return nominations[:MAX_NOMINATIONS]
