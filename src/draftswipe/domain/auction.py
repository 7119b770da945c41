from dataclasses import dataclass

from draftswipe.domain.player import PlayerRecord


@dataclass(frozen=True)
class NominationRules:
    early: str
    mid: str
    late: str


@dataclass(frozen=True)
class AuctionStrategy:
    name: str
    label: str
    slot_weights: dict[str, float]
    nomination_rules: NominationRules


@dataclass(frozen=True)
class BidTarget:
    player: PlayerRecord
    max_bid: int
    reason: str


@dataclass(frozen=True)
class Nomination:
    player: PlayerRecord
    reason: str
    priority: str


@dataclass(frozen=True)
class AuctionPlan:
    budget: int
    budget_allocation: dict[str, int]
    target_values: tuple[BidTarget, ...]
    nominations: tuple[Nomination, ...]
    strategy: AuctionStrategy | None = None
