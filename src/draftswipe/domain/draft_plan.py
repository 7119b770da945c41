from dataclasses import dataclass

from draftswipe.domain.player import PlayerRecord


@dataclass(frozen=True)
class TierContext:
    tier_number: int
    is_last_in_tier: bool = False
    is_chasm: bool = False


NEUTRAL_TIER_CONTEXT = TierContext(tier_number=99)


@dataclass(frozen=True)
class Recommendation:
    position: str
    reason: str
    targets: tuple[PlayerRecord, ...]
    priority: int


@dataclass(frozen=True)
class RoundTarget:
    round: int
    pick_number: int
    strategy: str
    context: str
    recommendations: tuple[Recommendation, ...]

    @property
    def primary(self) -> Recommendation | None:
        return self.recommendations[0] if self.recommendations else None


@dataclass(frozen=True)
class DraftSettings:
    league_size: int = 12
    draft_slot: int = 6
    min_targets: int = 60
