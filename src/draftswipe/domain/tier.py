from dataclasses import dataclass
from enum import StrEnum

from draftswipe.domain.player import PlayerRecord


class TierPriority(StrEnum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class TierStats:
    avg_vorp: float
    avg_points: float
    min_vorp: float
    max_vorp: float
    min_points: float
    max_points: float


@dataclass(frozen=True)
class PriceRange:
    min: int
    avg: float
    max: int


@dataclass(frozen=True)
class TierRecommendation:
    priority: TierPriority
    strategy: str
    timing: str


@dataclass(frozen=True)
class Tier:
    position: str
    tier_number: int
    quality: str
    players: tuple[PlayerRecord, ...]
    liked_players: tuple[PlayerRecord, ...]
    loved_players: tuple[PlayerRecord, ...]
    stats: TierStats
    price_range: PriceRange
    recommendation: TierRecommendation
    vorp_drop_to_next: float = 0.0
    is_chasm: bool = False

    def contains(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)


@dataclass(frozen=True)
class CriticalDecision:
    position: str
    tier_number: int
    message: str
    players: tuple[PlayerRecord, ...]
    urgency: TierPriority


@dataclass(frozen=True)
class PositionScarcity:
    position: str
    top_tier_count: int
    total_liked: int
    major_dropoffs: int
    scarcity_score: float
    priority: str  # SKIP_EARLY, HIGH_PRIORITY or NORMAL


@dataclass(frozen=True)
class TierTransitions:
    critical_decisions: tuple[CriticalDecision, ...]
    position_priority: tuple[PositionScarcity, ...]
