from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap


@dataclass(frozen=True)
class RatingCounts:
    love: int = 0
    like: int = 0
    meh: int = 0
    passed: int = 0

    @property
    def total(self) -> int:
        return self.love + self.like + self.meh + self.passed


@dataclass(frozen=True)
class RatingDistribution:
    """Percentages of rated players per rating; unrounded so they sum to 100."""

    love: float = 0.0
    like: float = 0.0
    meh: float = 0.0
    passed: float = 0.0

    @classmethod
    def from_counts(cls, counts: RatingCounts) -> RatingDistribution:
        total = counts.total
        if total == 0:
            return cls()
        return cls(
            love=counts.love / total * 100,
            like=counts.like / total * 100,
            meh=counts.meh / total * 100,
            passed=counts.passed / total * 100,
        )

    def formatted(self) -> dict[str, str]:
        return {
            "love": f"{self.love:.1f}",
            "like": f"{self.like:.1f}",
            "meh": f"{self.meh:.1f}",
            "pass": f"{self.passed:.1f}",
        }


@dataclass(frozen=True)
class ValueMetrics:
    low_value: tuple[PlayerRecord, ...] = ()
    high_value: tuple[PlayerRecord, ...] = ()
    loved: tuple[PlayerRecord, ...] = ()


@dataclass(frozen=True)
class PreferenceStats:
    position: str | None
    ratings: RatingCounts
    distribution: RatingDistribution
    liked_by_position: dict[str, tuple[PlayerRecord, ...]]
    elite_targets: dict[str, int]
    value_metrics: ValueMetrics
    sleepers: tuple[PlayerRecord, ...]
    rookie_love: int = 0

    @property
    def total_rated(self) -> int:
        return self.ratings.total


ArchetypePredicate: TypeAlias = "Callable[[PreferenceStats, Sequence[PlayerRecord], PreferenceMap], bool]"


@dataclass(frozen=True)
class GMArchetype:
    key: str
    name: str
    icon: str
    description: str
    predicate: ArchetypePredicate = field(repr=False, compare=False)

    def matches(self, stats: PreferenceStats, roster: Sequence[PlayerRecord], prefs: PreferenceMap) -> bool:
        return self.predicate(stats, roster, prefs)


class NarrativeType(StrEnum):
    PERSONALITY = "personality"
    STRATEGY = "strategy"
    POSITION = "position"
    CONTRARIAN = "contrarian"
    RISK = "risk"
    SUMMARY = "summary"
    TARGETS = "targets"
    VALUE = "value"


class NarrativePriority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Narrative:
    type: NarrativeType
    priority: NarrativePriority
    title: str
    icon: str
    summary: str
    full_text: str
    actionable: tuple[str, ...] = ()
    related_players: tuple[PlayerRecord, ...] = ()


@dataclass(frozen=True)
class PreferenceAnalysis:
    stats: PreferenceStats
    archetype: GMArchetype
    narratives: tuple[Narrative, ...]
