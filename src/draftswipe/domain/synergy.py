from dataclasses import dataclass

from draftswipe.domain.analysis import NarrativePriority
from draftswipe.domain.player import PlayerRecord


@dataclass(frozen=True)
class QBStack:
    qb: PlayerRecord
    receivers: tuple[PlayerRecord, ...]
    team: str
    total_rating: int
    strength: float
    narrative: str


@dataclass(frozen=True)
class TeamStack:
    team: str
    players: tuple[PlayerRecord, ...]
    positions: tuple[str, ...]
    total_projected_points: float
    stack_type: str  # passing-game, backfield or mixed
    narrative: str
    risk: str


@dataclass(frozen=True)
class Handcuff:
    starter: PlayerRecord
    backup: PlayerRecord
    team: str
    starter_rating: int
    backup_rating: int | None
    strategy: str  # secured, risky or unaware
    narrative: str


@dataclass(frozen=True)
class ByeWeekCluster:
    week: int
    players: tuple[PlayerRecord, ...]
    severity: str
    positions: tuple[str, ...]


@dataclass(frozen=True)
class ByeWeekAnalysis:
    clusters: tuple[ByeWeekCluster, ...]
    risk: str
    narrative: str
    recommendation: str


@dataclass(frozen=True)
class DivisionalStack:
    division: str
    players: tuple[PlayerRecord, ...]
    teams: tuple[str, ...]
    narrative: str
    risk: str


@dataclass(frozen=True)
class SynergyInsight:
    type: str
    priority: NarrativePriority
    title: str
    summary: str
    detail: str
    actionable: tuple[str, ...] = ()


@dataclass(frozen=True)
class SynergyReport:
    qb_stacks: tuple[QBStack, ...]
    team_stacks: tuple[TeamStack, ...]
    handcuffs: tuple[Handcuff, ...]
    bye_weeks: ByeWeekAnalysis
    divisional_stacks: tuple[DivisionalStack, ...]
    insights: tuple[SynergyInsight, ...]
