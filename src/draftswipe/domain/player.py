from dataclasses import dataclass, field
from enum import StrEnum


class Position(StrEnum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DST = "DST"


# Positions that get tiers, round targets and archetypes.
SKILL_POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE")

STAT_FIELDS: tuple[str, ...] = (
    "pass_yds",
    "pass_td",
    "pass_int",
    "rush_yds",
    "rush_td",
    "receptions",
    "rec_yds",
    "rec_td",
    "fumbles_lost",
)


@dataclass(frozen=True)
class PlayerRecord:
    id: str
    name: str
    team: str
    position: str
    rookie: bool = False
    raw_stats: dict[str, float] = field(default_factory=dict)
    fantasy_pts: float = 0.0
    vorp: float = 0.0
    auction: int = 0
    adp: float | None = None
    overall_rank: int | None = None
    experience: int | None = None
    bye_week: int | None = None
    estimated_round: int | None = None

    def stat(self, name: str) -> float:
        return self.raw_stats.get(name, 0.0)
