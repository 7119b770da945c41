from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ScoringFormat(StrEnum):
    STANDARD = "std"
    HALF_PPR = "half"
    PPR = "ppr"


RECEPTION_CREDIT: dict[ScoringFormat, float] = {
    ScoringFormat.STANDARD: 0.0,
    ScoringFormat.HALF_PPR: 0.5,
    ScoringFormat.PPR: 1.0,
}


@dataclass(frozen=True)
class ScoringRules:
    """Points per unit of each raw stat. Yardage is expressed as points per yard."""

    pass_yds: float = 1 / 25
    pass_td: float = 4.0
    pass_int: float = -2.0
    rush_yds: float = 1 / 10
    rush_td: float = 6.0
    receptions: float = 1.0
    rec_yds: float = 1 / 10
    rec_td: float = 6.0
    fumbles_lost: float = -2.0

    @classmethod
    def for_format(cls, scoring_format: ScoringFormat) -> ScoringRules:
        return cls(receptions=RECEPTION_CREDIT[scoring_format])

    def weights(self) -> dict[str, float]:
        return {
            "pass_yds": self.pass_yds,
            "pass_td": self.pass_td,
            "pass_int": self.pass_int,
            "rush_yds": self.rush_yds,
            "rush_td": self.rush_td,
            "receptions": self.receptions,
            "rec_yds": self.rec_yds,
            "rec_td": self.rec_td,
            "fumbles_lost": self.fumbles_lost,
        }


# Replacement slots per position for a 12-team league (QB1, RB2.5, WR3.5, TE1).
BASE_REPLACEMENT_SLOTS: dict[str, int] = {"QB": 12, "RB": 30, "WR": 40, "TE": 12}
BASE_LEAGUE_SIZE = 12


@dataclass(frozen=True)
class ValuationConfig:
    format: ScoringFormat = ScoringFormat.PPR
    league_size: int = 12
    budget_per_team: int = 200
    pool_fraction: float = 0.7
    replacement_slots: dict[str, int] = field(default_factory=lambda: dict(BASE_REPLACEMENT_SLOTS))

    @property
    def scoring_rules(self) -> ScoringRules:
        return ScoringRules.for_format(self.format)

    @property
    def auction_pool(self) -> float:
        return self.league_size * self.budget_per_team * self.pool_fraction


@dataclass(frozen=True)
class ReplacementLevel:
    position: str
    replacement_index: int
    baseline: float
