"""Reference tables for tiering and draft planning.

Every threshold the tier builder and round planner use lives here, so a
different league context can swap in its own values.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TierRules:
    cliff: float
    max_size: int
    natural_breaks: frozenset[int]
    qualities: tuple[str, ...]

    @property
    def chasm(self) -> float:
        return self.cliff * CHASM_FACTOR


BASEMENT_VORP = -10.0
MIN_TIER_SIZE = 3
CHASM_FACTOR = 1.5

TIER_RULES: dict[str, TierRules] = {
    "QB": TierRules(
        cliff=15,
        max_size=7,
        natural_breaks=frozenset({6, 12, 18}),
        qualities=("Elite", "High QB1", "Low QB1", "QB2", "Streaming", "Deep"),
    ),
    "RB": TierRules(
        cliff=14,
        max_size=12,
        natural_breaks=frozenset({8, 16, 24, 36}),
        qualities=("Elite", "RB1", "High RB2", "Low RB2", "Flex", "Depth", "Handcuff"),
    ),
    "WR": TierRules(
        cliff=13,
        max_size=15,
        natural_breaks=frozenset({12, 24, 36, 48}),
        qualities=("Elite", "WR1", "High WR2", "Low WR2", "Flex", "Depth", "Deep"),
    ),
    "TE": TierRules(
        cliff=10,
        max_size=7,
        natural_breaks=frozenset({4, 8, 12, 18}),
        qualities=("Elite", "TE1", "Low TE1", "Streaming", "Dart Throw"),
    ),
}


@dataclass(frozen=True)
class RoundPattern:
    max_rank: int
    first_round: int
    last_round: int


# Position rank -> typical draft rounds, from ADP history.
ROUND_PATTERNS: dict[str, tuple[RoundPattern, ...]] = {
    "QB": (
        RoundPattern(1, 3, 4),
        RoundPattern(3, 4, 6),
        RoundPattern(6, 6, 8),
        RoundPattern(12, 8, 11),
        RoundPattern(20, 11, 14),
        RoundPattern(99, 14, 16),
    ),
    "RB": (
        RoundPattern(5, 1, 1),
        RoundPattern(10, 1, 2),
        RoundPattern(15, 2, 3),
        RoundPattern(24, 3, 4),
        RoundPattern(36, 5, 7),
        RoundPattern(48, 8, 10),
        RoundPattern(99, 11, 16),
    ),
    "WR": (
        RoundPattern(5, 1, 1),
        RoundPattern(12, 2, 3),
        RoundPattern(20, 3, 4),
        RoundPattern(30, 4, 6),
        RoundPattern(40, 6, 8),
        RoundPattern(60, 8, 11),
        RoundPattern(99, 11, 16),
    ),
    "TE": (
        RoundPattern(2, 2, 3),
        RoundPattern(5, 4, 6),
        RoundPattern(10, 6, 8),
        RoundPattern(15, 8, 11),
        RoundPattern(99, 12, 16),
    ),
}

# Position ranks that always go in round one.
FIRST_ROUND_RANKS: dict[str, int] = {"WR": 3, "RB": 5}
UNKNOWN_POSITION_ROUND = 10
UNMATCHED_RANK_ROUND = 12

# Unrated players at or above these totals are planned for anyway.
ELITE_UNRATED_CUTOFFS: dict[str, float] = {"WR": 200, "RB": 200, "QB": 280, "TE": 150}

# (position, minimum points, round) pins for unrated elites, checked in order.
ELITE_ROUND_PINS: tuple[tuple[str, float, int], ...] = (
    ("WR", 240, 1),
    ("WR", 200, 2),
    ("RB", 250, 1),
    ("RB", 200, 2),
)

# Points that make a player available in the strategy text's "elite" sense.
ELITE_STRATEGY_THRESHOLDS: dict[str, float] = {"QB": 250, "RB": 220, "WR": 200, "TE": 150}

ROSTER_NEEDS: dict[str, int] = {"QB": 1, "RB": 2, "WR": 3, "TE": 1, "FLEX": 2, "BENCH": 6}


def positional_need(position: str, roster_needs: dict[str, int] = ROSTER_NEEDS) -> int:
    """Starters wanted at a position, with FLEX split between RB and WR."""
    flex = roster_needs.get("FLEX", 0)
    match position:
        case "QB" | "TE":
            return roster_needs.get(position, 0)
        case "RB":
            return roster_needs.get("RB", 0) + flex // 2
        case "WR":
            return roster_needs.get("WR", 0) + (flex + 1) // 2
        case _:
            return 0


@dataclass(frozen=True)
class ScarcityWindow:
    first_round: int
    last_round: int
    in_window: int
    outside: int

    def bonus(self, round_number: int) -> int:
        return self.in_window if self.first_round <= round_number <= self.last_round else self.outside


ROUND_SCARCITY: dict[str, ScarcityWindow] = {
    "RB": ScarcityWindow(1, 6, 25, 10),
    "WR": ScarcityWindow(1, 8, 20, 10),
    "TE": ScarcityWindow(3, 7, 30, 5),
    "QB": ScarcityWindow(5, 9, 25, 5),
}


@dataclass(frozen=True)
class DraftPlanSettings:
    rounds: int = 16
    min_targets: int = 60
    limited_targets: int = 30
    candidate_window: int = 1
    targets_per_position: int = 3
    recommendations_per_round: int = 4
    elite_points_clamp: float = 250
    elite_clamp_round: int = 2
    preference_weight: float = 100
    adp_value_weight: float = 20
    need_bonus: float = 30
    early_elite_bonus: float = 40
    early_elite_last_round: int = 6
    early_elite_points: float = 200
    wait_penalty: float = 50
    reach_penalty: float = 10
    roster_needs: dict[str, int] = field(default_factory=lambda: dict(ROSTER_NEEDS))


DEFAULT_PLAN_SETTINGS = DraftPlanSettings()
