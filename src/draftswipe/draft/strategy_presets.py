from pathlib import Path

import yaml

from draftswipe.domain.auction import AuctionStrategy, NominationRules

# Relative spend per roster slot; 1.0 is a neutral starter.
BASE_SLOT_WEIGHTS: dict[str, float] = {
    "QB": 1,
    "RB1": 1,
    "RB2": 1,
    "WR1": 1,
    "WR2": 1,
    "WR3": 1,
    "TE": 1,
    "FLEX": 1,
    "DST": 0.5,
    "K": 0.5,
}

# Roster slots each position's budget is drawn from.
POSITION_SLOTS: dict[str, tuple[str, ...]] = {
    "QB": ("QB",),
    "RB": ("RB1", "RB2"),
    "WR": ("WR1", "WR2", "WR3"),
    "TE": ("TE",),
    "K": ("K",),
    "DST": ("DST",),
}

STRATEGY_PRESETS: dict[str, AuctionStrategy] = {
    "stars_and_scrubs": AuctionStrategy(
        name="stars_and_scrubs",
        label="Stars & Scrubs",
        slot_weights={**BASE_SLOT_WEIGHTS, "RB1": 3, "WR1": 3, "FLEX": 2, "QB": 0.7, "RB2": 0.8, "WR3": 0.6, "TE": 0.7},
        nomination_rules=NominationRules(
            early="Toss out elite names you do not want to drain budgets",
            mid="Nominate tier-break WR/RB you do want at price-enforcing times",
            late="Sprinkle $1 rookies and handcuffs you like before the money is gone",
        ),
    ),
    "balanced": AuctionStrategy(
        name="balanced",
        label="Balanced Roster",
        slot_weights={
            **BASE_SLOT_WEIGHTS,
            "QB": 1.2,
            "RB1": 2.2,
            "RB2": 1.8,
            "WR1": 2.0,
            "WR2": 1.6,
            "WR3": 1.4,
            "TE": 1.2,
            "FLEX": 1.4,
        },
        nomination_rules=NominationRules(
            early="Nominate 2nd-tier studs at your target slots and let the elites go crazy",
            mid="Nominate boring vets you dislike to eat others' dollars",
            late="Attack undervalued tiers that slipped",
        ),
    ),
    "value_hunter": AuctionStrategy(
        name="value_hunter",
        label="Value Hunter",
        slot_weights={
            **BASE_SLOT_WEIGHTS,
            "QB": 0.8,
            "RB1": 1.5,
            "RB2": 1.5,
            "WR1": 1.5,
            "WR2": 1.5,
            "WR3": 1.5,
            "TE": 0.9,
            "FLEX": 1.2,
        },
        nomination_rules=NominationRules(
            early="Throw out shiny rookies and breakout hype so the room overpays",
            mid="Sit back, sprinkle $1 nominations and keep your bankroll intact",
            late="Pounce on your liked names once the average team bankroll is under $40",
        ),
    ),
}


def load_strategy_file(path: Path) -> AuctionStrategy:
    """Load a custom auction strategy from YAML.

    Expected shape::

        name: my_plan
        label: My Plan
        slot_weights: {RB1: 2.5, WR1: 2.0}
        nomination_rules: {early: ..., mid: ..., late: ...}

    Slots the file leaves out keep their base weight.
    """
    data = yaml.safe_load(path.read_text())
    if not isinstance(data, dict):
        msg = f"Strategy file {path} must contain a mapping"
        raise ValueError(msg)

    weights_raw = data.get("slot_weights") or {}
    if not isinstance(weights_raw, dict):
        msg = f"slot_weights in {path} must be a mapping"
        raise ValueError(msg)
    weights = dict(BASE_SLOT_WEIGHTS)
    for slot, weight in weights_raw.items():
        try:
            weights[str(slot)] = float(weight)
        except (TypeError, ValueError) as e:
            msg = f"slot weight for {slot} in {path} must be a number"
            raise ValueError(msg) from e

    rules_raw = data.get("nomination_rules") or {}
    if not isinstance(rules_raw, dict):
        msg = f"nomination_rules in {path} must be a mapping"
        raise ValueError(msg)
    name = str(data.get("name", path.stem))
    return AuctionStrategy(
        name=name,
        label=str(data.get("label", name)),
        slot_weights=weights,
        nomination_rules=NominationRules(
            early=str(rules_raw.get("early", "")),
            mid=str(rules_raw.get("mid", "")),
            late=str(rules_raw.get("late", "")),
        ),
    )


def slot_weight(strategy: AuctionStrategy, position: str) -> float:
    """Mean weight of the roster slots a position fills."""
    slots = POSITION_SLOTS.get(position, ())
    if not slots:
        return 1.0
    return sum(strategy.slot_weights.get(slot, 1.0) for slot in slots) / len(slots)
