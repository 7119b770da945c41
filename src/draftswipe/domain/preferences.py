from collections.abc import Mapping
from enum import IntEnum
from typing import TypeAlias

PreferenceMap: TypeAlias = Mapping[str, int]


class Rating(IntEnum):
    PASS = -1
    MEH = 0
    LIKE = 1
    LOVE = 2


VALID_RATINGS: frozenset[int] = frozenset(int(r) for r in Rating)


def rating_of(prefs: PreferenceMap, player_id: str) -> int | None:
    """Return the user's rating for a player, or None when unrated."""
    return prefs.get(player_id)


def is_rated(prefs: PreferenceMap, player_id: str) -> bool:
    return player_id in prefs


def is_liked(prefs: PreferenceMap, player_id: str) -> bool:
    rating = prefs.get(player_id)
    return rating is not None and rating >= Rating.LIKE


def is_loved(prefs: PreferenceMap, player_id: str) -> bool:
    return prefs.get(player_id) == Rating.LOVE


def is_passed(prefs: PreferenceMap, player_id: str) -> bool:
    return prefs.get(player_id) == Rating.PASS
