"""Read a user's preference map from a dump of the client's key-value storage.

The client writes ratings under a versioned storage key. A document written
by an older client (a different key), an entry in the wrong shape, or a file
that is not JSON at all yields an empty preference map rather than an error,
so a stale store degrades to "nothing rated".
"""

import json
import logging
from pathlib import Path
from typing import Any

from draftswipe.domain.preferences import VALID_RATINGS

logger = logging.getLogger(__name__)

PREFERENCES_STORAGE_KEY = "draftswipe_prefs_v3_4direction"


def _coerce_rating(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    elif isinstance(value, str):
        try:
            rating = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return rating if rating in VALID_RATINGS else None


def parse_preferences(document: Any, storage_key: str = PREFERENCES_STORAGE_KEY) -> dict[str, int]:
    """Extract the preference map stored under ``storage_key``.

    The stored value may be the map itself or its JSON-encoded string, the way
    browser storage keeps it. Entries with ratings outside {-1, 0, 1, 2} are
    dropped.
    """
    if not isinstance(document, dict) or storage_key not in document:
        logger.warning("No preferences stored under %r; treating every player as unrated", storage_key)
        return {}

    stored = document[storage_key]
    if isinstance(stored, str):
        try:
            stored = json.loads(stored)
        except json.JSONDecodeError:
            logger.warning("Preferences under %r are not valid JSON; ignoring them", storage_key)
            return {}
    if not isinstance(stored, dict):
        logger.warning("Preferences under %r have an incompatible shape; ignoring them", storage_key)
        return {}

    prefs: dict[str, int] = {}
    dropped = 0
    for player_id, value in stored.items():
        rating = _coerce_rating(value)
        if rating is None:
            dropped += 1
            continue
        prefs[str(player_id)] = rating
    if dropped:
        logger.debug("Dropped %d preference entries with unknown ratings", dropped)
    logger.debug("Loaded %d preferences", len(prefs))
    return prefs


def load_preferences(path: str | Path, storage_key: str = PREFERENCES_STORAGE_KEY) -> dict[str, int]:
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read preferences from %s: %s", path, exc)
        return {}
    return parse_preferences(document, storage_key)
