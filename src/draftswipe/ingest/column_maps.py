import math
import re
from collections.abc import Mapping
from typing import Any

from draftswipe.domain.player import STAT_FIELDS, PlayerRecord

_FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("Player_Name", "Name", "Player"),
    "team": ("Team", "Tm", "NFL_Team"),
    "position": ("Position", "Pos"),
    "rookie": ("Rookie", "Is_Rookie", "Rk"),
    "pass_yds": ("Pass_Yd", "Pass_Yds", "passYds"),
    "pass_td": ("Pass_TD", "passTD"),
    "pass_int": ("Pass_Int", "Interceptions"),
    "rush_yds": ("Rush_Yd", "Rush_Yds", "rushYds"),
    "rush_td": ("Rush_TD", "rushTD"),
    "receptions": ("Rec", "Receptions"),
    "rec_yds": ("Rec_Yd", "Rec_Yds", "recYds"),
    "rec_td": ("Rec_TD", "recTD"),
    "fumbles_lost": ("Fum_Lost", "Fumbles_Lost"),
    "adp": ("ADP", "Avg_Draft_Position"),
    "overall_rank": ("Overall_Rank", "Ovr_Rank", "overallRank"),
    "experience": ("Experience", "Exp", "Years_Exp"),
    "bye_week": ("Bye", "Bye_Week", "byeWeek"),
}

_POSITION_ALIASES: dict[str, str] = {"DEF": "DST", "D/ST": "DST", "D": "DST"}
_TRUE_MARKERS = frozenset({"Y", "YES", "TRUE", "1"})
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def canonical_header(header: str) -> str:
    """Fold a column header so "Pass Yds", "Pass_Yds" and "passYds" compare equal."""
    return re.sub(r"[\s_\-]+", "", header).lower()


def slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def _canonical_row(row: Mapping[str, Any]) -> dict[str, Any]:
    canonical: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        # First occurrence wins when two headers fold to the same key.
        canonical.setdefault(canonical_header(str(key)), value)
    return canonical


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _pick(row: dict[str, Any], field: str) -> Any:
    for synonym in _FIELD_SYNONYMS[field]:
        value = row.get(canonical_header(synonym))
        if not _is_blank(value):
            return value
    return None


def _to_float(value: Any, default: float = 0.0) -> float:
    if _is_blank(value):
        return default
    try:
        result = float(str(value).replace(",", "").strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _to_optional_float(value: Any) -> float | None:
    result = _to_float(value, default=math.nan)
    if math.isnan(result) or result <= 0:
        return None
    return result


def _to_optional_int(value: Any) -> int | None:
    result = _to_float(value, default=math.nan)
    if math.isnan(result):
        return None
    return int(result)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_blank(value):
        return False
    return str(value).strip().upper() in _TRUE_MARKERS


def _to_position(value: Any) -> str:
    if _is_blank(value):
        return ""
    position = str(value).strip().upper()
    return _POSITION_ALIASES.get(position, position)


def has_identity(row: Mapping[str, Any]) -> bool:
    """Whether a raw row carries the name and position a player record needs."""
    canonical = _canonical_row(row)
    return _pick(canonical, "name") is not None and _pick(canonical, "position") is not None


def normalize_row(row: Mapping[str, Any], index: int = 0) -> PlayerRecord:
    """Map one raw roster row onto a PlayerRecord shell.

    Derived values (fantasy points, VORP, auction) are left at zero for the
    valuation engine. Missing or malformed fields fall back to defaults so
    this never raises.
    """
    canonical = _canonical_row(row)

    raw_name = _pick(canonical, "name")
    name = str(raw_name).strip() if raw_name is not None else ""
    raw_team = _pick(canonical, "team")
    team = str(raw_team).strip().upper() if raw_team is not None else "FA"

    explicit_id = _pick(canonical, "id")
    if explicit_id is not None:
        player_id = str(explicit_id).strip()
    elif name:
        player_id = f"{slugify(name)}-{team.lower()}"
    else:
        player_id = f"player-{index}"

    rank = _to_optional_int(_pick(canonical, "overall_rank"))
    bye_week = _to_optional_int(_pick(canonical, "bye_week"))

    return PlayerRecord(
        id=player_id,
        name=name,
        team=team,
        position=_to_position(_pick(canonical, "position")),
        rookie=_to_bool(_pick(canonical, "rookie")),
        raw_stats={stat: _to_float(_pick(canonical, stat)) for stat in STAT_FIELDS},
        adp=_to_optional_float(_pick(canonical, "adp")),
        overall_rank=rank if rank is not None and rank > 0 else None,
        experience=_to_optional_int(_pick(canonical, "experience")),
        bye_week=bye_week if bye_week is not None and bye_week > 0 else None,
    )
