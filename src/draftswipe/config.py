from __future__ import annotations

from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from draftswipe.domain.draft_plan import DraftSettings
from draftswipe.valuation.models import ScoringFormat, ValuationConfig


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


_DEFAULTS: dict[str, object] = {
    "valuation": {
        "format": "ppr",
        "league_size": 12,
        "budget_per_team": 200,
        "pool_fraction": 0.7,
    },
    "draft": {
        "draft_slot": 6,
        "min_targets": 60,
    },
    "preferences": {
        "storage_key": "draftswipe_prefs_v3_4direction",
    },
    "analysis": {
        "narrative_limit": 6,
    },
}


def create_config(
    yaml_path: str = "draftswipe.yaml",
    env_prefix: str = "DRAFTSWIPE",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables (``DRAFTSWIPE__VALUATION__FORMAT``).
        defaults: Default configuration values.
        overrides: Nested values that win over every other layer, usually from CLI options.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def build_overrides(
    scoring_format: str | None = None,
    league_size: int | None = None,
    draft_slot: int | None = None,
) -> dict[str, object]:
    """Build an override dict from explicit options, skipping the ones not given."""
    overrides: dict[str, object] = {}
    valuation: dict[str, object] = {}
    if scoring_format is not None:
        valuation["format"] = scoring_format
    if league_size is not None:
        valuation["league_size"] = league_size
    if valuation:
        overrides["valuation"] = valuation
    if draft_slot is not None:
        overrides["draft"] = {"draft_slot": draft_slot}
    return overrides


def _get(cfg: AppConfig, key: str) -> str:
    try:
        return str(cfg[key])
    except KeyError as e:
        raise ConfigError(f"Missing configuration value '{key}'") from e


def _int(cfg: AppConfig, key: str) -> int:
    raw = _get(cfg, key)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"'{key}' must be an integer, got {raw!r}") from e


def _float(cfg: AppConfig, key: str) -> float:
    raw = _get(cfg, key)
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"'{key}' must be a number, got {raw!r}") from e


def load_valuation_config(cfg: AppConfig | None = None) -> ValuationConfig:
    if cfg is None:
        cfg = create_config()

    raw_format = _get(cfg, "valuation.format").lower()
    try:
        scoring_format = ScoringFormat(raw_format)
    except ValueError as e:
        options = ", ".join(f.value for f in ScoringFormat)
        raise ConfigError(f"Unknown scoring format '{raw_format}'. Options: {options}") from e

    league_size = _int(cfg, "valuation.league_size")
    budget = _int(cfg, "valuation.budget_per_team")
    pool_fraction = _float(cfg, "valuation.pool_fraction")
    if league_size <= 0:
        raise ConfigError(f"league_size must be > 0, got {league_size}")
    if budget < 0:
        raise ConfigError(f"budget_per_team must be >= 0, got {budget}")
    if not 0 <= pool_fraction <= 1:
        raise ConfigError(f"pool_fraction must be between 0 and 1, got {pool_fraction}")

    return ValuationConfig(
        format=scoring_format,
        league_size=league_size,
        budget_per_team=budget,
        pool_fraction=pool_fraction,
    )


def load_draft_settings(cfg: AppConfig | None = None) -> DraftSettings:
    if cfg is None:
        cfg = create_config()

    league_size = _int(cfg, "valuation.league_size")
    draft_slot = _int(cfg, "draft.draft_slot")
    min_targets = _int(cfg, "draft.min_targets")
    if league_size <= 0:
        raise ConfigError(f"league_size must be > 0, got {league_size}")
    if not 1 <= draft_slot <= league_size:
        raise ConfigError(f"draft_slot must be between 1 and {league_size}, got {draft_slot}")
    if min_targets < 0:
        raise ConfigError(f"min_targets must be >= 0, got {min_targets}")

    return DraftSettings(league_size=league_size, draft_slot=draft_slot, min_targets=min_targets)


def preferences_storage_key(cfg: AppConfig) -> str:
    return _get(cfg, "preferences.storage_key")


def narrative_limit(cfg: AppConfig) -> int:
    limit = _int(cfg, "analysis.narrative_limit")
    if limit <= 0:
        raise ConfigError(f"narrative_limit must be > 0, got {limit}")
    return limit
