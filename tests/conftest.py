"""Shared pytest fixtures and builders for test modules."""

from __future__ import annotations

import os
from typing import Any

import pytest

from draftswipe.domain.player import PlayerRecord


def make_player(player_id: str, position: str, points: float = 0.0, **overrides: Any) -> PlayerRecord:
    """Build a PlayerRecord with test defaults; any field can be overridden."""
    defaults: dict[str, Any] = {
        "id": player_id,
        "name": player_id.upper(),
        "team": "FA",
        "position": position,
        "fantasy_pts": points,
        "auction": 1,
    }
    defaults.update(overrides)
    return PlayerRecord(**defaults)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all DRAFTSWIPE__ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("DRAFTSWIPE__"):
            monkeypatch.delenv(key)
