"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os

import pytest

from scorebook.engine.record import LineupEntry, PlateAppearanceRecord


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all SCOREBOOK__ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("SCOREBOOK__"):
            monkeypatch.delenv(key)


@pytest.fixture
def lineup() -> list[LineupEntry]:
    return [LineupEntry(order_number=i, jersey_number=str(10 + i), name=f"Batter {i}") for i in range(1, 10)]


@pytest.fixture
def record(lineup: list[LineupEntry]) -> PlateAppearanceRecord:
    return PlateAppearanceRecord.new_slot("team-1", "game-1", 1, "away", 1, lineup)
