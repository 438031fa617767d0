"""Shared fixtures for the test suite."""

import json
from pathlib import Path
from typing import Any, cast

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


class SleepRecorder:
    """Stands in for asyncio.sleep and records each requested delay."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def store_response() -> dict[str, Any]:
    """Load Steam Store API response fixture."""
    return load_fixture("steam_store_response.json")


@pytest.fixture
def player_summaries_response() -> dict[str, Any]:
    return load_fixture("player_summaries_response.json")


@pytest.fixture
def owned_games_response() -> dict[str, Any]:
    return load_fixture("owned_games_response.json")
