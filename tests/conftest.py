"""Shared test fixtures for settings and sample palette payloads."""

import pytest

from blockpalettes_client.core.config import Settings

TEST_BASE_URL = "https://bp.test"


@pytest.fixture
def settings() -> Settings:
    """Test client settings, isolated from any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        base_url=TEST_BASE_URL,
        timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def palette_wire() -> dict:
    """A palette summary exactly as the list endpoint returns it."""
    return {
        "id": 1234,
        "user_id": 56,
        "date": "2023-01-01 12:30:00",
        "likes": 17,
        "blockOne": "stone",
        "blockTwo": "dirt",
        "blockThree": "grass_block",
        "blockFour": "oak_log",
        "blockFive": "cobblestone",
        "blockSix": "sand",
        "hidden": 0,
        "featured": 1,
        "hash": None,
        "time_ago": "1 day ago",
    }


@pytest.fixture
def palette_detail_wire(palette_wire: dict) -> dict:
    """A single-palette payload including creator name and hash."""
    return {**palette_wire, "hash": "a1b2c3", "username": "builder42"}
