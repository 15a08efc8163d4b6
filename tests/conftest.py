"""Pytest configuration and fixtures."""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Keep test logs quiet and CORS permissive - must happen before app import
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEV_MODE"] = "true"

# Clear the settings cache to pick up the new environment variables
from gridchess.settings import get_settings  # noqa: E402

get_settings.cache_clear()

from gridchess.game.engine import Game  # noqa: E402
from gridchess.game.players import Color  # noqa: E402
from gridchess.main import app  # noqa: E402


@pytest.fixture
def game() -> Game:
    """A fresh game in the starting position, white to move."""
    return Game.create("bob", Color.WHITE, "alice", Color.BLACK)


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
