"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from labyrinth.api.deps import get_game_service, limiter
from labyrinth.core.game import GameSession, new_game
from labyrinth.core.generator import SequenceRandomSource, SystemRandomSource
from labyrinth.core.grid import Direction, Position
from labyrinth.main import app
from labyrinth.services.game_service import GameService


class FakeClock:
    """Clock that only advances when told to."""

    def __init__(self, start: float = 100.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def directions_along(path: list[Position]) -> list[Direction]:
    """Translate a path of adjacent cells into the moves that walk it."""
    directions = []
    for here, there in zip(path, path[1:]):
        delta = (there.col - here.col, there.row - here.row)
        directions.append(next(d for d in Direction if d.delta == delta))
    return directions


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock."""
    return FakeClock()


@pytest.fixture
def serpentine_game(clock: FakeClock) -> GameSession:
    """5x5 game carved by always taking the first neighbor."""
    return new_game(5, 5, random_source=SequenceRandomSource([0]), clock=clock)


@pytest.fixture
def random_game(clock: FakeClock) -> GameSession:
    """Seeded 12x9 game."""
    return new_game(12, 9, random_source=SystemRandomSource(seed=1234), clock=clock)


@pytest.fixture
def game_service(clock: FakeClock) -> GameService:
    """Deterministic game service on the 5x5 serpentine maze."""
    return GameService(5, 5, random_source=SequenceRandomSource([0]), clock=clock)


@pytest_asyncio.fixture(scope="function")
async def client(game_service: GameService) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_game_service] = lambda: game_service
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
