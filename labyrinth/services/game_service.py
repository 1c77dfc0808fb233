"""Game service owning the current maze session."""

import logging
import time
from typing import Optional

from labyrinth.config import Settings
from labyrinth.core.game import Clock, GameSession, MoveResult, new_game
from labyrinth.core.generator import RandomSource, SystemRandomSource
from labyrinth.core.grid import Direction, Position, clamp_dimension

logger = logging.getLogger(__name__)


class GameService:
    """
    Holds the one active GameSession and the solution overlay flag.

    Regeneration builds the new maze completely before swapping the
    session reference, so readers only ever see a finished maze.
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
    ):
        self.show_solution = False
        self._session = self._build(
            lambda: new_game(cols, rows, random_source=random_source, clock=clock)
        )

    @staticmethod
    def _build(factory) -> GameSession:
        started = time.perf_counter()
        session = factory()
        took_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Generated {session.grid.cols}x{session.grid.rows} maze "
            f"(solution {len(session.solution)} cells, {took_ms:.2f}ms)"
        )
        return session

    @property
    def session(self) -> GameSession:
        """The active session."""
        return self._session

    @property
    def solution(self) -> list[Position]:
        return self._session.solution

    def move(self, direction: Direction | str) -> MoveResult:
        """Attempt a move on the active session."""
        return self._session.attempt_move(direction)

    def reset(self) -> GameSession:
        """Reset the active session in place."""
        self._session.reset()
        logger.info("Player reset to start")
        return self._session

    def regenerate(self, cols: int, rows: int) -> GameSession:
        """
        Replace the active session with one on a new maze.

        Args:
            cols: Requested columns, clamped to [5, 100].
            rows: Requested rows, clamped to [5, 100].

        Raises:
            MazeInvariantError: If the new maze is broken. The old session
                stays active in that case.
        """
        if (clamp_dimension(cols), clamp_dimension(rows)) != (cols, rows):
            logger.info(f"Clamped requested size {cols}x{rows}")

        session = self._build(lambda: self._session.regenerate(cols, rows))
        self._session = session
        self.show_solution = False
        return session

    def toggle_solution(self) -> bool:
        """Flip the solution overlay flag and return the new value."""
        self.show_solution = not self.show_solution
        return self.show_solution

    def render(self) -> str:
        """ASCII view of the active session."""
        return self._session.render(show_solution=self.show_solution)


def create_game_service(settings: Settings) -> GameService:
    """Build a GameService from application settings."""
    return GameService(
        cols=settings.default_cols,
        rows=settings.default_rows,
        random_source=SystemRandomSource(settings.maze_seed),
    )
