"""
Labyrinth Game Session

Single-player traversal of a generated maze:
- Wall-checked movement
- Move counting
- Timer that starts on the first accepted move and stops on the goal
- Win detection
- Reset (same maze) and regeneration (new maze)

States:
    not_started -> active -> won
    reset/regenerate return to not_started from any state.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Protocol, Union

from .generator import RandomSource, SystemRandomSource, generate_maze
from .grid import (
    Direction,
    Grid,
    MazeInvariantError,
    Position,
    clamp_dimension,
    render_ascii,
)
from .solver import shortest_path

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Movement state machine states."""
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    WON = "won"


class Clock(Protocol):
    """Time source in seconds; only differences between readings matter."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Clock backed by time.monotonic."""

    def now(self) -> float:
        return time.monotonic()


class GameTimer:
    """Elapsed-time measurement against an injected clock."""

    def __init__(self, clock: Clock):
        self.clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self.clock.now()

    def stop(self) -> None:
        if self.running:
            self._stopped_at = self.clock.now()

    def clear(self) -> None:
        self._started_at = None
        self._stopped_at = None

    @property
    def elapsed(self) -> float:
        """Seconds since start, frozen once stopped, 0.0 if never started."""
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self.clock.now()
        return end - self._started_at


@dataclass
class MoveResult:
    """Result of a move attempt."""
    status: Literal["moved", "blocked", "won", "ignored"]
    position: Position
    moves: int
    state: GameStatus
    elapsed: float

    @property
    def won(self) -> bool:
        """
        Whether the game is won after this move.

        Stays True for ignored moves after the win. Only the move that
        reached the goal has status "won".
        """
        return self.state == GameStatus.WON

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "position": self.position.to_dict(),
            "moves": self.moves,
            "state": self.state.value,
            "won": self.won,
            "elapsed": self.elapsed,
        }


class GameSession:
    """
    One attempt at one maze.

    The player starts at (0, 0) and the goal is the bottom-right cell.

    Example usage:
        session = new_game(10, 10)
        result = session.attempt_move(Direction.RIGHT)
        if result.status == "blocked":
            ...
    """

    def __init__(
        self,
        grid: Grid,
        solution: list[Position],
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize a session over an already generated maze.

        Args:
            grid: Carved maze.
            solution: Precomputed path from origin to goal.
            random_source: Source reused when regenerating.
            clock: Time source for the game timer.
        """
        self.grid = grid
        self.solution = solution
        self.random_source = random_source or SystemRandomSource()
        self.clock = clock or MonotonicClock()
        self.goal = Position(grid.cols - 1, grid.rows - 1)
        self.player = Position(0, 0)
        self.moves = 0
        self.status = GameStatus.NOT_STARTED
        self.timer = GameTimer(self.clock)

    @property
    def won(self) -> bool:
        return self.status == GameStatus.WON

    @property
    def elapsed(self) -> float:
        return self.timer.elapsed

    def _result(self, status: str) -> MoveResult:
        return MoveResult(
            status=status,
            position=self.player,
            moves=self.moves,
            state=self.status,
            elapsed=self.elapsed,
        )

    def attempt_move(self, direction: Union[Direction, str]) -> MoveResult:
        """
        Try to move the player one cell.

        Args:
            direction: Direction or its name ("up", "down", "left", "right").

        Returns:
            MoveResult. Blocked moves and moves after a win change nothing.

        Raises:
            ValueError: If direction is not a known direction name.
        """
        direction = Direction(direction)

        if self.status == GameStatus.WON:
            return self._result("ignored")

        if self.grid.cell(*self.player).has_wall(direction):
            return self._result("blocked")

        if self.status == GameStatus.NOT_STARTED:
            self.status = GameStatus.ACTIVE
            self.timer.start()

        dc, dr = direction.delta
        self.player = Position(self.player.col + dc, self.player.row + dr)
        self.moves += 1

        if self.player == self.goal:
            self.timer.stop()
            self.status = GameStatus.WON
            logger.info(f"Maze solved in {self.moves} moves ({self.elapsed:.2f}s)")
            return self._result("won")

        return self._result("moved")

    def reset(self) -> None:
        """Start over on the same maze."""
        self.player = Position(0, 0)
        self.moves = 0
        self.status = GameStatus.NOT_STARTED
        self.timer.clear()

    def regenerate(self, cols: int, rows: int) -> "GameSession":
        """Build a brand-new session on a new maze, clamping dimensions."""
        return new_game(cols, rows, random_source=self.random_source, clock=self.clock)

    def render(self, show_solution: bool = False) -> str:
        """ASCII view with the player, goal and optionally the solution path."""
        return render_ascii(
            self.grid,
            player=self.player,
            goal=self.goal,
            path=self.solution if show_solution else None,
        )

    def to_dict(self) -> dict:
        """Snapshot of everything the rendering layer reads."""
        return {
            "cols": self.grid.cols,
            "rows": self.grid.rows,
            "player": self.player.to_dict(),
            "goal": self.goal.to_dict(),
            "moves": self.moves,
            "state": self.status.value,
            "won": self.won,
            "elapsed": self.elapsed,
        }


def new_game(
    cols: int,
    rows: int,
    random_source: Optional[RandomSource] = None,
    clock: Optional[Clock] = None,
) -> GameSession:
    """
    Generate a maze, solve it and start a session on it.

    Args:
        cols: Requested columns, clamped to [5, 100].
        rows: Requested rows, clamped to [5, 100].
        random_source: Neighbor picker for the generator.
        clock: Time source for the game timer.

    Raises:
        MazeInvariantError: If the generated maze has no path to the goal.
    """
    cols, rows = clamp_dimension(cols), clamp_dimension(rows)
    random_source = random_source or SystemRandomSource()

    grid = generate_maze(cols, rows, random_source)
    goal = Position(cols - 1, rows - 1)
    solution = shortest_path(grid, Position(0, 0), goal)
    if not solution:
        raise MazeInvariantError(f"Generated {cols}x{rows} maze has no path to {tuple(goal)}")

    return GameSession(grid, solution, random_source=random_source, clock=clock)


if __name__ == "__main__":
    # Quick test
    session = new_game(8, 6, SystemRandomSource(seed=7))
    print("Session:", session.to_dict())
    print(session.render(show_solution=True))

    steps = zip(session.solution, session.solution[1:])
    for here, there in steps:
        direction = next(
            d for d in Direction if d.delta == (there.col - here.col, there.row - here.row)
        )
        result = session.attempt_move(direction)
        print(f"Move {direction.value}: {result.to_dict()}")

    print()
    print(session.render())
