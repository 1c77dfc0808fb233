"""
Maze Generator (recursive backtracker)

Carves a perfect maze out of a fully walled grid: every cell ends up
reachable from every other cell by exactly one simple path.

The "recursion" runs on an explicit stack so a 100x100 grid never hits
Python's recursion limit. The random choice of neighbor comes from an
injected random source, which keeps generation reproducible in tests.
"""

import logging
import random
from typing import Optional, Protocol, Sequence

from .grid import Direction, Grid, MazeInvariantError, Position, create_grid

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform integer source consumed by the generator."""

    def next(self, n: int) -> int:
        """Return an integer in [0, n)."""
        ...


class SystemRandomSource:
    """Random source backed by random.Random."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next(self, n: int) -> int:
        return self._rng.randrange(n)


class SequenceRandomSource:
    """
    Deterministic random source replaying a fixed sequence.

    The sequence wraps around when exhausted and each value is reduced
    modulo n, so SequenceRandomSource([0]) always picks the first neighbor.
    """

    def __init__(self, values: Sequence[int]):
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self._values = list(values)
        self._index = 0

    def next(self, n: int) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value % n


class MazeGenerator:
    """
    Randomized depth-first maze carver.

    Example usage:
        generator = MazeGenerator(SystemRandomSource(seed=42))
        grid = generator.generate(create_grid(20, 20))
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.random_source = random_source or SystemRandomSource()

    def _unvisited_neighbors(
        self, grid: Grid, position: Position
    ) -> list[tuple[Direction, Position]]:
        """In-bounds unvisited neighbors in up, right, down, left order."""
        neighbors = []
        for direction in Direction:
            target = grid.neighbor(position.col, position.row, direction)
            if target is not None and not grid.cell(*target).visited:
                neighbors.append((direction, target))
        return neighbors

    def generate(self, grid: Grid) -> Grid:
        """
        Carve a perfect maze into a freshly created grid.

        Args:
            grid: Grid with all walls present and no cell visited.

        Returns:
            The same grid, carved, with visited flags cleared.

        Raises:
            MazeInvariantError: If the walk runs out of cells to backtrack to
                before every cell is visited.
        """
        stack: list[Position] = []
        current = Position(0, 0)
        grid.cell(*current).visited = True
        visited_count = 1
        total = len(grid)

        while visited_count < total:
            neighbors = self._unvisited_neighbors(grid, current)
            if neighbors:
                direction, chosen = neighbors[self.random_source.next(len(neighbors))]
                grid.remove_wall(current.col, current.row, direction)
                stack.append(current)
                current = chosen
                grid.cell(*current).visited = True
                visited_count += 1
            elif stack:
                # Dead end: backtrack
                current = stack.pop()
            else:
                raise MazeInvariantError(
                    f"Backtrack stack exhausted after visiting {visited_count} of {total} cells"
                )

        grid.reset_visited()
        return grid


def generate_maze(
    cols: int,
    rows: int,
    random_source: Optional[RandomSource] = None,
) -> Grid:
    """
    Create and carve a new maze.

    Args:
        cols: Number of columns (5-100, not clamped here).
        rows: Number of rows (5-100, not clamped here).
        random_source: Neighbor picker. Defaults to an unseeded SystemRandomSource.

    Raises:
        InvalidDimensionsError: If either dimension is out of range.
    """
    grid = create_grid(cols, rows)
    MazeGenerator(random_source).generate(grid)
    logger.debug(f"Carved {cols}x{rows} maze")
    return grid
