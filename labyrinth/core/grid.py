"""
Labyrinth Grid

Passive maze storage shared by the generator, the solver and the game session:
- Cells with four wall flags (top, right, bottom, left)
- Direction vocabulary (unit deltas + wall names)
- Dimension clamping
- ASCII rendering for debugging

Coordinates are (col, row) with (0, 0) in the top-left corner.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Optional


MIN_DIMENSION = 5
MAX_DIMENSION = 100


class MazeError(Exception):
    """Base exception for maze errors."""

    pass


class InvalidDimensionsError(MazeError, ValueError):
    """Exception raised when grid dimensions are outside the allowed range."""

    pass


class MazeInvariantError(MazeError):
    """Exception raised when a generated maze breaks a structural invariant."""

    pass


class Position(NamedTuple):
    """Cell coordinate in the grid."""
    col: int
    row: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"col": self.col, "row": self.row}


class Direction(Enum):
    """Movement directions, in neighbor enumeration order."""
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dc, dr) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
        }
        return deltas[self]

    @property
    def wall(self) -> str:
        """Name of the wall crossed when moving in this direction."""
        walls = {
            Direction.UP: "top",
            Direction.RIGHT: "right",
            Direction.DOWN: "bottom",
            Direction.LEFT: "left",
        }
        return walls[self]

    @property
    def opposite(self) -> "Direction":
        """Get the opposite direction."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.RIGHT: Direction.LEFT,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
        }
        return opposites[self]


WALL_NAMES = tuple(direction.wall for direction in Direction)


@dataclass
class Cell:
    """A single maze cell. A wall flag of True blocks movement that way."""
    col: int
    row: int
    walls: dict[str, bool] = field(
        default_factory=lambda: {name: True for name in WALL_NAMES}
    )
    visited: bool = False

    def has_wall(self, direction: Direction) -> bool:
        """Check whether a wall blocks the given direction."""
        return self.walls[direction.wall]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"col": self.col, "row": self.row, **self.walls}


class Grid:
    """
    Fixed-size rectangular grid of cells.

    Cells are stored row-major and addressed as grid.cell(col, row).
    The shape never changes once created; only wall and visited flags
    are mutated, and only by the maze generator.
    """

    def __init__(self, cols: int, rows: int):
        self.cols = cols
        self.rows = rows
        self.cells: list[list[Cell]] = [
            [Cell(col, row) for col in range(cols)] for row in range(rows)
        ]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self.cols * self.rows

    def in_bounds(self, col: int, row: int) -> bool:
        """Check whether (col, row) lies inside the grid."""
        return 0 <= col < self.cols and 0 <= row < self.rows

    def cell(self, col: int, row: int) -> Cell:
        """Get the cell at (col, row)."""
        if not self.in_bounds(col, row):
            raise IndexError(f"Cell ({col}, {row}) is outside a {self.cols}x{self.rows} grid")
        return self.cells[row][col]

    def neighbor(self, col: int, row: int, direction: Direction) -> Optional[Position]:
        """Get the in-bounds neighbor of (col, row) in direction, or None."""
        dc, dr = direction.delta
        nc, nr = col + dc, row + dr
        if not self.in_bounds(nc, nr):
            return None
        return Position(nc, nr)

    def open_directions(self, col: int, row: int) -> list[Direction]:
        """Directions leading out of (col, row) through an open passage."""
        cell = self.cell(col, row)
        return [
            direction
            for direction in Direction
            if not cell.has_wall(direction) and self.neighbor(col, row, direction) is not None
        ]

    def remove_wall(self, col: int, row: int, direction: Direction) -> Position:
        """
        Carve a passage from (col, row) toward direction.

        Both cells lose their shared wall so the grid stays symmetric.

        Returns:
            Position of the neighbor the passage leads to.

        Raises:
            IndexError: If the neighbor is outside the grid.
        """
        target = self.neighbor(col, row, direction)
        if target is None:
            raise IndexError(f"No neighbor {direction.value} of ({col}, {row})")
        self.cell(col, row).walls[direction.wall] = False
        self.cell(*target).walls[direction.opposite.wall] = False
        return target

    def reset_visited(self) -> None:
        """Clear generation-only visited flags."""
        for cell in self:
            cell.visited = False

    def to_dict(self) -> dict:
        """Convert to dictionary (walls per cell, row-major)."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "cells": [[cell.walls.copy() for cell in row] for row in self.cells],
        }


def clamp_dimension(value: int) -> int:
    """Clamp a requested dimension into [MIN_DIMENSION, MAX_DIMENSION]."""
    return max(MIN_DIMENSION, min(MAX_DIMENSION, int(value)))


def create_grid(cols: int, rows: int) -> Grid:
    """
    Allocate a grid with every wall present and nothing visited.

    Args:
        cols: Number of columns (5-100).
        rows: Number of rows (5-100).

    Raises:
        InvalidDimensionsError: If either dimension is out of range.
    """
    for name, value in (("cols", cols), ("rows", rows)):
        if not MIN_DIMENSION <= value <= MAX_DIMENSION:
            raise InvalidDimensionsError(
                f"{name} must be between {MIN_DIMENSION} and {MAX_DIMENSION}, got {value}"
            )
    return Grid(cols, rows)


def render_ascii(
    grid: Grid,
    player: Optional[Position] = None,
    goal: Optional[Position] = None,
    path: Optional[Iterable[Position]] = None,
) -> str:
    """
    Generate ASCII visualization of a grid.

    Markers: @ = player, G = goal, . = solution path cell.
    The player marker wins over the goal marker, which wins over the path.
    """
    path_cells = {Position(*p) for p in path} if path else set()

    def marker(col: int, row: int) -> str:
        here = Position(col, row)
        if player is not None and here == player:
            return "@"
        if goal is not None and here == goal:
            return "G"
        if here in path_cells:
            return "."
        return " "

    lines = ["+" + "".join("---+" if c.walls["top"] else "   +" for c in grid.cells[0])]
    for row in grid.cells:
        line = "|" if row[0].walls["left"] else " "
        for cell in row:
            line += f" {marker(cell.col, cell.row)} "
            line += "|" if cell.walls["right"] else " "
        lines.append(line)
        lines.append("+" + "".join("---+" if c.walls["bottom"] else "   +" for c in row))

    return "\n".join(lines)
