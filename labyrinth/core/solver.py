"""
Shortest-path solver.

Breadth-first search over open passages. A cell is marked visited when it
is enqueued, so the first time the goal is discovered is along a shortest
path. Neighbors are expanded up, right, down, left, which fixes the
tie-break between equal-length paths.
"""

from collections import deque
from typing import Optional

from .grid import Grid, Position


def _check_in_bounds(grid: Grid, position: Position, name: str) -> None:
    if not grid.in_bounds(position.col, position.row):
        raise ValueError(
            f"{name} {tuple(position)} is outside a {grid.cols}x{grid.rows} grid"
        )


def shortest_path(grid: Grid, start: Position, goal: Position) -> list[Position]:
    """
    Find the shortest path from start to goal.

    Args:
        grid: Maze to search.
        start: Starting cell.
        goal: Target cell.

    Returns:
        List of positions from start to goal inclusive, [start] if they are
        the same cell, or [] if goal cannot be reached.

    Raises:
        ValueError: If start or goal is outside the grid.
    """
    start, goal = Position(*start), Position(*goal)
    _check_in_bounds(grid, start, "start")
    _check_in_bounds(grid, goal, "goal")

    queue = deque([start])
    previous: dict[Position, Optional[Position]] = {start: None}

    while queue:
        current = queue.popleft()
        if current == goal:
            break

        for direction in grid.open_directions(current.col, current.row):
            nxt = grid.neighbor(current.col, current.row, direction)
            if nxt not in previous:
                previous[nxt] = current
                queue.append(nxt)

    if goal not in previous:
        return []

    path = []
    node: Optional[Position] = goal
    while node is not None:
        path.append(node)
        node = previous[node]
    path.reverse()
    return path


def distance_map(grid: Grid, start: Position) -> dict[Position, int]:
    """BFS distance (in moves) from start to every reachable cell."""
    start = Position(*start)
    _check_in_bounds(grid, start, "start")

    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for direction in grid.open_directions(current.col, current.row):
            nxt = grid.neighbor(current.col, current.row, direction)
            if nxt not in distances:
                distances[nxt] = distances[current] + 1
                queue.append(nxt)
    return distances
