"""Tests for the BFS shortest-path solver."""

from collections import deque

import pytest

from labyrinth.core.generator import SequenceRandomSource, SystemRandomSource, generate_maze
from labyrinth.core.grid import Direction, Position, create_grid
from labyrinth.core.solver import distance_map, shortest_path


def assert_valid_path(grid, path):
    """Consecutive cells must be adjacent and joined by an open passage."""
    for here, there in zip(path, path[1:]):
        direction = next(
            d for d in grid.open_directions(*here)
            if grid.neighbor(here.col, here.row, d) == there
        )
        assert not grid.cell(*here).has_wall(direction)


WALL_STEPS = {"top": (0, -1), "right": (1, 0), "bottom": (0, 1), "left": (-1, 0)}


def bfs_distance(grid, start, goal):
    """Moves from start to goal, read straight off the wall flags."""
    seen = {tuple(start): 0}
    queue = deque([tuple(start)])
    while queue:
        col, row = queue.popleft()
        if (col, row) == tuple(goal):
            return seen[(col, row)]
        walls = grid.cells[row][col].walls
        for wall, (dc, dr) in WALL_STEPS.items():
            nc, nr = col + dc, row + dr
            if walls[wall] or not (0 <= nc < grid.cols and 0 <= nr < grid.rows):
                continue
            if (nc, nr) not in seen:
                seen[(nc, nr)] = seen[(col, row)] + 1
                queue.append((nc, nr))
    return None


class TestShortestPath:
    """Tests for shortest_path."""

    def test_serpentine_maze_path(self):
        """Test the path through the first-neighbor 5x5 maze."""
        grid = generate_maze(5, 5, SequenceRandomSource([0]))

        path = shortest_path(grid, Position(0, 0), Position(4, 4))

        assert path == [
            Position(0, 0), Position(1, 0), Position(2, 0), Position(3, 0),
            Position(4, 0), Position(4, 1), Position(4, 2), Position(4, 3),
            Position(4, 4),
        ]

    @pytest.mark.parametrize("seed", range(8))
    def test_length_matches_bfs_distance(self, seed):
        grid = generate_maze(15, 11, SystemRandomSource(seed))
        start, goal = Position(0, 0), Position(14, 10)

        path = shortest_path(grid, start, goal)

        assert path[0] == start
        assert path[-1] == goal
        assert len(path) == bfs_distance(grid, start, goal) + 1
        assert_valid_path(grid, path)

    @pytest.mark.parametrize("seed", range(3))
    def test_length_matches_bfs_distance_between_interior_cells(self, seed):
        grid = generate_maze(30, 30, SystemRandomSource(seed))
        start, goal = Position(13, 2), Position(4, 27)

        path = shortest_path(grid, start, goal)

        assert len(path) == bfs_distance(grid, start, goal) + 1
        assert len(path) == distance_map(grid, start)[goal] + 1

    def test_path_between_arbitrary_cells(self):
        grid = generate_maze(20, 20, SystemRandomSource(11))
        start, goal = Position(7, 13), Position(2, 18)

        path = shortest_path(grid, start, goal)

        assert path[0] == start
        assert path[-1] == goal
        assert len(set(path)) == len(path)
        assert_valid_path(grid, path)

    def test_start_equals_goal(self):
        grid = generate_maze(5, 5, SystemRandomSource(1))
        assert shortest_path(grid, Position(2, 2), Position(2, 2)) == [Position(2, 2)]

    def test_unreachable_goal_returns_empty(self):
        """Test that a fully walled grid has no path."""
        grid = create_grid(5, 5)
        assert shortest_path(grid, Position(0, 0), Position(4, 4)) == []

    def test_accepts_plain_tuples(self):
        grid = generate_maze(5, 5, SequenceRandomSource([0]))
        path = shortest_path(grid, (0, 0), (2, 0))
        assert path == [Position(0, 0), Position(1, 0), Position(2, 0)]

    def test_out_of_bounds_raises(self):
        grid = create_grid(5, 5)
        with pytest.raises(ValueError, match="goal"):
            shortest_path(grid, Position(0, 0), Position(5, 5))
        with pytest.raises(ValueError, match="start"):
            shortest_path(grid, Position(-1, 0), Position(4, 4))

    def test_tie_break_prefers_up_right_down_left(self):
        """Test that equal-length routes resolve in enumeration order."""
        grid = create_grid(5, 5)
        # Open a 2x2 loop: (0,0) -> (1,0) -> (1,1) and (0,0) -> (0,1) -> (1,1)
        grid.remove_wall(0, 0, Direction.RIGHT)
        grid.remove_wall(1, 0, Direction.DOWN)
        grid.remove_wall(0, 0, Direction.DOWN)
        grid.remove_wall(0, 1, Direction.RIGHT)

        path = shortest_path(grid, Position(0, 0), Position(1, 1))

        assert path == [Position(0, 0), Position(1, 0), Position(1, 1)]


class TestDistanceMap:
    """Tests for distance_map."""

    def test_covers_every_cell_of_generated_maze(self):
        grid = generate_maze(9, 7, SystemRandomSource(2))
        distances = distance_map(grid, Position(0, 0))

        assert len(distances) == 63
        assert distances[Position(0, 0)] == 0

    def test_serpentine_distances(self):
        grid = generate_maze(5, 5, SequenceRandomSource([0]))
        distances = distance_map(grid, Position(0, 0))

        assert distances[Position(4, 4)] == 8
        # Last cell of the single corridor
        assert distances[Position(0, 4)] == 24

    def test_isolated_start(self):
        grid = create_grid(5, 5)
        assert distance_map(grid, Position(3, 3)) == {Position(3, 3): 0}
