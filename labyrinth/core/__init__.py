# Core module
from .grid import (
    MAX_DIMENSION,
    MIN_DIMENSION,
    Cell,
    Direction,
    Grid,
    InvalidDimensionsError,
    MazeError,
    MazeInvariantError,
    Position,
    clamp_dimension,
    create_grid,
    render_ascii,
)
from .generator import (
    MazeGenerator,
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    generate_maze,
)
from .solver import distance_map, shortest_path
from .game import (
    Clock,
    GameSession,
    GameStatus,
    GameTimer,
    MonotonicClock,
    MoveResult,
    new_game,
)

__all__ = [
    "MAX_DIMENSION",
    "MIN_DIMENSION",
    "Cell",
    "Direction",
    "Grid",
    "InvalidDimensionsError",
    "MazeError",
    "MazeInvariantError",
    "Position",
    "clamp_dimension",
    "create_grid",
    "render_ascii",
    "MazeGenerator",
    "RandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
    "generate_maze",
    "distance_map",
    "shortest_path",
    "Clock",
    "GameSession",
    "GameStatus",
    "GameTimer",
    "MonotonicClock",
    "MoveResult",
    "new_game",
]
