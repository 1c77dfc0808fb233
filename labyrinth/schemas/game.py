"""Game schemas for request/response validation."""

from pydantic import BaseModel, Field


class GamePosition(BaseModel):
    """Schema for a cell position."""

    col: int
    row: int


class GameState(BaseModel):
    """Schema for the game state snapshot."""

    cols: int
    rows: int
    player: GamePosition
    goal: GamePosition
    moves: int
    state: str  # not_started, active, won
    won: bool
    elapsed: float
    show_solution: bool


class CellWalls(BaseModel):
    """Schema for the wall flags of one cell."""

    top: bool
    right: bool
    bottom: bool
    left: bool


class MazeLayout(BaseModel):
    """Schema for the maze wall layout, rows of cells."""

    cols: int
    rows: int
    cells: list[list[CellWalls]]


class SolutionResponse(BaseModel):
    """Schema for the precomputed solution path."""

    path: list[GamePosition]
    length: int
    show_solution: bool


class MoveRequest(BaseModel):
    """Schema for move request."""

    direction: str = Field(..., pattern="^(up|down|left|right)$")


class MoveResponse(BaseModel):
    """Schema for move response."""

    status: str  # moved, blocked, won, ignored
    position: GamePosition
    moves: int
    state: str
    won: bool
    elapsed: float


class RegenerateRequest(BaseModel):
    """Schema for maze regeneration. Dimensions are clamped to [5, 100]."""

    cols: int
    rows: int
