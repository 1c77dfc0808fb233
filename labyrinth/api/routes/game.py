"""Game routes for playing the current maze."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from labyrinth.api.deps import CurrentGame, limiter
from labyrinth.config import get_settings
from labyrinth.core.game import GameSession
from labyrinth.core.grid import MazeInvariantError
from labyrinth.schemas.game import (
    GamePosition,
    GameState,
    MazeLayout,
    MoveRequest,
    MoveResponse,
    RegenerateRequest,
    SolutionResponse,
)
from labyrinth.services.game_service import GameService

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/game", tags=["Game"])


def _state(game: GameService, session: GameSession) -> GameState:
    return GameState(**session.to_dict(), show_solution=game.show_solution)


@router.get(
    "",
    response_model=GameState,
)
async def get_state(game: CurrentGame) -> GameState:
    """Get the current game state.

    Returns player and goal positions, move count, elapsed time and status.
    """
    return _state(game, game.session)


@router.get(
    "/maze",
    response_model=MazeLayout,
)
async def get_maze(game: CurrentGame) -> MazeLayout:
    """Get the wall layout of the current maze.

    Cells are returned row by row; True means a wall is present.
    """
    return MazeLayout(**game.session.grid.to_dict())


@router.get(
    "/solution",
    response_model=SolutionResponse,
)
async def get_solution(game: CurrentGame) -> SolutionResponse:
    """Get the shortest path from the start cell to the goal."""
    path = [GamePosition(**p.to_dict()) for p in game.solution]
    return SolutionResponse(path=path, length=len(path), show_solution=game.show_solution)


@router.post(
    "/solution/toggle",
    response_model=SolutionResponse,
)
async def toggle_solution(game: CurrentGame) -> SolutionResponse:
    """Show or hide the solution overlay."""
    game.toggle_solution()
    return await get_solution(game)


@router.get("/render", response_class=PlainTextResponse)
async def render(game: CurrentGame) -> str:
    """ASCII rendering of the maze with the player (@) and goal (G)."""
    return game.render()


@router.post(
    "/move",
    response_model=MoveResponse,
)
async def move(request: MoveRequest, game: CurrentGame) -> MoveResponse:
    """Move the player one cell.

    Blocked moves and moves after winning are reported in the status
    field and leave the game unchanged.
    """
    result = game.move(request.direction)

    return MoveResponse(
        status=result.status,
        position=GamePosition(**result.position.to_dict()),
        moves=result.moves,
        state=result.state.value,
        won=result.won,
        elapsed=result.elapsed,
    )


@router.post(
    "/reset",
    response_model=GameState,
)
async def reset(game: CurrentGame) -> GameState:
    """Return the player to the start of the same maze."""
    return _state(game, game.reset())


@router.post(
    "/regenerate",
    response_model=GameState,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(f"{settings.rate_limit_regenerations}/minute")
def regenerate(
    request: Request,
    dimensions: RegenerateRequest,
    game: CurrentGame,
) -> GameState:
    """Generate a new maze and start a fresh game on it.

    Dimensions outside 5-100 are clamped. Generation runs in the
    threadpool; the service swaps the finished session in with a single
    assignment.
    """
    try:
        session = game.regenerate(dimensions.cols, dimensions.rows)
    except MazeInvariantError as e:
        logger.error(f"Maze generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Maze generation failed",
        )

    return _state(game, session)
