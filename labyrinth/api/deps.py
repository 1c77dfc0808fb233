"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from labyrinth.services.game_service import GameService

limiter = Limiter(key_func=get_remote_address)


def get_game_service(request: Request) -> GameService:
    """Get the game service owned by the application."""
    return request.app.state.game_service


# Type alias for cleaner route signatures
CurrentGame = Annotated[GameService, Depends(get_game_service)]
