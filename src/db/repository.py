"""Protocol repository (implemented in memory and with SQL Alchemy)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def create_game(self, game: GameModel) -> GameModel:
        """Register a new game under its owner and return the stored data."""
        ...

    def get_game(self, owner_key: str, game_id: UUID) -> GameModel | None:
        """Get game by ID, if a record exists and belongs to this owner."""
        ...

    def list_games(self, owner_key: str) -> list[GameModel]:
        """All games of an owner, oldest first. Empty if the owner never created one."""
        ...

    def update_game(self, game: GameModel) -> GameModel | None:
        """Replace the stored state of an existing game."""
        ...
