"""
Implementation of (Game)Repository kept in process memory.

Two indexes over the same games: by game ID (lookup), and by owner key (listing, in creation order).
Both are guarded by one lock, so creating and reading games from several threads at once is safe.
Games live as long as the store does, nothing is ever evicted.
"""

import logging
import threading
from copy import deepcopy
from uuid import UUID

from src.core.exceptions import RepositoryError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class InMemoryGameStore:
    """Stores copies of the models, so no caller ever shares mutable state with the store."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._owner_games: dict[str, list[UUID]] = {}
        self._lock = threading.Lock()

    def create_game(self, game: GameModel) -> GameModel:
        """Register a new game under its owner and return the stored data."""
        with self._lock:
            if game.game_id in self._games:
                raise RepositoryError(f"Game with game_id={game.game_id} already exists.")
            self._games[game.game_id] = deepcopy(game)
            self._owner_games.setdefault(game.owner_key, []).append(game.game_id)
            logger.debug("Registered game %s for owner %s", game.game_id, game.owner_key)
            return deepcopy(game)

    def get_game(self, owner_key: str, game_id: UUID) -> GameModel | None:
        """Get game by ID, if a record exists and belongs to this owner."""
        with self._lock:
            game = self._games.get(game_id)
            if game is None or game.owner_key != owner_key:
                return None
            return deepcopy(game)

    def list_games(self, owner_key: str) -> list[GameModel]:
        """All games of an owner, oldest first. Empty if the owner never created one."""
        with self._lock:
            return [
                deepcopy(self._games[game_id])
                for game_id in self._owner_games.get(owner_key, [])
            ]

    def update_game(self, game: GameModel) -> GameModel | None:
        """Replace the stored state of an existing game. Ownership never changes."""
        with self._lock:
            stored = self._games.get(game.game_id)
            if stored is None:
                return None
            if stored.owner_key != game.owner_key:
                raise RepositoryError(
                    f"Game with game_id={game.game_id} belongs to another owner."
                )
            self._games[game.game_id] = deepcopy(game)
            return deepcopy(game)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
