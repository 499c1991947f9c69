"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
import threading
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    GameListResponse,
    GameResponse,
    GetGameRequest,
    ListGamesRequest,
    MoveRequest,
    ThemeSchema,
)
from src.connect_four.game import GameSession
from src.connect_four.opponent import ColumnChooser
from src.core.exceptions import GameError, GameNotFoundError, RepositoryError
from src.core.models import GameModel, ThemeModel
from src.core.shared_types import Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ConnectFourService:
    """Orchestration of layers for connect four games against the automated opponent."""

    def __init__(
        self, repository: GameRepository, rng: Optional[ColumnChooser] = None
    ) -> None:
        self.repo = repository
        self.rng = rng or random.Random()
        self._game_locks: dict[UUID, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Owner requested a new game with the chosen theme."""

        # Use info in CreateGameRequest to create a new GameSession, and convert into GameModel
        new_game = GameSession.new_game(
            owner_key=request.owner_key, theme=self._to_theme_model(request.theme)
        )
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game = self.repo.create_game(created_game_data)
        logger.info(
            "New game %s created for owner %s", new_game.game_id, request.owner_key
        )

        # Return a GameResponse
        return self._create_game_response(stored_game)

    def list_games(self, request: ListGamesRequest) -> GameListResponse:
        """All games of the owner, oldest first. An owner without games simply gets an empty list."""
        games = self.repo.list_games(request.owner_key)
        return GameListResponse(
            owner_key=request.owner_key,
            games=[self._create_game_response(game) for game in games],
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by the frontend to (re)draw a game it already knows the ID of.
        """
        game_model = self._fetch_game(request.owner_key, request.game_id)
        return self._create_game_response(game_model)

    def play_turn(self, request: MoveRequest) -> GameResponse:
        """
        Player drops a token, the opponent answers.
        ----

        The whole turn (fetch, both moves, status update, store) holds the lock of this game,
        so two requests for the same game can never interleave. Other games are not affected.
        Locks only exist for games the owner actually has, so the lookup comes first.
        """
        _ = self._fetch_game(request.owner_key, request.game_id)

        with self._game_lock(request.game_id):
            # Retrieve persisted GameModel from repository
            stored_model = self._fetch_game(request.owner_key, request.game_id)

            # Create a new GameSession instance from the retrieved GameModel
            game = GameSession.from_model(stored_model)

            # Attempt the turn
            try:
                status = game.play_turn(request.column, rng=self.rng)
            except GameError as e:
                logger.warning("Rejected move in game %s: %s", request.game_id, e)
                raise

            # Capture updated state in GameModel
            after_turn = game.to_model()

            # store in repository
            updated = self.repo.update_game(after_turn)
            if updated is None:
                raise RepositoryError(
                    f"Game with game_id={request.game_id} vanished during the turn."
                )

        logger.debug("Game %s: player played column %d", request.game_id, request.column)
        if game.is_finished:
            logger.info("Game %s finished: %s", request.game_id, status.name.lower())

        # Return a GameResponse
        return self._create_game_response(updated)

    # -- Internal helpers --
    def _game_lock(self, game_id: UUID) -> threading.Lock:
        """One lock per game, created on first use."""
        with self._locks_guard:
            return self._game_locks.setdefault(game_id, threading.Lock())

    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        return GameResponse(
            game_id=model.game_id,
            owner_key=model.owner_key,
            grid=model.grid,
            theme=ThemeSchema.model_validate(model.theme.to_dict()),
            status=Status(model.status),
            started_at=model.started_at,
            finished_at=model.finished_at,
        )

    def _to_theme_model(self, theme: ThemeSchema) -> ThemeModel:
        return ThemeModel.from_dict(theme.model_dump())

    def _fetch_game(self, owner_key: str, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(owner_key, game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model
