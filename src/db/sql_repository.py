"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel, ThemeModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game: GameModel) -> GameModel:
        """Register a new game under its owner and return the stored data."""
        game_db = DBGame(
            game_id=game.game_id,
            owner_key=game.owner_key,
            grid=game.grid,
            theme=game.theme.to_dict(),
            status=game.status,
            started_at=game.started_at,
            finished_at=game.finished_at,
        )
        self.db.add(game_db)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise RepositoryError(
                f"Game with game_id={game.game_id} already exists."
            ) from e
        self.db.refresh(game_db)
        logger.debug("Stored game %s for owner %s", game.game_id, game.owner_key)
        return self._to_model(game_db)

    def get_game(self, owner_key: str, game_id: UUID) -> GameModel | None:
        """Get game by ID, if a record exists and belongs to this owner."""
        game_db = self._fetch_game(game_id)
        if game_db and game_db.owner_key == owner_key:
            return self._to_model(game_db)
        return None

    def list_games(self, owner_key: str) -> list[GameModel]:
        """All games of an owner, oldest first. Empty if the owner never created one."""
        query = (
            select(DBGame).where(DBGame.owner_key == owner_key).order_by(DBGame.row_id)
        )
        return [self._to_model(game_db) for game_db in self.db.scalars(query)]

    def update_game(self, game: GameModel) -> GameModel | None:
        """Replace the stored state of an existing game. Ownership never changes."""
        game_db = self._fetch_game(game.game_id)
        if not game_db:
            return None
        if game_db.owner_key != game.owner_key:
            raise RepositoryError(
                f"Game with game_id={game.game_id} belongs to another owner."
            )
        game_db.grid = game.grid
        game_db.theme = game.theme.to_dict()
        game_db.status = game.status
        game_db.finished_at = game.finished_at
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.game_id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            game_id=game_db.game_id,
            owner_key=game_db.owner_key,
            grid=[list(row) for row in game_db.grid],
            theme=ThemeModel.from_dict(game_db.theme),
            status=game_db.status,
            started_at=_as_utc(game_db.started_at),
            finished_at=_as_utc(game_db.finished_at) if game_db.finished_at else None,
        )


def _as_utc(moment: datetime) -> datetime:
    """SQLite hands back naive datetimes. Everything is stored in UTC, so re-attach the timezone."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
