"""
Build a ready-to-use service from the settings.

The request layer creates one service at startup and hands it to its handlers, instead of relying on module-level registries.
"""

import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from src.core.config import Settings, StorageBackend
from src.core.log import configure_logging
from src.db.database import create_db_engine, create_session_factory
from src.db.memory_repository import InMemoryGameStore
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import ConnectFourService

logger = logging.getLogger(__name__)


def create_repository(
    settings: Settings, db_session: Optional[Session] = None
) -> GameRepository:
    """NOTE a SQL session is not thread-safe: with the SQL backend, use one service per worker thread."""
    if settings.storage == StorageBackend.MEMORY:
        return InMemoryGameStore()

    if db_session is None:
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        db_session = create_session_factory(engine)()
    return SQLGameRepository(db_session)


def create_service(
    settings: Optional[Settings] = None, db_session: Optional[Session] = None
) -> ConnectFourService:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    repository = create_repository(settings, db_session)
    rng = random.Random(settings.opponent_seed)
    logger.info("Connect four service using %s storage", settings.storage)
    return ConnectFourService(repository, rng=rng)
