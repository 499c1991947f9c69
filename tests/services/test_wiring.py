"""Unit tests for src/services/wiring.py, src/core/config.py and src/core/log.py"""

import logging

import pytest

from src.api.models import CreateGameRequest, MoveRequest
from src.core.config import Settings, StorageBackend
from src.core.exceptions import ConfigurationError
from src.core.log import ROOT_LOGGER_NAME, configure_logging
from src.db.memory_repository import InMemoryGameStore
from src.db.sql_repository import SQLGameRepository
from src.services.wiring import create_service

THEME = {
    "color": "#FFFF83",
    "player_token": {"id": "a", "display_name": "A", "image_reference": "a.jpg"},
    "opponent_token": {"id": "b", "display_name": "B", "image_reference": "b.jpg"},
}


# -- CONFIG --
def test_default_settings() -> None:
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.storage == StorageBackend.MEMORY
    assert settings.opponent_seed is None


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {
            "CONNECT_FOUR_STORAGE": "SQL",
            "CONNECT_FOUR_DATABASE_URL": "sqlite:///:memory:",
            "CONNECT_FOUR_DATABASE_ECHO": "yes",
            "CONNECT_FOUR_OPPONENT_SEED": "12",
            "CONNECT_FOUR_LOG_LEVEL": "debug",
        }
    )
    assert settings == Settings(
        storage=StorageBackend.SQL,
        database_url="sqlite:///:memory:",
        database_echo=True,
        opponent_seed=12,
        log_level="DEBUG",
    )


@pytest.mark.parametrize(
    "environ",
    [
        {"CONNECT_FOUR_STORAGE": "redis"},
        {"CONNECT_FOUR_DATABASE_ECHO": "maybe"},
        {"CONNECT_FOUR_OPPONENT_SEED": "twelve"},
        {"CONNECT_FOUR_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_settings(environ: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        _ = Settings.from_env(environ)


# -- LOGGING --
def test_configure_logging_only_adds_one_handler() -> None:
    logger = configure_logging("DEBUG")
    handlers = len(logger.handlers)
    logger = configure_logging("WARNING")
    assert len(logger.handlers) == handlers
    assert logger.name == ROOT_LOGGER_NAME
    assert logger.level == logging.WARNING


# -- WIRING --
def test_memory_service() -> None:
    service = create_service(Settings(storage=StorageBackend.MEMORY))
    assert isinstance(service.repo, InMemoryGameStore)


def test_sql_service_plays_a_turn() -> None:
    service = create_service(
        Settings(
            storage=StorageBackend.SQL,
            database_url="sqlite:///:memory:",
            opponent_seed=5,
        )
    )
    assert isinstance(service.repo, SQLGameRepository)

    created = service.create_new_game(CreateGameRequest(owner_key="owner", theme=THEME))
    response = service.play_turn(
        MoveRequest(owner_key="owner", game_id=created.game_id, column=2)
    )
    assert response.grid[0][2] == "X"
    assert sum(cell == "O" for row in response.grid for cell in row) == 1


def test_seeded_opponent_is_reproducible() -> None:
    """Same seed, same opponent moves."""
    grids = []
    for _ in range(2):
        service = create_service(Settings(opponent_seed=99))
        created = service.create_new_game(
            CreateGameRequest(owner_key="owner", theme=THEME)
        )
        for column in (0, 6, 0):
            response = service.play_turn(
                MoveRequest(owner_key="owner", game_id=created.game_id, column=column)
            )
        grids.append(response.grid)
    assert grids[0] == grids[1]
