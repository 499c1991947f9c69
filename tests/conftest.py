"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator, Sequence

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.connect_four.board import COLUMNS, ROWS
from src.core.models import ThemeModel, TokenModel
from src.core.shared_types import CellSymbol
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def theme() -> ThemeModel:
    return ThemeModel(
        color="#FFFF83",
        player_token=TokenModel(
            id="frog-car", display_name="Frog Car", image_reference="../images/frog-car.jpg"
        ),
        opponent_token=TokenModel(
            id="squirrels",
            display_name="The Squirrels",
            image_reference="../images/star-wars-squirrels.jpg",
        ),
    )


class ScriptedOpponent:
    """Stands in for random.Random: plays the scripted columns in order, so the opponent is predictable."""

    def __init__(self, columns: Sequence[int]) -> None:
        self.columns = list(columns)

    def choice(self, seq: Sequence[int]) -> int:
        column = self.columns.pop(0)
        assert column in seq, f"scripted column {column} is not open: {list(seq)}"
        return column


@pytest.fixture
def scripted_opponent() -> type[ScriptedOpponent]:
    return ScriptedOpponent


@pytest.fixture
def grid_from_rows() -> Callable[..., list[list[str]]]:
    """
    Call the inner function with one string per row, bottom row first: 'X' player, 'O' opponent, '.' empty.
    Missing rows on top are filled with empty cells.
    """

    def _create_grid(*rows: str) -> list[list[str]]:
        padded = list(rows) + ["." * COLUMNS] * (ROWS - len(rows))
        return [
            [CellSymbol.EMPTY.value if char == "." else char for char in row]
            for row in padded
        ]

    return _create_grid
