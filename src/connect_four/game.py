"""
The GameSession class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import random
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Callable, Optional, Self
from uuid import UUID, uuid4

from src.connect_four.board import Board, Cell
from src.connect_four.opponent import ColumnChooser, choose_column
from src.core.exceptions import GameFinishedError, GameStateError
from src.core.models import GameModel, ThemeModel
from src.core.shared_types import utc_now

Clock = Callable[[], datetime]


class Status(Enum):
    UNFINISHED = auto()
    VICTORY = auto()
    LOSS = auto()
    TIE = auto()


TERMINAL_STATUSES = frozenset({Status.VICTORY, Status.LOSS, Status.TIE})


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    game_id: UUID
    owner_key: str
    board: Board
    theme: ThemeModel
    status: Status
    started_at: datetime
    finished_at: Optional[datetime] = None

    @classmethod
    def new_game(cls, owner_key: str, theme: ThemeModel, clock: Clock = utc_now) -> Self:
        """Fresh game with an empty board, started right now."""
        return cls(
            game_id=uuid4(),
            owner_key=owner_key,
            board=Board.create(),
            theme=theme,
            status=Status.UNFINISHED,
            started_at=clock(),
            finished_at=None,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameSession from the information the Service layer actually has"""

        # Validation
        status_name = model.status.upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )
        status = Status[status_name]
        if (status in TERMINAL_STATUSES) != (model.finished_at is not None):
            raise GameStateError(
                f"Finish time must be set exactly when the game is over. status: {model.status}"
            )

        return cls(
            game_id=model.game_id,
            owner_key=model.owner_key,
            board=Board.from_symbols(model.grid),
            theme=model.theme,
            status=status,
            started_at=model.started_at,
            finished_at=model.finished_at,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            game_id=self.game_id,
            owner_key=self.owner_key,
            grid=self.board.to_symbols(),
            theme=self.theme,
            status=self.status.name.lower(),
            started_at=self.started_at,
            finished_at=self.finished_at,
        )

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def is_full(self) -> bool:
        return self.board.is_full()

    def play_turn(
        self,
        column: int,
        rng: Optional[ColumnChooser] = None,
        clock: Clock = utc_now,
    ) -> Status:
        """
        Play one full turn
        -----

        1. the player drops a token in the requested column
        2. the opponent answers (even if the player just won, so both can complete a line in the same turn)
        3. update game status (if needed)
        """
        player_win = self.apply_player_move(column)
        opponent_win = self.apply_opponent_move(rng)
        self._update_game_status(player_win, opponent_win, clock)
        return self.status

    def apply_player_move(self, column: int) -> bool:
        """
        Drop a player token. Returns True if it completed a line.

        NOTE status is left untouched, that is decided once the opponent has answered.
        """
        self._assert_in_progress()
        row = self.board.drop(column, Cell.PLAYER)
        return self.board.detect_win(row, column, Cell.PLAYER)

    def apply_opponent_move(self, rng: Optional[ColumnChooser] = None) -> bool:
        """Drop an opponent token in a random open column. A full board leaves nothing to play: no win."""
        column = choose_column(self.board, rng or random)
        if column is None:
            return False
        row = self.board.drop(column, Cell.OPPONENT)
        return self.board.detect_win(row, column, Cell.OPPONENT)

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.is_finished:
            raise GameFinishedError(
                f"Game is over, no more moves accepted. status: {self.status.name.lower()}"
            )

    def _update_game_status(
        self, player_win: bool, opponent_win: bool, clock: Clock = utc_now
    ) -> None:
        """Performs checks to see if game has ended and changes status accordingly."""
        if player_win and opponent_win:
            self._change_status(Status.TIE, clock)
        elif player_win:
            self._change_status(Status.VICTORY, clock)
        elif opponent_win:
            self._change_status(Status.LOSS, clock)
        elif self.is_full():
            self._change_status(Status.TIE, clock)

    def _change_status(self, new_status: Status, clock: Clock = utc_now) -> None:
        """Only ever moves out of UNFINISHED, and stamps the finish time when it does."""
        if self.is_finished:
            raise GameStateError(
                f"Cannot change status of a finished game. status: {self.status.name.lower()}"
            )
        self.status = new_status
        if self.is_finished:
            self.finished_at = clock()
