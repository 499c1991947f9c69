"""The Game board implements all rules that effect the `position` (in connect four: which cells hold which token)"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import ColumnFullError, GameStateError, InvalidColumnError
from src.core.shared_types import CellSymbol

# (rows, columns). Row 0 is the bottom row where tokens settle.
BOARD_DIMENSIONS = (5, 7)
ROWS, COLUMNS = BOARD_DIMENSIONS
CONNECT_LENGTH = 4


class Cell(Enum):
    EMPTY = auto()
    PLAYER = auto()
    OPPONENT = auto()


CELL_TO_SYMBOL: dict[Cell, CellSymbol] = {
    Cell.EMPTY: CellSymbol.EMPTY,
    Cell.PLAYER: CellSymbol.PLAYER,
    Cell.OPPONENT: CellSymbol.OPPONENT,
}

SYMBOL_TO_CELL: dict[str, Cell] = {
    symbol.value: cell for cell, symbol in CELL_TO_SYMBOL.items()
}

# One (row, column) step per axis. Walking the negated step covers the opposite direction.
AXES: dict[str, tuple[int, int]] = {
    "horizontal": (0, 1),
    "vertical": (1, 0),
    "rising diagonal": (1, 1),
    "falling diagonal": (-1, 1),
}


@dataclass
class Board:
    grid: list[list[Cell]]

    @classmethod
    def create(cls) -> Self:
        return cls([[Cell.EMPTY] * COLUMNS for _ in range(ROWS)])

    @classmethod
    def from_symbols(cls, rows: list[list[str]]) -> Self:
        """Construct a board from its serialized form (bottom row first).

        A stored grid is not trusted: dimensions, symbols and gravity are all checked.
        """
        if len(rows) != ROWS or any(len(row) != COLUMNS for row in rows):
            raise GameStateError(f"Grid must be {ROWS}x{COLUMNS}.")

        unknown = {symbol for row in rows for symbol in row} - SYMBOL_TO_CELL.keys()
        if unknown:
            raise GameStateError(f"Unknown cell symbols in grid: {sorted(unknown)!r}")

        board = cls([[SYMBOL_TO_CELL[symbol] for symbol in row] for row in rows])
        for column in range(COLUMNS):
            if not board._has_gravity(column):
                raise GameStateError(f"Floating token found in column {column}.")
        return board

    def to_symbols(self) -> list[list[str]]:
        return [[CELL_TO_SYMBOL[cell].value for cell in row] for row in self.grid]

    def cell(self, row: int, column: int) -> Cell:
        return self.grid[row][column]

    def lowest_open_row(self, column: int) -> int:
        """Smallest row index in the column that is still empty."""
        self._assert_valid_column(column)
        for row in range(ROWS):
            if self.grid[row][column] == Cell.EMPTY:
                return row
        raise ColumnFullError(f"Column {column} is full.")

    def place(self, row: int, column: int, token: Cell) -> None:
        """Set a cell. The row must come from lowest_open_row() for that same column."""
        assert self.grid[row][column] == Cell.EMPTY
        assert row == 0 or self.grid[row - 1][column] != Cell.EMPTY
        self.grid[row][column] = token

    def drop(self, column: int, token: Cell) -> int:
        """Let the token fall into the column. Returns the row it landed on."""
        row = self.lowest_open_row(column)
        self.place(row, column, token)
        return row

    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for row in self.grid for cell in row)

    def open_columns(self) -> list[int]:
        """Columns that can still take a token. Only the top row has to be checked."""
        return [
            column
            for column in range(COLUMNS)
            if self.grid[ROWS - 1][column] == Cell.EMPTY
        ]

    def detect_win(self, row: int, column: int, token: Cell) -> bool:
        """
        Did placing `token` at (row, column) complete a line?
        ----

        For every axis, walk away from the placed cell in both directions and count the consecutive cells holding the same token.
        The placed cell itself counts as 1. Counting stops at the edge of the board or at the first cell that does not match.

        NOTE: only valid directly after placing at (row, column). This is not a scan of the full board.
        """
        for d_row, d_column in AXES.values():
            count = (
                1
                + self._count_in_direction(row, column, d_row, d_column, token)
                + self._count_in_direction(row, column, -d_row, -d_column, token)
            )
            if count >= CONNECT_LENGTH:
                return True
        return False

    # -- PRIVATE HELPERS ---
    def _count_in_direction(
        self, row: int, column: int, d_row: int, d_column: int, token: Cell
    ) -> int:
        count = 0
        row, column = row + d_row, column + d_column
        while is_within_bounds(row, column) and self.grid[row][column] == token:
            count += 1
            row, column = row + d_row, column + d_column
        return count

    def _has_gravity(self, column: int) -> bool:
        """No empty cell underneath an occupied one."""
        cells = [self.grid[row][column] for row in range(ROWS)]
        first_empty = next(
            (row for row, cell in enumerate(cells) if cell == Cell.EMPTY), ROWS
        )
        return all(cell == Cell.EMPTY for cell in cells[first_empty:])

    def _assert_valid_column(self, column: int) -> None:
        if not 0 <= column < COLUMNS:
            raise InvalidColumnError(
                f"Column {column} is off the board. Pick one from 0 to {COLUMNS - 1}."
            )


def is_within_bounds(row: int, column: int) -> bool:
    return (0 <= row < ROWS) and (0 <= column < COLUMNS)
