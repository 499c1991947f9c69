"""
The automated opponent.

No search or strategy: it picks uniformly among the columns that still have an open row.
Drawing from the open columns directly gives the same distribution as re-drawing from all columns until an open one comes up,
but always terminates.
"""

from typing import Optional, Protocol, Sequence

from src.connect_four.board import Board


class ColumnChooser(Protocol):
    """Anything with a random.Random-like choice() method."""

    def choice(self, seq: Sequence[int]) -> int: ...


def choose_column(board: Board, rng: ColumnChooser) -> Optional[int]:
    """None when the board is full (no legal move left)."""
    open_columns = board.open_columns()
    if not open_columns:
        return None
    return rng.choice(open_columns)
