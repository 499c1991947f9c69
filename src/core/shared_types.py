"""
Type definitions used across layers
"""

from datetime import datetime, timezone
from enum import StrEnum


class Status(StrEnum):
    UNFINISHED = "unfinished"
    VICTORY = "victory"
    LOSS = "loss"
    TIE = "tie"


# --- Serialized cell markers. The domain layer has its own Cell enum in src/connect_four/board.py
# --- NOTE the grid is exposed as rows from bottom (row 0) to top, each row holding one symbol per column


class CellSymbol(StrEnum):
    EMPTY = " "
    PLAYER = "X"
    OPPONENT = "O"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
