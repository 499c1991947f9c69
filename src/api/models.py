"""Requests and Response models"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.connect_four.board import COLUMNS
from src.core.exceptions import InvalidColumnError, InvalidRequestError
from src.core.shared_types import Status

OwnerKey = str
HEX_COLOR = re.compile(r"#?[0-9A-Fa-f]{6}")


# --- SHARED MODELS ---
class TokenSchema(BaseModel):
    id: str
    display_name: str
    image_reference: str


class ThemeSchema(BaseModel):
    color: str
    player_token: TokenSchema
    opponent_token: TokenSchema

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        if not HEX_COLOR.fullmatch(value):
            raise InvalidRequestError(
                f"Cannot interpret color: {value!r} as a hex color (#RRGGBB)."
            )
        return value if value.startswith("#") else f"#{value}"


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    owner_key: OwnerKey
    theme: ThemeSchema


class ListGamesRequest(BaseModel):
    owner_key: OwnerKey


class GetGameRequest(BaseModel):
    owner_key: OwnerKey
    game_id: UUID


class MoveRequest(BaseModel):
    owner_key: OwnerKey
    game_id: UUID
    column: int

    @field_validator("column")
    @classmethod
    def validate_column(cls, value: int) -> int:
        if not 0 <= value < COLUMNS:
            raise InvalidColumnError(
                f"Column {value} is off the board. Pick one from 0 to {COLUMNS - 1}."
            )
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    owner_key: OwnerKey
    grid: list[list[str]]
    theme: ThemeSchema
    status: Status
    started_at: datetime
    finished_at: Optional[datetime]


class GameListResponse(BaseModel):
    owner_key: OwnerKey
    games: list[GameResponse]
