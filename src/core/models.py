"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Self
from uuid import UUID

# Type aliases to make GameModel easier to read
OwnerKey = str
GridSymbols = list[list[str]]


@dataclass
class TokenModel:
    """A player's token. Only carried around, never interpreted by the game."""

    id: str
    display_name: str
    image_reference: str


@dataclass
class ThemeModel:
    color: str
    player_token: TokenModel
    opponent_token: TokenModel

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            color=data["color"],
            player_token=TokenModel(**data["player_token"]),
            opponent_token=TokenModel(**data["opponent_token"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class GameModel:
    """Transport-safe representation of a connect four game used between API, Service, DB, and Game layers."""

    game_id: UUID
    owner_key: OwnerKey
    grid: GridSymbols
    theme: ThemeModel
    status: str
    started_at: datetime
    finished_at: datetime | None
