"""Database tables / schema"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    # autoincrementing row id keeps the creation order for listing an owner's games
    row_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(unique=True, index=True)
    owner_key: Mapped[str] = mapped_column(index=True)
    grid: Mapped[list[list[str]]] = mapped_column(JSON)
    theme: Mapped[dict[str, Any]] = mapped_column(JSON)
    status: Mapped[str]
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
