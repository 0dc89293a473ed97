"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    layout: Mapped[str]
    moved_squares: Mapped[list[int]] = mapped_column(JSON, default=list)
    active_color: Mapped[str]
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    captured: Mapped[dict[str, str]] = mapped_column(JSON)
    selected: Mapped[Optional[int]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
