"""
Chambre API: Room SQLAlchemy Model
====================================

What:  ORM model representing the `rooms` collection.
How:   Inherits from the shared DeclarativeBase; Alembic and
       Database.create_all() read it to build the schema.
Who:   Used by RoomService for CRUD operations.

Table Design:
    - UUID primary key: assigned on insert, never updated
    - room_number: unique, backs the "one room per number" rule
    - type: short string constrained to ROOM_TYPES by validation
    - amenities: ordered JSON array of strings
    - created_at / updated_at: UTC timestamps maintained by the service
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from chambre.database import Base

ROOM_TYPES = ("single", "double", "suite")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Room(Base):
    """
    A bookable room.

    Lifecycle:
        1. Created by POST /rooms (id, created_at, updated_at assigned)
        2. Any supplied field replaced by PUT /rooms/{id} (updated_at refreshed)
        3. Removed by DELETE /rooms/{id} (hard delete)
    """

    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    room_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Human-facing room number, unique within the collection",
    )

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="One of: single, double, suite",
    )

    price: Mapped[float] = mapped_column(Float, nullable=False)

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    floor: Mapped[int] = mapped_column(Integer, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    # The list endpoint filters on these two columns
    __table_args__ = (
        Index("idx_rooms_type_available", "type", "is_available"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, room_number='{self.room_number}', type='{self.type}')>"
