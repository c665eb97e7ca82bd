"""
Chambre API: Room Request/Response Schemas
============================================

What:  Pydantic models defining the room API contract.
How:   The validation layer parses raw JSON bodies into RoomCreate/RoomUpdate;
       routes declare RoomResponse as their response model so FastAPI
       serializes by alias and documents it in OpenAPI.

Wire format:
    Field names go over the wire in camelCase (roomNumber, isAvailable,
    createdAt, updatedAt). Python code uses snake_case. Payloads are accepted
    in either form (populate_by_name).
"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from chambre.schemas.common import CamelModel

RoomType = Literal["single", "double", "suite"]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RoomCreate(CamelModel):
    """
    What:  Fields accepted by POST /rooms.
    Rules: roomNumber, type, price, capacity and floor are required;
           isAvailable defaults to true and amenities to an empty list.
    """
    room_number: str = Field(min_length=1, max_length=50, description="Unique room number", examples=["101"])
    type: RoomType = Field(description="Room category", examples=["double"])
    price: float = Field(ge=0, allow_inf_nan=False, description="Nightly price", examples=[120.0])
    is_available: bool = Field(default=True, description="Whether the room can be booked")
    amenities: List[str] = Field(default_factory=list, description="Ordered list of amenities", examples=[["wifi", "tv"]])
    capacity: int = Field(ge=1, description="Number of guests", examples=[2])
    floor: int = Field(description="Floor number", examples=[1])
    description: Optional[str] = Field(default=None, description="Free-form description")

    @field_validator("room_number")
    @classmethod
    def strip_room_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("roomNumber must not be blank")
        return v


class RoomUpdate(CamelModel):
    """
    What:  Fields accepted by PUT /rooms/{id}.
    How:   Every field is optional; only the keys present in the body are
           applied. Present keys obey the same constraints as RoomCreate.
    """
    room_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    type: Optional[RoomType] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    is_available: Optional[bool] = None
    amenities: Optional[List[str]] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    floor: Optional[int] = None
    description: Optional[str] = None

    @field_validator("room_number")
    @classmethod
    def strip_room_number(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("roomNumber must not be blank")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RoomResponse(CamelModel):
    """Full representation of a stored room."""
    id: uuid.UUID = Field(description="Store-assigned identifier")
    room_number: str
    type: str
    price: float
    is_available: bool
    amenities: List[str]
    capacity: int
    floor: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RoomDeleteResponse(BaseModel):
    """Returned by DELETE /rooms/{id}: confirmation plus the room's prior state."""
    message: str = Field(default="Room deleted successfully")
    room: RoomResponse
