"""
Chambre API: Room Route Handlers
==================================

What:  GET/POST /rooms and GET/PUT/DELETE /rooms/{room_id}.
How:   Extracts path, query and body data, delegates to RoomService, and
       sets the status code. No business logic lives here.

Request bodies are taken as raw JSON and validated by the service layer;
`openapi_extra` documents their schema in /api-docs.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from chambre.database import get_db_session
from chambre.routes import json_body
from chambre.schemas.common import ErrorResponse
from chambre.schemas.room import RoomCreate, RoomDeleteResponse, RoomResponse, RoomUpdate
from chambre.services.room_service import room_service

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get(
    "",
    response_model=List[RoomResponse],
    responses={
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List rooms",
    description="Returns every room, optionally filtered by availability and type.",
)
async def list_rooms(
    available: Optional[bool] = Query(
        default=None,
        description="Only rooms whose isAvailable matches this value",
    ),
    room_type: Optional[str] = Query(
        default=None,
        alias="type",
        description="Only rooms of this type: single, double or suite",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[RoomResponse]:
    return await room_service.list_rooms(db=db, available=available, room_type=room_type)


@router.get(
    "/{room_id}",
    response_model=RoomResponse,
    responses={
        404: {"description": "Room not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a room by ID",
)
async def get_room(
    room_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    """
    Args:
        room_id: Taken as a plain string so a malformed id yields 404
                 (no such room) rather than a request validation error.
    """
    return await room_service.get_room(db=db, room_id=room_id)


@router.post(
    "",
    response_model=RoomResponse,
    status_code=201,
    responses={
        400: {"description": "Invalid payload or duplicate roomNumber", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a room",
    description="Creates a room. The store assigns its id and timestamps.",
    openapi_extra=json_body(RoomCreate),
)
async def create_room(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.create_room(db=db, payload=payload)


@router.put(
    "/{room_id}",
    response_model=RoomResponse,
    responses={
        400: {"description": "Invalid payload or duplicate roomNumber", "model": ErrorResponse},
        404: {"description": "Room not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Update a room",
    description="Replaces the supplied fields of a room; other fields are left unchanged.",
    openapi_extra=json_body(RoomUpdate),
)
async def update_room(
    room_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.update_room(db=db, room_id=room_id, payload=payload)


@router.delete(
    "/{room_id}",
    response_model=RoomDeleteResponse,
    responses={
        404: {"description": "Room not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a room",
    description="Permanently removes a room and returns the state it had.",
)
async def delete_room(
    room_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> RoomDeleteResponse:
    return await room_service.delete_room(db=db, room_id=room_id)
