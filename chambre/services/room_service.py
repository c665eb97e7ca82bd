"""
Chambre API: Room Service
===========================

What:  The five room operations: list, get, create, update, delete.
How:   Each method validates its input, issues one store operation through
       the request's AsyncSession, and returns a response schema.
Who:   Called by the /rooms route handlers.

Error Handling Strategy:
    - Malformed or unknown id          → NotFoundError   (404)
    - Invalid payload / duplicate number → ValidationError (400)
    - Anything the store raises         → DatabaseError   (500)
    Application exceptions propagate unchanged; everything else is wrapped
    so driver details never reach the client.

Design:
    RoomService is stateless. The session is passed into every call, so
    the service holds no connection and each request gets its own
    transaction. Writes are committed here, before the route returns;
    get_db_session only rolls back and closes.
"""

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chambre.exceptions import ChambreError, DatabaseError, NotFoundError, ValidationError
from chambre.models.room import Room, as_utc, utc_now
from chambre.schemas.room import RoomDeleteResponse, RoomResponse
from chambre.services.validation import Invalid, validate_room_payload

logger = logging.getLogger(__name__)


def to_room_response(room: Room) -> RoomResponse:
    return RoomResponse(
        id=room.id,
        room_number=room.room_number,
        type=room.type,
        price=room.price,
        is_available=room.is_available,
        amenities=list(room.amenities or []),
        capacity=room.capacity,
        floor=room.floor,
        description=room.description,
        created_at=as_utc(room.created_at),
        updated_at=as_utc(room.updated_at),
    )


def parse_room_id(room_id: str) -> uuid.UUID:
    """
    Converts a path identifier into the store's key type.

    A string that is not a UUID cannot name any room, so it is reported
    as not found rather than as a validation error.
    """
    try:
        return uuid.UUID(str(room_id))
    except ValueError:
        raise NotFoundError(resource="room", resource_id=str(room_id))


def _raise_invalid(result: Invalid) -> None:
    raise ValidationError(
        message="Room validation failed",
        errors=[e.to_dict() for e in result.errors],
    )


class RoomService:
    """
    Business logic layer for room operations.

    Responsibilities:
        - list_rooms():  filtered listing (availability, type)
        - get_room():    single lookup with not-found handling
        - create_room(): validate → uniqueness check → insert
        - update_room(): lookup → validate → uniqueness check → apply supplied fields
        - delete_room(): lookup → hard delete → return prior state
    """

    async def list_rooms(
        self,
        db: AsyncSession,
        available: Optional[bool] = None,
        room_type: Optional[str] = None,
    ) -> List[RoomResponse]:
        """
        List rooms matching the optional filters, oldest first.

        An empty match is an empty list, never an error.
        """
        try:
            query = select(Room)
            if available is not None:
                query = query.where(Room.is_available == available)
            if room_type:
                query = query.where(Room.type == room_type)
            query = query.order_by(Room.created_at, Room.room_number)

            result = await db.execute(query)
            rooms = list(result.scalars().all())
            return [to_room_response(room) for room in rooms]

        except Exception as e:
            logger.error("Database error listing rooms: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve rooms. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_room(self, db: AsyncSession, room_id: str) -> RoomResponse:
        """
        Retrieve a single room by id.

        Raises:
            NotFoundError: id is malformed or no room has it (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        room = await self._load(db, room_id)
        return to_room_response(room)

    async def create_room(self, db: AsyncSession, payload: Any) -> RoomResponse:
        """
        Create a room from a raw JSON body.

        The store assigns the id and both timestamps; the response carries them.

        Raises:
            ValidationError: payload invalid or roomNumber already taken (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        result = validate_room_payload(payload)
        if isinstance(result, Invalid):
            _raise_invalid(result)
        data = result.data

        try:
            await self._ensure_unique_number(db, data.room_number)

            now = utc_now()
            room = Room(id=uuid.uuid4(), created_at=now, updated_at=now, **data.model_dump())
            db.add(room)
            await db.flush()
            await db.commit()
            logger.info("Room created: %s (number=%s)", room.id, room.room_number)
            return to_room_response(room)

        except ChambreError:
            raise
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same number
            raise self._duplicate_number(data.room_number) from e
        except Exception as e:
            logger.error("Database error creating room: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the room. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def update_room(self, db: AsyncSession, room_id: str, payload: Any) -> RoomResponse:
        """
        Apply the supplied fields to an existing room.

        Fields absent from the payload keep their stored values. updatedAt is
        refreshed even when the payload changes nothing.

        Raises:
            NotFoundError: id is malformed or unknown (→ 404)
            ValidationError: payload invalid or new roomNumber taken (→ 400)
            DatabaseError: update failed (→ 500)
        """
        room = await self._load(db, room_id)

        result = validate_room_payload(payload, partial=True)
        if isinstance(result, Invalid):
            _raise_invalid(result)
        changes = result.data.model_dump(exclude_unset=True)

        try:
            new_number = changes.get("room_number")
            if new_number is not None and new_number != room.room_number:
                await self._ensure_unique_number(db, new_number, exclude_id=room.id)

            for name, value in changes.items():
                setattr(room, name, value)
            room.updated_at = utc_now()
            await db.flush()
            await db.commit()
            logger.info("Room updated: %s (fields=%s)", room.id, sorted(changes))
            return to_room_response(room)

        except ChambreError:
            raise
        except IntegrityError as e:
            raise self._duplicate_number(changes.get("room_number", "")) from e
        except Exception as e:
            logger.error("Database error updating room %s: %s", room_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the room. Please try again.",
                context={"room_id": str(room_id), "error_type": type(e).__name__},
            ) from e

    async def delete_room(self, db: AsyncSession, room_id: str) -> RoomDeleteResponse:
        """
        Hard-delete a room and return the state it had before deletion.

        Raises:
            NotFoundError: id is malformed or unknown (→ 404)
            DatabaseError: delete failed (→ 500)
        """
        room = await self._load(db, room_id)
        snapshot = to_room_response(room)

        try:
            await db.delete(room)
            await db.commit()
        except Exception as e:
            logger.error("Database error deleting room %s: %s", room_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the room. Please try again.",
                context={"room_id": str(room_id), "error_type": type(e).__name__},
            ) from e

        logger.info("Room deleted: %s (number=%s)", snapshot.id, snapshot.room_number)
        return RoomDeleteResponse(message="Room deleted successfully", room=snapshot)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, room_id: str) -> Room:
        key = parse_room_id(room_id)
        try:
            room = await db.get(Room, key)
        except Exception as e:
            logger.error("Database error fetching room %s: %s", room_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the room. Please try again.",
                context={"room_id": str(room_id)},
            ) from e

        if room is None:
            raise NotFoundError(resource="room", resource_id=str(room_id))
        return room

    async def _ensure_unique_number(
        self,
        db: AsyncSession,
        room_number: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        query = select(Room.id).where(Room.room_number == room_number)
        if exclude_id is not None:
            query = query.where(Room.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise self._duplicate_number(room_number)

    @staticmethod
    def _duplicate_number(room_number: str) -> ValidationError:
        return ValidationError(
            message=f"A room with number '{room_number}' already exists",
            field="roomNumber",
            errors=[{"field": "roomNumber", "message": "roomNumber must be unique"}],
        )


# ── Singleton Instance ────────────────────────────────────────────────────
room_service = RoomService()
