"""
Chambre API: Room Service Unit Tests
======================================

What:  Tests for RoomService with a mocked AsyncSession (no real DB).

What we test:
    ✅ Malformed and unknown ids raise NotFoundError
    ✅ Invalid payloads never reach the store
    ✅ Duplicate roomNumber raises ValidationError (pre-check and IntegrityError)
    ✅ Store failures are wrapped in DatabaseError
    ✅ Update applies only supplied fields; delete returns prior state
"""

import uuid
from datetime import timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from chambre.exceptions import DatabaseError, NotFoundError, ValidationError
from chambre.services.room_service import RoomService, parse_room_id, to_room_response


def scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestParseRoomId:

    def test_valid_uuid(self):
        key = uuid.uuid4()
        assert parse_room_id(str(key)) == key

    def test_malformed_id_is_not_found(self):
        with pytest.raises(NotFoundError):
            parse_room_id("64f74c8e524a1c0012a34567")


class TestToRoomResponse:

    def test_naive_timestamps_read_as_utc(self, stored_room):
        stored_room.created_at = stored_room.created_at.replace(tzinfo=None)
        stored_room.updated_at = stored_room.updated_at.replace(tzinfo=None)

        result = to_room_response(stored_room)

        assert result.created_at.tzinfo == timezone.utc
        assert result.updated_at.tzinfo == timezone.utc
        assert result.created_at.replace(tzinfo=None) == stored_room.created_at


class TestRoomServiceGet:

    def setup_method(self):
        self.service = RoomService()

    @pytest.mark.asyncio
    async def test_get_room_found(self, mock_db_session, stored_room):
        mock_db_session.get.return_value = stored_room

        result = await self.service.get_room(mock_db_session, str(stored_room.id))

        assert result.id == stored_room.id
        assert result.room_number == "204"
        assert result.amenities == ["wifi", "jacuzzi"]

    @pytest.mark.asyncio
    async def test_get_room_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_room(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_get_room_malformed_id_skips_store(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_room(mock_db_session, "not-an-id")
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_room_store_failure(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(DatabaseError):
            await self.service.get_room(mock_db_session, str(uuid.uuid4()))


class TestRoomServiceCreate:

    def setup_method(self):
        self.service = RoomService()

    @pytest.mark.asyncio
    async def test_create_room_success(self, mock_db_session, sample_room_payload):
        mock_db_session.execute.return_value = scalar_result(None)

        result = await self.service.create_room(mock_db_session, sample_room_payload)

        assert isinstance(result.id, uuid.UUID)
        assert result.room_number == "101"
        assert result.created_at == result.updated_at
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_room_invalid_payload_never_touches_store(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_room(mock_db_session, {"roomNumber": "101"})

        fields = {e["field"] for e in exc_info.value.errors}
        assert {"type", "price", "capacity", "floor"} <= fields
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_room_duplicate_number(self, mock_db_session, sample_room_payload):
        mock_db_session.execute.return_value = scalar_result(uuid.uuid4())

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_room(mock_db_session, sample_room_payload)

        assert exc_info.value.field == "roomNumber"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_room_integrity_error_is_validation_error(self, mock_db_session, sample_room_payload):
        mock_db_session.execute.return_value = scalar_result(None)
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(ValidationError):
            await self.service.create_room(mock_db_session, sample_room_payload)

    @pytest.mark.asyncio
    async def test_create_room_store_failure(self, mock_db_session, sample_room_payload):
        mock_db_session.execute.return_value = scalar_result(None)
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(DatabaseError):
            await self.service.create_room(mock_db_session, sample_room_payload)
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_room_commit_failure(self, mock_db_session, sample_room_payload):
        mock_db_session.execute.return_value = scalar_result(None)
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("down"))

        with pytest.raises(DatabaseError):
            await self.service.create_room(mock_db_session, sample_room_payload)


class TestRoomServiceUpdate:

    def setup_method(self):
        self.service = RoomService()

    @pytest.mark.asyncio
    async def test_update_only_supplied_fields(self, mock_db_session, stored_room):
        mock_db_session.get.return_value = stored_room
        before = stored_room.updated_at

        result = await self.service.update_room(
            mock_db_session, str(stored_room.id), {"price": 99.0, "isAvailable": False}
        )

        assert result.price == 99.0
        assert result.is_available is False
        assert result.room_number == "204"
        assert result.type == "suite"
        assert result.updated_at >= before
        # Number unchanged, so no uniqueness query
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_unknown_room(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_room(mock_db_session, str(uuid.uuid4()), {"price": 10})

    @pytest.mark.asyncio
    async def test_update_rejects_invalid_type(self, mock_db_session, stored_room):
        mock_db_session.get.return_value = stored_room

        with pytest.raises(ValidationError):
            await self.service.update_room(mock_db_session, str(stored_room.id), {"type": "penthouse"})
        assert stored_room.type == "suite"
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_to_taken_number(self, mock_db_session, stored_room):
        mock_db_session.get.return_value = stored_room
        mock_db_session.execute.return_value = scalar_result(uuid.uuid4())

        with pytest.raises(ValidationError):
            await self.service.update_room(mock_db_session, str(stored_room.id), {"roomNumber": "101"})
        assert stored_room.room_number == "204"


class TestRoomServiceDelete:

    def setup_method(self):
        self.service = RoomService()

    @pytest.mark.asyncio
    async def test_delete_returns_prior_state(self, mock_db_session, stored_room):
        mock_db_session.get.return_value = stored_room

        result = await self.service.delete_room(mock_db_session, str(stored_room.id))

        assert result.message == "Room deleted successfully"
        assert result.room.id == stored_room.id
        mock_db_session.delete.assert_awaited_once_with(stored_room)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_unknown_room(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_room(mock_db_session, str(uuid.uuid4()))
        mock_db_session.delete.assert_not_awaited()


class TestRoomServiceList:

    def setup_method(self):
        self.service = RoomService()

    @pytest.mark.asyncio
    async def test_list_rooms_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_rooms(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_rooms_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        with pytest.raises(DatabaseError):
            await self.service.list_rooms(mock_db_session, room_type="suite")
