"""
Chambre API: Entity Service
=============================

What:  List and create operations for the generic /entities collection.
"""

import logging
import uuid
from typing import Any, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chambre.exceptions import DatabaseError, ValidationError
from chambre.models.entity import Entity
from chambre.models.room import as_utc, utc_now
from chambre.schemas.entity import EntityResponse
from chambre.services.validation import Invalid, validate_entity_payload

logger = logging.getLogger(__name__)


def to_entity_response(entity: Entity) -> EntityResponse:
    return EntityResponse(
        id=entity.id,
        name=entity.name,
        created_at=as_utc(entity.created_at),
        updated_at=as_utc(entity.updated_at),
    )


class EntityService:

    async def list_entities(self, db: AsyncSession) -> List[EntityResponse]:
        try:
            result = await db.execute(select(Entity).order_by(Entity.created_at, Entity.name))
            return [to_entity_response(e) for e in result.scalars().all()]
        except Exception as e:
            logger.error("Database error listing entities: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error retrieving entities",
                context={"error_type": type(e).__name__},
            ) from e

    async def create_entity(self, db: AsyncSession, payload: Any) -> EntityResponse:
        result = validate_entity_payload(payload)
        if isinstance(result, Invalid):
            raise ValidationError(
                message="Entity validation failed",
                errors=[err.to_dict() for err in result.errors],
            )

        try:
            now = utc_now()
            entity = Entity(id=uuid.uuid4(), name=result.data.name, created_at=now, updated_at=now)
            db.add(entity)
            await db.commit()
        except Exception as e:
            logger.error("Database error creating entity: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error creating entity",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Entity created: %s", entity.id)
        return to_entity_response(entity)


entity_service = EntityService()
