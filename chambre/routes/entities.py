"""
Chambre API: Entity Route Handlers
====================================

What:  GET /entities (list) and POST /entities (create).
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chambre.database import get_db_session
from chambre.routes import json_body
from chambre.schemas.common import ErrorResponse
from chambre.schemas.entity import EntityCreate, EntityResponse
from chambre.services.entity_service import entity_service

router = APIRouter(prefix="/entities", tags=["Entities"])


@router.get(
    "",
    response_model=List[EntityResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all entities",
)
async def list_entities(db: AsyncSession = Depends(get_db_session)) -> List[EntityResponse]:
    return await entity_service.list_entities(db=db)


@router.post(
    "",
    response_model=EntityResponse,
    status_code=201,
    responses={
        400: {"description": "Missing or blank name", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create an entity",
    openapi_extra=json_body(EntityCreate),
)
async def create_entity(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> EntityResponse:
    return await entity_service.create_entity(db=db, payload=payload)
