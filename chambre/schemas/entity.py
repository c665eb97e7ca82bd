"""
Chambre API: Entity Schemas
=============================

What:  Request/response contract for the generic /entities resource.
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from chambre.schemas.common import CamelModel


class EntityCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255, description="Entity name", examples=["Example Name"])

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class EntityResponse(CamelModel):
    id: uuid.UUID = Field(description="Store-assigned identifier")
    name: str
    created_at: datetime
    updated_at: datetime
