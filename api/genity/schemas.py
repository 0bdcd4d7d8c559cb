"""
Genity API schemas (request/response models).

Request models only describe the shape of the body; the value rules
(required, max length) are enforced by the service.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from .entity import Genity as GenityEntity


class CreateGenityRequest(BaseModel):
    name: str = ""


class UpdateGenityRequest(BaseModel):
    name: str = ""


class Genity(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: GenityEntity) -> Genity:
        return cls(
            id=entity.id,
            name=entity.name,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
