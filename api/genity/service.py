"""
Genity use cases.

The service is stateless apart from its repository reference. It is the only
place input is validated and ids/timestamps are assigned; "row absent" from
the repository becomes `NotFoundError`, every other storage failure passes
through untouched.
"""

from __future__ import annotations

import dataclasses
import logging

from core.db import NoRowsError
from core.errors import FieldError, NotFoundError, ValidationError

from . import schemas
from .entity import generate_id, utc_now
from .entity import Genity as GenityEntity
from .repository import GenityRepository

NAME_MAX_LENGTH = 128


def validate_name(name: str) -> list[FieldError]:
    # Checked on the raw value; whitespace-only names are accepted.
    if not name:
        return [FieldError("name", "cannot be blank")]
    if len(name) > NAME_MAX_LENGTH:
        return [FieldError("name", f"the length must be no more than {NAME_MAX_LENGTH}")]
    return []


def validate_request(request: schemas.CreateGenityRequest | schemas.UpdateGenityRequest) -> None:
    errors = validate_name(request.name)
    if errors:
        raise ValidationError(errors)


class GenityService:
    def __init__(self, repository: GenityRepository, logger: logging.Logger | None = None) -> None:
        self._repo = repository
        self._logger = logger or logging.getLogger(__name__)

    async def _get_entity(self, genity_id: str) -> GenityEntity:
        try:
            return await self._repo.get(genity_id)
        except NoRowsError as exc:
            raise NotFoundError() from exc

    async def get(self, genity_id: str) -> schemas.Genity:
        return schemas.Genity.from_entity(await self._get_entity(genity_id))

    async def count(self) -> int:
        return await self._repo.count()

    async def query(self, offset: int, limit: int) -> list[schemas.Genity]:
        items = await self._repo.query(offset, limit)
        return [schemas.Genity.from_entity(item) for item in items or []]

    async def create(self, request: schemas.CreateGenityRequest) -> schemas.Genity:
        validate_request(request)

        now = utc_now()
        genity_id = generate_id()
        await self._repo.create(
            GenityEntity(id=genity_id, name=request.name, created_at=now, updated_at=now)
        )
        self._logger.info("genity_created", extra={"genity_id": genity_id})
        return await self.get(genity_id)

    async def update(self, genity_id: str, request: schemas.UpdateGenityRequest) -> schemas.Genity:
        validate_request(request)

        current = await self._get_entity(genity_id)
        # updated_at never moves backwards.
        updated_at = max(utc_now(), current.updated_at)
        updated = dataclasses.replace(current, name=request.name, updated_at=updated_at)
        try:
            await self._repo.update(updated)
        except NoRowsError as exc:
            raise NotFoundError() from exc

        self._logger.info("genity_updated", extra={"genity_id": genity_id})
        return schemas.Genity.from_entity(updated)

    async def delete(self, genity_id: str) -> schemas.Genity:
        current = await self._get_entity(genity_id)
        try:
            await self._repo.delete(genity_id)
        except NoRowsError as exc:
            raise NotFoundError() from exc

        self._logger.info("genity_deleted", extra={"genity_id": genity_id})
        return schemas.Genity.from_entity(current)
