"""
Genity API endpoints.

Reads are public; create/update/delete require a valid access token.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from auth import dependencies as auth_dependencies
from auth.schemas import Principal
from core.errors import BadRequestError
from core.pagination import Pages

from . import schemas
from .service import GenityService

logger = logging.getLogger(__name__)

router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)


def get_service(request: Request) -> GenityService:
    return request.app.state.genity_service


def read_body(model: type[BodyT]) -> Callable[[Request], Awaitable[BodyT]]:
    """
    Decode the JSON body into `model`.

    Declared after the auth dependency on protected routes, so a missing token
    is reported before a malformed body.
    """

    async def dependency(request: Request) -> BodyT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.info("malformed_body path=%s: %s", request.url.path, exc)
            raise BadRequestError() from exc

    return dependency


@router.get("/genitys/{genity_id}")
async def get_genity(
    genity_id: str,
    service: GenityService = Depends(get_service),
) -> schemas.Genity:
    return await service.get(genity_id)


@router.get("/genitys")
async def query_genitys(
    request: Request,
    response: Response,
    service: GenityService = Depends(get_service),
) -> dict:
    count = await service.count()
    pages = Pages.from_request(request, count)
    pages.items = await service.query(pages.offset, pages.limit)

    link = pages.link_header(str(request.url.replace(query="")))
    if link:
        response.headers["Link"] = link
    return pages.to_dict()


@router.post("/genitys", status_code=status.HTTP_201_CREATED)
async def create_genity(
    _: Principal = Depends(auth_dependencies.get_current_principal),
    payload: schemas.CreateGenityRequest = Depends(read_body(schemas.CreateGenityRequest)),
    service: GenityService = Depends(get_service),
) -> schemas.Genity:
    return await service.create(payload)


@router.put("/genitys/{genity_id}")
async def update_genity(
    genity_id: str,
    _: Principal = Depends(auth_dependencies.get_current_principal),
    payload: schemas.UpdateGenityRequest = Depends(read_body(schemas.UpdateGenityRequest)),
    service: GenityService = Depends(get_service),
) -> schemas.Genity:
    return await service.update(genity_id, payload)


@router.delete("/genitys/{genity_id}")
async def delete_genity(
    genity_id: str,
    _: Principal = Depends(auth_dependencies.get_current_principal),
    service: GenityService = Depends(get_service),
) -> schemas.Genity:
    return await service.delete(genity_id)
