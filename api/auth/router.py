"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from . import schemas, service

router = APIRouter()


@router.post("/login")
def login(payload: schemas.LoginRequest, request: Request) -> schemas.TokenResponse:
    return service.login(payload, request.app.state.settings)
