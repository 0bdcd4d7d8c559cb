"""
Liveness endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.api_route("/healthcheck", methods=["GET", "HEAD"], response_class=PlainTextResponse)
async def healthcheck(request: Request) -> str:
    return f"OK {request.app.state.settings.version}"
