"""
Request-scoped logging middleware.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .error_handlers import unhandled_error_handler
from .logging_config import request_id_var

logger = logging.getLogger("access")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag the request with an id (reusing the caller's X-Request-ID when given),
    echo it on the response and write one access line when the response is ready.

    Unhandled exceptions are turned into the 500 envelope here, while the
    request id is still bound, so failed requests are tagged and logged too.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = await unhandled_error_handler(request, exc)

            duration_ms = round((time.perf_counter() - started) * 1000, 3)
            response.headers[REQUEST_ID_HEADER] = request_id
            principal = getattr(request.state, "principal", None)
            logger.info(
                "%s %s %s %.3fms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                    "principal": principal.id if principal is not None else None,
                },
            )
            return response
        finally:
            request_id_var.reset(token)
