"""
Error hierarchy shared by every feature.

Each `AppError` carries the HTTP status and a stable code; the handlers in
`core/error_handlers.py` are the only place these become responses.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "error": self.error}


class AppError(Exception):
    http_status = 500
    code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred."

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def headers(self) -> dict[str, str] | None:
        return None

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(AppError):
    http_status = 400
    code = "VALIDATION_ERROR"
    default_message = "There is some problem with the data you submitted."

    def __init__(self, errors: list[FieldError], message: str = "") -> None:
        super().__init__(message)
        self.errors = list(errors)

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["details"] = [e.to_dict() for e in self.errors]
        return body


class BadRequestError(AppError):
    http_status = 400
    code = "BAD_REQUEST"
    default_message = "Your request is in a bad format."


class UnauthorizedError(AppError):
    http_status = 401
    code = "UNAUTHORIZED"
    default_message = "You are not authenticated to perform the requested action."

    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    http_status = 404
    code = "NOT_FOUND"
    default_message = "The requested resource was not found."


class InternalError(AppError):
    pass
