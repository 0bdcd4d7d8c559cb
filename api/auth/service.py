"""
Auth business logic.

There is a single configured account; a successful login returns a
short-lived access token that the mutating routes accept.
"""

from __future__ import annotations

import hmac
import logging

from core.config import Settings
from core.errors import UnauthorizedError

from . import schemas, security

logger = logging.getLogger(__name__)


def login(payload: schemas.LoginRequest, settings: Settings) -> schemas.TokenResponse:
    if not settings.auth_password_hash:
        logger.warning("login_disabled username=%s", payload.username)
        raise UnauthorizedError("Invalid username or password.")

    username_ok = hmac.compare_digest(
        payload.username.encode("utf-8"), settings.auth_username.encode("utf-8")
    )
    # bcrypt runs even when the username is wrong.
    password_ok = security.verify_password(payload.password, settings.auth_password_hash)
    if not (username_ok and password_ok):
        logger.info("login_failed username=%s", payload.username)
        raise UnauthorizedError("Invalid username or password.")

    access_token = security.build_access_token(
        subject=settings.auth_username,
        name=settings.auth_username,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    logger.info("login_succeeded", extra={"principal": settings.auth_username})
    return schemas.TokenResponse(access_token=access_token)


def principal_from_access_token(access_token: str, settings: Settings) -> schemas.Principal:
    try:
        payload = security.decode_access_token(
            access_token,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    except security.AuthSecurityError as exc:
        raise UnauthorizedError(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise UnauthorizedError("Invalid access token subject.")

    return schemas.Principal(id=subject, name=str(payload.get("name") or subject))
