"""Tests for settings, database helpers, error envelopes and logging setup."""

import json
import logging

import pytest

from core.config import DEFAULT_JWT_SECRET, Settings
from core.db import Database, sanitize_database_url
from core.errors import (
    BadRequestError,
    FieldError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from core.logging_config import JSONFormatter, RequestContextFilter, request_id_var

# --- settings ---

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", " postgresql://u:p@db:5432/genity ")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "15")
    monkeypatch.setenv("APP_VERSION", "2.1.0")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")

    settings = Settings.from_env()

    assert settings.database_url == "postgresql://u:p@db:5432/genity"
    assert settings.access_token_expire_minutes == 15
    assert settings.version == "2.1.0"
    assert settings.log_format == "json"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_settings_defaults(monkeypatch):
    for name in ("JWT_SECRET", "DB_POOL_MAX_SIZE", "AUTH_PASSWORD_HASH", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "not-a-number")

    settings = Settings.from_env()

    assert settings.jwt_secret == DEFAULT_JWT_SECRET
    assert settings.db_pool_max_size == 5
    assert settings.auth_password_hash == ""
    assert settings.cors_origins == Settings().cors_origins


# --- database ---

def test_sanitize_database_url_drops_sslmode():
    url = "postgresql://u:p@db/genity?sslmode=require&application_name=api"
    assert sanitize_database_url(url) == "postgresql://u:p@db/genity?application_name=api"


def test_sanitize_database_url_without_query_is_unchanged():
    assert sanitize_database_url("postgresql://db/genity") == "postgresql://db/genity"


def test_database_requires_url():
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        Database("  ")


def test_database_pool_requires_connect():
    with pytest.raises(RuntimeError, match="not initialized"):
        Database("postgresql://db/genity").pool


async def test_database_close_without_connect_is_noop():
    await Database("postgresql://db/genity").close()


# --- errors ---

@pytest.mark.parametrize(
    "exc, status, code",
    [
        (BadRequestError(), 400, "BAD_REQUEST"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (NotFoundError(), 404, "NOT_FOUND"),
        (InternalError(), 500, "INTERNAL_ERROR"),
    ],
)
def test_error_envelope(exc, status, code):
    assert exc.http_status == status
    body = exc.to_response()
    assert body["error"]["code"] == code
    assert body["error"]["message"]


def test_validation_error_lists_fields():
    exc = ValidationError([FieldError("name", "cannot be blank")])
    assert exc.http_status == 400
    assert exc.to_response()["error"]["details"] == [{"field": "name", "error": "cannot be blank"}]


def test_unauthorized_sets_challenge_header():
    assert UnauthorizedError().headers() == {"WWW-Authenticate": "Bearer"}


# --- logging ---

def _record(**extra):
    record = logging.LogRecord("genity.service", logging.INFO, __file__, 1, "genity_created", (), None)
    record.__dict__.update(extra)
    return record


def test_request_context_filter_uses_current_request_id():
    token = request_id_var.set("req-1")
    try:
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-1"


def test_request_context_filter_defaults_outside_request():
    record = _record()
    RequestContextFilter().filter(record)
    assert record.request_id == "-"


def test_json_formatter_includes_extras():
    out = json.loads(JSONFormatter().format(_record(genity_id="g1", request_id="req-1")))
    assert out["message"] == "genity_created"
    assert out["level"] == "INFO"
    assert out["genity_id"] == "g1"
    assert out["request_id"] == "req-1"
