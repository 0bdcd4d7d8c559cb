"""
Process settings, read from the environment once at startup.

`Settings.from_env()` is called by the entrypoint and the resulting object is
passed into `create_app`; nothing else reads `os.environ`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_JWT_SECRET = "dev-change-this-secret"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_command_timeout_s: int = 30

    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Login is disabled while no password hash is configured.
    auth_username: str = "demo"
    auth_password_hash: str = ""

    version: str = "1.0.0"
    log_level: str = "INFO"
    log_format: str = "text"
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )

    @classmethod
    def from_env(cls) -> Settings:
        defaults = cls()
        return cls(
            database_url=os.environ.get("DATABASE_URL", "").strip(),
            db_pool_min_size=_env_int("DB_POOL_MIN_SIZE", defaults.db_pool_min_size),
            db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", defaults.db_pool_max_size),
            db_command_timeout_s=_env_int("DB_COMMAND_TIMEOUT_S", defaults.db_command_timeout_s),
            jwt_secret=_env_str("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=_env_str("JWT_ALG", defaults.jwt_algorithm),
            access_token_expire_minutes=_env_int(
                "ACCESS_TOKEN_EXPIRE_MIN", defaults.access_token_expire_minutes
            ),
            auth_username=_env_str("AUTH_USERNAME", defaults.auth_username),
            auth_password_hash=os.environ.get("AUTH_PASSWORD_HASH", "").strip(),
            version=_env_str("APP_VERSION", defaults.version),
            log_level=_env_str("LOG_LEVEL", defaults.log_level),
            log_format=_env_str("LOG_FORMAT", defaults.log_format).lower(),
            cors_origins=_env_list("CORS_ORIGINS", defaults.cors_origins),
        )
