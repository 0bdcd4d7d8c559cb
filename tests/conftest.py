"""Shared fixtures: in-memory repository, settings, app client and auth header."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from auth import security
from core.config import Settings
from fakes import InMemoryGenityRepository
from genity.service import GenityService
from main import create_app

TEST_SECRET = "test-secret-for-genity-api-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="postgresql://unused/test",
        jwt_secret=TEST_SECRET,
        version="0.9.0",
    )


@pytest.fixture
def repo() -> InMemoryGenityRepository:
    return InMemoryGenityRepository()


@pytest.fixture
def service(repo) -> GenityService:
    return GenityService(repo)


@pytest.fixture
def app(settings, repo):
    return create_app(settings, repository=repo)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_header(settings) -> dict[str, str]:
    token = security.build_access_token(
        subject="100",
        name="demo",
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}
