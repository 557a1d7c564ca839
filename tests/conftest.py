from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from core import db
from core.config import Settings
from main import create_app
from tests.fakes import FakeDatabase


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def test_settings() -> Settings:
    return Settings.model_validate(
        {
            "db_host": "db.test",
            "db_name": "membership_test",
            "log_level": "DEBUG",
        }
    )


@pytest.fixture()
def app(test_settings: Settings, fake_db: FakeDatabase):
    app = create_app(settings=test_settings)
    app.dependency_overrides[db.pool] = lambda: fake_db
    return app


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
