"""
Shared fixtures: an in-memory MongoDB double injected into the app.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storyhub.app import create_app
from storyhub.config import Settings
from storyhub.middleware import limiter
from storyhub.state import AppState

ADMIN_USERNAME = "storyadmin"
ADMIN_PASSWORD = "correct-horse-42"
ADMIN_HEADERS = {"Authorization": "Bearer admin-token-1"}


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        allowed_origins="http://localhost:3000",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def database():
    return AsyncMongoMockClient()["storyhub_test"]


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def state(app) -> AppState:
    return app.state.storyhub


@pytest_asyncio.fixture
async def app_state(settings, database) -> AppState:
    return AppState(database, settings)
