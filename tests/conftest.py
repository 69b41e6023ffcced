import os
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Cheap hashes for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from qaforum.config import database  # noqa: E402
from qaforum.main import create_app  # noqa: E402
from qaforum.utils.websocket_utils import NotificationChannel  # noqa: E402


@pytest.fixture
def mongo_db(monkeypatch):
    """
    Bind the persistence layer to a fresh in-memory Mongo database.
    """
    db = AsyncMongoMockClient()["fake_so_test"]
    monkeypatch.setattr(database, "db", db)
    return db


@pytest.fixture
def broken_collection(monkeypatch):
    """
    Make every collection lookup return one mock; tests arm its methods to fail.
    """
    collection = MagicMock()
    monkeypatch.setattr(database, "get_collection", lambda name: collection)
    return collection


@pytest.fixture
def channel():
    return MagicMock(spec=NotificationChannel)


@pytest_asyncio.fixture
async def client(channel):
    """
    Provide an HTTPX AsyncClient bound to a fresh app wired to a mock channel.
    """
    app = create_app(channel=channel)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
