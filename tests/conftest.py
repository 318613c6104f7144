"""
Shared fixtures: a fake Jellyfin app and clients wired to it through
httpx.ASGITransport, so no network is touched.
"""
import httpx
import pytest
import pytest_asyncio

from jellyfin_client import JellyfinClient
from tests.fake_server import create_app

BASE_URL = "http://jellyfin.test:8096"
ADMIN_NAME = "admin"
ADMIN_PASSWORD = "secret"
DEVICE_NAME = "test device"


@pytest.fixture
def fake_app():
    return create_app(ADMIN_NAME, ADMIN_PASSWORD)


@pytest.fixture
def transport(fake_app):
    return httpx.ASGITransport(app=fake_app)


@pytest.fixture
def client(transport):
    """Unauthenticated client."""
    return JellyfinClient(BASE_URL, device_name=DEVICE_NAME, transport=transport)


@pytest_asyncio.fixture
async def admin_client(client):
    """Client logged in as the admin user."""
    await client.auth_user_name(ADMIN_NAME, ADMIN_PASSWORD)
    return client
