"""
Live tests against a real Jellyfin server.

Configured through JF_SERVER_URL, JF_USERNAME and JF_PASSWORD; skipped when
they are not set. The account must be an administrator.
"""
import os
import uuid

import pytest
import pytest_asyncio

from jellyfin_client import HttpRequestError, JellyfinClient, SubtitleMode, connect, load_settings

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not all(os.environ.get(k) for k in ("JF_SERVER_URL", "JF_USERNAME", "JF_PASSWORD")),
        reason="JF_SERVER_URL / JF_USERNAME / JF_PASSWORD not set",
    ),
]


@pytest_asyncio.fixture
async def live_client():
    return await connect(load_settings())


@pytest.mark.asyncio
async def test_auth_by_name_sets_session():
    settings = load_settings()
    client = JellyfinClient(settings.server_url)
    await client.auth_user_name(settings.username, settings.password)
    assert client.auth is not None


@pytest.mark.asyncio
async def test_auth_by_name_rejects_bad_credentials():
    client = JellyfinClient(load_settings().server_url)
    with pytest.raises(HttpRequestError):
        await client.auth_user_name("invalid_user", "wrong_password")
    assert client.auth is None


@pytest.mark.asyncio
async def test_get_users(live_client):
    assert await live_client.get_users(False, False)


@pytest.mark.asyncio
async def test_create_update_delete(live_client):
    name = f"tmp-{uuid.uuid4().hex[:10]}"
    user = await live_client.create_user(name, name)
    try:
        assert user.name == name
        user.configuration.subtitle_mode = SubtitleMode.SMART
        await live_client.update_user(user.id, user)
        fetched = await live_client.get_user_by_id(user.id)
        assert fetched.configuration.subtitle_mode is SubtitleMode.SMART

        with pytest.raises(HttpRequestError):
            await live_client.create_user(name, name)
    finally:
        await live_client.delete_user(user.id)

    with pytest.raises(HttpRequestError) as exc:
        await live_client.get_user_by_id(user.id)
    assert exc.value.status == 404
    assert exc.value.message == '"User not found"'
