from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from jellyfin_client.client import JellyfinClient
from jellyfin_client.errors import JellyfinError


class ConfigError(JellyfinError):
    """Required environment variables are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    server_url: str
    username: str
    password: str
    timeout: float = 30.0
    device_name: Optional[str] = None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read JF_SERVER_URL, JF_USERNAME, JF_PASSWORD (+ optional JF_TIMEOUT, JF_DEVICE_NAME)."""
    env = os.environ if environ is None else environ

    server_url = env.get("JF_SERVER_URL", "").strip()
    username = env.get("JF_USERNAME", "").strip()
    # passwords may legitimately contain surrounding spaces
    password = env.get("JF_PASSWORD", "")

    missing = [
        name
        for name, value in (
            ("JF_SERVER_URL", server_url),
            ("JF_USERNAME", username),
            ("JF_PASSWORD", password),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required env vars: {', '.join(missing)}")

    raw_timeout = env.get("JF_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else 30.0
    except ValueError as exc:
        raise ConfigError(f"JF_TIMEOUT must be a number, got {raw_timeout!r}") from exc

    device_name = env.get("JF_DEVICE_NAME", "").strip() or None
    return Settings(server_url, username, password, timeout, device_name)


async def connect(settings: Settings, **kwargs) -> JellyfinClient:
    """Build a client from settings and authenticate it by user name."""
    return await JellyfinClient.with_auth_name(
        settings.server_url,
        settings.username,
        settings.password,
        device_name=settings.device_name,
        timeout=settings.timeout,
        **kwargs,
    )
