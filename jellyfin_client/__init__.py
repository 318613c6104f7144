"""Async client for the Jellyfin media server API."""

import logging

from jellyfin_client.client import JellyfinClient
from jellyfin_client.config import ConfigError, Settings, connect, load_settings
from jellyfin_client.errors import (
    AuthNotFound,
    HttpRequestError,
    JellyfinError,
    NetworkError,
    UrlParseError,
)
from jellyfin_client.models import (
    BaseItem,
    ForgotPasswordResult,
    ItemsResult,
    PinRedeemResult,
    SessionInfo,
    SubtitleMode,
    User,
    UserAccessSchedule,
    UserAuth,
    UserConfiguration,
    UserItemData,
    UserPolicy,
)
from jellyfin_client.utils import build_authorization_header, decode_http_error

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AuthNotFound",
    "BaseItem",
    "ConfigError",
    "ForgotPasswordResult",
    "HttpRequestError",
    "ItemsResult",
    "JellyfinClient",
    "JellyfinError",
    "NetworkError",
    "PinRedeemResult",
    "SessionInfo",
    "Settings",
    "SubtitleMode",
    "UrlParseError",
    "User",
    "UserAccessSchedule",
    "UserAuth",
    "UserConfiguration",
    "UserItemData",
    "UserPolicy",
    "build_authorization_header",
    "connect",
    "decode_http_error",
    "load_settings",
]
