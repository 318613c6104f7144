from __future__ import annotations

import hashlib
import json
import logging
import platform
from typing import Any, Dict, List, Optional

import httpx

from jellyfin_client.errors import HttpRequestError

CLIENT_NAME = "jellyfin-client"
PROTOCOL_VERSION = 1
AUTH_HEADER = "X-Emby-Authorization"

logger = logging.getLogger(__name__)


def default_device_name() -> str:
    return platform.node() or "unknown-device"


def build_authorization_header(device_name: str, token: str = "") -> str:
    """Return the `X-Emby-Authorization` value identifying this client and device."""
    device = device_name.replace(" ", "_")
    device_id = hashlib.md5(device.encode("utf-8")).hexdigest()
    return (
        f'MediaBrowser Client="{CLIENT_NAME}", Device="{device}", '
        f'DeviceId="{device_id}", Version={PROTOCOL_VERSION}, Token="{token}"'
    )


def password_digest(password: str) -> str:
    return hashlib.sha1(password.encode("utf-8")).hexdigest()


def _str_field(data: Dict[str, Any], key: str) -> Optional[str]:
    # ASP.NET emits camelCase, some proxies PascalCase
    for k in (key, key.capitalize()):
        val = data.get(k)
        if isinstance(val, str):
            return val
    return None


def _field_errors(data: Dict[str, Any]) -> Dict[str, List[str]]:
    raw = data.get("errors", data.get("Errors"))
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, List[str]] = {}
    for field, msgs in raw.items():
        if isinstance(msgs, str):
            out[str(field)] = [msgs]
        elif isinstance(msgs, list):
            out[str(field)] = [str(m) for m in msgs]
    return out


def decode_http_error(status: int, body: str) -> HttpRequestError:
    """
    Turn a failed response body into an HttpRequestError.

    A problem-details JSON object fills the structured fields. The message is
    always the raw text, including for a bare JSON string such as Jellyfin's
    `"User not found"`. Never raises.
    """
    try:
        parsed = json.loads(body)
    except (ValueError, RecursionError):
        logger.debug("Undecodable error body for status %s", status)
        return HttpRequestError(status, body, body=body)

    if not isinstance(parsed, dict):
        return HttpRequestError(status, body, body=body)

    return HttpRequestError(
        status,
        body,
        type_=_str_field(parsed, "type"),
        title=_str_field(parsed, "title"),
        detail=_str_field(parsed, "detail"),
        instance=_str_field(parsed, "instance"),
        errors=_field_errors(parsed),
        body=body,
    )


def handle_http_error(resp: httpx.Response) -> HttpRequestError:
    return decode_http_error(resp.status_code, resp.text)
