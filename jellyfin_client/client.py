from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from jellyfin_client.errors import HttpRequestError, NetworkError, UrlParseError
from jellyfin_client.models import (
    BaseItem,
    ForgotPasswordResult,
    ItemsResult,
    PinRedeemResult,
    SessionInfo,
    User,
    UserAuth,
    UserConfiguration,
    UserPolicy,
)
from jellyfin_client.store import SessionStore
from jellyfin_client.utils import (
    AUTH_HEADER,
    build_authorization_header,
    default_device_name,
    handle_http_error,
    password_digest,
)

logger = logging.getLogger(__name__)

_USER_LIST = TypeAdapter(List[User])
_SESSION_LIST = TypeAdapter(List[SessionInfo])


def _parse_base_url(url: str) -> str:
    trimmed = url.strip().rstrip("/")
    try:
        parsed = httpx.URL(trimmed)
    except httpx.InvalidURL as exc:
        raise UrlParseError(url, str(exc)) from exc
    if parsed.scheme not in ("http", "https"):
        raise UrlParseError(url, "scheme must be http or https")
    if not parsed.host:
        raise UrlParseError(url, "missing host")
    return trimmed


def _seg(value: str) -> str:
    return quote(str(value), safe="")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    return value


class JellyfinClient:
    """
    Async Jellyfin API client.

    Each call opens one request, attaches the `X-Emby-Authorization` header
    and either returns the decoded body or raises a `JellyfinError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        device_name: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = _parse_base_url(base_url)
        self.device_name = device_name or default_device_name()
        self.timeout = timeout
        self._transport = transport
        self._store = SessionStore()

    @classmethod
    async def with_auth_name(cls, base_url: str, username: str, password: str, **kwargs: Any) -> "JellyfinClient":
        client = cls(base_url, **kwargs)
        await client.auth_user_name(username, password)
        return client

    @classmethod
    async def with_auth_std(cls, base_url: str, user_id: str, password: str, **kwargs: Any) -> "JellyfinClient":
        client = cls(base_url, **kwargs)
        await client.auth_user_std(user_id, password)
        return client

    @property
    def auth(self) -> Optional[UserAuth]:
        return self._store.auth

    @property
    def is_authenticated(self) -> bool:
        return self._store.auth is not None

    def logout(self) -> None:
        """Forget the local session record. The server-side session is left alone."""
        self._store.clear()

    def _authorization(self, anonymous: bool = False) -> str:
        if anonymous:
            return build_authorization_header(self.device_name)
        return self._store.require().to_emby_header(self.device_name)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        anonymous: bool = False,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        # Resolve the header first: a missing session must fail before any I/O.
        headers = {
            AUTH_HEADER: self._authorization(anonymous=anonymous),
            "Accept": "application/json",
        }
        url = f"{self.base_url}{path}"
        if params:
            params = {k: _query_value(v) for k, v in params.items() if v is not None}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.request(method, url, headers=headers, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.warning("Jellyfin: %s %s failed: %s", method, path, exc)
            raise NetworkError(f"{method} {path}: {exc}") from exc

        logger.debug("Jellyfin: %s %s -> %s", method, path, r.status_code)
        if not r.is_success:
            raise handle_http_error(r)
        return r

    @staticmethod
    def _decode(r: httpx.Response, model: Any) -> Any:
        try:
            if isinstance(model, TypeAdapter):
                return model.validate_json(r.content)
            return model.model_validate_json(r.content)
        except ValidationError as exc:
            raise NetworkError(f"Could not decode response from {r.request.url.path}: {exc}") from exc

    async def _authenticate(self, path: str, **kwargs: Any) -> UserAuth:
        async with self._store.lock:
            try:
                r = await self._request("POST", path, anonymous=True, **kwargs)
            except HttpRequestError as exc:
                logger.warning("Jellyfin: authentication failed (status %s)", exc.status)
                raise
            auth = self._decode(r, UserAuth)
            self._store.replace(auth)
        logger.info("Jellyfin: authenticated as %s", auth.user.name)
        return auth

    # Users

    async def get_users(self, is_hidden: bool = False, is_disabled: bool = False) -> List[User]:
        """List the users visible to the authenticated user."""
        r = await self._request(
            "GET", "/Users", params={"isHidden": is_hidden, "isDisabled": is_disabled}
        )
        return self._decode(r, _USER_LIST)

    async def get_user_by_id(self, user_id: str) -> User:
        r = await self._request("GET", f"/Users/{_seg(user_id)}")
        return self._decode(r, User)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/Users/{_seg(user_id)}")

    async def update_user(self, user_id: str, new_info: User) -> None:
        await self._request("POST", f"/Users/{_seg(user_id)}", json=new_info.to_wire())

    async def update_user_conf(self, user_id: str, new_conf: UserConfiguration) -> None:
        await self._request(
            "POST", f"/Users/{_seg(user_id)}/Configuration", json=new_conf.to_wire()
        )

    async def update_user_password(
        self,
        user_id: str,
        new_password: str,
        current_password: Optional[str] = None,
        reset: bool = False,
    ) -> None:
        body: Dict[str, Any] = {"NewPw": new_password, "ResetPassword": reset}
        if current_password is not None:
            body["CurrentPw"] = current_password
        await self._request("POST", f"/Users/{_seg(user_id)}/Password", json=body)

    async def update_user_policy(self, user_id: str, new_policy: UserPolicy) -> None:
        await self._request(
            "POST", f"/Users/{_seg(user_id)}/Policy", json=new_policy.to_wire()
        )

    async def get_user_by_auth(self) -> User:
        """Return the user owning the current session."""
        r = await self._request("GET", "/Users/Me")
        return self._decode(r, User)

    async def create_user(self, username: str, password: str) -> User:
        r = await self._request(
            "POST", "/Users/New", json={"Name": username, "Password": password}
        )
        return self._decode(r, User)

    async def get_public_user_list(self) -> List[User]:
        r = await self._request("GET", "/Users/Public", anonymous=True)
        return self._decode(r, _USER_LIST)

    # Authentication

    async def auth_user_std(self, user_id: str, password: str) -> UserAuth:
        """
        Authenticate by user id and password.

        The server receives both the plain password and its SHA-1 digest.
        On success the returned session record replaces the stored one; on
        failure the stored one is kept and the error is raised.
        """
        return await self._authenticate(
            f"/Users/{_seg(user_id)}/Authenticate",
            params={"pw": password, "password": password_digest(password)},
        )

    async def auth_user_name(self, username: str, password: str) -> UserAuth:
        """Authenticate by user name. Same session semantics as `auth_user_std`."""
        return await self._authenticate(
            "/Users/AuthenticateByName", json={"Username": username, "Pw": password}
        )

    async def user_forgot_password(self, username: str) -> ForgotPasswordResult:
        r = await self._request(
            "POST", "/Users/ForgotPassword", anonymous=True, json={"EnteredUsername": username}
        )
        return self._decode(r, ForgotPasswordResult)

    async def user_redeem_forgot_password_pin(self, pin: str) -> PinRedeemResult:
        r = await self._request(
            "POST", "/Users/ForgotPassword/Pin", anonymous=True, json={"Pin": pin}
        )
        return self._decode(r, PinRedeemResult)

    # Sessions and items

    async def get_sessions(self, active_within_seconds: Optional[int] = None) -> List[SessionInfo]:
        r = await self._request(
            "GET", "/Sessions", params={"activeWithinSeconds": active_within_seconds}
        )
        return self._decode(r, _SESSION_LIST)

    async def get_items(self, user_id: str, **params: Any) -> ItemsResult:
        """
        Browse a user's library. Keyword arguments are sent as query
        parameters unchanged (e.g. IncludeItemTypes="Movie", Recursive=True);
        lists are comma-joined.
        """
        r = await self._request("GET", f"/Users/{_seg(user_id)}/Items", params=params)
        return self._decode(r, ItemsResult)

    async def get_item(self, user_id: str, item_id: str) -> BaseItem:
        r = await self._request("GET", f"/Users/{_seg(user_id)}/Items/{_seg(item_id)}")
        return self._decode(r, BaseItem)
