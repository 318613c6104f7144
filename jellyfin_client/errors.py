from __future__ import annotations

from typing import Dict, List, Optional


class JellyfinError(Exception):
    """Base class for every failure raised by the client."""


class NetworkError(JellyfinError):
    """Transport failure, or a success response whose body could not be decoded."""


class UrlParseError(JellyfinError):
    """The base URL given to the client is not an absolute http(s) URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid server URL {url!r}: {reason}")
        self.url = url
        self.reason = reason

    def __reduce__(self):
        return (self.__class__, (self.url, self.reason))


class AuthNotFound(JellyfinError):
    """An endpoint needing a session was called before authenticating."""

    def __init__(self) -> None:
        super().__init__("Unauthorized.")

    def __reduce__(self):
        return (self.__class__, ())


class HttpRequestError(JellyfinError):
    """
    Non-2xx response from the server.

    `type`, `title`, `detail` and `instance` come from a problem-details
    body when the server sent one. `errors` maps field names to validation
    messages and is empty when absent. `message` is always set; `body` is the
    raw response text.
    """

    def __init__(
        self,
        status: int,
        message: str,
        *,
        type_: Optional[str] = None,
        title: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
        body: Optional[str] = None,
    ) -> None:
        self.status = status
        self.message = message
        self.type = type_
        self.title = title
        self.detail = detail
        self.instance = instance
        self.errors: Dict[str, List[str]] = dict(errors or {})
        self.body = message if body is None else body
        super().__init__(self._render())

    def __reduce__(self):
        # keyword-only fields travel as instance state
        return (self.__class__, (self.status, self.message), self.__dict__.copy())

    def __str__(self) -> str:
        return self._render()

    def _render(self) -> str:
        out = f"HTTP Request Error (Status {self.status}): {self.message}"
        for label, value in (
            ("Type", self.type),
            ("Title", self.title),
            ("Detail", self.detail),
            ("Instance", self.instance),
        ):
            if value is not None:
                out += f", {label}: {value}"
        return out

    def __repr__(self) -> str:
        return f"HttpRequestError(status={self.status}, message={self.message!r})"
