from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Optional

from jellyfin_client.errors import AuthNotFound
from jellyfin_client.models import UserAuth


@dataclass
class SessionStore:
    """
    Holds the session record of one client.

    `auth` is None until an authentication succeeds. Authentication calls run
    under `lock`, so concurrent logins on one client are applied one at a
    time and the last one to finish wins.
    """
    auth: Optional[UserAuth] = None
    last_auth_ts: float = 0.0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def require(self) -> UserAuth:
        if self.auth is None:
            raise AuthNotFound()
        return self.auth

    def replace(self, auth: UserAuth) -> None:
        self.auth = auth
        self.last_auth_ts = time.time()

    def clear(self) -> None:
        self.auth = None
        self.last_auth_ts = 0.0
