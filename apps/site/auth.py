"""Login gate for the admin console."""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from typing import Awaitable, Callable, Dict

from edusite.core.config import AdminConfig

LOGGER = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login yoki parol noto'g'ri!"


class AuthenticationError(RuntimeError):
    """Raised for a wrong credential pair or an unknown session token."""


def _same(given: str | None, expected: str) -> bool:
    # compare_digest only takes ASCII str, so compare the UTF-8 bytes
    return secrets.compare_digest((given or "").encode("utf-8"), expected.encode("utf-8"))


class LoginGate:
    """Credential check plus in-memory session tokens that expire.

    There is no lockout or attempt counting; the delay only slows the form.
    """

    def __init__(
        self,
        config: AdminConfig,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._sleep = sleep
        self._clock = clock
        self._tokens: Dict[str, float] = {}

    async def login(self, username: str, password: str) -> str:
        await self._sleep(self._config.login_delay_seconds)
        expected_password = self._config.resolve_password()
        if expected_password is None:
            LOGGER.warning("Admin password is not configured (set %s)", self._config.password_env)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)
        user_ok = _same(username, self._config.username)
        password_ok = _same(password, expected_password)
        if not (user_ok and password_ok):
            LOGGER.info("Rejected admin login", extra={"username": username})
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)
        self._prune()
        token = secrets.token_urlsafe(32)
        self._tokens[token] = self._clock() + self._config.session_ttl_seconds
        return token

    def is_valid(self, token: str | None) -> bool:
        if not token:
            return False
        expires_at = self._tokens.get(token)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            del self._tokens[token]
            return False
        return True

    def require(self, token: str | None) -> None:
        if not self.is_valid(token):
            raise AuthenticationError("Admin session is missing or expired")

    def logout(self, token: str | None) -> None:
        if token:
            self._tokens.pop(token, None)

    @property
    def active_sessions(self) -> int:
        self._prune()
        return len(self._tokens)

    def _prune(self) -> None:
        now = self._clock()
        for token in [token for token, expires_at in self._tokens.items() if now >= expires_at]:
            del self._tokens[token]


__all__ = ["AuthenticationError", "LOGIN_FAILED_MESSAGE", "LoginGate"]
