"""Authentication helpers for tutor API requests."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Optional

import jwt

if TYPE_CHECKING:
    from ..core.config import Settings

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when no usable access token is available."""


def _token_expired(token: str, now: float) -> bool:
    """True when the token is a JWT whose ``exp`` claim has passed.

    The signature is not checked here; the API does that. Opaque (non-JWT)
    tokens are never considered expired.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.DecodeError:
        return False
    exp = claims.get("exp")
    if exp is None:
        return False
    try:
        return float(exp) < now
    except (TypeError, ValueError):
        return True


class TokenAuth:
    """Builds bearer auth headers from the configured access token."""

    def __init__(
        self,
        settings: Settings,
        *,
        token: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self._token = token
        self._clock = clock

    @property
    def token(self) -> str:
        if self._token is not None:
            return self._token.strip()
        return self.settings.access_token.get_secret_value().strip()

    def get_headers(self, request_id: str) -> dict:
        token = self.token
        if not token:
            raise AuthenticationError("access_token_missing")
        if _token_expired(token, self._clock()):
            logger.warning("access_token_expired")
            raise AuthenticationError("access_token_expired")
        return {
            "Authorization": f"Bearer {token}",
            "X-Request-Id": request_id,
        }
