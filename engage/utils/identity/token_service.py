"""JWT token helper utilities."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

import jwt
import pytz

from engage.utils.config import get_jwt_secret, get_settings


class TokenService:
    """Issuing application JWTs with pluggable secret providers."""

    def __init__(
        self,
        secret_provider: Optional[Callable[[], str]] = None,
        expires_hours: Optional[int] = None,
        timezone: Optional[str] = None,
        algorithm: str = "HS256",
    ) -> None:
        settings = get_settings()
        self._secret_provider = secret_provider or get_jwt_secret
        self._expires_hours = expires_hours or settings.jwt_exp_hours
        self._timezone = pytz.timezone(timezone or settings.jwt_timezone)
        self._algorithm = algorithm

    def generate(self, user: Dict[str, Any]) -> str:
        """Return a signed JWT for the provided user record.

        The token carries the user id (as both ``sub`` and ``user_id``) and
        the role, which gates market and task creation.
        """

        secret = self._secret_provider()
        now = datetime.now(self._timezone)
        payload = {
            "sub": user.get("id"),
            "user_id": user.get("id"),
            "role": user.get("role"),
            "exp": now + timedelta(hours=self._expires_hours),
            "iat": now,
        }
        return jwt.encode(payload, secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Decode and validate a JWT.

        Raises ``jwt.InvalidTokenError`` (or a subclass) when the signature
        does not match or the token is expired.
        """

        secret = self._secret_provider()
        return jwt.decode(token, secret, algorithms=[self._algorithm])

    @staticmethod
    def user_id_from_claims(claims: Dict[str, Any]) -> Optional[str]:
        return claims.get("user_id") or claims.get("sub")
