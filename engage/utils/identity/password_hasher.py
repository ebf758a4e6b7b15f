"""Argon2 password hashing for registered users."""

from __future__ import annotations

import logging
from typing import Optional

from argon2 import PasswordHasher as Argon2Hasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from engage.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Hash and verify passwords with Argon2id."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        if settings.argon2_time_cost < 1 or settings.argon2_time_cost > 10:
            raise ValueError(
                f"ARGON2_TIME_COST must be between 1 and 10, got {settings.argon2_time_cost}"
            )
        self._hasher = Argon2Hasher(
            type=Type.ID,
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    def hash(self, password: str) -> str:
        if not isinstance(password, str) or not password:
            raise ValueError("Password must be a non-empty string")
        return self._hasher.hash(password)

    def verify(self, hashed_password: str, password: str) -> bool:
        """Return True when ``password`` matches; never raises on mismatch."""
        if not hashed_password or not isinstance(password, str):
            return False
        try:
            return self._hasher.verify(hashed_password, password)
        except (VerificationError, InvalidHashError) as exc:
            logger.debug("password_verification_failed error=%s", exc)
            return False
