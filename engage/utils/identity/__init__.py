"""Identity/authorization helpers."""

from .password_hasher import PasswordHasher
from .token_service import TokenService

__all__ = [
    "PasswordHasher",
    "TokenService",
]
