"""Validation helper package."""

from .schema import (
    clamp_limit,
    validate_amount,
    validate_bool,
    validate_choice,
    validate_int,
    validate_iso_datetime,
    validate_required_fields,
    validate_role,
    ROLE_BASIC,
    ROLE_PREMIUM,
    ROLE_VALIDATOR,
    VALID_ROLES,
    VALID_DIFFICULTIES,
    MIN_LEADERBOARD_LIMIT,
    MAX_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_LIMIT,
)

__all__ = [
    "clamp_limit",
    "validate_amount",
    "validate_bool",
    "validate_choice",
    "validate_int",
    "validate_iso_datetime",
    "validate_required_fields",
    "validate_role",
    "ROLE_BASIC",
    "ROLE_PREMIUM",
    "ROLE_VALIDATOR",
    "VALID_ROLES",
    "VALID_DIFFICULTIES",
    "MIN_LEADERBOARD_LIMIT",
    "MAX_LEADERBOARD_LIMIT",
    "DEFAULT_LEADERBOARD_LIMIT",
]
