"""Reusable request validation helpers."""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from engage.errors import ValidationError
from engage.utils.amounts import MAX_DECIMAL_PLACES, MAX_INTEGER_DIGITS, money_context

logger = logging.getLogger(__name__)

# Role constants
ROLE_BASIC = "basic"
ROLE_PREMIUM = "premium"
ROLE_VALIDATOR = "validator"
VALID_ROLES = (ROLE_BASIC, ROLE_PREMIUM, ROLE_VALIDATOR)

# Task difficulty constants
VALID_DIFFICULTIES = ("easy", "medium", "hard")

# Leaderboard limit constants
MIN_LEADERBOARD_LIMIT = 1
MAX_LEADERBOARD_LIMIT = 100
DEFAULT_LEADERBOARD_LIMIT = 10


def validate_required_fields(data: Mapping[str, object], required_fields: Iterable[str]):
    """Ensure all required_fields exist and are not empty in data."""

    if not isinstance(data, Mapping):
        logger.warning("request_body_not_object type=%s", type(data).__name__)
        raise ValidationError("Request body must be a JSON object")

    missing = [field for field in required_fields if data.get(field) in (None, "")]
    if missing:
        logger.warning("missing_required_fields fields=%s", ", ".join(missing))
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    return data


def validate_choice(value: Any, choices: Iterable[str], field: str) -> str:
    choices = tuple(choices)
    if value not in choices:
        logger.warning("invalid_choice field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be one of {', '.join(choices)}")
    return value


def validate_role(role: Optional[str]) -> str:
    """Validate a user role, defaulting to basic."""
    if role in (None, ""):
        return ROLE_BASIC
    return validate_choice(role, VALID_ROLES, "role")


def validate_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        logger.warning("invalid_boolean field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be a boolean")
    return value


def validate_int(value: Any, field: str, minimum: Optional[int] = None) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("invalid_integer field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    return value


def validate_amount(value: Any, field: str = "amount", allow_zero: bool = False) -> Decimal:
    """Parse a decimal amount given as string or number."""

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a decimal amount")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        logger.warning("invalid_amount field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be a decimal amount") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a decimal amount")
    if amount < 0 or (amount == 0 and not allow_zero):
        logger.warning("non_positive_amount field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be greater than zero")

    if amount and amount.adjusted() >= MAX_INTEGER_DIGITS:
        logger.warning("amount_too_large field=%s", field)
        raise ValidationError(f"{field} must be less than 10^{MAX_INTEGER_DIGITS}")
    with money_context():
        amount = amount.normalize()
    if amount.as_tuple().exponent < -MAX_DECIMAL_PLACES:
        logger.warning("amount_too_precise field=%s value=%s", field, value)
        raise ValidationError(f"{field} allows at most {MAX_DECIMAL_PLACES} decimal places")
    return amount


def validate_iso_datetime(value: Any, field: str) -> str:
    """Return the value normalised to an ISO-8601 UTC timestamp."""

    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 timestamp")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        logger.warning("invalid_timestamp field=%s value=%s", field, value)
        raise ValidationError(f"{field} must be an ISO-8601 timestamp") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat()


def clamp_limit(raw: Any) -> int:
    """Parse a leaderboard limit query parameter, clamped to the allowed range."""
    if raw in (None, ""):
        return DEFAULT_LEADERBOARD_LIMIT
    try:
        limit = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("limit must be an integer") from exc
    return min(max(limit, MIN_LEADERBOARD_LIMIT), MAX_LEADERBOARD_LIMIT)
