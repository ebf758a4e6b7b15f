"""Authentication controller: registration and email/password login."""

import logging
from typing import Any, Dict

from engage.errors import ValidationError
from engage.utils.amounts import format_amount
from engage.utils.validation import validate_amount, validate_required_fields, validate_role

logger = logging.getLogger(__name__)


class AuthController:
    """Controller for account creation and token issuance."""

    def __init__(self, user_repository, password_hasher, token_service):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.token_service = token_service

    def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a user and return ``{"token", "user"}``."""

        validate_required_fields(payload, ["username", "email", "password"])
        email = str(payload["email"]).strip()
        username = str(payload["username"]).strip()
        if "@" not in email:
            raise ValidationError("Invalid email format")

        if self.user_repository.get_user_by_email(email) or self.user_repository.get_user_by_username(
            username
        ):
            logger.warning("register_duplicate_user email=%s username=%s", email, username)
            raise ValidationError("User already exists")

        role = validate_role(payload.get("role"))
        starting_balance = payload.get("bdag_balance")
        bdag_balance = (
            format_amount(validate_amount(starting_balance, "bdag_balance", allow_zero=True))
            if starting_balance not in (None, "")
            else "0"
        )

        user = self.user_repository.create_user(
            username=username,
            email=email,
            hashed_password=self.password_hasher.hash(str(payload["password"])),
            wallet_address=payload.get("wallet_address"),
            role=role,
            bdag_balance=bdag_balance,
        )
        logger.info("user_registered user_id=%s role=%s", user["id"], role)
        return self._session(user)

    def login(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        validate_required_fields(payload, ["email", "password"])

        user = self.user_repository.get_user_by_email(str(payload["email"]).strip())
        if not user or not self.password_hasher.verify(user.get("password"), str(payload["password"])):
            logger.warning("login_failed email=%s", payload.get("email"))
            raise ValidationError("Invalid credentials")

        logger.info("user_logged_in user_id=%s", user["id"])
        return self._session(user)

    def _session(self, user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "token": self.token_service.generate(user),
            "user": self.user_repository.public_profile(user),
        }
