"""User profile, wallet, leaderboard, achievement and reward operations."""

import logging
from typing import Any, Dict, List

from engage.errors import NotFoundError, ValidationError
from engage.utils.validation import DEFAULT_LEADERBOARD_LIMIT

logger = logging.getLogger(__name__)

WALLET_STATS_FIELDS = ("wallet_address", "bdag_balance", "portfolio_value")


class UserController:
    """Controller for per-user reads and wallet updates."""

    def __init__(self, user_repository, achievement_repository, reward_repository, publisher):
        self.user_repository = user_repository
        self.achievement_repository = achievement_repository
        self.reward_repository = reward_repository
        self.publisher = publisher

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        user = self.user_repository.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return self.user_repository.public_profile(user)

    def update_wallet(self, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        wallet_address = (payload or {}).get("wallet_address")
        if wallet_address is not None and not isinstance(wallet_address, str):
            raise ValidationError("wallet_address must be a string")

        if not self.user_repository.get_user_by_id(user_id):
            raise NotFoundError("User not found")
        user = self.user_repository.update_user(user_id, wallet_address=wallet_address)
        logger.info("wallet_updated user_id=%s", user_id)

        self.publisher.user_stats_changed(user, WALLET_STATS_FIELDS)
        return {"wallet_address": user["wallet_address"]}

    def get_leaderboard(self, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> List[Dict[str, Any]]:
        logger.info("fetching_leaderboard limit=%d", limit)
        leaderboard = [
            self.user_repository.leaderboard_entry(user)
            for user in self.user_repository.get_leaderboard(limit)
        ]
        logger.info("leaderboard_fetched count=%d", len(leaderboard))
        return leaderboard

    def list_achievements(self) -> List[Dict[str, Any]]:
        return self.achievement_repository.list_active_achievements()

    def get_user_achievements(self, user_id: str) -> List[Dict[str, Any]]:
        return self.achievement_repository.get_user_achievements(user_id)

    def get_user_rewards(self, user_id: str) -> List[Dict[str, Any]]:
        return self.reward_repository.get_user_rewards(user_id)
