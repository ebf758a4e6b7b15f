"""Repository for user records."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from engage.database import utc_now_iso

from .base_repository import BaseRepository

LEADERBOARD_FIELDS = ("id", "username", "level", "xp", "weekly_xp", "global_rank", "role")
PROFILE_FIELDS = (
    "id",
    "username",
    "email",
    "role",
    "wallet_address",
    "level",
    "xp",
    "bdag_balance",
    "portfolio_value",
    "global_rank",
    "weekly_xp",
    "streak_days",
)


class UserRepository(BaseRepository):
    """CRUD helpers for the `users` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "users")

    def create_user(
        self,
        username: str,
        email: str,
        hashed_password: str,
        wallet_address: Optional[str] = None,
        role: str = "basic",
        bdag_balance: str = "0",
    ) -> Dict[str, Any]:
        now = utc_now_iso()
        return self.collection.insert(
            {
                "username": username,
                "email": email,
                "password": hashed_password,
                "wallet_address": wallet_address,
                "role": role,
                "level": 1,
                "xp": 0,
                "bdag_balance": bdag_balance,
                "portfolio_value": "0",
                "global_rank": None,
                "weekly_xp": 0,
                "streak_days": 0,
                "last_active": now,
                "created_at": now,
            }
        )

    def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not user_id:
            return None
        return self.collection.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"email": email})

    def get_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"username": username})

    def update_user(self, user_id: str, **updates) -> Dict[str, Any]:
        """Shallow-merge updates into the user; raises NotFoundError for unknown ids."""
        return self.collection.update(user_id, updates)

    def get_leaderboard(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Users by weekly XP, highest first; ties keep insertion order."""
        users = sorted(self.collection, key=lambda user: user.get("weekly_xp", 0), reverse=True)
        return users[:limit]

    @staticmethod
    def leaderboard_entry(user: Dict[str, Any]) -> Dict[str, Any]:
        return {field: user.get(field) for field in LEADERBOARD_FIELDS}

    @staticmethod
    def public_profile(user: Dict[str, Any]) -> Dict[str, Any]:
        return {field: user.get(field) for field in PROFILE_FIELDS}
