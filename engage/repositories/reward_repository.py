"""Repository for issued rewards."""

from __future__ import annotations

from typing import Any, Dict, List

from .base_repository import BaseRepository, newest_first


class RewardRepository(BaseRepository):
    """Manages the `rewards` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "rewards")

    def create_reward(
        self,
        user_id: str,
        reward_type: str,
        source: str,
        xp_amount: int,
        bdag_amount: str,
        description: str,
    ) -> Dict[str, Any]:
        return self.collection.insert(
            {
                "user_id": user_id,
                "type": reward_type,
                "source": source,
                "xp_amount": xp_amount,
                "bdag_amount": bdag_amount,
                "description": description,
            }
        )

    def get_user_rewards(self, user_id: str) -> List[Dict[str, Any]]:
        return newest_first(self.collection.find({"user_id": user_id}))
