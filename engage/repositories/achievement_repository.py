"""Repository for achievements and user achievement progress."""

from __future__ import annotations

from typing import Any, Dict, List

from .base_repository import BaseRepository


class AchievementRepository(BaseRepository):
    """Manages `achievements` and the companion `user_achievements` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "achievements")
        self._user_achievements = store["user_achievements"]

    def list_active_achievements(self) -> List[Dict[str, Any]]:
        return self.collection.find({"is_active": True})

    def create_achievement(
        self,
        name: str,
        description: str,
        icon: str,
        category: str,
        requirement=None,
        xp_reward: int = 0,
        bdag_reward: str = "0",
        is_active: bool = True,
    ) -> Dict[str, Any]:
        return self.collection.insert(
            {
                "name": name,
                "description": description,
                "icon": icon,
                "category": category,
                "requirement": requirement,
                "xp_reward": xp_reward,
                "bdag_reward": bdag_reward,
                "is_active": is_active,
            }
        )

    def get_user_achievements(self, user_id: str) -> List[Dict[str, Any]]:
        return self._user_achievements.find({"user_id": user_id})

    def create_user_achievement(
        self, user_id: str, achievement_id: str, progress: int = 0, max_progress: int = 1
    ) -> Dict[str, Any]:
        return self._user_achievements.insert(
            {
                "user_id": user_id,
                "achievement_id": achievement_id,
                "progress": progress,
                "max_progress": max_progress,
                "is_completed": False,
                "completed_at": None,
            }
        )
