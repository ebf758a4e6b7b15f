"""Repository for tasks and per-user task progress."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base_repository import BaseRepository, newest_first


class TaskRepository(BaseRepository):
    """Manages the `tasks` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "tasks")

    def list_active_tasks(self) -> List[Dict[str, Any]]:
        return newest_first(self.collection.find({"is_active": True}))

    def get_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        if not task_id:
            return None
        return self.collection.get(task_id)

    def create_task(self, **fields) -> Dict[str, Any]:
        document = {
            "requirements": None,
            "is_daily": False,
            "is_weekly": False,
            "max_completions": None,
            "is_active": True,
            **fields,
            "current_completions": 0,
        }
        return self.collection.insert(document)


class UserTaskRepository(BaseRepository):
    """Manages the `user_tasks` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "user_tasks")

    def get_user_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        return self.collection.find({"user_id": user_id})

    def get_user_task(self, user_id: str, task_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"user_id": user_id, "task_id": task_id})

    def create_user_task(
        self,
        user_id: str,
        task_id: str,
        status: str = "not_started",
        progress: int = 0,
        max_progress: int = 1,
    ) -> Dict[str, Any]:
        return self.collection.insert(
            {
                "user_id": user_id,
                "task_id": task_id,
                "status": status,
                "progress": progress,
                "max_progress": max_progress,
                "completed_at": None,
            }
        )

    def update_user_task(self, user_task_id: str, **updates) -> Dict[str, Any]:
        return self.collection.update(user_task_id, updates)
