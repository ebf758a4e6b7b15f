"""Task controller: task catalogue, per-user progress and completion rewards."""

import logging
from typing import Any, Dict, List, Mapping

from engage.database import utc_now_iso
from engage.errors import NotFoundError, PermissionDeniedError, ValidationError
from engage.utils.amounts import format_amount, money_context, to_decimal
from engage.utils.validation import (
    ROLE_VALIDATOR,
    VALID_DIFFICULTIES,
    validate_amount,
    validate_bool,
    validate_choice,
    validate_int,
    validate_required_fields,
)

logger = logging.getLogger(__name__)

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
COMPLETION_STATS_FIELDS = ("xp", "weekly_xp", "bdag_balance", "level")


class TaskController:
    """Controller for tasks, user task progress and task completion rewards."""

    def __init__(
        self,
        user_repository,
        task_repository,
        user_task_repository,
        reward_repository,
        publisher,
    ):
        self.user_repository = user_repository
        self.task_repository = task_repository
        self.user_task_repository = user_task_repository
        self.reward_repository = reward_repository
        self.publisher = publisher

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self.task_repository.list_active_tasks()

    def get_user_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        return self.user_task_repository.get_user_tasks(user_id)

    def create_task(self, claims: Mapping[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        if claims.get("role") != ROLE_VALIDATOR:
            logger.warning("create_task_denied role=%s", claims.get("role"))
            raise PermissionDeniedError("Only validators can create tasks")

        validate_required_fields(
            payload,
            ["title", "description", "category", "difficulty", "xp_reward", "bdag_reward"],
        )
        fields: Dict[str, Any] = {
            "title": payload["title"],
            "description": payload["description"],
            "category": payload["category"],
            "difficulty": validate_choice(payload["difficulty"], VALID_DIFFICULTIES, "difficulty"),
            "xp_reward": validate_int(payload["xp_reward"], "xp_reward", minimum=0),
            "bdag_reward": format_amount(
                validate_amount(payload["bdag_reward"], "bdag_reward", allow_zero=True)
            ),
        }

        requirements = payload.get("requirements")
        if requirements is not None and not isinstance(requirements, list):
            raise ValidationError("requirements must be a list")
        fields["requirements"] = requirements

        for flag in ("is_daily", "is_weekly", "is_active"):
            if flag in payload:
                fields[flag] = validate_bool(payload[flag], flag)
        if payload.get("max_completions") is not None:
            fields["max_completions"] = validate_int(
                payload["max_completions"], "max_completions", minimum=1
            )

        task = self.task_repository.create_task(**fields)
        logger.info("task_created task_id=%s difficulty=%s", task["id"], task["difficulty"])

        self.publisher.tasks_changed()
        return task

    def start_task(self, user_id: str, task_id: str) -> Dict[str, Any]:
        if self.user_task_repository.get_user_task(user_id, task_id):
            raise ValidationError("Task already started")

        task = self.task_repository.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        requirements = task.get("requirements")
        user_task = self.user_task_repository.create_user_task(
            user_id=user_id,
            task_id=task_id,
            status=STATUS_IN_PROGRESS,
            progress=0,
            max_progress=len(requirements) if isinstance(requirements, list) else 1,
        )
        logger.info("task_started user_id=%s task_id=%s", user_id, task_id)

        self.publisher.user_tasks_changed(user_id)
        return user_task

    def update_progress(
        self, user_id: str, user_task_id: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Set (not increment) progress and pay the task reward on completion.

        There is no guard on the previous status: resending a completing
        update for an already completed task pays the reward again.
        """
        progress = validate_int((payload or {}).get("progress"), "progress", minimum=0)

        owned = {user_task["id"]: user_task for user_task in self.get_user_tasks(user_id)}
        existing = owned.get(user_task_id)
        if not existing:
            raise NotFoundError("User task not found")

        completed = progress >= existing["max_progress"]
        user_task = self.user_task_repository.update_user_task(
            user_task_id,
            progress=progress,
            status=STATUS_COMPLETED if completed else STATUS_IN_PROGRESS,
            completed_at=utc_now_iso() if completed else None,
        )
        logger.info(
            "task_progress_updated user_id=%s user_task_id=%s progress=%d/%d",
            user_id,
            user_task_id,
            progress,
            existing["max_progress"],
        )

        if user_task["status"] == STATUS_COMPLETED:
            self._award_completion(user_id, user_task)

        self.publisher.user_tasks_changed(user_id)
        return user_task

    def _award_completion(self, user_id: str, user_task: Mapping[str, Any]) -> None:
        task = self.task_repository.get_task(user_task["task_id"])
        if not task:
            logger.warning("completed_task_missing task_id=%s", user_task["task_id"])
            return

        self.reward_repository.create_reward(
            user_id=user_id,
            reward_type="task_completion",
            source=task["id"],
            xp_amount=task["xp_reward"],
            bdag_amount=task["bdag_reward"],
            description=f"Completed task: {task['title']}",
        )

        user = self.user_repository.get_user_by_id(user_id)
        if not user:
            logger.warning("reward_user_missing user_id=%s", user_id)
            return

        with money_context():
            new_balance = to_decimal(user["bdag_balance"]) + to_decimal(task["bdag_reward"])
        updated_user = self.user_repository.update_user(
            user_id,
            xp=user["xp"] + task["xp_reward"],
            weekly_xp=user["weekly_xp"] + task["xp_reward"],
            bdag_balance=format_amount(new_balance),
        )
        logger.info(
            "task_reward_issued user_id=%s task_id=%s xp=%d bdag=%s",
            user_id,
            task["id"],
            task["xp_reward"],
            task["bdag_reward"],
        )

        self.publisher.user_stats_changed(updated_user, COMPLETION_STATS_FIELDS)
        self.publisher.leaderboard_changed()
