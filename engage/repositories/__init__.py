"""Store-backed repositories, one per entity."""

from dataclasses import dataclass

from .achievement_repository import AchievementRepository
from .market_repository import MarketRepository, PredictionRepository
from .reward_repository import RewardRepository
from .task_repository import TaskRepository, UserTaskRepository
from .user_repository import UserRepository


@dataclass
class Repositories:
    users: UserRepository
    markets: MarketRepository
    predictions: PredictionRepository
    tasks: TaskRepository
    user_tasks: UserTaskRepository
    achievements: AchievementRepository
    rewards: RewardRepository


def build_repositories(store) -> Repositories:
    return Repositories(
        users=UserRepository(store),
        markets=MarketRepository(store),
        predictions=PredictionRepository(store),
        tasks=TaskRepository(store),
        user_tasks=UserTaskRepository(store),
        achievements=AchievementRepository(store),
        rewards=RewardRepository(store),
    )


__all__ = [
    "AchievementRepository",
    "MarketRepository",
    "PredictionRepository",
    "Repositories",
    "RewardRepository",
    "TaskRepository",
    "UserTaskRepository",
    "UserRepository",
    "build_repositories",
]
