"""Request controllers: validate, mutate the store, publish derived views."""

from .auth_controller import AuthController
from .market_controller import MarketController, compute_market_stats
from .task_controller import TaskController
from .user_controller import UserController

__all__ = [
    "AuthController",
    "MarketController",
    "TaskController",
    "UserController",
    "compute_market_stats",
]
