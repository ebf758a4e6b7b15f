"""HTTP route blueprints."""

from .auth_routes import init_auth_routes
from .health_routes import init_health_routes
from .market_routes import init_market_routes
from .task_routes import init_task_routes
from .user_routes import init_user_routes

__all__ = [
    "init_auth_routes",
    "init_health_routes",
    "init_market_routes",
    "init_task_routes",
    "init_user_routes",
]
