"""Engage backend application - REST API plus real-time room fan-out.

One process serves the JSON HTTP API and the Socket.IO channel. Controllers
mutate the in-memory store and hand derived views to the event publisher,
which fans them out to the subscribed rooms.

NOTE: Eventlet monkey patching is done in wsgi.py entry point
"""

import logging
import time
from typing import Optional

from flask import Flask, g, request
from flask_cors import CORS
from flask_socketio import SocketIO
from prometheus_client import CollectorRegistry, Gauge
from prometheus_flask_exporter import PrometheusMetrics

from engage.controllers import AuthController, MarketController, TaskController, UserController
from engage.database import InMemoryStore
from engage.realtime import build_realtime_hub
from engage.repositories import build_repositories
from engage.routes import (
    init_auth_routes,
    init_health_routes,
    init_market_routes,
    init_task_routes,
    init_user_routes,
)
from engage.socket_handlers import register_handlers
from engage.utils.config import Settings, get_jwt_secret, get_settings
from engage.utils.identity import PasswordHasher, TokenService

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def initialize_services(app: Flask, settings: Settings) -> None:
    """Build the store, repositories, identity services and real-time hub.

    Args:
        app: Flask application instance to store dependencies.
        settings: Loaded configuration.
    """
    store = InMemoryStore()
    repositories = build_repositories(store)

    token_service = TokenService(
        secret_provider=lambda: get_jwt_secret(settings=settings),
        expires_hours=settings.jwt_exp_hours,
        timezone=settings.jwt_timezone,
    )
    password_hasher = PasswordHasher(settings)

    socketio = SocketIO(
        app,
        cors_allowed_origins=settings.websocket_cors_origins,
        async_mode=settings.socketio_async_mode,
        ping_interval=settings.websocket_ping_interval,
        ping_timeout=settings.websocket_ping_timeout,
    )

    hub = build_realtime_hub(
        repositories,
        token_service,
        sleep=socketio.sleep,
        spawn=socketio.start_background_task,
        heartbeat_interval=settings.heartbeat_interval,
        leaderboard_interval=settings.leaderboard_broadcast_interval,
        leaderboard_limit=settings.leaderboard_snapshot_limit,
    )

    # Store all dependencies in app.extensions
    app.extensions["settings"] = settings
    app.extensions["store"] = store
    app.extensions["repositories"] = repositories
    app.extensions["token_service"] = token_service
    app.extensions["password_hasher"] = password_hasher
    app.extensions["socketio"] = socketio
    app.extensions["realtime_hub"] = hub

    app.extensions["auth_controller"] = AuthController(
        repositories.users, password_hasher, token_service
    )
    app.extensions["user_controller"] = UserController(
        repositories.users, repositories.achievements, repositories.rewards, hub.publisher
    )
    app.extensions["market_controller"] = MarketController(
        repositories.users, repositories.markets, repositories.predictions, hub.publisher
    )
    app.extensions["task_controller"] = TaskController(
        repositories.users,
        repositories.tasks,
        repositories.user_tasks,
        repositories.rewards,
        hub.publisher,
    )
    logger.info(
        "services_initialized async_mode=%s heartbeat_interval=%d",
        settings.socketio_async_mode,
        settings.heartbeat_interval,
    )


def initialize_routes(app: Flask) -> None:
    """Register all route blueprints and Socket.IO handlers.

    Args:
        app: Flask application instance containing initialized dependencies.
    """
    hub = app.extensions["realtime_hub"]

    app.register_blueprint(init_health_routes(app.extensions["store"], hub.registry))
    app.register_blueprint(init_auth_routes(app.extensions["auth_controller"]))
    app.register_blueprint(init_user_routes(app.extensions["user_controller"]))
    app.register_blueprint(init_market_routes(app.extensions["market_controller"]))
    app.register_blueprint(init_task_routes(app.extensions["task_controller"]))

    register_handlers(app.extensions["socketio"], hub)
    logger.info("All routes registered successfully")


def setup_middleware(app: Flask) -> None:
    """Request timing logs."""

    @app.before_request
    def before_request() -> None:
        g.start_time = time.time()
        logger.info(
            "request_started method=%s path=%s remote_addr=%s",
            request.method,
            request.path,
            request.remote_addr,
        )

    @app.after_request
    def after_request(response):
        if hasattr(g, "start_time"):
            duration = time.time() - g.start_time
            logger.info(
                "request_completed method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.path,
                response.status_code,
                duration * 1000,
            )
        return response


def setup_metrics(app: Flask) -> None:
    """Setup Prometheus request metrics and the live connection gauge.

    Each app gets its own collector registry, so several apps can live in one
    process (tests) without duplicate metric names.
    """
    registry = CollectorRegistry()
    metrics = PrometheusMetrics(app, registry=registry)
    metrics.info("engage_app_info", "Engage Backend Info", version="1.0.0")

    connections = app.extensions["realtime_hub"].registry
    connection_gauge = Gauge(
        "engage_realtime_connections",
        "Number of live real-time connections",
        registry=registry,
    )
    connection_gauge.set_function(lambda: len(connections))

    app.extensions["metrics_registry"] = registry
    logger.info("Prometheus metrics initialized")


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Application factory pattern.

    Args:
        settings: Configuration; loaded from the environment when omitted.

    Returns:
        Flask: Configured Flask application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = Flask(__name__)

    # Enable CORS for cross-origin requests
    CORS(app, resources={
        r"/api/*": {
            "origins": settings.websocket_cors_origins,
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True,
        }
    })

    initialize_services(app, settings)
    setup_middleware(app)
    if settings.metrics_enabled:
        setup_metrics(app)
    initialize_routes(app)

    hub = app.extensions["realtime_hub"]
    if hub.leaderboard_refresh.start():
        logger.info(
            "leaderboard_refresh_started interval=%d",
            settings.leaderboard_broadcast_interval,
        )

    logger.info("Application created successfully")
    return app


if __name__ == "__main__":
    application = create_app()
    settings = application.extensions["settings"]

    logger.info("=" * 60)
    logger.info("Starting Engage backend on %s:%s", settings.host, settings.port)
    logger.info("=" * 60)

    application.extensions["socketio"].run(
        application, host=settings.host, port=settings.port, debug=settings.debug
    )
