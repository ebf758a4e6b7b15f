"""Runtime configuration helpers for the Engage backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

import boto3

DEV_JWT_SECRET = "dev-secret-key"


def _as_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Immutable application configuration loaded from the environment."""

    debug: bool
    host: str
    port: int
    log_level: str
    # auth configuration
    jwt_exp_hours: int
    jwt_timezone: str
    jwt_ssm_parameter_name: Optional[str]
    argon2_time_cost: int
    argon2_memory_cost: int
    argon2_parallelism: int
    # WebSocket configuration
    websocket_cors_origins: str
    websocket_ping_interval: int
    websocket_ping_timeout: int
    socketio_async_mode: Optional[str]
    # real-time fan-out configuration
    heartbeat_interval: int
    leaderboard_broadcast_interval: int
    leaderboard_snapshot_limit: int
    metrics_enabled: bool

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "Settings":
        env = env if env is not None else os.environ
        return Settings(

            # toggle Flask debugger (disabled in prod)
            debug=_as_bool(env.get("FLASK_DEBUG", "false")),
            host=env.get("FLASK_HOST", "0.0.0.0"),  # nosec B104 - Required for containerized deployment
            port=int(env.get("FLASK_PORT", "5000")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),

            # auth parameters
            jwt_exp_hours=int(env.get("JWT_EXP_HOURS", "24")),
            jwt_timezone=env.get("JWT_TIMEZONE", "UTC"),
            jwt_ssm_parameter_name=env.get("JWT_SSM_PARAMETER") or None,
            argon2_time_cost=int(env.get("ARGON2_TIME_COST", "3")),
            argon2_memory_cost=int(env.get("ARGON2_MEMORY_COST", "65536")),  # 64MB
            argon2_parallelism=int(env.get("ARGON2_PARALLELISM", "1")),

            # websocket configuration
            websocket_cors_origins=env.get("WEBSOCKET_CORS_ORIGINS", "*"),
            websocket_ping_interval=int(env.get("WEBSOCKET_PING_INTERVAL", "25")),
            websocket_ping_timeout=int(env.get("WEBSOCKET_PING_TIMEOUT", "60")),
            socketio_async_mode=env.get("SOCKETIO_ASYNC_MODE", "eventlet") or None,

            # fan-out timers, 0 disables
            heartbeat_interval=int(env.get("HEARTBEAT_INTERVAL", "30")),
            leaderboard_broadcast_interval=int(
                env.get("LEADERBOARD_BROADCAST_INTERVAL", "60")
            ),
            leaderboard_snapshot_limit=int(env.get("LEADERBOARD_SNAPSHOT_LIMIT", "100")),
            metrics_enabled=_as_bool(env.get("METRICS_ENABLED", "true")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings loaded from environment variables."""

    return Settings.from_env()


def get_jwt_secret(ssm_client=None, settings: Optional[Settings] = None) -> str:
    """Fetch the JWT signing secret.

    Priority:
    1. JWT_SECRET env var (docker-compose)
    2. SSM Parameter Store, when JWT_SSM_PARAMETER is configured
    3. Development default
    """
    logger = logging.getLogger(__name__)

    jwt_secret = os.environ.get("JWT_SECRET")
    if jwt_secret:
        logger.debug("using_jwt_secret_from_environment")
        return jwt_secret

    parameter_name = (settings or get_settings()).jwt_ssm_parameter_name
    if not parameter_name:
        logger.warning("using_development_jwt_secret")
        return DEV_JWT_SECRET

    logger.info("fetching_jwt_secret_from_ssm parameter=%s", parameter_name)
    try:
        client = ssm_client or boto3.client(
            "ssm", region_name=os.environ.get("AWS_REGION", "eu-north-1")
        )
        resp = client.get_parameter(Name=parameter_name, WithDecryption=True)
        logger.info("jwt_secret_fetched_from_ssm")
        return resp["Parameter"]["Value"]
    except Exception as exc:  # pragma: no cover - relies on AWS infra
        logger.error("jwt_secret_fetch_failed error=%s", str(exc))
        raise ValueError(f"Failed to retrieve JWT secret: {str(exc)}") from exc
