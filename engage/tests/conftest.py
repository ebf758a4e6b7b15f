"""Pytest configuration and fixtures for tests."""

import json
import os
import sys
from typing import Any, Dict, List

import pytest


# Ensure the `engage` package is importable without installation
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from engage.app import create_app  # noqa: E402
from engage.database import InMemoryStore  # noqa: E402
from engage.realtime import build_realtime_hub, encode_frame  # noqa: E402
from engage.repositories import build_repositories  # noqa: E402
from engage.utils.config import Settings  # noqa: E402
from engage.utils.identity import TokenService  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"

TEST_ENV = {
    "FLASK_DEBUG": "false",
    "LOG_LEVEL": "DEBUG",
    "SOCKETIO_ASYNC_MODE": "threading",
    "HEARTBEAT_INTERVAL": "0",
    "LEADERBOARD_BROADCAST_INTERVAL": "0",
    "ARGON2_TIME_COST": "1",
    "ARGON2_MEMORY_COST": "1024",
    "METRICS_ENABLED": "false",
}


class FakeConnection:
    """In-process stand-in for a client connection; records every text frame."""

    def __init__(self, sid: str, is_open: bool = True, fail: bool = False):
        self.sid = sid
        self.is_open = is_open
        self.fail = fail
        self.sent: List[str] = []

    def send(self, text: str) -> None:
        if self.fail:
            raise ConnectionError("transport closed")
        self.sent.append(text)

    def frames(self) -> List[Dict[str, Any]]:
        return [json.loads(text) for text in self.sent]


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    return TEST_JWT_SECRET


@pytest.fixture
def settings():
    return Settings.from_env(TEST_ENV)


@pytest.fixture
def app(settings):
    """Create application instance for testing."""
    test_app = create_app(settings)
    test_app.config["TESTING"] = True
    return test_app


@pytest.fixture
def client(app):
    """Create HTTP test client."""
    return app.test_client()


@pytest.fixture
def hub(app):
    return app.extensions["realtime_hub"]


@pytest.fixture
def socket_client_factory(app):
    """Open Socket.IO test clients against the app; all are disconnected on teardown."""
    socketio = app.extensions["socketio"]
    clients = []

    def _open():
        sio_client = socketio.test_client(app)
        clients.append(sio_client)
        return sio_client

    yield _open

    for sio_client in clients:
        if sio_client.is_connected():
            sio_client.disconnect()


@pytest.fixture
def register_user(client):
    """Register a user over HTTP and return ``(token, user)``."""
    counter = {"n": 0}

    def _register(role: str = "basic", bdag_balance: str = "100", username: str = None):
        counter["n"] += 1
        name = username or f"user{counter['n']}"
        resp = client.post(
            "/api/register",
            json={
                "username": name,
                "email": f"{name}@example.com",
                "password": "s3cret-pass",
                "role": role,
                "bdag_balance": bdag_balance,
            },
        )
        assert resp.status_code == 200, resp.get_json()
        data = resp.get_json()
        return data["token"], data["user"]

    return _register


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth():
    return auth_headers


# Unit-level wiring without Flask


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repositories(store):
    return build_repositories(store)


@pytest.fixture
def token_service():
    return TokenService(secret_provider=lambda: TEST_JWT_SECRET, expires_hours=1, timezone="UTC")


@pytest.fixture
def spawned():
    """Collects background tasks instead of running them."""
    return []


@pytest.fixture
def realtime(repositories, token_service, spawned):
    return build_realtime_hub(
        repositories,
        token_service,
        sleep=lambda seconds: None,
        spawn=lambda fn, *args: spawned.append((fn, args)),
        heartbeat_interval=0,
        leaderboard_interval=0,
    )


@pytest.fixture
def connect(realtime):
    """Open a fake connection on the unit-level hub."""

    def _connect(sid: str, **kwargs) -> FakeConnection:
        connection = FakeConnection(sid, **kwargs)
        realtime.lifecycle.on_open(connection)
        return connection

    return _connect


@pytest.fixture
def frame_text():
    def _text(frame_type: str, data=None, **extra) -> str:
        frame = {"type": frame_type}
        if data is not None:
            frame["data"] = data
        frame.update(extra)
        return encode_frame(frame)

    return _text
