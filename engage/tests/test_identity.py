"""Tests for JWT issuing, password hashing and secret resolution."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest

from engage.utils.config import DEV_JWT_SECRET, Settings, get_jwt_secret
from engage.utils.identity import PasswordHasher, TokenService


def test_token_carries_user_id_and_role(token_service):
    token = token_service.generate({"id": "u-1", "role": "validator"})

    claims = token_service.decode(token)
    assert claims["sub"] == "u-1"
    assert claims["role"] == "validator"
    assert TokenService.user_id_from_claims(claims) == "u-1"


def test_expired_token_is_rejected(token_service, jwt_secret):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode({"sub": "u-1", "exp": past}, jwt_secret, algorithm="HS256")

    with pytest.raises(jwt.ExpiredSignatureError):
        token_service.decode(token)


def test_token_signed_with_other_secret_is_rejected(token_service):
    other = TokenService(secret_provider=lambda: "a-different-secret-of-sufficient-size")
    token = other.generate({"id": "u-1", "role": "basic"})

    with pytest.raises(jwt.InvalidSignatureError):
        token_service.decode(token)


def test_password_hasher_round_trip(settings):
    hasher = PasswordHasher(settings)
    hashed = hasher.hash("correct horse")

    assert hasher.verify(hashed, "correct horse") is True
    assert hasher.verify(hashed, "battery staple") is False
    assert hasher.verify("not-a-hash", "correct horse") is False


def test_password_hasher_rejects_empty_password(settings):
    with pytest.raises(ValueError):
        PasswordHasher(settings).hash("")


def test_jwt_secret_prefers_environment(jwt_secret):
    assert get_jwt_secret() == jwt_secret


def test_jwt_secret_from_ssm(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    ssm = MagicMock()
    ssm.get_parameter.return_value = {"Parameter": {"Value": "from-ssm"}}
    settings = Settings.from_env({"JWT_SSM_PARAMETER": "/engage/jwt"})

    assert get_jwt_secret(ssm_client=ssm, settings=settings) == "from-ssm"
    ssm.get_parameter.assert_called_once_with(Name="/engage/jwt", WithDecryption=True)


def test_jwt_secret_falls_back_to_development_default(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)

    assert get_jwt_secret(settings=Settings.from_env({})) == DEV_JWT_SECRET


def test_settings_defaults():
    settings = Settings.from_env({})

    assert settings.port == 5000
    assert settings.jwt_exp_hours == 24
    assert settings.heartbeat_interval == 30
    assert settings.leaderboard_broadcast_interval == 60
    assert settings.socketio_async_mode == "eventlet"
    assert settings.metrics_enabled is True
