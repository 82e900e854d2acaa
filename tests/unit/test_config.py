"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from config.settings import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.DATABASE_PATH == "data/quizplatform.db"
    assert settings.VERIFICATION_CODE_TTL_MINUTES == 30
    assert settings.API_PORT == 10000
    assert settings.cors_origins == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123456:ABC-def")
    monkeypatch.setenv("CORS_ORIGINS", "https://quiz.uz, http://localhost:3000")
    monkeypatch.setenv("LOG_LEVEL", "info")

    settings = Settings(_env_file=None)

    assert settings.get_bot_token() == "123456:ABC-def"
    assert settings.cors_origins == ["https://quiz.uz", "http://localhost:3000"]
    assert settings.LOG_LEVEL == "INFO"


def test_missing_bot_token_raises():
    with pytest.raises(RuntimeError):
        Settings(_env_file=None).get_bot_token()


def test_secrets_are_hidden_in_repr():
    settings = Settings(_env_file=None, JWT_SECRET="super-secret-value")
    assert "super-secret-value" not in repr(settings)
    assert settings.get_jwt_secret() == "super-secret-value"


@pytest.mark.parametrize("field", ["VERIFICATION_CODE_TTL_MINUTES", "ACCESS_TOKEN_TTL_HOURS", "NOTIFICATION_REPLAY_INTERVAL"])
def test_non_positive_durations_rejected(field):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})
