"""
Общие фикстуры тестов.

pydantic-settings не читает настоящий .env проекта: настройки в тестах
задаются только явно. Хранилище: временный файл SQLite на каждый тест.
"""

from datetime import datetime, timedelta, timezone

import pytest

from config.settings import Settings
from quizplatform.database.manager import StoreManager

START = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Управляемые часы: сервисы получают их вместо utcnow."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_PATH=str(tmp_path / "store" / "quizplatform.db"),
        JWT_SECRET="test-jwt-secret-with-enough-length-0123456789",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="admin-pass",
        TELEGRAM_BOT_USERNAME="quiz_test_bot",
        LOG_FILE=None,
    )


@pytest.fixture
async def store(settings):
    manager = StoreManager(settings.DATABASE_PATH, settings.STORE_BUSY_TIMEOUT)
    await manager.init_database()
    yield manager
    await manager.close()
