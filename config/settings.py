"""Настройки конфигурации тестовой платформы (API и Telegram-бот)."""
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Основные настройки приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # 1. Настройки Telegram
    BOT_TOKEN: Optional[SecretStr] = Field(
        default=None,
        description="Токен Telegram бота (нужен только процессу бота)"
    )
    TELEGRAM_BOT_USERNAME: str = Field(
        default="your_bot_username",
        description="Username бота, который показывается на сайте"
    )

    # 2. Настройки хранилища
    DATABASE_PATH: str = Field(
        default="data/quizplatform.db",
        description="Путь к файлу SQLite, общему для API и бота"
    )
    STORE_BUSY_TIMEOUT: float = Field(
        default=5.0,
        description="Сколько секунд ждать блокировку БД от другого процесса"
    )

    # 3. Настройки авторизации
    JWT_SECRET: SecretStr = Field(
        default=SecretStr("your-secret-key"),
        description="Секрет для подписи JWT"
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Алгоритм подписи JWT")
    ACCESS_TOKEN_TTL_HOURS: int = Field(
        default=24,
        description="Время жизни токена в часах"
    )
    ADMIN_USERNAME: str = Field(default="admin", description="Логин первого администратора")
    ADMIN_PASSWORD: SecretStr = Field(
        default=SecretStr("admin123"),
        description="Пароль первого администратора"
    )

    # 4. Настройки верификации
    VERIFICATION_CODE_TTL_MINUTES: int = Field(
        default=30,
        description="Время жизни кода подтверждения в минутах (по умолчанию и в проде: 30)"
    )
    NOTIFICATION_REPLAY_INTERVAL: int = Field(
        default=300,
        description="Интервал повторной отправки уведомлений в секундах"
    )

    # 5. Настройки HTTP API
    API_HOST: str = Field(default="0.0.0.0", description="Адрес HTTP сервера")
    API_PORT: int = Field(default=10000, description="Порт HTTP сервера")
    CORS_ORIGINS: str = Field(
        default="*",
        description="Разрешенные источники CORS (через запятую)"
    )

    # 6. Логирование
    LOG_LEVEL: str = Field(default="DEBUG", description="Уровень логирования")
    LOG_FILE: Optional[str] = Field(default="quizplatform.log", description="Файл логов")

    @field_validator("VERIFICATION_CODE_TTL_MINUTES", "ACCESS_TOKEN_TTL_HOURS", "NOTIFICATION_REPLAY_INTERVAL")
    def positive(cls, value):
        if value <= 0:
            raise ValueError("значение должно быть положительным")
        return value

    @field_validator("LOG_LEVEL")
    def upper_level(cls, value):
        return value.upper()

    # Методы для удобства
    def get_bot_token(self) -> str:
        """Получить токен бота в виде строки."""
        if self.BOT_TOKEN is None:
            raise RuntimeError("BOT_TOKEN не задан в .env")
        return self.BOT_TOKEN.get_secret_value()

    def get_jwt_secret(self) -> str:
        return self.JWT_SECRET.get_secret_value()

    @property
    def cors_origins(self) -> List[str]:
        """Список источников CORS."""
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]
