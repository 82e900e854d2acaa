#!/usr/bin/env python3
"""
Запуск Telegram-бота тестовой платформы.

Использование:
    python start.py
"""

import asyncio
import sys
import traceback
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from config.settings import Settings
from quizplatform.app import BotApp
from quizplatform.utils.logging import setup_logging

project_root = Path(__file__).parent


def main():
    """Основная функция для запуска бота."""
    env_file = project_root / ".env"
    if not env_file.exists():
        print("❌ Ошибка: файл .env не найден!")
        print("💡 Создайте файл .env с BOT_TOKEN и JWT_SECRET")
        sys.exit(1)

    try:
        settings = Settings()
    except ValidationError as e:
        print(f"❌ Ошибка конфигурации: {e}")
        sys.exit(1)

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        logger.info("🚀 Запуск бота тестовой платформы...")
        logger.info("📋 Для остановки нажмите Ctrl+C")
        asyncio.run(BotApp(settings).run())
    except (KeyboardInterrupt, SystemExit):
        logger.info("✅ Бот остановлен.")
    except Exception as e:
        logger.critical(f"💥 Непредвиденная ошибка: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    logger.info(f"Запуск на Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    if sys.version_info < (3, 10):
        logger.critical("Требуется Python 3.10 или выше.")
        sys.exit(1)
    main()
