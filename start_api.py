#!/usr/bin/env python3
"""
Запуск HTTP API тестовой платформы.

Использование:
    python start_api.py
"""

import sys

import uvicorn
from loguru import logger
from pydantic import ValidationError

from config.settings import Settings
from quizplatform.api import create_app
from quizplatform.utils.logging import setup_logging


def main():
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"❌ Ошибка конфигурации: {e}")
        sys.exit(1)

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info(f"🚀 Запуск HTTP API на {settings.API_HOST}:{settings.API_PORT}")

    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
