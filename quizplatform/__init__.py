"""Тестовая платформа: регистрация через Telegram и проверка ответов."""

__version__ = "1.0.0"
