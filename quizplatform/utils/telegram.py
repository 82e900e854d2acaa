"""Нормализация Telegram username."""

from typing import Optional


def normalize_handle(handle: Optional[str]) -> str:
    """
    Каноническая форма handle: без пробелов по краям и без ведущего '@'.
    Регистр сохраняется как ввел пользователь.
    """
    if not handle:
        return ""
    handle = handle.strip()
    if handle.startswith("@"):
        handle = handle[1:]
    return handle.strip()


def handle_key(handle: Optional[str]) -> str:
    """Ключ для сравнения: '@Alice', 'alice' и ' ALICE ' совпадают."""
    return normalize_handle(handle).casefold()
