"""Валидаторы входных данных регистрации."""

import re

HANDLE_RE = re.compile(r"^[A-Za-z0-9_]{5,32}$")
PHONE_RE = re.compile(r"^\+?[0-9][0-9 ()-]{6,19}$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_.]{3,32}$")
CODE_RE = re.compile(r"^\d{6}$")


def validate_telegram_handle(handle: str) -> tuple[bool, str]:
    """Валидация Telegram username (уже нормализованного, без '@')."""
    if not handle:
        return False, "Telegram username kiritilishi shart"

    if not HANDLE_RE.match(handle):
        return False, "Telegram username noto'g'ri formatda"

    return True, ""


def validate_full_name(full_name: str) -> tuple[bool, str]:
    """Валидация ФИО пользователя."""
    if not full_name or not full_name.strip():
        return False, "To'liq ism kiritilishi shart"

    if len(full_name) > 100:
        return False, "Ism juda uzun (maksimum 100 belgi)"

    return True, ""


def validate_phone(phone: str) -> tuple[bool, str]:
    if not phone or not phone.strip():
        return False, "Telefon raqam kiritilishi shart"

    if not PHONE_RE.match(phone.strip()):
        return False, "Telefon raqam noto'g'ri formatda"

    return True, ""


def validate_username(username: str) -> tuple[bool, str]:
    if not username:
        return False, "Foydalanuvchi nomi kiritilishi shart"

    if not USERNAME_RE.match(username):
        return False, "Foydalanuvchi nomi 3-32 ta lotin harfi, raqam, '_' yoki '.' bo'lishi kerak"

    return True, ""


def validate_password(password: str) -> tuple[bool, str]:
    if not password:
        return False, "Parol kiritilishi shart"

    if len(password) > 128:
        return False, "Parol juda uzun (maksimum 128 belgi)"

    return True, ""


def is_verification_code(text: str) -> bool:
    return bool(text) and bool(CODE_RE.match(text.strip()))
