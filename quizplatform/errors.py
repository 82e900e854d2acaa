"""
Иерархия ошибок приложения.

AppError: базовый класс всех типизированных ошибок. HTTP-слой превращает
их в JSON-ответы вида {"error": ..., "code": ...}, бот превращает их в короткий ответ
пользователю. Внутри ядра ни одна ошибка не повторяется автоматически.
"""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """Базовая ошибка приложения."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Отсутствующие или некорректные входные данные."""

    status_code = 400
    error_code = "validation_error"


class NotFoundOrExpiredError(AppError):
    """
    Код, handle или userId не совпали, либо истек срок действия.

    Причина намеренно не уточняется, чтобы нельзя было подбирать поля по одному.
    """

    status_code = 400
    error_code = "not_found_or_expired"


class ConflictError(AppError):
    status_code = 400
    error_code = "conflict"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "authentication_error"


class ForbiddenError(AppError):
    status_code = 403
    error_code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class StorageUnavailableError(AppError):
    """Ошибка ввода-вывода хранилища. Фатальна для текущего запроса."""

    status_code = 503
    error_code = "storage_unavailable"
