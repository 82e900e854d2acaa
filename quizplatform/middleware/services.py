"""Middleware для передачи сервисов в обработчики."""

from datetime import timedelta
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from loguru import logger

from config.settings import Settings
from ..database.manager import StoreManager
from ..services.notification_service import NotificationService
from ..services.result_service import ResultService
from ..services.verification_service import VerificationService


class ServiceMiddleware(BaseMiddleware):
    """
    Middleware для передачи сервисов и менеджера хранилища в обработчики.
    Создает сервисы "на лету" для каждого события.
    """

    def __init__(self, db_manager: StoreManager, settings: Settings):
        """Инициализация middleware."""
        super().__init__()
        self.db_manager = db_manager
        self.settings = settings

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        """Выполнение middleware."""
        user = data.get("event_from_user")
        if user is not None:
            logger.debug(f"🔧 SERVICE_MIDDLEWARE: событие от {user.id} (@{user.username})")

        data["db_manager"] = self.db_manager
        data["settings"] = self.settings
        data["verification_service"] = VerificationService(
            self.db_manager,
            code_ttl=timedelta(minutes=self.settings.VERIFICATION_CODE_TTL_MINUTES),
        )
        data["notification_service"] = NotificationService(self.db_manager)
        data["result_service"] = ResultService(self.db_manager)

        return await handler(event, data)
