"""
Настройка и регистрация всех обработчиков и middleware для диспетчера.
"""
from typing import TYPE_CHECKING

from aiogram import Dispatcher
from loguru import logger

from .handlers import bot_router
from .middleware.services import ServiceMiddleware

if TYPE_CHECKING:
    from config.settings import Settings
    from .database.manager import StoreManager


def setup_dispatcher(
    dp: Dispatcher,
    db_manager: "StoreManager",
    settings: "Settings",
) -> None:
    """
    Настраивает диспетчер, регистрируя middleware и обработчики.

    Args:
        dp: Экземпляр Dispatcher.
        db_manager: Менеджер хранилища.
        settings: Конфигурация бота.
    """
    service_middleware = ServiceMiddleware(
        db_manager=db_manager,
        settings=settings,
    )
    dp.update.middleware(service_middleware)

    dp.include_router(bot_router)

    logger.info("Все обработчики успешно зарегистрированы.")
