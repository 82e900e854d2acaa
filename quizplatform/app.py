"""Основной класс приложения для управления Telegram-ботом."""

import asyncio
import contextlib
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage
from loguru import logger

from config.settings import Settings
from .database.manager import StoreManager
from .dispatcher_setup import setup_dispatcher
from .services.notification_service import ChatTarget, NotificationService
from .utils.commands import set_bot_commands


class BotApp:
    """
    Основной класс приложения, который инициализирует и координирует
    все компоненты бота: настройки, хранилище, диспетчер, сервисы.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.bot: Optional[Bot] = None
        self.dp: Optional[Dispatcher] = None
        self.db_manager: Optional[StoreManager] = None
        self.notification_service: Optional[NotificationService] = None
        self._replay_task: Optional[asyncio.Task] = None

    async def _setup_bot_and_dispatcher(self):
        """Инициализирует бота и диспетчер."""
        self.bot = Bot(
            token=self.settings.get_bot_token(),
            default=DefaultBotProperties(parse_mode=ParseMode.HTML),
        )
        self.dp = Dispatcher(storage=MemoryStorage())
        logger.info("Бот и диспетчер успешно настроены.")

    async def _setup_database(self):
        """Инициализирует менеджер хранилища."""
        self.db_manager = StoreManager(self.settings.DATABASE_PATH, self.settings.STORE_BUSY_TIMEOUT)
        await self.db_manager.init_database()
        self.notification_service = NotificationService(self.db_manager)
        logger.info("Хранилище успешно инициализировано.")

    async def _setup_dispatcher(self):
        """Настраивает и регистрирует все компоненты в диспетчере."""
        setup_dispatcher(
            dp=self.dp,
            db_manager=self.db_manager,
            settings=self.settings,
        )
        logger.info("Диспетчер полностью настроен.")

    async def _send(self, target: ChatTarget, text: str) -> None:
        await self.bot.send_message(chat_id=target, text=text)

    async def replay_pending_notifications(self) -> int:
        """Одна повторная отправка неотправленных уведомлений."""
        try:
            sent = await self.notification_service.replay_pending(self._send)
            if sent > 0:
                logger.info(f"Повторная отправка: обработано {sent} уведомлений.")
            return sent
        except Exception as e:
            logger.error(f"Ошибка при повторной отправке уведомлений: {e}")
            return 0

    async def _periodic_replay(self):
        """Периодическая повторная отправка уведомлений."""
        while True:
            await asyncio.sleep(self.settings.NOTIFICATION_REPLAY_INTERVAL)
            await self.replay_pending_notifications()

    async def on_startup(self):
        """Выполняется при старте бота."""
        logger.info("Запуск бота...")
        try:
            await set_bot_commands(self.bot)
            logger.info("Команды бота успешно установлены")
        except Exception as e:
            logger.error(f"Ошибка при установке команд бота: {e}")

        await self.replay_pending_notifications()

        self._replay_task = asyncio.create_task(self._periodic_replay())
        logger.info("Периодические задачи запущены.")

    async def on_shutdown(self):
        """Выполняется при остановке бота."""
        logger.info("Остановка бота...")
        if self._replay_task:
            self._replay_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._replay_task
            self._replay_task = None
        if self.db_manager:
            await self.db_manager.close()
        if self.bot:
            await self.bot.session.close()
        logger.info("Все ресурсы освобождены. Бот остановлен.")

    async def run(self):
        """Главный метод для запуска бота."""
        try:
            await self._setup_bot_and_dispatcher()
            await self._setup_database()
            await self._setup_dispatcher()

            self.dp.startup.register(self.on_startup)

            allowed_updates = self.dp.resolve_used_update_types()
            logger.debug(f"Типы обновлений: {allowed_updates}")

            await self.bot.delete_webhook(drop_pending_updates=True)
            await self.dp.start_polling(
                self.bot,
                allowed_updates=allowed_updates,
            )
        except Exception as e:
            logger.opt(exception=True).critical(f"Критическая ошибка при запуске бота: {e}")
        finally:
            await self.on_shutdown()
