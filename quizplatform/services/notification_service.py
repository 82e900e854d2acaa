"""Сервис уведомлений: связывает коды с сайта и доставку через Telegram."""

from typing import Awaitable, Callable, Optional, Union

from loguru import logger

from ..database.manager import StoreManager
from ..models.notification import Notification
from ..utils.crypto import new_id
from ..utils.telegram import normalize_handle
from ..utils.timeutils import Clock, utcnow

ChatTarget = Union[int, str]
SendFunc = Callable[[ChatTarget, str], Awaitable[object]]


class NotificationService:
    """
    Журнал доставок через бота.

    Интерактивный путь (RecordDelivery): код уже показан пользователю,
    запись фиксирует факт показа. Путь повторной отправки (ReplayPending):
    не более одной попытки на уведомление, ошибки только логируются.
    """

    def __init__(self, db_manager: StoreManager, clock: Clock = utcnow):
        self.db_manager = db_manager
        self.clock = clock

    async def record_delivery(
        self, user_id: str, telegram: str, code: str, chat_id: Optional[int]
    ) -> Notification:
        """Запись о показанном пользователю коде."""
        now = self.clock()
        notification = Notification(
            id=new_id(),
            user_id=user_id,
            telegram_handle=normalize_handle(telegram),
            message=f"Verification code sent: {code}",
            chat_id=chat_id,
            created_at=now,
            sent=True,
            sent_at=now,
        )
        async with self.db_manager.transaction() as db:
            await db.notifications.append(notification)
        return notification

    async def enqueue(
        self,
        telegram: str,
        message: str,
        user_id: Optional[str] = None,
        chat_id: Optional[int] = None,
    ) -> Notification:
        """Постановка сообщения в очередь на отправку ботом."""
        notification = Notification(
            id=new_id(),
            user_id=user_id,
            telegram_handle=normalize_handle(telegram),
            message=message,
            chat_id=chat_id,
            created_at=self.clock(),
            sent=False,
        )
        async with self.db_manager.transaction() as db:
            await db.notifications.append(notification)
        logger.debug(f"Уведомление для @{notification.telegram_handle} поставлено в очередь")
        return notification

    async def replay_pending(self, send: SendFunc) -> int:
        """
        Отправка всех уведомлений с sent=False.

        Уведомления сначала помечаются отправленными в одной транзакции,
        и только потом отправляются, поэтому повторной отправки не бывает.
        Сетевые вызовы выполняются вне транзакции. Возвращает количество попыток.
        """
        now = self.clock()
        async with self.db_manager.transaction() as db:
            notifications = await db.notifications.load()
            claimed = []
            for i, notification in enumerate(notifications):
                if notification.sent:
                    continue
                if notification.chat_id is None:
                    chat_id = await db.chats.get_chat_id(notification.telegram_handle)
                    if chat_id is not None:
                        notification = notification.model_copy(update={"chat_id": chat_id})
                notifications[i] = notification.model_copy(update={"sent": True, "sent_at": now})
                claimed.append(notifications[i])
            if claimed:
                await db.notifications.save(notifications)

        if not claimed:
            return 0

        logger.info(f"Повторная отправка {len(claimed)} уведомлений...")
        for notification in claimed:
            target: ChatTarget = (
                notification.chat_id
                if notification.chat_id is not None
                else f"@{notification.telegram_handle}"
            )
            try:
                await send(target, notification.message)
                logger.debug(f"Уведомление {notification.id} отправлено в {target}")
            except Exception as e:
                logger.error(f"Ошибка отправки уведомления для @{notification.telegram_handle}: {e}")

        return len(claimed)
