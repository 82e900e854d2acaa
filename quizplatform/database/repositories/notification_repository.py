"""Репозиторий уведомлений, отправленных через бота."""

from typing import List

from .base import BaseRepository
from ...models.notification import Notification


class NotificationRepository(BaseRepository[Notification]):
    collection = "notifications"
    model = Notification

    async def get_pending(self) -> List[Notification]:
        """Уведомления, которые еще не отправлялись."""
        return [n for n in await self.load() if not n.sent]
