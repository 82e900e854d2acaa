from datetime import datetime
from typing import Optional

from aiogram.types import Chat, User as AiogramUser

from .base import DocumentModel


class TelegramChat(DocumentModel):
    """Личный чат пользователя с ботом, запоминается по команде /start."""

    chat_id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    registered_at: datetime

    @classmethod
    def from_aiogram(cls, chat: Chat, user: AiogramUser, registered_at: datetime) -> "TelegramChat":
        """
        Создает экземпляр TelegramChat из объектов aiogram.
        """
        return cls(
            chat_id=chat.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            registered_at=registered_at,
        )
