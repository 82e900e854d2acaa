"""Репозиторий личных чатов с ботом."""

from typing import Optional

from .base import BaseRepository
from ...models.chat import TelegramChat
from ...utils.telegram import handle_key


class ChatRepository(BaseRepository[TelegramChat]):
    collection = "chats"
    model = TelegramChat

    async def upsert(self, chat: TelegramChat) -> bool:
        """
        Запоминает чат пользователя. Если username уже известен,
        обновляет chat_id. Возвращает True, если запись новая.
        """
        chats = await self.load()
        key = handle_key(chat.username)
        for i, existing in enumerate(chats):
            if existing.chat_id == chat.chat_id or handle_key(existing.username) == key:
                chats[i] = existing.model_copy(update={
                    "chat_id": chat.chat_id,
                    "username": chat.username,
                    "first_name": chat.first_name,
                    "last_name": chat.last_name,
                })
                await self.save(chats)
                return False
        chats.append(chat)
        await self.save(chats)
        return True

    async def get_chat_id(self, handle: str) -> Optional[int]:
        key = handle_key(handle)
        for chat in await self.load():
            if handle_key(chat.username) == key:
                return chat.chat_id
        return None
