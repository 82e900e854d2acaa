"""
Репозиторий пользователей платформы.
"""
from typing import Optional

from .base import BaseRepository
from ...models.user import User, UserRole
from ...utils.telegram import handle_key


class UserRepository(BaseRepository[User]):
    collection = "users"
    model = User

    async def get_by_id(self, user_id: str) -> Optional[User]:
        for user in await self.load():
            if user.id == user_id:
                return user
        return None

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Получает пользователя по логину (точное совпадение).

        Возвращает объект User или None, если пользователь не найден.
        """
        for user in await self.load():
            if user.username == username:
                return user
        return None

    async def get_by_telegram(self, telegram: str) -> Optional[User]:
        """Поиск по Telegram username без учета '@' и регистра."""
        key = handle_key(telegram)
        if not key:
            return None
        for user in await self.load():
            if user.telegram and handle_key(user.telegram) == key:
                return user
        return None

    async def has_admin(self) -> bool:
        return any(user.role == UserRole.ADMIN for user in await self.load())
