"""Сервис пользователей для админки."""

from typing import Any, Dict, List

from ..database.manager import StoreManager


class UserService:
    def __init__(self, db_manager: StoreManager):
        self.db_manager = db_manager

    async def list_users(self) -> List[Dict[str, Any]]:
        """Все пользователи без хэшей паролей."""
        async with self.db_manager.transaction(readonly=True) as db:
            users = await db.users.load()
        return [user.admin_view() for user in users]
