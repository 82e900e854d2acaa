"""Репозиторий результатов. Результаты только добавляются."""

from typing import List, Optional

from .base import BaseRepository
from ...models.result import Result


class ResultRepository(BaseRepository[Result]):
    collection = "results"
    model = Result

    async def get_by_id(self, result_id: str) -> Optional[Result]:
        for result in await self.load():
            if result.id == result_id:
                return result
        return None

    async def get_by_user(self, user_id: str) -> List[Result]:
        return [r for r in await self.load() if r.user_id == user_id]
