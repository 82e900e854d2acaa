"""Репозиторий запросов на верификацию."""

from datetime import datetime
from typing import List

from .base import BaseRepository
from ...models.verification import VerificationRequest


class VerificationRepository(BaseRepository[VerificationRequest]):
    """
    Запросы никогда не удаляются и остаются журналом попыток регистрации.
    """

    collection = "verifications"
    model = VerificationRequest

    async def get_active_for_handle(self, handle: str, now: datetime) -> List[VerificationRequest]:
        return [
            request for request in await self.load()
            if request.matches_handle(handle) and request.is_active(now)
        ]
