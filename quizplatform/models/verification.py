"""
Модели, связанные с процессом верификации через Telegram.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .base import DocumentModel
from ..utils.telegram import handle_key


class VerificationStatus(str, Enum):
    """Статус запроса на верификацию."""
    PENDING = "pending"
    STEP1_VERIFIED = "step1-verified"
    EXPIRED = "expired"
    COMPLETED = "completed"


ACTIVE_STATUSES = (VerificationStatus.PENDING, VerificationStatus.STEP1_VERIFIED)


class VerificationProfile(BaseModel):
    """Данные, введенные на сайте при запросе кода."""
    name: str
    phone: str


class VerificationRequest(DocumentModel):
    """
    Одна попытка регистрации, привязанная к Telegram handle
    и заранее выделенному идентификатору пользователя.
    """
    id: str
    user_id: str
    telegram_handle: str
    issued_code: str
    status: VerificationStatus = VerificationStatus.PENDING
    created_at: datetime
    expires_at: datetime
    profile: Optional[VerificationProfile] = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def effective_status(self, now: datetime) -> VerificationStatus:
        """
        Статус с учетом времени: активный запрос с истекшим сроком
        считается expired независимо от сохраненного значения.
        """
        if self.status in ACTIVE_STATUSES and self.is_expired(now):
            return VerificationStatus.EXPIRED
        return self.status

    def is_active(self, now: datetime) -> bool:
        return self.effective_status(now) in ACTIVE_STATUSES

    def matches_handle(self, handle: str) -> bool:
        return handle_key(self.telegram_handle) == handle_key(handle)
