from datetime import datetime
from typing import Optional

from .base import DocumentModel


class Notification(DocumentModel):
    """
    Запись о попытке доставки сообщения через Telegram.

    sent=True означает «показано/отправлено», а не подтвержденную доставку.
    """
    id: str
    user_id: Optional[str] = None
    telegram_handle: str
    message: str
    chat_id: Optional[int] = None
    created_at: datetime
    sent: bool = False
    sent_at: Optional[datetime] = None
