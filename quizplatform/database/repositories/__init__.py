from .base import BaseRepository
from .chat_repository import ChatRepository
from .notification_repository import NotificationRepository
from .result_repository import ResultRepository
from .test_repository import TestRepository
from .user_repository import UserRepository
from .verification_repository import VerificationRepository

__all__ = [
    "BaseRepository",
    "ChatRepository",
    "NotificationRepository",
    "ResultRepository",
    "TestRepository",
    "UserRepository",
    "VerificationRepository",
]
