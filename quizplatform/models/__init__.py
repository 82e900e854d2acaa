"""Pydantic-модели документов, хранящихся в коллекциях."""

from .chat import TelegramChat
from .notification import Notification
from .result import GradedAnswer, Result, ResultSummary, SubmittedAnswer
from .test import Question, QuestionOption, QuestionType, Test
from .user import User, UserRole
from .verification import VerificationProfile, VerificationRequest, VerificationStatus

__all__ = [
    "GradedAnswer",
    "Notification",
    "Question",
    "QuestionOption",
    "QuestionType",
    "Result",
    "ResultSummary",
    "SubmittedAnswer",
    "TelegramChat",
    "Test",
    "User",
    "UserRole",
    "VerificationProfile",
    "VerificationRequest",
    "VerificationStatus",
]
