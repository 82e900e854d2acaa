"""Модели тестов и вопросов."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .base import DocumentModel


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    MULTIPLE_ANSWER = "multiple-answer"
    TEXT = "text"


class QuestionOption(DocumentModel):
    id: str
    text: str = ""
    correct: bool = False


class Question(DocumentModel):
    id: str
    text: str = ""
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    image: Optional[str] = None
    options: Optional[List[QuestionOption]] = None
    correct_answer: Optional[str] = None

    def correct_option_ids(self) -> set:
        return {option.id for option in self.options or [] if option.correct}

    def redacted(self) -> Dict[str, Any]:
        """Вопрос без ключа ответа, в виде для студента."""
        view: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "type": self.type.value,
            "image": self.image,
        }
        if self.options is not None:
            view["options"] = [{"id": o.id, "text": o.text} for o in self.options]
        return view


class Test(DocumentModel):
    __test__ = False
    id: str
    title: str
    description: str = ""
    duration: int
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    published: bool = False
    background_image: Optional[str] = None
    questions: List[Question] = []

    @property
    def question_count(self) -> int:
        return len(self.questions)
