from datetime import datetime
from typing import List, Optional

from .base import DocumentModel


class SubmittedAnswer(DocumentModel):
    """Ответ студента на один вопрос, как он пришел от клиента."""

    question_id: str
    option_id: Optional[str] = None
    selected_options: Optional[List[str]] = None
    text: Optional[str] = None


class GradedAnswer(SubmittedAnswer):
    correct: bool = False


class ResultSummary(DocumentModel):
    """Урезанный результат, который возвращается студенту."""

    id: str
    score: float
    correct_count: int
    total_questions: int


class Result(DocumentModel):
    """Неизменяемый результат одной попытки прохождения теста."""

    id: str
    test_id: str
    user_id: str
    answers: List[GradedAnswer]
    score: float
    correct_count: int
    total_questions: int
    submitted_at: datetime

    def summary(self) -> ResultSummary:
        return ResultSummary(
            id=self.id,
            score=self.score,
            correct_count=self.correct_count,
            total_questions=self.total_questions,
        )
