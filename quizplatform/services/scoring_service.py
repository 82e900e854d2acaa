"""
Проверка ответов на тест.

grade() является чистой функцией: одинаковые (test, answers, result_id, user_id,
submitted_at) всегда дают одинаковый Result. Ни хранилища, ни часов.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from ..models.result import GradedAnswer, Result, SubmittedAnswer
from ..models.test import Question, QuestionType, Test


def _normalize_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().casefold()


def is_correct(question: Question, answer: SubmittedAnswer) -> bool:
    """Правильность одного ответа по правилам типа вопроса."""
    if question.type == QuestionType.MULTIPLE_CHOICE:
        correct_ids = question.correct_option_ids()
        # у вопроса с одним вариантом ответа ровно один правильный вариант
        if len(correct_ids) != 1 or answer.option_id is None:
            return False
        return answer.option_id in correct_ids

    if question.type == QuestionType.MULTIPLE_ANSWER:
        selected = set(answer.selected_options or [])
        return selected == question.correct_option_ids()

    if question.type == QuestionType.TEXT:
        submitted = _normalize_text(answer.text)
        expected = _normalize_text(question.correct_answer)
        if submitted is None or expected is None:
            return False
        return submitted == expected

    return False


def grade(
    test: Test,
    answers: Iterable[SubmittedAnswer],
    *,
    result_id: str,
    user_id: str,
    submitted_at: datetime,
) -> Result:
    """
    Оценка попытки.

    Ответ на несуществующий вопрос записывается как неверный. Засчитывается
    только первый ответ на каждый вопрос. Неотвеченные вопросы тоже входят
    в totalQuestions и снижают балл.
    """
    questions = {question.id: question for question in test.questions}
    answered = set()
    graded: List[GradedAnswer] = []
    correct_count = 0

    for answer in answers:
        question = questions.get(answer.question_id)
        correct = False
        if question is not None and answer.question_id not in answered:
            answered.add(answer.question_id)
            correct = is_correct(question, answer)
        if correct:
            correct_count += 1
        graded.append(GradedAnswer(**answer.model_dump(), correct=correct))

    total = len(test.questions)
    score = 100 * correct_count / total if total else 0.0

    return Result(
        id=result_id,
        test_id=test.id,
        user_id=user_id,
        answers=graded,
        score=score,
        correct_count=correct_count,
        total_questions=total,
        submitted_at=submitted_at,
    )
