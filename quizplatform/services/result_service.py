"""Сервис результатов: прием ответов и просмотр результатов."""

from typing import Any, Dict, List, Sequence

from loguru import logger

from ..database.manager import StoreManager
from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models.result import Result, ResultSummary, SubmittedAnswer
from ..models.user import User
from ..utils.crypto import new_id
from ..utils.timeutils import Clock, utcnow
from .scoring_service import grade

UNKNOWN_TEST = "Unknown Test"
UNKNOWN_USER = "Unknown User"


class ResultService:
    def __init__(self, db_manager: StoreManager, clock: Clock = utcnow):
        self.db_manager = db_manager
        self.clock = clock

    async def submit(self, test_id: str, user_id: str, answers: Sequence[SubmittedAnswer]) -> ResultSummary:
        """
        Оценивает ответы по ключу теста и сохраняет неизменяемый результат.
        Студенту возвращается только балл и количество правильных ответов.
        """
        if not test_id or answers is None:
            raise ValidationError("Barcha ma'lumotlar to'g'ri formatda kiritilishi shart")

        async with self.db_manager.transaction() as db:
            test = await db.tests.get_by_id(test_id)
            if test is None:
                raise NotFoundError("Test topilmadi")

            result = grade(
                test,
                answers,
                result_id=new_id(),
                user_id=user_id,
                submitted_at=self.clock(),
            )
            await db.results.append(result)

        logger.info(
            f"Результат {result.id}: пользователь {user_id}, тест {test_id}, "
            f"{result.correct_count}/{result.total_questions} ({result.score:.2f}%)"
        )
        return result.summary()

    async def list_for(self, user: User) -> List[Dict[str, Any]]:
        """Админ видит все результаты, студент только свои."""
        async with self.db_manager.transaction(readonly=True) as db:
            results = await db.results.load()
            titles = {t.id: t.title for t in await db.tests.load()}
            names = {u.id: u.name for u in await db.users.load()}

        if not user.is_admin:
            results = [r for r in results if r.user_id == user.id]

        items = []
        for result in results:
            item = result.to_document()
            del item["answers"]
            item["testTitle"] = titles.get(result.test_id, UNKNOWN_TEST)
            if user.is_admin:
                item["userName"] = names.get(result.user_id, UNKNOWN_USER)
            else:
                del item["userId"]
            items.append(item)
        return items

    async def get_for(self, result_id: str, user: User) -> Dict[str, Any]:
        async with self.db_manager.transaction(readonly=True) as db:
            result = await db.results.get_by_id(result_id)
            if result is None:
                raise NotFoundError("Natija topilmadi")
            if not user.is_admin and result.user_id != user.id:
                raise ForbiddenError("Siz bu natijani ko'rish huquqiga ega emassiz")
            test = await db.tests.get_by_id(result.test_id)
            owner = await db.users.get_by_id(result.user_id)

        view = result.to_document()
        view["testTitle"] = test.title if test else UNKNOWN_TEST
        view["userName"] = owner.name if owner else UNKNOWN_USER
        return view

    async def list_for_telegram(self, telegram: str) -> List[tuple]:
        """
        Результаты пользователя по Telegram username (для команды /results).

        Возвращает список пар (название теста, Result) или пустой список.
        Если пользователь не зарегистрирован, NotFoundError.
        """
        async with self.db_manager.transaction(readonly=True) as db:
            user = await db.users.get_by_telegram(telegram)
            if user is None:
                raise NotFoundError("Siz hali test platformasida ro'yxatdan o'tmagansiz.")
            results: List[Result] = await db.results.get_by_user(user.id)
            titles = {t.id: t.title for t in await db.tests.load()}

        return [(titles.get(r.test_id, "Noma'lum test"), r) for r in results]
