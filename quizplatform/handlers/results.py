"""Хендлер команды /results: результаты тестов зарегистрированного пользователя."""

from html import escape

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from loguru import logger

from ..errors import NotFoundError, StorageUnavailableError
from ..services.result_service import ResultService
from .verification import ERROR_TEXT, NO_USERNAME_TEXT

router = Router(name="results")


@router.message(Command("results"))
async def cmd_results(message: Message, result_service: ResultService):
    username = message.from_user.username
    if not username:
        await message.answer(NO_USERNAME_TEXT)
        return

    try:
        results = await result_service.list_for_telegram(username)
    except NotFoundError as e:
        await message.answer(e.message)
        return
    except StorageUnavailableError as e:
        logger.error(f"Ошибка получения результатов для @{username}: {e}")
        await message.answer(ERROR_TEXT)
        return

    if not results:
        await message.answer("Siz hali birorta ham test topshirmagansiz.")
        return

    lines = ["Sizning test natijalaringiz:\n"]
    for index, (title, result) in enumerate(results, start=1):
        lines.append(
            f"{index}. {escape(title)}\n"
            f"   Ball: {result.correct_count}/{result.total_questions} ({result.score:.2f}%)\n"
            f"   Sana: {result.submitted_at.strftime('%d.%m.%Y %H:%M')}\n"
        )
    await message.answer("\n".join(lines))
