"""Хендлеры бота: выдача кода подтверждения, зарегистрированного на сайте."""

from html import escape

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message
from loguru import logger

from ..database.manager import StoreManager
from ..errors import AppError
from ..models.chat import TelegramChat
from ..services.notification_service import NotificationService
from ..services.verification_service import VerificationService
from ..utils.timeutils import utcnow
from ..utils.validators import is_verification_code

router = Router(name="verification")

NO_USERNAME_TEXT = "Iltimos, Telegram profilingizda username o'rnating va qayta urinib ko'ring."
ERROR_TEXT = "Xatolik yuz berdi. Iltimos, keyinroq qayta urinib ko'ring."
NO_CODE_TEXT = (
    "Sizning uchun faol tasdiqlash kodi topilmadi. "
    "Iltimos, avval web saytdan ro'yxatdan o'tishni boshlang."
)
NOT_A_CODE_TEXT = "Bu tasdiqlash kodi emas. Tasdiqlash kodini olish uchun /code buyrug'ini yuboring."
COMMANDS_TEXT = (
    "/start - Botni ishga tushirish\n"
    "/help - Yordam olish\n"
    "/code - Tasdiqlash kodini olish\n"
    "/results - Test natijalarini ko'rish"
)

request_code_keyboard = InlineKeyboardMarkup(inline_keyboard=[
    [InlineKeyboardButton(text="🔑 Kodni olish", callback_data="request_code")]
])


def code_text(code: str) -> str:
    return (
        f"Sizning tasdiqlash kodingiz: <code>{code}</code>\n\n"
        "Bu kodni test platformasida ro'yxatdan o'tish jarayonida kiriting."
    )


async def send_pending_code(
    message: Message,
    username: str,
    verification_service: VerificationService,
    notification_service: NotificationService,
) -> bool:
    """
    Показывает пользователю активный код для его username.

    Ответ пользователю формируется до записи в журнал уведомлений,
    поэтому ошибка журнала не ломает ответ. Возвращает True, если код найден.
    """
    try:
        request = await verification_service.lookup_active_code(username)
    except AppError as e:
        logger.error(f"Ошибка поиска кода для @{username}: {e}")
        await message.answer(ERROR_TEXT)
        return False

    if request is None:
        await message.answer(NO_CODE_TEXT, reply_markup=request_code_keyboard)
        return False

    await message.answer(code_text(request.issued_code))

    try:
        await notification_service.record_delivery(
            request.user_id, username, request.issued_code, message.chat.id
        )
    except AppError as e:
        logger.error(f"Не удалось записать уведомление для @{username}: {e}")

    logger.info(f"Код верификации показан @{username} (userId={request.user_id})")
    return True


@router.message(CommandStart())
async def cmd_start(
    message: Message,
    db_manager: StoreManager,
    verification_service: VerificationService,
    notification_service: NotificationService,
):
    """Команда /start: запоминаем чат и сразу проверяем ожидающий код."""
    username = message.from_user.username
    if not username:
        await message.answer(NO_USERNAME_TEXT)
        return

    try:
        async with db_manager.transaction() as db:
            is_new = await db.chats.upsert(
                TelegramChat.from_aiogram(message.chat, message.from_user, utcnow())
            )
        if is_new:
            logger.info(f"Новый чат с @{username} ({message.chat.id})")
    except AppError as e:
        logger.error(f"Не удалось сохранить чат @{username}: {e}")

    await message.answer(
        f"Salom, {escape(message.from_user.first_name or username)}! Test platformasi botiga xush kelibsiz. "
        "Bu bot orqali ro'yxatdan o'tish va test natijalarini olishingiz mumkin.\n\n"
        f"Mavjud buyruqlar:\n{COMMANDS_TEXT}"
    )

    await send_pending_code(message, username, verification_service, notification_service)


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(f"Test platformasi boti qo'llanmasi:\n\n{COMMANDS_TEXT}")


@router.message(Command("code"))
async def cmd_code(
    message: Message,
    verification_service: VerificationService,
    notification_service: NotificationService,
):
    """Команда /code: выдача активного кода."""
    username = message.from_user.username
    if not username:
        await message.answer(NO_USERNAME_TEXT)
        return

    await send_pending_code(message, username, verification_service, notification_service)


@router.callback_query(F.data == "request_code")
async def request_code_callback(
    callback: CallbackQuery,
    verification_service: VerificationService,
    notification_service: NotificationService,
):
    await callback.answer()
    username = callback.from_user.username
    if not username:
        await callback.message.answer(NO_USERNAME_TEXT)
        return

    await send_pending_code(callback.message, username, verification_service, notification_service)


@router.message(F.text & ~F.text.startswith("/"))
async def handle_text(
    message: Message,
    verification_service: VerificationService,
    notification_service: NotificationService,
):
    """
    Произвольный текст. На шестизначное число отвечаем подсказкой, что код вводится на сайте,
    а не в боте; иначе ищем ожидающий код.
    """
    if is_verification_code(message.text):
        await message.answer(NOT_A_CODE_TEXT)
        return

    username = message.from_user.username
    if not username:
        await message.answer(NO_USERNAME_TEXT)
        return

    await send_pending_code(message, username, verification_service, notification_service)
