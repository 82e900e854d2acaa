"""
Сервис двухканальной верификации.

Код выдается HTTP-процессом, а получает его пользователь только через
Telegram-бота: владение Telegram-аккаунтом и есть подтверждение личности.

Жизненный цикл запроса:
    pending -> step1-verified -> completed
    pending | step1-verified -> expired   (по времени или при перевыпуске)
"""

from datetime import timedelta
from typing import Callable, Optional

from loguru import logger

from ..database.manager import StoreManager
from ..errors import ConflictError, NotFoundOrExpiredError, ValidationError
from ..models.user import User, UserRole
from ..models.verification import VerificationProfile, VerificationRequest, VerificationStatus
from ..utils.crypto import generate_verification_code, hash_password, new_id
from ..utils.telegram import handle_key, normalize_handle
from ..utils.timeutils import Clock, utcnow
from ..utils.validators import (
    validate_full_name,
    validate_password,
    validate_phone,
    validate_telegram_handle,
    validate_username,
)

DEFAULT_CODE_TTL = timedelta(minutes=30)

INVALID_CODE_MESSAGE = "Noto'g'ri yoki muddati o'tgan tasdiqlash kodi"
INVALID_REGISTRATION_MESSAGE = "Yaroqsiz yoki muddati o'tgan ro'yxatdan o'tish jarayoni"


def _check(result: tuple[bool, str], field: str) -> None:
    ok, message = result
    if not ok:
        raise ValidationError(message, field=field)


class VerificationService:
    """Сервис выдачи и подтверждения кодов верификации."""

    def __init__(
        self,
        db_manager: StoreManager,
        code_ttl: timedelta = DEFAULT_CODE_TTL,
        clock: Clock = utcnow,
        code_generator: Callable[[], str] = generate_verification_code,
        id_factory: Callable[[], str] = new_id,
    ):
        self.db_manager = db_manager
        self.code_ttl = code_ttl
        self.clock = clock
        self.code_generator = code_generator
        self.id_factory = id_factory

    async def issue_code(self, telegram: str, name: str, phone: str) -> str:
        """
        Выдает новый код для handle и возвращает заранее выделенный userId.

        Сам код наружу не возвращается: пользователь получает его у бота.
        Все предыдущие активные запросы для этого handle помечаются expired.
        """
        handle = normalize_handle(telegram)
        _check(validate_telegram_handle(handle), "telegram")
        _check(validate_full_name(name), "name")
        _check(validate_phone(phone), "phone")

        now = self.clock()
        request = VerificationRequest(
            id=self.id_factory(),
            user_id=self.id_factory(),
            telegram_handle=handle,
            issued_code=self.code_generator(),
            status=VerificationStatus.PENDING,
            created_at=now,
            expires_at=now + self.code_ttl,
            profile=VerificationProfile(name=name.strip(), phone=phone.strip()),
        )

        async with self.db_manager.transaction() as db:
            requests = await db.verifications.load()
            superseded = 0
            for i, existing in enumerate(requests):
                if existing.matches_handle(handle) and existing.is_active(now):
                    requests[i] = existing.model_copy(update={"status": VerificationStatus.EXPIRED})
                    superseded += 1
            requests.append(request)
            await db.verifications.save(requests)

        if superseded:
            logger.info(f"Для @{handle} истекло {superseded} предыдущих запросов верификации")
        logger.info(
            f"Выдан код верификации для @{handle} (userId={request.user_id}). "
            f"Пользователь получит его у бота."
        )
        return request.user_id

    async def confirm_step1(self, telegram: str, code: str, user_id: str) -> VerificationRequest:
        """
        Первый шаг: проверка кода, полученного у бота.

        Неверный код, чужой handle, чужой userId и истекший срок дают
        одну и ту же ошибку NotFoundOrExpiredError.
        """
        if not telegram or not code or not user_id:
            raise ValidationError("Barcha ma'lumotlar kiritilishi shart")

        key = handle_key(telegram)
        code = str(code).strip()
        now = self.clock()

        async with self.db_manager.transaction() as db:
            requests = await db.verifications.load()
            for i, request in enumerate(requests):
                if (
                    handle_key(request.telegram_handle) == key
                    and request.issued_code == code
                    and request.user_id == user_id
                    and request.effective_status(now) == VerificationStatus.PENDING
                ):
                    confirmed = request.model_copy(update={"status": VerificationStatus.STEP1_VERIFIED})
                    requests[i] = confirmed
                    await db.verifications.save(requests)
                    break
            else:
                logger.info(f"Неудачная попытка подтверждения кода для @{normalize_handle(telegram)}")
                raise NotFoundOrExpiredError(INVALID_CODE_MESSAGE)

        logger.info(f"Код подтвержден для @{confirmed.telegram_handle} (userId={user_id})")
        return confirmed

    async def complete_registration(
        self,
        user_id: str,
        username: str,
        password: str,
        name: str,
        phone: str,
        telegram: str,
    ) -> User:
        """
        Второй шаг: создание пользователя с id = userId запроса.

        Пользователь и смена статуса запроса на completed записываются
        в одной транзакции. Повторный вызов с тем же userId завершается
        NotFoundOrExpiredError, так как запрос уже не step1-verified.
        """
        if not all([user_id, username, password, name, phone, telegram]):
            raise ValidationError("Barcha ma'lumotlar kiritilishi shart")
        _check(validate_username(username), "username")
        _check(validate_password(password), "password")
        _check(validate_full_name(name), "name")
        _check(validate_phone(phone), "phone")

        key = handle_key(telegram)
        now = self.clock()
        password_hash = hash_password(password)

        async with self.db_manager.transaction() as db:
            requests = await db.verifications.load()
            index = self._find_step1_verified(requests, user_id, key, now)
            if index is None:
                raise NotFoundOrExpiredError(INVALID_REGISTRATION_MESSAGE)
            request = requests[index]

            users = await db.users.load()
            if any(u.username == username for u in users):
                raise ConflictError("Bu foydalanuvchi nomi allaqachon mavjud", field="username")

            user = User(
                id=request.user_id,
                username=username,
                password_hash=password_hash,
                name=name.strip(),
                phone=phone.strip(),
                role=UserRole.STUDENT,
                telegram=request.telegram_handle,
                created_at=now,
            )
            users.append(user)
            requests[index] = request.model_copy(update={"status": VerificationStatus.COMPLETED})

            await db.users.save(users)
            await db.verifications.save(requests)

        logger.success(f"Зарегистрирован пользователь {username} (id={user.id}, @{user.telegram})")
        return user

    @staticmethod
    def _find_step1_verified(requests, user_id: str, key: str, now) -> Optional[int]:
        for i, request in enumerate(requests):
            if (
                request.user_id == user_id
                and handle_key(request.telegram_handle) == key
                and request.effective_status(now) == VerificationStatus.STEP1_VERIFIED
            ):
                return i
        return None

    async def lookup_active_code(self, telegram: str) -> Optional[VerificationRequest]:
        """
        Поиск еще не подтвержденного кода для handle (для бота).
        Принимает и '@handle', и 'handle' в любом регистре.
        """
        if not handle_key(telegram):
            return None

        now = self.clock()
        async with self.db_manager.transaction(readonly=True) as db:
            active = await db.verifications.get_active_for_handle(telegram, now)

        pending = [r for r in active if r.status == VerificationStatus.PENDING]
        if not pending:
            return None
        return max(pending, key=lambda r: r.created_at)
