"""Сервис авторизации: вход, JWT и создание первого администратора."""

from datetime import timedelta
from typing import Any, Dict

import jwt
from loguru import logger

from config.settings import Settings
from ..database.manager import StoreManager
from ..errors import AuthenticationError, ValidationError
from ..models.user import User, UserRole
from ..utils.crypto import hash_password, new_id, verify_password
from ..utils.timeutils import Clock, utcnow

TOKEN_ISSUER = "quizplatform"


class AuthService:
    def __init__(self, db_manager: StoreManager, settings: Settings, clock: Clock = utcnow):
        self.db_manager = db_manager
        self.settings = settings
        self.clock = clock

    def create_access_token(self, user: User) -> str:
        now = self.clock()
        payload = {
            "sub": user.id,
            "username": user.username,
            "role": user.role.value,
            "iss": TOKEN_ISSUER,
            "iat": now,
            "exp": now + timedelta(hours=self.settings.ACCESS_TOKEN_TTL_HOURS),
        }
        return jwt.encode(payload, self.settings.get_jwt_secret(), algorithm=self.settings.JWT_ALGORITHM)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.settings.get_jwt_secret(),
                algorithms=[self.settings.JWT_ALGORITHM],
                issuer=TOKEN_ISSUER,
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Отклонен токен: {e}")
            raise AuthenticationError("Token yaroqsiz") from e

    async def authenticate(self, username: str, password: str) -> User:
        if not username or not password:
            raise ValidationError("Foydalanuvchi nomi va parol kiritilishi shart")

        async with self.db_manager.transaction(readonly=True) as db:
            user = await db.users.get_by_username(username)

        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Неудачный вход для {username}")
            raise AuthenticationError("Noto'g'ri foydalanuvchi nomi yoki parol")
        return user

    async def get_user(self, token: str) -> User:
        """Пользователь по токену; удаленный пользователь считается невалидным токеном."""
        payload = self.decode_access_token(token)
        async with self.db_manager.transaction(readonly=True) as db:
            user = await db.users.get_by_id(payload.get("sub", ""))
        if user is None:
            raise AuthenticationError("Token yaroqsiz")
        return user

    async def ensure_admin(self) -> bool:
        """
        Создает администратора из настроек, если в системе нет ни одного.
        Возвращает True, если администратор был создан.
        """
        async with self.db_manager.transaction() as db:
            if await db.users.has_admin():
                return False
            admin = User(
                id=new_id(),
                username=self.settings.ADMIN_USERNAME,
                password_hash=hash_password(self.settings.ADMIN_PASSWORD.get_secret_value()),
                name="Administrator",
                role=UserRole.ADMIN,
                created_at=self.clock(),
            )
            await db.users.append(admin)

        logger.warning(f"Создан администратор {admin.username}. Смените пароль по умолчанию.")
        return True
