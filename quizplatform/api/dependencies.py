"""Зависимости FastAPI: хранилище, сервисы и текущий пользователь."""

from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import Settings
from ..database.manager import StoreManager
from ..errors import AuthenticationError, ForbiddenError
from ..models.user import User
from ..services.auth_service import AuthService
from ..services.result_service import ResultService
from ..services.test_service import TestService
from ..services.user_service import UserService
from ..services.verification_service import VerificationService

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_manager(request: Request) -> StoreManager:
    return request.app.state.db_manager


def get_auth_service(
    db_manager: StoreManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db_manager, settings)


def get_verification_service(
    db_manager: StoreManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> VerificationService:
    return VerificationService(
        db_manager, code_ttl=timedelta(minutes=settings.VERIFICATION_CODE_TTL_MINUTES)
    )


def get_result_service(db_manager: StoreManager = Depends(get_db_manager)) -> ResultService:
    return ResultService(db_manager)


def get_test_service(db_manager: StoreManager = Depends(get_db_manager)) -> TestService:
    return TestService(db_manager)


def get_user_service(db_manager: StoreManager = Depends(get_db_manager)) -> UserService:
    return UserService(db_manager)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token taqdim etilmadi")
    return await auth_service.get_user(credentials.credentials)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Bu amal faqat adminlar uchun")
    return user
