"""Справочники админки: пользователи и пул вопросов."""

from fastapi import APIRouter, Depends

from ..dependencies import get_test_service, get_user_service, require_admin
from ...models.user import User
from ...services.test_service import TestService
from ...services.user_service import UserService

router = APIRouter()


@router.get("/users")
async def list_users(
    admin: User = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.list_users()


@router.get("/questions")
async def list_questions(
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    """Вопросы всех тестов для составления случайного теста."""
    return await test_service.list_question_pool()
