"""Отправка ответов и просмотр результатов."""

from fastapi import APIRouter, Depends

from ..dependencies import get_current_user, get_result_service
from ..schemas import SubmitResultRequest
from ...models.user import User
from ...services.result_service import ResultService

router = APIRouter()


@router.post("", status_code=201)
async def submit_result(
    body: SubmitResultRequest,
    user: User = Depends(get_current_user),
    result_service: ResultService = Depends(get_result_service),
):
    summary = await result_service.submit(body.test_id, user.id, body.answers)
    return summary.to_document()


@router.get("")
async def list_results(
    user: User = Depends(get_current_user),
    result_service: ResultService = Depends(get_result_service),
):
    return await result_service.list_for(user)


@router.get("/{result_id}")
async def get_result(
    result_id: str,
    user: User = Depends(get_current_user),
    result_service: ResultService = Depends(get_result_service),
):
    return await result_service.get_for(result_id, user)
