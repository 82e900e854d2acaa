"""Тесты: список, просмотр, создание и публикация."""

from fastapi import APIRouter, Depends, Request

from ..dependencies import get_current_user, get_test_service, require_admin
from ..schemas import CreateTestRequest, PublishRequest, RandomTestRequest, UpdateTestRequest
from ...models.user import User
from ...services.test_service import TestService

router = APIRouter()


@router.get("")
async def list_tests(
    user: User = Depends(get_current_user),
    test_service: TestService = Depends(get_test_service),
):
    return await test_service.list_for(user)


@router.post("", status_code=201)
async def create_test(
    body: CreateTestRequest,
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    test = await test_service.create(
        title=body.title,
        duration=body.duration,
        questions=body.questions,
        created_by=admin.id,
        description=body.description,
        background_image=body.background_image,
    )
    return test.to_document()


@router.post("/import")
async def import_test(
    request: Request,
    admin: User = Depends(require_admin),
):
    """Разбор текстового файла с вопросами (тело запроса в text/plain)."""
    content = (await request.body()).decode("utf-8", errors="replace")
    questions = TestService.import_questions(content)
    return {
        "message": f"Successfully parsed {len(questions)} questions",
        "questions": questions,
    }


@router.post("/random", status_code=201)
async def create_random_test(
    body: RandomTestRequest,
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    test = await test_service.create_random(
        title=body.title,
        duration=body.duration,
        question_count=body.question_count,
        pool=body.all_questions,
        created_by=admin.id,
        description=body.description,
    )
    return test.to_document()


@router.get("/{test_id}")
async def get_test(
    test_id: str,
    user: User = Depends(get_current_user),
    test_service: TestService = Depends(get_test_service),
):
    return await test_service.get_for(test_id, user)


@router.put("/{test_id}/publish")
async def publish_test(
    test_id: str,
    body: PublishRequest,
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    await test_service.set_published(test_id, body.published)
    return {"message": "Test e'lon qilindi" if body.published else "Test e'londan olindi"}


@router.put("/{test_id}")
async def update_test(
    test_id: str,
    body: UpdateTestRequest,
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    test = await test_service.update(test_id, body.model_dump(exclude_unset=True))
    return test.to_document()


@router.delete("/{test_id}")
async def delete_test(
    test_id: str,
    admin: User = Depends(require_admin),
    test_service: TestService = Depends(get_test_service),
):
    await test_service.delete(test_id)
    return {"message": "Test muvaffaqiyatli o'chirildi"}
