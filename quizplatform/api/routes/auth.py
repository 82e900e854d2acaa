"""Регистрация через Telegram и вход."""

from fastapi import APIRouter, Depends

from ..dependencies import get_auth_service, get_verification_service
from ..schemas import CompleteRegistrationRequest, LoginRequest, SendCodeRequest, VerifyStep1Request
from ...services.auth_service import AuthService
from ...services.verification_service import VerificationService

router = APIRouter()


@router.post("/login")
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.authenticate(body.username, body.password)
    return {"token": auth_service.create_access_token(user), "user": user.public_view()}


@router.post("/send-code")
async def send_code(
    body: SendCodeRequest,
    verification_service: VerificationService = Depends(get_verification_service),
):
    user_id = await verification_service.issue_code(body.telegram, body.name, body.phone)
    return {
        "message": "Tasdiqlash kodini olish uchun Telegram botga o'ting va /start buyrug'ini bosing",
        "userId": user_id,
    }


@router.post("/verify-code-step1")
async def verify_code_step1(
    body: VerifyStep1Request,
    verification_service: VerificationService = Depends(get_verification_service),
):
    await verification_service.confirm_step1(body.telegram, body.code, body.user_id)
    return {"message": "Kod tasdiqlandi. Endi tizimga kirish ma'lumotlarini yarating."}


@router.post("/complete-registration")
async def complete_registration(
    body: CompleteRegistrationRequest,
    verification_service: VerificationService = Depends(get_verification_service),
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await verification_service.complete_registration(
        user_id=body.user_id,
        username=body.username,
        password=body.password,
        name=body.name,
        phone=body.phone,
        telegram=body.telegram,
    )
    return {
        "message": "Ro'yxatdan muvaffaqiyatli o'tdingiz",
        "token": auth_service.create_access_token(user),
        "user": user.public_view(),
    }
