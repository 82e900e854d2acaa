"""
Фикстуры HTTP-тестов: настоящее приложение create_app() поверх временного
файла SQLite. Генератор кодов подменяется, чтобы тест знал код, который
в жизни пользователь получает у бота.
"""

from datetime import timedelta

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from quizplatform.api import create_app
from quizplatform.api.dependencies import get_db_manager, get_settings, get_verification_service
from quizplatform.services.verification_service import VerificationService

TEST_CODE = "123456"
PHONE = "+998901234567"


@pytest.fixture
def client(settings):
    app = create_app(settings)

    def verification_service_with_known_code(request: Request):
        return VerificationService(
            get_db_manager(request),
            code_ttl=timedelta(minutes=get_settings(request).VERIFICATION_CODE_TTL_MINUTES),
            code_generator=lambda: TEST_CODE,
        )

    app.dependency_overrides[get_verification_service] = verification_service_with_known_code
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_header():
    return lambda token: {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, auth_header):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin-pass"})
    assert resp.status_code == 200
    return auth_header(resp.json()["token"])


@pytest.fixture
def register_student(client):
    """Полный путь регистрации через HTTP. Возвращает ответ complete-registration."""

    def register(telegram="alice", username="alice_t", password="pw"):
        resp = client.post(
            "/api/auth/send-code",
            json={"telegram": f"@{telegram}", "name": "Alice", "phone": PHONE},
        )
        assert resp.status_code == 200
        user_id = resp.json()["userId"]

        resp = client.post(
            "/api/auth/verify-code-step1",
            json={"telegram": telegram, "code": TEST_CODE, "userId": user_id},
        )
        assert resp.status_code == 200

        resp = client.post("/api/auth/complete-registration", json={
            "userId": user_id,
            "username": username,
            "password": password,
            "name": "Alice",
            "phone": PHONE,
            "telegram": telegram,
        })
        assert resp.status_code == 200
        return resp.json()

    return register


@pytest.fixture
def student_headers(register_student, auth_header):
    return auth_header(register_student()["token"])
