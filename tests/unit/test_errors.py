"""Unit tests for AppError hierarchy."""

import pytest

from quizplatform.errors import (
    AppError,
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    NotFoundOrExpiredError,
    StorageUnavailableError,
    ValidationError,
)


@pytest.mark.parametrize(
    "cls, status_code, error_code",
    [
        (ValidationError, 400, "validation_error"),
        (NotFoundOrExpiredError, 400, "not_found_or_expired"),
        (ConflictError, 400, "conflict"),
        (AuthenticationError, 401, "authentication_error"),
        (ForbiddenError, 403, "forbidden"),
        (NotFoundError, 404, "not_found"),
        (StorageUnavailableError, 503, "storage_unavailable"),
    ],
)
def test_subclasses(cls, status_code, error_code):
    e = cls("message")
    assert isinstance(e, AppError)
    assert e.status_code == status_code
    assert e.error_code == error_code
    assert str(e) == "message"


class TestAppErrorToDict:
    def test_basic(self):
        e = NotFoundError("Test topilmadi")
        assert e.to_dict() == {"error": "Test topilmadi", "code": "not_found"}

    def test_with_field_and_details(self):
        e = ValidationError("bad", field="phone", details=[{"loc": ["phone"]}])
        assert e.to_dict() == {
            "error": "bad",
            "code": "validation_error",
            "field": "phone",
            "details": [{"loc": ["phone"]}],
        }
