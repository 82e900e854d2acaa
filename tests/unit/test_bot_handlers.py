"""Unit tests for Telegram bot handlers with a mocked transport."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from quizplatform.errors import StorageUnavailableError
from quizplatform.handlers import results as results_handlers
from quizplatform.handlers import verification as verification_handlers
from quizplatform.services.notification_service import NotificationService
from quizplatform.services.result_service import ResultService
from quizplatform.services.verification_service import VerificationService

PHONE = "+998901234567"


def _message(username="alice", text="", chat_id=42, first_name="Alice"):
    message = MagicMock()
    message.text = text
    message.answer = AsyncMock()
    message.chat = SimpleNamespace(id=chat_id)
    message.from_user = SimpleNamespace(username=username, first_name=first_name, last_name=None)
    return message


def _replies(message):
    return [c.args[0] for c in message.answer.await_args_list]


@pytest.fixture
def verification_service(store, clock):
    return VerificationService(store, clock=clock, code_generator=lambda: "123456")


@pytest.fixture
def notification_service(store, clock):
    return NotificationService(store, clock=clock)


async def _notifications(store):
    async with store.transaction(readonly=True) as db:
        return await db.notifications.load()


async def test_start_remembers_chat_and_shows_code(store, verification_service, notification_service):
    user_id = await verification_service.issue_code("@Alice", "Alice", PHONE)
    message = _message(username="alice")

    await verification_handlers.cmd_start(message, store, verification_service, notification_service)

    welcome, code = _replies(message)
    assert welcome.startswith("Salom, Alice!")
    assert "<code>123456</code>" in code

    async with store.transaction(readonly=True) as db:
        assert await db.chats.get_chat_id("ALICE") == 42
    [notification] = await _notifications(store)
    assert notification.user_id == user_id
    assert notification.chat_id == 42
    assert notification.sent is True


async def test_code_without_pending_request(store, verification_service, notification_service):
    message = _message()

    await verification_handlers.cmd_code(message, verification_service, notification_service)

    assert _replies(message) == [verification_handlers.NO_CODE_TEXT]
    assert message.answer.await_args.kwargs["reply_markup"] is verification_handlers.request_code_keyboard
    assert await _notifications(store) == []


async def test_user_without_username(verification_service, notification_service):
    message = _message(username=None)
    await verification_handlers.cmd_code(message, verification_service, notification_service)
    assert _replies(message) == [verification_handlers.NO_USERNAME_TEXT]


async def test_six_digit_text_gets_hint(verification_service, notification_service):
    await verification_service.issue_code("alice", "Alice", PHONE)
    message = _message(text="123456")

    await verification_handlers.handle_text(message, verification_service, notification_service)

    assert _replies(message) == [verification_handlers.NOT_A_CODE_TEXT]


async def test_code_is_shown_even_if_recording_fails(verification_service):
    await verification_service.issue_code("alice", "Alice", PHONE)
    failing = MagicMock()
    failing.record_delivery = AsyncMock(side_effect=StorageUnavailableError("down"))
    message = _message()

    shown = await verification_handlers.send_pending_code(message, "alice", verification_service, failing)

    assert shown is True
    assert "<code>123456</code>" in _replies(message)[0]


async def test_callback_requests_code(verification_service, notification_service):
    await verification_service.issue_code("alice", "Alice", PHONE)
    callback = MagicMock()
    callback.answer = AsyncMock()
    callback.from_user = SimpleNamespace(username="alice")
    callback.message = _message()

    await verification_handlers.request_code_callback(callback, verification_service, notification_service)

    callback.answer.assert_awaited_once()
    assert "<code>123456</code>" in _replies(callback.message)[0]


async def test_results_for_unregistered_user(store, clock):
    message = _message()
    await results_handlers.cmd_results(message, ResultService(store, clock=clock))
    assert _replies(message) == ["Siz hali test platformasida ro'yxatdan o'tmagansiz."]
