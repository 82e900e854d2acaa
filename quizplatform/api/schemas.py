"""Схемы тел HTTP-запросов."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.result import SubmittedAnswer


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(RequestModel):
    username: str = ""
    password: str = ""


class SendCodeRequest(RequestModel):
    telegram: str = ""
    name: str = ""
    phone: str = ""


class VerifyStep1Request(RequestModel):
    telegram: str = ""
    code: str = ""
    user_id: str = ""

    @field_validator("code", mode="before")
    @classmethod
    def code_as_text(cls, value):
        return str(value) if isinstance(value, int) else value


class CompleteRegistrationRequest(RequestModel):
    user_id: str = ""
    username: str = ""
    password: str = ""
    name: str = ""
    phone: str = ""
    telegram: str = ""


class SubmitResultRequest(RequestModel):
    test_id: str = ""
    answers: List[SubmittedAnswer]


class CreateTestRequest(RequestModel):
    title: str = ""
    description: str = ""
    duration: int = 0
    questions: List[Dict[str, Any]] = Field(default_factory=list)
    background_image: Optional[str] = None


class RandomTestRequest(RequestModel):
    title: str = ""
    description: str = ""
    duration: int = 0
    question_count: int = 0
    all_questions: List[Dict[str, Any]] = Field(default_factory=list)


class PublishRequest(RequestModel):
    published: bool


class UpdateTestRequest(RequestModel):
    """Изменяемые поля теста; отсутствующие в теле поля не трогаются."""

    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    published: Optional[bool] = None
    background_image: Optional[str] = None
    questions: Optional[List[Dict[str, Any]]] = None
