import uuid
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resume_chat.schemas.parsed_resume import ParsedResume
from resume_chat.services.normalizer import normalize_parsed


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class SessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    file_name: str
    file_type: str
    parsed_data: ParsedResume
    created_at: datetime
    updated_at: datetime

    @field_validator("parsed_data", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> ParsedResume:
        return normalize_parsed(value)


class SessionUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=300)


class ChatMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    session_id: uuid.UUID
    role: MessageRole
    content: str
    created_at: datetime


class MessageCreate(BaseModel):
    content: str = Field(max_length=4000)


class ParseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    image_data: str | None = Field(default=None, alias="imageData")


class AskRequest(BaseModel):
    record: dict[str, Any] = {}
    question: str = ""


class AnswerResponse(BaseModel):
    answer: str
