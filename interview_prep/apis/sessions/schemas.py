from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API bodies exchanged with the frontend in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class QuestionIn(CamelModel):
    question: str
    answer: str = ""


class QuestionRead(CamelModel):
    id: int
    session_id: int
    question: str
    answer: str
    note: str = ""
    is_pinned: bool = False
    created_at: datetime
    updated_at: datetime


class SessionCreateRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    role: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    topics_to_focus: str = Field(..., min_length=1)
    description: Optional[str] = None
    questions: list[QuestionIn] = Field(default_factory=list)


class SessionRead(CamelModel):
    id: int
    user_id: int
    role: str
    experience: str
    topics_to_focus: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    questions: list[QuestionRead] = Field(default_factory=list)


class SessionEnvelope(CamelModel):
    success: bool = True
    session: SessionRead


class MessageResponse(BaseModel):
    message: str
