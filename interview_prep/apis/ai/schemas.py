from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from interview_prep.modules.ai.models import QuestionAnswer


class GenerateQuestionsRequest(BaseModel):
    # Untyped and optional; the handler reports missing values with a 400
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role: Optional[Any] = None
    experience: Optional[Any] = None
    topics_to_focus: Optional[Any] = None
    number_of_questions: Optional[Any] = None

    def is_complete(self) -> bool:
        return bool(
            self.role
            and self.experience
            and self.topics_to_focus
            and self.number_of_questions
        )


class GenerateExplanationRequest(BaseModel):
    question: Optional[Any] = None


class GeneratedQuestionsResponse(BaseModel):
    questions: list[QuestionAnswer]


class RawTextResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    raw_text: str


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
