from __future__ import annotations

from typing import Any, Optional

from interview_prep.apis.sessions.schemas import CamelModel, QuestionRead


class AddQuestionsRequest(CamelModel):
    # Loose types; the handler answers malformed input with a 400
    session_id: Optional[int] = None
    questions: Optional[Any] = None


class UpdateNoteRequest(CamelModel):
    note: Optional[str] = None


class QuestionEnvelope(CamelModel):
    success: bool = True
    question: QuestionRead
