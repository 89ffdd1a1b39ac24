from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from interview_prep.apis.deps import CurrentUser
from interview_prep.apis.sessions.schemas import QuestionIn, QuestionRead
from interview_prep.core.db.base import get_session
from interview_prep.core.db_services import QuestionService, SessionService
from .schemas import AddQuestionsRequest, QuestionEnvelope, UpdateNoteRequest


router = APIRouter(prefix="/api/questions", tags=["questions"])

_questions_adapter = TypeAdapter(list[QuestionIn])


@router.post(
    "/add",
    response_model=list[QuestionRead],
    status_code=status.HTTP_201_CREATED,
)
async def add_questions_to_session(
    req: AddQuestionsRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> list[QuestionRead]:
    """Append question/answer pairs to one of the user's sessions"""
    if not req.session_id or not isinstance(req.questions, list):
        raise HTTPException(status_code=400, detail="Invalid input data")
    try:
        questions = _questions_adapter.validate_python(req.questions)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid input data")

    record = await SessionService(session).get_user_session(req.session_id, user.id)
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")

    created = await QuestionService(session).add_questions(
        record.id, [q.model_dump() for q in questions]
    )
    return [QuestionRead.model_validate(q) for q in created]


async def _get_owned_question(db: QuestionService, question_id: int, user_id: int):
    question = await db.get_user_question(question_id, user_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


@router.post("/{question_id}/pin", response_model=QuestionEnvelope)
async def toggle_pin_question(
    question_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> QuestionEnvelope:
    db = QuestionService(session)
    question = await _get_owned_question(db, question_id, user.id)
    question = await db.toggle_pin(question)
    return QuestionEnvelope(question=QuestionRead.model_validate(question))


@router.post("/{question_id}/note", response_model=QuestionEnvelope)
async def update_question_note(
    question_id: int,
    user: CurrentUser,
    req: Optional[UpdateNoteRequest] = None,
    session: AsyncSession = Depends(get_session),
) -> QuestionEnvelope:
    db = QuestionService(session)
    question = await _get_owned_question(db, question_id, user.id)
    note = (req.note if req else None) or ""
    question = await db.update_note(question, note)
    return QuestionEnvelope(question=QuestionRead.model_validate(question))
