from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from interview_prep.apis.deps import CurrentUser
from interview_prep.core.db.base import get_session
from interview_prep.core.db.schemas.sessions import InterviewSession
from interview_prep.core.db_services import SessionService, ordered_questions
from .schemas import (
    MessageResponse,
    QuestionRead,
    SessionCreateRequest,
    SessionEnvelope,
    SessionRead,
)


router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def to_session_read(record: InterviewSession, pinned_first: bool = False) -> SessionRead:
    questions = record.questions or []
    if pinned_first:
        questions = ordered_questions(questions)
    return SessionRead(
        id=record.id,
        user_id=record.user_id,
        role=record.role,
        experience=record.experience,
        topics_to_focus=record.topics_to_focus,
        description=record.description,
        created_at=record.created_at,
        updated_at=record.updated_at,
        questions=[QuestionRead.model_validate(q) for q in questions],
    )


@router.post(
    "/create",
    response_model=SessionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    req: SessionCreateRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> SessionEnvelope:
    """Create a session with its initial question/answer pairs"""
    db = SessionService(session)
    record = await db.create_session(
        user_id=user.id,
        role=req.role,
        experience=req.experience,
        topics_to_focus=req.topics_to_focus,
        description=req.description,
        questions=[q.model_dump() for q in req.questions],
    )
    return SessionEnvelope(session=to_session_read(record))


@router.get("/my-sessions", response_model=list[SessionRead])
async def list_my_sessions(
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> list[SessionRead]:
    """List the current user's sessions, newest first"""
    records = await SessionService(session).list_user_sessions(user.id)
    return [to_session_read(r) for r in records]


@router.get("/{session_id}", response_model=SessionEnvelope)
async def get_session_by_id(
    session_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> SessionEnvelope:
    record = await SessionService(session).get_user_session(session_id, user.id)
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionEnvelope(session=to_session_read(record, pinned_first=True))


@router.delete("/{session_id}", response_model=MessageResponse)
async def delete_session(
    session_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    db = SessionService(session)
    record = await db.get_session(session_id)
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")

    if record.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to delete this session",
        )

    await db.delete_session(record)
    return MessageResponse(message="Session deleted successfully")
