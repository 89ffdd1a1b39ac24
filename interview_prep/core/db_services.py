"""Database service classes for interview sessions and their questions."""

from __future__ import annotations

from typing import Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from interview_prep.core.db.schemas.sessions import InterviewSession, Question


def ordered_questions(questions: Iterable[Question]) -> list[Question]:
    """Pinned questions first, then oldest first."""
    return sorted(
        questions,
        key=lambda q: (not q.is_pinned, q.created_at, q.id),
    )


class SessionService:
    """Service for creating, listing and deleting interview sessions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_session(
        self,
        user_id: int,
        role: str,
        experience: str,
        topics_to_focus: str,
        description: Optional[str] = None,
        questions: Optional[list[dict]] = None,
    ) -> InterviewSession:
        """Create a session together with its initial questions."""
        record = InterviewSession(
            user_id=user_id,
            role=role,
            experience=experience,
            topics_to_focus=topics_to_focus,
            description=description,
        )
        self.session.add(record)
        await self.session.flush()

        for q in questions or []:
            self.session.add(
                Question(
                    session_id=record.id,
                    question=q.get("question", ""),
                    answer=q.get("answer", ""),
                )
            )

        await self.session.commit()
        return await self.get_session(record.id)

    async def get_session(self, session_id: int) -> Optional[InterviewSession]:
        result = await self.session.execute(
            select(InterviewSession)
            .options(selectinload(InterviewSession.questions))
            .where(InterviewSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_user_session(
        self, session_id: int, user_id: int
    ) -> Optional[InterviewSession]:
        """Fetch a session only if it belongs to the given user."""
        record = await self.get_session(session_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    async def list_user_sessions(self, user_id: int) -> list[InterviewSession]:
        """List a user's sessions, newest first, with questions loaded."""
        result = await self.session.execute(
            select(InterviewSession)
            .options(selectinload(InterviewSession.questions))
            .where(InterviewSession.user_id == user_id)
            .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        )
        return list(result.scalars().all())

    async def delete_session(self, record: InterviewSession) -> None:
        """Delete a session; its loaded questions go with it via cascade."""
        await self.session.delete(record)
        await self.session.commit()


class QuestionService:
    """Service for adding, pinning and annotating questions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_questions(
        self, session_id: int, questions: list[dict]
    ) -> list[Question]:
        created = [
            Question(
                session_id=session_id,
                question=q.get("question", ""),
                answer=q.get("answer", ""),
            )
            for q in questions
        ]
        self.session.add_all(created)
        await self.session.commit()
        for q in created:
            await self.session.refresh(q)
        return created

    async def get_user_question(
        self, question_id: int, user_id: int
    ) -> Optional[Question]:
        """Fetch a question only if its session belongs to the given user."""
        result = await self.session.execute(
            select(Question)
            .join(InterviewSession, Question.session_id == InterviewSession.id)
            .where(Question.id == question_id, InterviewSession.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def toggle_pin(self, question: Question) -> Question:
        question.is_pinned = not question.is_pinned
        await self.session.commit()
        await self.session.refresh(question)
        return question

    async def update_note(self, question: Question, note: str) -> Question:
        question.note = note
        await self.session.commit()
        await self.session.refresh(question)
        return question
