# Import models so Alembic and Base metadata are aware of them
from .auth import User  # noqa: F401
from .sessions import InterviewSession, Question  # noqa: F401
