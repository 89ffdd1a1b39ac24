from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from interview_prep.core.config import settings
from interview_prep.core.logging import get_logger


logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: str, **kwargs) -> AsyncEngine:
    kwargs.setdefault("echo", False)
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **kwargs)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows stay readable after commit; handlers serialize them afterwards
    return async_sessionmaker(bind, expire_on_commit=False)


engine = build_engine(str(settings.postgres.connection_string))
async_session_maker = build_session_maker(engine)


@asynccontextmanager
async def session_scope(
    maker: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncIterator[AsyncSession]:
    """Commit when the block exits cleanly, roll back and re-raise otherwise."""
    async with (maker or async_session_maker)() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Session rolled back due to %s: %s", type(e).__name__, e)
            raise


async def get_session() -> AsyncIterator[AsyncSession]:
    async with session_scope() as session:
        yield session
