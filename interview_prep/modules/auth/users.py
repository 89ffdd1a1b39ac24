from typing import AsyncIterator, Optional, cast

from fastapi import Depends
from fastapi_users import FastAPIUsers
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
)
from fastapi_users.authentication.transport import Transport
from fastapi_users_db_sqlalchemy import SQLAlchemyUserDatabase
from fastapi_users.manager import BaseUserManager, IntegerIDMixin
from fastapi_users import schemas as fa_schemas

from pydantic import ConfigDict, EmailStr
from pydantic.alias_generators import to_camel

from sqlalchemy.ext.asyncio import AsyncSession

from interview_prep.core.config import settings
from interview_prep.core.db.base import get_session
from interview_prep.core.db.schemas.auth import User
from interview_prep.core.jwt_strategy import IssuerJWTStrategy, build_jwt_strategy


class UserRead(fa_schemas.BaseUser[int]):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    email: EmailStr
    name: str
    profile_image_url: Optional[str] = None


class UserCreate(fa_schemas.BaseUserCreate):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: EmailStr
    password: str
    name: str
    profile_image_url: Optional[str] = None


class UserUpdate(fa_schemas.BaseUserUpdate):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: Optional[str] = None
    profile_image_url: Optional[str] = None


async def get_user_db(
    session: AsyncSession = Depends(get_session),
) -> AsyncIterator[SQLAlchemyUserDatabase]:
    yield SQLAlchemyUserDatabase(session, User)


class UserManager(IntegerIDMixin, BaseUserManager[User, int]):  # type: ignore[type-arg]
    reset_password_token_secret = settings.app.jwt_secret
    verification_token_secret = settings.app.jwt_secret


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase = Depends(get_user_db),
) -> AsyncIterator[UserManager]:
    yield UserManager(user_db)


bearer_transport = BearerTransport(tokenUrl="api/auth/login")


_jwt_strategy: Optional[IssuerJWTStrategy] = None


def get_jwt_strategy() -> IssuerJWTStrategy:
    global _jwt_strategy
    if _jwt_strategy is None:
        _jwt_strategy = build_jwt_strategy()
    return _jwt_strategy


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=cast(Transport, bearer_transport),
    get_strategy=get_jwt_strategy,
)


fastapi_users = FastAPIUsers[User, int](  # type: ignore[type-arg]
    get_user_manager,
    [auth_backend],
)

current_active_user = fastapi_users.current_user(active=True)
