import time
from typing import Optional

import jwt
from fastapi_users import exceptions, models
from fastapi_users.authentication.strategy.jwt import JWTStrategy

from interview_prep.core.config import settings


class IssuerJWTStrategy(JWTStrategy[models.UP, models.ID]):
    """
    JWT strategy that stamps issuer and profile claims onto FastAPI Users tokens
    and refuses tokens minted by another issuer.
    """

    def __init__(self, secret: str, lifetime_seconds: int, issuer: str, audience: str):
        self.issuer = issuer
        super().__init__(
            secret=secret,
            lifetime_seconds=lifetime_seconds,
            token_audience=[audience],
            algorithm="HS256",
        )

    async def write_token(self, user: models.UP) -> str:
        """Generate a JWT carrying the user id, email and issuer"""
        now = int(time.time())
        data = {
            "sub": str(user.id),
            "aud": self.token_audience,
            "iss": self.issuer,
            "iat": now,
        }
        if self.lifetime_seconds:
            data["exp"] = now + self.lifetime_seconds

        if hasattr(user, "email"):
            data["email"] = str(user.email)

        return jwt.encode(data, self.encode_key, algorithm=self.algorithm)

    async def read_token(
        self, token: Optional[str], user_manager
    ) -> Optional[models.UP]:
        if token is None:
            return None

        try:
            payload = jwt.decode(
                token,
                self.decode_key,
                algorithms=[self.algorithm],
                audience=self.token_audience,
                issuer=self.issuer,
            )
        except jwt.PyJWTError:
            return None

        user_id = payload.get("sub")
        if user_id is None:
            return None

        try:
            parsed_user_id = user_manager.parse_id(user_id)
            return await user_manager.get(parsed_user_id)
        except (exceptions.UserNotExists, exceptions.InvalidID):
            return None


def build_jwt_strategy() -> IssuerJWTStrategy:
    return IssuerJWTStrategy(
        secret=settings.app.jwt_secret,
        lifetime_seconds=settings.jwt.token_lifetime_seconds,
        issuer=settings.jwt.issuer,
        audience=settings.jwt.audience,
    )
