from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from interview_prep.core.db.schemas.auth import User
from interview_prep.modules.ai.client import GeminiClient
from interview_prep.modules.auth import current_active_user


CurrentUser = Annotated[User, Depends(current_active_user)]


def get_ai_client(request: Request) -> GeminiClient:
    """Return the Gemini client the app was built with."""
    ai = getattr(request.app.state, "ai_client", None)
    if ai is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI client is not configured",
        )
    return ai


AIClient = Annotated[GeminiClient, Depends(get_ai_client)]
