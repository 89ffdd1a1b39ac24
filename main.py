from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from interview_prep.core.config import settings
from interview_prep.core.logging import (
    REQUEST_ID_HEADER,
    new_request_id,
    request_id_var,
    setup_logging,
)
from interview_prep.core.uploads import image_store
from interview_prep.apis.auth.main import router as auth_router
from interview_prep.apis.sessions.main import router as sessions_router
from interview_prep.apis.questions.main import router as questions_router
from interview_prep.apis.ai.main import router as ai_router
from interview_prep.modules.ai.client import GeminiClient

import uvicorn
from fastapi.middleware.cors import CORSMiddleware


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_context_middleware(request: Request, call_next):
    """Tag every log line of a request with its id and echo it back."""
    request_id = new_request_id(request.headers.get(REQUEST_ID_HEADER))
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app(ai_client: Optional[GeminiClient] = None) -> FastAPI:
    app = FastAPI(title=settings.app.name, version=settings.app.version)

    if ai_client is None:
        ai_client = GeminiClient.from_settings(settings.gemini)
    app.state.ai_client = ai_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.middleware("http")(request_context_middleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Serve uploaded profile images as static files
    app.mount(
        "/uploads",
        StaticFiles(directory=str(image_store.base_dir), html=False),
        name="uploads",
    )

    app.include_router(auth_router)
    app.include_router(sessions_router)
    app.include_router(questions_router)
    app.include_router(ai_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
