from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from interview_prep.apis.deps import AIClient, CurrentUser
from interview_prep.core.logging import get_logger
from interview_prep.modules.ai.generator import (
    Stage,
    generate_concept_explanation,
    generate_interview_questions,
    log_stage,
)
from interview_prep.modules.ai.models import ConceptExplanation
from .schemas import (
    ErrorResponse,
    GenerateExplanationRequest,
    GenerateQuestionsRequest,
    GeneratedQuestionsResponse,
    RawTextResponse,
)


router = APIRouter(prefix="/api/ai", tags=["ai"])

logger = get_logger(__name__)

MISSING_FIELDS = "Missing required fields"
PARSE_FAILED = "AI returned text but JSON parsing failed. See rawText for debug."


def _missing_fields() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"message": MISSING_FIELDS}
    )


def _server_error(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message, "error": str(exc) or repr(exc)},
    )


@router.post(
    "/generate-questions",
    response_model=GeneratedQuestionsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": RawTextResponse}},
)
async def generate_questions(
    user: CurrentUser,
    ai: AIClient,
    req: Optional[GenerateQuestionsRequest] = None,
):
    """Generate interview question/answer pairs for a role"""
    log_stage("questions", Stage.VALIDATING)
    if req is None or not req.is_complete():
        return _missing_fields()

    try:
        result = await generate_interview_questions(
            ai,
            req.role,
            req.experience,
            req.topics_to_focus,
            req.number_of_questions,
        )

        log_stage("questions", Stage.RESPONDING)
        if not isinstance(result.data, list):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": PARSE_FAILED, "rawText": result.raw_text},
            )

        return JSONResponse(content={"questions": result.data})
    except Exception as e:
        logger.exception(
            "Error generating interview questions", extra={"user_id": user.id}
        )
        return _server_error("Failed to generate questions", e)


@router.post(
    "/generate-explanation",
    response_model=ConceptExplanation,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_explanation(
    user: CurrentUser,
    ai: AIClient,
    req: Optional[GenerateExplanationRequest] = None,
):
    """Explain the concept behind an interview question.

    When the model text holds no JSON the raw text is still returned with a
    200 so the client can show it.
    """
    log_stage("explanation", Stage.VALIDATING)
    if req is None or not req.question:
        return _missing_fields()

    try:
        result = await generate_concept_explanation(ai, req.question)

        log_stage("explanation", Stage.RESPONDING)
        if result.data is None:
            return JSONResponse(
                content={"message": PARSE_FAILED, "rawText": result.raw_text}
            )

        return JSONResponse(content=result.data)
    except Exception as e:
        logger.exception(
            "Error generating concept explanation", extra={"user_id": user.id}
        )
        return _server_error("Failed to generate explanation", e)
