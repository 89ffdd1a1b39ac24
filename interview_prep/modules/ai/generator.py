"""Interview question and concept explanation generation.

Each call walks the same stages: the prompt is built, the model is asked,
the raw response is reduced to text and the JSON payload is pulled out of
that text. Results are returned as ``Generation`` so callers can choose how
to report a text that held no usable JSON.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from interview_prep.core.logging import get_logger
from interview_prep.modules.ai.client import GeminiClient
from interview_prep.modules.ai.extractor import extract_json
from interview_prep.modules.ai.normalizer import normalize_response
from interview_prep.modules.ai.prompts import (
    concept_explain_prompt,
    question_answer_prompt,
)
from interview_prep.modules.ai.retry import with_retry

logger = get_logger(__name__)


class Stage(str, enum.Enum):
    VALIDATING = "validating"
    GENERATING = "generating"
    NORMALIZING = "normalizing"
    RESPONDING = "responding"


@dataclass
class Generation:
    raw_text: str
    data: Optional[Any]


def log_stage(kind: str, stage: Stage) -> None:
    logger.debug("%s: %s", kind, stage.value)


async def generate_interview_questions(
    ai: GeminiClient,
    role: Any,
    experience: Any,
    topics_to_focus: Any,
    number_of_questions: Any,
) -> Generation:
    """Single schema-constrained call; failures propagate without retry."""
    prompt = question_answer_prompt(
        role, experience, topics_to_focus, number_of_questions
    )

    log_stage("questions", Stage.GENERATING)
    response = await ai.generate(prompt, ai.questions_config())

    log_stage("questions", Stage.NORMALIZING)
    raw_text = normalize_response(response)
    return Generation(raw_text=raw_text, data=extract_json(raw_text))


async def generate_concept_explanation(ai: GeminiClient, question: Any) -> Generation:
    prompt = concept_explain_prompt(question)

    async def call_ai() -> Any:
        return await ai.generate(prompt)

    log_stage("explanation", Stage.GENERATING)
    response = await with_retry(
        call_ai, attempts=ai.retry_attempts, base_delay=ai.retry_base_delay
    )

    log_stage("explanation", Stage.NORMALIZING)
    raw_text = normalize_response(response)
    return Generation(raw_text=raw_text, data=extract_json(raw_text))
