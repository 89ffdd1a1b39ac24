"""AI module exports."""

from .client import GeminiClient
from .extractor import extract_json
from .generator import (
    Generation,
    Stage,
    generate_concept_explanation,
    generate_interview_questions,
)
from .normalizer import normalize_response
from .prompts import concept_explain_prompt, question_answer_prompt
from .retry import with_retry

__all__ = [
    "GeminiClient",
    "Generation",
    "Stage",
    "extract_json",
    "normalize_response",
    "concept_explain_prompt",
    "question_answer_prompt",
    "generate_concept_explanation",
    "generate_interview_questions",
    "with_retry",
]
