"""Pydantic models describing the JSON shapes requested from the model.

Kept free of length or format constraints so they stay usable as Gemini
response schemas.
"""

from pydantic import BaseModel


class QuestionAnswer(BaseModel):
    """One generated interview question with its short answer."""

    question: str
    answer: str


class ConceptExplanation(BaseModel):
    title: str
    explanation: str
