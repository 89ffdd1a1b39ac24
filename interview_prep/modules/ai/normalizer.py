"""Reduce a provider response of unknown shape to plain text.

Responses are first classified into one of the known variants below, then
each variant is turned into text. Mappings (raw REST payloads) and attribute
objects (SDK models) are inspected the same way.

Variants, in priority order:

- ``PlainText``: the response is already a string.
- ``OutputEntries``: an ``output`` collection whose entries carry either a
  nested ``contents`` collection of text items or a direct ``text``.
- ``TopLevelText``: a non-empty ``text`` field on the response itself.
- ``CandidateParts``: the raw Gemini shape ``candidates[].content.parts[].text``.
- ``Unrecognized``: anything else; serialized to JSON as a last resort.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from interview_prep.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class OutputEntries:
    entries: list
    # Top-level text used when no entry yields any
    fallback_text: Optional[str] = None


@dataclass(frozen=True)
class TopLevelText:
    text: str


@dataclass(frozen=True)
class CandidateParts:
    candidates: list


@dataclass(frozen=True)
class Unrecognized:
    payload: Any


ProviderResponse = Union[PlainText, OutputEntries, TopLevelText, CandidateParts, Unrecognized]


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _nonempty_text(obj: Any) -> Optional[str]:
    text = _field(obj, "text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


def classify_response(response: Any) -> ProviderResponse:
    if isinstance(response, str):
        return PlainText(response)

    output = _field(response, "output")
    if _is_collection(output):
        return OutputEntries(list(output), _nonempty_text(response))

    text = _nonempty_text(response)
    if text:
        return TopLevelText(text)

    candidates = _field(response, "candidates")
    if _is_collection(candidates) and candidates:
        return CandidateParts(list(candidates))

    return Unrecognized(response)


def _output_text(entries: list) -> Optional[str]:
    for entry in entries:
        contents = _field(entry, "contents")
        if _is_collection(contents):
            for item in contents:
                text = _nonempty_text(item)
                if text:
                    return text
        text = _nonempty_text(entry)
        if text:
            return text
    return None


def _candidate_text(candidates: list) -> Optional[str]:
    for candidate in candidates:
        parts = _field(_field(candidate, "content"), "parts")
        if not _is_collection(parts):
            continue
        chunks = []
        for part in parts:
            # Skip model "thinking" parts
            if _field(part, "thought"):
                continue
            text = _field(part, "text")
            if isinstance(text, str):
                chunks.append(text)
        joined = "".join(chunks).strip()
        if joined:
            return joined
    return None


def _serialize(payload: Any) -> str:
    if hasattr(payload, "model_dump_json"):
        return payload.model_dump_json()
    return json.dumps(payload, default=str)


def normalize_response(response: Any) -> str:
    """Return the best plain-text payload of ``response``; never raises."""
    if response is None or (isinstance(response, (bool, int, float)) and not response):
        return ""

    try:
        match classify_response(response):
            case PlainText(text=text):
                return text.strip()
            case OutputEntries(entries=entries, fallback_text=fallback):
                return _output_text(entries) or fallback or _serialize(response)
            case TopLevelText(text=text):
                return text
            case CandidateParts(candidates=candidates):
                return _candidate_text(candidates) or _serialize(response)
            case Unrecognized(payload=payload):
                logger.warning(
                    "Unrecognized provider response shape: %s",
                    type(payload).__name__,
                )
                return _serialize(payload)
    except Exception as e:
        logger.error("Failed to normalize provider response: %s", e)
        return response if isinstance(response, str) else ""
    return ""
