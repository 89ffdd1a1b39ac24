"""Pull a JSON payload out of free-form model text."""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from interview_prep.core.logging import get_logger

logger = get_logger(__name__)

# First opening bracket to last closing bracket; not a balanced scan.
_JSON_SPAN = re.compile(r"[\[{][\s\S]*[\]}]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def extract_json(raw_text: Any) -> Optional[Any]:
    """Parse the widest bracketed span of ``raw_text``.

    Returns the decoded list or dict, or ``None`` when the input is empty,
    holds no bracketed span, or the span is not strict JSON. Prose that
    carries its own brackets around the payload widens the span and usually
    makes the parse fail.
    """
    if not raw_text or not isinstance(raw_text, str):
        return None

    match = _JSON_SPAN.search(raw_text)
    if not match:
        return None

    cleaned = match.group(0).strip()
    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.error("extract_json failed to parse model text: %s", e)
        return None
