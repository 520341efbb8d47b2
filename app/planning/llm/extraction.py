"""JSON extraction from raw model text.

Model output is untrusted: it may be wrapped in a markdown fence, prefixed
with prose, or followed by commentary. extract_json() runs a cascade of
strategies and returns the first value that parses:

1. Strip one leading/trailing code fence (always applied)
2. Strict parse of the cleaned text
3. Balanced-delimiter scan from the first '{' or '['
4. Tolerant regex match (one nesting level)

Every stage is a pure function so it can be tested on its own.
"""

import json
import re
from typing import Any

from loguru import logger

from app.planning.errors import ParseFailureError

_NO_RESULT = object()

_FENCE_OPEN = re.compile(r"^```(?:[A-Za-z0-9_+-]+)?[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")

_TOLERANT_JSON = re.compile(
    r"(?:^|\s)(\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}|\[[^\[\]]*(?:\[[^\[\]]*\][^\[\]]*)*\])",
    re.DOTALL,
)


def strip_code_fence(text: str) -> str:
    """Remove a single opening fence (optionally tagged) and a closing fence."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
        cleaned = cleaned.strip()
    return cleaned


def parse_strict(text: str) -> Any:
    """Parse text as JSON, returning _NO_RESULT instead of raising."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return _NO_RESULT


def find_balanced_span(text: str) -> str | None:
    """Return the substring from the first '{' or '[' to its matching close.

    Only the opening delimiter kind is counted, and delimiters inside string
    literals are not skipped.
    """
    object_start = text.find("{")
    array_start = text.find("[")

    if object_start == -1 and array_start == -1:
        return None
    if object_start != -1 and (array_start == -1 or object_start < array_start):
        start, open_char, close_char = object_start, "{", "}"
    else:
        start, open_char, close_char = array_start, "[", "]"

    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def match_tolerant(text: str) -> str | None:
    """Regex fallback for an object/array with at most one nesting level."""
    match = _TOLERANT_JSON.search(text)
    if match is None:
        return None
    return match.group(1)


def extract_json(text: str) -> Any:
    """Extract a JSON value from model output.

    Args:
        text: Raw model response

    Returns:
        The parsed JSON value (usually a dict or list)

    Raises:
        ParseFailureError: If input is empty/non-string or every strategy fails
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseFailureError("Invalid input: text must be a non-empty string", original_text=text if isinstance(text, str) else None)

    cleaned = strip_code_fence(text)

    parsed = parse_strict(cleaned)
    if parsed is not _NO_RESULT:
        return parsed

    span = find_balanced_span(cleaned)
    if span is not None:
        parsed = parse_strict(span)
        if parsed is not _NO_RESULT:
            logger.debug("extraction: Recovered JSON via balanced scan", span_length=len(span))
            return parsed

    candidate = match_tolerant(cleaned)
    if candidate is not None:
        parsed = parse_strict(candidate)
        if parsed is not _NO_RESULT:
            logger.debug("extraction: Recovered JSON via tolerant match", span_length=len(candidate))
            return parsed

    logger.warning("extraction: All strategies failed", text_length=len(text))
    raise ParseFailureError(
        "Could not extract valid JSON from response. The model may have returned an unexpected format.",
        original_text=text,
    )
