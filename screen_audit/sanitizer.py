"""
Response Sanitizer

Recovers a JSON document from free-form model output. Models wrap JSON
in markdown fences, surround it with prose, and sometimes emit raw
newlines or tabs inside string values; all three are handled here.
"""

import json
import logging
import re
from typing import Optional

from .errors import ExtractionError

logger = logging.getLogger(__name__)

# A fence marker on its own line; fences inside string values are content
_FENCE_RE = re.compile(r"^[ \t]*```[\w-]*[ \t]*\r?$", re.MULTILINE)

_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}

_CLOSERS = {"{": "}", "[": "]"}

_OPENERS = {dict: "{", list: "["}


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence lines (```json, ``` and the like)"""
    return _FENCE_RE.sub("", text)


def repair_control_characters(span: str) -> str:
    """
    Escape raw newline, carriage-return and tab characters inside string literals.

    Characters outside string literals are left alone, as is anything
    already escaped. A no-op on valid JSON.

    Args:
        span: Candidate JSON text

    Returns:
        The same text with control characters inside strings escaped
    """
    out = []
    in_string = False
    escape = False

    for ch in span:
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            elif ch in _CONTROL_ESCAPES:
                out.append(_CONTROL_ESCAPES[ch])
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)

    return "".join(out)


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index one past the bracket closing the one at *start*, or None"""
    stack = []
    in_string = False
    escape = False

    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in "}]":
            if not stack or stack.pop() != ch:
                return None
            if not stack:
                return i + 1

    return None


def extract_json(text: str, expected: Optional[type] = None) -> str:
    """
    Extract the first complete JSON value of the expected kind from model text.

    Algorithm:
    1. Drop markdown code-fence lines
    2. Scan for an opening bracket (only `{` when an object is expected,
       only `[` for an array) and find its balanced partner, ignoring
       brackets inside string literals
    3. Escape raw control characters inside string literals
    4. Strict parse; on failure resume scanning at the next bracket

    Args:
        text: Raw model response
        expected: ``dict`` or ``list`` to skip bracketed prose of the
            other kind, e.g. "scores use the range [0, 100]"; None
            accepts either

    Returns:
        Sanitized JSON text that ``json.loads`` accepts

    Raises:
        ExtractionError: If the text is empty, contains no balanced
            JSON span, or no span parses after repair

    Example:
        raw = 'Sure!\\n```json\\n{"uiType": "Dashboard"}\\n```\\nHope this helps'
        json.loads(extract_json(raw, dict))  # {"uiType": "Dashboard"}
    """
    if not text or not text.strip():
        raise ExtractionError("Empty response from model")

    cleaned = strip_code_fences(text)
    openers = _OPENERS[expected] if expected is not None else "{["
    last_error: Optional[json.JSONDecodeError] = None
    found_span = False

    for start, ch in enumerate(cleaned):
        if ch not in openers:
            continue

        end = _balanced_end(cleaned, start)
        if end is None:
            continue

        found_span = True
        candidate = repair_control_characters(cleaned[start:end])
        try:
            json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e
            continue

        return candidate

    if not found_span:
        logger.warning("No JSON span found in response: %.200s", text)
        raise ExtractionError("No valid JSON found in response")

    raise ExtractionError("Invalid JSON structure", detail=str(last_error))
