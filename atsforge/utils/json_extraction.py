"""
Tolerant JSON object recovery from language-model output.

Models asked for "JSON only" still wrap it in markdown fences, prepend prose,
append commentary, or leave raw newlines inside string values. This module
recovers the first balanced JSON object from such text, repairing the raw
control characters that make strict parsers reject it.

All failure paths return None; nothing here raises for malformed input, so
the extractor is safe to call speculatively on any model response.
"""

import json
import re
from enum import Enum
from typing import Optional

from loguru import logger

# Fence tokens are removed wherever they appear, paired or not
_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)

# Raw control characters rewritten inside string literals during repair
_STRING_REPAIRS = {
    "\n": "\\n",
    "\r": "\\n",
    "\t": "\\t",
}


class _ScanState(Enum):
    """Lexical position of the scanner relative to JSON string literals."""

    OUTSIDE = "outside"
    IN_STRING = "in_string"
    IN_STRING_ESCAPED = "in_string_escaped"


def _advance(state: _ScanState, ch: str) -> _ScanState:
    """Return the scanner state after consuming one character."""
    if state is _ScanState.OUTSIDE:
        return _ScanState.IN_STRING if ch == '"' else state
    if state is _ScanState.IN_STRING_ESCAPED:
        return _ScanState.IN_STRING
    if ch == "\\":
        return _ScanState.IN_STRING_ESCAPED
    if ch == '"':
        return _ScanState.OUTSIDE
    return state


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` token from text (not structure-aware)."""
    return _FENCE_PATTERN.sub("", text).strip()


def find_balanced_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} block in text, or None.

    Braces only count toward nesting depth outside string literals, so a
    bullet point containing "{" or an escaped quote cannot end the object early.

    Args:
        text: Text expected to contain a JSON object somewhere

    Returns:
        Substring from the first "{" through its matching "}", inclusive

    Example:
        >>> find_balanced_object('noise {"a": {"b": "}"}} {"c": 2}')
        '{"a": {"b": "}"}}'
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    state = _ScanState.OUTSIDE
    for pos in range(start, len(text)):
        ch = text[pos]
        if state is _ScanState.OUTSIDE:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : pos + 1]
        state = _advance(state, ch)

    return None


def repair_string_literals(candidate: str) -> str:
    """
    Escape raw newlines, carriage returns and tabs inside string literals.

    Characters outside strings, and already-escaped sequences inside them,
    are copied unchanged, so well-formed JSON passes through untouched.
    A carriage return becomes "\\n" like a newline does.
    """
    out = []
    state = _ScanState.OUTSIDE
    for ch in candidate:
        if state is not _ScanState.OUTSIDE and ch in _STRING_REPAIRS:
            out.append(_STRING_REPAIRS[ch])
            state = _ScanState.IN_STRING
            continue
        out.append(ch)
        state = _advance(state, ch)
    return "".join(out)


def extract_json_object(text) -> Optional[dict]:
    """
    Recover a single JSON object from free-form model output.

    Steps:
    1. Reject non-string or empty input
    2. Strip markdown code fences
    3. Isolate the first balanced {...} block
    4. Escape raw control characters inside its string literals
    5. Parse it; on failure fall back to the legacy subject/body extraction

    Args:
        text: Raw model output (any type; non-strings yield None)

    Returns:
        Parsed dict, or None if nothing usable could be recovered
    """
    if not isinstance(text, str) or not text:
        logger.debug("extract_json_object: input is not a non-empty string")
        return None

    candidate = find_balanced_object(strip_code_fences(text))
    if candidate is None:
        logger.debug("extract_json_object: no balanced JSON object found")
        return None

    repaired = repair_string_literals(candidate)

    try:
        parsed = json.loads(repaired)
    except json.JSONDecodeError as e:
        logger.debug(f"extract_json_object: JSON parse failed: {e}")
        logger.debug(f"Failed JSON (first 500 chars): {repaired[:500]}")
    else:
        if isinstance(parsed, dict):
            return parsed
        # Unreachable while find_balanced_object only yields "{"-initial text;
        # a non-object parse goes to the fallback like a parse failure
        logger.debug(f"extract_json_object: parsed {type(parsed).__name__}, expected object")

    fallback = extract_subject_body_fallback(repaired)
    if fallback is None:
        logger.debug("extract_json_object: all extraction methods failed")
    return fallback


# =============================================================================
# LEGACY SUBJECT/BODY FALLBACK
# =============================================================================

# Key quotes are optional. The value runs lazily to the first unescaped quote
# followed by "," or "}", so bare inner quotes stay part of the value
_FALLBACK_FIELD_TEMPLATE = r'"?{name}"?\s*:\s*"((?:\\.|[^\\])*?)"\s*[,}}]'

_SUBJECT_PATTERN = re.compile(
    _FALLBACK_FIELD_TEMPLATE.format(name="subject"), re.IGNORECASE | re.DOTALL
)
_BODY_PATTERN = re.compile(_FALLBACK_FIELD_TEMPLATE.format(name="body"), re.IGNORECASE | re.DOTALL)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _decode_fallback_value(raw: str) -> str:
    """Turn escaped newlines, tabs and quotes into real characters."""
    value = raw.replace("\\n", "\n").replace("\\t", "\t").replace('\\"', '"')
    return _EXCESS_NEWLINES.sub("\n\n", value).strip()


def extract_subject_body_fallback(text: str) -> Optional[dict]:
    """
    Pull "subject" and "body" string fields out of unparseable JSON text.

    Only these two names are recognized. This exists for email-style model
    responses that come back almost-but-not-quite valid; it is not a general
    recovery mechanism.

    Returns:
        {"subject": str | None, "body": str | None} if either field is found,
        otherwise None
    """
    subject_match = _SUBJECT_PATTERN.search(text)
    body_match = _BODY_PATTERN.search(text)

    if not subject_match and not body_match:
        return None

    logger.warning("Using fallback subject/body extraction")
    return {
        "subject": _decode_fallback_value(subject_match.group(1)) if subject_match else None,
        "body": _decode_fallback_value(body_match.group(1)) if body_match else None,
    }
