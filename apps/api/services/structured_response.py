"""Recover JSON values and markup from free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Literal, Tuple

from services.errors import MalformedStructuredDataError, NoStructuredDataFoundError

ParseMode = Literal["object", "array"]

FENCE_MARKER = "```"
# Opening/closing fence plus an optional language tag such as ```json or ```html.
FENCE_PATTERN = re.compile(r"```[ \t]*(?:[A-Za-z0-9_+\-]+(?=[ \t]*(?:\r?\n|$)))?", re.MULTILINE)

BRACKETS: Dict[str, Tuple[str, str]] = {
    "object": ("{", "}"),
    "array": ("[", "]"),
}


def strip_code_fences(text: str) -> str:
    """Remove fence markers and their language tag, keeping the interior content."""
    cleaned = str(text or "")
    if FENCE_MARKER not in cleaned:
        return cleaned.strip()
    return FENCE_PATTERN.sub("", cleaned).strip()


def extract_json(text: str, mode: ParseMode = "object") -> Any:
    """
    Parse the first-open/last-close bracket span of ``text`` as strict JSON.

    A single best-effort extraction: no bracket balancing and no repair of
    trailing commas or truncated output.
    """
    if mode not in BRACKETS:
        raise ValueError(f"Unsupported parse mode: {mode}")
    opener, closer = BRACKETS[mode]

    cleaned = strip_code_fences(text)
    start = cleaned.find(opener)
    end = cleaned.rfind(closer)
    if start == -1 or end == -1 or end < start:
        raise NoStructuredDataFoundError(f"No JSON {mode} found in model output")

    candidate = cleaned[start : end + 1]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedStructuredDataError(f"Invalid JSON {mode}: {exc.msg} at position {exc.pos}") from exc
