"""Validation of model output for semantic splitting."""

from __future__ import annotations

import json
import re

from chunkscope.exceptions import SemanticChunkError

__all__ = ["parse_chunk_array", "strip_code_fence"]

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```$")


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ```json / ``` markdown fence, if any."""
    stripped = content.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_CLOSE_RE.sub("", _FENCE_OPEN_RE.sub("", stripped, count=1), count=1)
    return stripped


def parse_chunk_array(payload: str) -> list[str]:
    """Parse model output that must be a non-empty JSON array of strings.

    Raises:
        SemanticChunkError: If the payload is not JSON, not an array, empty,
            or contains non-string items.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise SemanticChunkError(f"Model response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise SemanticChunkError(
            f"Model response must be a JSON array of strings, got {type(data).__name__}"
        )
    if not data:
        raise SemanticChunkError("Model returned no chunks")
    if not all(isinstance(item, str) for item in data):
        raise SemanticChunkError("Model response array must contain only strings")
    return data
