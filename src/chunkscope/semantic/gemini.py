"""Google Gemini semantic splitter.

Calls the Gemini ``generateContent`` REST endpoint with a JSON response
schema constraining the output to an array of strings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chunkscope.exceptions import SemanticChunkError
from chunkscope.semantic.base import BaseSemanticSplitter
from chunkscope.semantic.prompts import render_system_prompt, render_user_prompt
from chunkscope.semantic.response import parse_chunk_array

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig

__all__ = ["GeminiSplitter"]

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
_DEFAULT_MODEL = "gemini-3-flash-preview"


class GeminiSplitter(BaseSemanticSplitter):
    """Semantic splitter backed by the Gemini API.

    Config fields used::

        provider = "google"
        api_key = ""            # or api_key_env, GOOGLE_API_KEY, GEMINI_API_KEY
        semantic_model = ""     # empty = gemini-3-flash-preview
        base_url = ""           # empty = public Gemini endpoint
    """

    def __init__(self, config: ChunkingConfig) -> None:
        super().__init__(config)
        self._model = config.semantic_model or _DEFAULT_MODEL
        self._base_url = (config.base_url or _DEFAULT_BASE_URL).rstrip("/")

    def _fallback_key_envs(self) -> tuple[str, ...]:
        return ("GOOGLE_API_KEY", "GEMINI_API_KEY")

    def split(self, text: str) -> list[str]:
        """Split ``text`` via Gemini.

        Raises:
            SemanticChunkError: If the key is missing or the call fails.
        """
        if not self._api_key:
            raise SemanticChunkError(
                "Google API key is missing. Set api_key, api_key_env or GOOGLE_API_KEY."
            )

        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload = {
            "systemInstruction": {"parts": [{"text": render_system_prompt()}]},
            "contents": [{"role": "user", "parts": [{"text": render_user_prompt(text)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {"type": "ARRAY", "items": {"type": "STRING"}},
            },
        }
        data = self._post_json(url, payload, {"x-goog-api-key": self._api_key})

        content = _extract_text(data)
        if not content:
            raise SemanticChunkError("No response from Gemini")

        chunks = parse_chunk_array(content)
        logger.info("Gemini (%s) returned %d chunks", self._model, len(chunks))
        return chunks


def _extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
