"""OpenAI-compatible semantic splitter.

Works with any server implementing the ``/chat/completions`` API:
DeepSeek, Aliyun DashScope compatible mode, or a custom endpoint.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chunkscope.exceptions import SemanticChunkError
from chunkscope.semantic.base import BaseSemanticSplitter
from chunkscope.semantic.prompts import render_system_prompt, render_user_prompt
from chunkscope.semantic.response import parse_chunk_array, strip_code_fence

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig

__all__ = ["OpenAICompatSplitter"]

logger = logging.getLogger(__name__)


class OpenAICompatSplitter(BaseSemanticSplitter):
    """Semantic splitter using an OpenAI-compatible chat completion endpoint.

    Config fields used::

        provider = "deepseek"            # or "aliyun", "custom"
        api_key = ""                     # or api_key_env
        base_url = "https://api.deepseek.com"
        semantic_model = "deepseek-chat"
    """

    _TEMPERATURE = 0.1

    def __init__(self, config: ChunkingConfig) -> None:
        super().__init__(config)
        self._base_url = config.base_url.rstrip("/")

    def split(self, text: str) -> list[str]:
        """Split ``text`` via the chat completion endpoint.

        Raises:
            SemanticChunkError: If key, URL or model is missing or the call fails.
        """
        if not self._api_key:
            raise SemanticChunkError("API key is required for this provider.")
        if not self._base_url:
            raise SemanticChunkError("Base URL is required for this provider.")
        if not self._model:
            raise SemanticChunkError("Model name is required.")

        url = f"{self._base_url}/chat/completions"
        # response_format is not supported by every provider, so JSON output
        # is requested through the prompt only
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": render_system_prompt()},
                {"role": "user", "content": render_user_prompt(text)},
            ],
            "temperature": self._TEMPERATURE,
        }
        data = self._post_json(url, payload, {"Authorization": f"Bearer {self._api_key}"})

        content = _extract_content(data)
        if not content:
            raise SemanticChunkError("Empty response from provider.")

        chunks = parse_chunk_array(strip_code_fence(content))
        logger.info("%s returned %d chunks", self._model, len(chunks))
        return chunks


def _extract_content(data: Any) -> str:
    """Message content of the first choice, or empty string."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
