"""Abstract base class for remote semantic splitters."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from http.client import HTTPException
from typing import TYPE_CHECKING, Any
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from chunkscope.exceptions import SemanticChunkError

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig

__all__ = ["BaseSemanticSplitter"]

logger = logging.getLogger(__name__)

# Error bodies are echoed back to the caller up to this many characters
_MAX_ERROR_BODY = 500


class BaseSemanticSplitter(ABC):
    """Base class for model-backed splitters.

    Subclasses send the whole document to a remote model and return the
    ordered list of verbatim substrings it produced. Every failure is raised
    as ``SemanticChunkError``; no partial result is ever returned.
    """

    _DEFAULT_TIMEOUT = 120.0  # seconds

    def __init__(self, config: ChunkingConfig) -> None:
        self._model = config.semantic_model
        self._timeout = config.timeout if config.timeout > 0 else self._DEFAULT_TIMEOUT
        self._api_key = self._resolve_api_key(config)

    def _fallback_key_envs(self) -> tuple[str, ...]:
        """Environment variables consulted when no key is configured."""
        return ()

    def _resolve_api_key(self, config: ChunkingConfig) -> str:
        if config.api_key:
            return config.api_key
        env_names = (config.api_key_env,) if config.api_key_env else ()
        for name in env_names + self._fallback_key_envs():
            value = os.environ.get(name, "")
            if value:
                return value
        if config.api_key_env:
            logger.warning("API key env var %s is not set", config.api_key_env)
        return ""

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split ``text`` into semantically coherent substrings.

        Args:
            text: Full document text.

        Returns:
            Ordered list of verbatim substrings of ``text``.

        Raises:
            SemanticChunkError: On missing credentials, transport or HTTP
                failures, or an unusable response.
        """

    def _post_json(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> Any:
        """POST a JSON payload and decode the JSON response body.

        Raises:
            SemanticChunkError: On a malformed URL, connection, HTTP or
                decoding errors.
        """
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        try:
            req = Request(
                url,
                data=body,
                headers={"Content-Type": "application/json", **headers},
                method="POST",
            )
        except ValueError as e:
            raise SemanticChunkError(f"Invalid provider URL {url}: {e}") from e

        try:
            with urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read()
        except HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")[:_MAX_ERROR_BODY]
            raise SemanticChunkError(
                f"Provider API error (HTTP {e.code}): {e.reason} - {detail}"
            ) from e
        except (OSError, HTTPException) as e:
            raise SemanticChunkError(f"Provider not reachable at {url}. Error: {e}") from e

        # UnicodeDecodeError and JSONDecodeError are both ValueError
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise SemanticChunkError(f"Provider returned invalid JSON from {url}: {e}") from e
