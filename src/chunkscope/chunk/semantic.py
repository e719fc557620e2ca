"""Semantic chunking through a remote model.

The engine performs no splitting here: the configured provider returns the
ordered substrings and they are wrapped into ``Chunk`` records. The request
runs in a worker thread so callers can await it; one request per call, no
retries, no partial results.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from chunkscope.exceptions import ChunkscopeError, SemanticChunkError
from chunkscope.registry import default_registry
from chunkscope.types import make_chunks

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig
    from chunkscope.semantic.base import BaseSemanticSplitter
    from chunkscope.types import Chunk

__all__ = ["SemanticChunker", "chunk_semantic"]

logger = logging.getLogger(__name__)


class SemanticChunker:
    """Async wrapper turning a provider's substrings into chunks."""

    name = "semantic"

    async def chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        """Split ``text`` with the provider named in ``config.provider``.

        Raises:
            SemanticChunkError: On any provider, transport, timeout or
                response failure.
        """
        try:
            splitter: BaseSemanticSplitter = default_registry.create(
                "semantic", config.provider, config
            )
            contents = await asyncio.wait_for(
                asyncio.to_thread(splitter.split, text),
                timeout=config.timeout if config.timeout > 0 else None,
            )
        except TimeoutError as e:
            logger.error("Semantic chunking timed out after %ss", config.timeout)
            raise SemanticChunkError(
                f"Semantic chunking failed: no response within {config.timeout}s"
            ) from e
        except ChunkscopeError as e:
            logger.error("Semantic chunking failed: %s", e)
            raise SemanticChunkError(f"Semantic chunking failed: {e}") from e

        chunks = make_chunks(contents, "sem")
        logger.info("Semantic provider %s produced %d chunks", config.provider, len(chunks))
        return chunks


async def chunk_semantic(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split ``text`` into meaning-based chunks using a remote model."""
    return await SemanticChunker().chunk(text, config)
