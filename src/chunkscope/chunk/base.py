"""Abstract base class for chunking strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from chunkscope.exceptions import ChunkError

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["BaseChunker"]

logger = logging.getLogger(__name__)


class BaseChunker(ABC):
    """Base class for all synchronous chunking strategies.

    Subclasses implement ``_do_chunk``; ``chunk`` wraps unexpected failures
    into ``ChunkError``.
    """

    name: ClassVar[str] = ""

    def chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        """Split text into chunks.

        Args:
            text: The full document text.
            config: Chunking parameters (size, overlap, separators).

        Returns:
            Ordered list of chunks with contiguous indices.

        Raises:
            ChunkError: If chunking fails unexpectedly.
        """
        try:
            chunks = self._do_chunk(text, config)
        except ChunkError:
            raise
        except Exception as e:
            logger.error("%s chunker failed: %s", self.name, e)
            raise ChunkError(f"{self.name} chunking failed: {e}") from e

        logger.info(
            "Split %d chars into %d chunks (strategy=%s, size=%d, overlap=%d)",
            len(text),
            len(chunks),
            self.name,
            config.chunk_size,
            config.chunk_overlap,
        )
        return chunks

    @abstractmethod
    def _do_chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        """Strategy-specific chunking implementation."""
