"""Strategy dispatch by name for the synchronous chunkers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunkscope.exceptions import ChunkError
from chunkscope.registry import default_registry

if TYPE_CHECKING:
    from chunkscope.chunk.base import BaseChunker
    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["chunk_text"]

logger = logging.getLogger(__name__)


def chunk_text(text: str, strategy: str, config: ChunkingConfig) -> list[Chunk]:
    """Run the synchronous strategy registered under ``strategy``.

    Raises:
        ChunkError: For ``"semantic"``, which must be awaited through
            ``chunk_semantic``.
        PluginError: If no chunker is registered under ``strategy``.
    """
    if strategy == "semantic":
        raise ChunkError("The semantic strategy is asynchronous; await chunk_semantic() instead")
    chunker: BaseChunker = default_registry.create("chunker", strategy, config)
    return chunker.chunk(text, config)
