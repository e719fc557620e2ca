"""Fixed-size sliding window chunker."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunkscope.chunk.base import BaseChunker
from chunkscope.types import make_chunks

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["FixedWindowChunker", "chunk_fixed"]

logger = logging.getLogger(__name__)


def _windows(text: str, size: int, step: int) -> list[str]:
    """Slice ``text`` into windows of ``size`` chars advancing by ``step``."""
    return [text[start : start + size] for start in range(0, len(text), step)]


class FixedWindowChunker(BaseChunker):
    """Slices text into fixed-length windows with a fixed overlap.

    The window advances by ``chunk_size - overlap`` where overlap is clamped
    below ``chunk_size``, so every call makes progress. The last window may
    be shorter than ``chunk_size``.
    """

    name = "fixed"

    def _do_chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        if config.chunk_size <= 0:
            return []
        return make_chunks(_windows(text, config.chunk_size, config.step()), "fixed")


def chunk_fixed(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split ``text`` into fixed-size overlapping windows."""
    return FixedWindowChunker().chunk(text, config)
