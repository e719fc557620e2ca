"""Recursive separator-based chunker.

Two phases:

1. Segmentation: text longer than ``chunk_size`` is split on the first
   separator it contains, the separator staying attached to the end of each
   piece; oversized pieces are split again with the remaining separators.
   When no separators remain, the text is hard-split into fixed windows.
   Each step either terminates or consumes a separator, so the depth is
   bounded by the separator list length.
2. Repacking: segments are accumulated into chunks up to ``chunk_size``;
   each closed chunk seeds the next one with its trailing overlap.

An empty-string separator splits at character granularity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunkscope.chunk.base import BaseChunker
from chunkscope.types import make_chunks

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["RecursiveChunker", "chunk_recursive", "pack_segments", "split_segments"]

logger = logging.getLogger(__name__)


def _hard_split(text: str, size: int, step: int) -> list[str]:
    """Hard-split text into windows when all separators are exhausted."""
    width = max(size, 1)
    return [text[start : start + width] for start in range(0, len(text), step)]


def _split_keep_separator(text: str, separator: str) -> list[str]:
    """Split on ``separator``, reattaching it to every piece but the last."""
    if separator == "":
        return list(text)
    parts = text.split(separator)
    return [part + separator for part in parts[:-1]] + [parts[-1]]


def split_segments(text: str, separators: Sequence[str], config: ChunkingConfig) -> list[str]:
    """Phase A: break ``text`` into segments no larger than ``chunk_size``.

    Uses an explicit stack of ``(text, remaining separators)`` pairs; pieces
    are pushed in reverse so segments come out in document order.
    """
    size = config.chunk_size
    step = config.step()
    segments: list[str] = []
    stack: list[tuple[str, tuple[str, ...]]] = [(text, tuple(separators))]

    while stack:
        current, remaining = stack.pop()

        if len(current) <= size:
            segments.append(current)
            continue

        if not remaining:
            segments.extend(_hard_split(current, size, step))
            continue

        separator, rest = remaining[0], remaining[1:]
        if separator not in current:
            # Fall back to the next, narrower separator
            stack.append((current, rest))
            continue

        pieces = _split_keep_separator(current, separator)
        stack.extend((piece, rest) for piece in reversed(pieces))

    return segments


def pack_segments(segments: Sequence[str], config: ChunkingConfig) -> list[str]:
    """Phase B: merge segments into chunks, injecting overlap between them.

    A segment that is larger than ``chunk_size`` on its own is kept whole.
    """
    overlap = config.effective_overlap()
    chunks: list[str] = []
    current = ""

    for segment in segments:
        if current and len(current) + len(segment) > config.chunk_size:
            chunks.append(current)
            current = current[max(0, len(current) - overlap) :]
        current += segment

    if current:
        chunks.append(current)

    return chunks


class RecursiveChunker(BaseChunker):
    """Hierarchical separator chunker.

    Prefers the earliest separator in ``config.separators`` and falls back
    to narrower ones, and finally to raw character windows, only where a
    piece is still oversized. Whitespace-only chunks are dropped.
    """

    name = "recursive"
    tag = "rec"

    def _do_chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        if not text:
            return []
        segments = split_segments(text, config.separators, config)
        packed = pack_segments(segments, config)
        return make_chunks((c for c in packed if c.strip()), self.tag)


def chunk_recursive(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split ``text`` on ``config.separators`` in priority order."""
    return RecursiveChunker().chunk(text, config)
