"""Data contracts for chunkscope.

Frozen dataclasses returned by every chunking strategy:
  text + ChunkingConfig → list[Chunk] → ChunkStats
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chunkscope.tokens import estimate_token_count

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "Chunk",
    "ChunkStats",
    "make_chunks",
    "summarize",
]


@dataclass(frozen=True)
class Chunk:
    """A single fragment of the input document."""

    chunk_id: str
    index: int
    content: str
    length: int
    token_count: int


@dataclass(frozen=True)
class ChunkStats:
    """Summary figures for a chunk sequence."""

    count: int = 0
    avg_length: int = 0
    min_length: int = 0
    max_length: int = 0
    total_tokens: int = 0


def _generate_chunk_id(tag: str, index: int, content: str) -> str:
    """Generate a deterministic strategy-tagged chunk ID."""
    content_hash = hashlib.sha256(content.encode("utf-8")).hexdigest()[:8]
    return f"{tag}-chunk-{index:04d}-{content_hash}"


def make_chunks(contents: Iterable[str], tag: str) -> list[Chunk]:
    """Wrap ordered fragment strings into ``Chunk`` records.

    Indices are assigned contiguously in iteration order.
    """
    return [
        Chunk(
            chunk_id=_generate_chunk_id(tag, index, content),
            index=index,
            content=content,
            length=len(content),
            token_count=estimate_token_count(content),
        )
        for index, content in enumerate(contents)
    ]


def summarize(chunks: list[Chunk]) -> ChunkStats:
    """Compute count, length spread and total tokens for ``chunks``."""
    if not chunks:
        return ChunkStats()
    lengths = [c.length for c in chunks]
    return ChunkStats(
        count=len(chunks),
        avg_length=round(sum(lengths) / len(lengths)),
        min_length=min(lengths),
        max_length=max(lengths),
        total_tokens=sum(c.token_count for c in chunks),
    )
