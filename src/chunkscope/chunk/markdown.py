"""Markdown chunker.

The recursive separator engine run with a markdown-ordered separator list,
largest structural unit first (see ``MARKDOWN_SEPARATORS``)::

    "\\n# ", "\\n## ", "\\n### ", "\\n#### ", "\\n- ", "\\n\\n", "\\n"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chunkscope.chunk.recursive import RecursiveChunker

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["MarkdownChunker", "chunk_markdown"]


class MarkdownChunker(RecursiveChunker):
    """Recursive chunker for markdown documents."""

    name = "markdown"


def chunk_markdown(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split markdown ``text`` using the separators in ``config``."""
    return MarkdownChunker().chunk(text, config)
