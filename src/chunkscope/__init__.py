"""chunkscope: split documents into bounded-size chunks for retrieval pipelines."""

from chunkscope.api import chunk_text
from chunkscope.chunk import (
    chunk_fixed,
    chunk_json_structural,
    chunk_markdown,
    chunk_recursive,
    chunk_semantic,
)
from chunkscope.config import ChunkingConfig
from chunkscope.tokens import estimate_token_count
from chunkscope.types import Chunk, ChunkStats, summarize

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "ChunkStats",
    "ChunkingConfig",
    "__version__",
    "chunk_fixed",
    "chunk_json_structural",
    "chunk_markdown",
    "chunk_recursive",
    "chunk_semantic",
    "chunk_text",
    "estimate_token_count",
    "summarize",
]
