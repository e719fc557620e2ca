"""Chunking engine: fixed windows, recursive separators, markdown, JSON, semantic."""

from chunkscope.chunk.base import BaseChunker
from chunkscope.chunk.fixed import FixedWindowChunker, chunk_fixed
from chunkscope.chunk.json_structural import JsonChunker, chunk_json_structural
from chunkscope.chunk.markdown import MarkdownChunker, chunk_markdown
from chunkscope.chunk.recursive import RecursiveChunker, chunk_recursive
from chunkscope.chunk.semantic import SemanticChunker, chunk_semantic
from chunkscope.registry import default_registry

__all__ = [
    "BaseChunker",
    "FixedWindowChunker",
    "JsonChunker",
    "MarkdownChunker",
    "RecursiveChunker",
    "SemanticChunker",
    "chunk_fixed",
    "chunk_json_structural",
    "chunk_markdown",
    "chunk_recursive",
    "chunk_semantic",
]

# Register built-in synchronous strategies
default_registry.register("chunker", "fixed", lambda cfg: FixedWindowChunker())
default_registry.register("chunker", "recursive", lambda cfg: RecursiveChunker())
default_registry.register("chunker", "markdown", lambda cfg: MarkdownChunker())
default_registry.register("chunker", "json", lambda cfg: JsonChunker())
