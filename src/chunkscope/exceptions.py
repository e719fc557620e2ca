"""Custom exception hierarchy for chunkscope."""

__all__ = [
    "ChunkError",
    "ChunkscopeError",
    "ConfigError",
    "PluginError",
    "SemanticChunkError",
]


class ChunkscopeError(Exception):
    """Base exception for all chunkscope errors."""


class ConfigError(ChunkscopeError):
    """Raised when configuration loading or validation fails."""


class ChunkError(ChunkscopeError):
    """Raised when chunking operations fail."""


class SemanticChunkError(ChunkError):
    """Raised when the remote semantic splitting call fails."""


class PluginError(ChunkscopeError):
    """Raised when provider lookup or registration fails."""
