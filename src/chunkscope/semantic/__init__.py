"""Semantic splitting: remote model providers behind a common interface."""

from chunkscope.registry import default_registry
from chunkscope.semantic.base import BaseSemanticSplitter
from chunkscope.semantic.gemini import GeminiSplitter
from chunkscope.semantic.openai_compat import OpenAICompatSplitter

__all__ = ["BaseSemanticSplitter", "GeminiSplitter", "OpenAICompatSplitter"]

# Register built-in semantic providers
default_registry.register("semantic", "google", lambda cfg: GeminiSplitter(cfg))
for _name in ("deepseek", "aliyun", "custom"):
    default_registry.register("semantic", _name, lambda cfg: OpenAICompatSplitter(cfg))
