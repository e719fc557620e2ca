"""Name-based lookup of chunkers and semantic splitters.

Strategy and provider names come straight from config (``"recursive"``,
``"deepseek"``); the registry turns them into ready instances built from a
``ChunkingConfig``::

    default_registry.create("chunker", "recursive", config)  # RecursiveChunker
    default_registry.create("semantic", "aliyun", config)    # OpenAICompatSplitter
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chunkscope.exceptions import PluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from chunkscope.config import ChunkingConfig

    Factory = Callable[[ChunkingConfig], Any]

__all__ = ["ProviderRegistry", "default_registry"]

logger = logging.getLogger(__name__)

# Modules whose import registers the built-in factories
_BUILTIN_MODULES = ("chunkscope.chunk", "chunkscope.semantic")


class ProviderRegistry:
    """Two-level table of factories: kind, then name.

    Kinds in use are ``"chunker"`` (synchronous strategies) and
    ``"semantic"`` (remote splitters). With ``auto_discover`` set, the
    built-in modules are imported on the first lookup so callers never need
    to import them just for their registration side effect.
    """

    def __init__(self, *, auto_discover: bool = False) -> None:
        self._factories: dict[str, dict[str, Factory]] = {}
        self._auto_discover = auto_discover
        self._discovered = False

    def register(self, category: str, name: str, factory: Factory) -> None:
        """Add ``factory`` under ``category``/``name``.

        Raises:
            PluginError: If the name is already taken in that category.
        """
        names = self._factories.setdefault(category, {})
        if name in names:
            raise PluginError(f"{category} '{name}' is already registered")
        names[name] = factory
        logger.debug("Registered %s '%s'", category, name)

    def _ensure_discovered(self) -> None:
        if self._discovered or not self._auto_discover:
            return
        self._discovered = True
        import importlib

        for module in _BUILTIN_MODULES:
            importlib.import_module(module)

    def create(self, category: str, name: str, config: ChunkingConfig) -> Any:
        """Build the ``category``/``name`` instance from ``config``.

        Raises:
            PluginError: If nothing is registered under that category/name.
        """
        self._ensure_discovered()
        names = self._factories.get(category)
        if names is None:
            raise PluginError(
                f"No {category!r} category registered. Known: {sorted(self._factories)}"
            )
        factory = names.get(name)
        if factory is None:
            raise PluginError(f"Unknown {category} '{name}'. Available: {sorted(names)}")

        logger.debug("Creating %s '%s'", category, name)
        return factory(config)

    def list_providers(self, category: str) -> list[str]:
        """Sorted names registered in ``category``; empty if the category is unknown."""
        self._ensure_discovered()
        return sorted(self._factories.get(category, {}))

    def has_provider(self, category: str, name: str) -> bool:
        self._ensure_discovered()
        return name in self._factories.get(category, {})


default_registry = ProviderRegistry(auto_discover=True)
