"""Configuration system for chunkscope.

Chunking parameters live in a typed dataclass with per-strategy presets.
A config can be persisted as TOML: a top-level ``strategy`` key plus a
``[chunking]`` table.
"""

from __future__ import annotations

import copy
import logging
import sys
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from chunkscope.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "MARKDOWN_SEPARATORS",
    "PRESETS",
    "PROVIDERS",
    "PROVIDER_DEFAULTS",
    "RECURSIVE_SEPARATORS",
    "STRATEGIES",
    "ChunkingConfig",
    "ChunkscopeConfig",
    "apply_provider_defaults",
    "default_config",
    "load_config",
    "preset_config",
    "save_config",
]

logger = logging.getLogger(__name__)

STRATEGIES: tuple[str, ...] = ("fixed", "recursive", "semantic", "markdown", "json")

PROVIDERS: tuple[str, ...] = ("google", "deepseek", "aliyun", "custom")

# provider -> (base_url, semantic_model)
PROVIDER_DEFAULTS: dict[str, tuple[str, str]] = {
    "google": ("", "gemini-3-flash-preview"),
    "deepseek": ("https://api.deepseek.com", "deepseek-chat"),
    "aliyun": ("https://dashscope.aliyuncs.com/compatible-mode/v1", "qwen-plus"),
    "custom": ("", ""),
}

RECURSIVE_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", "。", "！", "？", "；", " ", "")

MARKDOWN_SEPARATORS: tuple[str, ...] = (
    "\n# ",
    "\n## ",
    "\n### ",
    "\n#### ",
    "\n- ",
    "\n\n",
    "\n",
)


@dataclass
class ChunkingConfig:
    """Parameters shared by every chunking strategy.

    ``provider``, ``api_key``, ``api_key_env``, ``base_url``,
    ``semantic_model`` and ``timeout`` are only read by the semantic
    splitter. A ``timeout`` of 0 or less removes the overall asyncio bound
    on the call, but each HTTP request is still capped at 120 seconds.
    """

    chunk_size: int = 200
    chunk_overlap: int = 20
    separators: list[str] = field(default_factory=list)
    provider: str = "google"
    api_key: str = ""
    api_key_env: str = ""
    base_url: str = ""
    semantic_model: str = ""
    timeout: float = 120.0

    def effective_overlap(self) -> int:
        """Overlap clamped to ``[0, chunk_size - 1]``."""
        return max(0, min(self.chunk_overlap, self.chunk_size - 1))

    def step(self) -> int:
        """Window advance between consecutive slices, never below 1."""
        return max(1, self.chunk_size - self.effective_overlap())


@dataclass
class ChunkscopeConfig:
    """Root configuration: selected strategy plus its parameters."""

    strategy: str = "fixed"
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)


PRESETS: dict[str, ChunkingConfig] = {
    "fixed": ChunkingConfig(chunk_size=200, chunk_overlap=20),
    "recursive": ChunkingConfig(
        chunk_size=200,
        chunk_overlap=20,
        separators=list(RECURSIVE_SEPARATORS),
    ),
    "markdown": ChunkingConfig(
        chunk_size=500,
        chunk_overlap=50,
        separators=list(MARKDOWN_SEPARATORS),
    ),
    "json": ChunkingConfig(chunk_size=1000, chunk_overlap=0),
    "semantic": ChunkingConfig(
        chunk_size=0,
        chunk_overlap=0,
        semantic_model="gemini-3-flash-preview",
    ),
}


def _check_strategy(strategy: str) -> None:
    if strategy not in STRATEGIES:
        raise ConfigError(
            f"Unknown strategy {strategy!r}. Supported strategies: {', '.join(STRATEGIES)}"
        )


def _check_provider(provider: str) -> None:
    if provider not in PROVIDERS:
        raise ConfigError(
            f"Unknown semantic provider {provider!r}. Supported providers: {', '.join(PROVIDERS)}"
        )


def preset_config(strategy: str) -> ChunkingConfig:
    """Return a fresh copy of the preset parameters for ``strategy``.

    Raises:
        ConfigError: If the strategy is unknown.
    """
    _check_strategy(strategy)
    return copy.deepcopy(PRESETS[strategy])


def apply_provider_defaults(config: ChunkingConfig, provider: str) -> ChunkingConfig:
    """Return a copy of ``config`` switched to ``provider`` with its default URL and model.

    Raises:
        ConfigError: If the provider is unknown.
    """
    _check_provider(provider)
    base_url, model = PROVIDER_DEFAULTS[provider]
    return replace(
        config,
        separators=list(config.separators),
        provider=provider,
        base_url=base_url,
        semantic_model=model,
    )


def default_config() -> ChunkscopeConfig:
    """Return a config with all default values."""
    return ChunkscopeConfig()


def _config_to_dict(config: ChunkscopeConfig) -> dict[str, object]:
    """Convert ChunkscopeConfig to a nested dict suitable for TOML serialization."""
    chunking = dict(vars(config.chunking))
    chunking["separators"] = list(config.chunking.separators)
    return {"strategy": config.strategy, "chunking": chunking}


def save_config(config: ChunkscopeConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


_INT_FIELDS = frozenset({"chunk_size", "chunk_overlap"})
_STR_FIELDS = frozenset({"provider", "api_key", "api_key_env", "base_url", "semantic_model"})


def _check_field_type(key: str, value: object) -> None:
    """Reject TOML values of the wrong type for a [chunking] field."""
    # bool is a subclass of int; true/false is never a valid number here
    if key in _INT_FIELDS:
        valid = isinstance(value, int) and not isinstance(value, bool)
        expected = "an integer"
    elif key == "timeout":
        valid = isinstance(value, int | float) and not isinstance(value, bool)
        expected = "a number"
    elif key == "separators":
        valid = isinstance(value, list) and all(isinstance(s, str) for s in value)
        expected = "an array of strings"
    elif key in _STR_FIELDS:
        valid = isinstance(value, str)
        expected = "a string"
    else:
        return
    if not valid:
        raise ConfigError(f"[chunking] {key} must be {expected}, got {value!r}")


def _load_chunking(data: object) -> ChunkingConfig:
    """Load the [chunking] table, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError("[chunking] must be a table")
    known_fields = set(ChunkingConfig.__dataclass_fields__)
    filtered = {k: v for k, v in data.items() if k in known_fields}
    for key, value in filtered.items():
        _check_field_type(key, value)
    try:
        return ChunkingConfig(**filtered)
    except TypeError as e:
        raise ConfigError(f"Invalid [chunking] section: {e}") from e


def load_config(path: Path) -> ChunkscopeConfig:
    """Load configuration from a TOML file.

    Missing keys get default values.

    Raises:
        ConfigError: If the file is missing or unreadable, or names an
            unknown strategy or provider.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = ChunkscopeConfig()
    if "strategy" in data:
        config.strategy = str(data["strategy"])
    if "chunking" in data:
        config.chunking = _load_chunking(data["chunking"])

    _check_strategy(config.strategy)
    _check_provider(config.chunking.provider)

    logger.info("Loaded config from %s", path)
    return config
