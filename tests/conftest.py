"""Shared fixtures for chunkscope tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chunkscope.config import ChunkingConfig, ChunkscopeConfig, save_config

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig()


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A small multi-paragraph text file."""
    f = tmp_path / "sample.txt"
    f.write_text("First paragraph here.\n\nSecond paragraph follows.\n", encoding="utf-8")
    return f


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A saved recursive config with small chunks."""
    path = tmp_path / "chunkscope.toml"
    config = ChunkscopeConfig(
        strategy="recursive",
        chunking=ChunkingConfig(chunk_size=30, chunk_overlap=0, separators=["\n\n", " "]),
    )
    save_config(config, path)
    return path
