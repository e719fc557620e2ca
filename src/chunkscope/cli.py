"""CLI interface for chunkscope.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from chunkscope import __version__
from chunkscope.api import chunk_text
from chunkscope.chunk import chunk_semantic
from chunkscope.config import (
    PRESETS,
    ChunkscopeConfig,
    apply_provider_defaults,
    load_config,
    preset_config,
    save_config,
)
from chunkscope.exceptions import ChunkscopeError
from chunkscope.types import Chunk, summarize

__all__ = ["app"]

app = typer.Typer(
    name="chunkscope",
    help="chunkscope: split documents into bounded-size chunks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)

_PREVIEW_CHARS = 60

_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r"}


def _unescape(separator: str) -> str:
    """Turn shell-typed ``\\n``/``\\t``/``\\r`` sequences into real characters."""
    for escaped, actual in _ESCAPES.items():
        separator = separator.replace(escaped, actual)
    return separator


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _preview(content: str) -> str:
    flat = content.replace("\n", "⏎")
    if len(flat) <= _PREVIEW_CHARS:
        return flat
    return flat[: _PREVIEW_CHARS - 1] + "…"


def _print_chunks(chunks: list[Chunk]) -> None:
    stats = summarize(chunks)
    console.print(
        f"[bold]{stats.count}[/bold] chunks  "
        f"avg [bold]{stats.avg_length}[/bold] chars  "
        f"min {stats.min_length} / max {stats.max_length}  "
        f"~[bold]{stats.total_tokens}[/bold] tokens"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("chars", justify="right")
    table.add_column("tokens", justify="right")
    table.add_column("content", overflow="fold")
    for chunk in chunks:
        table.add_row(
            str(chunk.index),
            str(chunk.length),
            str(chunk.token_count),
            Text(_preview(chunk.content)),
        )
    console.print(table)


@app.command()
def version() -> None:
    """Show chunkscope version."""
    console.print(f"chunkscope {__version__}")


@app.command()
def presets() -> None:
    """List the default parameters of every strategy."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("strategy")
    table.add_column("size", justify="right")
    table.add_column("overlap", justify="right")
    table.add_column("separators")
    for name, preset in PRESETS.items():
        table.add_row(
            name,
            str(preset.chunk_size),
            str(preset.chunk_overlap),
            Text(", ".join(repr(s) for s in preset.separators) or "-"),
        )
    console.print(table)


@app.command()
def split(
    source: Annotated[str, typer.Argument(help="Text file to split, or '-' for stdin")],
    strategy: Annotated[
        str | None,
        typer.Option("--strategy", "-s", help="fixed, recursive, markdown, json or semantic"),
    ] = None,
    size: Annotated[
        int | None,
        typer.Option("--size", help="Maximum chunk size in characters"),
    ] = None,
    overlap: Annotated[
        int | None,
        typer.Option("--overlap", help="Characters repeated between consecutive chunks"),
    ] = None,
    separators: Annotated[
        list[str] | None,
        typer.Option("--separator", help="Separator, highest priority first (repeatable)"),
    ] = None,
    provider: Annotated[
        str | None,
        typer.Option("--provider", help="Semantic provider (google, deepseek, aliyun, custom)"),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", help="Semantic model name"),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Semantic provider base URL"),
    ] = None,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", envvar="CHUNKSCOPE_API_KEY", help="Semantic provider API key"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML config file"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print chunks as a JSON array"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Split a document and show the resulting chunks."""
    _setup_logging(verbose)

    try:
        if config_path is not None:
            loaded = load_config(config_path)
            name = strategy or loaded.strategy
            config = loaded.chunking
        else:
            name = strategy or "fixed"
            config = preset_config(name)

        if provider is not None:
            config = apply_provider_defaults(config, provider)
        if size is not None:
            config.chunk_size = size
        if overlap is not None:
            config.chunk_overlap = overlap
        if separators is not None:
            config.separators = [_unescape(s) for s in separators]
        if model is not None:
            config.semantic_model = model
        if base_url is not None:
            config.base_url = base_url
        if api_key is not None:
            config.api_key = api_key

        text = _read_source(source)
        if name == "semantic":
            chunks = asyncio.run(chunk_semantic(text, config))
        else:
            chunks = chunk_text(text, name, config)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {source}:[/red] {e}")
        raise typer.Exit(code=1) from e
    except ChunkscopeError as e:
        console.print(f"[red]Chunking failed:[/red] {e}")
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(json.dumps([asdict(c) for c in chunks], ensure_ascii=False, indent=2))
        return
    _print_chunks(chunks)


@app.command(name="init-config")
def init_config(
    path: Annotated[Path, typer.Argument(help="Where to write the TOML config")],
    strategy: Annotated[
        str,
        typer.Option("--strategy", "-s", help="Strategy whose preset seeds the file"),
    ] = "fixed",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a config file seeded from a strategy preset."""
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        config = ChunkscopeConfig(strategy=strategy, chunking=preset_config(strategy))
        save_config(config, path)
    except ChunkscopeError as e:
        console.print(f"[red]Failed to write config:[/red] {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Wrote {strategy} config[/green] to {path}")
