"""Tests for chunkscope.cli module."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

from typer.testing import CliRunner

from chunkscope import __version__
from chunkscope.cli import _unescape, app
from chunkscope.config import RECURSIVE_SEPARATORS, load_config

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()

FIRST = "First paragraph here.\n\n"
SECOND = "Second paragraph follows.\n"


class _FakeResponse:
    """Minimal mock for urllib.request.urlopen return value."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self) -> bytes:
        return self._data

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *args: object) -> None:
        pass


def _json_chunks(result) -> list[dict]:
    return json.loads(result.stdout)


class TestVersion:
    def test_prints_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestPresets:
    def test_lists_every_strategy(self):
        result = runner.invoke(app, ["presets"])
        assert result.exit_code == 0
        for name in ("fixed", "recursive", "markdown", "json", "semantic"):
            assert name in result.output


class TestUnescape:
    def test_control_sequences(self):
        assert _unescape("\\n\\n") == "\n\n"
        assert _unescape("\\t") == "\t"

    def test_plain_text_untouched(self):
        assert _unescape("。") == "。"
        assert _unescape("") == ""


class TestSplit:
    def test_default_fixed_preset(self, sample_file: Path):
        result = runner.invoke(app, ["split", str(sample_file), "--json"])
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert [c["content"] for c in chunks] == [FIRST + SECOND]
        assert chunks[0]["chunk_id"].startswith("fixed-chunk-0000-")

    def test_fixed_with_size_and_overlap(self, sample_file: Path):
        result = runner.invoke(
            app, ["split", str(sample_file), "--size", "20", "--overlap", "5", "--json"]
        )
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert all(c["length"] <= 20 for c in chunks)
        assert chunks[1]["content"].startswith(chunks[0]["content"][-5:])

    def test_recursive_with_escaped_separator(self, sample_file: Path):
        result = runner.invoke(
            app,
            [
                "split",
                str(sample_file),
                "-s",
                "recursive",
                "--size",
                "30",
                "--overlap",
                "0",
                "--separator",
                "\\n\\n",
                "--json",
            ],
        )
        assert result.exit_code == 0
        assert [c["content"] for c in _json_chunks(result)] == [FIRST, SECOND]

    def test_json_strategy(self, tmp_path: Path):
        source = tmp_path / "data.json"
        source.write_text(json.dumps([{"id": 1}, {"id": 2}, {"id": 3}]), encoding="utf-8")
        result = runner.invoke(app, ["split", str(source), "-s", "json", "--size", "20", "--json"])
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert len(chunks) == 3
        assert json.loads(chunks[0]["content"]) == [{"id": 1}]

    def test_reads_stdin(self):
        result = runner.invoke(
            app, ["split", "-", "--size", "3", "--overlap", "0", "--json"], input="abcdef"
        )
        assert result.exit_code == 0
        assert [c["content"] for c in _json_chunks(result)] == ["abc", "def"]

    def test_config_file(self, sample_file: Path, config_file: Path):
        result = runner.invoke(app, ["split", str(sample_file), "-c", str(config_file), "--json"])
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert [c["content"] for c in chunks] == [FIRST, SECOND]
        assert chunks[0]["chunk_id"].startswith("rec-chunk-")

    def test_strategy_overrides_config_file(self, sample_file: Path, config_file: Path):
        result = runner.invoke(
            app, ["split", str(sample_file), "-c", str(config_file), "-s", "fixed", "--json"]
        )
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert chunks[0]["chunk_id"].startswith("fixed-chunk-")
        assert chunks[0]["length"] == 30

    def test_table_output(self, sample_file: Path):
        result = runner.invoke(app, ["split", str(sample_file), "-s", "recursive", "--size", "30"])
        assert result.exit_code == 0
        assert "2 chunks" in result.output
        assert "First paragraph" in result.output

    def test_empty_input(self, tmp_path: Path):
        source = tmp_path / "empty.txt"
        source.write_text("", encoding="utf-8")
        result = runner.invoke(app, ["split", str(source), "--json"])
        assert result.exit_code == 0
        assert _json_chunks(result) == []

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["split", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_non_utf8_file(self, tmp_path: Path):
        source = tmp_path / "latin1.txt"
        source.write_bytes("café crème".encode("latin-1"))
        result = runner.invoke(app, ["split", str(source)])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_unknown_strategy(self, sample_file: Path):
        result = runner.invoke(app, ["split", str(sample_file), "-s", "sentence"])
        assert result.exit_code == 1
        assert "Unknown strategy" in result.output

    def test_unknown_provider(self, sample_file: Path):
        result = runner.invoke(
            app, ["split", str(sample_file), "-s", "semantic", "--provider", "nope"]
        )
        assert result.exit_code == 1
        assert "Unknown semantic provider" in result.output

    def test_semantic_via_provider(self, sample_file: Path):
        body = {"choices": [{"message": {"content": json.dumps([FIRST, SECOND])}}]}
        response = _FakeResponse(json.dumps(body).encode("utf-8"))
        with patch("chunkscope.semantic.base.urlopen", return_value=response):
            result = runner.invoke(
                app,
                [
                    "split",
                    str(sample_file),
                    "-s",
                    "semantic",
                    "--provider",
                    "deepseek",
                    "--api-key",
                    "sk-test",
                    "--json",
                ],
            )
        assert result.exit_code == 0
        chunks = _json_chunks(result)
        assert [c["content"] for c in chunks] == [FIRST, SECOND]
        assert chunks[0]["chunk_id"].startswith("sem-chunk-")

    def test_semantic_failure_exits_nonzero(self, sample_file: Path, monkeypatch):
        for name in ("GOOGLE_API_KEY", "GEMINI_API_KEY", "CHUNKSCOPE_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        result = runner.invoke(app, ["split", str(sample_file), "-s", "semantic"])
        assert result.exit_code == 1
        assert "Chunking failed" in result.output


class TestInitConfig:
    def test_writes_preset(self, tmp_path: Path):
        path = tmp_path / "chunkscope.toml"
        result = runner.invoke(app, ["init-config", str(path), "-s", "recursive"])
        assert result.exit_code == 0
        assert "Wrote recursive config" in result.output
        loaded = load_config(path)
        assert loaded.strategy == "recursive"
        assert loaded.chunking.separators == list(RECURSIVE_SEPARATORS)

    def test_refuses_to_overwrite(self, tmp_path: Path):
        path = tmp_path / "chunkscope.toml"
        path.write_text("# keep me\n", encoding="utf-8")
        result = runner.invoke(app, ["init-config", str(path)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert path.read_text(encoding="utf-8") == "# keep me\n"

    def test_force_overwrites(self, tmp_path: Path):
        path = tmp_path / "chunkscope.toml"
        path.write_text("# old\n", encoding="utf-8")
        result = runner.invoke(app, ["init-config", str(path), "--force", "-s", "json"])
        assert result.exit_code == 0
        assert load_config(path).strategy == "json"

    def test_unknown_strategy(self, tmp_path: Path):
        path = tmp_path / "chunkscope.toml"
        result = runner.invoke(app, ["init-config", str(path), "-s", "sentence"])
        assert result.exit_code == 1
        assert not path.exists()
