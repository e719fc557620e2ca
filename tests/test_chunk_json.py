"""Tests for the structure-aware JSON chunker."""

from __future__ import annotations

import json

import pytest

from chunkscope.chunk.json_structural import JsonChunker, chunk_json_structural
from chunkscope.chunk.recursive import chunk_recursive
from chunkscope.config import ChunkingConfig


def _config(size: int, overlap: int = 0, separators=()) -> ChunkingConfig:
    return ChunkingConfig(chunk_size=size, chunk_overlap=overlap, separators=list(separators))


def _contents(chunks):
    return [c.content for c in chunks]


RECORDS = json.dumps([{"id": 1}, {"id": 2}, {"id": 3}])
WIDE_OBJECT = json.dumps({"a": "x" * 10, "b": "y" * 10, "c": "z" * 10})


class TestSmallDocuments:
    def test_fits_is_single_reformatted_chunk(self):
        chunks = chunk_json_structural('{"a":1}', _config(1000))
        assert _contents(chunks) == ['{\n  "a": 1\n}']

    def test_empty_array(self):
        assert _contents(chunk_json_structural("[]", _config(1000))) == ["[]"]

    def test_non_ascii_preserved(self):
        chunks = chunk_json_structural('["测试"]', _config(1000))
        assert "测试" in chunks[0].content
        assert "\\u" not in chunks[0].content

    def test_ids_tagged(self):
        chunks = chunk_json_structural(RECORDS, _config(20))
        assert all(c.chunk_id.startswith("json-chunk-") for c in chunks)


class TestArrayBatching:
    def test_one_item_per_chunk(self):
        # each {"id": n} costs 13 chars + 2 overhead
        chunks = chunk_json_structural(RECORDS, _config(20))
        assert [json.loads(c) for c in _contents(chunks)] == [
            [{"id": 1}],
            [{"id": 2}],
            [{"id": 3}],
        ]

    def test_items_grouped_under_budget(self):
        chunks = chunk_json_structural(RECORDS, _config(40))
        assert [json.loads(c) for c in _contents(chunks)] == [
            [{"id": 1}, {"id": 2}],
            [{"id": 3}],
        ]

    def test_oversized_item_kept_whole(self):
        text = json.dumps(["x" * 50, "y"])
        chunks = chunk_json_structural(text, _config(20))
        assert [json.loads(c) for c in _contents(chunks)] == [["x" * 50], ["y"]]
        assert chunks[0].length > 20

    def test_every_chunk_is_valid_json(self):
        text = json.dumps([{"name": f"item-{i}", "tags": ["a", "b"]} for i in range(25)])
        chunks = chunk_json_structural(text, _config(120))
        assert len(chunks) > 1
        merged = [item for c in chunks for item in json.loads(c.content)]
        assert merged == json.loads(text)

    def test_uses_two_space_indent(self):
        chunks = chunk_json_structural(RECORDS, _config(20))
        assert chunks[0].content == '[\n  {\n    "id": 1\n  }\n]'


class TestObjectBatching:
    def test_one_pair_per_chunk(self):
        chunks = chunk_json_structural(WIDE_OBJECT, _config(25))
        assert [json.loads(c) for c in _contents(chunks)] == [
            {"a": "x" * 10},
            {"b": "y" * 10},
            {"c": "z" * 10},
        ]

    def test_pairs_grouped_under_budget(self):
        chunks = chunk_json_structural(WIDE_OBJECT, _config(45))
        assert [json.loads(c) for c in _contents(chunks)] == [
            {"a": "x" * 10, "b": "y" * 10},
            {"c": "z" * 10},
        ]

    def test_key_order_preserved(self):
        text = json.dumps({k: k * 30 for k in "zyxw"})
        chunks = chunk_json_structural(text, _config(50))
        keys = [k for c in chunks for k in json.loads(c.content)]
        assert keys == ["z", "y", "x", "w"]


class TestScalarAndFallback:
    def test_oversized_scalar_split_as_text(self):
        text = json.dumps("word " * 20)
        chunks = chunk_json_structural(text, _config(30, separators=[" "]))
        assert len(chunks) > 1
        assert "".join(_contents(chunks)) == text
        assert all(c.chunk_id.startswith("json-chunk-") for c in chunks)

    @pytest.mark.parametrize("text", ["not json at all", "[NaN]", '{"a": Infinity}', "{broken"])
    def test_invalid_json_falls_back_to_recursive(self, text):
        config = _config(5, separators=[" "])
        chunks = chunk_json_structural(text, config)
        assert _contents(chunks) == _contents(chunk_recursive(text, config))

    def test_empty_text(self):
        assert chunk_json_structural("", _config(100)) == []

    def test_class_interface(self):
        chunker = JsonChunker()
        assert chunker.name == "json"
        assert len(chunker.chunk(RECORDS, _config(20))) == 3

    def test_nesting_past_recursion_limit_falls_back(self):
        text = "[" * 100000 + "]" * 100000
        config = _config(50)
        chunks = chunk_json_structural(text, config)
        assert _contents(chunks) == _contents(chunk_recursive(text, config))
        assert "".join(_contents(chunks)) == text


class TestDegenerateSize:
    @pytest.mark.parametrize("size", [0, -3])
    def test_array_one_item_per_chunk(self, size):
        chunks = chunk_json_structural(RECORDS, _config(size))
        assert [json.loads(c) for c in _contents(chunks)] == [
            [{"id": 1}],
            [{"id": 2}],
            [{"id": 3}],
        ]

    @pytest.mark.parametrize("size", [0, -3])
    def test_object_one_pair_per_chunk(self, size):
        chunks = chunk_json_structural(WIDE_OBJECT, _config(size))
        assert [json.loads(c) for c in _contents(chunks)] == [
            {"a": "x" * 10},
            {"b": "y" * 10},
            {"c": "z" * 10},
        ]

    @pytest.mark.parametrize("size", [0, -3])
    def test_scalar_split_into_characters(self, size):
        chunks = chunk_json_structural('"abc"', _config(size))
        assert _contents(chunks) == ['"', "a", "b", "c", '"']
        assert [c.index for c in chunks] == [0, 1, 2, 3, 4]
