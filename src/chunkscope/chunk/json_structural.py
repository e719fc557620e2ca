"""Structure-aware JSON chunker.

Arrays are batched by element and objects by key/value pair so that each
emitted chunk is itself valid JSON under the ``chunk_size`` character
budget. A single element or pair is never split, even when it alone
exceeds the budget. An oversized top-level scalar is serialized and handed
to the recursive text chunker. Input that is not valid JSON falls back to
recursive text chunking entirely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chunkscope.chunk.base import BaseChunker
from chunkscope.chunk.recursive import chunk_recursive
from chunkscope.types import make_chunks

if TYPE_CHECKING:
    from chunkscope.config import ChunkingConfig
    from chunkscope.types import Chunk

__all__ = ["JsonChunker", "chunk_json_structural"]

logger = logging.getLogger(__name__)

# Allowance per item for the separating comma and newline
_ITEM_OVERHEAD = 2
# Enclosing braces of an emitted object
_OBJECT_BASE_SIZE = 2


@dataclass(frozen=True)
class JsonArray:
    items: list[Any]


@dataclass(frozen=True)
class JsonObject:
    pairs: list[tuple[str, Any]]


@dataclass(frozen=True)
class JsonScalar:
    value: Any


JsonValue = JsonArray | JsonObject | JsonScalar


def _dumps(value: Any) -> str:
    """Serialize with stable two-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _classify(value: Any) -> JsonValue:
    if isinstance(value, list):
        return JsonArray(value)
    if isinstance(value, dict):
        return JsonObject(list(value.items()))
    return JsonScalar(value)


def _batch_array(items: list[Any], budget: int) -> list[str]:
    batches: list[str] = []
    batch: list[Any] = []
    size = 0

    for item in items:
        item_size = len(_dumps(item)) + _ITEM_OVERHEAD
        if batch and size + item_size > budget:
            batches.append(_dumps(batch))
            batch = []
            size = 0
        batch.append(item)
        size += item_size

    if batch:
        batches.append(_dumps(batch))
    return batches


def _batch_object(pairs: list[tuple[str, Any]], budget: int) -> list[str]:
    batches: list[str] = []
    batch: dict[str, Any] = {}
    size = _OBJECT_BASE_SIZE

    for key, value in pairs:
        pair_size = len(f"{_dumps(key)}: {_dumps(value)}") + _ITEM_OVERHEAD
        if batch and size + pair_size > budget:
            batches.append(_dumps(batch))
            batch = {}
            size = _OBJECT_BASE_SIZE
        batch[key] = value
        size += pair_size

    if batch:
        batches.append(_dumps(batch))
    return batches


class JsonChunker(BaseChunker):
    """Chunker that keeps array elements and object entries intact."""

    name = "json"

    def _do_chunk(self, text: str, config: ChunkingConfig) -> list[Chunk]:
        # Nesting past the interpreter recursion limit surfaces as RecursionError
        try:
            data = json.loads(text, parse_constant=_reject_constant)
            contents = self._split_value(data, config)
        except (ValueError, RecursionError) as e:
            logger.warning(
                "Unusable JSON (%s), falling back to recursive text splitting", e
            )
            return chunk_recursive(text, config)

        return make_chunks(contents, "json")

    def _split_value(self, data: Any, config: ChunkingConfig) -> list[str]:
        serialized = _dumps(data)
        if len(serialized) <= config.chunk_size:
            return [serialized]

        value = _classify(data)
        if isinstance(value, JsonArray):
            return _batch_array(value.items, config.chunk_size)
        if isinstance(value, JsonObject):
            return _batch_object(value.pairs, config.chunk_size)
        return [c.content for c in chunk_recursive(serialized, config)]


def chunk_json_structural(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split JSON ``text`` along array elements or object entries."""
    return JsonChunker().chunk(text, config)
