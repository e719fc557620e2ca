"""Cheap token estimate used to annotate chunks.

Not tied to any model vocabulary: CJK characters count as one token each,
everything else as a quarter token, rounded up in aggregate.
"""

from __future__ import annotations

import math
import re

__all__ = ["estimate_token_count"]

# CJK unified ideographs, Hiragana/Katakana, extension A,
# compatibility ideographs, half-width Katakana
_CJK_RE = re.compile(r"[\u4e00-\u9fa5\u3040-\u30ff\u3400-\u4dbf\uf900-\ufaff\uff66-\uff9f]")


def estimate_token_count(text: str) -> int:
    """Estimate the token count of ``text``.

    ``tokens = cjk + ceil(other / 4)``; empty text yields 0.
    """
    if not text:
        return 0
    cjk_count = len(_CJK_RE.findall(text))
    other_count = max(0, len(text) - cjk_count)
    return cjk_count + math.ceil(other_count / 4)
