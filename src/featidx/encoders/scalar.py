"""String scalar to vocabulary id."""
# 说明：单个字符串特征到整数 id 的映射；空值与未登录词统一回退到 last_index。

from __future__ import annotations

from typing import Optional

from featidx.vocab.vocabulary import Vocabulary


def encode_string(value: Optional[str], vocabulary: Vocabulary, discard_unknown: bool) -> int:
    """Map a single string to its id, falling back to the unknown index for null or unseen values."""
    last_index = vocabulary.last_index(discard_unknown)
    if value is None:
        return last_index
    return vocabulary.get(value, last_index)
