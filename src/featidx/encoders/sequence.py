"""String sequence to id sequence."""
# 说明：字符串序列到 id 序列的映射，保持输入顺序与重复项。
# 约定：
# - 输入为空或 None 时返回 [last_index]（也接受 numpy 字符串数组，先转为列表再判空）
# - discard_unknown=True：丢弃未登录 token，已登录 token 保留其 id
# - discard_unknown=False：未登录 token 映射为 last_index
# - 结果为空时回退为 [last_index]，保证每条记录至少有一个 id

from __future__ import annotations

from typing import List, Optional, Sequence

from featidx.vocab.vocabulary import Vocabulary


def encode_string_sequence(
    values: Optional[Sequence[str]],
    vocabulary: Vocabulary,
    discard_unknown: bool,
) -> List[int]:
    last_index = vocabulary.last_index(discard_unknown)
    tokens = list(values) if values is not None else []
    if not tokens:
        return [last_index]

    # 过滤条件：仅当丢弃模式且 token 未登录时移除
    kept = [token for token in tokens if not (discard_unknown and token not in vocabulary)]
    ids = [vocabulary.get(token, last_index) for token in kept]
    return ids or [last_index]
