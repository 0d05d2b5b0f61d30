"""
NTV bag encoder.

Responsibilities
  - Map each (name, term, value) entry to an IdValue via the "name,term" key.
  - Collapse every unknown entry of a record into a single unknown IdValue.
  - Pad empty or fully discarded bags so each record yields at least one entry.

Usage Context
  - First stage of NTV -> sparse / dense vector conversion.

Limitations
  - Known entries are neither merged nor sorted; repeated keys stay repeated.
"""
# 说明：NTV（name/term/value）特征袋到 IdValue 序列的映射。
# 职责：
# - 使用 "name,term" 组合键查词表，已登录项按输入顺序输出 IdValue(id, value)
# - 未登录项不逐条输出，只记录标记；非丢弃模式下最终追加唯一一个 IdValue(last_index, 1.0)
# - 输入为空或结果为空时补一个 IdValue(last_index, 0.0) 作为填充项
# 约定：
# - 数值型 value 转为 float；value 缺失或为文本时视为文本特征，取 1.0

from __future__ import annotations

from numbers import Real
from typing import Any, Iterable, List, Optional

from featidx.types import IdValue, NTV_VALUE_TEXT_FEATURE, RawNTV, coerce_ntv
from featidx.vocab.vocabulary import Vocabulary


def ntv_value_to_float(value: Any) -> float:
    """Numeric weight of an NTV entry; text-only features weigh 1.0."""
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    return NTV_VALUE_TEXT_FEATURE


def encode_ntv_sequence(
    ntvs: Optional[Iterable[RawNTV]],
    vocabulary: Vocabulary,
    discard_unknown: bool,
) -> List[IdValue]:
    last_index = vocabulary.last_index(discard_unknown)
    padding_entry = IdValue(last_index, 0.0)
    entries = list(ntvs) if ntvs is not None else []
    if not entries:
        return [padding_entry]

    id_values: List[IdValue] = []
    has_unknown = False
    for raw in entries:
        ntv = coerce_ntv(raw)
        key = ntv.key
        if key in vocabulary:
            id_values.append(IdValue(vocabulary[key], ntv_value_to_float(ntv.value)))
        else:
            has_unknown = True

    # 同一条记录中的多个未登录组合键只保留一个取值为 1.0 的未知项
    if not discard_unknown and has_unknown:
        id_values.append(IdValue(last_index, 1.0))
    if not id_values:
        id_values.append(padding_entry)
    return id_values
