"""
Shared type definitions for feature indices conversion.

Responsibilities
  - Define the NTV (name/term/value) input record and its coercion rules.
  - Define IdValue pairs and the sparse/dense vector payloads produced per record.
  - Provide JSON-friendly views of encoded values.

Usage Context
  - Use as shared payload types between encoders, the vector materializer,
    and the conversion job.

Limitations
  - Sparse vectors do not sort or deduplicate their indices.
"""
# 说明：特征索引转换中共享的类型定义，覆盖 NTV 输入、IdValue 对以及稀疏/稠密向量载体。
# 职责：
# - 定义 NTV 三元组及其从 tuple / mapping 形式的规范化
# - 定义 IdValue 与 SparseVector，保证 indices 与 values 长度一致
# - 约定 EncodedValue 作为各编码器输出的统一类型别名

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from featidx.core.utils.param_validation import ParamValidationError

NTV_NAME = "name"
NTV_TERM = "term"
NTV_VALUE = "value"
NTV_KEY_SEPARATOR = ","
NTV_VALUE_TEXT_FEATURE = 1.0
# NTV 字段名、组合键分隔符以及文本特征（无数值）时使用的默认取值


@dataclass(frozen=True)
class NTV:
    """
    One name/term/value entry of a bag-of-features column.

    - Configuration
      - name: Feature name.
      - term: Feature term.
      - value: Numeric weight; None or text means a text-only feature.
    """

    name: Optional[str]
    term: Optional[str]
    value: Any = None

    @property
    def key(self) -> str:
        """Composite vocabulary key ``"name,term"``."""
        # 与词表构建时保持一致的组合键格式，name/term 缺失时按 "null" 拼接
        name = "null" if self.name is None else self.name
        term = "null" if self.term is None else self.term
        return f"{name}{NTV_KEY_SEPARATOR}{term}"


RawNTV = Union[NTV, Mapping[str, Any], Sequence[Any]]


def coerce_ntv(raw: RawNTV) -> NTV:
    """Normalise an NTV given as NTV, mapping, or ``(name, term[, value])`` tuple."""
    # 将多种输入形态统一为 NTV 实例，形态不合法时抛出 ParamValidationError
    if isinstance(raw, NTV):
        return raw
    if isinstance(raw, Mapping):
        if NTV_NAME not in raw or NTV_TERM not in raw:
            raise ParamValidationError("NTV mapping must contain 'name' and 'term'")
        return NTV(raw[NTV_NAME], raw[NTV_TERM], raw.get(NTV_VALUE))
    if isinstance(raw, (tuple, list)) and len(raw) in (2, 3):
        return NTV(raw[0], raw[1], raw[2] if len(raw) == 3 else None)
    raise ParamValidationError(f"cannot interpret {type(raw).__name__} as an NTV entry")


@dataclass(frozen=True)
class IdValue:
    """A single (id, value) contribution to a sparse or dense feature vector."""

    id: int
    value: float


@dataclass(frozen=True)
class SparseVector:
    """
    Sparse vector payload of parallel indices and values.

    - Configuration
      - indices: Vector positions, in the order they were produced.
      - values: Values aligned with indices.
      - filter_zeros: Whether zero-valued entries were removed.

    - Behavior
      - Rejects indices/values of different lengths.
      - with filter_zeros, entries whose value is exactly 0.0 are dropped.
    """
    # 稀疏向量载体：indices 与 values 一一对应，不负责排序或去重

    indices: Tuple[int, ...]
    values: Tuple[float, ...]
    filter_zeros: bool = False

    def __post_init__(self) -> None:
        indices = tuple(int(i) for i in self.indices)
        values = tuple(float(v) for v in self.values)
        if len(indices) != len(values):
            raise ParamValidationError(
                f"indices and values must have the same length ({len(indices)} != {len(values)})"
            )
        if self.filter_zeros:
            kept = [(i, v) for i, v in zip(indices, values) if v != 0.0]
            indices = tuple(i for i, _ in kept)
            values = tuple(v for _, v in kept)
        # frozen dataclass 需要通过 object.__setattr__ 写回规范化后的字段
        object.__setattr__(self, "indices", indices)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return len(self.indices)

    def to_dense(self, length: int, dtype: str = "float32") -> np.ndarray:
        # 展开为指定长度的稠密向量，重复 index 时后写覆盖先写；越界（含负数）index 直接报错
        length = int(length)
        dense = np.zeros(length, dtype=dtype)
        for idx, value in zip(self.indices, self.values):
            if idx < 0 or idx >= length:
                raise ParamValidationError(f"id {idx} out of range for dense vector of length {length}")
            dense[idx] = value
        return dense

    def to_dict(self) -> Dict[str, List[Any]]:
        """JSON-friendly representation using the tensor field names."""
        return {"indices": list(self.indices), "values": list(self.values)}


DenseVector = np.ndarray
EncodedValue = Union[int, List[int], SparseVector, DenseVector]
# 各编码器输出的统一类型：标量 id、id 序列、稀疏向量或稠密向量
