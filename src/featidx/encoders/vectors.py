"""
Vector materialization for IdValue sequences.

Responsibilities
  - Assemble IdValue sequences into SparseVector payloads.
  - Scatter IdValue sequences into fixed-width dense numpy vectors.
  - Chain the NTV encoder with either representation.

Usage Context
  - Final stage of NTV column conversion.

Limitations
  - Sparse output keeps the encoder's order; duplicates are not merged.
  - Dense output uses last-write-wins for repeated ids.
"""
# 说明：将 IdValue 序列转换为稀疏或稠密向量。
# 职责：
# - to_sparse_vector：按顺序拆分 indices/values，filter_zeros 时在组装后剔除取值为 0.0 的条目
# - to_dense_vector：构造长度为 num_unique_values 的零向量，按 id 写入 value（重复 id 后写覆盖）
# - encode_ntv_to_sparse / encode_ntv_to_dense：串联 NTV 编码与向量化，并由词表推导向量宽度

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from featidx.core.utils.config import get_config
from featidx.core.utils.param_validation import ParamValidationError, ensure
from featidx.types import DenseVector, IdValue, RawNTV, SparseVector
from featidx.vocab.vocabulary import Vocabulary
from .ntv import encode_ntv_sequence


def to_sparse_vector(id_values: Sequence[IdValue], filter_zeros: bool = False) -> SparseVector:
    """Split IdValues into parallel indices/values; optionally drop zero values afterwards."""
    return SparseVector(
        indices=tuple(iv.id for iv in id_values),
        values=tuple(iv.value for iv in id_values),
        filter_zeros=filter_zeros,
    )


def to_dense_vector(
    id_values: Iterable[IdValue],
    num_unique_values: int,
    *,
    dtype: Optional[str] = None,
) -> DenseVector:
    """Write each IdValue at its id in a zero vector of length num_unique_values."""
    ensure(num_unique_values >= 0, "num_unique_values must be non-negative")
    dense = np.zeros(int(num_unique_values), dtype=dtype or get_config().default_dtype)
    for iv in id_values:
        if iv.id < 0 or iv.id >= num_unique_values:
            raise ParamValidationError(f"id {iv.id} out of range for dense vector of length {num_unique_values}")
        dense[iv.id] = iv.value
    return dense


def encode_ntv_to_sparse(
    ntvs: Optional[Iterable[RawNTV]],
    vocabulary: Vocabulary,
    discard_unknown: bool,
    filter_zeros: bool,
) -> SparseVector:
    id_values = encode_ntv_sequence(ntvs, vocabulary, discard_unknown)
    return to_sparse_vector(id_values, filter_zeros)


def encode_ntv_to_dense(
    ntvs: Optional[Iterable[RawNTV]],
    vocabulary: Vocabulary,
    discard_unknown: bool,
    *,
    dtype: Optional[str] = None,
) -> DenseVector:
    id_values = encode_ntv_sequence(ntvs, vocabulary, discard_unknown)
    return to_dense_vector(id_values, vocabulary.num_unique_values(discard_unknown), dtype=dtype)
