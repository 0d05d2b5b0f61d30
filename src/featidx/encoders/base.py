"""
Column-bound encoders.

Responsibilities
  - Bind one vocabulary and its flags to the encoding function of a column shape.
  - Expose a uniform encode/get_metadata interface to the conversion job.

Usage Context
  - Created once per column by the dispatch layer, then called once per record.

Limitations
  - Encoders are one-shot transforms from raw to numeric values; re-encoding
    their output is not supported.
"""
# 说明：将编码函数与某一列的词表及开关绑定，向转换任务暴露统一的 encode / get_metadata 接口。
# 职责：
# - ColumnEncoder：抽象基类，持有只读词表与 discard_unknown 开关
# - StringToIdEncoder / StringSeqToIdSeqEncoder：字符串与字符串序列到 id 的编码
# - NTVToSparseEncoder / NTVToDenseEncoder：NTV 特征袋到稀疏/稠密向量的编码

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from featidx.types import DenseVector, EncodedValue, SparseVector
from featidx.vocab.vocabulary import Vocabulary
from .ntv import encode_ntv_sequence
from .scalar import encode_string
from .sequence import encode_string_sequence
from .vectors import to_dense_vector, to_sparse_vector


class ColumnEncoder(ABC):
    """
    Encoder bound to a single column's vocabulary.

    - Configuration
      - vocabulary: Read-only vocabulary of the column.
      - discard_unknown: Whether unknown entries are dropped instead of mapped
        to the extra unknown slot.

    - Behavior
      - encode(value) is a pure function of value; no state is kept between calls.
    """

    name = "column"

    def __init__(self, vocabulary: Vocabulary, discard_unknown: bool = False):
        self.vocabulary = vocabulary
        self.discard_unknown = bool(discard_unknown)

    @property
    def last_index(self) -> int:
        return self.vocabulary.last_index(self.discard_unknown)

    @abstractmethod
    def encode(self, value: Any) -> EncodedValue:
        """Encode one record's raw column value."""
        raise NotImplementedError

    def __call__(self, value: Any) -> EncodedValue:
        return self.encode(value)

    def get_metadata(self) -> Mapping[str, Any]:
        """JSON-serializable description of the encoder and its vocabulary."""
        return {
            "type": self.name,
            "vocabulary_size": self.vocabulary.size,
            "discard_unknown": self.discard_unknown,
            "last_index": self.last_index,
        }


class StringToIdEncoder(ColumnEncoder):
    """Map a string column to a single id per record."""

    name = "string_to_id"

    def encode(self, value: Optional[str]) -> int:
        return encode_string(value, self.vocabulary, self.discard_unknown)


class StringSeqToIdSeqEncoder(ColumnEncoder):
    """Map a string-sequence column to an id sequence per record."""

    name = "string_seq_to_id_seq"

    def encode(self, value: Any) -> List[int]:
        return encode_string_sequence(value, self.vocabulary, self.discard_unknown)


class NTVToSparseEncoder(ColumnEncoder):
    """Map an NTV bag to a sparse vector; filter_zeros drops exact-zero values."""

    name = "ntv_to_sparse"

    def __init__(self, vocabulary: Vocabulary, discard_unknown: bool = False, filter_zeros: bool = False):
        super().__init__(vocabulary, discard_unknown)
        self.filter_zeros = bool(filter_zeros)

    def encode(self, value: Any) -> SparseVector:
        id_values = encode_ntv_sequence(value, self.vocabulary, self.discard_unknown)
        return to_sparse_vector(id_values, self.filter_zeros)

    def get_metadata(self) -> Mapping[str, Any]:
        meta: Dict[str, Any] = dict(super().get_metadata())
        meta["filter_zeros"] = self.filter_zeros
        meta["num_unique_values"] = self.vocabulary.num_unique_values(self.discard_unknown)
        return meta


class NTVToDenseEncoder(ColumnEncoder):
    """Map an NTV bag to a dense vector of width num_unique_values."""

    name = "ntv_to_dense"

    def __init__(self, vocabulary: Vocabulary, discard_unknown: bool = False, dtype: Optional[str] = None):
        super().__init__(vocabulary, discard_unknown)
        self.dtype = dtype

    @property
    def num_unique_values(self) -> int:
        return self.vocabulary.num_unique_values(self.discard_unknown)

    def encode(self, value: Any) -> DenseVector:
        id_values = encode_ntv_sequence(value, self.vocabulary, self.discard_unknown)
        return to_dense_vector(id_values, self.num_unique_values, dtype=self.dtype)

    def get_metadata(self) -> Mapping[str, Any]:
        meta: Dict[str, Any] = dict(super().get_metadata())
        meta["num_unique_values"] = self.num_unique_values
        return meta
