"""Vocabulary-based conversion of categorical features into tensor-ready ids and vectors."""

from __future__ import annotations

from .conversion import (
    ColumnKind,
    ConversionConfig,
    DataType,
    FeatureIndicesConversion,
    OutputTensorInfo,
    encode_column,
)
from .encoders import (
    encode_ntv_sequence,
    encode_string,
    encode_string_sequence,
    to_dense_vector,
    to_sparse_vector,
)
from .exceptions import (
    FeatureConversionError,
    InvalidConfig,
    UnsupportedColumnType,
    VocabularyLoadError,
    VocabularyNotFound,
)
from .types import NTV, IdValue, SparseVector
from .vocab import FileVocabularyLoader, InMemoryVocabularyLoader, Vocabulary

__version__ = "0.1.0"

__all__ = [
    "ColumnKind",
    "ConversionConfig",
    "DataType",
    "FeatureIndicesConversion",
    "OutputTensorInfo",
    "encode_column",
    "encode_string",
    "encode_string_sequence",
    "encode_ntv_sequence",
    "to_sparse_vector",
    "to_dense_vector",
    "FeatureConversionError",
    "InvalidConfig",
    "UnsupportedColumnType",
    "VocabularyLoadError",
    "VocabularyNotFound",
    "NTV",
    "IdValue",
    "SparseVector",
    "Vocabulary",
    "FileVocabularyLoader",
    "InMemoryVocabularyLoader",
]
