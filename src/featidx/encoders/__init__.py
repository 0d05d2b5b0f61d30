"""Unified entry point for vocabulary-based feature encoders."""

from __future__ import annotations

from .base import (
    ColumnEncoder,
    NTVToDenseEncoder,
    NTVToSparseEncoder,
    StringSeqToIdSeqEncoder,
    StringToIdEncoder,
)
from .encoder_factory import (
    EncoderFactory,
    create_encoder,
    get_encoder_class,
    register_encoder,
    registered_encoders,
)
from .ntv import encode_ntv_sequence, ntv_value_to_float
from .scalar import encode_string
from .sequence import encode_string_sequence
from .vectors import encode_ntv_to_dense, encode_ntv_to_sparse, to_dense_vector, to_sparse_vector

__all__ = [
    "encode_string",
    "encode_string_sequence",
    "encode_ntv_sequence",
    "ntv_value_to_float",
    "to_sparse_vector",
    "to_dense_vector",
    "encode_ntv_to_sparse",
    "encode_ntv_to_dense",
    "ColumnEncoder",
    "StringToIdEncoder",
    "StringSeqToIdSeqEncoder",
    "NTVToSparseEncoder",
    "NTVToDenseEncoder",
    "register_encoder",
    "get_encoder_class",
    "create_encoder",
    "registered_encoders",
    "EncoderFactory",
]
