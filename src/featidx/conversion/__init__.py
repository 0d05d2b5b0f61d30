"""Column dispatch, job configuration, and the record-level conversion job."""

from __future__ import annotations

from .config import ConversionConfig, DataType, OutputTensorInfo
from .dispatch import (
    ColumnKind,
    build_column_encoder,
    encode_column,
    infer_column_kind,
    resolve_conversion,
)
from .job import ColumnPlan, FeatureIndicesConversion

__all__ = [
    "ConversionConfig",
    "DataType",
    "OutputTensorInfo",
    "ColumnKind",
    "infer_column_kind",
    "resolve_conversion",
    "build_column_encoder",
    "encode_column",
    "ColumnPlan",
    "FeatureIndicesConversion",
]
