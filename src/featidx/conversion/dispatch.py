"""
Column dispatch policy.

Responsibilities
  - Classify columns as string, string sequence, NTV sequence, or other.
  - Choose the encoder for a column from its kind and output tensor info.
  - Expose the single per-column encoding entry point.

Usage Context
  - Used by the conversion job once per column before records are processed,
    and directly by callers that encode individual values.

Limitations
  - Kind inference from sample values cannot tell an empty list's element type;
    declared kinds should be preferred.
"""
# 说明：列类型分派策略，根据列的数据形态与输出张量的类型/稀疏性选择编码器或直接透传。
# 职责：
# - ColumnKind：列数据形态枚举，支持从声明类型字符串解析或从样例值推断
# - resolve_conversion：返回编码器名称；类型不匹配时返回 None（透传并告警）；无法识别时抛出 UnsupportedColumnType
# - build_column_encoder / encode_column：按分派结果构建编码器并对单个值编码
# 约定：
# - 字符串列仅在输出类型为 int/long 时转换，其它输出类型透传
# - NTV 列按输出稀疏性选择稀疏或稠密向量，与输出数值类型无关

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from featidx.core.utils.logging import get_logger
from featidx.encoders.base import (
    ColumnEncoder,
    NTVToDenseEncoder,
    NTVToSparseEncoder,
    StringSeqToIdSeqEncoder,
    StringToIdEncoder,
)
from featidx.encoders.encoder_factory import create_encoder
from featidx.exceptions import UnsupportedColumnType
from featidx.types import NTV, NTV_NAME, NTV_TERM, EncodedValue
from featidx.vocab.vocabulary import Vocabulary
from .config import OutputTensorInfo

logger = get_logger(__name__)


class ColumnKind(str, Enum):
    STRING = "string"
    STRING_SEQUENCE = "array<string>"
    NTV_SEQUENCE = "array<ntv>"
    OTHER = "other"

    @classmethod
    def parse(cls, declared: Any) -> "ColumnKind":
        # 解析声明的列类型，未识别的类型名统一归为 OTHER，由分派阶段报错
        if isinstance(declared, ColumnKind):
            return declared
        text = str(declared).strip().lower().replace(" ", "")
        aliases = {
            "string": cls.STRING,
            "str": cls.STRING,
            "array<string>": cls.STRING_SEQUENCE,
            "list<string>": cls.STRING_SEQUENCE,
            "array<ntv>": cls.NTV_SEQUENCE,
            "list<ntv>": cls.NTV_SEQUENCE,
        }
        return aliases.get(text, cls.OTHER)


def _looks_like_ntv(item: Any) -> bool:
    if isinstance(item, NTV):
        return True
    if isinstance(item, Mapping):
        return NTV_NAME in item and NTV_TERM in item
    return isinstance(item, tuple) and len(item) in (2, 3) and all(isinstance(x, str) for x in item[:2])


def infer_column_kind(value: Any) -> Optional[ColumnKind]:
    """
    Infer a column kind from one sample value.

    Returns None when the value carries no type information (None or an empty
    sequence), so the caller can look at another record.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return ColumnKind.STRING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = [item for item in value if item is not None]
        if not items:
            return None
        if all(isinstance(item, str) for item in items):
            return ColumnKind.STRING_SEQUENCE
        if all(_looks_like_ntv(item) for item in items):
            return ColumnKind.NTV_SEQUENCE
    return ColumnKind.OTHER


def resolve_conversion(column: str, kind: ColumnKind, output_info: OutputTensorInfo) -> Optional[str]:
    """
    Name of the encoder for a column, or None when the column passes through unconverted.

    Raises UnsupportedColumnType for column shapes that cannot be converted.
    """
    kind = ColumnKind.parse(kind)
    if kind in (ColumnKind.STRING, ColumnKind.STRING_SEQUENCE):
        if output_info.dtype.is_integer:
            if kind is ColumnKind.STRING:
                return StringToIdEncoder.name
            return StringSeqToIdSeqEncoder.name
        logger.warning(
            "Feature list: %s is not used, because indices in %s does not need to be converted, "
            "according to your specified type: %s in outputTensorInfo",
            column,
            column,
            output_info.dtype.value,
        )
        return None
    if kind is ColumnKind.NTV_SEQUENCE:
        return NTVToSparseEncoder.name if output_info.is_sparse else NTVToDenseEncoder.name
    raise UnsupportedColumnType(column)


def build_column_encoder(
    column: str,
    kind: ColumnKind,
    output_info: OutputTensorInfo,
    vocabulary: Vocabulary,
    *,
    discard_unknown_entries: bool = False,
    enable_filter_zero: bool = False,
) -> Optional[ColumnEncoder]:
    # 按分派结果构建列编码器；透传列返回 None
    name = resolve_conversion(column, kind, output_info)
    if name is None:
        return None
    if name == NTVToSparseEncoder.name:
        return create_encoder(name, vocabulary, discard_unknown=discard_unknown_entries, filter_zeros=enable_filter_zero)
    return create_encoder(name, vocabulary, discard_unknown=discard_unknown_entries)


def encode_column(
    value: Any,
    vocabulary: Vocabulary,
    kind: ColumnKind,
    output_info: OutputTensorInfo,
    *,
    discard_unknown_entries: bool = False,
    enable_filter_zero: bool = False,
    column: Optional[str] = None,
) -> EncodedValue:
    """
    Encode one raw column value given its vocabulary and configuration flags.

    Columns that pass through (string columns with a non-integer output type)
    are returned unchanged.
    """
    column_name = column or vocabulary.name or "<unnamed>"
    encoder = build_column_encoder(
        column_name,
        kind,
        output_info,
        vocabulary,
        discard_unknown_entries=discard_unknown_entries,
        enable_filter_zero=enable_filter_zero,
    )
    if encoder is None:
        # 透传值不写入消息正文，仅作为 raw_value 附带，由 FeatureValueFilter 按配置掩码
        logger.debug("column %s passed through unconverted", column_name, extra={"raw_value": value})
        return value
    return encoder.encode(value)
