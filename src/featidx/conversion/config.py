"""
Configuration objects for feature indices conversion.

Responsibilities
  - Describe the declared numeric type and sparsity of each output tensor.
  - Carry the discard-unknown and filter-zero flags explicitly.
  - Provide validation and JSON-friendly serialization.

Usage Context
  - Built by callers (or parsed from a job config) and passed to the
    conversion job; flags are threaded through every encoder call.

Limitations
  - Only the output tensor fields relevant to conversion are modelled.
"""
# 说明：特征索引转换任务的配置对象，显式携带未知值丢弃与零值过滤开关，以及各输出张量的类型与稀疏性。
# 职责：
# - DataType：输出张量数值类型枚举
# - OutputTensorInfo：单列输出张量的类型与稀疏性描述
# - ConversionConfig：聚合配置入口，提供 validate / to_dict / from_dict / JSON 转换

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from featidx.core.utils.param_validation import ParamValidationError, ensure, ensure_type
from featidx.core.utils.serialization import deserialize_from_json, serialize_to_json
from featidx.exceptions import InvalidConfig


class DataType(str, Enum):
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BOOLEAN = "boolean"
    BYTES = "bytes"

    @classmethod
    def parse(cls, value: Union[str, "DataType"]) -> "DataType":
        # 大小写不敏感地解析类型名，未知类型名视为配置错误
        if isinstance(value, DataType):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise InvalidConfig(f"unknown output dtype '{value}'") from exc

    @property
    def is_integer(self) -> bool:
        return self in (DataType.INT, DataType.LONG)


@dataclass(frozen=True)
class OutputTensorInfo:
    """
    Declared output tensor description for one column.

    - Configuration
      - dtype: Declared numeric type of the tensor.
      - is_sparse: Whether the tensor is emitted as a sparse vector.
    """

    dtype: DataType
    is_sparse: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "dtype", DataType.parse(self.dtype))
        ensure_type(self.is_sparse, (bool,), label="is_sparse")

    def to_dict(self) -> Dict[str, Any]:
        return {"dtype": self.dtype.value, "isSparse": self.is_sparse}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutputTensorInfo":
        if "dtype" not in data:
            raise InvalidConfig("output tensor info requires 'dtype'")
        sparse = data.get("isSparse", data.get("is_sparse", False))
        # 只接受真正的布尔值，字符串 "false" 等不做隐式转换
        try:
            ensure_type(sparse, (bool,), label="isSparse")
        except ParamValidationError as exc:
            raise InvalidConfig(str(exc)) from exc
        return cls(dtype=DataType.parse(data["dtype"]), is_sparse=sparse)


@dataclass
class ConversionConfig:
    """
    Aggregated configuration for a feature indices conversion job.

    - Configuration
      - output_tensors: Column name -> OutputTensorInfo.
      - discard_unknown_entries: Drop unknown entries instead of mapping them
        to the extra unknown slot.
      - enable_filter_zero: Remove exact-zero values from sparse vectors.
      - feature_list_path: Optional directory of vocabulary files.
    """
    # 转换任务配置聚合入口

    output_tensors: Mapping[str, OutputTensorInfo] = field(default_factory=dict)
    discard_unknown_entries: bool = False
    enable_filter_zero: bool = False
    feature_list_path: Optional[str] = None

    def validate(self) -> "ConversionConfig":
        ensure_type(self.output_tensors, (Mapping,), label="output_tensors")
        ensure_type(self.discard_unknown_entries, (bool,), label="discard_unknown_entries")
        ensure_type(self.enable_filter_zero, (bool,), label="enable_filter_zero")
        for column, info in self.output_tensors.items():
            ensure(isinstance(column, str) and column != "", "output tensor names must be non-empty strings")
            ensure_type(info, (OutputTensorInfo,), label=f"output_tensors[{column!r}]")
        if self.feature_list_path is not None:
            ensure_type(self.feature_list_path, (str,), label="feature_list_path")
        return self

    def output_info(self, column: str) -> OutputTensorInfo:
        # 取出某列的输出张量描述，缺失视为配置不完整
        if column not in self.output_tensors:
            raise InvalidConfig(f"no output tensor info configured for column '{column}'")
        return self.output_tensors[column]

    def to_dict(self) -> Dict[str, Any]:
        """Export to a JSON-friendly dictionary."""
        return {
            "outputTensorInfo": [
                {"name": column, **info.to_dict()} for column, info in self.output_tensors.items()
            ],
            "discardUnknownEntries": self.discard_unknown_entries,
            "enableFilterZero": self.enable_filter_zero,
            "featureListPath": self.feature_list_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConversionConfig":
        """
        Create ConversionConfig from a dictionary payload.

        Output tensors may be given as a list of ``{"name", "dtype", "isSparse"}``
        entries or as a mapping keyed by column name. Both camelCase and
        snake_case keys are accepted.
        """
        raw_tensors = data.get("outputTensorInfo", data.get("output_tensors", []))
        tensors: Dict[str, OutputTensorInfo] = {}
        if isinstance(raw_tensors, Mapping):
            for column, info in raw_tensors.items():
                tensors[column] = info if isinstance(info, OutputTensorInfo) else OutputTensorInfo.from_dict(info)
        else:
            for item in raw_tensors:
                if "name" not in item:
                    raise InvalidConfig("each output tensor entry must include 'name'")
                tensors[item["name"]] = OutputTensorInfo.from_dict(item)

        discard = data.get("discardUnknownEntries", data.get("discard_unknown_entries", False))
        filter_zero = data.get("enableFilterZero", data.get("enable_filter_zero", False))
        config = cls(
            output_tensors=tensors,
            discard_unknown_entries=discard,
            enable_filter_zero=filter_zero,
            feature_list_path=data.get("featureListPath", data.get("feature_list_path")),
        )
        try:
            return config.validate()
        except ParamValidationError as exc:
            raise InvalidConfig(str(exc)) from exc

    def to_json(self) -> str:
        return serialize_to_json(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "ConversionConfig":
        data = deserialize_from_json(text)
        if not isinstance(data, Mapping):
            raise InvalidConfig("conversion config JSON must be an object")
        return cls.from_dict(data)
