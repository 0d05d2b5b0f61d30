"""Factory and registry helpers for column encoders."""
# 说明：提供列编码器的注册与按名称实例化能力，供列类型分派与配置驱动的构建使用。
# 职责：
# - 维护从字符串名称到编码器类的注册表用于集中管理
# - 提供按名称创建单个编码器实例的工厂函数与类封装入口

from __future__ import annotations

from typing import Any, Dict, List, Type

from featidx.core.utils.param_validation import ParamValidationError
from featidx.vocab.vocabulary import Vocabulary
from .base import (
    ColumnEncoder,
    NTVToDenseEncoder,
    NTVToSparseEncoder,
    StringSeqToIdSeqEncoder,
    StringToIdEncoder,
)

_ENCODER_REGISTRY: Dict[str, Type[ColumnEncoder]] = {}


def register_encoder(name: str, cls: Type[ColumnEncoder]) -> None:
    """Register an encoder class under the given name."""
    # 将编码器类以给定名称注册到全局字典中用于后续按名查找
    if not name:
        raise ParamValidationError("encoder name must be non-empty")
    _ENCODER_REGISTRY[str(name)] = cls


def get_encoder_class(name: str) -> Type[ColumnEncoder]:
    """Retrieve encoder class by name; raises ParamValidationError if missing."""
    key = str(name)
    if key not in _ENCODER_REGISTRY:
        raise ParamValidationError(f"encoder '{name}' not registered")
    return _ENCODER_REGISTRY[key]


def create_encoder(name: str, vocabulary: Vocabulary, **kwargs: Any) -> ColumnEncoder:
    """Instantiate an encoder by registry name for the given vocabulary."""
    # 通过名称查表并使用词表与其余参数实例化对应编码器
    cls = get_encoder_class(name)
    return cls(vocabulary, **kwargs)  # type: ignore[call-arg]


def registered_encoders() -> List[str]:
    return sorted(_ENCODER_REGISTRY)


class EncoderFactory:
    """Convenience wrapper mirroring the function-based factory helpers."""

    @staticmethod
    def register(name: str, cls: Type[ColumnEncoder]) -> None:
        register_encoder(name, cls)

    @staticmethod
    def get_class(name: str) -> Type[ColumnEncoder]:
        return get_encoder_class(name)

    @staticmethod
    def create(name: str, vocabulary: Vocabulary, **kwargs: Any) -> ColumnEncoder:
        return create_encoder(name, vocabulary, **kwargs)


# Pre-register the built-in column encoders
register_encoder(StringToIdEncoder.name, StringToIdEncoder)
register_encoder(StringSeqToIdSeqEncoder.name, StringSeqToIdSeqEncoder)
register_encoder(NTVToSparseEncoder.name, NTVToSparseEncoder)
register_encoder(NTVToDenseEncoder.name, NTVToDenseEncoder)
