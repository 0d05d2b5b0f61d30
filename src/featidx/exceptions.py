"""
Error hierarchy for feature indices conversion.

Responsibilities
  - Define a shared base type for conversion failures.
  - Name the column involved in schema and vocabulary failures.
  - Separate configuration problems from per-column failures.

Usage Context
  - Raised by vocabulary loaders, column dispatch, and the conversion job.
  - All of them are fatal for a job and surface before records are processed.

Limitations
  - Argument-level validation uses ParamValidationError instead.
"""
# 说明：特征索引转换的异常体系，统一词表加载、列类型分派与任务配置阶段的错误类型。
# 职责：
# - FeatureConversionError：统一基类异常
# - UnsupportedColumnType：列的数据形态不属于任何可转换模式
# - VocabularyNotFound / VocabularyLoadError：词表缺失或读取失败
# - InvalidConfig：任务配置无法解析或不完整

from __future__ import annotations

from typing import Optional


class FeatureConversionError(RuntimeError):
    """
    Base error type for feature conversion failures.

    - Usage Notes
      - Catch to handle conversion errors without mixing with argument errors.
    """


class UnsupportedColumnType(FeatureConversionError):
    """
    Raised when a column's data shape matches none of the convertible patterns.

    - Configuration
      - column: Name of the offending column.
      - reason: Optional detail appended to the message.
    """

    def __init__(self, column: str, reason: Optional[str] = None) -> None:
        # 构造包含列名的错误消息，便于定位具体出错的特征列
        message = f"Data type of column: {column} is not supported"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.column = column
        self.reason = reason


class VocabularyNotFound(FeatureConversionError):
    """
    Raised when no vocabulary exists for the requested column.

    Without a column, the feature-list directory itself is missing.
    """

    def __init__(self, column: Optional[str] = None, location: Optional[str] = None) -> None:
        if column is None:
            message = f"feature list directory {location} does not exist or is not a directory"
        else:
            where = f" under {location}" if location else ""
            message = f"no vocabulary found for column '{column}'{where}"
        super().__init__(message)
        self.column = column
        self.location = location


class VocabularyLoadError(FeatureConversionError):
    """Raised when a vocabulary exists but cannot be read or decoded."""

    def __init__(self, column: str, path: str, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to load vocabulary for column '{column}' from {path}{detail}")
        self.column = column
        self.path = path


class InvalidConfig(FeatureConversionError):
    """
    Raised when the conversion configuration cannot be parsed or is incomplete.

    - Usage Notes
      - Prefer ParamValidationError for argument-level validation.
    """
