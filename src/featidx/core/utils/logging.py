"""
Lightweight logging helpers that keep raw feature values out of log output.
"""
# 说明：轻量级日志工具，提供统一的 logger 获取入口，并默认对原始特征取值进行脱敏。
# 职责：
# - FeatureValueFilter：根据运行时配置对日志记录中携带的原始特征字段进行掩码处理
# - configure_logging(...)：初始化 logging 基本配置并为根 logger 挂载过滤器
# - get_logger(...)：按名称获取 logger，必要时自动完成日志系统初始化
# 约定：
# - 是否掩码由 RuntimeConfig.mask_feature_values 控制
# - 日志级别优先级：显式参数 level > 环境变量 FEATIDX_LOG_LEVEL > 运行时配置的 log_level

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config

_MASKED_ATTRIBUTES = ("token", "raw_value")


class FeatureValueFilter(logging.Filter):
    """Filter that hides raw feature tokens attached to log records if configured."""
    # 特征值过滤器：启用掩码配置时，对约定字段名（token / raw_value）统一替换为 ***

    def filter(self, record: logging.LogRecord) -> bool:
        config = get_config()
        if not config.mask_feature_values:
            return True
        for attr in _MASKED_ATTRIBUTES:
            if hasattr(record, attr):
                setattr(record, attr, "***")
        return True


def configure_logging(level: Optional[str] = None) -> None:
    # 初始化根 logger：确定最终日志级别、设置格式，并挂载 FeatureValueFilter（避免重复挂载）
    log_level = level or os.environ.get("FEATIDX_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(name)s %(asctime)s | %(message)s",
    )
    root = logging.getLogger()
    root.setLevel(log_level)
    if not any(isinstance(f, FeatureValueFilter) for f in root.filters):
        root.addFilter(FeatureValueFilter())


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger，若根 logger 尚无 handler，则懒加载方式调用 configure_logging 进行初始化
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        configure_logging()
    # 根 logger 的 filter 不作用于子 logger 传播上来的记录，因此在具名 logger 上同样挂载
    if not any(isinstance(f, FeatureValueFilter) for f in logger.filters):
        logger.addFilter(FeatureValueFilter())
    return logger
