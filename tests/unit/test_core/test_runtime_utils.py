"""
Unit tests for runtime configuration, logging, serialization and timing utilities.
"""
# 说明：core.utils 中运行时配置、日志脱敏、JSON 序列化与计时工具的单元测试。
# 覆盖：
# - configure(...) / RuntimeConfig.load_from_env(...) / get_config() 单例
# - FeatureValueFilter 对 token 等原始特征字段的掩码
# - serialize_to_json 对 dataclass、NumPy 与 to_dict 对象的处理及版本包装
# - Timer 计时结果非负

import logging

import numpy as np
import pytest

from featidx.core.utils import (
    RuntimeConfig,
    Timer,
    configure,
    configure_logging,
    deserialize_from_json,
    get_config,
    get_logger,
    serialize_to_json,
)
from featidx.types import IdValue, SparseVector


def test_configure_updates_values() -> None:
    previous = get_config().default_dtype
    try:
        cfg = configure(default_dtype="float64")
        assert cfg.default_dtype == "float64"
        assert get_config() is cfg
    finally:
        configure(default_dtype=previous)


def test_configure_rejects_unknown_option() -> None:
    with pytest.raises(AttributeError):
        configure(no_such_option=True)


def test_runtime_config_env_override(monkeypatch) -> None:
    cfg = RuntimeConfig()
    monkeypatch.setenv("FEATIDX_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FEATIDX_MASK_FEATURE_VALUES", "0")
    monkeypatch.setenv("FEATIDX_DEFAULT_DTYPE", "float64")
    cfg.load_from_env()
    assert cfg.log_level == "DEBUG"
    assert cfg.mask_feature_values is False
    assert cfg.default_dtype == "float64"


def test_logger_masks_feature_values(caplog) -> None:
    configure_logging(level="INFO")
    logger = get_logger("featidx.test")
    with caplog.at_level(logging.INFO):
        logger.info("unknown token seen", extra={"token": "secret-value"})
    assert "unknown token seen" in caplog.text
    assert caplog.records[-1].token == "***"


def test_logger_keeps_values_when_masking_disabled(caplog) -> None:
    logger = get_logger("featidx.test.unmasked")
    configure(mask_feature_values=False)
    try:
        with caplog.at_level(logging.INFO):
            logger.info("token", extra={"token": "visible"})
        assert caplog.records[-1].token == "visible"
    finally:
        configure(mask_feature_values=True)


def test_serialize_to_json_handles_library_types() -> None:
    payload = {
        "sparse": SparseVector(indices=(1,), values=(2.0,)),
        "pair": IdValue(3, 0.5),
        "dense": np.array([0.0, 1.5]),
        "count": np.int64(4),
    }
    data = deserialize_from_json(serialize_to_json(payload, version="1"))
    assert data["version"] == "1"
    assert data["payload"] == {
        "sparse": {"indices": [1], "values": [2.0]},
        "pair": {"id": 3, "value": 0.5},
        "dense": [0.0, 1.5],
        "count": 4,
    }


def test_timer_records_elapsed() -> None:
    with Timer() as timer:
        sum(range(100))
    assert timer.elapsed >= 0.0
    assert timer.end is not None
