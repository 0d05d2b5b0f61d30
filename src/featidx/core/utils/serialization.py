"""
Serialization helpers for configuration, encoded vectors and tensor metadata.
"""
# 说明：序列化辅助工具，统一 JSON 编解码行为并内置简单的版本封装。
# 职责：
# - serialize_to_json / deserialize_from_json：提供带可选版本包装的 JSON 序列化/反序列化接口
# - 内部 _prepare：支持 dataclass、NumPy 数组/标量与自定义对象（实现 to_dict）的统一前处理

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Optional

import numpy as np


def _prepare(obj: Any) -> Any:
    # 将 dataclass、NumPy 对象或实现了 to_dict 的对象转换为可 JSON 序列化的基础结构
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    return obj


def serialize_to_json(obj: Any, *, version: Optional[str] = None) -> str:
    # 将对象序列化为 JSON 字符串，支持可选 version 包装
    payload = _prepare(obj)
    if version is not None:
        payload = {"version": version, "payload": payload}
    return json.dumps(payload, default=_prepare, ensure_ascii=False)


def deserialize_from_json(text: str) -> Any:
    # 简单 JSON 反序列化包装，返回原始 Python 结构
    return json.loads(text)
