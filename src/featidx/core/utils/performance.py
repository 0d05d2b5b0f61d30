"""
Timing helper used to report conversion durations.
"""
# 说明：轻量计时工具，用于在转换任务中记录处理耗时。
# 职责：
# - Timer：基于上下文管理器与 ContextDecorator 的计时工具，可用于 with 或函数装饰

from __future__ import annotations

import time
from contextlib import ContextDecorator
from typing import Optional


class Timer(ContextDecorator):
    """
    Context manager for timing code blocks.

    - Behavior
      - Records start and end timestamps using a high-resolution clock.
      - Exposes elapsed seconds after exiting the context.
    """
    # 计时上下文管理器：进入时记录起始时间，退出时计算耗时（秒）

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        self.end: Optional[float] = None
        self.elapsed = 0.0
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.end = time.perf_counter()
        self.elapsed = self.end - self.start
