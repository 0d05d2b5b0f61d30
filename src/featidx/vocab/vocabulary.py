"""
Immutable per-column vocabulary.

Responsibilities
  - Hold a stable token-to-index mapping built ahead of time.
  - Derive the unknown-entry index and vector width from the discard policy.
  - Provide inverse lookup from index back to token.

Usage Context
  - One instance per feature column, shared read-only across all records.

Limitations
  - Vocabularies are never built from record data here; they are loaded.
"""
# 说明：特征列词表，负责 token 与整数索引之间的只读映射，并按未知值丢弃策略推导 last_index。
# 职责：
# - 维护 token 到索引以及索引到 token 的映射，构建后不可变
# - 按 discard_unknown 推导 last_index 与向量宽度（不做缓存，按需计算）
# - 提供从 token 序列（如词表文件行）构建词表的入口，重复 token 以首次出现为准，id 按首次出现顺序连续编号
# 约定：
# - id 必须恰好覆盖 0..size-1，保证 last_index 不与任何已登录 token 冲突

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from featidx.core.utils.param_validation import ParamValidationError, ensure


class Vocabulary(Mapping[str, int]):
    """
    Read-only mapping from feature token to a non-negative integer id.

    - Configuration
      - mapping: token -> id pairs; ids must be unique and cover 0..size-1.
      - name: Optional column name used in metadata and error messages.

    - Behavior
      - Behaves as an immutable Mapping; size is the number of distinct tokens.
      - last_index(discard) is size - 1 when discarding, else size.

    - Usage Notes
      - Safe to share across threads; no method mutates state.
    """
    # 词表对象：构建后只读，可在并发调用之间共享

    def __init__(self, mapping: Mapping[str, int], *, name: Optional[str] = None):
        index: Dict[str, int] = {}
        seen_ids: Dict[int, str] = {}
        for token, idx in mapping.items():
            ensure(isinstance(idx, int) and not isinstance(idx, bool), f"id for token {token!r} must be an int")
            ensure(idx >= 0, f"id for token {token!r} must be non-negative")
            ensure(idx not in seen_ids, f"id {idx} is assigned to both {seen_ids.get(idx)!r} and {token!r}")
            seen_ids[idx] = token
            index[token] = idx
        # id 连续：非负且唯一时，最大 id 等于 size - 1 即说明没有空洞
        ensure(
            not seen_ids or max(seen_ids) == len(seen_ids) - 1,
            f"ids must be contiguous from 0, got max id {max(seen_ids, default=-1)} for {len(seen_ids)} tokens",
        )
        self._index = MappingProxyType(index)
        self._tokens = MappingProxyType(seen_ids)
        self.name = name

    @classmethod
    def from_tokens(cls, tokens: Iterable[str], *, name: Optional[str] = None) -> "Vocabulary":
        """Build from an ordered token stream; ids follow first-seen order, repeats are skipped."""
        # 按首次出现顺序连续编号；无重复时 id 即行号
        mapping: Dict[str, int] = {}
        for token in tokens:
            if token not in mapping:
                mapping[token] = len(mapping)
        return cls(mapping, name=name)

    def __getitem__(self, token: str) -> int:
        return self._index[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, token: Any) -> bool:
        return token in self._index

    def __repr__(self) -> str:
        return f"Vocabulary(name={self.name!r}, size={self.size})"

    @property
    def size(self) -> int:
        return len(self._index)

    def last_index(self, discard_unknown: bool) -> int:
        """Index used for padding and unknown entries under the given discard policy."""
        return self.size - 1 if discard_unknown else self.size

    def num_unique_values(self, discard_unknown: bool) -> int:
        """Width of a dense vector over this vocabulary (one extra slot when keeping unknowns)."""
        return self.size if discard_unknown else self.size + 1

    def token(self, index: int) -> str:
        # 反向查找：索引越界时抛出参数错误
        if index not in self._tokens:
            raise ParamValidationError(f"index {index} is not assigned in vocabulary")
        return self._tokens[index]

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": "vocabulary", "name": self.name, "size": self.size}
