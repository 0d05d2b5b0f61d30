"""
Vocabulary loaders.

Responsibilities
  - Load one vocabulary per feature column from a feature-list directory.
  - Serve in-memory vocabularies for tests and embedded use.
  - Fail fast with VocabularyNotFound / VocabularyLoadError.

Usage Context
  - Called once before any record is encoded; encoders never perform I/O.

Limitations
  - Files are read whole into memory; one file per column.
"""
# 说明：词表加载器，负责在编码开始前一次性加载各特征列词表，编码过程本身不做任何 I/O。
# 职责：
# - VocabularyLoader：加载器抽象接口（columns / load / load_all）
# - FileVocabularyLoader：从目录读取词表文件，文件名即列名，每行一个 UTF-8 token，行号即 id
# - 目录列表按加载器实例缓存；重复 token 在加载时告警一次并按首次出现顺序连续编号
# - InMemoryVocabularyLoader：直接包装内存中的词表，便于测试

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from featidx.exceptions import VocabularyLoadError, VocabularyNotFound
from featidx.core.utils.logging import get_logger
from featidx.core.utils.param_validation import ParamValidationError
from .vocabulary import Vocabulary

logger = get_logger(__name__)


class VocabularyLoader(ABC):
    """Source of per-column vocabularies."""

    @abstractmethod
    def columns(self) -> List[str]:
        """Names of all columns that have a vocabulary."""
        raise NotImplementedError

    @abstractmethod
    def load(self, column: str) -> Vocabulary:
        """Return the vocabulary for column or raise VocabularyNotFound."""
        raise NotImplementedError

    def load_all(self) -> Dict[str, Vocabulary]:
        # 依次加载全部列的词表，任一失败立即向上抛出
        return {column: self.load(column) for column in self.columns()}


class FileVocabularyLoader(VocabularyLoader):
    """
    Load vocabularies from a feature-list directory.

    - Configuration
      - feature_list_path: Directory holding one vocabulary file per column.
      - recursive: Whether files in nested directories are listed too.

    - Behavior
      - The file name is the column name.
      - Each line is a token; its zero-based line number is its id.
      - Repeated tokens are logged once per column and skipped, so later
        tokens move up and ids stay contiguous.
      - The directory is listed once per loader; files added afterwards are not seen.
    """
    # 基于文件系统目录的词表加载器

    def __init__(self, feature_list_path: Union[str, Path], *, recursive: bool = True):
        self.root = Path(feature_list_path)
        self.recursive = recursive
        self._listing: Optional[Dict[str, Path]] = None

    def _files(self) -> Dict[str, Path]:
        # 目录只扫描一次，结果缓存在实例上，load_all 不再按列重复遍历
        if self._listing is not None:
            return self._listing
        if not self.root.is_dir():
            raise VocabularyNotFound(location=str(self.root))
        pattern = self.root.rglob("*") if self.recursive else self.root.glob("*")
        files: Dict[str, Path] = {}
        for path in sorted(pattern):
            if path.is_file() and not path.name.startswith("."):
                files.setdefault(path.name, path)
        self._listing = files
        return files

    def columns(self) -> List[str]:
        return list(self._files())

    def load(self, column: str) -> Vocabulary:
        files = self._files()
        if column not in files:
            raise VocabularyNotFound(column, location=str(self.root))
        path = files[column]
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                # 逐行读取并去除行尾换行符（兼容 \r\n），保留行内其它字符
                tokens = [line.rstrip("\r\n") for line in handle]
        except (OSError, UnicodeDecodeError) as exc:
            raise VocabularyLoadError(column, str(path), exc) from exc

        repeated = sorted(token for token, count in Counter(tokens).items() if count > 1)
        if repeated:
            # 重复 token 本身作为 token 字段附带，默认由 FeatureValueFilter 掩码
            logger.warning(
                "vocabulary for column %s in %s repeats %d token(s); ids are reassigned in first-seen order",
                column,
                path,
                len(repeated),
                extra={"token": repeated},
            )
        vocabulary = Vocabulary.from_tokens(tokens, name=column)
        logger.info("loaded vocabulary for column %s: %d tokens from %s", column, vocabulary.size, path)
        return vocabulary


VocabularySource = Union[Vocabulary, Mapping[str, int], Iterable[str]]


class InMemoryVocabularyLoader(VocabularyLoader):
    """
    Serve vocabularies held in memory.

    Accepts Vocabulary instances, token -> id mappings, or ordered token lists.
    """

    def __init__(self, vocabularies: Mapping[str, VocabularySource]):
        self._vocabularies: Dict[str, Vocabulary] = {}
        for column, source in vocabularies.items():
            self._vocabularies[column] = self._coerce(column, source)

    @staticmethod
    def _coerce(column: str, source: VocabularySource) -> Vocabulary:
        if isinstance(source, Vocabulary):
            return source if source.name is not None else Vocabulary(source, name=column)
        if isinstance(source, Mapping):
            return Vocabulary(source, name=column)
        if isinstance(source, (str, bytes)):
            raise ParamValidationError(f"vocabulary for column '{column}' must not be a plain string")
        return Vocabulary.from_tokens(source, name=column)

    def columns(self) -> List[str]:
        return list(self._vocabularies)

    def load(self, column: str) -> Vocabulary:
        if column not in self._vocabularies:
            raise VocabularyNotFound(column)
        return self._vocabularies[column]
