"""
Feature indices conversion job.

Responsibilities
  - Load every column vocabulary up front and fail before touching records.
  - Resolve one encoder (or passthrough) per vocabulary column.
  - Convert records and reassemble them from untouched plus converted columns.

Usage Context
  - Run over any iterable of mapping records; the caller may supply a parallel
    map (e.g. ``ThreadPoolExecutor().map``) since records are independent.

Limitations
  - Records are dict-like; nested schemas beyond the supported column kinds
    are rejected at preparation time.
"""
# 说明：特征索引转换任务，负责在处理记录前一次性加载词表并完成列分派，随后逐条转换记录。
# 职责：
# - prepare：加载全部词表（快速失败）、校验列存在性与输出张量配置、为每列确定编码器或透传
# - convert_record：按“未转换列在前、转换列在后”的顺序重组单条记录
# - run：对记录集合逐条转换，可由调用方传入并行 map 实现
# - describe：导出各转换列的编码元数据（词表大小、向量宽度等）

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from featidx.core.utils.logging import get_logger
from featidx.core.utils.performance import Timer
from featidx.core.utils.serialization import serialize_to_json
from featidx.encoders.base import ColumnEncoder
from featidx.exceptions import UnsupportedColumnType
from featidx.vocab.loader import VocabularyLoader
from featidx.vocab.vocabulary import Vocabulary
from .config import ConversionConfig
from .dispatch import ColumnKind, build_column_encoder

logger = get_logger(__name__)

Record = Mapping[str, Any]
MapFn = Callable[[Callable[[Record], Dict[str, Any]], Iterable[Record]], Iterable[Dict[str, Any]]]


@dataclass(frozen=True)
class ColumnPlan:
    """Resolved conversion for one vocabulary column; encoder is None for passthrough."""

    column: str
    kind: ColumnKind
    vocabulary: Vocabulary
    encoder: Optional[ColumnEncoder]


class FeatureIndicesConversion:
    """
    Convert categorical columns of records into ids, id sequences, or vectors.

    - Configuration
      - config: ConversionConfig with output tensor info and flags.
      - loader: VocabularyLoader providing one vocabulary per column to convert.
      - schema: Column name -> declared kind (ColumnKind or its string form).

    - Behavior
      - Every column with a vocabulary is considered for conversion.
      - Vocabulary and schema problems are raised from prepare(), before any record.

    - Usage Notes
      - prepare() is called lazily by convert_record/run when needed.
    """

    def __init__(
        self,
        config: ConversionConfig,
        loader: VocabularyLoader,
        *,
        schema: Mapping[str, Any],
    ):
        self.config = config.validate()
        self.loader = loader
        self.schema: Dict[str, ColumnKind] = {name: ColumnKind.parse(kind) for name, kind in schema.items()}
        self._plans: Optional[List[ColumnPlan]] = None

    def prepare(self) -> List[ColumnPlan]:
        # 先加载全部词表（任何缺失或读取失败都在处理记录前抛出），再逐列分派
        if self._plans is not None:
            return self._plans
        vocabularies = self.loader.load_all()
        logger.info("loaded %d vocabularies", len(vocabularies))

        plans: List[ColumnPlan] = []
        for column, vocabulary in vocabularies.items():
            if column not in self.schema:
                raise UnsupportedColumnType(column, reason="column not present in record schema")
            kind = self.schema[column]
            encoder = build_column_encoder(
                column,
                kind,
                self.config.output_info(column),
                vocabulary,
                discard_unknown_entries=self.config.discard_unknown_entries,
                enable_filter_zero=self.config.enable_filter_zero,
            )
            plans.append(ColumnPlan(column=column, kind=kind, vocabulary=vocabulary, encoder=encoder))
        self._plans = plans
        return plans

    @property
    def converted_columns(self) -> List[str]:
        return [plan.column for plan in self.prepare() if plan.encoder is not None]

    def convert_record(self, record: Record) -> Dict[str, Any]:
        """Return a new record: untouched columns in original order, then converted columns."""
        plans = [plan for plan in self.prepare() if plan.encoder is not None]
        converted_names = {plan.column for plan in plans}
        output: Dict[str, Any] = {name: value for name, value in record.items() if name not in converted_names}
        for plan in plans:
            # 记录中缺失的列按空值处理，由编码器给出填充结果
            output[plan.column] = plan.encoder.encode(record.get(plan.column))  # type: ignore[union-attr]
        return output

    def run(self, records: Iterable[Record], *, map_fn: Optional[MapFn] = None) -> List[Dict[str, Any]]:
        """
        Convert every record.

        map_fn defaults to the built-in map; any callable with the same
        signature (such as Executor.map) can be supplied to parallelise.
        """
        self.prepare()
        mapper = map_fn or map
        with Timer() as timer:
            results = list(mapper(self.convert_record, records))
        logger.info(
            "converted %d records over %d columns in %.3fs",
            len(results),
            len(self.converted_columns),
            timer.elapsed,
        )
        return results

    def describe(self) -> Dict[str, Dict[str, Any]]:
        """Encoding metadata per converted column, suitable for tensor metadata files."""
        return {
            plan.column: dict(plan.encoder.get_metadata())
            for plan in self.prepare()
            if plan.encoder is not None
        }

    def describe_json(self) -> str:
        return serialize_to_json(self.describe())
