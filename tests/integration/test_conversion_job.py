"""
Integration tests for the feature indices conversion job.
"""
# 说明：词表加载 列分派 记录转换 端到端测试
# 覆盖：
# - 基于文件目录的词表加载与四类列转换
# - 记录重组顺序：未转换列在前，转换列在后
# - 透传列的告警、缺失词表/缺失列/缺失配置的快速失败
# - 并行 map 与顺序 map 结果一致、describe 元数据
from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from featidx import (
    ConversionConfig,
    DataType,
    FeatureIndicesConversion,
    FileVocabularyLoader,
    InMemoryVocabularyLoader,
    InvalidConfig,
    OutputTensorInfo,
    SparseVector,
    UnsupportedColumnType,
    VocabularyNotFound,
)


@pytest.fixture
def feature_list(tmp_path):
    # 构造词表目录：每个文件对应一列
    root = tmp_path / "featureList"
    root.mkdir()
    (root / "country").write_text("us\nfr\nde\n", encoding="utf-8")
    (root / "skills").write_text("python\nscala\n", encoding="utf-8")
    (root / "bag_sparse").write_text("n1,t1\nn2,t2\n", encoding="utf-8")
    (root / "bag_dense").write_text("n1,t1\nn2,t2\n", encoding="utf-8")
    return root


@pytest.fixture
def schema():
    return {
        "uid": "long",
        "country": "string",
        "skills": "array<string>",
        "bag_sparse": "array<ntv>",
        "bag_dense": "array<ntv>",
    }


def _config(**flags) -> ConversionConfig:
    return ConversionConfig(
        output_tensors={
            "country": OutputTensorInfo(DataType.LONG),
            "skills": OutputTensorInfo(DataType.INT),
            "bag_sparse": OutputTensorInfo(DataType.FLOAT, is_sparse=True),
            "bag_dense": OutputTensorInfo(DataType.FLOAT),
        },
        **flags,
    )


def test_conversion_job_converts_every_column_shape(feature_list, schema) -> None:
    job = FeatureIndicesConversion(_config(), FileVocabularyLoader(feature_list), schema=schema)
    record = {
        "uid": 7,
        "country": "xx",
        "skills": ["python", "cobol", "scala"],
        "bag_sparse": [("n1", "t1", 0.5), ("n3", "t3", None), ("n4", "t4", 2.0)],
        "bag_dense": [("n1", "t1", 0.5), ("n3", "t3", None)],
    }

    out = job.convert_record(record)

    # 未转换列在前、转换列按词表列顺序在后
    assert list(out)[0] == "uid"
    assert set(out) == set(record)
    assert out["uid"] == 7
    assert out["country"] == 3
    assert out["skills"] == [0, 2, 1]
    assert isinstance(out["bag_sparse"], SparseVector)
    assert out["bag_sparse"].indices == (0, 2)
    assert out["bag_sparse"].values == (0.5, 1.0)
    np.testing.assert_allclose(out["bag_dense"], [0.5, 0.0, 1.0])
    # 原记录不被修改
    assert record["country"] == "xx"


def test_conversion_job_discard_and_filter_flags(feature_list, schema) -> None:
    job = FeatureIndicesConversion(
        _config(discard_unknown_entries=True, enable_filter_zero=True),
        FileVocabularyLoader(feature_list),
        schema=schema,
    )
    out = job.convert_record(
        {
            "uid": 1,
            "country": None,
            "skills": ["cobol"],
            "bag_sparse": [("n2", "t2", 0.0), ("n9", "t9", 3.0)],
            "bag_dense": [],
        }
    )
    assert out["country"] == 2
    assert out["skills"] == [1]
    assert out["bag_sparse"].indices == ()
    np.testing.assert_allclose(out["bag_dense"], [0.0, 0.0])


def test_conversion_job_missing_column_values_are_null(feature_list, schema) -> None:
    job = FeatureIndicesConversion(_config(), FileVocabularyLoader(feature_list), schema=schema)
    out = job.convert_record({"uid": 2})
    assert out["country"] == 3
    assert out["skills"] == [2]
    assert out["bag_sparse"].indices == (2,)
    assert out["bag_sparse"].values == (0.0,)


def test_conversion_job_passthrough_logs_warning(caplog) -> None:
    loader = InMemoryVocabularyLoader({"title": ["engineer", "manager"], "tags": ["a"]})
    config = ConversionConfig(
        output_tensors={
            "title": OutputTensorInfo(DataType.FLOAT),
            "tags": OutputTensorInfo(DataType.LONG),
        }
    )
    job = FeatureIndicesConversion(config, loader, schema={"title": "string", "tags": "array<string>"})

    with caplog.at_level(logging.WARNING, logger="featidx"):
        out = job.convert_record({"title": "engineer", "tags": ["a", "b"]})

    assert out == {"title": "engineer", "tags": [0, 1]}
    assert job.converted_columns == ["tags"]
    assert "title" in caplog.text


def test_conversion_job_fails_fast_before_records(tmp_path, schema) -> None:
    job = FeatureIndicesConversion(_config(), FileVocabularyLoader(tmp_path / "missing"), schema=schema)
    with pytest.raises(VocabularyNotFound):
        job.run([{"uid": 1}])


def test_conversion_job_rejects_unsupported_and_unknown_columns() -> None:
    config = ConversionConfig(output_tensors={"age": OutputTensorInfo(DataType.LONG)})

    job = FeatureIndicesConversion(config, InMemoryVocabularyLoader({"age": ["1"]}), schema={"age": "int"})
    with pytest.raises(UnsupportedColumnType) as excinfo:
        job.prepare()
    assert excinfo.value.column == "age"

    missing = FeatureIndicesConversion(config, InMemoryVocabularyLoader({"age": ["1"]}), schema={})
    with pytest.raises(UnsupportedColumnType):
        missing.prepare()


def test_conversion_job_requires_output_info_for_vocabulary_columns() -> None:
    job = FeatureIndicesConversion(
        ConversionConfig(),
        InMemoryVocabularyLoader({"country": ["us"]}),
        schema={"country": "string"},
    )
    with pytest.raises(InvalidConfig):
        job.prepare()


def test_conversion_job_parallel_map_matches_sequential(feature_list, schema) -> None:
    job = FeatureIndicesConversion(_config(), FileVocabularyLoader(feature_list), schema=schema)
    records = [
        {"uid": i, "country": ["us", "fr", "zz", None][i % 4], "skills": ["scala"] * (i % 3)}
        for i in range(40)
    ]
    sequential = job.run(records)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = job.run(records, map_fn=pool.map)

    assert [r["country"] for r in parallel] == [r["country"] for r in sequential]
    assert [r["skills"] for r in parallel] == [r["skills"] for r in sequential]
    assert sequential[2]["country"] == 3
    assert sequential[0]["skills"] == [2]


def test_conversion_job_describe_reports_tensor_metadata(feature_list, schema) -> None:
    job = FeatureIndicesConversion(_config(), FileVocabularyLoader(feature_list), schema=schema)
    meta = job.describe()

    assert meta["country"]["type"] == "string_to_id"
    assert meta["country"]["vocabulary_size"] == 3
    assert meta["country"]["last_index"] == 3
    assert meta["bag_dense"]["num_unique_values"] == 3
    assert meta["bag_sparse"]["filter_zeros"] is False
    assert json.loads(job.describe_json()) == meta


def test_conversion_job_from_json_config(feature_list, schema) -> None:
    config = ConversionConfig.from_json(
        json.dumps(
            {
                "outputTensorInfo": [
                    {"name": "country", "dtype": "long"},
                    {"name": "skills", "dtype": "long"},
                    {"name": "bag_sparse", "dtype": "float", "isSparse": True},
                    {"name": "bag_dense", "dtype": "float"},
                ],
                "discardUnknownEntries": True,
                "featureListPath": str(feature_list),
            }
        )
    )
    job = FeatureIndicesConversion(config, FileVocabularyLoader(config.feature_list_path), schema=schema)
    (out,) = job.run([{"uid": 9, "country": "de", "skills": ["x"]}])
    assert out["country"] == 2
    assert out["skills"] == [1]
