"""Tests for the file sources and sinks."""

import logging

import polars as pl
import pytest

from progeval.backends.polars import (
    CsvFileSink,
    CsvFileSource,
    ParquetFileSink,
    ParquetFileSource,
    load_dataset,
)
from progeval.stats.schemes.two_group import summarize_groups


def test_csv_source_reads_na_as_missing(tmp_path):
    path = tmp_path / "scores.csv"
    path.write_text("group,posttest\nProgram,70\nControl,NA\nProgram,\nControl,55\n")
    ds = load_dataset(CsvFileSource(str(path)))
    assert ds.height == 4
    assert ds.numeric_values("posttest") == [70.0, 55.0]


def test_csv_source_separator(tmp_path):
    path = tmp_path / "scores.tsv"
    path.write_text("group\tposttest\nA\t1.5\nB\t2.5\n")
    ds = load_dataset(CsvFileSource(str(path), separator="\t"))
    assert ds.columns == ("group", "posttest")


def test_csv_round_trip_preserves_analysis(tmp_path, study_frame, study_dataset):
    path = str(tmp_path / "study.csv")
    CsvFileSink(path).write(study_frame)
    loaded = load_dataset(CsvFileSource(path))
    before = summarize_groups(study_dataset, "group", "posttest")
    after = summarize_groups(loaded, "group", "posttest")
    assert after["Program"].mean("posttest") == pytest.approx(before["Program"].mean("posttest"))


def test_parquet_sink_creates_directories(tmp_path, study_frame):
    path = str(tmp_path / "out" / "nested" / "study.parquet")
    ParquetFileSink(path).write(study_frame)
    ds = load_dataset(ParquetFileSource(path))
    assert ds.height == 128
    assert ds.frame.equals(study_frame)


def test_load_logs_shape(tmp_path, caplog):
    path = str(tmp_path / "tiny.parquet")
    ParquetFileSink(path).write(pl.DataFrame({"group": ["A", "B"], "x": [1.0, 2.0]}))
    with caplog.at_level(logging.INFO, logger="progeval"):
        load_dataset(ParquetFileSource(path))
    assert "Loaded 2 record(s) x 2 column(s)" in caplog.text
    assert "ParquetFileSource" in caplog.text
