"""
progeval.backends.polars.io
===========================

Pluggable dataset loading and table writing via **sources/sinks**.

- CSV file (delimited text, e.g. a spreadsheet export), Parquet file
- `load_dataset(source)` wraps what a source reads in a read-only `Dataset`

This module only moves frames between storage and `Dataset` objects.

Doctest (smoke):
>>> import polars as pl
>>> from progeval.backends.polars.io import CsvFileSink, CsvFileSource, load_dataset
>>> CsvFileSink("_tmp.csv").write(pl.DataFrame({"group": ["A"], "x": [1.0]}))  # doctest: +SKIP
>>> ds = load_dataset(CsvFileSource("_tmp.csv"))  # doctest: +SKIP
"""

from __future__ import annotations
import logging
import os
from typing import Optional, Protocol, Sequence

import polars as pl

from progeval.core.dataset import Dataset

logger = logging.getLogger(__name__)


class DatasetSource(Protocol):
    """A read-only source: storage -> DataFrame."""
    def read(self) -> pl.DataFrame: ...


class TableSink(Protocol):
    """A write-only sink: DataFrame -> storage."""
    def write(self, df: pl.DataFrame) -> None: ...


class CsvFileSource:
    def __init__(
        self,
        path: str,
        separator: str = ",",
        null_values: Optional[Sequence[str]] = ("", "NA"),
    ) -> None:
        self.path = path
        self.separator = separator
        self.null_values = list(null_values) if null_values is not None else None
    def read(self) -> pl.DataFrame:
        return pl.read_csv(self.path, separator=self.separator, null_values=self.null_values)
    def __repr__(self) -> str:
        return f"CsvFileSource({self.path!r})"


class ParquetFileSource:
    def __init__(self, path: str) -> None:
        self.path = path
    def read(self) -> pl.DataFrame:
        return pl.read_parquet(self.path)
    def __repr__(self) -> str:
        return f"ParquetFileSource({self.path!r})"


class CsvFileSink:
    def __init__(self, path: str) -> None:
        self.path = path
    def write(self, df: pl.DataFrame) -> None:
        df.write_csv(self.path)


class ParquetFileSink:
    def __init__(self, path: str) -> None:
        self.path = path
    def write(self, df: pl.DataFrame) -> None:
        dirpath = os.path.dirname(self.path)
        if dirpath:
            os.makedirs(dirpath, exist_ok=True)
        df.write_parquet(self.path)


def load_dataset(source: DatasetSource) -> Dataset:
    """Read a source once and return it as an immutable `Dataset`."""
    frame = source.read()
    logger.info("Loaded %d record(s) x %d column(s) from %r", frame.height, frame.width, source)
    return Dataset(frame)
