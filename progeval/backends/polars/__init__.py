"""Polars-based dataset sources and table sinks."""

from progeval.backends.polars.io import (
    CsvFileSink,
    CsvFileSource,
    DatasetSource,
    ParquetFileSink,
    ParquetFileSource,
    TableSink,
    load_dataset,
)

__all__ = [
    "CsvFileSink",
    "CsvFileSource",
    "DatasetSource",
    "ParquetFileSink",
    "ParquetFileSource",
    "TableSink",
    "load_dataset",
]
