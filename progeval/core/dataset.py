"""
progeval.core.dataset
=====================

A read-only, Polars-backed table of subject records.

Each row is one subject; each column a named field (group label, numeric
scores, categorical outcomes). The wrapped frame is never mutated: every
method is a query and `frame` hands out a clone.

Ordering
--------
Group labels and category levels are reported in **first-seen order**, i.e.
the order in which they first appear when the rows are read top to bottom.
All components rely on this rule, which makes results deterministic for a
given file.

Missing values
--------------
Nulls (and NaNs in float columns) are excluded from numeric queries, never
imputed. Rows whose group label is missing are excluded from group queries.

Examples
--------
>>> from progeval.core.dataset import Dataset
>>> ds = Dataset.from_records([
...     {"group": "Program", "posttest": 70.0},
...     {"group": "Control", "posttest": 58.0},
...     {"group": "Program", "posttest": None},
... ])
>>> ds.group_labels("group")
('Program', 'Control')
>>> ds.numeric_values("posttest", group_column="group", label="Program")
[70.0]
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import polars as pl

from progeval.core.errors import ColumnTypeError, MissingColumnError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable collection of subject records backed by a `pl.DataFrame`."""

    _frame: pl.DataFrame

    # ---- constructors ----

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Dataset":
        return cls(pl.from_dicts(list(records)))

    @classmethod
    def from_dict(cls, columns: Mapping[str, Sequence[Any]]) -> "Dataset":
        return cls(pl.DataFrame(dict(columns)))

    @classmethod
    def from_pandas(cls, df: Any) -> "Dataset":
        """Wrap a pandas DataFrame (e.g. read from a spreadsheet export)."""
        return cls(pl.from_pandas(df))

    # ---- accessors ----

    @property
    def frame(self) -> pl.DataFrame:
        return self._frame.clone()

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(self._frame.columns)

    @property
    def height(self) -> int:
        return self._frame.height

    def __len__(self) -> int:
        return self._frame.height

    def is_empty(self) -> bool:
        return self._frame.height == 0

    def to_pandas(self) -> Any:
        return self._frame.to_pandas()

    # ---- schema checks ----

    def require_columns(self, *names: str) -> None:
        """Raise `MissingColumnError` naming every absent column."""
        missing = [n for n in names if n not in self._frame.columns]
        if missing:
            raise MissingColumnError(missing, self._frame.columns)

    def require_numeric(self, name: str) -> None:
        """Raise `ColumnTypeError` unless the column is of a numeric dtype."""
        self.require_columns(name)
        dtype = self._frame.schema[name]
        if not dtype.is_numeric():
            raise ColumnTypeError(f"Column {name!r} must be numeric, got {dtype}")

    # ---- queries ----

    def _group_key(self, group_column: str) -> pl.Expr:
        return pl.col(group_column).cast(pl.Utf8)

    def group_labels(self, group_column: str) -> Tuple[str, ...]:
        """Distinct non-missing group labels in first-seen order."""
        self.require_columns(group_column)
        labels = self._frame.get_column(group_column).cast(pl.Utf8)
        n_missing = labels.null_count()
        if n_missing:
            logger.warning(
                "Excluding %d record(s) with a missing %r label", n_missing, group_column
            )
        return tuple(labels.drop_nulls().unique(maintain_order=True).to_list())

    def group_sizes(self, group_column: str) -> Dict[str, int]:
        """Number of records per group label (first-seen order)."""
        labels = self.group_labels(group_column)
        counts = (
            self._frame.select(self._group_key(group_column).alias("_g"))
            .drop_nulls()
            .group_by("_g", maintain_order=True)
            .agg(pl.len().alias("n"))
        )
        sizes = dict(zip(counts.get_column("_g").to_list(), counts.get_column("n").to_list()))
        return {label: int(sizes.get(label, 0)) for label in labels}

    def numeric_values(
        self,
        column: str,
        group_column: Optional[str] = None,
        label: Optional[str] = None,
    ) -> List[float]:
        """Non-missing values of a numeric column, optionally for one group."""
        self.require_numeric(column)
        frame = self._frame
        if group_column is not None:
            self.require_columns(group_column)
            frame = frame.filter(self._group_key(group_column) == str(label))
        series = frame.get_column(column)
        if series.dtype.is_float():
            series = series.fill_nan(None)
        return series.drop_nulls().cast(pl.Float64).to_list()

    def categorical_values(self, column: str) -> List[Optional[str]]:
        """The column rendered as strings; missing values stay `None`."""
        self.require_columns(column)
        return self._frame.get_column(column).cast(pl.Utf8).to_list()
