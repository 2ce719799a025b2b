"""
progeval.stats.schemes.two_group.summarize
==========================================

Descriptive statistics per group.

`summarize_groups` reports count, mean, SD, min and max of one or more
numeric columns for every group label. Groups appear in first-seen order
(or in the order of an explicit `groups` argument). Missing values are
excluded column by column.

Examples
--------
>>> from progeval.core.dataset import Dataset
>>> from progeval.stats.schemes.two_group.summarize import summarize_groups
>>> ds = Dataset.from_dict({
...     "group": ["Program", "Control", "Program", "Control"],
...     "posttest": [70.0, 60.0, 66.0, 58.0],
... })
>>> out = summarize_groups(ds, "group", ["posttest"])
>>> list(out)
['Program', 'Control']
>>> out["Control"].mean("posttest")
59.0
"""

from __future__ import annotations
import logging
import math
from typing import Dict, Optional, Sequence, Union

import polars as pl

from progeval.core.dataset import Dataset
from progeval.core.errors import EmptyGroupError
from progeval.core.results import ColumnSummary, GroupSummary
from progeval.stats.common.effect_size import sample_mean, sample_variance

logger = logging.getLogger(__name__)


def _column_summary(values: Sequence[float]) -> ColumnSummary:
    var = sample_variance(values)
    return ColumnSummary(
        count=len(values),
        mean=sample_mean(values),
        std=math.sqrt(var) if not math.isnan(var) else float("nan"),
        minimum=min(values),
        maximum=max(values),
    )


def summarize_groups(
    dataset: Dataset,
    group_column: str,
    columns: Union[str, Sequence[str]],
    groups: Optional[Sequence[str]] = None,
) -> Dict[str, GroupSummary]:
    """
    Compute per-group descriptive statistics.

    Args:
        dataset: Non-empty dataset of subject records
        group_column: Column holding the group label
        columns: Numeric column name(s) to summarize
        groups: Labels to report, in this order; defaults to every observed
            label in first-seen order

    Returns:
        Mapping of group label to `GroupSummary`

    Raises:
        MissingColumnError: If any named column is absent
        ColumnTypeError: If an outcome column is not numeric
        EmptyGroupError: If the dataset is empty, a requested group has no
            records, or a group has no non-missing value in a column
    """
    cols = [columns] if isinstance(columns, str) else list(columns)
    if not cols:
        raise ValueError("At least one column to summarize is required")
    dataset.require_columns(group_column, *cols)
    if dataset.is_empty():
        raise EmptyGroupError("Cannot summarize an empty dataset")
    for col in cols:
        dataset.require_numeric(col)

    sizes = dataset.group_sizes(group_column)
    labels = list(groups) if groups is not None else list(sizes)
    if not labels:
        raise EmptyGroupError(f"No labelled records in column {group_column!r}")

    out: Dict[str, GroupSummary] = {}
    for label in labels:
        label = str(label)
        n_records = sizes.get(label, 0)
        if n_records == 0:
            raise EmptyGroupError(f"Group {label!r} has no records in {group_column!r}")
        stats: Dict[str, ColumnSummary] = {}
        for col in cols:
            values = dataset.numeric_values(col, group_column=group_column, label=label)
            if not values:
                raise EmptyGroupError(
                    f"Group {label!r} has no non-missing values in column {col!r}"
                )
            stats[col] = _column_summary(values)
        out[label] = GroupSummary(label=label, n_records=n_records, columns=stats)

    logger.debug("summarize_groups: %d group(s) x %d column(s)", len(out), len(cols))
    return out


def summary_frame(summaries: Dict[str, GroupSummary]) -> pl.DataFrame:
    """Flatten summaries to a long table: group, column, count, mean, std, min, max."""
    records = [
        {
            "group": label,
            "column": col,
            "count": s.count,
            "mean": s.mean,
            "std": s.std,
            "min": s.minimum,
            "max": s.maximum,
        }
        for label, gs in summaries.items()
        for col, s in gs.columns.items()
    ]
    schema = {
        "group": pl.Utf8,
        "column": pl.Utf8,
        "count": pl.Int64,
        "mean": pl.Float64,
        "std": pl.Float64,
        "min": pl.Float64,
        "max": pl.Float64,
    }
    return pl.DataFrame(records, schema=schema)
