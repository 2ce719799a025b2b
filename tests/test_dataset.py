"""Tests for the read-only Dataset wrapper."""

import pandas as pd
import polars as pl
import pytest

from progeval.core.dataset import Dataset
from progeval.core.errors import ColumnTypeError, MissingColumnError


def test_group_labels_first_seen_order(small_dataset):
    assert small_dataset.group_labels("group") == ("Control", "Program")


def test_missing_group_labels_are_excluded_and_logged(small_dataset, caplog):
    with caplog.at_level("WARNING", logger="progeval.core.dataset"):
        sizes = small_dataset.group_sizes("group")
    assert sizes == {"Control": 2, "Program": 3}
    assert "missing 'group' label" in caplog.text


def test_numeric_values_exclude_nulls_and_nans(small_dataset):
    assert small_dataset.numeric_values("posttest", "group", "Program") == [70.0, 64.0]
    assert small_dataset.numeric_values("pretest", "group", "Control") == [40.0]
    assert len(small_dataset.numeric_values("posttest")) == 5


def test_require_columns_lists_every_missing_column(small_dataset):
    with pytest.raises(MissingColumnError) as info:
        small_dataset.require_columns("group", "age", "school")
    assert info.value.missing == ("age", "school")
    assert "group" in info.value.available


def test_require_numeric_rejects_text(small_dataset):
    with pytest.raises(ColumnTypeError):
        small_dataset.require_numeric("followup")


def test_frame_is_a_copy(small_dataset):
    frame = small_dataset.frame
    frame = frame.with_columns(pl.lit(0.0).alias("posttest"))
    assert frame["posttest"].sum() == 0.0
    assert small_dataset.numeric_values("posttest", "group", "Control") == [55.0, 61.0]


def test_constructors_agree():
    records = [{"group": "A", "x": 1.0}, {"group": "B", "x": 2.0}]
    a = Dataset.from_records(records)
    b = Dataset.from_dict({"group": ["A", "B"], "x": [1.0, 2.0]})
    c = Dataset.from_pandas(pd.DataFrame(records))
    for ds in (a, b, c):
        assert ds.columns == ("group", "x")
        assert len(ds) == 2
        assert ds.group_labels("group") == ("A", "B")


def test_categorical_values_keep_missing(small_dataset):
    assert small_dataset.categorical_values("followup")[3] is None


def test_integer_group_labels_are_rendered_as_text():
    ds = Dataset.from_dict({"arm": [2, 1, 2], "y": [1, 2, 3]})
    assert ds.group_labels("arm") == ("2", "1")
    assert ds.numeric_values("y", "arm", "2") == [1.0, 3.0]
