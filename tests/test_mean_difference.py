"""Tests for the two-sample mean comparison."""

import math

import pytest
from scipy.stats import t as t_dist, ttest_ind

from progeval.core.config import COHEN_D, SAWILOWSKY_D
from progeval.core.dataset import Dataset
from progeval.core.errors import (
    ColumnTypeError,
    GroupCountError,
    InsufficientDataError,
    MissingColumnError,
    OutOfRangeParameter,
)
from progeval.stats.common.effect_size import cohen_d
from progeval.stats.schemes.two_group.mean_difference import compare_means


def test_posttest_program_effect(study_dataset):
    res = compare_means(study_dataset, "group", "posttest")
    assert res.groups == ("Program", "Control")
    assert res.means == pytest.approx((67.3, 59.4))
    assert res.counts == (64, 64)
    assert res.mean_difference == pytest.approx(7.9)
    assert res.effect.measure == "cohen_d"
    assert res.effect.value == pytest.approx(7.9 / 12.5)
    assert res.effect.band == "medium"
    assert res.test.method == "welch"
    assert res.test.p_value < 0.001
    assert res.test.is_significant(0.05)


def test_pretest_groups_are_equivalent(study_dataset):
    res = compare_means(study_dataset, "group", "pretest")
    assert res.mean_difference == pytest.approx(0.5)
    assert res.effect.value == pytest.approx(0.05)
    assert res.effect.band == "small"
    assert not res.test.is_significant(0.05)


def test_matches_scipy(study_dataset):
    x1 = study_dataset.numeric_values("posttest", group_column="group", label="Program")
    x2 = study_dataset.numeric_values("posttest", group_column="group", label="Control")
    for equal_var in (False, True):
        expected = ttest_ind(x1, x2, equal_var=equal_var)
        res = compare_means(study_dataset, "group", "posttest", equal_var=equal_var)
        assert res.test.statistic == pytest.approx(float(expected.statistic))
        assert res.test.p_value == pytest.approx(float(expected.pvalue))


def test_student_degrees_of_freedom():
    ds = Dataset.from_dict(
        {"group": ["A"] * 4 + ["B"] * 6, "x": [1.0, 2.0, 4.0, 7.0, 3.0, 3.5, 5.0, 8.0, 9.0, 6.0]}
    )
    student = compare_means(ds, "group", "x", equal_var=True)
    assert student.test.method == "student"
    assert student.test.degrees_of_freedom == 8.0
    welch = compare_means(ds, "group", "x")
    assert welch.test.degrees_of_freedom < 8.0


def test_welch_df_equal_groups(study_dataset):
    res = compare_means(study_dataset, "group", "posttest")
    assert res.test.degrees_of_freedom == pytest.approx(126.0)


def test_confidence_interval(study_dataset):
    res = compare_means(study_dataset, "group", "posttest", confidence_level=0.9)
    se = 12.5 * math.sqrt(2.0 / 64)
    margin = float(t_dist.ppf(0.95, 126)) * se
    lo, hi = res.confidence_interval
    assert lo == pytest.approx(7.9 - margin)
    assert hi == pytest.approx(7.9 + margin)
    assert res.confidence_level == 0.9


def test_swapping_order_negates_signed_values(study_dataset):
    a = compare_means(study_dataset, "group", "posttest", group_order=("Program", "Control"))
    b = compare_means(study_dataset, "group", "posttest", group_order=("Control", "Program"))
    assert b.groups == ("Control", "Program")
    assert b.test.statistic == pytest.approx(-a.test.statistic)
    assert b.effect.value == pytest.approx(-a.effect.value)
    assert b.test.p_value == pytest.approx(a.test.p_value)
    assert b.confidence_interval[0] == pytest.approx(-a.confidence_interval[1])
    assert b.effect.band == a.effect.band


def test_injected_bands(study_dataset):
    res = compare_means(study_dataset, "group", "posttest", bands="sawilowsky_d")
    assert res.effect.band == SAWILOWSKY_D.classify(res.effect.value)
    assert compare_means(study_dataset, "group", "posttest", bands=COHEN_D).effect.band == "medium"


def test_missing_values_are_excluded(small_dataset):
    res = compare_means(small_dataset, "group", "posttest", group_order=("Program", "Control"))
    assert res.counts == (2, 2)
    assert res.means == pytest.approx((67.0, 58.0))


def test_more_than_two_groups():
    ds = Dataset.from_dict({"group": ["A", "A", "B", "B", "C", "C"], "x": [1.0, 2, 3, 4, 5, 6]})
    with pytest.raises(GroupCountError):
        compare_means(ds, "group", "x")


def test_single_group():
    ds = Dataset.from_dict({"group": ["A"] * 4, "x": [1.0, 2, 3, 4]})
    with pytest.raises(GroupCountError):
        compare_means(ds, "group", "x")


def test_group_order_must_name_both_groups(study_dataset):
    with pytest.raises(GroupCountError):
        compare_means(study_dataset, "group", "posttest", group_order=("Program", "Waitlist"))


def test_group_with_one_value():
    ds = Dataset.from_dict({"group": ["A", "A", "A", "B"], "x": [1.0, 2.0, 3.0, 4.0]})
    with pytest.raises(InsufficientDataError, match="'B'"):
        compare_means(ds, "group", "x")


def test_both_groups_constant():
    ds = Dataset.from_dict({"group": ["A", "A", "B", "B"], "x": [3.0, 3.0, 3.0, 3.0]})
    with pytest.raises(InsufficientDataError):
        compare_means(ds, "group", "x")


def test_input_errors(study_dataset):
    with pytest.raises(MissingColumnError):
        compare_means(study_dataset, "group", "age")
    with pytest.raises(ColumnTypeError):
        compare_means(study_dataset, "group", "followup")
    with pytest.raises(OutOfRangeParameter):
        compare_means(study_dataset, "group", "posttest", confidence_level=1.0)


def test_idempotent(study_dataset):
    assert compare_means(study_dataset, "group", "posttest") == compare_means(
        study_dataset, "group", "posttest"
    )


def test_effect_matches_pooled_cohen_d(study_dataset):
    x1 = study_dataset.numeric_values("posttest", group_column="group", label="Program")
    x2 = study_dataset.numeric_values("posttest", group_column="group", label="Control")
    res = compare_means(study_dataset, "group", "posttest")
    assert res.effect.value == pytest.approx(cohen_d(x1, x2))
    assert res.effect.measure == "cohen_d"
