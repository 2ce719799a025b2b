"""Tests for cross-tabulation and the chi-squared test of independence."""

import logging
import math
import warnings

import pytest
from scipy.stats import chi2_contingency

from progeval.core.config import COHEN_W
from progeval.core.dataset import Dataset
from progeval.core.errors import DegenerateTableError, LowExpectedCountWarning, MissingColumnError
from progeval.stats.common.contingency import chi2_independence
from progeval.stats.schemes.two_group.association import (
    as_table,
    chi_squared_test,
    crosstab,
    test_association,
)

FOLLOWUP = [[58, 6], [48, 16]]


def test_known_followup_table():
    res = chi_squared_test(FOLLOWUP)
    assert res.test.statistic == pytest.approx(4.446, abs=1e-3)
    assert res.test.degrees_of_freedom == 1
    assert res.test.p_value == pytest.approx(0.035, abs=1e-3)
    assert res.test.method == "pearson_chi2_yates"
    assert res.yates_correction
    assert res.effect.measure == "phi"
    assert res.effect.value == pytest.approx(0.207, abs=1e-3)
    assert res.effect.band == COHEN_W.classify(res.effect.value)
    assert not res.has_low_expected_counts


def test_matches_scipy():
    for correction in (True, False):
        stat, p, dof, expected = chi2_contingency(FOLLOWUP, correction=correction)
        res = chi_squared_test(FOLLOWUP, correction=correction)
        assert res.test.statistic == pytest.approx(stat)
        assert res.test.p_value == pytest.approx(p)
        assert res.expected[0] == pytest.approx(tuple(expected[0]))


def test_uncorrected_statistic_comes_from_scipy():
    res = chi2_independence(FOLLOWUP, correction=True)
    assert res.statistic == pytest.approx(chi2_contingency(FOLLOWUP, correction=True)[0])
    assert res.uncorrected == pytest.approx(chi2_contingency(FOLLOWUP, correction=False)[0])
    assert res.uncorrected > res.statistic
    larger = chi2_independence([[10, 20], [20, 10], [15, 15]])
    assert larger.uncorrected == larger.statistic


def test_effect_size_ignores_continuity_correction():
    corrected = chi_squared_test(FOLLOWUP, correction=True)
    plain = chi_squared_test(FOLLOWUP, correction=False)
    assert plain.test.method == "pearson_chi2"
    assert plain.test.statistic > corrected.test.statistic
    assert plain.effect.value == pytest.approx(corrected.effect.value)
    assert plain.effect.value == pytest.approx(math.sqrt(plain.test.statistic / 128))


def test_dataset_crosstab_gives_same_result(study_dataset):
    res = test_association(study_dataset, "group", "followup")
    assert res.table.row_labels == ("Program", "Control")
    assert res.table.column_labels == ("Yes", "No")
    assert res.table.counts == ((58, 6), (48, 16))
    assert res.table.row_variable == "group"
    assert res == chi_squared_test(res.table)


def test_proportions(study_dataset):
    table = crosstab(study_dataset, "group", "followup")
    rows = table.proportions("row")
    assert rows[0][0] == pytest.approx(58 / 64)
    assert rows[1][0] == pytest.approx(0.75)
    cols = table.proportions("column")
    assert cols[0][0] + cols[1][0] == pytest.approx(1.0)
    with pytest.raises(ValueError):
        table.proportions("cell")


def test_crosstab_excludes_missing(small_dataset, caplog):
    with caplog.at_level(logging.WARNING, logger="progeval"):
        table = crosstab(small_dataset, "group", "followup")
    assert table.row_labels == ("Control", "Program")
    assert table.column_labels == ("No", "Yes")
    assert table.counts == ((1, 1), (0, 2))
    assert "Excluding 2 record(s)" in caplog.text


def test_crosstab_explicit_levels(study_dataset, caplog):
    with caplog.at_level(logging.WARNING, logger="progeval"):
        table = crosstab(study_dataset, "group", "followup", column_levels=["Yes"])
    assert table.counts == ((58,), (48,))
    assert "outside the given levels" in caplog.text

    ordered = crosstab(study_dataset, "group", "followup", row_levels=["Control", "Program"])
    assert ordered.counts == ((48, 16), (58, 6))


def test_unobserved_level_is_degenerate(study_dataset):
    with pytest.raises(DegenerateTableError):
        test_association(study_dataset, "group", "followup", column_levels=("Yes", "No", "Maybe"))


@pytest.mark.parametrize(
    "counts",
    [
        [[5, 5]],
        [[5], [7]],
        [[0, 0], [3, 4]],
        [[0, 3], [0, 4]],
    ],
)
def test_degenerate_tables(counts):
    with pytest.raises(DegenerateTableError):
        chi_squared_test(counts)


def test_single_category_column():
    ds = Dataset.from_dict({"group": ["A", "B", "A", "B"], "followup": ["Yes"] * 4})
    with pytest.raises(DegenerateTableError):
        test_association(ds, "group", "followup")


def test_low_expected_counts_warn():
    with pytest.warns(LowExpectedCountWarning):
        res = chi_squared_test([[2, 3], [3, 2]])
    assert res.low_expected_cells == 4
    assert res.has_low_expected_counts


def test_no_warning_when_expected_counts_are_large():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        chi_squared_test(FOLLOWUP)


def test_larger_table_uses_cramers_v():
    res = chi_squared_test([[10, 20], [20, 10], [15, 15]])
    assert res.test.degrees_of_freedom == 2
    assert res.test.method == "pearson_chi2"
    assert not res.yates_correction
    assert res.test.statistic == pytest.approx(100.0 / 15.0)
    assert res.effect.measure == "cramers_v"
    assert res.effect.value == pytest.approx(math.sqrt((100.0 / 15.0) / 90.0))


def test_as_table():
    tbl = as_table([[1, 2, 3], [4, 5, 6]])
    assert tbl.row_labels == ("r0", "r1")
    assert tbl.column_labels == ("c0", "c1", "c2")
    assert tbl.row_totals == (6, 15)
    assert tbl.column_totals == (5, 7, 9)
    assert as_table(tbl) is tbl
    with pytest.raises(ValueError):
        as_table([[1, 2], [3]])
    with pytest.raises(ValueError):
        as_table([[1, -2], [3, 4]])


def test_as_table_rejects_fractional_counts():
    with pytest.raises(ValueError, match="whole numbers"):
        as_table([[2.9, 3.9], [4.9, 5.9]])
    assert as_table([[2.0, 3.0], [4.0, 5.0]]).counts == ((2, 3), (4, 5))


def test_missing_column(study_dataset):
    with pytest.raises(MissingColumnError):
        test_association(study_dataset, "group", "retention")


def test_idempotent():
    assert chi_squared_test(FOLLOWUP) == chi_squared_test(FOLLOWUP)
