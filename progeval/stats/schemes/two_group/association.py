"""
progeval.stats.schemes.two_group.association
============================================

Association between two categorical variables (e.g. group x follow-up).

- `crosstab`: build a `ContingencyTable` from two dataset columns
- `chi_squared_test`: test of independence with phi / Cramer's V
- `test_association`: both steps in one call

Mathematical background
-----------------------
Expected counts under independence are E_ij = R_i C_j / N. The statistic is
Pearson's chi-squared, with Yates' continuity correction for 2x2 tables:

    chi2 = sum (|O - E| - 0.5)^2 / E        (2x2, corrected)

The effect size is computed from the *uncorrected* statistic, since the
continuity correction adjusts the p-value rather than the strength of the
association:

    phi = sqrt(chi2 / N)                     (2x2)
    V   = sqrt(chi2 / (N (min(r, c) - 1)))   (larger tables)

Validity
--------
When an expected count is below the threshold (5 by default) the result is
still returned, but a `LowExpectedCountWarning` is issued and the number of
offending cells is recorded on the result.

Examples
--------
>>> from progeval.stats.schemes.two_group.association import chi_squared_test
>>> res = chi_squared_test([[58, 6], [48, 16]])
>>> round(res.test.statistic, 2), res.test.degrees_of_freedom, round(res.test.p_value, 3)
(4.45, 1, 0.035)
>>> round(res.effect.value, 2), res.effect.measure
(0.21, 'phi')
"""

from __future__ import annotations
import logging
import warnings
from typing import Optional, Sequence, Union

import polars as pl

from progeval.core.config import COHEN_W, BandsLike, get_bands
from progeval.core.dataset import Dataset
from progeval.core.errors import DegenerateTableError, LowExpectedCountWarning
from progeval.core.results import AssociationResult, ContingencyTable, EffectSize, TestResult
from progeval.stats.common.contingency import chi2_independence
from progeval.stats.common.effect_size import cramers_v, phi_coefficient

logger = logging.getLogger(__name__)

TableLike = Union[ContingencyTable, Sequence[Sequence[int]]]


def as_table(
    counts: TableLike,
    row_labels: Optional[Sequence[str]] = None,
    column_labels: Optional[Sequence[str]] = None,
) -> ContingencyTable:
    """Wrap a raw count matrix in a `ContingencyTable` (pass tables through)."""
    if isinstance(counts, ContingencyTable):
        return counts
    raw = [list(row) for row in counts]
    widths = {len(r) for r in raw}
    if len(widths) > 1:
        raise ValueError(f"Rows of a contingency table must have equal length, got {sorted(widths)}")
    fractional = [c for r in raw for c in r if not float(c).is_integer()]
    if fractional:
        raise ValueError(f"Counts must be whole numbers, got {fractional}")
    rows = tuple(tuple(int(c) for c in row) for row in raw)
    if any(c < 0 for r in rows for c in r):
        raise ValueError("Counts cannot be negative")
    n_cols = widths.pop() if widths else 0
    return ContingencyTable(
        row_variable="rows",
        column_variable="columns",
        row_labels=tuple(row_labels) if row_labels else tuple(f"r{i}" for i in range(len(rows))),
        column_labels=(
            tuple(column_labels) if column_labels else tuple(f"c{j}" for j in range(n_cols))
        ),
        counts=rows,
    )


def _levels(observed: Sequence[str], given: Optional[Sequence[str]], column: str) -> tuple:
    if given is None:
        return tuple(observed)
    levels = tuple(str(v) for v in given)
    extra = [v for v in observed if v not in levels]
    if extra:
        logger.warning("Excluding %r values outside the given levels: %s", column, extra)
    return levels


def crosstab(
    dataset: Dataset,
    row_column: str,
    column_column: str,
    row_levels: Optional[Sequence[str]] = None,
    column_levels: Optional[Sequence[str]] = None,
) -> ContingencyTable:
    """
    Cross-tabulate two categorical columns.

    Rows with a missing value in either column are excluded. Levels appear in
    first-seen order unless given explicitly; explicit levels may include
    categories that were never observed (yielding zero totals).
    """
    dataset.require_columns(row_column, column_column)
    pairs = (
        dataset.frame.select(
            pl.col(row_column).cast(pl.Utf8).alias("_r"),
            pl.col(column_column).cast(pl.Utf8).alias("_c"),
        )
        .drop_nulls()
    )
    n_dropped = dataset.height - pairs.height
    if n_dropped:
        logger.warning(
            "Excluding %d record(s) with a missing %r or %r value",
            n_dropped, row_column, column_column,
        )

    rows = _levels(pairs.get_column("_r").unique(maintain_order=True).to_list(), row_levels, row_column)
    cols = _levels(
        pairs.get_column("_c").unique(maintain_order=True).to_list(), column_levels, column_column
    )
    cells = pairs.group_by(["_r", "_c"]).agg(pl.len().alias("n"))
    lookup = {
        (r, c): int(n)
        for r, c, n in zip(
            cells.get_column("_r").to_list(),
            cells.get_column("_c").to_list(),
            cells.get_column("n").to_list(),
        )
    }
    counts = tuple(tuple(lookup.get((r, c), 0) for c in cols) for r in rows)
    return ContingencyTable(
        row_variable=row_column,
        column_variable=column_column,
        row_labels=rows,
        column_labels=cols,
        counts=counts,
    )


def chi_squared_test(
    table: TableLike,
    correction: bool = True,
    min_expected: float = 5.0,
    bands: BandsLike = COHEN_W,
) -> AssociationResult:
    """
    Chi-squared test of independence with its effect size.

    Args:
        table: `ContingencyTable` or raw count matrix (rows x columns)
        correction: Apply Yates' continuity correction to 2x2 tables
        min_expected: Expected-count threshold for the validity warning
        bands: Interpretation table (or preset name) for phi / Cramer's V

    Returns:
        AssociationResult

    Raises:
        DegenerateTableError: If the table is smaller than 2x2 or has a zero
            row or column total
    """
    tbl = as_table(table)
    n_rows, n_cols = tbl.shape
    if n_rows < 2 or n_cols < 2:
        raise DegenerateTableError(
            f"A contingency table needs at least 2x2 cells, got {n_rows}x{n_cols}"
        )
    empty_rows = [lbl for lbl, t in zip(tbl.row_labels, tbl.row_totals) if t == 0]
    empty_cols = [lbl for lbl, t in zip(tbl.column_labels, tbl.column_totals) if t == 0]
    if empty_rows or empty_cols:
        raise DegenerateTableError(
            "Expected frequencies are undefined: zero total in "
            f"rows {empty_rows} / columns {empty_cols}"
        )

    chi2 = chi2_independence(tbl.counts, correction=correction)
    uncorrected, dof, expected = chi2.uncorrected, chi2.dof, chi2.expected
    n_total = tbl.total
    if (n_rows, n_cols) == (2, 2):
        effect_value, measure = phi_coefficient(uncorrected, n_total), "phi"
    else:
        effect_value, measure = cramers_v(uncorrected, n_total, n_rows, n_cols), "cramers_v"

    low_cells = sum(1 for row in expected for e in row if e < min_expected)
    if low_cells:
        message = (
            f"{low_cells} expected cell count(s) below {min_expected:g}; "
            "the chi-squared p-value may be unreliable"
        )
        logger.warning(message)
        warnings.warn(message, LowExpectedCountWarning, stacklevel=2)

    yates = correction and dof == 1
    table_bands = get_bands(bands)
    return AssociationResult(
        table=tbl,
        expected=expected,
        test=TestResult(
            statistic=chi2.statistic,
            degrees_of_freedom=dof,
            p_value=chi2.p_value,
            method="pearson_chi2_yates" if yates else "pearson_chi2",
        ),
        effect=EffectSize(
            value=effect_value, band=table_bands.classify(effect_value), measure=measure
        ),
        yates_correction=yates,
        low_expected_cells=low_cells,
    )


def test_association(
    dataset: Dataset,
    row_column: str,
    column_column: str,
    row_levels: Optional[Sequence[str]] = None,
    column_levels: Optional[Sequence[str]] = None,
    correction: bool = True,
    min_expected: float = 5.0,
    bands: BandsLike = COHEN_W,
) -> AssociationResult:
    """Cross-tabulate two dataset columns and test them for independence."""
    table = crosstab(dataset, row_column, column_column, row_levels, column_levels)
    return chi_squared_test(table, correction=correction, min_expected=min_expected, bands=bands)


test_association.__test__ = False  # type: ignore[attr-defined]
