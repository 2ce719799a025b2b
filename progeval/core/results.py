"""
progeval.core.results
=====================

Immutable value objects returned by the analysis components.

They have no identity or lifecycle beyond the call that created them: each
component builds one, hands it to the caller and never touches it again.

Examples
--------
>>> from progeval.core.results import TestResult, EffectSize
>>> t = TestResult(statistic=3.6, degrees_of_freedom=125.8, p_value=0.0004, method="welch")
>>> t.is_significant(0.05)
True
>>> EffectSize(value=-0.63, band="medium", measure="cohen_d").magnitude
0.63
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from progeval.core.names import MeasureTag, PowerUnknown


@dataclass(frozen=True)
class PowerResult:
    """Resolved two-sample power analysis.

    `n` is the per-group sample size. When it was the unknown it is rounded
    up (`n_exact` keeps the continuous solution) and `achieved_power` is the
    power delivered by that integer size.
    """

    solved_for: PowerUnknown
    effect_size: float
    alpha: float
    power: float
    n: float
    n_exact: Optional[float] = None
    achieved_power: Optional[float] = None


@dataclass(frozen=True)
class TestResult:
    """Outcome of a significance test."""

    __test__ = False  # keep pytest from collecting this class

    statistic: float
    degrees_of_freedom: float
    p_value: float
    method: str = ""

    def is_significant(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha


@dataclass(frozen=True)
class EffectSize:
    """Point estimate of an effect size with its interpretation band."""

    value: float
    band: str
    measure: MeasureTag

    @property
    def magnitude(self) -> float:
        return abs(self.value)


@dataclass(frozen=True)
class ColumnSummary:
    """Descriptive statistics of one numeric column within one group."""

    count: int
    mean: float
    std: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class GroupSummary:
    """Per-group statistics: one `ColumnSummary` per requested column."""

    label: str
    n_records: int
    columns: Dict[str, ColumnSummary] = field(default_factory=dict)

    def mean(self, column: str) -> float:
        return self.columns[column].mean


@dataclass(frozen=True)
class MeanDifferenceResult:
    """Two-sample comparison of an outcome between two groups.

    Sign convention: every difference is ``groups[0] - groups[1]``.
    """

    outcome: str
    groups: Tuple[str, str]
    means: Tuple[float, float]
    counts: Tuple[int, int]
    mean_difference: float
    confidence_interval: Tuple[float, float]
    confidence_level: float
    test: TestResult
    effect: EffectSize


@dataclass(frozen=True)
class ContingencyTable:
    """Cross-tabulated counts of two categorical variables."""

    row_variable: str
    column_variable: str
    row_labels: Tuple[str, ...]
    column_labels: Tuple[str, ...]
    counts: Tuple[Tuple[int, ...], ...]

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.row_labels), len(self.column_labels)

    @property
    def total(self) -> int:
        return sum(self.row_totals)

    @property
    def row_totals(self) -> Tuple[int, ...]:
        return tuple(sum(row) for row in self.counts)

    @property
    def column_totals(self) -> Tuple[int, ...]:
        return tuple(sum(col) for col in zip(*self.counts)) if self.counts else ()

    def proportions(self, axis: str = "row") -> Tuple[Tuple[float, ...], ...]:
        """Cell shares of the row totals (`axis="row"`) or column totals."""
        if axis == "row":
            return tuple(
                tuple(c / t if t else float("nan") for c in row)
                for row, t in zip(self.counts, self.row_totals)
            )
        if axis == "column":
            totals = self.column_totals
            return tuple(
                tuple(c / t if t else float("nan") for c, t in zip(row, totals))
                for row in self.counts
            )
        raise ValueError(f"axis must be 'row' or 'column', got {axis!r}")


@dataclass(frozen=True)
class AssociationResult:
    """Chi-squared test of independence with its effect size."""

    table: ContingencyTable
    expected: Tuple[Tuple[float, ...], ...]
    test: TestResult
    effect: EffectSize
    yates_correction: bool
    low_expected_cells: int = 0

    @property
    def has_low_expected_counts(self) -> bool:
        return self.low_expected_cells > 0
