"""
progeval.stats.common.effect_size
=================================

Standardized effect sizes and the moments they are built from.

Provides:
- sample moments (`sample_mean`, `sample_variance`)
- `pooled_sd` and `cohen_d` for two independent samples
- `welch_df`: Welch-Satterthwaite degrees of freedom
- `phi_coefficient` and `cramers_v` from a Pearson chi-squared statistic

These functions are scheme-agnostic and work on plain sequences.

Examples:
    >>> cohen_d([2.0, 4.0, 6.0], [1.0, 3.0, 5.0])
    0.5
    >>> round(phi_coefficient(5.4895, 128), 3)
    0.207
"""

from __future__ import annotations
import math
from typing import Sequence


def sample_mean(values: Sequence[float]) -> float:
    if not values:
        return float("nan")
    return math.fsum(values) / len(values)


def sample_variance(values: Sequence[float]) -> float:
    """Unbiased sample variance (ddof=1); `nan` below two values."""
    n = len(values)
    if n < 2:
        return float("nan")
    m = sample_mean(values)
    return math.fsum((v - m) ** 2 for v in values) / (n - 1)


def pooled_sd(var1: float, var2: float, n1: int, n2: int) -> float:
    """Pooled standard deviation weighted by each group's n - 1.

        s_p = sqrt(((n1 - 1) s1^2 + (n2 - 1) s2^2) / (n1 + n2 - 2))
    """
    dof = n1 + n2 - 2
    if dof <= 0:
        return float("nan")
    return math.sqrt(((n1 - 1) * var1 + (n2 - 1) * var2) / dof)


def cohen_d(first: Sequence[float], second: Sequence[float]) -> float:
    """Cohen's d = (mean(first) - mean(second)) / pooled SD.

    Note:
        The sign follows the argument order: a larger `first` mean yields a
        positive d.
    """
    n1, n2 = len(first), len(second)
    sp = pooled_sd(sample_variance(first), sample_variance(second), n1, n2)
    if not sp or math.isnan(sp):
        return float("nan")
    return (sample_mean(first) - sample_mean(second)) / sp


def welch_df(var1: float, var2: float, n1: int, n2: int) -> float:
    """Welch-Satterthwaite approximation of the degrees of freedom."""
    a, b = var1 / n1, var2 / n2
    denom = a * a / (n1 - 1) + b * b / (n2 - 1)
    if denom == 0:
        return float(n1 + n2 - 2)
    return (a + b) ** 2 / denom


def phi_coefficient(chi2: float, n_total: int) -> float:
    """phi = sqrt(chi2 / N) for a 2x2 table (unsigned)."""
    if n_total <= 0:
        return float("nan")
    return math.sqrt(max(chi2, 0.0) / n_total)


def cramers_v(chi2: float, n_total: int, n_rows: int, n_cols: int) -> float:
    """Cramer's V = sqrt(chi2 / (N * (min(r, c) - 1))); equals phi for 2x2."""
    k = min(n_rows, n_cols) - 1
    if n_total <= 0 or k <= 0:
        return float("nan")
    return math.sqrt(max(chi2, 0.0) / (n_total * k))
