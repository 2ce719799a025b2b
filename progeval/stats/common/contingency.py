"""
progeval.stats.common.contingency
=================================

Chi-squared test of independence on a table of observed counts, via SciPy.

Yates' continuity correction subtracts 0.5 from every |O - E| (never below
zero). SciPy applies it only when df = 1, i.e. for 2x2 tables, which is the
only case in which it is meaningful. The uncorrected statistic is always
returned alongside, since effect sizes are computed from it.

Examples:
    >>> res = chi2_independence([[58, 6], [48, 16]])
    >>> round(res.statistic, 3), round(res.uncorrected, 3), res.dof
    (4.446, 5.489, 1)
    >>> res.expected
    ((53.0, 11.0), (53.0, 11.0))
"""

from __future__ import annotations
import logging
from typing import NamedTuple, Sequence, Tuple

from scipy.stats import chi2_contingency

logger = logging.getLogger(__name__)

Counts = Sequence[Sequence[int]]
Matrix = Tuple[Tuple[float, ...], ...]


class Chi2Independence(NamedTuple):
    statistic: float
    uncorrected: float
    dof: int
    p_value: float
    expected: Matrix


def chi2_independence(counts: Counts, correction: bool = True) -> Chi2Independence:
    """Chi-squared test of independence.

    Args:
        counts: Observed counts (all row and column totals positive)
        correction: Apply Yates' correction when df == 1

    Returns:
        Chi2Independence with the (possibly corrected) statistic, the
        uncorrected statistic, df, p-value and expected counts
    """
    table = [[int(c) for c in row] for row in counts]
    stat, p_value, dof, expected = chi2_contingency(table, correction=correction)
    if correction and dof == 1:
        uncorrected = chi2_contingency(table, correction=False)[0]
    else:
        uncorrected = stat
    logger.debug(
        "chi2_independence: shape=%dx%d chi2=%.6g (uncorrected %.6g) df=%d p=%.6g",
        len(table), len(table[0]), stat, uncorrected, dof, p_value,
    )
    return Chi2Independence(
        statistic=float(stat),
        uncorrected=float(uncorrected),
        dof=int(dof),
        p_value=float(p_value),
        expected=tuple(tuple(float(e) for e in row) for row in expected.tolist()),
    )
