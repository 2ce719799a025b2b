"""
progeval.stats.schemes.two_group.mean_difference
================================================

Two-sample comparison of a numeric outcome between two groups.

`compare_means` runs a two-sample t-test (Welch's by default, Student's
pooled-variance test on request) and reports Cohen's d with its
interpretation band and a confidence interval for the mean difference.

Sign convention
---------------
Groups are taken in first-seen order unless `group_order` is given. Every
signed quantity is **first minus second**:

    mean_difference = mean(first) - mean(second)
    d = mean_difference / pooled_sd
    pooled_sd = sqrt(((n1 - 1) s1^2 + (n2 - 1) s2^2) / (n1 + n2 - 2))

Swapping the order negates t, d and the interval, and leaves p unchanged.

Examples
--------
>>> from progeval.core.dataset import Dataset
>>> from progeval.stats.schemes.two_group.mean_difference import compare_means
>>> ds = Dataset.from_dict({
...     "group": ["Program"] * 3 + ["Control"] * 3,
...     "posttest": [2.0, 4.0, 6.0, 1.0, 3.0, 5.0],
... })
>>> res = compare_means(ds, "group", "posttest")
>>> res.groups, res.mean_difference, res.effect.value
(('Program', 'Control'), 1.0, 0.5)
"""

from __future__ import annotations
import logging
import math
from typing import Optional, Sequence

from scipy.stats import t as t_dist, ttest_ind

from progeval.core.config import COHEN_D, BandsLike, get_bands
from progeval.core.dataset import Dataset
from progeval.core.errors import GroupCountError, InsufficientDataError, OutOfRangeParameter
from progeval.core.results import EffectSize, MeanDifferenceResult, TestResult
from progeval.stats.common.effect_size import (
    cohen_d,
    pooled_sd,
    sample_mean,
    sample_variance,
    welch_df,
)

logger = logging.getLogger(__name__)


def _resolve_groups(
    dataset: Dataset, group_column: str, group_order: Optional[Sequence[str]]
) -> tuple[str, str]:
    labels = dataset.group_labels(group_column)
    if len(labels) != 2:
        raise GroupCountError(
            f"Column {group_column!r} must hold exactly two groups, found {len(labels)}: "
            f"{list(labels)}"
        )
    if group_order is None:
        return labels[0], labels[1]
    order = tuple(str(g) for g in group_order)
    if len(order) != 2 or set(order) != set(labels):
        raise GroupCountError(
            f"group_order {list(order)} must name the two groups {list(labels)}"
        )
    return order[0], order[1]


def compare_means(
    dataset: Dataset,
    group_column: str,
    outcome_column: str,
    group_order: Optional[Sequence[str]] = None,
    equal_var: bool = False,
    confidence_level: float = 0.95,
    bands: BandsLike = COHEN_D,
) -> MeanDifferenceResult:
    """
    Compare the mean of `outcome_column` between the two groups.

    Args:
        dataset: Dataset of subject records
        group_column: Column with exactly two distinct group labels
        outcome_column: Numeric outcome (missing values are excluded)
        group_order: Optional (first, second) labels fixing the sign
        equal_var: Use Student's pooled t-test instead of Welch's
        confidence_level: Coverage of the interval for the mean difference
        bands: Interpretation table (or preset name) for Cohen's d

    Returns:
        MeanDifferenceResult with test, effect size and interval

    Raises:
        MissingColumnError: If a column is absent
        ColumnTypeError: If the outcome is not numeric
        GroupCountError: If there are not exactly two groups
        InsufficientDataError: If a group has fewer than 2 values, or both
            groups are constant
    """
    if not (0.0 < confidence_level < 1.0):
        raise OutOfRangeParameter(
            f"confidence_level must be in (0, 1), got {confidence_level}"
        )
    table = get_bands(bands)
    dataset.require_columns(group_column, outcome_column)
    dataset.require_numeric(outcome_column)
    first, second = _resolve_groups(dataset, group_column, group_order)

    x1 = dataset.numeric_values(outcome_column, group_column=group_column, label=first)
    x2 = dataset.numeric_values(outcome_column, group_column=group_column, label=second)
    n1, n2 = len(x1), len(x2)
    for label, n in ((first, n1), (second, n2)):
        if n < 2:
            raise InsufficientDataError(
                f"Group {label!r} has {n} non-missing {outcome_column!r} value(s); "
                "at least 2 are required"
            )

    m1, m2 = sample_mean(x1), sample_mean(x2)
    v1, v2 = sample_variance(x1), sample_variance(x2)
    if v1 == 0.0 and v2 == 0.0:
        raise InsufficientDataError(
            f"Both groups have zero variance in {outcome_column!r}; "
            "the standardized difference is undefined"
        )

    statistic, p_value = ttest_ind(x1, x2, equal_var=equal_var)
    sp = pooled_sd(v1, v2, n1, n2)
    if equal_var:
        dof = float(n1 + n2 - 2)
        se = sp * math.sqrt(1.0 / n1 + 1.0 / n2)
        method = "student"
    else:
        dof = welch_df(v1, v2, n1, n2)
        se = math.sqrt(v1 / n1 + v2 / n2)
        method = "welch"

    diff = m1 - m2
    margin = float(t_dist.ppf(0.5 + confidence_level / 2.0, dof)) * se
    d = cohen_d(x1, x2)

    result = MeanDifferenceResult(
        outcome=outcome_column,
        groups=(first, second),
        means=(m1, m2),
        counts=(n1, n2),
        mean_difference=diff,
        confidence_interval=(diff - margin, diff + margin),
        confidence_level=confidence_level,
        test=TestResult(
            statistic=float(statistic),
            degrees_of_freedom=dof,
            p_value=float(p_value),
            method=method,
        ),
        effect=EffectSize(value=d, band=table.classify(d), measure="cohen_d"),
    )
    logger.debug(
        "compare_means(%s): %s-%s t=%.4f df=%.2f p=%.4g d=%.4f",
        outcome_column, first, second, result.test.statistic, dof, result.test.p_value, d,
    )
    return result
