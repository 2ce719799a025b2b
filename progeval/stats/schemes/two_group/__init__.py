"""
Two independent groups: program vs. control.

This package applies the common formulas to a two-group study design.

**Components:**
- `power_analysis`: solve for one of {d, alpha, power, n} before data collection
- `summarize`: per-group count / mean / SD of numeric columns
- `mean_difference`: Welch or Student t-test with Cohen's d
- `association`: chi-squared test of independence with phi / Cramer's V

Every component is a pure function over an immutable `Dataset` (or plain
numbers) returning a frozen result object; none depends on another.

Example Usage
-------------
>>> from progeval.stats.schemes.two_group import solve_power, chi_squared_test
>>> solve_power(effect_size=0.8, alpha=0.05, power=0.8).n
26
>>> chi_squared_test([[30, 30], [30, 30]]).test.p_value
1.0
"""

from progeval.stats.schemes.two_group.association import (
    as_table,
    chi_squared_test,
    crosstab,
    test_association,
)
from progeval.stats.schemes.two_group.mean_difference import compare_means
from progeval.stats.schemes.two_group.power_analysis import (
    power_curve,
    sample_size_table,
    solve_power,
)
from progeval.stats.schemes.two_group.summarize import summarize_groups, summary_frame

__all__ = [
    "as_table",
    "chi_squared_test",
    "compare_means",
    "crosstab",
    "power_curve",
    "sample_size_table",
    "solve_power",
    "summarize_groups",
    "summary_frame",
    "test_association",
]
