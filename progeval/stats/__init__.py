"""
Statistical computations for two-group program evaluations.

The package separates generic mathematics from study-specific components:

1. **Common** (progeval.stats.common):
   Scheme-agnostic formulas: noncentral-t power of the two-sample t-test,
   standardized effect sizes and contingency-table arithmetic. They work on
   plain numbers and sequences and know nothing about datasets.

2. **Schemes** (progeval.stats.schemes):
   Components that apply the common formulas to a `Dataset` for a specific
   design (two independent groups), validate inputs against the error
   taxonomy and return immutable result objects.

Example:
--------
>>> # Generic method
>>> from progeval.stats.common.power import t_test_ind_power
>>> round(t_test_ind_power(0.5, 64, 0.05), 3)
0.801

>>> # Scheme-specific application
>>> from progeval.stats.schemes.two_group.power_analysis import solve_power
>>> solve_power(effect_size=0.5, alpha=0.05, power=0.8).n
64
"""
