"""
progeval.stats.common
=====================

Generic statistical formulas shared by the two-group components.

- `power`: power and sample-size solvers for the two-sample t-test
- `effect_size`: Cohen's d, pooled SD, Welch degrees of freedom, phi, Cramer's V
- `contingency`: expected counts and chi-squared statistics
"""
