"""
progeval.stats.common.power
===========================

Power of the two-sided, two independent-sample t-test and its inverses.

For n subjects per group and standardized effect size d the test statistic
follows a noncentral t distribution under the alternative:

    df = 2n - 2,   lambda = |d| * sqrt(n / 2),   t* = t_{1 - alpha/2, df}
    power = P(T'(df, lambda) > t*) + P(T'(df, lambda) < -t*)

Under the null (d = 0) the power equals alpha. Each inverse solves the
equation above for one quantity with Brent's method on a bracket that is
widened until it contains the root.

These functions do not validate their inputs beyond what the maths needs;
see `progeval.stats.schemes.two_group.power_analysis` for the checked API.

References:
    Cohen, J. (1988). Statistical Power Analysis for the Behavioral
    Sciences (2nd ed.). Lawrence Erlbaum.
"""

from __future__ import annotations
import logging
import math

from scipy.optimize import brentq
from scipy.stats import nct, t as t_dist

logger = logging.getLogger(__name__)

MIN_N = 2.0
MAX_N = 1e9
MAX_EFFECT = 1e3
_EPS = 1e-12


def t_test_ind_power(effect_size: float, n: float, alpha: float) -> float:
    """Power of the two-sided two-sample t-test with `n` subjects per group.

    Args:
        effect_size: Standardized mean difference (sign is ignored)
        n: Per-group sample size (may be fractional while solving)
        alpha: Two-sided significance level

    Returns:
        Probability of rejecting H0 when the true effect is `effect_size`

    Examples:
        >>> round(t_test_ind_power(0.0, 30, 0.05), 6)
        0.05
    """
    df = 2.0 * n - 2.0
    t_crit = float(t_dist.ppf(1.0 - alpha / 2.0, df))
    nc = abs(effect_size) * math.sqrt(n / 2.0)
    if nc == 0.0:
        return float(alpha)
    return float(nct.sf(t_crit, df, nc) + nct.cdf(-t_crit, df, nc))


def _expand_upper(f, upper: float, limit: float) -> float:
    """Double `upper` until f(upper) > 0; give up past `limit`."""
    while f(upper) <= 0.0:
        if upper >= limit:
            raise ArithmeticError(f"No root below {limit}")
        upper = min(upper * 2.0, limit)
    return upper


def solve_n(effect_size: float, alpha: float, power: float) -> float:
    """Continuous per-group sample size reaching `power`.

    Returns `MIN_N` when even the smallest design already has enough power.
    Callers round the result up.
    """

    def f(n: float) -> float:
        return t_test_ind_power(effect_size, n, alpha) - power

    if f(MIN_N) >= 0.0:
        return MIN_N
    upper = _expand_upper(f, 16.0, MAX_N)
    n = float(brentq(f, MIN_N, upper, xtol=1e-10))
    logger.debug("solve_n: d=%g alpha=%g power=%g -> n=%.6f", effect_size, alpha, power, n)
    return n


def solve_effect_size(n: float, alpha: float, power: float) -> float:
    """Smallest positive effect size detectable with `power`."""

    def f(d: float) -> float:
        return t_test_ind_power(d, n, alpha) - power

    upper = _expand_upper(f, 1.0, MAX_EFFECT)
    d = float(brentq(f, 0.0, upper, xtol=1e-12))
    logger.debug("solve_effect_size: n=%g alpha=%g power=%g -> d=%.6f", n, alpha, power, d)
    return d


def solve_alpha(effect_size: float, n: float, power: float) -> float:
    """Significance level at which the design reaches `power`.

    Raises:
        ArithmeticError: if no alpha in (0, 1) gives the requested power
    """

    def f(a: float) -> float:
        return t_test_ind_power(effect_size, n, a) - power

    lower, upper = _EPS, 1.0 - _EPS
    f_lower, f_upper = f(lower), f(upper)
    if f_lower > 0.0 or f_upper < 0.0:
        raise ArithmeticError(
            f"power={power} is not attainable for alpha in (0, 1) "
            f"(range [{f_lower + power:.6g}, {f_upper + power:.6g}])"
        )
    alpha = float(brentq(f, lower, upper, xtol=1e-14))
    logger.debug("solve_alpha: d=%g n=%g power=%g -> alpha=%.6g", effect_size, n, power, alpha)
    return alpha
