"""
progeval.stats.schemes.two_group.power_analysis
===============================================

Pre-study power analysis for comparing two independent group means.

Given exactly three of {effect size d, significance level alpha, power,
per-group sample size n}, `solve_power` computes the fourth for a two-sided
two-sample t-test. It needs no data and is meant to be run before data
collection.

Rounding
--------
When solving for n the continuous solution is rounded **up**: a study with
fewer subjects than required would be underpowered. The unrounded value and
the power actually delivered by the rounded n are kept on the result.

Examples
--------
>>> from progeval.stats.schemes.two_group.power_analysis import solve_power
>>> res = solve_power(effect_size=0.5, alpha=0.05, power=0.80)
>>> res.solved_for, res.n
('n', 64)
>>> round(solve_power(effect_size=0.5, n=64, alpha=0.05).power, 2)
0.8
>>> solve_power(effect_size=0.5, alpha=0.05)  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
progeval.core.errors.InvalidParameterSet: ...
"""

from __future__ import annotations
import logging
import math
from typing import Iterable, Optional, cast

import polars as pl

from progeval.core.errors import (
    DegenerateEffectSize,
    InvalidParameterSet,
    OutOfRangeParameter,
)
from progeval.core.results import PowerResult
from progeval.stats.common.power import (
    MAX_N,
    MIN_N,
    solve_alpha,
    solve_effect_size,
    solve_n,
    t_test_ind_power,
)

logger = logging.getLogger(__name__)


def _check_probability(name: str, value: float) -> float:
    value = float(value)
    if not (0.0 < value < 1.0):
        raise OutOfRangeParameter(f"{name} must be in (0, 1), got {value}")
    return value


def _solve_for_n(effect_size: float, alpha: float, power: float) -> PowerResult:
    if effect_size == 0:
        raise DegenerateEffectSize("effect_size = 0 requires an infinite sample size")
    if power <= alpha:
        raise OutOfRangeParameter(f"power ({power}) must exceed alpha ({alpha}) to solve for n")
    try:
        n_exact = solve_n(effect_size, alpha, power)
    except ArithmeticError as exc:
        raise DegenerateEffectSize(
            f"effect_size = {effect_size:g} is too small: more than {MAX_N:g} "
            "subjects per group would be required"
        ) from exc
    n_int = max(int(math.ceil(n_exact - 1e-9)), int(MIN_N))
    return PowerResult(
        solved_for="n",
        effect_size=float(effect_size),
        alpha=alpha,
        power=power,
        n=n_int,
        n_exact=n_exact,
        achieved_power=t_test_ind_power(effect_size, n_int, alpha),
    )


def _solve_for_effect_size(n: float, alpha: float, power: float) -> PowerResult:
    if power <= alpha:
        raise OutOfRangeParameter(
            f"power ({power}) must exceed alpha ({alpha}) to solve for effect_size"
        )
    try:
        d = solve_effect_size(float(n), alpha, power)
    except ArithmeticError as exc:
        raise OutOfRangeParameter(str(exc)) from exc
    return PowerResult(
        solved_for="effect_size",
        effect_size=d,
        alpha=alpha,
        power=power,
        n=n,
        achieved_power=power,
    )


def solve_power(
    effect_size: Optional[float] = None,
    n: Optional[float] = None,
    alpha: Optional[float] = None,
    power: Optional[float] = None,
) -> PowerResult:
    """
    Solve a two-sample t-test power analysis for its single unknown.

    Parameters
    ----------
    effect_size : float, optional
        Standardized mean difference d. The sign is a convention only; the
        magnitude drives the power.
    n : float, optional
        Subjects per group (at least 2).
    alpha : float, optional
        Two-sided significance level in (0, 1).
    power : float, optional
        Target probability of rejecting H0, in (0, 1).

    Exactly one parameter must be left as None.

    Returns
    -------
    PowerResult
        All four quantities, with the unknown filled in.

    Raises
    ------
    InvalidParameterSet
        If zero or more than one parameter is None.
    OutOfRangeParameter
        If alpha/power leave (0, 1), n < 2, or the target power is not
        attainable (e.g. power <= alpha).
    DegenerateEffectSize
        If n is requested for d = 0, or for a d so small that no feasible
        sample size reaches the target power.
    """
    given = {"effect_size": effect_size, "n": n, "alpha": alpha, "power": power}
    unknown = [name for name, value in given.items() if value is None]
    if len(unknown) != 1:
        raise InvalidParameterSet(
            "Exactly one of effect_size, n, alpha, power must be None; "
            f"unknown: {unknown or 'none'}"
        )
    solved_for = unknown[0]

    if alpha is not None:
        alpha = _check_probability("alpha", alpha)
    if power is not None:
        power = _check_probability("power", power)
    if n is not None and not (float(n) >= MIN_N):
        raise OutOfRangeParameter(f"n must be at least {int(MIN_N)} per group, got {n}")
    if effect_size is not None and not math.isfinite(float(effect_size)):
        raise OutOfRangeParameter(f"effect_size must be finite, got {effect_size}")

    if solved_for == "n":
        result = _solve_for_n(cast(float, effect_size), cast(float, alpha), cast(float, power))
    elif solved_for == "effect_size":
        result = _solve_for_effect_size(cast(float, n), cast(float, alpha), cast(float, power))
    elif solved_for == "alpha":
        d, n_given, target = cast(float, effect_size), cast(float, n), cast(float, power)
        try:
            a = solve_alpha(d, float(n_given), target)
        except ArithmeticError as exc:
            raise OutOfRangeParameter(str(exc)) from exc
        result = PowerResult(
            solved_for="alpha",
            effect_size=float(d),
            alpha=a,
            power=target,
            n=n_given,
            achieved_power=target,
        )
    else:
        d, n_given, a = cast(float, effect_size), cast(float, n), cast(float, alpha)
        p = t_test_ind_power(d, float(n_given), a)
        result = PowerResult(
            solved_for="power",
            effect_size=float(d),
            alpha=a,
            power=p,
            n=n_given,
            achieved_power=p,
        )

    logger.debug("solve_power(%s): %s", solved_for, result)
    return result


def power_curve(
    effect_size: float, sample_sizes: Iterable[float], alpha: float = 0.05
) -> pl.DataFrame:
    """Power of the design for each per-group sample size.

    Returns:
        DataFrame with columns `n` and `power`
    """
    rows = [solve_power(effect_size=effect_size, n=n, alpha=alpha) for n in sample_sizes]
    return pl.DataFrame(
        {
            "n": [float(r.n) for r in rows],
            "power": [r.power for r in rows],
        },
        schema={"n": pl.Float64, "power": pl.Float64},
    )


def sample_size_table(
    effect_sizes: Iterable[float] = (0.2, 0.5, 0.8),
    alpha: float = 0.05,
    power: float = 0.8,
) -> pl.DataFrame:
    """Required per-group n for several candidate effect sizes.

    Returns:
        DataFrame with columns `effect_size`, `n`, `n_exact`, `achieved_power`
    """
    rows = [solve_power(effect_size=d, alpha=alpha, power=power) for d in effect_sizes]
    return pl.DataFrame(
        {
            "effect_size": [r.effect_size for r in rows],
            "n": [int(r.n) for r in rows],
            "n_exact": [r.n_exact for r in rows],
            "achieved_power": [r.achieved_power for r in rows],
        },
        schema={
            "effect_size": pl.Float64,
            "n": pl.Int64,
            "n_exact": pl.Float64,
            "achieved_power": pl.Float64,
        },
    )
