"""
progeval.api.evaluation
=======================

Program-evaluation facade with business-oriented interfaces.

This module maps the questions an evaluator asks onto the statistical
components, using familiar vocabulary ("medium effect", "follow-up",
"outcomes") instead of technical parameters.

Examples
--------
>>> from progeval.api.evaluation import plan_sample_size, detectable_effect
>>>
>>> # How many participants per group for a medium effect?
>>> plan_sample_size("medium").n
64
>>>
>>> # What effect can 40 participants per group detect?
>>> round(detectable_effect(40).effect_size, 1)
0.6
"""

from __future__ import annotations
from typing import Dict, Literal, Optional, Sequence, Union

from progeval.core.config import AnalysisConfig, StudyDesign, get_bands
from progeval.core.dataset import Dataset
from progeval.core.results import (
    AssociationResult,
    GroupSummary,
    MeanDifferenceResult,
    PowerResult,
)
from progeval.runtime.study_template import StudyReport, TwoGroupStudy
from progeval.stats.schemes.two_group.association import test_association
from progeval.stats.schemes.two_group.mean_difference import compare_means
from progeval.stats.schemes.two_group.power_analysis import solve_power
from progeval.stats.schemes.two_group.summarize import summarize_groups

EffectLabel = Literal["small", "medium", "large"]

# Cohen's (1988) conventional values of d
_EFFECT_SIZES: Dict[str, float] = {"small": 0.2, "medium": 0.5, "large": 0.8}

# Interpretation frameworks for standardized mean differences
_INTERPRETATIONS: Dict[str, str] = {"cohen": "cohen_d", "sawilowsky": "sawilowsky_d"}


def plan_sample_size(
    expected_effect: Union[EffectLabel, float] = "medium",
    alpha: float = 0.05,
    power: float = 0.8,
) -> PowerResult:
    """
    Participants needed per group to detect the expected effect.

    Parameters
    ----------
    expected_effect : {"small", "medium", "large"} or float, default="medium"
        Expected program effect, as a conventional label or a Cohen's d:
        - "small": d = 0.2
        - "medium": d = 0.5
        - "large": d = 0.8
    alpha : float, default=0.05
        Type I error rate (significance level)
    power : float, default=0.8
        Desired probability of detecting the effect

    Returns
    -------
    PowerResult
        With `n` rounded up to whole participants per group
    """
    if isinstance(expected_effect, str):
        try:
            d = _EFFECT_SIZES[expected_effect]
        except KeyError:
            raise ValueError(
                f"Unknown effect label {expected_effect!r}; use one of {sorted(_EFFECT_SIZES)}"
            ) from None
    else:
        d = float(expected_effect)
    return solve_power(effect_size=d, alpha=alpha, power=power)


def detectable_effect(
    n_per_group: float, alpha: float = 0.05, power: float = 0.8
) -> PowerResult:
    """Smallest Cohen's d the given group size detects with `power`."""
    return solve_power(n=n_per_group, alpha=alpha, power=power)


def describe_groups(
    dataset: Dataset, group_column: str, columns: Union[str, Sequence[str]]
) -> Dict[str, GroupSummary]:
    """Count, mean and SD of each column for every group."""
    return summarize_groups(dataset, group_column, columns)


def compare_outcomes(
    dataset: Dataset,
    group_column: str,
    outcome_column: str,
    program_first: Optional[Sequence[str]] = None,
    interpretation: Literal["cohen", "sawilowsky"] = "cohen",
    assume_equal_variances: bool = False,
) -> MeanDifferenceResult:
    """
    Did the outcome differ between the groups, and by how much?

    Parameters
    ----------
    program_first : (str, str), optional
        Group order fixing the sign, e.g. ("Program", "Control") so that a
        positive d favours the program.
    interpretation : {"cohen", "sawilowsky"}, default="cohen"
        Benchmarks used to label the size of d.
    assume_equal_variances : bool, default=False
        Use Student's pooled t-test instead of Welch's.
    """
    try:
        bands = get_bands(_INTERPRETATIONS[interpretation])
    except KeyError:
        raise ValueError(
            f"Unknown interpretation {interpretation!r}; use one of {sorted(_INTERPRETATIONS)}"
        ) from None
    return compare_means(
        dataset,
        group_column,
        outcome_column,
        group_order=program_first,
        equal_var=assume_equal_variances,
        bands=bands,
    )


def test_follow_up(
    dataset: Dataset,
    group_column: str,
    followup_column: str,
    continuity_correction: bool = True,
) -> AssociationResult:
    """Is the categorical follow-up outcome associated with the group?"""
    return test_association(
        dataset, group_column, followup_column, correction=continuity_correction
    )


test_follow_up.__test__ = False  # type: ignore[attr-defined]


def evaluate_program(
    dataset: Dataset,
    design: Optional[StudyDesign] = None,
    config: Optional[AnalysisConfig] = None,
    study_id: str = "program_evaluation",
) -> StudyReport:
    """Run the full pre/post + follow-up evaluation on a dataset."""
    study = TwoGroupStudy(study_id, design=design, config=config)
    study.setup(dataset)
    return study.analyze()
