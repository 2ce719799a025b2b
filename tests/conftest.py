"""Shared fixtures: a deterministic program-evaluation dataset.

The study dataset has 64 subjects per group, alternating Program/Control
rows, with scores built from evenly spaced normal quantiles rescaled to an
exact mean and SD:

    pretest:  Program 50.2, Control 49.7 (SD 10)
    posttest: Program 67.3, Control 59.4 (SD 12.5)  -> d = 7.9 / 12.5 = 0.632
    followup: Program 58/64 "Yes" (91%), Control 48/64 "Yes" (75%)
"""

import math

import matplotlib

matplotlib.use("Agg")

import polars as pl
import pytest
from scipy.stats import norm

from progeval.core.dataset import Dataset

N_PER_GROUP = 64


def standardized_pattern(n: int) -> list:
    """n values with sample mean exactly 0 and sample SD exactly 1."""
    raw = [float(norm.ppf((i + 0.5) / n)) for i in range(n)]
    m = math.fsum(raw) / n
    centered = [v - m for v in raw]
    sd = math.sqrt(math.fsum(v * v for v in centered) / (n - 1))
    return [v / sd for v in centered]


def scores(mean: float, sd: float, n: int = N_PER_GROUP, reverse: bool = False) -> list:
    z = standardized_pattern(n)
    if reverse:
        z = z[::-1]
    return [mean + sd * v for v in z]


@pytest.fixture
def study_frame() -> pl.DataFrame:
    groups = {
        "Program": {
            "pre": scores(50.2, 10.0, reverse=True),
            "post": scores(67.3, 12.5),
            "yes": 58,
        },
        "Control": {
            "pre": scores(49.7, 10.0),
            "post": scores(59.4, 12.5, reverse=True),
            "yes": 48,
        },
    }
    rows = []
    for i in range(N_PER_GROUP):
        for label in ("Program", "Control"):
            g = groups[label]
            rows.append(
                {
                    "subject": len(rows) + 1,
                    "group": label,
                    "pretest": g["pre"][i],
                    "posttest": g["post"][i],
                    "followup": "Yes" if i < g["yes"] else "No",
                }
            )
    return pl.from_dicts(rows)


@pytest.fixture
def study_dataset(study_frame) -> Dataset:
    return Dataset(study_frame)


@pytest.fixture
def small_dataset() -> Dataset:
    """Tiny dataset with missing values in several columns."""
    return Dataset.from_dict(
        {
            "group": ["Control", "Program", "Control", "Program", None, "Program"],
            "pretest": [40.0, 52.0, None, 48.0, 45.0, 50.0],
            "posttest": [55.0, 70.0, 61.0, float("nan"), 60.0, 64.0],
            "followup": ["No", "Yes", "Yes", None, "Yes", "Yes"],
        }
    )
