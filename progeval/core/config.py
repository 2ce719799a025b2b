"""
progeval.core.config
====================

Injectable configuration for the analysis components.

- `EffectSizeBands`: an ordered threshold table that turns an effect size into
  an interpretation label. Different literatures use different conventions,
  so the table is always passed in, never hard-coded in a tester.
- `AnalysisConfig`: significance level and test options shared by a study.
- `StudyDesign`: the dataset columns a two-group study reads.

Classification rule
-------------------
Each band carries a *reference value* (Cohen's 0.2/0.5/0.8 for d). A value is
assigned to the band whose reference it is closest to, i.e. the cut points
are the midpoints between consecutive references:

    |d| < 0.35 -> small, 0.35 <= |d| < 0.65 -> medium, |d| >= 0.65 -> large

Examples
--------
>>> from progeval.core.config import COHEN_D, COHEN_W, get_bands
>>> COHEN_D.classify(0.63)
'medium'
>>> COHEN_D.classify(-0.9)
'large'
>>> COHEN_W.cutpoints
(0.2, 0.4)
>>> get_bands("sawilowsky_d").labels[-1]
'huge'
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from progeval.core.errors import OutOfRangeParameter
from progeval.core.names import Band


@dataclass(frozen=True)
class EffectSizeBands:
    """
    Ordered (label, reference value) pairs for effect-size interpretation.

    Attributes:
        name: Identifier of the convention (e.g. "cohen_d")
        references: Pairs of (label, reference value), strictly increasing
    """

    name: str
    references: Tuple[Tuple[str, float], ...]

    def __post_init__(self) -> None:
        if not self.references:
            raise ValueError("At least one band is required")
        values = [float(v) for _, v in self.references]
        if any(v <= 0 for v in values):
            raise ValueError(f"Band references must be positive, got {values}")
        if any(a >= b for a, b in zip(values, values[1:])):
            raise ValueError(f"Band references must be strictly increasing, got {values}")
        # Normalize labels/values (Band enums -> plain strings)
        object.__setattr__(
            self,
            "references",
            tuple((str(getattr(lbl, "value", lbl)), float(v)) for lbl, v in self.references),
        )

    @classmethod
    def from_mapping(cls, name: str, mapping: Dict[str, float]) -> "EffectSizeBands":
        """Build a table from a {label: reference} mapping (sorted by value)."""
        return cls(name=name, references=tuple(sorted(mapping.items(), key=lambda kv: kv[1])))

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(lbl for lbl, _ in self.references)

    @property
    def cutpoints(self) -> Tuple[float, ...]:
        """Midpoints between consecutive reference values."""
        values = [v for _, v in self.references]
        return tuple(round((a + b) / 2.0, 12) for a, b in zip(values, values[1:]))

    def classify(self, value: float) -> str:
        """Return the label of the band nearest to |value|."""
        magnitude = abs(float(value))
        for label, cut in zip(self.labels, self.cutpoints):
            if magnitude < cut:
                return label
        return self.labels[-1]


COHEN_D = EffectSizeBands(
    name="cohen_d",
    references=((Band.SMALL, 0.2), (Band.MEDIUM, 0.5), (Band.LARGE, 0.8)),
)

SAWILOWSKY_D = EffectSizeBands(
    name="sawilowsky_d",
    references=(
        (Band.VERY_SMALL, 0.01),
        (Band.SMALL, 0.2),
        (Band.MEDIUM, 0.5),
        (Band.LARGE, 0.8),
        (Band.VERY_LARGE, 1.2),
        (Band.HUGE, 2.0),
    ),
)

COHEN_W = EffectSizeBands(
    name="cohen_w",
    references=((Band.SMALL, 0.1), (Band.MEDIUM, 0.3), (Band.LARGE, 0.5)),
)

GIGNAC_R = EffectSizeBands(
    name="gignac_r",
    references=((Band.SMALL, 0.1), (Band.MEDIUM, 0.2), (Band.LARGE, 0.3)),
)

_PRESETS: Dict[str, EffectSizeBands] = {
    b.name: b for b in (COHEN_D, SAWILOWSKY_D, COHEN_W, GIGNAC_R)
}

BandsLike = Union[EffectSizeBands, str]


def get_bands(bands: BandsLike) -> EffectSizeBands:
    """Resolve a preset name (or pass through a table)."""
    if isinstance(bands, EffectSizeBands):
        return bands
    try:
        return _PRESETS[str(bands).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown band convention: {bands!r} (known: {sorted(_PRESETS)})"
        ) from None


def _check_probability(name: str, value: float) -> None:
    if not (0.0 < float(value) < 1.0):
        raise OutOfRangeParameter(f"{name} must be in (0, 1), got {value}")


@dataclass(frozen=True, kw_only=True)
class AnalysisConfig:
    """
    Options shared by the testers of one study.

    Attributes:
        alpha: Significance level used for decisions and power planning
        equal_var: Use Student's pooled t-test instead of Welch's
        confidence_level: Coverage of the mean-difference interval
        yates_correction: Apply Yates' correction to 2x2 chi-squared tests
        min_expected_count: Expected-count threshold for the validity warning
        mean_bands: Interpretation table for Cohen's d
        association_bands: Interpretation table for phi / Cramer's V
    """

    alpha: float = 0.05
    equal_var: bool = False
    confidence_level: float = 0.95
    yates_correction: bool = True
    min_expected_count: float = 5.0
    mean_bands: EffectSizeBands = COHEN_D
    association_bands: EffectSizeBands = COHEN_W

    def __post_init__(self) -> None:
        _check_probability("alpha", self.alpha)
        _check_probability("confidence_level", self.confidence_level)
        if self.min_expected_count < 0:
            raise OutOfRangeParameter(
                f"min_expected_count must be non-negative, got {self.min_expected_count}"
            )
        object.__setattr__(self, "mean_bands", get_bands(self.mean_bands))
        object.__setattr__(self, "association_bands", get_bands(self.association_bands))

    def with_overrides(self, **kwargs: Any) -> "AnalysisConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


@dataclass(frozen=True, kw_only=True)
class StudyDesign:
    """
    Column layout of a two-group pre/post study with a categorical follow-up.

    Attributes:
        group_column: Group assignment (e.g. "Program" / "Control")
        pretest_column: Numeric score before the intervention
        posttest_column: Numeric score after the intervention
        followup_column: Binary categorical follow-up outcome
        group_order: Optional (first, second) order fixing the sign convention
        extra_outcomes: Further numeric outcomes compared like the posttest
    """

    group_column: str = "group"
    pretest_column: str = "pretest"
    posttest_column: str = "posttest"
    followup_column: str = "followup"
    group_order: Optional[Tuple[str, str]] = None
    extra_outcomes: Sequence[str] = field(default_factory=tuple)

    @property
    def score_columns(self) -> Tuple[str, ...]:
        return (self.pretest_column, self.posttest_column, *self.extra_outcomes)
