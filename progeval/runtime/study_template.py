"""
progeval.runtime.study_template
===============================

Base classes and a concrete template for running a whole study analysis.

A template binds a study design (column names) and an `AnalysisConfig` to a
dataset, then runs the independent components in the order a report
presents them. The dataset is handed over explicitly in `setup`; nothing is
read from global state.

Examples
--------
>>> from progeval.core.dataset import Dataset
>>> from progeval.core.config import StudyDesign
>>> from progeval.runtime.study_template import TwoGroupStudy
>>>
>>> study = TwoGroupStudy("tpp_eval", StudyDesign(group_order=("Program", "Control")))
>>> study.plan(effect_size=0.5, power=0.8).n
64
>>> study.get_summary()["status"]
'not_setup'
"""

from __future__ import annotations
import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from progeval.core.config import AnalysisConfig, StudyDesign
from progeval.core.dataset import Dataset
from progeval.core.errors import LowExpectedCountWarning
from progeval.core.results import (
    AssociationResult,
    GroupSummary,
    MeanDifferenceResult,
    PowerResult,
)
from progeval.stats.schemes.two_group.association import test_association
from progeval.stats.schemes.two_group.mean_difference import compare_means
from progeval.stats.schemes.two_group.power_analysis import solve_power
from progeval.stats.schemes.two_group.summarize import summarize_groups

logger = logging.getLogger(__name__)


@dataclass
class StudyReport:
    """Results of one full two-group analysis."""

    study_id: str
    summaries: Dict[str, GroupSummary]
    pretest: Optional[MeanDifferenceResult] = None
    posttest: Optional[MeanDifferenceResult] = None
    followup: Optional[AssociationResult] = None

    # Non-fatal conditions raised while analyzing (e.g. low expected counts)
    warnings: List[str] = field(default_factory=list)
    additional_results: Dict[str, Any] = field(default_factory=dict)


class StudyTemplate(ABC):
    """
    Base class for portable study templates.

    Encapsulates the logic of one kind of study:
    - Design parameters and configuration
    - Dataset binding and validation
    - The analysis pipeline
    - Results packaging

    Subclasses implement `validate_dataset` and `run_analysis`.
    """

    def __init__(self, study_id: str, config: Optional[AnalysisConfig] = None):
        self.study_id = study_id
        self.config = config or AnalysisConfig()
        self.dataset: Optional[Dataset] = None
        self._is_setup = False
        self._analyses_run = 0

    @abstractmethod
    def validate_dataset(self, dataset: Dataset) -> None:
        """Raise if the dataset cannot support this study."""

    @abstractmethod
    def run_analysis(self, dataset: Dataset) -> StudyReport:
        """Run the analysis pipeline on a bound dataset."""

    def setup(self, dataset: Dataset) -> None:
        """Bind the template to a dataset."""
        self.validate_dataset(dataset)
        self.dataset = dataset
        self._is_setup = True
        logger.info("Study %r bound to %d record(s)", self.study_id, dataset.height)

    def analyze(self) -> StudyReport:
        """Run the analysis pipeline and return the report."""
        if not self._is_setup or self.dataset is None:
            raise RuntimeError("Template not setup. Call setup(dataset) first.")
        report = self.run_analysis(self.dataset)
        self._analyses_run += 1
        return report

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the template state."""
        if not self._is_setup or self.dataset is None:
            return {
                "study_id": self.study_id,
                "status": "not_setup",
                "analyses_run": self._analyses_run,
            }
        return {
            "study_id": self.study_id,
            "status": "ready",
            "analyses_run": self._analyses_run,
            "records": self.dataset.height,
            "alpha": self.config.alpha,
        }

    def reset(self) -> None:
        """Unbind the dataset (but keep configuration)."""
        self.dataset = None
        self._is_setup = False
        self._analyses_run = 0


class TwoGroupStudy(StudyTemplate):
    """
    Pre/post two-group evaluation with a categorical follow-up.

    The pipeline mirrors a typical evaluation report:
    1. Descriptive statistics of pre- and post-test scores per group
    2. Pretest comparison (baseline equivalence of the groups)
    3. Posttest comparison (program effect) with Cohen's d
    4. Group x follow-up association with phi
    """

    def __init__(
        self,
        study_id: str,
        design: Optional[StudyDesign] = None,
        config: Optional[AnalysisConfig] = None,
    ):
        super().__init__(study_id, config)
        self.design = design or StudyDesign()

    def plan(self, effect_size: float, power: float = 0.8) -> PowerResult:
        """Per-group sample size for the study alpha (no dataset needed)."""
        return solve_power(effect_size=effect_size, alpha=self.config.alpha, power=power)

    def validate_dataset(self, dataset: Dataset) -> None:
        d = self.design
        dataset.require_columns(d.group_column, d.followup_column, *d.score_columns)
        for col in d.score_columns:
            dataset.require_numeric(col)

    def run_analysis(self, dataset: Dataset) -> StudyReport:
        d, cfg = self.design, self.config
        summaries = summarize_groups(
            dataset, d.group_column, list(d.score_columns), groups=d.group_order
        )

        def compare(outcome: str) -> MeanDifferenceResult:
            return compare_means(
                dataset,
                d.group_column,
                outcome,
                group_order=d.group_order,
                equal_var=cfg.equal_var,
                confidence_level=cfg.confidence_level,
                bands=cfg.mean_bands,
            )

        pretest = compare(d.pretest_column)
        posttest = compare(d.posttest_column)
        extra = {col: compare(col) for col in d.extra_outcomes}

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", LowExpectedCountWarning)
            followup = test_association(
                dataset,
                d.group_column,
                d.followup_column,
                row_levels=d.group_order,
                correction=cfg.yates_correction,
                min_expected=cfg.min_expected_count,
                bands=cfg.association_bands,
            )
        notes = [str(w.message) for w in caught if issubclass(w.category, LowExpectedCountWarning)]

        logger.info(
            "Study %r: posttest p=%.4g d=%.3f; follow-up p=%.4g %s=%.3f",
            self.study_id,
            posttest.test.p_value,
            posttest.effect.value,
            followup.test.p_value,
            followup.effect.measure,
            followup.effect.value,
        )
        return StudyReport(
            study_id=self.study_id,
            summaries=summaries,
            pretest=pretest,
            posttest=posttest,
            followup=followup,
            warnings=notes,
            additional_results=extra,
        )
