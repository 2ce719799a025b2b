"""
progeval.runtime
================

Runtime environment for executing whole-study analyses.

Key Components
--------------
- `StudyTemplate`: Base class for all study definitions
- `StudyReport`: Standard result container for a study
- `TwoGroupStudy`: Pre/post two-group evaluation with a categorical follow-up

Examples
--------
>>> from progeval.runtime import TwoGroupStudy
>>> # study = TwoGroupStudy("tpp_eval")
>>> # study.setup(dataset)
>>> # report = study.analyze()
"""

from progeval.runtime.study_template import StudyReport, StudyTemplate, TwoGroupStudy

__all__ = ["StudyReport", "StudyTemplate", "TwoGroupStudy"]
