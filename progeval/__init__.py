"""
progeval: a package for planning and analyzing two-group program evaluations.

A program evaluation compares subjects assigned to an intervention with
subjects in a control group. The questions asked of such a study are few and
recurring: how many subjects are needed, what do the groups look like, did
the outcome differ, and is a categorical follow-up associated with the group.
progeval answers each with a *pure function* over an immutable dataset.

Every component takes explicit inputs and returns a frozen result object or
raises a typed error from `progeval.core.errors`. No component keeps state or
depends on another's output, so the same call always yields the same answer.
Interpretation conventions (small/medium/large effect bands) are injected as
configuration rather than hard-coded.

Example
-------
>>> import progeval
>>> assert hasattr(progeval, "core")
>>> assert hasattr(progeval, "stats")
"""

import logging

from progeval import core, stats
from progeval.__version__ import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["core", "stats", "__version__"]
