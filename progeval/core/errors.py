"""
progeval.core.errors
====================

Error taxonomy for the analysis components.

Every fatal error derives from `AnalysisError` (itself a `ValueError`), so a
caller can catch one family per component or all of them at once. A call that
raises never returns a partially computed result.

`LowExpectedCountWarning` is the only non-fatal condition: it is issued via
the `warnings` module alongside a valid chi-squared result.

Examples
--------
>>> from progeval.core.errors import InvalidParameterSet, AnalysisError
>>> issubclass(InvalidParameterSet, AnalysisError)
True
>>> issubclass(AnalysisError, ValueError)
True
"""

from __future__ import annotations


class AnalysisError(ValueError):
    """Base class for fatal analysis errors."""


# --- Power analysis ---


class PowerAnalysisError(AnalysisError):
    """Base class for power-analysis failures."""


class InvalidParameterSet(PowerAnalysisError):
    """Raised unless exactly one of the power-analysis quantities is unknown."""


class OutOfRangeParameter(PowerAnalysisError):
    """Raised when a probability leaves (0, 1) or a size is too small."""


class DegenerateEffectSize(PowerAnalysisError):
    """Raised when a zero effect size would require an infinite sample."""


# --- Descriptive summaries ---


class EmptyGroupError(AnalysisError):
    """Raised when a referenced group has no (non-missing) records."""


class MissingColumnError(AnalysisError):
    """Raised when a named column is absent from the dataset."""

    def __init__(self, missing, available=()):
        self.missing = tuple(missing)
        self.available = tuple(available)
        super().__init__(
            f"Missing column(s) {list(self.missing)}; "
            f"available: {list(self.available)}"
        )


class ColumnTypeError(AnalysisError):
    """Raised when a column exists but is not of the expected type family."""


# --- Mean comparison ---


class GroupCountError(AnalysisError):
    """Raised when a grouping column does not hold exactly two groups."""


class InsufficientDataError(AnalysisError):
    """Raised when a group is too small (or too constant) for a variance."""


# --- Association ---


class DegenerateTableError(AnalysisError):
    """Raised when a contingency table has an empty row or column."""


class LowExpectedCountWarning(UserWarning):
    """Issued when an expected cell count falls below the validity threshold."""
