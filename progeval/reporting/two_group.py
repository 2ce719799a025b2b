"""
progeval.reporting.two_group
============================

Two-group reporter that lays out analysis results as Polars tables and
draws the group-means bar chart.

Rendering the tables into a document is left to the caller; this module
only shapes the numbers.

Examples
--------
>>> from progeval.stats.schemes.two_group import chi_squared_test
>>> from progeval.reporting.two_group import TwoGroupReporter
>>> rep = TwoGroupReporter(associations=[chi_squared_test([[58, 6], [48, 16]])])
>>> rep.tests_table().height
1
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

import matplotlib.pyplot as plt
import polars as pl

from progeval.core.results import AssociationResult, GroupSummary, MeanDifferenceResult
from progeval.stats.schemes.two_group.summarize import summary_frame

if TYPE_CHECKING:
    from progeval.runtime.study_template import StudyReport


_TESTS_SCHEMA = {
    "kind": pl.Utf8,
    "variables": pl.Utf8,
    "method": pl.Utf8,
    "statistic": pl.Float64,
    "df": pl.Float64,
    "p_value": pl.Float64,
    "effect_measure": pl.Utf8,
    "effect_size": pl.Float64,
    "band": pl.Utf8,
}


@dataclass
class TwoGroupReporter:
    """Tabular and graphical view of one study's results."""

    summaries: Optional[Dict[str, GroupSummary]] = None
    mean_tests: Sequence[MeanDifferenceResult] = field(default_factory=tuple)
    associations: Sequence[AssociationResult] = field(default_factory=tuple)

    @classmethod
    def from_report(cls, report: "StudyReport") -> "TwoGroupReporter":
        """Create a reporter from a `TwoGroupStudy` report."""
        return cls(
            summaries=report.summaries,
            mean_tests=tuple(t for t in (report.pretest, report.posttest) if t is not None)
            + tuple(
                r for r in report.additional_results.values()
                if isinstance(r, MeanDifferenceResult)
            ),
            associations=tuple(a for a in (report.followup,) if a is not None),
        )

    def summary_table(self) -> pl.DataFrame:
        """One row per (group, column): count, mean, std, min, max."""
        return summary_frame(self.summaries or {})

    def tests_table(self) -> pl.DataFrame:
        """One row per significance test with its effect size."""
        rows: List[Dict[str, Any]] = []
        for res in self.mean_tests:
            rows.append(
                {
                    "kind": "mean_difference",
                    "variables": f"{res.outcome} by {res.groups[0]} - {res.groups[1]}",
                    "method": res.test.method,
                    "statistic": res.test.statistic,
                    "df": float(res.test.degrees_of_freedom),
                    "p_value": res.test.p_value,
                    "effect_measure": res.effect.measure,
                    "effect_size": res.effect.value,
                    "band": res.effect.band,
                }
            )
        for res in self.associations:
            rows.append(
                {
                    "kind": "association",
                    "variables": f"{res.table.row_variable} x {res.table.column_variable}",
                    "method": res.test.method,
                    "statistic": res.test.statistic,
                    "df": float(res.test.degrees_of_freedom),
                    "p_value": res.test.p_value,
                    "effect_measure": res.effect.measure,
                    "effect_size": res.effect.value,
                    "band": res.effect.band,
                }
            )
        return pl.DataFrame(rows, schema=_TESTS_SCHEMA)

    @staticmethod
    def crosstab_table(result: AssociationResult, proportions: bool = False) -> pl.DataFrame:
        """
        Contingency table as a frame: one row per row category.

        With `proportions=True` cells are shares of their row total (e.g. the
        share of "Yes" follow-ups within each group).
        """
        tbl = result.table
        cells = tbl.proportions("row") if proportions else tbl.counts
        data: Dict[str, Any] = {tbl.row_variable: list(tbl.row_labels)}
        for j, label in enumerate(tbl.column_labels):
            data[label] = [row[j] for row in cells]
        return pl.DataFrame(data)

    def plot_group_means(
        self, columns: Optional[Sequence[str]] = None, show: bool = True
    ) -> Any:
        """
        Grouped bar chart of group means (one cluster per column).

        Returns the matplotlib Figure, or None when there is nothing to plot.
        """
        if not self.summaries:
            print("(no summaries)")
            return None
        groups = list(self.summaries)
        first = self.summaries[groups[0]]
        cols = list(columns) if columns is not None else list(first.columns)

        width = 0.8 / max(len(groups), 1)
        fig, ax = plt.subplots(figsize=(6.5, 4.2))
        for i, label in enumerate(groups):
            means = [self.summaries[label].mean(c) for c in cols]
            xs = [k + (i - (len(groups) - 1) / 2.0) * width for k in range(len(cols))]
            bars = ax.bar(xs, means, width=width, label=label)
            ax.bar_label(bars, fmt="%.1f", fontsize=8)
        ax.set_xticks(list(range(len(cols))))
        ax.set_xticklabels(cols)
        ax.set_ylabel("Mean")
        ax.set_title("Group means")
        ax.legend()
        fig.tight_layout()
        if show:
            plt.show()
        return fig
