"""
DataFrame-wide frequencies: every column's value shares in one long table or one chart.

Columns are profiled (distinct values, missing counted), filtered by variance bounds and
capped to the `top` columns with the fewest distinct values. Values whose share is at or
below `min_ratio` are collapsed into a "(HF)" bucket per column.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from src.eda.formatting import vector_to_text
from src.eda.schema_audit import column_profile
from src.frequencies.grouping import check_table
from src.frequencies.truncation import validate_top
from src.logging_config import get_logger

logger = get_logger(__name__)

HF_LABEL = "(HF)"
NO_INFO_MESSAGE = "No relevant information to display regarding your data.frame!"


@dataclass
class ExclusionReport:
    """Columns left out of the scan, by reason."""
    too_unique: list[str] = field(default_factory=list)
    no_variance: list[str] = field(default_factory=list)
    over_top: list[str] = field(default_factory=list)

    @property
    def excluded(self) -> list[str]:
        return self.too_unique + self.no_variance + self.over_top

    def reason(self, column: str) -> str | None:
        for reason in ("too_unique", "no_variance", "over_top"):
            if column in getattr(self, reason):
                return reason
        return None

    def to_frame(self) -> pd.DataFrame:
        rows = [{"column": c, "reason": self.reason(c)} for c in self.excluded]
        return pd.DataFrame(rows, columns=["column", "reason"])


def scan_columns(
    df: pd.DataFrame,
    max_ratio: float = 0.9,
    novar: bool = True,
    top: int = 30,
    quiet: bool = False,
) -> tuple[list[str], ExclusionReport]:
    """
    Pick the columns worth a frequency breakdown.
    Returns (columns ordered by fewest distinct values first, ExclusionReport).
    List-valued columns are ignored without being reported.
    """
    check_table(df)
    top = validate_top(top)
    report = ExclusionReport()
    n_rows = len(df)
    if n_rows == 0:
        return [], report

    profile = column_profile(df)
    profile = profile[~profile["is_list"]].copy()
    profile["cardinality"] = profile["cardinality"].astype(int)
    profile = profile.sort_values("cardinality", kind="mergesort")
    cardinality = dict(zip(profile["column"], profile["cardinality"]))
    which = profile["column"].tolist()

    # Too much variance (ids, free text)
    report.too_unique = [c for c in which if cardinality[c] > n_rows * max_ratio]
    if report.too_unique:
        which = [c for c in which if c not in report.too_unique]
        if not quiet:
            logger.info(
                "freqs_df_too_unique",
                columns=report.too_unique,
                message="%d variables with more than %s variance excluded: %s" % (
                    len(report.too_unique), max_ratio, vector_to_text(report.too_unique)),
            )

    if novar:
        report.no_variance = [c for c in which if cardinality[c] == 1]
        if report.no_variance:
            which = [c for c in which if c not in report.no_variance]
            if not quiet:
                logger.info(
                    "freqs_df_no_variance",
                    columns=report.no_variance,
                    message="%d variables with no variance excluded: %s" % (
                        len(report.no_variance), vector_to_text(report.no_variance)),
                )

    if top is not None and len(which) > top:
        report.over_top = which[top:]
        which = which[:top]
        if not quiet:
            logger.info(
                "freqs_df_over_top",
                columns=report.over_top,
                message="Using the %d variables with less distinct categories. %d variables excluded: %s" % (
                    top, len(report.over_top), vector_to_text(report.over_top)),
            )
    return which, report


def _value_text(v):
    return v if pd.isna(v) else str(v)


def column_frequencies(
    df: pd.DataFrame,
    columns: list[str],
    min_ratio: float = 0.0,
) -> pd.DataFrame:
    """
    Long table of value counts: variable, value, n, p, pcum.
    p is the share of all rows; shares <= min_ratio * 100 are merged into "(HF)".
    Rows follow `columns` order, then n descending; pcum restarts per variable.
    """
    n_rows = len(df)
    parts = []
    for col in columns:
        vc = df[col].value_counts(dropna=False)
        vc = vc[vc > 0]
        parts.append(pd.DataFrame({
            "variable": col,
            "value": [_value_text(v) for v in vc.index],
            "n": vc.to_numpy(),
        }))
    out = pd.concat(parts, ignore_index=True)
    out["value"] = out["value"].astype(object)
    out["p"] = (100 * out["n"] / n_rows).round(2)
    out.loc[out["p"] <= min_ratio * 100, "value"] = HF_LABEL

    out = (
        out.groupby(["variable", "value"], dropna=False, sort=False)
        .agg(n=("n", "sum"), p=("p", "sum"))
        .reset_index()
    )
    out["p"] = out["p"].round(2)
    priority = {c: i for i, c in enumerate(columns)}
    out["_priority"] = out["variable"].map(priority)
    out = (
        out.sort_values(["_priority", "n"], ascending=[True, False], kind="mergesort")
        .drop(columns="_priority")
        .reset_index(drop=True)
    )
    out["pcum"] = out.groupby("variable", sort=False)["p"].cumsum().round(2)
    return out[["variable", "value", "n", "p", "pcum"]]


def freqs_df(
    df: pd.DataFrame,
    max_ratio: float = 0.9,
    min_ratio: float = 0.0,
    novar: bool = True,
    plot: bool = True,
    top: int = 30,
    quiet: bool = False,
    save: bool = False,
    subdir: str | None = None,
    theme=None,
):
    """
    Frequencies of every value of every column of df.
    Returns the long table (plot=False), a composition FreqsChart (plot or save),
    or None when every column was excluded. The ExclusionReport is attached to the
    table as attrs["exclusions"] and to the chart as `.exclusions`.
    """
    columns, report = scan_columns(df, max_ratio=max_ratio, novar=novar, top=top, quiet=quiet)
    if not columns:
        logger.warning("freqs_df_empty", excluded=report.excluded, message=NO_INFO_MESSAGE)
        return None

    out = column_frequencies(df, columns, min_ratio=min_ratio)
    out.attrs["exclusions"] = report
    if not plot and not save:
        return out

    from src.eda.charts import render_composition
    from src.eda.export import export_plot
    from src.eda.plot_style import PlotTheme

    theme = theme or PlotTheme()
    chart = render_composition(out, columns, theme=theme)
    chart.exclusions = report
    if save:
        chart.path = export_plot(chart.figure, "viz_freqs_df", subdir=subdir, dpi=theme.dpi)
    return chart
