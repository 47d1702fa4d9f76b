"""
Public entry points: freqs (group, count, rank, optionally plot) and freqs_plot
(multi-category composite view). freqs_df lives in scan.py.
"""
from __future__ import annotations

import pandas as pd

from src.eda.charts import FreqsChart, render_freqs, render_multi
from src.eda.export import export_plot
from src.eda.formatting import format_num, vector_to_text
from src.eda.layout import build_plot_spec, check_plot_keys, needs_multi_view
from src.eda.plot_style import PlotTheme
from src.frequencies.grouping import check_table, count_groups
from src.frequencies.ranking import rank_frequencies
from src.frequencies.scan import freqs_df
from src.frequencies.truncation import TAIL_ORDER, collapse_tail, truncate_top, validate_top
from src.logging_config import get_logger

logger = get_logger(__name__)

MIXED_TAIL_LABEL = " Mixed Tail"
EMPTY_PLOT_MESSAGE = "Nothing to plot once missing values are dropped"


def freqs(
    df: pd.DataFrame,
    *keys: str,
    weight: str | None = None,
    relative: bool = False,
    results: bool = True,
    variable_name: str | None = None,
    plot: bool = False,
    drop_na: bool = False,
    title: str | None = None,
    subtitle: str | None = None,
    top: int | None = 20,
    alphabetical: bool = False,
    save: bool = False,
    subdir: str | None = None,
    quiet: bool = False,
    theme: PlotTheme | None = None,
):
    """
    Frequencies of the combinations of `keys` (order matters), optionally weighted.

    Without plot/save: the full ranked table (keys, n, p, pcum, order) when `results`,
    else None. With plot or save: a FreqsChart of the `top` groups (None = all), faceted
    by the 2nd and 3rd keys; a 3rd key with more than 3 values switches to freqs_plot.
    None (with a warning) when drop_na leaves nothing to plot.
    No keys: DataFrame-wide scan via freqs_df.
    """
    check_table(df)
    keys = list(keys)
    if not keys:
        return freqs_df(df, plot=plot, save=save, subdir=subdir, quiet=quiet, theme=theme)

    groups = count_groups(df, keys, weight=weight)
    if alphabetical and not quiet:
        logger.info("freqs_sorting", message="Sorting variable(s) alphabetically")
    output = rank_frequencies(groups, keys, alphabetical=alphabetical, relative=relative)

    if not plot and not save:
        return output if results else None

    check_plot_keys(keys)
    theme = theme or PlotTheme()
    trunc = truncate_top(output, top=top, alphabetical=alphabetical)
    if trunc.truncated and not quiet:
        logger.info("freqs_top_sliced", top=top, groups=trunc.total_groups, message=trunc.message)

    plot_data = trunc.kept
    if drop_na:
        plot_data = plot_data.dropna(subset=keys)
        if plot_data.empty:
            if not quiet:
                logger.warning("freqs_plot_empty", keys=keys, message=EMPTY_PLOT_MESSAGE)
            return None

    if needs_multi_view(plot_data, keys):
        logger.debug("freqs_grid_to_multi_view", facet=keys[2], values=int(plot_data[keys[2]].nunique(dropna=False)))
        return freqs_plot(
            df, *keys,
            weight=weight, top=top, drop_na=drop_na, title=title, subtitle=subtitle,
            quiet=quiet, save=save, subdir=subdir, theme=theme,
        )

    spec = build_plot_spec(
        plot_data, keys,
        truncation=trunc,
        weight=weight,
        variable_name=variable_name,
        title=title,
        subtitle=subtitle,
        label_threshold=theme.label_threshold,
    )
    chart = render_freqs(spec, theme)
    if save:
        chart.path = export_plot(chart.figure, "viz_freqs", keys, subdir=subdir, dpi=theme.dpi)
    return chart


def membership_labels(aux: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    """
    Long table with one "<key>: <value>" label per key of each group (the tail group
    gets a single " Mixed Tail" label), sorted by pcum descending.
    """
    labels = aux.melt(
        id_vars=["n", "p", "pcum", "order", "is_tail"],
        value_vars=keys,
        var_name="name",
        value_name="value",
    )
    labels["label"] = labels["name"].astype(str) + ": " + labels["value"].astype(str)
    labels.loc[labels["is_tail"], "label"] = MIXED_TAIL_LABEL
    labels = labels.drop_duplicates(subset=["order", "label"])
    return labels.sort_values("pcum", ascending=False, kind="mergesort").reset_index(drop=True)


def _multi_subtitle(keys: list[str], weight: str | None) -> str:
    text = "Grouped by %s" % vector_to_text(keys, quotes=False)
    return f"{text} (weighted by {weight})" if weight else text


def freqs_plot(
    df: pd.DataFrame,
    *keys: str,
    weight: str | None = None,
    top: int | None = 10,
    drop_na: bool = False,
    title: str | None = None,
    subtitle: str | None = None,
    quiet: bool = False,
    save: bool = False,
    subdir: str | None = None,
    theme: PlotTheme | None = None,
) -> FreqsChart | None:
    """
    Multi-category view: bars for the `top` most frequent key combinations plus one
    "Tail" bar for the rest, over a dot matrix showing which key values form each bar.
    With `weight`, bar heights are summed weights. None when drop_na leaves nothing to draw.
    No keys: DataFrame-wide composition chart (freqs_df).
    """
    check_table(df)
    keys = list(keys)
    theme = theme or PlotTheme()
    if not keys:
        return freqs_df(df, plot=True, save=save, subdir=subdir, quiet=quiet, theme=theme)

    top = validate_top(top)
    ranked = rank_frequencies(count_groups(df, keys, weight=weight), keys)
    if drop_na:
        ranked = ranked.dropna(subset=keys)
        if ranked.empty:
            if not quiet:
                logger.warning("freqs_plot_empty", keys=keys, message=EMPTY_PLOT_MESSAGE)
            return None
    aux = collapse_tail(ranked, keys, top=top)
    if (aux["order"] == TAIL_ORDER).any() and not quiet:
        logger.info(
            "freqs_plot_tail",
            top=top,
            tail_groups=len(ranked) - top,
            message="Showing %d most frequent values. Tail of %d other values grouped into one" % (
                top, len(ranked) - top),
        )
    labels = membership_labels(aux, keys)

    chart = render_multi(
        aux,
        labels,
        keys,
        title=title or "Absolute Frequencies",
        subtitle=subtitle or _multi_subtitle(keys, weight),
        caption="Total observations: %s" % format_num(len(df), 0),
        theme=theme,
    )
    if save:
        chart.path = export_plot(chart.figure, "viz_freqs_plot", keys, subdir=subdir, dpi=theme.dpi)
    return chart
