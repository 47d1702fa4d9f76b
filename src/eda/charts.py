"""
Matplotlib rendering for frequency charts.

- render_freqs: ranked horizontal bars, single panel, facet rows or a facet grid (from a PlotSpec)
- render_multi: bar chart over a category-membership dot matrix sharing one x order
- render_composition: 100%-stacked bar per column for the DataFrame-wide scan

Every renderer runs inside plt.rc_context(theme.rc_params()) and returns a FreqsChart.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.colors import Normalize
from matplotlib.ticker import FuncFormatter, PercentFormatter

from src.eda.formatting import format_num, format_signif
from src.eda.layout import PlotSpec
from src.eda.plot_style import PlotTheme

COMPOSITION_TITLE = "Global Values Frequencies"
COMPOSITION_LABEL_MIN_P = 8


@dataclass
class FreqsChart:
    """A rendered chart plus the data and texts behind it."""
    figure: Any
    kind: str
    data: pd.DataFrame
    title: str = ""
    subtitle: str = ""
    caption: str = ""
    labels: pd.DataFrame | None = None
    exclusions: Any = None
    path: Path | None = None


def _comma(x, _pos=None) -> str:
    return format_num(x, 0)


def _decorate(fig, title: str, subtitle: str = "", caption: str = "") -> None:
    heading = f"{title}\n{subtitle}" if subtitle else title
    fig.suptitle(heading, x=0.01, ha="left", fontsize=12)
    if caption:
        fig.supxlabel(caption, x=0.99, ha="right", fontsize=8, color="#6b7280")


def _x_on_top(ax, show: bool = True) -> None:
    ax.tick_params(axis="x", bottom=False, labelbottom=False, top=show, labeltop=show)


def _strip(ax, text: str) -> None:
    """Facet label on the right edge of a panel."""
    ax.text(1.01, 0.5, text, transform=ax.transAxes, rotation=-90, ha="left", va="center", fontsize=9)


def _draw_bars(ax, rows: pd.DataFrame, spec: PlotSpec, theme: PlotTheme, cmap, norm) -> None:
    """Horizontal bars top-down in the order of `rows`, with value labels."""
    ax.set_xlim(0, spec.x_max)
    ax.xaxis.set_major_formatter(FuncFormatter(_comma))
    ax.grid(axis="y", visible=False)
    if len(rows) == 0:
        ax.set_yticks([])
        return
    y = np.arange(len(rows))[::-1]
    colours = cmap(norm(rows["p"].to_numpy(dtype=float)))
    ax.barh(y, rows["n"], height=0.8, color=colours, alpha=0.95, edgecolor="none")
    pad = spec.x_max * 0.01
    for yi, n, label, outside, tag in zip(
        y, rows["n"], rows["label"], rows["label_outside"], rows["label_colour"]
    ):
        ax.text(
            n + pad if outside else n - pad,
            yi,
            label,
            ha="left" if outside else "right",
            va="center",
            fontsize=theme.label_size,
            color=theme.label_colours.get(tag, "#000000"),
        )
    ax.set_yticks(y)
    ax.set_yticklabels(rows[spec.bar_key])
    ax.set_ylim(-0.6, len(rows) - 0.4)


def _render_single(spec: PlotSpec, theme: PlotTheme, cmap, norm):
    d = spec.data
    fig, ax = plt.subplots(figsize=(theme.width, theme.figure_height(len(d))), layout="constrained")
    _draw_bars(ax, d, spec, theme, cmap, norm)
    _x_on_top(ax)
    return fig


def _render_facet_rows(spec: PlotSpec, theme: PlotTheme, cmap, norm):
    d = spec.data
    facets = sorted(d[spec.row_key].unique())
    counts = [int((d[spec.row_key] == f).sum()) for f in facets]
    fig, axes = plt.subplots(
        len(facets), 1,
        sharex=True,
        squeeze=False,
        figsize=(theme.width, theme.figure_height(len(d) + len(facets))),
        gridspec_kw={"height_ratios": counts},
        layout="constrained",
    )
    for i, (facet, ax) in enumerate(zip(facets, axes[:, 0])):
        rows = d[d[spec.row_key] == facet].sort_values("order", kind="mergesort")
        _draw_bars(ax, rows, spec, theme, cmap, norm)
        _x_on_top(ax, show=(i == 0))
        _strip(ax, facet)
    return fig


def _render_facet_grid(spec: PlotSpec, theme: PlotTheme, cmap, norm):
    d = spec.data
    row_values = sorted(d[spec.row_key].unique())
    col_values = sorted(d[spec.col_key].unique())
    cells = {
        (r, c): d[(d[spec.row_key] == r) & (d[spec.col_key] == c)].sort_values("n", ascending=False, kind="mergesort")
        for r in row_values
        for c in col_values
    }
    heights = [max(1, max(len(cells[(r, c)]) for c in col_values)) for r in row_values]
    fig, axes = plt.subplots(
        len(row_values), len(col_values),
        sharex=True,
        squeeze=False,
        figsize=(theme.width, theme.figure_height(sum(heights) + len(row_values))),
        gridspec_kw={"height_ratios": heights},
        layout="constrained",
    )
    for i, r in enumerate(row_values):
        for j, c in enumerate(col_values):
            ax = axes[i, j]
            _draw_bars(ax, cells[(r, c)], spec, theme, cmap, norm)
            _x_on_top(ax, show=(i == 0))
            if i == 0:
                ax.set_title(c, fontsize=10)
            if j == len(col_values) - 1:
                _strip(ax, r)
    return fig


_RENDERERS = {1: _render_single, 2: _render_facet_rows, 3: _render_facet_grid}


def render_freqs(spec: PlotSpec, theme: PlotTheme | None = None) -> FreqsChart:
    """Draw a PlotSpec: bars filled on a light-to-dark gradient by p, labels per bar."""
    theme = theme or PlotTheme()
    p = spec.data["p"].astype(float)
    norm = Normalize(vmin=p.min(), vmax=p.max())
    with plt.rc_context(theme.rc_params()):
        fig = _RENDERERS[spec.layout](spec, theme, theme.gradient(), norm)
        _decorate(fig, spec.title, spec.subtitle, spec.caption)
    return FreqsChart(
        figure=fig,
        kind=spec.kind,
        data=spec.data,
        title=spec.title,
        subtitle=spec.subtitle,
        caption=spec.caption,
    )


def render_multi(
    aux: pd.DataFrame,
    labels: pd.DataFrame,
    keys: list[str],
    title: str,
    subtitle: str,
    caption: str,
    theme: PlotTheme | None = None,
) -> FreqsChart:
    """
    Upper panel: one bar per group (tail in grey) ordered by pcum, ticks "<order>\\n<p>%".
    Lower panel: one dot per "<key>: <value>" label of each group, joined when several keys.
    """
    theme = theme or PlotTheme()
    aux = aux.sort_values("pcum", kind="mergesort").reset_index(drop=True)
    x_of = {o: i for i, o in enumerate(aux["order"])}
    y_levels = labels.groupby("label", sort=False)["n"].mean().sort_values(kind="mergesort").index.tolist()
    y_of = {label: i for i, label in enumerate(y_levels)}

    with plt.rc_context(theme.rc_params()):
        fig, (ax_bar, ax_dot) = plt.subplots(
            2, 1,
            sharex=True,
            figsize=(theme.width, 3 + theme.figure_height(len(y_levels))),
            gridspec_kw={"height_ratios": [3, max(2, 0.5 * len(y_levels))]},
            layout="constrained",
        )
        x = np.arange(len(aux))
        colours = np.where(aux["is_tail"], theme.tail_colour, theme.head_colour)
        ax_bar.bar(x, aux["n"], color=colours)
        ax_bar.yaxis.set_major_formatter(FuncFormatter(_comma))
        ax_bar.set_xticks(x)
        ax_bar.set_xticklabels([f"{o}\n{format_signif(p, 2)}%" for o, p in zip(aux["order"], aux["p"])])
        ax_bar.tick_params(axis="x", labelbottom=True)
        ax_bar.grid(axis="x", visible=False)

        for order, dots in labels.groupby("order", sort=False):
            xs = [x_of[order]] * len(dots)
            ys = [y_of[label] for label in dots["label"]]
            ax_dot.scatter(xs, ys, s=40, color=theme.head_colour, zorder=3)
            if len(keys) > 1 and len(dots) > 1:
                ax_dot.plot(xs, ys, color=theme.head_colour, linewidth=1)
        ax_dot.set_yticks(range(len(y_levels)))
        ax_dot.set_yticklabels(y_levels)
        ax_dot.tick_params(axis="x", labelbottom=False)
        _decorate(fig, title, subtitle, caption)

    return FreqsChart(
        figure=fig,
        kind="multi",
        data=aux,
        title=title,
        subtitle=subtitle,
        caption=caption,
        labels=labels,
    )


def _segment_alpha(d: pd.DataFrame) -> pd.Series:
    """log(count) rescaled to [0.1, 1]; missing-value segments stay faint."""
    log_n = np.log(d["n"].astype(float).clip(lower=1))
    is_na = d["value"] == "NA"
    span = log_n[~is_na].max() - log_n[~is_na].min() if (~is_na).any() else 0
    if span > 0:
        alpha = 0.1 + 0.9 * (log_n - log_n[~is_na].min()) / span
    else:
        alpha = pd.Series(1.0, index=d.index)
    return alpha.where(~is_na, 0.1)


def render_composition(
    table: pd.DataFrame,
    columns: list[str],
    theme: PlotTheme | None = None,
) -> FreqsChart:
    """One 100%-stacked bar per column (first column on top) from a freqs_df long table."""
    theme = theme or PlotTheme()
    d = table.copy()
    d["value"] = d["value"].map(lambda v: "NA" if pd.isna(v) else v)
    d["label"] = np.where(d["p"] > COMPOSITION_LABEL_MIN_P, d["value"], "")
    d["alpha"] = _segment_alpha(d)
    colours = sns.color_palette(theme.category_palette, n_colors=len(columns))
    y_of = {c: len(columns) - 1 - i for i, c in enumerate(columns)}

    with plt.rc_context(theme.rc_params()):
        fig, ax = plt.subplots(figsize=(theme.width, theme.figure_height(len(columns))), layout="constrained")
        for i, col in enumerate(columns):
            seg = d[d["variable"] == col]
            share = seg["n"] / seg["n"].sum()
            left = share.cumsum() - share
            for s, lo, a, label in zip(share, left, seg["alpha"], seg["label"]):
                ax.barh(y_of[col], s, left=lo, height=0.95, color=colours[i], alpha=float(a), edgecolor="none")
                if label:
                    ax.text(lo + s / 2, y_of[col], label, ha="center", va="center", fontsize=8)
        ax.set_yticks(list(y_of.values()))
        ax.set_yticklabels(list(y_of.keys()))
        ax.set_xlim(0, 1)
        ax.xaxis.set_major_formatter(PercentFormatter(1.0))
        ax.grid(False)
        for x in (0.25, 0.5, 0.75):
            ax.axvline(x, linestyle="--", color="black", linewidth=0.5, alpha=0.3)
        _decorate(fig, COMPOSITION_TITLE)

    return FreqsChart(figure=fig, kind="composition", data=d, title=COMPOSITION_TITLE)
