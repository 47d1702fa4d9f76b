"""
Layout decisions for frequency bar charts: which key goes on the bars, facet rows or
facet columns; bar label text, placement and colour; default titles.
Pure pandas, no matplotlib; charts.render_freqs draws a PlotSpec.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.eda.formatting import format_num, format_signif

MAX_PLOT_KEYS = 3
MAX_GRID_COLUMNS = 3

LAYOUT_KINDS = {1: "single", 2: "facet_rows", 3: "facet_grid"}

DEFAULT_TITLE = "Frequencies and Percentages"


@dataclass
class PlotSpec:
    """Everything render_freqs needs; data holds display-ready keys plus label columns."""
    layout: int
    data: pd.DataFrame
    bar_key: str
    row_key: str | None
    col_key: str | None
    title: str
    subtitle: str
    caption: str
    x_max: float

    @property
    def kind(self) -> str:
        return LAYOUT_KINDS[self.layout]


def check_plot_keys(keys: list[str]) -> None:
    if len(keys) == 0:
        raise ValueError("At least one grouping variable is needed to plot frequencies")
    if len(keys) > MAX_PLOT_KEYS:
        raise ValueError(
            f"Plotting {len(keys)} grouping variables is too complex to visualize "
            f"(limit is {MAX_PLOT_KEYS}); call with plot=False for a tabular result instead."
        )


def needs_multi_view(data: pd.DataFrame, keys: list[str]) -> bool:
    """A 3-key grid with more than MAX_GRID_COLUMNS column facets is unreadable."""
    return len(keys) == MAX_PLOT_KEYS and data[keys[2]].nunique(dropna=False) > MAX_GRID_COLUMNS


def label_placement(data: pd.DataFrame, threshold: float = 0.35) -> pd.DataFrame:
    """
    Label text, position and colour tag for each bar.
    Short bars (bottom `threshold` of the n range) get the label outside, left-justified
    past the bar end (hjust -0.1); the rest inside near the tip (hjust 1.05).
    Colour tag "m" marks bars with p above 90% of the p mid-range; outside labels are always "f".
    """
    n = data["n"].astype(float)
    p = data["p"].astype(float)
    labels = [f"{format_num(n_i, 0)} ({format_signif(p_i, 4)}%)" for n_i, p_i in zip(n, p)]
    if len(data) == 0:
        return pd.DataFrame(
            {"label": [], "label_hjust": [], "label_outside": [], "label_colour": []}, index=data.index
        )

    colour = np.where(p > (p.min() + p.max()) / 2 * 0.9, "m", "f")
    hjust = np.where(n < n.min() + (n.max() - n.min()) * threshold, -0.1, 1.05)
    colour = np.where((colour == "m") & (hjust < threshold), "f", colour)
    return pd.DataFrame(
        {
            "label": labels,
            "label_hjust": hjust,
            "label_outside": hjust < 0,
            "label_colour": colour,
        },
        index=data.index,
    )


def _display(v) -> str:
    return "NA" if pd.isna(v) else str(v)


def _line(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def default_subtitle(
    keys: list[str],
    note: str = "",
    weight: str | None = None,
    variable_name: str | None = None,
) -> str:
    weight_text = f"(weighted by {weight})" if weight else ""
    first = variable_name or keys[0]
    if len(keys) == 1:
        return _line("Variable:", first, note, weight_text)
    if len(keys) == 2:
        head = f"Variables: {first} grouped by {keys[1]}"
    else:
        head = f"Variables: {first} grouped by {keys[1]} [rows] and {keys[2]} [columns]"
    tail = _line(note, weight_text)
    return f"{head}\n{tail}" if tail else head


def build_plot_spec(
    table: pd.DataFrame,
    keys: list[str],
    truncation=None,
    weight: str | None = None,
    variable_name: str | None = None,
    title: str | None = None,
    subtitle: str | None = None,
    label_threshold: float = 0.35,
) -> PlotSpec:
    """
    Turn a ranked (and possibly truncated) frequency table into a PlotSpec.
    keys[0] is drawn as bars, keys[1] as facet rows, keys[2] as facet columns.
    """
    keys = list(keys)
    check_plot_keys(keys)
    if len(table) == 0:
        raise ValueError("Nothing to plot: the frequency table is empty")

    data = table.reset_index(drop=True).copy()
    data = data.join(label_placement(data, threshold=label_threshold))
    for k in keys:
        data[k] = data[k].map(_display)

    note = truncation.note if truncation is not None else ""
    if truncation is not None:
        caption = truncation.caption
    else:
        caption = f"Total Obs.: {format_num(data['n'].sum(), 0)}"

    return PlotSpec(
        layout=len(keys),
        data=data,
        bar_key=keys[0],
        row_key=keys[1] if len(keys) > 1 else None,
        col_key=keys[2] if len(keys) > 2 else None,
        title=title or DEFAULT_TITLE,
        subtitle=subtitle or default_subtitle(keys, note, weight, variable_name),
        caption=caption,
        x_max=1.03 * float(data["n"].max()) or 1.0,
    )
