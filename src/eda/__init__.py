"""
EDA plotting: column profile, plot styling, frequency chart layout, rendering and export.
"""
from .schema_audit import column_profile
from .plot_style import PlotTheme, get_plot_theme, PALETTE, CATEGORY_PALETTE
from .layout import PlotSpec, build_plot_spec, label_placement
from .charts import FreqsChart, render_freqs, render_multi, render_composition
from .export import export_plot

__all__ = [
    "column_profile",
    "PlotTheme",
    "get_plot_theme",
    "PALETTE",
    "CATEGORY_PALETTE",
    "PlotSpec",
    "build_plot_spec",
    "label_placement",
    "FreqsChart",
    "render_freqs",
    "render_multi",
    "render_composition",
    "export_plot",
]
