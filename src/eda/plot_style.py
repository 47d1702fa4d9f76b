"""
Plot styling for frequency charts.
PlotTheme is passed explicitly to every renderer and applied through a scoped rc_context;
nothing here touches the global matplotlib state.
"""
from __future__ import annotations

from dataclasses import dataclass, field

# Corporate palette: primary, secondary, accent (alert), neutral
PALETTE = {
    "primary": "#1e3a5f",      # navy
    "secondary": "#2d6a6e",    # teal
    "accent": "#c75c41",       # coral
    "neutral": "#6b7280",      # gray
    "light": "#e5e7eb",
    "white": "#ffffff",
}

# Categorical palette for the composition chart (cycled when there are more columns)
CATEGORY_PALETTE = [PALETTE["primary"], PALETTE["secondary"], PALETTE["accent"], PALETTE["neutral"], "#4a7c59", "#7c5a9e"]

# Label colour tags: "m" sits inside a dark bar, "f" on light background
LABEL_COLOURS = {"m": "#ffffff", "f": "#000000"}


@dataclass
class PlotTheme:
    """Visual settings for all frequency charts."""
    style: str = "whitegrid"
    context: str = "notebook"
    font_scale: float = 1.0
    width: float = 10.0
    bar_height: float = 0.35  # inches per bar row
    min_height: float = 3.0
    dpi: int = 120
    gradient_low: str = "#b0e2ff"   # lightskyblue2
    gradient_high: str = "#000080"  # navy
    label_threshold: float = 0.35
    label_size: float = 8.0
    label_colours: dict = field(default_factory=lambda: dict(LABEL_COLOURS))
    tail_colour: str = "#8c8c8c"    # grey55
    head_colour: str = "#000000"
    category_palette: list = field(default_factory=lambda: list(CATEGORY_PALETTE))

    def rc_params(self) -> dict:
        """seaborn style + context merged with the house overrides, for matplotlib.rc_context."""
        import seaborn as sns

        rc = {}
        rc.update(sns.axes_style(self.style))
        rc.update(sns.plotting_context(self.context, font_scale=self.font_scale))
        rc.update({
            "figure.dpi": self.dpi,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "grid.alpha": 0.3,
            "axes.titlesize": 14,
            "axes.titleweight": "600",
            "axes.titlelocation": "left",
            "font.family": ["sans-serif"],
            "font.sans-serif": ["DejaVu Sans", "Arial", "Helvetica"],
            "figure.facecolor": PALETTE["white"],
            "axes.facecolor": PALETTE["white"],
        })
        return rc

    def gradient(self):
        """Colormap used to fill bars by percentage."""
        from matplotlib.colors import LinearSegmentedColormap
        return LinearSegmentedColormap.from_list("freqs", [self.gradient_low, self.gradient_high])

    def figure_height(self, n_bars: int) -> float:
        return max(self.min_height, 1.2 + self.bar_height * n_bars)


def get_plot_theme(config: dict | None = None) -> PlotTheme:
    """
    Build a PlotTheme from the `plot` section of config/freqs.yaml.
    Unknown keys are ignored; missing keys keep the defaults.
    """
    if config is None:
        try:
            from src.config import get_freqs_config
            config = get_freqs_config()
        except Exception:
            config = {}
    section = config.get("plot", {}) or {}
    known = set(PlotTheme.__dataclass_fields__)
    return PlotTheme(**{k: v for k, v in section.items() if k in known})
