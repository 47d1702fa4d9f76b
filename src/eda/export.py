"""Write rendered charts to PNG under the configured plots directory."""
from __future__ import annotations

import re
from pathlib import Path

from src.config import get_plots_dir
from src.logging_config import get_logger

logger = get_logger(__name__)


def _slug(text) -> str:
    return re.sub(r"[^A-Za-z0-9_.]+", "_", str(text)).strip("_") or "x"


def plot_filename(name: str, variables: list[str] | None = None) -> str:
    """viz_freqs + ['a', 'b'] -> 'viz_freqs_a-b.png'."""
    if variables:
        return f"{_slug(name)}_{'-'.join(_slug(v) for v in variables)}.png"
    return f"{_slug(name)}.png"


def export_plot(
    fig,
    name: str,
    variables: list[str] | None = None,
    subdir: str | Path | None = None,
    base_dir: str | Path | None = None,
    dpi: int = 120,
) -> Path:
    """
    Save fig as <base_dir>/<subdir>/<name>_<var1-var2...>.png; create dirs if needed.
    base_dir defaults to outputs.plots from config/paths.yaml. Returns the written path.
    """
    out_dir = Path(base_dir) if base_dir is not None else get_plots_dir()
    if subdir:
        out_dir = out_dir / subdir
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / plot_filename(name, variables)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    logger.info("plot_exported", path=str(path))
    return path
