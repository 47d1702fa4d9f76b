"""Load YAML configs with project root resolution."""
from pathlib import Path
import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _read_yaml(path_file: Path) -> dict:
    if not path_file.exists():
        return {}
    with open(path_file) as f:
        return yaml.safe_load(f) or {}


def _resolve(cfg: dict, base: Path) -> None:
    """Resolve relative paths under data and outputs."""
    for key in ("data", "outputs"):
        if key not in cfg or not isinstance(cfg[key], dict):
            continue
        for k, v in cfg[key].items():
            if isinstance(v, str) and not Path(v).is_absolute():
                cfg[key][k] = str(base / v)
            elif isinstance(v, dict):
                for k2, v2 in v.items():
                    if isinstance(v2, str) and not Path(v2).is_absolute():
                        cfg[key][k][k2] = str(base / v2)


def get_paths(base_dir: Path | None = None) -> dict:
    base = base_dir or _project_root()
    cfg = _read_yaml(base / "config" / "paths.yaml")
    _resolve(cfg, base)
    return cfg


def get_freqs_config(base_dir: Path | None = None) -> dict:
    """Defaults for freqs / freqs_plot / freqs_df and the plot theme. Empty dict if absent."""
    base = base_dir or _project_root()
    return _read_yaml(base / "config" / "freqs.yaml")


def get_plots_dir(base_dir: Path | None = None) -> Path:
    """Directory where exported charts go (outputs.plots, else <root>/outputs/plots)."""
    base = base_dir or _project_root()
    plots = get_paths(base).get("outputs", {}).get("plots")
    return Path(plots) if plots else base / "outputs" / "plots"
