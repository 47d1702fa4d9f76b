from .load import get_paths, get_freqs_config, get_plots_dir

__all__ = ["get_paths", "get_freqs_config", "get_plots_dir"]
