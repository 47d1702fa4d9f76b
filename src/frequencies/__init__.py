"""
Frequency tables and charts: group, count, rank, truncate, plot.
"""
from .grouping import count_groups
from .ranking import rank_frequencies
from .truncation import Truncation, truncate_top, collapse_tail
from .scan import ExclusionReport, scan_columns, column_frequencies, freqs_df
from .core import freqs, freqs_plot

__all__ = [
    "count_groups",
    "rank_frequencies",
    "Truncation",
    "truncate_top",
    "collapse_tail",
    "ExclusionReport",
    "scan_columns",
    "column_frequencies",
    "freqs_df",
    "freqs",
    "freqs_plot",
]
