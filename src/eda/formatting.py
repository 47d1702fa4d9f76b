"""Number and text formatting for chart labels, captions and log messages."""
from __future__ import annotations

import math

import pandas as pd


def format_num(x, decimals: int = 0) -> str:
    """Thousands separators and fixed decimals: 1234.5 -> '1,234.5' (decimals=1). Missing -> 'NA'."""
    if x is None or pd.isna(x):
        return "NA"
    return f"{float(x):,.{decimals}f}"


def signif(x: float, digits: int = 4) -> float:
    """Round to significant digits: 33.333 -> 33.33, 0.0123456 -> 0.01235."""
    if x == 0 or not math.isfinite(x):
        return x
    return round(x, digits - int(math.floor(math.log10(abs(x)))) - 1)


def format_signif(x: float, digits: int = 4) -> str:
    """signif() as text without trailing zeros: 50.0 -> '50', 33.333 -> '33.33'."""
    return f"{signif(float(x), digits):g}"


def vector_to_text(values, quotes: bool = True, sep: str = ", ") -> str:
    """Join values for human-readable messages: ['a', 'b'] -> "'a', 'b'"."""
    if quotes:
        return sep.join(f"'{v}'" for v in values)
    return sep.join(str(v) for v in values)
