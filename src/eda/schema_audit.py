"""
Column profile for the DataFrame-wide frequency scan.
dtype, null count, cardinality (missing counted as a value), list-valued flag.
"""
from __future__ import annotations

import pandas as pd


def _holds_lists(s: pd.Series) -> bool:
    if s.dtype != object:
        return False
    return bool(s.map(lambda v: isinstance(v, (list, tuple, set, dict))).any())


def column_profile(df: pd.DataFrame) -> pd.DataFrame:
    """
    Build a profile table: column, dtype, null_count, null_pct, cardinality, is_list.
    Cardinality counts missing as one more distinct value; list-valued columns get no cardinality.
    Rows keep the column order of df.
    """
    rows = []
    for col in df.columns:
        s = df[col]
        is_list = _holds_lists(s)
        null_count = int(s.isna().sum()) if not is_list else 0
        rows.append({
            "column": col,
            "dtype": str(s.dtype),
            "null_count": null_count,
            "null_pct": round(100 * null_count / len(df), 2) if len(df) > 0 else 0,
            "cardinality": int(s.nunique(dropna=False)) if not is_list else pd.NA,
            "is_list": is_list,
        })
    profile = pd.DataFrame(rows, columns=["column", "dtype", "null_count", "null_pct", "cardinality", "is_list"])
    profile.attrs["row_count"] = len(df)
    return profile
