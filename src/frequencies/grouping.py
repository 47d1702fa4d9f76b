"""
Group rows by one or more key columns and count them (optionally weighted).
Missing key values are a group of their own; groups come back in first-seen order.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

RESERVED_COLUMNS = ("n", "p", "pcum", "order")


def check_table(df) -> None:
    """Fail fast when df is not a DataFrame (e.g. a single column or plain list)."""
    if isinstance(df, (pd.Series, pd.Index, np.ndarray, list, tuple)):
        raise TypeError("df should be a data frame, not a vector")
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"df should be a pandas DataFrame, got {type(df).__name__}")


def check_columns(df: pd.DataFrame, columns: list[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}. Available columns: {list(df.columns)}")


def count_groups(
    df: pd.DataFrame,
    keys: list[str],
    weight: str | None = None,
) -> pd.DataFrame:
    """
    Count rows per unique combination of `keys`; with `weight`, sum that column instead.
    Returns DataFrame with the key columns plus `n`, one row per group, first-seen order.
    Missing weights count as zero.
    """
    check_table(df)
    keys = list(keys)
    if not keys:
        raise ValueError("count_groups needs at least one key; use freqs_df() for a DataFrame-wide scan")
    if len(set(keys)) != len(keys):
        raise ValueError(f"Duplicated grouping keys: {keys}")
    reserved = [k for k in keys if k in RESERVED_COLUMNS]
    if reserved:
        raise ValueError(f"Key names {reserved} clash with output columns {list(RESERVED_COLUMNS)}; rename them first")
    check_columns(df, keys)

    grouped = df.groupby(keys, dropna=False, sort=False, observed=True)
    if weight is None:
        counts = grouped.size()
    else:
        check_columns(df, [weight])
        if weight in keys:
            raise ValueError(f"Weight column '{weight}' is also a grouping key")
        if not pd.api.types.is_numeric_dtype(df[weight]):
            raise TypeError(f"Weight column '{weight}' must be numeric, got {df[weight].dtype}")
        counts = grouped[weight].sum()
    return counts.reset_index(name="n")
