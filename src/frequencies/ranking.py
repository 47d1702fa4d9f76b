"""
Rank grouped counts: sort, dense rank (`order`), percentage (`p`) and cumulative percentage (`pcum`).
Percentages are always relative to the grand total of the full, untruncated group set.
"""
from __future__ import annotations

import numpy as np
import pandas as pd


def _percent(n: pd.Series, total: float) -> pd.Series:
    if not total:
        return pd.Series(0.0, index=n.index)
    return (100 * n / total).round(2)


def rank_frequencies(
    groups: pd.DataFrame,
    keys: list[str],
    alphabetical: bool = False,
    relative: bool = False,
) -> pd.DataFrame:
    """
    Sort groups and add p, pcum and order.
    - default: n descending; ties keep the incoming (first-seen) order.
    - alphabetical: key values ascending (missing last), then n descending.
    - relative: also add p_rel / pcum_rel, shares within the parent group (all keys but the last).
    Returns a new DataFrame: keys, n, p, pcum, order[, p_rel, pcum_rel].
    """
    keys = list(keys)
    out = groups[keys + ["n"]].copy()
    if alphabetical:
        out = out.sort_values(
            keys + ["n"],
            ascending=[True] * len(keys) + [False],
            na_position="last",
            kind="mergesort",
        )
    else:
        out = out.sort_values("n", ascending=False, kind="mergesort")
    out = out.reset_index(drop=True)

    out["p"] = _percent(out["n"], out["n"].sum())
    out["pcum"] = out["p"].cumsum().round(2)
    out["order"] = np.arange(1, len(out) + 1)

    if relative:
        parent = keys[:-1]
        if not parent:
            out["p_rel"] = out["p"]
            out["pcum_rel"] = out["pcum"]
        else:
            by_parent = out.groupby(parent, dropna=False, sort=False)
            subtotal = by_parent["n"].transform("sum")
            out["p_rel"] = (100 * out["n"] / subtotal.where(subtotal != 0)).round(2).fillna(0.0)
            out["pcum_rel"] = out.groupby(parent, dropna=False, sort=False)["p_rel"].cumsum().round(2)
    return out
