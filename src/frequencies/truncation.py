"""
Top-N policy for ranked frequency tables.
truncate_top keeps the N best-ranked groups for plotting; collapse_tail folds everything
ranked after N into a single "Tail" group for the multi-category view.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.eda.formatting import format_num

TAIL_LABEL = "Tail"
TAIL_ORDER = "..."


@dataclass
class Truncation:
    """Kept rows plus what was cut and the text describing it."""
    kept: pd.DataFrame
    total_groups: int
    excluded_groups: int
    kept_n: float
    total_n: float
    note: str = ""
    caption: str = ""
    message: str = ""

    @property
    def truncated(self) -> bool:
        return self.excluded_groups > 0

    @property
    def excluded_n(self) -> float:
        return self.total_n - self.kept_n


def validate_top(top) -> int | None:
    """top must be a positive integer, or None for all values."""
    if top is None:
        return None
    if isinstance(top, bool) or not isinstance(top, (int, np.integer)) or top < 1:
        raise ValueError(f"top must be a positive integer or None (all values), got {top!r}")
    return int(top)


def truncate_top(
    ranked: pd.DataFrame,
    top: int | None = 20,
    alphabetical: bool = False,
) -> Truncation:
    """
    Keep the first `top` rows of a ranked table (a copy; input untouched).
    No truncation when top is None or there are no more than `top` groups.
    """
    top = validate_top(top)
    total_groups = len(ranked)
    total_n = ranked["n"].sum()

    if top is None or total_groups <= top:
        return Truncation(
            kept=ranked.copy(),
            total_groups=total_groups,
            excluded_groups=0,
            kept_n=total_n,
            total_n=total_n,
            caption=f"Total Obs.: {format_num(total_n, 0)}",
        )

    kept = ranked.head(top).copy()
    kept_n = kept["n"].sum()
    what = "A-Z sorted values" if alphabetical else "most frequent"
    return Truncation(
        kept=kept,
        total_groups=total_groups,
        excluded_groups=total_groups - top,
        kept_n=kept_n,
        total_n=total_n,
        note=f"[{top} out of {total_groups} {what}]",
        caption=f"Obs.: {format_num(kept_n, 0)} (out of {format_num(total_n, 0)})",
        message=f"Slicing the top {top} (out of {total_groups}) frequencies; use 'top' parameter to overrule.",
    )


def _as_text(v) -> str:
    return "NA" if pd.isna(v) else str(v)


def collapse_tail(
    ranked: pd.DataFrame,
    keys: list[str],
    top: int | None = 10,
) -> pd.DataFrame:
    """
    Merge every group ranked after `top` into one synthetic group.
    Key values become text ("NA" for missing); the tail group has key values "Tail",
    order "...", summed n and p, and the final pcum (capped at 100). Adds boolean `is_tail`.
    """
    top = validate_top(top)
    keys = list(keys)
    aux = ranked[keys + ["n", "p", "pcum", "order"]].copy()
    for k in keys:
        aux[k] = aux[k].map(_as_text).astype(object)
    aux["is_tail"] = False

    if top is None or len(aux) <= top:
        aux["order"] = aux["order"].astype(str)
        return aux.reset_index(drop=True)

    head = aux.iloc[:top].copy()
    tail = aux.iloc[top:]
    tail_row = {k: TAIL_LABEL for k in keys}
    tail_row.update({
        "n": tail["n"].sum(),
        "p": round(float(tail["p"].sum()), 2),
        "pcum": min(100.0, float(tail["pcum"].max())),
        "order": TAIL_ORDER,
        "is_tail": True,
    })
    head["order"] = head["order"].astype(str)
    out = pd.concat([head, pd.DataFrame([tail_row])], ignore_index=True)
    return out
