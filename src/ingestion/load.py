"""
Load the input table for the frequency scripts.
CSV or parquet, chosen by file suffix; relative paths are looked up under data/raw when missing.
"""
from pathlib import Path

import pandas as pd

from src.config import get_paths

_READERS = {".csv": "csv", ".tsv": "tsv", ".parquet": "parquet", ".pq": "parquet"}


def _resolve_path(path: str | Path) -> Path:
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    raw_dir = get_paths().get("data", {}).get("raw", {}).get("dir")
    if raw_dir and (Path(raw_dir) / p).exists():
        return Path(raw_dir) / p
    raise FileNotFoundError(f"Input table not found: {path}")


def load_table(
    path: str | Path,
    nrows: int | None = None,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """Load a CSV/TSV/parquet file into a DataFrame. Optionally limit rows and columns."""
    p = _resolve_path(path)
    kind = _READERS.get(p.suffix.lower())
    if kind is None:
        raise ValueError(f"Unsupported file type '{p.suffix}'; expected one of {sorted(_READERS)}")
    if kind == "parquet":
        df = pd.read_parquet(p, columns=columns)
        return df.head(nrows) if nrows is not None else df
    sep = "\t" if kind == "tsv" else ","
    return pd.read_csv(p, sep=sep, nrows=nrows, usecols=columns, low_memory=False)
