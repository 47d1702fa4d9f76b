#!/usr/bin/env python3
"""
Value frequencies of every column of a table: long table or "Global Values Frequencies" chart.
Thresholds default to config/freqs.yaml (freqs_df section).

Usage:
  PYTHONPATH=. python scripts/run_freqs_df.py data/raw/customers.csv
  PYTHONPATH=. python scripts/run_freqs_df.py data/raw/customers.csv --plot --subdir eda
  PYTHONPATH=. python scripts/run_freqs_df.py data/raw/customers.csv --max 0.5 --min 0.01 --keep-novar
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.config import get_freqs_config
from src.eda.plot_style import get_plot_theme
from src.frequencies import freqs_df
from src.ingestion import load_table
from src.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def main():
    cfg = get_freqs_config()
    defaults = cfg.get("freqs_df", {})
    parser = argparse.ArgumentParser(description="Frequencies of every value of every column")
    parser.add_argument("path", type=str, help="Input table (.csv, .tsv or .parquet)")
    parser.add_argument("--max", type=float, default=defaults.get("max", 0.9),
                        help="Drop columns with more distinct values than max * rows")
    parser.add_argument("--min", type=float, default=defaults.get("min", 0.0),
                        help="Merge values with share <= min * 100 into (HF)")
    parser.add_argument("--keep-novar", action="store_true", help="Keep columns with a single value")
    parser.add_argument("--top", type=int, default=defaults.get("top", 30),
                        help="Columns kept (fewest distinct values first)")
    parser.add_argument("--plot", action="store_true", help="Render the composition chart and save it as PNG")
    parser.add_argument("--subdir", type=str, default=None)
    parser.add_argument("--nrows", type=int, default=None)
    parser.add_argument("--out", type=str, default=None, help="Write the table to this CSV instead of stdout")
    parser.add_argument("--quiet", action="store_true")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args()

    setup_logging(json_output=args.json_logs)

    try:
        df = load_table(args.path, nrows=args.nrows)
    except FileNotFoundError:
        logger.error("input_not_found", path=args.path)
        sys.exit(1)
    logger.info("loaded", path=args.path, rows=len(df), cols=len(df.columns))

    novar = defaults.get("novar", True) and not args.keep_novar
    result = freqs_df(
        df,
        max_ratio=args.max,
        min_ratio=args.min,
        novar=novar,
        plot=args.plot,
        top=args.top,
        quiet=args.quiet,
        save=args.plot,
        subdir=args.subdir,
        theme=get_plot_theme(cfg),
    )
    if result is None:
        sys.exit(1)

    if args.plot:
        print("Wrote", result.path)
        report = result.exclusions
    else:
        report = result.attrs["exclusions"]
        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            result.to_csv(out_path, index=False)
            print("Wrote", out_path)
        else:
            print(result.to_string(index=False))

    if report.excluded:
        print("\nExcluded columns:")
        print(report.to_frame().to_string(index=False))


if __name__ == "__main__":
    main()
