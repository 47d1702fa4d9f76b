#!/usr/bin/env python3
"""
Frequency table (or chart) for one or more columns of a CSV/parquet file.

Usage:
  PYTHONPATH=. python scripts/run_freqs.py data/raw/customers.csv --by country
  PYTHONPATH=. python scripts/run_freqs.py data/raw/customers.csv --by country segment --weight revenue
  PYTHONPATH=. python scripts/run_freqs.py data/raw/customers.csv --by country --plot --top 15
  PYTHONPATH=. python scripts/run_freqs.py data/raw/customers.csv --by country segment channel --multi
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.config import get_freqs_config
from src.eda.plot_style import get_plot_theme
from src.frequencies import freqs, freqs_plot
from src.ingestion import load_table
from src.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def _top(value: str):
    return None if value.lower() in ("all", "none") else int(value)


def main():
    cfg = get_freqs_config()
    parser = argparse.ArgumentParser(description="Group, count and rank values of one or more columns")
    parser.add_argument("path", type=str, help="Input table (.csv, .tsv or .parquet)")
    parser.add_argument("--by", nargs="*", default=[], help="Grouping columns, in order (none = whole table scan)")
    parser.add_argument("--weight", type=str, default=None, help="Numeric column to sum instead of counting rows")
    parser.add_argument("--relative", action="store_true", help="Add shares within the parent group (p_rel, pcum_rel)")
    parser.add_argument("--abc", action="store_true", help="Sort alphabetically instead of by frequency")
    parser.add_argument("--plot", action="store_true", help="Render a chart and save it as PNG")
    parser.add_argument("--multi", action="store_true", help="Use the multi-category view (bars + dot matrix)")
    parser.add_argument("--top", type=_top, default=None, help="Groups to plot; 'all' for every group")
    parser.add_argument("--drop-na", action="store_true", help="Leave missing values out of the chart")
    parser.add_argument("--variable-name", type=str, default=None, help="Display name of the first column")
    parser.add_argument("--title", type=str, default=None)
    parser.add_argument("--subtitle", type=str, default=None)
    parser.add_argument("--subdir", type=str, default=None, help="Subdirectory under the plots output dir")
    parser.add_argument("--nrows", type=int, default=None, help="Limit rows read (default: all)")
    parser.add_argument("--out", type=str, default=None, help="Write the table to this CSV instead of stdout")
    parser.add_argument("--quiet", action="store_true", help="Hide truncation/exclusion messages")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args()

    setup_logging(json_output=args.json_logs)

    try:
        df = load_table(args.path, nrows=args.nrows)
    except FileNotFoundError:
        logger.error("input_not_found", path=args.path)
        sys.exit(1)
    logger.info("loaded", path=args.path, rows=len(df), cols=len(df.columns))

    theme = get_plot_theme(cfg)
    if args.multi:
        top = args.top if args.top is not None else cfg.get("freqs_plot", {}).get("top", 10)
        chart = freqs_plot(
            df, *args.by,
            weight=args.weight, top=top, drop_na=args.drop_na, title=args.title, subtitle=args.subtitle,
            quiet=args.quiet, save=True, subdir=args.subdir, theme=theme,
        )
        if chart is None:
            sys.exit(1)
        print("Wrote", chart.path)
        return

    top = args.top if args.top is not None else cfg.get("freqs", {}).get("top", 20)
    result = freqs(
        df, *args.by,
        weight=args.weight,
        relative=args.relative,
        variable_name=args.variable_name,
        plot=args.plot,
        drop_na=args.drop_na,
        title=args.title,
        subtitle=args.subtitle,
        top=top,
        alphabetical=args.abc,
        save=args.plot,
        subdir=args.subdir,
        quiet=args.quiet,
        theme=theme,
    )
    if result is None:
        logger.warning("nothing_to_show")
        sys.exit(1)
    if args.plot:
        print("Wrote", result.path)
    elif args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        result.to_csv(out_path, index=False)
        print("Wrote", out_path)
    else:
        print(result.to_string(index=False))


if __name__ == "__main__":
    main()
