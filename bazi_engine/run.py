"""
CLI wrapper for compute_bazi_chart().

Usage:
    python -m bazi_engine.run --birth-date YYYY-MM-DD --birth-time HH:MM --gender GENDER \
        [--timeline YEARS] [--log-level LEVEL]
"""

import argparse
import json
import logging
import os
import sys

from bazi_engine.chart import compute_bazi_chart
from bazi_engine.errors import BaziError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_parts(value, sep, count, label):
    parts = value.split(sep)
    if len(parts) != count or not all(p.strip().isdigit() for p in parts):
        raise argparse.ArgumentTypeError(f"invalid {label}: {value!r}")
    return tuple(int(p) for p in parts)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute a BaZi chart and luck cycle.")
    parser.add_argument("--birth-date", required=True, dest="birth_date",
                        type=lambda v: _parse_parts(v, "-", 3, "date (YYYY-MM-DD)"))
    parser.add_argument("--birth-time", required=True, dest="birth_time",
                        type=lambda v: _parse_parts(v, ":", 2, "time (HH:MM)"))
    parser.add_argument("--gender", required=True)
    parser.add_argument("--timeline", type=int, default=0,
                        help="also print the year-by-year timeline for this many years")
    parser.add_argument("--log-level", dest="log_level", type=str.upper, choices=LOG_LEVELS,
                        default=os.getenv("BAZI_LOG_LEVEL", "WARNING"))

    args = parser.parse_args(argv)
    # argparse does not check choices against a default taken from the environment
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    year, month, day = args.birth_date
    hour, minute = args.birth_time
    try:
        chart = compute_bazi_chart(year, month, day, hour, minute, args.gender,
                                   timeline_years=args.timeline)
    except BaziError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(chart.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
