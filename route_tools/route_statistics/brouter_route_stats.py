"""Simple route statistics from a BRouter TSV data export.

This script reads the tab-separated "data" export of a BRouter route (one
row per route segment) and prints distance-weighted breakdowns of:
  - Highway types (tracks refined by their tracktype grade)
  - Altitude meters (uphill, downhill, min/max height)
  - Surface types and the paved/unpaved split
  - Smoothness
  - Mountain bike (mtb:scale) and hiking (sac_scale) difficulties

Usage:
    brouter-route-stats riesenbeck.csv
    python -m route_tools.route_statistics.brouter_route_stats riesenbeck.csv

Test routes can be exported from https://brouter.m11n.de or
https://bikerouter.de ("Data" export, tab separated).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Final, List, Optional

from route_tools.route_statistics.report_formatter import (
    format_file_info,
    format_program_banner,
    format_route_report,
)
from route_tools.route_statistics.route_aggregator import build_route_statistics
from route_tools.route_statistics.route_records import RouteFileError, read_route_table
from route_tools.utils.logging_helper import setup_logging

# =============================================================================
# CONFIGURATION
# =============================================================================

PROG_NAME: Final[str] = "brouter-route-stats"
PROG_VERSION: Final[str] = "v1.0.0"
PROG_DATE: Final[str] = "2023/10/10"
PROG_PURPOSE: Final[str] = "simple route statistics"
PROG_INFO: Final[str] = "Calculates route statistics based on CSV routing data."

# =============================================================================
# FUNCTIONS
# =============================================================================


def build_argparser() -> argparse.ArgumentParser:
    """Create the CLI argument parser (one positional input file)."""
    p = argparse.ArgumentParser(
        prog=PROG_NAME,
        description=PROG_INFO,
        epilog=f"Example: {PROG_NAME} riesenbeck.csv",
    )
    p.add_argument(
        "csvfile",
        help="Name of the tab separated route file (data export from brouter.m11n.de).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log loading and parsing details to stderr.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {PROG_VERSION} - {PROG_DATE}",
    )
    return p


# =============================================================================
# MAIN
# =============================================================================


def main(argv: Optional[List[str]] = None) -> None:
    """Entry‑point guarded by ``if __name__ == "__main__"``."""
    args = build_argparser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    print(format_program_banner(PROG_NAME, PROG_VERSION, PROG_DATE, PROG_PURPOSE, PROG_INFO))

    input_path = Path(args.csvfile)
    if not input_path.is_file():
        sys.exit(f"ERROR: input file not found – {input_path}")

    try:
        print(format_file_info(args.csvfile))
        route_table = read_route_table(input_path)
    except (OSError, RouteFileError) as exc:
        sys.exit(f"ERROR: {exc}")

    stats = build_route_statistics(route_table)
    print(format_route_report(stats))
    print()


if __name__ == "__main__":
    main()
