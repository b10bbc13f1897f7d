"""Write a payroll CSV without going through Flask.

Usage: python scripts/export_payroll.py [START END] [--previous] [--out DIR]
Without dates the current month is used.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from workforce.common.datetime_utils import current_month_period, parse_iso_date, previous_month_period, today_local
from workforce.config import get_settings_module
from workforce.container import build_container
from workforce.core.exceptions import DomainError
from workforce.payroll.export import export_filename, to_delimited_text


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export the payroll report as CSV")
    parser.add_argument("start", nargs="?")
    parser.add_argument("end", nargs="?")
    parser.add_argument("--previous", action="store_true", help="use the previous month")
    parser.add_argument("--out", default=".", help="output directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    tz = getattr(settings, "TIMEZONE", "America/Los_Angeles")

    try:
        if args.start and args.end:
            start, end = parse_iso_date(args.start), parse_iso_date(args.end)
        elif args.previous:
            start, end = previous_month_period(today_local(tz))
        else:
            start, end = current_month_period(today_local(tz))
        if start > end:
            parser.error("START must be on or before END")

        container = build_container(db_config=settings.DB_CONFIG, timezone=tz)
        report = container.payroll_report_service.generate_report(start, end)
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    path = Path(args.out) / export_filename(report)
    path.write_text(to_delimited_text(report), encoding="utf-8")
    print(f"OK: {report.total_employees} employees, total {report.total_payroll} -> {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
