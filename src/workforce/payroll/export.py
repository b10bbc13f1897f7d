"""CSV export of payroll reports."""

from __future__ import annotations

import csv
import io
from decimal import ROUND_HALF_UP, Decimal

from ..common.datetime_utils import format_iso_date
from ..core.constants import CURRENCY_SYMBOL
from .model import PayrollReport

COLUMNS = [
    "Employee",
    "Regular Days",
    "Double Days",
    "Justified Days",
    "Total Days Worked",
    "Daily Salary",
    "Total Pay",
]
TOTALS_LABEL = "TOTALS"


def format_currency(value) -> str:
    amount = Decimal(str(value or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{CURRENCY_SYMBOL}{amount}"


def export_filename(report: PayrollReport) -> str:
    start = format_iso_date(report.period.start_date)
    end = format_iso_date(report.period.end_date)
    return f"payroll_{start}_to_{end}.csv"


def to_delimited_text(report: PayrollReport) -> str:
    """Period line, column header, one row per record, totals row."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")

    start = format_iso_date(report.period.start_date)
    end = format_iso_date(report.period.end_date)
    writer.writerow([f"Payroll Report - {start} to {end}"])
    writer.writerow(COLUMNS)

    for record in report.records:
        writer.writerow(
            [
                record.employee_name,
                record.regular_days,
                record.double_days,
                record.justified_absences,
                record.total_days_worked,
                format_currency(record.daily_salary),
                format_currency(record.total_pay),
            ]
        )

    writer.writerow(
        [
            TOTALS_LABEL,
            "",
            "",
            "",
            report.total_days_worked,
            "",
            format_currency(report.total_payroll),
        ]
    )
    return out.getvalue()
