from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal

from workforce.payroll.export import COLUMNS, export_filename, format_currency, to_delimited_text
from workforce.payroll.model import PayrollPeriod, PayrollRecord, PayrollReport


def _one_record_report() -> PayrollReport:
    record = PayrollRecord(
        employee_id=1,
        employee_name="Ana",
        regular_days=1,
        double_days=1,
        justified_absences=1,
        total_days_worked=3,
        daily_salary=Decimal("500"),
        total_pay=Decimal("1500"),
    )
    return PayrollReport(
        period=PayrollPeriod(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)),
        total_employees=1,
        total_days_worked=3,
        total_payroll=Decimal("1500"),
        records=(record,),
    )


def test_csv_round_trips_through_csv_reader():
    text = to_delimited_text(_one_record_report())
    lines = text.splitlines()

    assert lines[0] == "Payroll Report - 2024-03-01 to 2024-03-31"

    table = list(csv.DictReader(io.StringIO("\n".join(lines[1:]))))
    assert list(table[0].keys()) == COLUMNS
    assert len(table) == 2

    row, totals = table
    assert row["Employee"] == "Ana"
    assert row["Regular Days"] == "1"
    assert row["Double Days"] == "1"
    assert row["Justified Days"] == "1"
    assert row["Total Days Worked"] == "3"
    assert row["Daily Salary"] == "$500.00"
    assert row["Total Pay"] == "$1500.00"

    assert totals["Employee"] == "TOTALS"
    assert totals["Regular Days"] == ""
    assert totals["Daily Salary"] == ""
    assert totals["Total Days Worked"] == "3"
    assert totals["Total Pay"] == "$1500.00"


def test_csv_rows_are_newline_terminated():
    text = to_delimited_text(_one_record_report())
    assert text.endswith("\n")
    assert "\r" not in text


def test_currency_has_two_fraction_digits():
    assert format_currency(Decimal("0")) == "$0.00"
    assert format_currency(Decimal("12.5")) == "$12.50"
    assert format_currency(Decimal("10.005")) == "$10.01"


def test_export_filename_uses_period():
    assert export_filename(_one_record_report()) == "payroll_2024-03-01_to_2024-03-31.csv"
