from __future__ import annotations

from datetime import date
from decimal import Decimal

import mysql.connector
import pytest

from conftest import InMemoryAttendance, InMemoryEmployees, make_attendance, make_employee
from workforce.core.enums import AttendanceStatus
from workforce.core.exceptions import PayrollReportError
from workforce.payroll.service import PayrollReportService, name_sort_key

MARCH_START = date(2024, 3, 1)
MARCH_END = date(2024, 3, 31)


def _service(employees, attendance) -> PayrollReportService:
    return PayrollReportService(InMemoryEmployees(employees), InMemoryAttendance(attendance))


def test_mixed_month_for_single_employee():
    ana = make_employee(1, "Ana", "500")
    rows = [
        make_attendance(1, 1, date(2024, 3, 4)),
        make_attendance(2, 1, date(2024, 3, 5), is_double_day=True),
        make_attendance(3, 1, date(2024, 3, 6), attended=False, justified=True),
        make_attendance(4, 1, date(2024, 3, 7), attended=False, justified=False),
    ]

    report = _service([ana], rows).generate_report(MARCH_START, MARCH_END)
    record = report.records[0]

    assert record.regular_days == 1
    assert record.double_days == 1
    assert record.justified_absences == 1
    assert record.total_days_worked == 3
    assert record.daily_salary == Decimal("500")
    assert record.total_pay == Decimal("1500")
    assert len(record.attendances) == 4


def test_empty_attendance_keeps_every_employee_sorted_by_name():
    roster = [make_employee(1, "Carla", "100"), make_employee(2, "ana", "200"), make_employee(3, "Bruno", "300")]

    report = _service(roster, []).generate_report(MARCH_START, MARCH_END)

    assert report.total_employees == 3
    assert report.total_days_worked == 0
    assert report.total_payroll == Decimal("0")
    assert [r.employee_name for r in report.records] == ["ana", "Bruno", "Carla"]
    for r in report.records:
        assert (r.regular_days, r.double_days, r.justified_absences, r.total_days_worked) == (0, 0, 0, 0)
        assert r.total_pay == Decimal("0")


def test_double_day_counts_two_and_is_not_regular():
    report = _service(
        [make_employee(1, "Ana", "100")],
        [make_attendance(1, 1, date(2024, 3, 4), is_double_day=True)],
    ).generate_report(MARCH_START, MARCH_END)

    record = report.records[0]
    assert record.regular_days == 0
    assert record.double_days == 1
    assert record.total_days_worked == 2
    assert record.total_pay == Decimal("200")


def test_unexcused_absence_touches_no_counter():
    report = _service(
        [make_employee(1, "Ana", "100")],
        [make_attendance(1, 1, date(2024, 3, 4), attended=False, justified=False, is_double_day=True)],
    ).generate_report(MARCH_START, MARCH_END)

    record = report.records[0]
    assert (record.regular_days, record.double_days, record.justified_absences) == (0, 0, 0)
    assert record.total_days_worked == 0
    assert record.total_pay == Decimal("0")


def test_attended_and_justified_counts_as_attended_only():
    report = _service(
        [make_employee(1, "Ana", "100")],
        [make_attendance(1, 1, date(2024, 3, 4), attended=True, justified=True)],
    ).generate_report(MARCH_START, MARCH_END)

    record = report.records[0]
    assert record.regular_days == 1
    assert record.justified_absences == 0


class StubAttendance:
    """Fetch stub that ignores the approved filter and returns everything."""

    def __init__(self, rows):
        self._rows = rows

    def list_approved_in_range(self, start_date, end_date):
        return self._rows


def test_rows_that_are_not_approved_are_never_paid():
    rows = [
        make_attendance(1, 1, date(2024, 3, 4), status=AttendanceStatus.PENDING),
        make_attendance(2, 1, date(2024, 3, 5), status=AttendanceStatus.REJECTED, is_double_day=True),
        make_attendance(3, 1, date(2024, 3, 6)),
    ]
    svc = PayrollReportService(InMemoryEmployees([make_employee(1, "Ana", "100")]), StubAttendance(rows))

    record = svc.generate_report(MARCH_START, MARCH_END).records[0]

    assert record.regular_days == 1
    assert record.double_days == 0
    assert record.total_pay == Decimal("100")
    assert [a.attendance_id for a in record.attendances] == [3]


def test_report_totals_match_sum_of_records(employees_repo, attendance_repo):
    report = PayrollReportService(employees_repo, attendance_repo).generate_report(MARCH_START, MARCH_END)

    assert report.total_days_worked == sum(r.total_days_worked for r in report.records)
    assert report.total_payroll == sum((r.total_pay for r in report.records), Decimal("0"))
    # Ana: 1 regular + 1 double at 500; Bruno's only row is pending
    assert report.total_days_worked == 3
    assert report.total_payroll == Decimal("1500")


def test_missing_salary_is_treated_as_zero():
    report = _service(
        [make_employee(1, "Ana", None)],
        [make_attendance(1, 1, date(2024, 3, 4))],
    ).generate_report(MARCH_START, MARCH_END)

    assert report.records[0].total_days_worked == 1
    assert report.records[0].total_pay == Decimal("0")


def test_range_is_forwarded_to_attendance_fetch():
    attendance = InMemoryAttendance([make_attendance(1, 1, date(2024, 4, 1))])
    svc = PayrollReportService(InMemoryEmployees([make_employee(1, "Ana", "100")]), attendance)

    report = svc.generate_report(MARCH_START, MARCH_END)

    assert attendance.range_calls == [(MARCH_START, MARCH_END)]
    assert report.period.start_date == MARCH_START
    assert report.period.end_date == MARCH_END
    assert report.total_days_worked == 0


def test_attendance_for_unknown_employee_is_ignored():
    report = _service(
        [make_employee(1, "Ana", "100")],
        [make_attendance(1, 99, date(2024, 3, 4))],
    ).generate_report(MARCH_START, MARCH_END)

    assert report.total_employees == 1
    assert report.total_days_worked == 0


def test_employee_fetch_failure_raises_single_error():
    employees = InMemoryEmployees([make_employee(1, "Ana", "100")])
    employees.fail_with = mysql.connector.Error(msg="connection refused")
    svc = PayrollReportService(employees, InMemoryAttendance())

    with pytest.raises(PayrollReportError) as excinfo:
        svc.generate_report(MARCH_START, MARCH_END)
    assert "connection refused" in str(excinfo.value)


def test_attendance_fetch_failure_raises_single_error():
    attendance = InMemoryAttendance()
    attendance.fail_with = RuntimeError("store unavailable")
    svc = PayrollReportService(InMemoryEmployees([make_employee(1, "Ana", "100")]), attendance)

    with pytest.raises(PayrollReportError, match="store unavailable"):
        svc.generate_report(MARCH_START, MARCH_END)


def test_name_sort_ignores_accents_and_case():
    names = ["Zoe", "Álvaro", "bruno", "Alba"]
    assert sorted(names, key=name_sort_key) == ["Alba", "Álvaro", "bruno", "Zoe"]
