from __future__ import annotations

import csv
import io

from conftest import login_as
from workforce.core.enums import Role


def test_payroll_requires_login(client):
    resp = client.get("/api/payroll?start=2024-03-01&end=2024-03-31")
    assert resp.status_code == 401


def test_payroll_forbidden_for_employees(client):
    login_as(client, role=Role.EMPLOYEE, user_id=5, employee_id=1)
    resp = client.get("/api/payroll?start=2024-03-01&end=2024-03-31")
    assert resp.status_code == 403


def test_payroll_json_report(admin_client):
    resp = admin_client.get("/api/payroll?start=2024-03-01&end=2024-03-31")
    assert resp.status_code == 200

    data = resp.get_json()
    assert data["period"] == {"start_date": "2024-03-01", "end_date": "2024-03-31"}
    assert data["total_employees"] == 2
    assert data["total_days_worked"] == 3
    assert data["total_payroll"] == "1500"
    assert [r["employee_name"] for r in data["records"]] == ["Ana", "Bruno"]
    assert data["records"][0]["attendance_dates"] == ["2024-03-04", "2024-03-05"]
    assert data["records"][1]["total_pay"] == "0"


def test_payroll_rejects_inverted_range(admin_client):
    resp = admin_client.get("/api/payroll?start=2024-03-31&end=2024-03-01")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_payroll_rejects_half_range(admin_client):
    resp = admin_client.get("/api/payroll?start=2024-03-01")
    assert resp.status_code == 400


def test_payroll_defaults_to_a_whole_month(admin_client):
    data = admin_client.get("/api/payroll?period=previous").get_json()
    start, end = data["period"]["start_date"], data["period"]["end_date"]

    assert start.endswith("-01")
    assert start[:7] == end[:7]


def test_payroll_store_failure_returns_single_error(admin_client, attendance_repo):
    attendance_repo.fail_with = RuntimeError("store unavailable")

    resp = admin_client.get("/api/payroll?start=2024-03-01&end=2024-03-31")

    assert resp.status_code == 502
    assert resp.get_json() == {"success": False, "message": "store unavailable"}


def test_payroll_csv_download(admin_client):
    resp = admin_client.get("/api/payroll.csv?start=2024-03-01&end=2024-03-31")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "payroll_2024-03-01_to_2024-03-31.csv" in resp.headers["Content-Disposition"]

    lines = resp.get_data(as_text=True).splitlines()
    table = list(csv.reader(io.StringIO("\n".join(lines[1:]))))
    assert table[0][0] == "Employee"
    assert [row[0] for row in table[1:]] == ["Ana", "Bruno", "TOTALS"]
    assert table[-1][-1] == "$1500.00"
