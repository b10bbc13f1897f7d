from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import (
    current_month_period,
    format_iso_date,
    parse_iso_date,
    previous_month_period,
    today_local,
)
from ..common.web import admin_required
from ..container import Container
from ..core.exceptions import ValidationError
from .export import export_filename, to_delimited_text
from .model import PayrollRecord, PayrollReport


def record_to_dict(r: PayrollRecord) -> dict:
    return {
        "employee_id": r.employee_id,
        "employee_name": r.employee_name,
        "regular_days": r.regular_days,
        "double_days": r.double_days,
        "justified_absences": r.justified_absences,
        "total_days_worked": r.total_days_worked,
        "daily_salary": str(r.daily_salary),
        "total_pay": str(r.total_pay),
        "attendance_dates": [format_iso_date(a.attendance_date) for a in r.attendances],
    }


def report_to_dict(report: PayrollReport) -> dict:
    return {
        "period": {
            "start_date": format_iso_date(report.period.start_date),
            "end_date": format_iso_date(report.period.end_date),
        },
        "total_employees": report.total_employees,
        "total_days_worked": report.total_days_worked,
        "total_payroll": str(report.total_payroll),
        "records": [record_to_dict(r) for r in report.records],
    }


def register(app: Flask, container: Container) -> None:
    def _requested_period() -> tuple[date, date]:
        start_s = request.args.get("start")
        end_s = request.args.get("end")

        if start_s or end_s:
            if not (start_s and end_s):
                raise ValidationError("Both start and end dates are required")
            start, end = parse_iso_date(start_s), parse_iso_date(end_s)
        else:
            today = today_local(app.config["TIMEZONE"])
            if request.args.get("period") == "previous":
                start, end = previous_month_period(today)
            else:
                start, end = current_month_period(today)

        if start > end:
            raise ValidationError("Start date must be on or before end date")
        return start, end

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_report")
    @admin_required
    def payroll_report():
        start, end = _requested_period()
        report = container.payroll_report_service.generate_report(start, end)
        return jsonify(report_to_dict(report))

    @app.route("/api/payroll.csv", methods=["GET"], endpoint="payroll_report_csv")
    @admin_required
    def payroll_report_csv():
        start, end = _requested_period()
        report = container.payroll_report_service.generate_report(start, end)

        return app.response_class(
            to_delimited_text(report).encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(report)}"},
        )
