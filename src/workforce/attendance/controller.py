from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.web import (
    admin_required,
    as_bool,
    as_optional_int,
    current_session_user,
    login_required,
    request_data,
)
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def attendance_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "employee_id": r.employee_id,
        "employee_name": r.employee_name,
        "attendance_date": format_iso_date(r.attendance_date),
        "attended": r.attended,
        "is_double_day": r.is_double_day,
        "justified": r.justified,
        "work_description": r.work_description,
        "status": r.status.value,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }


def _parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus((value or "").strip().lower())
    except ValueError:
        raise ValidationError("Invalid attendance status")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = request_data()
        date_s = data.get("attendance_date")

        attendance_id = container.attendance_service.mark_attendance(
            current_user=current_session_user(),
            employee_id=as_optional_int(data.get("employee_id")),
            attendance_date=parse_iso_date(date_s) if date_s else None,
            attended=as_bool(data.get("attended", False)),
            work_description=data.get("work_description"),
            is_double_day=as_bool(data.get("is_double_day", False)),
            justified=as_bool(data.get("justified", False)),
        )
        return jsonify({"success": True, "attendance_id": attendance_id})

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        rows = container.attendance_service.my_attendances(current_session_user())
        return jsonify([attendance_to_dict(r) for r in rows])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="today_attendance")
    @login_required
    def today_attendance():
        s_user = current_session_user()
        today = container.attendance_service.today()
        record = None
        if s_user.employee_id:
            record = container.attendance_service.today_record(s_user.employee_id)
        return jsonify(
            {
                "date": format_iso_date(today),
                "record": attendance_to_dict(record) if record else None,
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @admin_required
    def list_attendance():
        status_s = request.args.get("status")
        role = current_session_user().role
        if status_s:
            rows = container.attendance_service.list_by_status(current_role=role, status=_parse_status(status_s))
        else:
            rows = container.attendance_service.list_all(current_role=role)
        return jsonify([attendance_to_dict(r) for r in rows])

    @app.route("/api/attendance/<int:attendance_id>/status", methods=["POST"], endpoint="attendance_status")
    @admin_required
    def attendance_status(attendance_id: int):
        container.attendance_service.update_status(
            current_role=current_session_user().role,
            attendance_id=attendance_id,
            status=_parse_status(request_data().get("status")),
        )
        return jsonify({"success": True})

    @app.route("/api/attendance/<int:attendance_id>/description", methods=["POST"], endpoint="attendance_description")
    @admin_required
    def attendance_description(attendance_id: int):
        container.attendance_service.update_description(
            current_role=current_session_user().role,
            attendance_id=attendance_id,
            description=request_data().get("work_description", ""),
        )
        return jsonify({"success": True})
