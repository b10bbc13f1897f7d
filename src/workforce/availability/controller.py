from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date, today_local
from ..common.web import as_bool, as_optional_int, current_session_user, login_required, request_data
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Availability


def availability_to_dict(a: Availability) -> dict:
    return {
        "availability_id": a.availability_id,
        "employee_id": a.employee_id,
        "employee_name": a.employee_name,
        "work_date": format_iso_date(a.work_date),
        "available": a.available,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/availability", methods=["GET"], endpoint="list_availability")
    @login_required
    def list_availability():
        today = today_local(app.config["TIMEZONE"])
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        start = parse_iso_date(start_s) if start_s else today
        end = parse_iso_date(end_s) if end_s else start + timedelta(days=30)

        rows = container.availability_service.list_range(
            current_user=current_session_user(),
            start=start,
            end=end,
            employee_id=as_optional_int(request.args.get("employee_id")),
        )
        return jsonify([availability_to_dict(a) for a in rows])

    @app.route("/api/availability", methods=["POST"], endpoint="register_availability")
    @login_required
    def register_availability():
        data = request_data()
        dates = data.get("dates") or []
        if isinstance(dates, str):
            dates = [d.strip() for d in dates.split(",") if d.strip()]
        if not isinstance(dates, list):
            raise ValidationError("dates must be a list of YYYY-MM-DD values")

        created = container.availability_service.register(
            current_user=current_session_user(),
            employee_id=as_optional_int(data.get("employee_id")),
            dates=[parse_iso_date(d) for d in dates],
            available=as_bool(data.get("available", True)),
        )
        return jsonify({"success": True, "created": created}), 201

    @app.route("/api/availability/<int:availability_id>", methods=["DELETE"], endpoint="delete_availability")
    @login_required
    def delete_availability(availability_id: int):
        container.availability_service.delete(current_user=current_session_user(), availability_id=availability_id)
        return jsonify({"success": True})
