from __future__ import annotations

from decimal import Decimal

from flask import Flask, jsonify

from ..common.web import admin_required, current_session_user, login_required, request_data
from ..container import Container
from .model import Employee

_EDITABLE = ("name", "last_name", "email", "phone", "position", "salary")


def employee_to_dict(employee: Employee) -> dict:
    return {
        "employee_id": employee.employee_id,
        "name": employee.name,
        "last_name": employee.last_name,
        "full_name": employee.full_name,
        "email": employee.email,
        "phone": employee.phone,
        "position": employee.position,
        "salary": str(employee.salary),
        "created_at": employee.created_at.isoformat() if employee.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        return jsonify([employee_to_dict(e) for e in container.employee_service.list_employees()])

    @app.route("/api/employees/stats", methods=["GET"], endpoint="employee_stats")
    @admin_required
    def employee_stats():
        stats = container.employee_service.stats()
        return jsonify(
            {
                "total": stats.total,
                "average_salary": str(stats.average_salary.quantize(Decimal("0.01"))),
                "total_salary": str(stats.total_salary),
            }
        )

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: int):
        return jsonify(employee_to_dict(container.employee_service.get(employee_id)))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        data = request_data()
        employee_id = container.employee_service.create_employee(
            current_role=current_session_user().role,
            name=data.get("name", ""),
            last_name=data.get("last_name", ""),
            email=data.get("email"),
            phone=data.get("phone"),
            position=data.get("position"),
            salary=data.get("salary"),
        )
        return jsonify({"success": True, "employee_id": employee_id}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    def update_employee(employee_id: int):
        data = request_data()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        employee = container.employee_service.update_employee(
            current_role=current_session_user().role,
            employee_id=employee_id,
            **changes,
        )
        return jsonify(employee_to_dict(employee))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: int):
        container.employee_service.delete_employee(current_role=current_session_user().role, employee_id=employee_id)
        return jsonify({"success": True})
