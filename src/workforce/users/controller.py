from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    as_optional_int,
    current_session_user,
    login_required,
    request_data,
    store_session_user,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import User


def user_to_dict(user: User) -> dict:
    return {
        "user_id": user.user_id,
        "username": user.username,
        "role": user.role.value,
        "employee_id": user.employee_id,
        "employee_name": user.employee_name,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        store_session_user(s_user)
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": s_user.user_id,
                    "username": s_user.username,
                    "role": s_user.role.value,
                    "employee_id": s_user.employee_id,
                },
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        s_user = current_session_user()
        return jsonify(
            {
                "user_id": s_user.user_id,
                "username": s_user.username,
                "role": s_user.role.value,
                "employee_id": s_user.employee_id,
            }
        )

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        if request.args.get("role") == Role.EMPLOYEE.value:
            users = container.user_service.list_employee_users()
        else:
            users = container.user_service.list_users()
        return jsonify([user_to_dict(u) for u in users])

    @app.route("/api/users/exists", methods=["GET"], endpoint="username_exists")
    @admin_required
    def username_exists():
        return jsonify({"exists": container.user_service.username_exists(request.args.get("username", ""))})

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        data = request_data()
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Invalid account role")

        user_id = container.user_service.create_user(
            current_role=current_session_user().role,
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=role,
            employee_id=as_optional_int(data.get("employee_id")),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        s_user = current_session_user()
        container.user_service.delete_user(current_role=s_user.role, current_user_id=s_user.user_id, user_id=user_id)
        return jsonify({"success": True})
