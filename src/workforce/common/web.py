"""Shared Flask helpers: session user, role guards, JSON error mapping."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PayrollReportError,
    ValidationError,
)
from ..users.service import SessionUser

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PayrollReportError, 502),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def store_session_user(user: SessionUser) -> None:
    session["user_id"] = user.user_id
    session["username"] = user.username
    session["role"] = user.role.value
    session["employee_id"] = user.employee_id


def current_session_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    return SessionUser(
        user_id=int(session["user_id"]),
        username=session.get("username", ""),
        role=Role(session.get("role")),
        employee_id=session.get("employee_id"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def request_data() -> dict[str, Any]:
    """JSON body, falling back to form fields."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid identifier: {value!r}")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status in _STATUS_BY_ERROR:
            if isinstance(e, exc_type):
                return error_response(str(e), status)
        return error_response(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error_response(f"System error: {e}", 500)
        return error_response("System error", 500)
