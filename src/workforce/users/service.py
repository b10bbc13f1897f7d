from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_username(username: Optional[str]) -> str:
    """Usernames are compared case-insensitively and stored lowercase."""

    return (username or "").strip().lower()


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    role: Role
    employee_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username(normalize_username(username))
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        logger.info("User %s logged in", user.username)
        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            employee_id=user.employee_id,
        )


class UserService:
    """Use case: manage login accounts (admin)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def username_exists(self, username: str) -> bool:
        return self._users.get_by_username(normalize_username(username)) is not None

    def create_user(
        self,
        *,
        current_role: Role,
        username: str,
        password: str,
        role: Role,
        employee_id: Optional[int] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to create users")

        username = normalize_username(require_non_empty(username, "Username"))
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        if role == Role.EMPLOYEE:
            if not employee_id:
                raise ValidationError("Employee accounts must be linked to an employee")
            if not self._employees.get_by_id(int(employee_id)):
                raise ValidationError("Employee not found")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            employee_id=int(employee_id) if employee_id else None,
        )
        logger.info("User %s created with role %s", username, role.value)
        return user_id

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_employee_users(self) -> Sequence[User]:
        return self._users.list_all(role=Role.EMPLOYEE)

    def delete_user(self, *, current_role: Role, current_user_id: int, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to delete users")
        if int(user_id) == int(current_user_id):
            raise ValidationError("You cannot delete your own account")

        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("User not found")
        logger.info("User %s deleted", user_id)
