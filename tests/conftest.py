from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from workforce.attendance.model import AttendanceRecord
from workforce.availability.model import Availability
from workforce.container import assemble
from workforce.core.enums import AttendanceStatus, Role
from workforce.employees.model import Employee
from workforce.main import create_app
from workforce.users.model import User


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._next_id = max(self._by_id, default=0) + 1
        self.fail_with: Optional[Exception] = None

    def list_all(self):
        if self.fail_with:
            raise self.fail_with
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def create(self, *, name, last_name, email, phone, position, salary):
        employee_id = self._next_id
        self._next_id += 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            last_name=last_name,
            email=email,
            phone=phone,
            position=position,
            salary=salary,
        )
        return employee_id

    def update(self, employee_id, **fields):
        current = self._by_id.get(int(employee_id))
        if not current:
            return False
        self._by_id[int(employee_id)] = replace(current, **fields)
        return True

    def delete_by_id(self, employee_id):
        return self._by_id.pop(int(employee_id), None) is not None


class InMemoryAttendance:
    def __init__(self, records=()):
        self._by_id: dict[int, AttendanceRecord] = {r.attendance_id: r for r in records}
        self._next_id = max(self._by_id, default=0) + 1
        self.fail_with: Optional[Exception] = None
        self.range_calls: list[tuple[date, date]] = []

    def get_by_id(self, attendance_id):
        return self._by_id.get(int(attendance_id))

    def get_for_employee_and_date(self, employee_id, attendance_date):
        for r in self._by_id.values():
            if r.employee_id == int(employee_id) and r.attendance_date == attendance_date:
                return r
        return None

    def create(self, *, employee_id, attendance_date, attended, work_description, is_double_day, justified, status, now):
        attendance_id = self._next_id
        self._next_id += 1
        self._by_id[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            attended=attended,
            status=status,
            is_double_day=is_double_day,
            justified=justified,
            work_description=work_description,
            created_at=now,
            updated_at=now,
        )
        return attendance_id

    def update_mark(self, *, attendance_id, attended, work_description, is_double_day, justified, now):
        current = self._by_id[int(attendance_id)]
        self._by_id[int(attendance_id)] = replace(
            current,
            attended=attended,
            work_description=work_description,
            is_double_day=is_double_day,
            justified=justified,
            updated_at=now,
        )
        return True

    def update_status(self, *, attendance_id, status, now):
        current = self._by_id[int(attendance_id)]
        self._by_id[int(attendance_id)] = replace(current, status=status, updated_at=now)
        return True

    def update_description(self, *, attendance_id, work_description, now):
        current = self._by_id[int(attendance_id)]
        self._by_id[int(attendance_id)] = replace(current, work_description=work_description, updated_at=now)
        return True

    def list_for_employee(self, employee_id):
        rows = [r for r in self._by_id.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: r.attendance_date, reverse=True)

    def list_all(self, *, status=None):
        rows = [r for r in self._by_id.values() if status is None or r.status == status]
        return sorted(rows, key=lambda r: r.attendance_date, reverse=True)

    def list_approved_in_range(self, start_date, end_date):
        self.range_calls.append((start_date, end_date))
        if self.fail_with:
            raise self.fail_with
        rows = [
            r
            for r in self._by_id.values()
            if r.status == AttendanceStatus.APPROVED and start_date <= r.attendance_date <= end_date
        ]
        return sorted(rows, key=lambda r: r.attendance_date)


class InMemoryAvailability:
    def __init__(self):
        self._by_id: dict[int, Availability] = {}
        self._next_id = 1

    def get_by_id(self, availability_id):
        return self._by_id.get(int(availability_id))

    def existing_dates(self, *, employee_id, dates):
        wanted = set(dates)
        return {a.work_date for a in self._by_id.values() if a.employee_id == int(employee_id) and a.work_date in wanted}

    def create_many(self, *, employee_id, dates, available):
        for d in dates:
            self._by_id[self._next_id] = Availability(
                availability_id=self._next_id,
                employee_id=int(employee_id),
                work_date=d,
                available=available,
            )
            self._next_id += 1
        return len(dates)

    def list_range(self, *, start, end, employee_id=None):
        rows = [
            a
            for a in self._by_id.values()
            if start <= a.work_date <= end and (employee_id is None or a.employee_id == int(employee_id))
        ]
        return sorted(rows, key=lambda a: a.work_date)

    def delete(self, *, availability_id):
        return self._by_id.pop(int(availability_id), None) is not None


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, user_id):
        return self._by_id.get(int(user_id))

    def get_by_username(self, username):
        for u in self._by_id.values():
            if u.username == username:
                return u
        return None

    def create_user(self, *, username, password_hash, role, employee_id):
        user_id = self._next_id
        self._next_id += 1
        self._by_id[user_id] = User(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            role=role,
            employee_id=employee_id,
        )
        return user_id

    def delete_by_id(self, user_id):
        return self._by_id.pop(int(user_id), None) is not None

    def list_all(self, *, role=None):
        return [u for u in self._by_id.values() if role is None or u.role == role]


def make_employee(employee_id: int, name: str, salary="0") -> Employee:
    return Employee(employee_id=employee_id, name=name, salary=Decimal(salary) if salary is not None else None)


def make_attendance(
    attendance_id: int,
    employee_id: int,
    day: date,
    *,
    attended: bool = True,
    is_double_day: bool = False,
    justified: bool = False,
    status: AttendanceStatus = AttendanceStatus.APPROVED,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        employee_id=employee_id,
        attendance_date=day,
        attended=attended,
        status=status,
        is_double_day=is_double_day,
        justified=justified,
        created_at=datetime(day.year, day.month, day.day, 9, 0),
    )


@pytest.fixture
def employees_repo():
    return InMemoryEmployees(
        [
            make_employee(1, "Ana", "500"),
            make_employee(2, "Bruno", "300"),
        ]
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance(
        [
            make_attendance(1, 1, date(2024, 3, 4)),
            make_attendance(2, 1, date(2024, 3, 5), is_double_day=True),
            make_attendance(3, 2, date(2024, 3, 4), status=AttendanceStatus.PENDING),
        ]
    )


@pytest.fixture
def container(employees_repo, attendance_repo):
    return assemble(
        employees_repo=employees_repo,
        users_repo=InMemoryUsers(),
        availability_repo=InMemoryAvailability(),
        attendance_repo=attendance_repo,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="workforce.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def login_as(client, *, role: Role, user_id: int = 1, employee_id: Optional[int] = None) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["username"] = "tester"
        sess["role"] = role.value
        sess["employee_id"] = employee_id


@pytest.fixture
def admin_client(client):
    login_as(client, role=Role.ADMIN)
    return client
