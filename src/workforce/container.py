from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .availability.mysql_availability_repository import MySQLAvailabilityRepository
from .availability.repository import AvailabilityRepository
from .availability.service import AvailabilityService
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.service import PayrollReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    users_repo: UserRepository
    availability_repo: AvailabilityRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    availability_service: AvailabilityService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService


def assemble(
    *,
    employees_repo: EmployeeRepository,
    users_repo: UserRepository,
    availability_repo: AvailabilityRepository,
    attendance_repo: AttendanceRepository,
    timezone: str = DEFAULT_TIMEZONE,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        users_repo=users_repo,
        availability_repo=availability_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, employees_repo),
        employee_service=EmployeeService(employees_repo),
        availability_service=AvailabilityService(availability_repo),
        attendance_service=AttendanceService(attendance_repo, timezone=timezone),
        payroll_report_service=PayrollReportService(employees_repo, attendance_repo),
    )


def build_container(*, db_config: dict, timezone: str = DEFAULT_TIMEZONE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        users_repo=MySQLUserRepository(conn),
        availability_repo=MySQLAvailabilityRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        timezone=timezone,
        conn=conn,
    )
