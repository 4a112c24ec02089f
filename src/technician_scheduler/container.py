from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.service import AssignmentService
from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .common.clock import BusinessClock
from .core.constants import DEFAULT_DAY_CUTOFF_MINUTES, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import MemoryStore, MemoryTransactionManager
from .database.transactions import MySQLTransactionManager, TransactionManager
from .days.memory_business_day_repository import MemoryBusinessDayRepository
from .days.mysql_business_day_repository import MySQLBusinessDayRepository
from .days.repository import BusinessDayRepository
from .days.service import DayAdvanceService
from .memberships.memory_membership_repository import MemoryMembershipRepository
from .memberships.mysql_membership_repository import MySQLMembershipRepository
from .memberships.repository import MembershipRepository
from .memberships.service import MembershipLedger
from .projects.memory_project_repository import MemoryProjectRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.service import ManDayReportService
from .technicians.memory_technician_repository import MemoryTechnicianRepository
from .technicians.mysql_technician_repository import MySQLTechnicianRepository
from .technicians.repository import TechnicianRepository
from .technicians.service import TechnicianService


@dataclass(frozen=True)
class Container:
    clock: BusinessClock
    transactions: TransactionManager

    technicians_repo: TechnicianRepository
    projects_repo: ProjectRepository
    memberships_repo: MembershipRepository
    attendance_repo: AttendanceRepository
    days_repo: BusinessDayRepository

    membership_ledger: MembershipLedger
    attendance_ledger: AttendanceLedger
    assignment_service: AssignmentService
    project_service: ProjectService
    technician_service: TechnicianService
    day_service: DayAdvanceService
    report_service: ManDayReportService


def _wire(
    *,
    clock: BusinessClock,
    transactions: TransactionManager,
    technicians_repo: TechnicianRepository,
    projects_repo: ProjectRepository,
    memberships_repo: MembershipRepository,
    attendance_repo: AttendanceRepository,
    days_repo: BusinessDayRepository,
) -> Container:
    membership_ledger = MembershipLedger(memberships_repo, clock)
    attendance_ledger = AttendanceLedger(attendance_repo)

    assignment_service = AssignmentService(
        projects_repo,
        technicians_repo,
        membership_ledger,
        attendance_ledger,
        transactions,
    )
    project_service = ProjectService(projects_repo, attendance_repo, membership_ledger, transactions, clock)
    technician_service = TechnicianService(technicians_repo, memberships_repo, projects_repo)
    day_service = DayAdvanceService(days_repo, clock)
    report_service = ManDayReportService(projects_repo, attendance_repo, technicians_repo)

    return Container(
        clock=clock,
        transactions=transactions,
        technicians_repo=technicians_repo,
        projects_repo=projects_repo,
        memberships_repo=memberships_repo,
        attendance_repo=attendance_repo,
        days_repo=days_repo,
        membership_ledger=membership_ledger,
        attendance_ledger=attendance_ledger,
        assignment_service=assignment_service,
        project_service=project_service,
        technician_service=technician_service,
        day_service=day_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    cutoff_minutes: int = DEFAULT_DAY_CUTOFF_MINUTES,
) -> Container:
    clock = BusinessClock(timezone=timezone, cutoff_minutes=int(cutoff_minutes))
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return _wire(
        clock=clock,
        transactions=MySQLTransactionManager(conn),
        technicians_repo=MySQLTechnicianRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        memberships_repo=MySQLMembershipRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        days_repo=MySQLBusinessDayRepository(conn),
    )


def build_memory_container(
    *,
    clock: Optional[BusinessClock] = None,
    store: Optional[MemoryStore] = None,
) -> Container:
    clock = clock or BusinessClock()
    store = store or MemoryStore()

    return _wire(
        clock=clock,
        transactions=MemoryTransactionManager(store),
        technicians_repo=MemoryTechnicianRepository(store),
        projects_repo=MemoryProjectRepository(store),
        memberships_repo=MemoryMembershipRepository(store),
        attendance_repo=MemoryAttendanceRepository(store),
        days_repo=MemoryBusinessDayRepository(store),
    )
