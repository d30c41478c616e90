from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .catalog.mysql_catalog_repository import MySQLCatalogRepository
from .catalog.repository import CatalogRepository
from .costing.calculator.standard_calculator import StandardCostCalculator
from .database.connection import DBConfig, DatabaseConnection
from .expenses.allocator import ExpenseAllocator
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.repository import ExpenseRepository
from .groups.mysql_group_repository import MySQLGroupRepository
from .groups.repository import GroupRepository
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .reports.service import LedgerReportService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository


@dataclass(frozen=True)
class Container:
    workers_repo: WorkerRepository
    groups_repo: GroupRepository
    catalog_repo: CatalogRepository
    attendance_repo: AttendanceRepository
    expenses_repo: ExpenseRepository
    payments_repo: PaymentRepository

    attendance_service: AttendanceService
    report_service: LedgerReportService


def wire_container(
    *,
    workers_repo: WorkerRepository,
    groups_repo: GroupRepository,
    catalog_repo: CatalogRepository,
    attendance_repo: AttendanceRepository,
    expenses_repo: ExpenseRepository,
    payments_repo: PaymentRepository,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        groups_repo,
        strategy_factory=AttendanceStrategyFactory(),
    )
    report_service = LedgerReportService(
        workers=workers_repo,
        groups=groups_repo,
        catalog=catalog_repo,
        attendance=attendance_repo,
        expenses=expenses_repo,
        payments=payments_repo,
        calculator=StandardCostCalculator(),
        allocator=ExpenseAllocator(),
    )

    return Container(
        workers_repo=workers_repo,
        groups_repo=groups_repo,
        catalog_repo=catalog_repo,
        attendance_repo=attendance_repo,
        expenses_repo=expenses_repo,
        payments_repo=payments_repo,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire_container(
        workers_repo=MySQLWorkerRepository(conn),
        groups_repo=MySQLGroupRepository(conn),
        catalog_repo=MySQLCatalogRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        expenses_repo=MySQLExpenseRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
    )
