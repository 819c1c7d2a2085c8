from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_punch_log_repository import MySQLPunchLogRepository
from .attendance.service import AttendanceService
from .billing.client import PaymentStatusClient
from .core.constants import DEFAULT_SHIFT_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .media.stamping import ImageStamper
from .progress.service import ProgressService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.service import StaffService
from .store.event_store import EventStore
from .store.mutations import MutationHandler
from .supplies.mysql_supply_repository import MySQLSupplyRequestRepository
from .supplies.service import SupplyService
from .tasks.mysql_task_log_repository import MySQLTaskLogRepository
from .tasks.service import TaskService
from .topology.building import DEFAULT_CATALOG, DEFAULT_TOPOLOGY
from .topology.catalog import TaskCatalog
from .topology.model import BuildingTopology


@dataclass(frozen=True)
class Container:
    topology: BuildingTopology
    catalog: TaskCatalog

    store: EventStore
    mutations: MutationHandler
    billing: PaymentStatusClient
    stamper: ImageStamper

    task_service: TaskService
    progress_service: ProgressService
    attendance_service: AttendanceService
    supply_service: SupplyService
    staff_service: StaffService


def assemble(
    store: EventStore,
    *,
    billing: PaymentStatusClient,
    stamper: ImageStamper,
    topology: BuildingTopology = DEFAULT_TOPOLOGY,
    catalog: TaskCatalog = DEFAULT_CATALOG,
    shift_minutes: int = DEFAULT_SHIFT_MINUTES,
) -> Container:
    mutations = MutationHandler(store)
    return Container(
        topology=topology,
        catalog=catalog,
        store=store,
        mutations=mutations,
        billing=billing,
        stamper=stamper,
        task_service=TaskService(store, mutations, topology, catalog, stamper=stamper),
        progress_service=ProgressService(store, billing, topology, catalog),
        attendance_service=AttendanceService(store, mutations, shift_minutes=shift_minutes),
        supply_service=SupplyService(store, mutations),
        staff_service=StaffService(store),
    )


def build_container(
    *,
    db_config: dict,
    billing_url: Optional[str] = None,
    upload_url: Optional[str] = None,
    http_timeout: float = 10.0,
    shift_minutes: int = DEFAULT_SHIFT_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    store = EventStore(
        staff=MySQLStaffRepository(conn),
        task_logs=MySQLTaskLogRepository(conn),
        punch_logs=MySQLPunchLogRepository(conn),
        supply_requests=MySQLSupplyRequestRepository(conn),
    )
    return assemble(
        store,
        billing=PaymentStatusClient(billing_url, timeout=http_timeout),
        stamper=ImageStamper(upload_url, timeout=http_timeout),
        shift_minutes=shift_minutes,
    )
