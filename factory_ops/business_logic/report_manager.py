# factory_ops/business_logic/report_manager.py

import logging
from decimal import Decimal
from typing import Any, Dict

from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.constants import Collection, MACHINE_RUNNING, QCStatus
from factory_ops.data_access.employees_repository import EmployeesRepository
from factory_ops.data_access.machines_repository import MachinesRepository
from factory_ops.data_access.molding_logs_repository import MoldingLogsRepository
from factory_ops.data_access.production_documents_repository import ProductionDocumentsRepository
from factory_ops.data_access.qc_entries_repository import QCEntriesRepository

logger = logging.getLogger(__name__)


class ReportManager:
    def __init__(self, store: FactoryStore,
                 machines_repository: MachinesRepository,
                 molding_logs_repository: MoldingLogsRepository,
                 qc_entries_repository: QCEntriesRepository,
                 documents_repository: ProductionDocumentsRepository,
                 employees_repository: EmployeesRepository):
        if store is None: raise ValueError("store cannot be None")
        if machines_repository is None: raise ValueError("machines_repository cannot be None")
        if molding_logs_repository is None: raise ValueError("molding_logs_repository cannot be None")
        if qc_entries_repository is None: raise ValueError("qc_entries_repository cannot be None")
        if documents_repository is None: raise ValueError("documents_repository cannot be None")
        if employees_repository is None: raise ValueError("employees_repository cannot be None")
        self.store = store
        self.machines_repo = machines_repository
        self.molding_logs_repo = molding_logs_repository
        self.qc_entries_repo = qc_entries_repository
        self.documents_repo = documents_repository
        self.employees_repo = employees_repository

    def dashboard_summary(self) -> Dict[str, Any]:
        machines = self.machines_repo.get_all()
        logs = self.molding_logs_repo.get_all()
        qc_entries = self.qc_entries_repo.get_all()

        produced_by_machine: Dict[str, Decimal] = {}
        for log in logs:
            produced_by_machine[log.machine] = produced_by_machine.get(log.machine, Decimal("0")) + log.quantity_produced

        summary = {
            "total_orders": len(self.store.get_collection(Collection.PACKING_ORDERS.value)),
            "production_documents": self.documents_repo.count(),
            "active_machines": sum(1 for m in machines if m.status == MACHINE_RUNNING),
            "total_machines": len(machines),
            "total_produced": sum((log.quantity_produced for log in logs), Decimal("0")),
            "qc_pending": sum(1 for e in qc_entries if e.status == QCStatus.PENDING),
            "qc_passed": sum(1 for e in qc_entries if e.status == QCStatus.PASSED),
            "qc_failed": sum(1 for e in qc_entries if e.status == QCStatus.FAILED),
            "produced_by_machine": produced_by_machine,
            "active_employees": len(self.employees_repo.get_active()),
        }
        logger.debug(f"Dashboard summary: {summary}")
        return summary
