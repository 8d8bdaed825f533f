# factory_ops/business_logic/machine_manager.py

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from factory_ops.business_logic.entities.machine_entity import MachineEntity
from factory_ops.business_logic.entities.maintenance_log_entity import MaintenanceLogEntity
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import MACHINE_IDLE, MACHINE_RUNNING
from factory_ops.data_access.machines_repository import MachinesRepository
from factory_ops.data_access.maintenance_logs_repository import MaintenanceLogsRepository

logger = logging.getLogger(__name__)


class MachineManager:
    def __init__(self, machines_repository: MachinesRepository,
                 maintenance_logs_repository: MaintenanceLogsRepository,
                 settings_manager: SettingsManager):
        if machines_repository is None: raise ValueError("machines_repository cannot be None")
        if maintenance_logs_repository is None: raise ValueError("maintenance_logs_repository cannot be None")
        if settings_manager is None: raise ValueError("settings_manager cannot be None")
        self.machines_repo = machines_repository
        self.maintenance_repo = maintenance_logs_repository
        self.settings_manager = settings_manager

    def get_all_machines(self) -> List[MachineEntity]:
        return sorted(self.machines_repo.get_all(), key=lambda m: m.name)

    def add_machine(self, name: str, location: str = "", working_hours_per_day: Decimal = Decimal("24")) -> MachineEntity:
        if not name or not name.strip():
            raise ValueError("Machine name cannot be empty.")
        if self.machines_repo.get_by_name(name.strip()):
            raise ValueError(f"A machine named '{name.strip()}' already exists.")
        statuses = self.settings_manager.get_machine_statuses()
        machine = MachineEntity(
            name=name.strip(), location=location,
            status=MACHINE_IDLE if MACHINE_IDLE in statuses else statuses[0],
            working_hours_per_day=Decimal(str(working_hours_per_day)),
        )
        logger.info(f"Adding machine '{machine.name}'")
        return self.machines_repo.add(machine)

    def update_status(self, machine_id: str, status: str) -> MachineEntity:
        machine = self.machines_repo.get_by_id(machine_id)
        if not machine:
            raise ValueError(f"Machine with ID {machine_id} not found.")
        if status not in self.settings_manager.get_machine_statuses():
            raise ValueError(f"'{status}' is not a configured machine status.")
        if status == MACHINE_RUNNING and machine.status != MACHINE_RUNNING:
            machine.last_started_at = datetime.now().isoformat(timespec="seconds")
        machine.status = status
        logger.info(f"Machine '{machine.name}' status -> {status}")
        return self.machines_repo.update(machine)

    def delete_machine(self, machine_id: str) -> bool:
        return self.machines_repo.delete(machine_id)

    # --- maintenance ---

    def log_maintenance(self, machine_id: str, technician: str, maintenance_type: str,
                        downtime_hours: Decimal, description: str = "",
                        log_date: Optional[date] = None) -> MaintenanceLogEntity:
        if not self.machines_repo.get_by_id(machine_id):
            raise ValueError(f"Machine with ID {machine_id} not found.")
        downtime_hours = Decimal(str(downtime_hours))
        if downtime_hours < 0:
            raise ValueError("Downtime cannot be negative.")
        entry = MaintenanceLogEntity(
            machine_id=machine_id, technician=technician, type=maintenance_type,
            date=log_date or date.today(), downtime_hours=downtime_hours, description=description,
        )
        logger.info(f"Maintenance logged for machine {machine_id}: {maintenance_type}, {downtime_hours}h")
        return self.maintenance_repo.add(entry)

    def get_maintenance_logs(self, machine_id: Optional[str] = None) -> List[MaintenanceLogEntity]:
        logs = self.maintenance_repo.get_by_machine_id(machine_id) if machine_id else self.maintenance_repo.get_all()
        return sorted(logs, key=lambda l: l.date, reverse=True)

    def downtime_by_machine(self) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = {}
        for entry in self.maintenance_repo.get_all():
            totals[entry.machine_id] = totals.get(entry.machine_id, Decimal("0")) + entry.downtime_hours
        return totals
