# factory_ops/business_logic/production_manager.py

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, List, Optional

from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import JobHealth, NEAR_COMPLETION_PERCENT, ProductionDocumentStatus
from factory_ops.data_access.molding_logs_repository import MoldingLogsRepository
from factory_ops.data_access.production_documents_repository import ProductionDocumentsRepository
from factory_ops.data_access.products_repository import ProductsRepository

logger = logging.getLogger(__name__)

DEFAULT_CYCLE_TIME_SECONDS = Decimal("15")
SECONDS_PER_HOUR = 3600


@dataclass
class JobProgress:
    doc_id: str
    doc_number: str
    customer: str
    product_name: str
    product_id: Optional[str]
    target: Decimal
    total_produced: Decimal
    progress: Decimal
    health: JobHealth
    due_date: Optional[date] = None


@dataclass
class CapacitySimulation:
    total_units: Decimal
    total_seconds_required: Decimal
    capacity_seconds_per_day: Decimal
    days_needed: Decimal
    percent_finishable: Decimal
    units_finishable: int
    is_overload: bool


class ProductionManager:
    def __init__(self, molding_logs_repository: MoldingLogsRepository,
                 documents_repository: ProductionDocumentsRepository,
                 products_repository: ProductsRepository,
                 settings_manager: SettingsManager):
        if molding_logs_repository is None: raise ValueError("molding_logs_repository cannot be None")
        if documents_repository is None: raise ValueError("documents_repository cannot be None")
        if products_repository is None: raise ValueError("products_repository cannot be None")
        if settings_manager is None: raise ValueError("settings_manager cannot be None")
        self.molding_logs_repo = molding_logs_repository
        self.documents_repo = documents_repository
        self.products_repo = products_repository
        self.settings_manager = settings_manager

    # --- molding logs ---

    def get_logs(self, log_date: Optional[date] = None) -> List[MoldingLogEntity]:
        if log_date:
            return self.molding_logs_repo.get_by_date(log_date)
        return sorted(self.molding_logs_repo.get_all(), key=lambda l: l.date, reverse=True)

    def _validate_log(self, log: MoldingLogEntity):
        if not log.product_name or not log.product_name.strip():
            raise ValueError("Product name is required for a production log.")
        if log.quantity_produced < 0 or log.quantity_rejected < 0:
            raise ValueError("Produced and rejected quantities cannot be negative.")
        steps = self.settings_manager.get_production_steps()
        if log.status and log.status not in steps:
            raise ValueError(f"'{log.status}' is not a configured production step.")

    def add_log(self, log: MoldingLogEntity) -> MoldingLogEntity:
        logger.info(f"Adding production log for '{log.product_name}' (job {log.job_id})")
        if not log.status:
            log.status = self.settings_manager.get_production_steps()[0]
        self._validate_log(log)
        return self.molding_logs_repo.add(log)

    def update_log(self, log_id: str, update_data: Dict[str, Any]) -> MoldingLogEntity:
        log = self.molding_logs_repo.get_by_id(log_id)
        if not log:
            raise ValueError(f"Production log with ID {log_id} not found.")
        for key, value in update_data.items():
            if key == "id":
                continue
            if not hasattr(log, key):
                raise ValueError(f"Unknown production log field '{key}'.")
            if key in ("quantity_produced", "quantity_rejected", "target_quantity", "hours") and value is not None:
                value = Decimal(str(value))
            setattr(log, key, value)
        self._validate_log(log)
        logger.info(f"Updating production log {log_id}: {update_data}")
        return self.molding_logs_repo.update(log)

    def delete_log(self, log_id: str) -> bool:
        return self.molding_logs_repo.delete(log_id)

    # --- progress ---

    @staticmethod
    def classify_progress(progress: Decimal) -> JobHealth:
        if progress >= 100:
            return JobHealth.COMPLETED
        if progress == 0:
            return JobHealth.NOT_STARTED
        if progress >= NEAR_COMPLETION_PERCENT:
            return JobHealth.NEAR_COMPLETION
        return JobHealth.IN_PROGRESS

    def get_job_progress(self) -> List[JobProgress]:
        """One entry per document line: produced quantity of matching logs against the line target."""
        logs = self.molding_logs_repo.get_all()
        jobs = []
        for doc in self.documents_repo.get_all():
            for item in doc.items:
                total_produced = sum(
                    (log.quantity_produced for log in logs
                     if log.order_id == doc.id and log.product_name == item.product_name),
                    Decimal("0"),
                )
                progress = total_produced / item.quantity * 100 if item.quantity > 0 else Decimal("0")
                health = self.classify_progress(progress)
                if doc.status == ProductionDocumentStatus.DRAFT:
                    health = JobHealth.DRAFT
                jobs.append(JobProgress(
                    doc_id=doc.id, doc_number=doc.doc_number, customer=doc.customer_name,
                    product_name=item.product_name, product_id=item.product_id,
                    target=item.quantity, total_produced=total_produced,
                    progress=progress, health=health, due_date=item.due_date,
                ))
        return jobs

    # --- capacity ---

    def remaining_work(self) -> List[Dict[str, Any]]:
        """Unproduced quantity of every non-draft line, in the shape simulate_capacity takes."""
        items = []
        for job in self.get_job_progress():
            if job.health in (JobHealth.DRAFT, JobHealth.COMPLETED):
                continue
            remaining = job.target - job.total_produced
            if remaining > 0:
                items.append({"product_id": job.product_id, "quantity": remaining})
        return items

    def simulate_capacity(self, items: List[Dict[str, Any]], machines: int,
                          hours_per_day: Decimal, target_days: int) -> CapacitySimulation:
        """
        items: [{'product_id': ..., 'quantity': ...}] with an optional 'cycle_time' override.
        Cycle time falls back to the product's, then to 15 seconds.
        """
        if machines < 0 or target_days < 0 or Decimal(str(hours_per_day)) < 0:
            raise ValueError("Machines, hours per day and target days cannot be negative.")

        total_units = Decimal("0")
        total_seconds = Decimal("0")
        for item in items:
            quantity = Decimal(str(item.get("quantity", 0)))
            cycle_time = item.get("cycle_time")
            if cycle_time is None:
                product = self.products_repo.get_by_id(item.get("product_id"))
                cycle_time = product.cycle_time_seconds if product and product.cycle_time_seconds else DEFAULT_CYCLE_TIME_SECONDS
            total_units += quantity
            total_seconds += quantity * Decimal(str(cycle_time))

        capacity_per_day = Decimal(machines) * Decimal(str(hours_per_day)) * SECONDS_PER_HOUR
        days_needed = total_seconds / capacity_per_day if capacity_per_day > 0 else Decimal("0")
        capacity_in_target = capacity_per_day * target_days
        if total_seconds > 0:
            percent = min(capacity_in_target / total_seconds * 100, Decimal("100"))
            units = int((total_units * percent / 100).to_integral_value(rounding=ROUND_FLOOR))
        else:
            percent = Decimal("0")
            units = 0

        result = CapacitySimulation(
            total_units=total_units,
            total_seconds_required=total_seconds,
            capacity_seconds_per_day=capacity_per_day,
            days_needed=days_needed,
            percent_finishable=percent,
            units_finishable=units,
            is_overload=days_needed > target_days,
        )
        logger.debug(f"Capacity simulation: {result}")
        return result
