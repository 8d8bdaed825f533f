# factory_ops/business_logic/qc_manager.py

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.business_logic.entities.qc_entry_entity import QCEntryEntity
from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.business_logic.material_requirements import resolve_product
from factory_ops.constants import (
    DEFAULT_PIECE_UNIT, InventoryCategory, InventorySource, QCDestination, QCStatus,
    STEP_FINISHED, STEP_WAITING_COUNT,
)
from factory_ops.data_access.finished_goods_repository import FinishedGoodsRepository
from factory_ops.data_access.molding_logs_repository import MoldingLogsRepository
from factory_ops.data_access.products_repository import ProductsRepository
from factory_ops.data_access.qc_entries_repository import QCEntriesRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository
from factory_ops.utils.ids import generate_id

logger = logging.getLogger(__name__)


@dataclass
class QCResult:
    log: MoldingLogEntity
    destination: QCDestination
    stocked_item: InventoryItemEntity
    deducted: Dict[str, Decimal]


class QCManager:
    def __init__(self, store: FactoryStore,
                 molding_logs_repository: MoldingLogsRepository,
                 finished_goods_repository: FinishedGoodsRepository,
                 raw_materials_repository: RawMaterialsRepository,
                 products_repository: ProductsRepository,
                 qc_entries_repository: QCEntriesRepository):
        if store is None: raise ValueError("store cannot be None")
        if molding_logs_repository is None: raise ValueError("molding_logs_repository cannot be None")
        if finished_goods_repository is None: raise ValueError("finished_goods_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        if products_repository is None: raise ValueError("products_repository cannot be None")
        if qc_entries_repository is None: raise ValueError("qc_entries_repository cannot be None")
        self.store = store
        self.molding_logs_repo = molding_logs_repository
        self.finished_goods_repo = finished_goods_repository
        self.raw_material_repo = raw_materials_repository
        self.products_repo = products_repository
        self.qc_entries_repo = qc_entries_repository

    def get_pending_jobs(self) -> List[MoldingLogEntity]:
        return self.molding_logs_repo.get_by_status(STEP_WAITING_COUNT)

    @staticmethod
    def _find_by_name(items: List[InventoryItemEntity], name: str) -> Optional[InventoryItemEntity]:
        for item in items:
            if item.name == name:
                return item
        return None

    def process_job(self, log_id: str, destination: QCDestination) -> QCResult:
        """
        Closes a counted job: stocks the produced quantity and consumes the product's BOM.
        Log, stock and material changes go out in one write.
        """
        log = self.molding_logs_repo.get_by_id(log_id)
        if not log:
            raise ValueError(f"Production log with ID {log_id} not found.")
        if log.status == STEP_FINISHED:
            raise ValueError(f"Job {log.job_id} has already been processed.")
        destination = QCDestination(destination)
        produced = log.quantity_produced or Decimal("0")
        logger.info(f"Processing QC for job {log.job_id}: {produced} x '{log.product_name}' -> {destination.value}")

        log.status = STEP_FINISHED
        finished_goods = self.finished_goods_repo.get_all()
        raw_materials = self.raw_material_repo.get_all()

        if destination == QCDestination.FINISHED:
            stocked = self._find_by_name(finished_goods, log.product_name)
            if stocked:
                stocked.quantity = (stocked.quantity or Decimal("0")) + produced
            else:
                stocked = InventoryItemEntity(
                    id=generate_id(), name=log.product_name, quantity=produced, unit=DEFAULT_PIECE_UNIT,
                    category=InventoryCategory.FINISHED.value, source=InventorySource.PRODUCED.value,
                )
                finished_goods.append(stocked)
        else:
            stocked = self._find_by_name(raw_materials, log.product_name)
            if stocked:
                stocked.quantity = (stocked.quantity or Decimal("0")) + produced
                stocked.category = InventoryCategory.COMPONENT.value
                stocked.source = InventorySource.PRODUCED.value
            else:
                stocked = InventoryItemEntity(
                    id=generate_id(), name=log.product_name, quantity=produced, unit=DEFAULT_PIECE_UNIT,
                    category=InventoryCategory.COMPONENT.value, source=InventorySource.PRODUCED.value,
                )
                raw_materials.append(stocked)

        deducted: Dict[str, Decimal] = {}
        product = resolve_product(log.product_name, log.product_id, self.products_repo.get_all())
        if product and product.bom:
            materials_by_id = {m.id: m for m in raw_materials}
            for bom_item in product.bom:
                material = materials_by_id.get(bom_item.material_id)
                if material is None:
                    logger.warning(f"BOM material {bom_item.material_id} of '{product.name}' not in stock list.")
                    continue
                amount = bom_item.quantity_per_unit * produced
                material.quantity = max(Decimal("0"), (material.quantity or Decimal("0")) - amount)
                deducted[material.id] = deducted.get(material.id, Decimal("0")) + amount

        changes = {
            self.molding_logs_repo.collection_key: self.molding_logs_repo.rows_with(log),
            self.raw_material_repo.collection_key: self.raw_material_repo.rows_with_all(raw_materials),
        }
        if destination == QCDestination.FINISHED:
            changes[self.finished_goods_repo.collection_key] = self.finished_goods_repo.rows_with_all(finished_goods)
        self.store.update_collections(changes)
        return QCResult(log=log, destination=destination, stocked_item=stocked, deducted=deducted)

    # --- inspection entries ---

    def get_entries(self, status: Optional[QCStatus] = None) -> List[QCEntryEntity]:
        if status:
            return self.qc_entries_repo.get_by_status(status)
        return self.qc_entries_repo.get_all()

    def record_inspection(self, entry_id: str, status: QCStatus, inspector: str,
                          reasons: Optional[List[str]] = None, notes: Optional[str] = None) -> QCEntryEntity:
        entry = self.qc_entries_repo.get_by_id(entry_id)
        if not entry:
            raise ValueError(f"QC entry with ID {entry_id} not found.")
        status = QCStatus(status)
        if not inspector or not inspector.strip():
            raise ValueError("Inspector name is required.")
        if status == QCStatus.FAILED and not reasons:
            raise ValueError("A failed inspection needs at least one reason.")
        entry.status = status
        entry.qc_inspector = inspector.strip()
        entry.reasons = list(reasons or [])
        entry.notes = notes
        entry.qc_date = date.today()
        logger.info(f"QC entry {entry_id} recorded as {status.value} by {entry.qc_inspector}")
        return self.qc_entries_repo.update(entry)
