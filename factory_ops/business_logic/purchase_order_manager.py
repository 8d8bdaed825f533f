# factory_ops/business_logic/purchase_order_manager.py

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from factory_ops.business_logic.entities.purchase_order_entity import PurchaseOrderEntity
from factory_ops.business_logic.entities.purchase_order_item_entity import PurchaseOrderItemEntity
from factory_ops.business_logic.entities.quotation_entity import QuotationEntity
from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.constants import PURCHASE_LEAD_DAYS, PurchaseOrderStatus
from factory_ops.data_access.purchase_orders_repository import PurchaseOrdersRepository
from factory_ops.data_access.quotations_repository import QuotationsRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository
from factory_ops.data_access.suppliers_repository import SuppliersRepository
from factory_ops.utils.ids import next_sequence_number

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"


@dataclass
class SpendSummary:
    year: int
    total_spend: Decimal = Decimal("0")
    total_orders: int = 0
    total_items: Decimal = Decimal("0")
    # material id -> {'name', 'quantity', 'cost', 'unit'}, largest cost first
    by_material: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    # supplier id -> {'name', 'count', 'value'}, largest value first
    by_supplier: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    monthly: List[Decimal] = field(default_factory=lambda: [Decimal("0")] * 12)


class PurchaseOrderManager:
    def __init__(self, store: FactoryStore,
                 purchase_orders_repository: PurchaseOrdersRepository,
                 raw_materials_repository: RawMaterialsRepository,
                 suppliers_repository: SuppliersRepository,
                 quotations_repository: QuotationsRepository):
        if store is None: raise ValueError("store cannot be None")
        if purchase_orders_repository is None: raise ValueError("purchase_orders_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        if suppliers_repository is None: raise ValueError("suppliers_repository cannot be None")
        if quotations_repository is None: raise ValueError("quotations_repository cannot be None")
        self.store = store
        self.po_repo = purchase_orders_repository
        self.raw_material_repo = raw_materials_repository
        self.suppliers_repo = suppliers_repository
        self.quotations_repo = quotations_repository

    def _get_po(self, po_id: str) -> PurchaseOrderEntity:
        po = self.po_repo.get_by_id(po_id)
        if not po:
            raise ValueError(f"Purchase order with ID {po_id} not found.")
        return po

    def get_all_purchase_orders(self) -> List[PurchaseOrderEntity]:
        return sorted(self.po_repo.get_all(), key=lambda po: po.order_date, reverse=True)

    def next_po_number(self, today: Optional[date] = None) -> str:
        today = today or date.today()
        numbers = [po.po_number for po in self.po_repo.get_all()]
        return next_sequence_number(f"PUR-{today.year}", numbers)

    def create_purchase_order(self, supplier_id: Optional[str] = None,
                              items_data: Optional[List[Dict[str, Any]]] = None) -> PurchaseOrderEntity:
        """Builds an unsaved Pending order; defaults to the first supplier."""
        if supplier_id is None:
            suppliers = self.suppliers_repo.get_all()
            supplier_id = suppliers[0].id if suppliers else ""
        today = date.today()
        return PurchaseOrderEntity(
            po_number=self.next_po_number(today),
            supplier_id=supplier_id,
            order_date=today,
            expected_date=today + timedelta(days=PURCHASE_LEAD_DAYS),
            status=PurchaseOrderStatus.PENDING,
            items=[self._item_from_data(d) for d in (items_data or [])],
        )

    @staticmethod
    def _item_from_data(data: Dict[str, Any]) -> PurchaseOrderItemEntity:
        try:
            quantity = Decimal(str(data.get("quantity", "0")))
            unit_price = Decimal(str(data.get("unit_price", "0")))
        except InvalidOperation:
            raise ValueError(f"Invalid quantity or price in purchase order item: {data}")
        return PurchaseOrderItemEntity(
            raw_material_id=data.get("raw_material_id", ""),
            quantity=quantity,
            unit_price=unit_price,
        )

    def save_purchase_order(self, po: PurchaseOrderEntity) -> PurchaseOrderEntity:
        if not po.po_number or not po.po_number.strip():
            raise ValueError("PO number cannot be empty.")
        if not po.items:
            raise ValueError("A purchase order needs at least one item.")
        for idx, item in enumerate(po.items):
            if not item.raw_material_id:
                raise ValueError(f"Material for item {idx+1} is not set.")
            if item.quantity <= 0:
                raise ValueError(f"Quantity for item {idx+1} must be positive.")
            if item.unit_price < 0:
                raise ValueError(f"Unit price for item {idx+1} cannot be negative.")
        existing = self.po_repo.get_by_po_number(po.po_number)
        if existing and existing.id != po.id:
            raise ValueError(f"PO number '{po.po_number}' is already used.")
        logger.info(f"Saving purchase order {po.po_number} with {len(po.items)} items.")
        return self.po_repo.save(po)

    def delete_purchase_order(self, po_id: str) -> bool:
        return self.po_repo.delete(po_id)

    @staticmethod
    def calculate_total(po: PurchaseOrderEntity) -> Decimal:
        return sum((item.quantity * item.unit_price for item in po.items), Decimal("0"))

    def receive_stock(self, po_id: str) -> PurchaseOrderEntity:
        """Marks the order received and books every item into raw-material stock at its latest price."""
        po = self._get_po(po_id)
        if po.status == PurchaseOrderStatus.RECEIVED:
            raise ValueError(f"Purchase order {po.po_number} has already been received.")
        if po.status == PurchaseOrderStatus.CANCELLED:
            raise ValueError(f"Purchase order {po.po_number} is cancelled.")

        logger.info(f"Receiving stock for purchase order {po.po_number}")
        materials = {m.id: m for m in self.raw_material_repo.get_all()}
        changed = []
        for item in po.items:
            material = materials.get(item.raw_material_id)
            if material is None:
                logger.warning(f"PO {po.po_number}: material {item.raw_material_id} not found, item skipped.")
                continue
            material.quantity = (material.quantity or Decimal("0")) + item.quantity
            material.cost_per_unit = item.unit_price
            if material not in changed:
                changed.append(material)

        po.status = PurchaseOrderStatus.RECEIVED
        self.store.update_collections({
            self.po_repo.collection_key: self.po_repo.rows_with(po),
            self.raw_material_repo.collection_key: self.raw_material_repo.rows_with_all(changed),
        })
        return po

    # --- quotations ---

    def get_quotations(self, raw_material_id: str) -> List[QuotationEntity]:
        return self.quotations_repo.get_by_material(raw_material_id)

    def save_quotation(self, quotation: QuotationEntity) -> QuotationEntity:
        if not quotation.raw_material_id:
            raise ValueError("Quotation must reference a material.")
        if not quotation.supplier_id:
            raise ValueError("Quotation must reference a supplier.")
        if quotation.price_per_unit < 0:
            raise ValueError("Price per unit cannot be negative.")
        if quotation.lead_time_days < 0:
            raise ValueError("Lead time cannot be negative.")

        others = [q for q in self.quotations_repo.get_by_material(quotation.raw_material_id) if q.id != quotation.id]
        if quotation.is_preferred:
            for other in others:
                other.is_preferred = False
            rows = self.quotations_repo.rows_with_all(others + [quotation])
        else:
            rows = self.quotations_repo.rows_with(quotation)
        self.store.update_collections({self.quotations_repo.collection_key: rows})
        logger.info(f"Quotation {quotation.id} saved for material {quotation.raw_material_id}.")
        return quotation

    def delete_quotation(self, quotation_id: str) -> bool:
        return self.quotations_repo.delete(quotation_id)

    def best_price_quote(self, raw_material_id: str) -> Optional[QuotationEntity]:
        quotes = self.get_quotations(raw_material_id)
        return min(quotes, key=lambda q: q.price_per_unit) if quotes else None

    def fastest_lead_time_quote(self, raw_material_id: str) -> Optional[QuotationEntity]:
        quotes = self.get_quotations(raw_material_id)
        return min(quotes, key=lambda q: q.lead_time_days) if quotes else None

    # --- analytics ---

    def spend_summary(self, year: int) -> SpendSummary:
        summary = SpendSummary(year=year)
        materials = {m.id: m for m in self.raw_material_repo.get_all()}
        suppliers = {s.id: s for s in self.suppliers_repo.get_all()}
        by_material: Dict[str, Dict[str, Any]] = {}
        by_supplier: Dict[str, Dict[str, Any]] = {}

        for po in self.po_repo.get_all():
            if po.order_date.year != year or po.status == PurchaseOrderStatus.CANCELLED:
                continue
            po_total = Decimal("0")
            for item in po.items:
                cost = item.quantity * item.unit_price
                po_total += cost
                summary.total_items += item.quantity
                if item.raw_material_id not in by_material:
                    material = materials.get(item.raw_material_id)
                    by_material[item.raw_material_id] = {
                        "name": material.name if material else UNKNOWN_NAME,
                        "quantity": Decimal("0"),
                        "cost": Decimal("0"),
                        "unit": material.unit if material else "unit",
                    }
                by_material[item.raw_material_id]["quantity"] += item.quantity
                by_material[item.raw_material_id]["cost"] += cost

            if po.supplier_id not in by_supplier:
                supplier = suppliers.get(po.supplier_id)
                by_supplier[po.supplier_id] = {
                    "name": supplier.name if supplier else UNKNOWN_NAME, "count": 0, "value": Decimal("0"),
                }
            by_supplier[po.supplier_id]["count"] += 1
            by_supplier[po.supplier_id]["value"] += po_total

            summary.monthly[po.order_date.month - 1] += po_total
            summary.total_spend += po_total
            summary.total_orders += 1

        summary.by_material = dict(sorted(by_material.items(), key=lambda kv: kv[1]["cost"], reverse=True))
        summary.by_supplier = dict(sorted(by_supplier.items(), key=lambda kv: kv[1]["value"], reverse=True))
        return summary
