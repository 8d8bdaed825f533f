# factory_ops/business_logic/production_order_manager.py

import base64
import logging
import time
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_CEILING
from typing import Any, Dict, List, Optional, Tuple

from factory_ops.business_logic.entities.material_requirement_entity import MaterialRequirement
from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.business_logic.entities.production_document_entity import ProductionDocumentEntity
from factory_ops.business_logic.entities.production_document_item_entity import ProductionDocumentItemEntity
from factory_ops.business_logic.entities.purchase_order_entity import PurchaseOrderEntity
from factory_ops.business_logic.entities.purchase_order_item_entity import PurchaseOrderItemEntity
from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.business_logic.material_requirements import compute_requirements, has_shortage
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.config import ITEMS_PER_PAGE
from factory_ops.constants import (
    ProductionDocumentStatus, PurchaseOrderStatus, PURCHASE_LEAD_DAYS, PURCHASE_REQUEST_BUFFER,
    STEP_WAITING_MOLDING, UNASSIGNED_MACHINE, UNASSIGNED_OPERATOR, DEFAULT_SHIFTS,
)
from factory_ops.data_access.molding_logs_repository import MoldingLogsRepository
from factory_ops.data_access.production_documents_repository import ProductionDocumentsRepository
from factory_ops.data_access.products_repository import ProductsRepository
from factory_ops.data_access.purchase_orders_repository import PurchaseOrdersRepository
from factory_ops.data_access.raw_materials_repository import RawMaterialsRepository
from factory_ops.data_access.suppliers_repository import SuppliersRepository
from factory_ops.utils.ids import generate_id, next_sequence_number, random_suffix

logger = logging.getLogger(__name__)

APPROVABLE_STATUSES = (ProductionDocumentStatus.DRAFT, ProductionDocumentStatus.MATERIAL_CHECKING)


@dataclass
class ApprovalResult:
    document: ProductionDocumentEntity
    approved: bool
    requirements: Dict[str, MaterialRequirement]
    created_logs: List[MoldingLogEntity] = field(default_factory=list)


class ProductionOrderManager:
    def __init__(self,
                 store: FactoryStore,
                 documents_repository: ProductionDocumentsRepository,
                 products_repository: ProductsRepository,
                 raw_materials_repository: RawMaterialsRepository,
                 molding_logs_repository: MoldingLogsRepository,
                 purchase_orders_repository: PurchaseOrdersRepository,
                 suppliers_repository: SuppliersRepository,
                 settings_manager: SettingsManager):
        if store is None: raise ValueError("store cannot be None")
        if documents_repository is None: raise ValueError("documents_repository cannot be None")
        if products_repository is None: raise ValueError("products_repository cannot be None")
        if raw_materials_repository is None: raise ValueError("raw_materials_repository cannot be None")
        if molding_logs_repository is None: raise ValueError("molding_logs_repository cannot be None")
        if purchase_orders_repository is None: raise ValueError("purchase_orders_repository cannot be None")
        if suppliers_repository is None: raise ValueError("suppliers_repository cannot be None")
        if settings_manager is None: raise ValueError("settings_manager cannot be None")

        self.store = store
        self.documents_repo = documents_repository
        self.products_repo = products_repository
        self.raw_material_repo = raw_materials_repository
        self.molding_logs_repo = molding_logs_repository
        self.purchase_orders_repo = purchase_orders_repository
        self.suppliers_repo = suppliers_repository
        self.settings_manager = settings_manager

    def _get_document(self, doc_id: str) -> ProductionDocumentEntity:
        doc = self.documents_repo.get_by_id(doc_id)
        if not doc:
            raise ValueError(f"Production document with ID {doc_id} not found.")
        return doc

    def get_document(self, doc_id: str) -> Optional[ProductionDocumentEntity]:
        return self.documents_repo.get_by_id(doc_id)

    def get_all_documents(self) -> List[ProductionDocumentEntity]:
        return sorted(self.documents_repo.get_all(), key=lambda d: d.date, reverse=True)

    def search_documents(self, text: str = "", page: int = 1,
                         page_size: int = ITEMS_PER_PAGE) -> Tuple[List[ProductionDocumentEntity], int]:
        """Matches doc number or customer name. Returns (page rows, total matches)."""
        needle = (text or "").strip().lower()
        docs = self.get_all_documents()
        if needle:
            docs = [d for d in docs if needle in d.doc_number.lower() or needle in (d.customer_name or "").lower()]
        page = max(1, page)
        start = (page - 1) * page_size
        return docs[start:start + page_size], len(docs)

    # --- document editing ---

    def next_doc_number(self, today: Optional[date] = None) -> str:
        today = today or date.today()
        numbers = [d.doc_number for d in self.documents_repo.get_all()]
        return next_sequence_number(f"PO-{today.year}", numbers)

    def new_document(self, customer_name: str = "", items: Optional[List[Dict[str, Any]]] = None,
                     created_by: str = "", note: Optional[str] = None) -> ProductionDocumentEntity:
        """Builds an unsaved Draft document."""
        doc_items = [self._item_from_data(d) for d in (items or [])]
        return ProductionDocumentEntity(
            doc_number=self.next_doc_number(),
            customer_name=customer_name,
            status=ProductionDocumentStatus.DRAFT,
            items=doc_items,
            created_by=created_by,
            note=note,
        )

    @staticmethod
    def _item_from_data(data: Dict[str, Any]) -> ProductionDocumentItemEntity:
        quantity = Decimal(str(data.get("quantity", "0")))
        return ProductionDocumentItemEntity(
            product_name=data.get("product_name", ""),
            product_id=data.get("product_id"),
            quantity=quantity,
            unit=data.get("unit") or "pcs",
            due_date=date.fromisoformat(data["due_date"]) if isinstance(data.get("due_date"), str) else data.get("due_date"),
            note=data.get("note"),
        )

    def save_document(self, doc: ProductionDocumentEntity) -> ProductionDocumentEntity:
        if doc is None:
            raise ValueError("Document cannot be None.")
        if not doc.doc_number or not doc.doc_number.strip():
            raise ValueError("Document number cannot be empty.")
        existing = self.documents_repo.get_by_doc_number(doc.doc_number)
        if existing and existing.id != doc.id:
            raise ValueError(f"Document number '{doc.doc_number}' is already used.")

        _, shortage = self.check_materials(doc)
        doc.material_shortage = shortage
        logger.info(f"Saving production document {doc.doc_number} (shortage={shortage}).")
        return self.documents_repo.save(doc)

    def delete_document(self, doc_id: str) -> bool:
        logger.info(f"Attempting to delete production document ID {doc_id}")
        return self.documents_repo.delete(doc_id)

    def attach_signed_document(self, doc_id: str, image_bytes: bytes, mime_type: str = "image/png") -> ProductionDocumentEntity:
        if not image_bytes:
            raise ValueError("The signed document file is empty.")
        if not mime_type.startswith("image/") and mime_type != "application/pdf":
            raise ValueError(f"Unsupported file type: {mime_type}")
        doc = self._get_document(doc_id)
        encoded = base64.b64encode(image_bytes).decode("ascii")
        doc.signed_image_url = f"data:{mime_type};base64,{encoded}"
        logger.info(f"Signed document attached to {doc.doc_number} ({len(image_bytes)} bytes).")
        return self.documents_repo.save(doc)

    # --- material check and approval ---

    def check_materials(self, doc: ProductionDocumentEntity) -> Tuple[Dict[str, MaterialRequirement], bool]:
        requirements = compute_requirements(doc, self.products_repo.get_all(), self.raw_material_repo.get_all())
        return requirements, has_shortage(requirements)

    def approve_document(self, doc_id: str) -> ApprovalResult:
        doc = self._get_document(doc_id)
        if doc.status not in APPROVABLE_STATUSES:
            raise ValueError(
                f"Document {doc.doc_number} is '{doc.status.value}' and cannot be approved."
            )

        requirements, shortage = self.check_materials(doc)
        doc.material_shortage = shortage
        created_logs: List[MoldingLogEntity] = []

        if shortage:
            doc.status = ProductionDocumentStatus.MATERIAL_CHECKING
            logger.warning(f"Document {doc.doc_number} has material shortages; moved to Material Checking.")
        else:
            doc.status = ProductionDocumentStatus.APPROVED
            created_logs = self._build_molding_logs(doc)
            logger.info(f"Document {doc.doc_number} approved; {len(created_logs)} production jobs created.")

        changes = {self.documents_repo.collection_key: self.documents_repo.rows_with(doc)}
        if created_logs:
            changes[self.molding_logs_repo.collection_key] = self.molding_logs_repo.rows_with_all(created_logs)
        self.store.update_collections(changes)

        return ApprovalResult(document=doc, approved=not shortage,
                              requirements=requirements, created_logs=created_logs)

    def _build_molding_logs(self, doc: ProductionDocumentEntity) -> List[MoldingLogEntity]:
        steps = self.settings_manager.get_production_steps()
        shifts = self.settings_manager.get_shifts()
        first_step = steps[0] if steps else STEP_WAITING_MOLDING
        first_shift = shifts[0] if shifts else DEFAULT_SHIFTS[0]
        today = date.today()

        return [
            MoldingLogEntity(
                id=generate_id(),
                job_id=f"JOB-{doc.doc_number}-{random_suffix(3)}",
                order_id=doc.id,
                product_name=item.product_name,
                product_id=item.product_id,
                lot_number=doc.doc_number,
                date=today,
                status=first_step,
                machine=UNASSIGNED_MACHINE,
                operator_name=UNASSIGNED_OPERATOR,
                shift=first_shift,
                quantity_produced=Decimal("0"),
                quantity_rejected=Decimal("0"),
                target_quantity=item.quantity,
            )
            for item in doc.items
        ]

    # --- purchasing shortfalls ---

    def create_purchase_request(self, doc_id: str, material_id: str, shortage_qty: Decimal) -> PurchaseOrderEntity:
        """Opens a purchase request for a shortfall, with 10% extra rounded up."""
        doc = self._get_document(doc_id)
        shortage_qty = Decimal(str(shortage_qty))
        if shortage_qty <= 0:
            raise ValueError("Shortage quantity must be positive.")

        material = self.raw_material_repo.get_by_id(material_id)
        if material is None:
            logger.warning(f"Purchase request for unknown material {material_id}.")
        suppliers = self.suppliers_repo.get_all()
        supplier_id = (material.default_supplier_id if material else None) or (suppliers[0].id if suppliers else "")
        quantity = (shortage_qty * PURCHASE_REQUEST_BUFFER).to_integral_value(rounding=ROUND_CEILING)
        today = date.today()

        request = PurchaseOrderEntity(
            id=generate_id(),
            po_number=f"PR-{today.year}-{str(int(time.time() * 1000))[-4:]}",
            supplier_id=supplier_id,
            order_date=today,
            expected_date=today + timedelta(days=PURCHASE_LEAD_DAYS),
            status=PurchaseOrderStatus.PENDING,
            items=[PurchaseOrderItemEntity(
                raw_material_id=material_id,
                quantity=quantity,
                unit_price=(material.cost_per_unit if material and material.cost_per_unit else Decimal("0")),
            )],
            linked_production_doc_id=doc.id,
        )
        doc.purchase_request_id = request.id

        self.store.update_collections({
            self.purchase_orders_repo.collection_key: self.purchase_orders_repo.rows_with(request),
            self.documents_repo.collection_key: self.documents_repo.rows_with(doc),
        })
        logger.info(f"Purchase request {request.po_number} created for document {doc.doc_number}: "
                    f"{quantity} of material {material_id}.")
        return request
