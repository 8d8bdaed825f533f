# factory_ops/data_access/purchase_orders_repository.py

from typing import List, Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.purchase_order_entity import PurchaseOrderEntity
from factory_ops.constants import Collection, PurchaseOrderStatus

logger = logging.getLogger(__name__)

class PurchaseOrdersRepository(BaseRepository[PurchaseOrderEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=PurchaseOrderEntity,
                         collection_key=Collection.PURCHASE_ORDERS.value)

    def get_by_po_number(self, po_number: str) -> Optional[PurchaseOrderEntity]:
        found = self.find_by_criteria({"po_number": po_number})
        return found[0] if found else None

    def get_by_status(self, status: PurchaseOrderStatus) -> List[PurchaseOrderEntity]:
        return self.find_by_criteria({"status": status})

    def get_by_linked_document(self, doc_id: str) -> List[PurchaseOrderEntity]:
        return self.find_by_criteria({"linked_production_doc_id": doc_id})
