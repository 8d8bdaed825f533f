# factory_ops/data_access/production_documents_repository.py

from typing import List, Optional
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.production_document_entity import ProductionDocumentEntity
from factory_ops.constants import Collection, ProductionDocumentStatus

logger = logging.getLogger(__name__)

class ProductionDocumentsRepository(BaseRepository[ProductionDocumentEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=ProductionDocumentEntity,
                         collection_key=Collection.PRODUCTION_DOCUMENTS.value)

    def get_by_doc_number(self, doc_number: str) -> Optional[ProductionDocumentEntity]:
        found = self.find_by_criteria({"doc_number": doc_number})
        return found[0] if found else None

    def get_by_status(self, status: ProductionDocumentStatus) -> List[ProductionDocumentEntity]:
        return self.find_by_criteria({"status": status})

    def count(self) -> int:
        return len(self._rows())
