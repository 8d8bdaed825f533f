# factory_ops/data_access/qc_entries_repository.py

from typing import List
import logging

from factory_ops.data_access.base_repository import BaseRepository
from factory_ops.business_logic.entities.qc_entry_entity import QCEntryEntity
from factory_ops.constants import Collection, QCStatus

logger = logging.getLogger(__name__)

class QCEntriesRepository(BaseRepository[QCEntryEntity]):
    def __init__(self, store):
        super().__init__(store=store,
                         model_type=QCEntryEntity,
                         collection_key=Collection.QC_ENTRIES.value)

    def get_by_status(self, status: QCStatus) -> List[QCEntryEntity]:
        return self.find_by_criteria({"status": status})
