# factory_ops/data_access/document_gateway.py

import json
import math
import sqlite3
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from factory_ops.config import DOCUMENT_COLLECTION, DOCUMENT_ID
from factory_ops.data_access.database_manager import DatabaseManager
from factory_ops.data_access.default_data import get_default_factory_data

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """The document store could not be read or written."""


def sanitize_data(data: Any) -> Any:
    """
    Deep-copies data into plain JSON values.
    Cycles and non-plain objects become None, keys starting with '_' or '$' are dropped,
    dates become ISO strings, Decimals become floats and non-finite floats become None.
    """
    in_progress = set()

    def visit(obj):
        if obj is None or isinstance(obj, (bool, str, int)):
            return obj
        if isinstance(obj, float):
            return obj if math.isfinite(obj) else None
        if isinstance(obj, Decimal):
            return float(obj) if obj.is_finite() else None
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return visit(obj.value)
        if not isinstance(obj, (dict, list, tuple)):
            return None
        if id(obj) in in_progress:
            return None

        in_progress.add(id(obj))
        try:
            if isinstance(obj, dict):
                return {
                    str(key): visit(value)
                    for key, value in obj.items()
                    if not str(key).startswith(("_", "$"))
                }
            return [visit(item) for item in obj]
        finally:
            in_progress.discard(id(obj))

    return visit(data)


class FactoryDocumentGateway:
    """Reads and writes the single factory document."""

    def __init__(self, db_manager: DatabaseManager,
                 collection: str = DOCUMENT_COLLECTION, doc_id: str = DOCUMENT_ID):
        if db_manager is None:
            raise ValueError("db_manager cannot be None")
        self.db_manager = db_manager
        self.collection = collection
        self.doc_id = doc_id

    def initialize(self):
        try:
            self.db_manager.create_tables()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Could not prepare document store: {e}") from e

    def fetch_factory_data(self) -> Dict[str, Any]:
        """Returns the stored document, or the default document when none exists yet."""
        try:
            payload = self.db_manager.get_document(self.collection, self.doc_id)
        except sqlite3.Error as e:
            logger.warning(f"Document store unreachable: {e}")
            raise StoreUnavailableError("Offline") from e

        if payload is None:
            logger.info("No stored factory data found. Initializing with default data.")
            return get_default_factory_data()

        try:
            raw_data = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.error(f"Stored factory document is not valid JSON: {e}", exc_info=True)
            raise StoreUnavailableError("Stored document is corrupt") from e

        if not isinstance(raw_data, dict):
            raise StoreUnavailableError("Stored document is not an object")
        logger.info("Factory data loaded from document store.")
        return sanitize_data(raw_data)

    def save_factory_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitizes and writes the whole document. Returns what was written."""
        clean_data = sanitize_data(data)
        payload = json.dumps(clean_data, ensure_ascii=False, allow_nan=False)
        try:
            self.db_manager.set_document(
                self.collection, self.doc_id, payload, datetime.now().isoformat(timespec="seconds")
            )
        except sqlite3.Error as e:
            logger.warning(f"Saving factory data failed: {e}")
            raise StoreUnavailableError(f"Save failed: {e}") from e
        logger.debug(f"Factory document saved ({len(payload)} bytes).")
        return clean_data

    def last_updated(self) -> Optional[str]:
        row = self.db_manager.fetch_one(
            "SELECT updated_at FROM documents WHERE collection = ? AND doc_id = ?",
            (self.collection, self.doc_id),
        )
        return row["updated_at"] if row else None
