# factory_ops/business_logic/factory_store.py

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from factory_ops.constants import Collection
from factory_ops.data_access.default_data import get_default_factory_data
from factory_ops.data_access.document_gateway import (
    FactoryDocumentGateway, StoreUnavailableError, sanitize_data,
)

logger = logging.getLogger(__name__)

SAVED_LOCALLY_MESSAGE = "Saved locally only. The document store could not be reached."


class FactoryStore:
    """
    In-process holder of the whole factory document.
    Every mutation replaces the full document and writes it through the gateway.
    """

    def __init__(self, gateway: FactoryDocumentGateway):
        if gateway is None:
            raise ValueError("gateway cannot be None")
        self.gateway = gateway
        self._data: Dict[str, Any] = {}
        self._subscribers: List[Callable[[Dict[str, Any]], None]] = []
        self.is_loaded = False
        self.is_offline = False
        self.last_error: Optional[str] = None

    def load(self) -> Dict[str, Any]:
        try:
            self.gateway.initialize()
            data = self.gateway.fetch_factory_data()
            self.is_offline = False
            self.last_error = None
        except StoreUnavailableError as e:
            logger.warning(f"Document store unavailable, switching to local mode: {e}")
            data = get_default_factory_data()
            self.is_offline = True
            self.last_error = str(e)
        self._data = data
        self.is_loaded = True
        self._notify()
        return self.data

    @property
    def data(self) -> Dict[str, Any]:
        """Snapshot of the current document. Mutating it does not affect the store."""
        return copy.deepcopy(self._data)

    def get_collection(self, key: str) -> List[Dict[str, Any]]:
        rows = self._data.get(key)
        if not isinstance(rows, list):
            return []
        return copy.deepcopy(rows)

    def get_settings(self) -> Dict[str, Any]:
        settings = self._data.get(Collection.SETTINGS.value)
        return copy.deepcopy(settings) if isinstance(settings, dict) else {}

    def update_data(self, new_data: Dict[str, Any]):
        if new_data is None:
            raise ValueError("new_data cannot be None")
        clean_data = sanitize_data(new_data)
        self._data = clean_data
        try:
            self.gateway.save_factory_data(clean_data)
            self.is_offline = False
            self.last_error = None
        except StoreUnavailableError as e:
            logger.warning(f"Factory data kept in memory only: {e}")
            self.is_offline = True
            self.last_error = SAVED_LOCALLY_MESSAGE
        self._notify()

    def update_collections(self, changes: Dict[str, Any]):
        """Replaces several top-level keys in one document write."""
        if not changes:
            return
        new_data = dict(self._data)
        new_data.update(changes)
        logger.debug(f"Updating collections: {', '.join(changes.keys())}")
        self.update_data(new_data)

    def replace_collection(self, key: str, rows: List[Dict[str, Any]]):
        self.update_collections({key: rows})

    def reset_data(self):
        logger.info("Resetting factory data to defaults.")
        self.update_data(get_default_factory_data())

    def subscribe(self, callback: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self.data)
