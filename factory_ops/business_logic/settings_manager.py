# factory_ops/business_logic/settings_manager.py

import csv
import io
import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from factory_ops.business_logic.factory_store import FactoryStore
from factory_ops.constants import (
    Collection, DEFAULT_LOW_STOCK_THRESHOLD, DEFAULT_MACHINE_STATUSES,
    DEFAULT_PRODUCTION_STEPS, DEFAULT_SHIFTS, MACHINE_IDLE,
)
from factory_ops.data_access.document_gateway import sanitize_data

logger = logging.getLogger(__name__)

RESET_OPTIONS = ("orders", "logs", "inventory", "materials", "qc", "machines")


class SettingsManager:
    def __init__(self, store: FactoryStore):
        if store is None:
            raise ValueError("store cannot be None")
        self.store = store

    # --- reading ---

    def get_settings(self) -> Dict[str, Any]:
        return self.store.get_settings()

    def _production_config(self) -> Dict[str, Any]:
        config = self.get_settings().get("productionConfig")
        return config if isinstance(config, dict) else {}

    def get_shifts(self) -> List[str]:
        return list(self._production_config().get("shifts") or DEFAULT_SHIFTS)

    def get_production_steps(self) -> List[str]:
        return list(self.get_settings().get("productionSteps") or DEFAULT_PRODUCTION_STEPS)

    def get_machine_statuses(self) -> List[str]:
        return list(self.get_settings().get("machineStatuses") or DEFAULT_MACHINE_STATUSES)

    def get_qc_reject_reasons(self) -> List[str]:
        return list(self.get_settings().get("qcRejectReasons") or [])

    def get_low_stock_threshold(self) -> Decimal:
        value = self._production_config().get("lowStockThreshold")
        if value is None:
            return DEFAULT_LOW_STOCK_THRESHOLD
        try:
            return Decimal(str(value))
        except InvalidOperation:
            logger.warning(f"Invalid lowStockThreshold '{value}' in settings, using default.")
            return DEFAULT_LOW_STOCK_THRESHOLD

    def get_company_info(self) -> Dict[str, Any]:
        info = self.get_settings().get("companyInfo")
        return info if isinstance(info, dict) else {}

    # --- updating ---

    def _save_settings(self, settings: Dict[str, Any]):
        self.store.update_collections({Collection.SETTINGS.value: settings})

    def update_company_info(self, company_info: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Updating company info: {list(company_info.keys())}")
        if "name" in company_info and not str(company_info["name"]).strip():
            raise ValueError("Company name cannot be empty.")
        settings = self.get_settings()
        merged = dict(settings.get("companyInfo") or {})
        merged.update(company_info)
        settings["companyInfo"] = merged
        self._save_settings(settings)
        return merged

    def update_production_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Updating production config: {config}")
        if "shifts" in config and not config["shifts"]:
            raise ValueError("At least one shift is required.")
        threshold = config.get("lowStockThreshold")
        if threshold is not None:
            try:
                threshold_value = Decimal(str(threshold))
            except InvalidOperation:
                raise ValueError(f"Low stock threshold is not a valid number: '{threshold}'.")
            if threshold_value < 0:
                raise ValueError("Low stock threshold cannot be negative.")
        settings = self.get_settings()
        merged = dict(settings.get("productionConfig") or {})
        merged.update(config)
        settings["productionConfig"] = merged
        self._save_settings(settings)
        return merged

    def update_list_setting(self, key: str, values: Iterable[str]) -> List[str]:
        """productionSteps, machineStatuses, qcRejectReasons or departments."""
        if key not in ("productionSteps", "machineStatuses", "qcRejectReasons", "departments"):
            raise ValueError(f"'{key}' is not an editable list setting.")
        cleaned = [v.strip() for v in values if v and v.strip()]
        if key in ("productionSteps", "machineStatuses") and not cleaned:
            raise ValueError(f"'{key}' needs at least one value.")
        settings = self.get_settings()
        settings[key] = cleaned
        self._save_settings(settings)
        return cleaned

    # --- backup / restore ---

    def export_json(self) -> str:
        return json.dumps(sanitize_data(self.store.data), ensure_ascii=False, indent=2)

    def import_json(self, text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Backup file is not valid JSON: {e}")
        if not isinstance(data, dict) or not (
            Collection.PACKING_ORDERS.value in data or Collection.PRODUCTION_DOCUMENTS.value in data
        ):
            raise ValueError("This file does not look like a factory data backup.")
        logger.info(f"Importing factory data with {len(data)} top-level keys.")
        self.store.update_data(data)
        return self.store.data

    def export_collection_csv(self, key: str) -> str:
        rows = self.store.get_collection(key)
        if not rows:
            return ""
        headers: List[str] = []
        for row in rows:
            for column in row.keys():
                if column not in headers:
                    headers.append(column)
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=headers, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({
                k: json.dumps(v, ensure_ascii=False) if isinstance(v, (dict, list)) else v
                for k, v in row.items()
            })
        return output.getvalue()

    def reset(self, options: Dict[str, bool]) -> List[str]:
        """Clears or zeroes the selected parts of the data. Returns the options applied."""
        selected = [key for key in RESET_OPTIONS if options.get(key)]
        unknown = set(options) - set(RESET_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown reset options: {', '.join(sorted(unknown))}")
        if not selected:
            raise ValueError("Select at least one item to reset.")

        logger.warning(f"Resetting factory data: {selected}")
        changes: Dict[str, Any] = {}
        if "orders" in selected:
            changes[Collection.PACKING_ORDERS.value] = []
            changes[Collection.PRODUCTION_DOCUMENTS.value] = []
        if "logs" in selected:
            changes[Collection.MOLDING_LOGS.value] = []
        if "inventory" in selected:
            changes[Collection.FINISHED_GOODS.value] = [
                {**row, "quantity": 0} for row in self.store.get_collection(Collection.FINISHED_GOODS.value)
            ]
        if "materials" in selected:
            changes[Collection.RAW_MATERIALS.value] = [
                {**row, "quantity": 0} for row in self.store.get_collection(Collection.RAW_MATERIALS.value)
            ]
        if "qc" in selected:
            changes[Collection.QC_ENTRIES.value] = []
        if "machines" in selected:
            changes[Collection.MACHINES.value] = [
                {**row, "status": MACHINE_IDLE} for row in self.store.get_collection(Collection.MACHINES.value)
            ]
        self.store.update_collections(changes)
        return selected

    def reset_all(self):
        self.store.reset_data()

    def get_language(self, default: Optional[str] = None) -> Optional[str]:
        return self.get_settings().get("language", default)
