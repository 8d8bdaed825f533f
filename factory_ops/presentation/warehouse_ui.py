# factory_ops/presentation/warehouse_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QAbstractItemView, QHeaderView, QInputDialog)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex
from PyQt5.QtGui import QColor

from typing import Dict, List, Optional, Any
from decimal import Decimal

from factory_ops.business_logic.entities.warehouse_location_entity import WarehouseLocationEntity
from factory_ops.business_logic.warehouse_manager import WarehouseManager
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)

FULL_USAGE_PERCENT = Decimal("90")


class LocationTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[WarehouseLocationEntity] = []
        self._usage: Dict[str, Decimal] = {}
        self._headers = [translator.t("wh.location"), translator.t("wh.zone"), translator.t("wh.type"),
                         translator.t("wh.capacity"), translator.t("wh.usage")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        location = self._data[index.row()]
        usage = self._usage.get(location.id, Decimal("0"))
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return location.name
            elif col == 1: return location.zone
            elif col == 2: return location.type.value
            elif col == 3: return f"{location.capacity:,.0f}"
            elif col == 4: return f"{usage:.0f}%"
        elif role == Qt.ItemDataRole.BackgroundRole:
            if usage >= FULL_USAGE_PERCENT:
                return QColor("#fee2e2")
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (3, 4):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[WarehouseLocationEntity], usage: Dict[str, Decimal]):
        self.beginResetModel()
        self._data = new_data
        self._usage = usage
        self.endResetModel()

    def get_location_at_row(self, row: int) -> Optional[WarehouseLocationEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class WarehouseUI(QWidget):
    def __init__(self, warehouse_manager: WarehouseManager, translator: Translator, parent=None):
        super().__init__(parent)
        self.warehouse_manager = warehouse_manager
        self.translator = translator
        self.table_model = LocationTableModel(translator)
        self._init_ui()
        self.load_locations_data()

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        self.stats_label = QLabel("")
        main_layout.addWidget(self.stats_label)

        self.location_table_view = QTableView(self)
        self.location_table_view.setModel(self.table_model)
        self.location_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.location_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.location_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.location_table_view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        main_layout.addWidget(self.location_table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton(t("wh.add"))
        self.capacity_button = QPushButton(t("wh.capacity"))
        self.delete_button = QPushButton(t("common.delete"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.add_button.clicked.connect(self._add_location)
        self.capacity_button.clicked.connect(self._change_capacity_of_selected_location)
        self.delete_button.clicked.connect(self._delete_selected_location)
        self.refresh_button.clicked.connect(self.load_locations_data)
        button_layout.addWidget(self.add_button)
        button_layout.addWidget(self.capacity_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("WarehouseUI initialized.")

    def load_locations_data(self):
        logger.debug("Loading warehouse locations...")
        try:
            locations = sorted(self.warehouse_manager.get_locations(), key=lambda l: (l.zone, l.name))
            usage = {l.id: self.warehouse_manager.get_usage_percentage(l) for l in locations}
            self.table_model.update_data(locations, usage)
            stats = self.warehouse_manager.zone_stats()
            self.stats_label.setText(
                f"{self.translator.t('inv.tabRaw')}: {stats['raw_items']} ({stats['raw_value']:,.2f})   "
                f"{self.translator.t('inv.tabFinished')}: {stats['finished_items']}")
        except Exception as e:
            logger.error(f"Error loading warehouse locations: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load warehouse locations: {e}")

    def _selected_location(self) -> Optional[WarehouseLocationEntity]:
        selection_model = self.location_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a location first.")
            return None
        return self.table_model.get_location_at_row(selection_model.selectedRows()[0].row())

    def _add_location(self):
        zone, ok = QInputDialog.getText(self, self.translator.t("wh.add"), self.translator.t("wh.zone"))
        if not ok:
            return
        try:
            self.warehouse_manager.add_location(zone)
            self.load_locations_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))

    def _change_capacity_of_selected_location(self):
        location = self._selected_location()
        if location is None:
            return
        capacity, ok = QInputDialog.getDouble(self, self.translator.t("wh.capacity"), location.name,
                                              float(location.capacity), 0, 1e9, 0)
        if not ok:
            return
        try:
            self.warehouse_manager.update_location(location.id, {"capacity": capacity})
            self.load_locations_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error updating location {location.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not update location: {e}")

    def _delete_selected_location(self):
        location = self._selected_location()
        if location is None:
            return
        reply = QMessageBox.question(self, self.translator.t("common.delete"), f"{location.name}?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            self.warehouse_manager.delete_location(location.id)
            self.load_locations_data()
