# factory_ops/presentation/inventory_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QLineEdit, QAbstractItemView, QHeaderView, QTabWidget, QInputDialog)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, QSortFilterProxyModel
from PyQt5.QtGui import QColor

from typing import Callable, List, Optional, Any
from decimal import Decimal

from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.inventory_manager import InventoryManager
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import Collection
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)

LOW_STOCK_COLOR = QColor(255, 243, 205)


class InventoryTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[InventoryItemEntity] = []
        self._threshold = Decimal("0")
        self._headers = [translator.t("inv.itemName"), translator.t("inv.inStock"),
                         translator.t("inv.unit"), "Cost / Unit", "ISO"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        item = self._data[index.row()]
        col = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0:
                return item.name
            elif col == 1:
                return f"{item.quantity:,.2f}"
            elif col == 2:
                return item.unit
            elif col == 3:
                return f"{item.cost_per_unit:,.2f}" if item.cost_per_unit is not None else "-"
            elif col == 4:
                return item.iso_status.value if item.iso_status else ""
        elif role == Qt.ItemDataRole.BackgroundRole:
            if item.quantity < self._threshold:
                return LOW_STOCK_COLOR
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (1, 3):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[InventoryItemEntity], threshold: Decimal):
        self.beginResetModel()
        self._data = new_data
        self._threshold = threshold
        self.endResetModel()

    def get_item_at_row(self, row: int) -> Optional[InventoryItemEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class InventoryListWidget(QWidget):
    """One stock list (raw, component or finished) with search and stock adjustment."""

    def __init__(self, inventory_manager: InventoryManager, settings_manager: SettingsManager,
                 translator: Translator, collection_key: str,
                 loader: Callable[[], List[InventoryItemEntity]], parent=None):
        super().__init__(parent)
        self.inventory_manager = inventory_manager
        self.settings_manager = settings_manager
        self.translator = translator
        self.collection_key = collection_key
        self.loader = loader

        self.table_model = InventoryTableModel(translator)
        self.proxy_model = QSortFilterProxyModel(self)
        self.proxy_model.setSourceModel(self.table_model)
        self.proxy_model.setFilterKeyColumn(0)
        self.proxy_model.setFilterCaseSensitivity(Qt.CaseInsensitive)

        self._init_ui()
        self.load_items_data()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(self.translator.t("inv.search"))
        self.search_input.textChanged.connect(self.proxy_model.setFilterFixedString)
        layout.addWidget(self.search_input)

        self.table_view = QTableView(self)
        self.table_view.setModel(self.proxy_model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.setSortingEnabled(True)
        header = self.table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.adjust_button = QPushButton(self.translator.t("inv.updateStock"))
        self.adjust_button.clicked.connect(self._adjust_selected_item)
        button_layout.addWidget(self.adjust_button)
        button_layout.addStretch()
        layout.addLayout(button_layout)

    def load_items_data(self):
        try:
            items = sorted(self.loader(), key=lambda i: i.name)
            self.table_model.update_data(items, self.settings_manager.get_low_stock_threshold())
            logger.debug(f"{len(items)} items loaded for {self.collection_key}.")
        except Exception as e:
            logger.error(f"Error loading inventory {self.collection_key}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load inventory: {e}")

    def _adjust_selected_item(self):
        selection_model = self.table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            return
        source_index = self.proxy_model.mapToSource(selection_model.selectedRows()[0])
        item = self.table_model.get_item_at_row(source_index.row())
        if item is None or item.id is None:
            return
        delta, ok = QInputDialog.getDouble(self, self.translator.t("inv.updateStock"),
                                           f"{item.name} (+/-)", 0, -1e9, 1e9, 4)
        if not ok or delta == 0:
            return
        try:
            self.inventory_manager.adjust_stock(self.collection_key, item.id, Decimal(str(delta)))
            self.load_items_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error adjusting stock of {item.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not update stock: {e}")


class InventoryUI(QWidget):
    def __init__(self, inventory_manager: InventoryManager, settings_manager: SettingsManager,
                 translator: Translator, parent=None):
        super().__init__(parent)
        t = translator.t
        layout = QVBoxLayout(self)
        self.tabs = QTabWidget(self)
        self.raw_tab = InventoryListWidget(inventory_manager, settings_manager, translator,
                                           Collection.RAW_MATERIALS.value, inventory_manager.get_raw_materials, self)
        self.component_tab = InventoryListWidget(inventory_manager, settings_manager, translator,
                                                 Collection.RAW_MATERIALS.value, inventory_manager.get_components, self)
        self.finished_tab = InventoryListWidget(inventory_manager, settings_manager, translator,
                                                Collection.FINISHED_GOODS.value, inventory_manager.get_finished_goods, self)
        self.tabs.addTab(self.raw_tab, t("inv.tabRaw"))
        self.tabs.addTab(self.component_tab, t("inv.tabComponent"))
        self.tabs.addTab(self.finished_tab, t("inv.tabFinished"))
        layout.addWidget(self.tabs)
        logger.info("InventoryUI initialized.")

    def load_inventory_data(self):
        for tab in (self.raw_tab, self.component_tab, self.finished_tab):
            tab.load_items_data()
