# factory_ops/presentation/purchase_orders_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QLineEdit, QAbstractItemView, QHeaderView)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, QSortFilterProxyModel

from typing import Dict, List, Optional, Any

from factory_ops.business_logic.entities.purchase_order_entity import PurchaseOrderEntity
from factory_ops.business_logic.purchase_order_manager import PurchaseOrderManager
from factory_ops.constants import DATE_FORMAT, PurchaseOrderStatus
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)


class PurchaseOrderTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, data: Optional[List[PurchaseOrderEntity]] = None, parent=None):
        super().__init__(parent)
        self._data: List[PurchaseOrderEntity] = data if data is not None else []
        self._supplier_names: Dict[str, str] = {}
        self._headers = [translator.t("pur.poNumber"), translator.t("pur.supplier"), translator.t("common.date"),
                         translator.t("pur.total"), translator.t("common.status")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return QVariant()
        row = index.row()
        col = index.column()
        if not (0 <= row < len(self._data)):
            return QVariant()
        po = self._data[row]

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0:
                return po.po_number
            elif col == 1:
                return self._supplier_names.get(po.supplier_id, po.supplier_id)
            elif col == 2:
                return po.order_date.strftime(DATE_FORMAT) if po.order_date else ""
            elif col == 3:
                return f"{PurchaseOrderManager.calculate_total(po):,.2f}"
            elif col == 4:
                return po.status.value
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col == 3:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[PurchaseOrderEntity], supplier_names: Dict[str, str]):
        self.beginResetModel()
        self._data = new_data
        self._supplier_names = supplier_names
        self.endResetModel()

    def get_po_at_row(self, row: int) -> Optional[PurchaseOrderEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class PurchaseOrdersUI(QWidget):
    def __init__(self, po_manager: PurchaseOrderManager, translator: Translator, parent=None):
        super().__init__(parent)
        self.po_manager = po_manager
        self.translator = translator

        self.table_model = PurchaseOrderTableModel(translator)
        self.proxy_model = QSortFilterProxyModel(self)
        self.proxy_model.setSourceModel(self.table_model)
        self.proxy_model.setFilterKeyColumn(-1)
        self.proxy_model.setFilterCaseSensitivity(Qt.CaseInsensitive)

        self._init_ui()
        self.load_purchase_orders_data()

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(t("common.search"))
        self.search_input.textChanged.connect(self.proxy_model.setFilterFixedString)
        main_layout.addWidget(self.search_input)

        self.po_table_view = QTableView(self)
        self.po_table_view.setModel(self.proxy_model)
        self.po_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.po_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.po_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.po_table_view.setSortingEnabled(True)
        header = self.po_table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.po_table_view.sortByColumn(2, Qt.SortOrder.DescendingOrder)
        main_layout.addWidget(self.po_table_view)

        button_layout = QHBoxLayout()
        self.receive_button = QPushButton(t("pur.receive"))
        self.delete_button = QPushButton(t("common.delete"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.receive_button.clicked.connect(self._receive_selected_po)
        self.delete_button.clicked.connect(self._delete_selected_po)
        self.refresh_button.clicked.connect(self.load_purchase_orders_data)
        button_layout.addWidget(self.receive_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("PurchaseOrdersUI initialized.")

    def load_purchase_orders_data(self):
        logger.debug("Loading purchase orders data...")
        try:
            purchase_orders = self.po_manager.get_all_purchase_orders()
            supplier_names = {s.id: s.name for s in self.po_manager.suppliers_repo.get_all()}
            self.table_model.update_data(purchase_orders, supplier_names)
            logger.info(f"{len(purchase_orders)} purchase orders loaded into table.")
        except Exception as e:
            logger.error(f"Error loading purchase orders: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load purchase orders: {e}")

    def _selected_po(self) -> Optional[PurchaseOrderEntity]:
        selection_model = self.po_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a purchase order first.")
            return None
        source_index = self.proxy_model.mapToSource(selection_model.selectedRows()[0])
        return self.table_model.get_po_at_row(source_index.row())

    def _receive_selected_po(self):
        po = self._selected_po()
        if po is None or po.id is None:
            return
        if po.status == PurchaseOrderStatus.RECEIVED:
            QMessageBox.information(self, self.translator.t("pur.receive"), f"{po.po_number}: {po.status.value}")
            return
        reply = QMessageBox.question(self, self.translator.t("pur.receive"), f"{po.po_number}?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            self.po_manager.receive_stock(po.id)
            self.load_purchase_orders_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error receiving purchase order {po.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not receive stock: {e}")

    def _delete_selected_po(self):
        po = self._selected_po()
        if po is None or po.id is None:
            return
        reply = QMessageBox.question(self, self.translator.t("common.delete"), f"{po.po_number}?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            try:
                self.po_manager.delete_purchase_order(po.id)
                self.load_purchase_orders_data()
            except Exception as e:
                logger.error(f"Error deleting purchase order {po.id}: {e}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not delete purchase order: {e}")
