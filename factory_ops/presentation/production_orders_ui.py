# factory_ops/presentation/production_orders_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableView, QPushButton, QHBoxLayout,
    QMessageBox, QDialog, QLineEdit, QComboBox, QFormLayout, QGroupBox,
    QDialogButtonBox, QAbstractItemView, QDoubleSpinBox, QHeaderView, QTableWidget,
    QTableWidgetItem, QInputDialog)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, QSortFilterProxyModel
from PyQt5.QtGui import QColor

from typing import List, Optional, Any, Dict
from decimal import Decimal

from factory_ops.business_logic.entities.material_requirement_entity import MaterialRequirement
from factory_ops.business_logic.entities.production_document_entity import ProductionDocumentEntity
from factory_ops.business_logic.material_requirements import shortages
from factory_ops.business_logic.product_manager import ProductManager
from factory_ops.business_logic.production_order_manager import ProductionOrderManager
from factory_ops.constants import DATE_FORMAT
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)

SHORTAGE_COLOR = QColor(255, 205, 210)


class ProductionDocumentTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, data: Optional[List[ProductionDocumentEntity]] = None, parent=None):
        super().__init__(parent)
        self._data: List[ProductionDocumentEntity] = data if data is not None else []
        self._headers = [translator.t("doc.number"), translator.t("common.date"), translator.t("doc.customer"),
                         translator.t("common.quantity"), translator.t("common.status")]

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
        doc = self._data[row]

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0:
                return doc.doc_number
            elif col == 1:
                return doc.date.strftime(DATE_FORMAT) if doc.date else ""
            elif col == 2:
                return doc.customer_name
            elif col == 3:
                return str(len(doc.items))
            elif col == 4:
                return doc.status.value
        elif role == Qt.ItemDataRole.BackgroundRole:
            if doc.material_shortage:
                return SHORTAGE_COLOR
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col == 2:
                return Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[ProductionDocumentEntity]):
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()

    def get_document_at_row(self, row: int) -> Optional[ProductionDocumentEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class RequirementTableModel(QAbstractTableModel):
    """Material demand of one document; shortage rows are painted red."""

    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[MaterialRequirement] = []
        self._headers = [translator.t("inv.itemName"), translator.t("doc.needed"), translator.t("inv.inStock"),
                         translator.t("doc.shortage"), translator.t("common.unit")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        req = self._data[index.row()]
        col = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0:
                return req.name
            elif col == 1:
                return f"{req.needed:,.4f}"
            elif col == 2:
                return f"{req.current:,.4f}"
            elif col == 3:
                return f"{req.shortage:,.4f}" if req.is_shortage else "-"
            elif col == 4:
                return req.unit
        elif role == Qt.ItemDataRole.BackgroundRole:
            if req.is_shortage:
                return SHORTAGE_COLOR
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (1, 2, 3):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, requirements: Dict[str, MaterialRequirement]):
        self.beginResetModel()
        self._data = sorted(requirements.values(), key=lambda r: (not r.is_shortage, r.name))
        self.endResetModel()

    def get_requirement_at_row(self, row: int) -> Optional[MaterialRequirement]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class ProductionDocumentDialog(QDialog):
    """Customer plus line items for a new document."""

    def __init__(self, product_manager: ProductManager, translator: Translator, parent=None):
        super().__init__(parent)
        self.product_manager = product_manager
        self.translator = translator
        self.setWindowTitle(translator.t("doc.new"))
        self.setMinimumWidth(560)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        form = QFormLayout()
        self.customer_input = QLineEdit(self)
        form.addRow(self.translator.t("doc.customer") + ":", self.customer_input)
        layout.addLayout(form)

        items_group = QGroupBox(self.translator.t("common.quantity"))
        items_layout = QVBoxLayout(items_group)
        add_row_layout = QHBoxLayout()
        self.product_combo = QComboBox(self)
        for product in self.product_manager.get_all_products():
            self.product_combo.addItem(product.name, product.id)
        self.quantity_spin = QDoubleSpinBox(self)
        self.quantity_spin.setRange(0, 10_000_000)
        self.quantity_spin.setDecimals(0)
        self.add_item_button = QPushButton("+")
        self.add_item_button.clicked.connect(self._add_item_row)
        add_row_layout.addWidget(self.product_combo, 3)
        add_row_layout.addWidget(self.quantity_spin, 1)
        add_row_layout.addWidget(self.add_item_button)
        items_layout.addLayout(add_row_layout)

        self.items_table = QTableWidget(0, 2, self)
        self.items_table.setHorizontalHeaderLabels([self.translator.t("inv.itemName"),
                                                    self.translator.t("common.quantity")])
        self.items_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        items_layout.addWidget(self.items_table)
        layout.addWidget(items_group)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _add_item_row(self):
        if self.product_combo.currentIndex() < 0 or self.quantity_spin.value() <= 0:
            return
        row = self.items_table.rowCount()
        self.items_table.insertRow(row)
        name_item = QTableWidgetItem(self.product_combo.currentText())
        name_item.setData(Qt.ItemDataRole.UserRole, self.product_combo.currentData())
        self.items_table.setItem(row, 0, name_item)
        self.items_table.setItem(row, 1, QTableWidgetItem(str(int(self.quantity_spin.value()))))

    def get_document_data(self) -> Dict[str, Any]:
        items = []
        for row in range(self.items_table.rowCount()):
            name_item = self.items_table.item(row, 0)
            qty_item = self.items_table.item(row, 1)
            items.append({
                "product_name": name_item.text(),
                "product_id": name_item.data(Qt.ItemDataRole.UserRole),
                "quantity": qty_item.text() if qty_item else "0",
            })
        return {"customer_name": self.customer_input.text().strip(), "items": items}


class ProductionOrdersUI(QWidget):
    def __init__(self,
                 order_manager: ProductionOrderManager,
                 product_manager: ProductManager,
                 translator: Translator,
                 parent=None):
        super().__init__(parent)
        self.order_manager = order_manager
        self.product_manager = product_manager
        self.translator = translator

        self.table_model = ProductionDocumentTableModel(translator)
        self.proxy_model = QSortFilterProxyModel(self)
        self.proxy_model.setSourceModel(self.table_model)
        self.proxy_model.setFilterKeyColumn(-1)
        self.proxy_model.setFilterCaseSensitivity(Qt.CaseInsensitive)
        self.requirement_model = RequirementTableModel(translator)

        self._init_ui()
        self.load_documents_data()

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        search_layout = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(t("common.search"))
        self.search_input.textChanged.connect(self.proxy_model.setFilterFixedString)
        search_layout.addWidget(self.search_input)
        main_layout.addLayout(search_layout)

        self.doc_table_view = QTableView(self)
        self.doc_table_view.setModel(self.proxy_model)
        self.doc_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.doc_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.doc_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.doc_table_view.setSortingEnabled(True)
        header = self.doc_table_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.doc_table_view.selectionModel().selectionChanged.connect(self._show_selected_requirements)
        main_layout.addWidget(self.doc_table_view, 3)

        req_group = QGroupBox(t("doc.requirements"))
        req_layout = QVBoxLayout(req_group)
        self.requirement_view = QTableView(self)
        self.requirement_view.setModel(self.requirement_model)
        self.requirement_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.requirement_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        req_header = self.requirement_view.horizontalHeader()
        if req_header:
            req_header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        req_layout.addWidget(self.requirement_view)
        self.requirement_status_label = QLabel("")
        req_layout.addWidget(self.requirement_status_label)
        main_layout.addWidget(req_group, 2)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton(t("doc.new"))
        self.approve_button = QPushButton(t("doc.approve"))
        self.create_pr_button = QPushButton(t("doc.createPR"))
        self.delete_button = QPushButton(t("common.delete"))
        self.refresh_button = QPushButton(t("common.refresh"))

        self.add_button.clicked.connect(self._open_add_document_dialog)
        self.approve_button.clicked.connect(self._approve_selected_document)
        self.create_pr_button.clicked.connect(self._create_purchase_request)
        self.delete_button.clicked.connect(self._delete_selected_document)
        self.refresh_button.clicked.connect(self.load_documents_data)

        button_layout.addWidget(self.add_button)
        button_layout.addWidget(self.approve_button)
        button_layout.addWidget(self.create_pr_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("ProductionOrdersUI initialized.")

    def load_documents_data(self):
        logger.debug("Loading production documents...")
        try:
            documents = self.order_manager.get_all_documents()
            self.table_model.update_data(documents)
            self.requirement_model.update_data({})
            self.requirement_status_label.setText("")
            logger.info(f"{len(documents)} production documents loaded into table.")
        except Exception as e:
            logger.error(f"Error loading production documents: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load production documents: {e}")

    def _selected_document(self) -> Optional[ProductionDocumentEntity]:
        selection_model = self.doc_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            return None
        source_index = self.proxy_model.mapToSource(selection_model.selectedRows()[0])
        return self.table_model.get_document_at_row(source_index.row())

    def _show_selected_requirements(self):
        doc = self._selected_document()
        if doc is None:
            self.requirement_model.update_data({})
            self.requirement_status_label.setText("")
            return
        requirements, shortage = self.order_manager.check_materials(doc)
        self.requirement_model.update_data(requirements)
        if shortage:
            worst = shortages(requirements)[0]
            self.requirement_status_label.setText(
                f"{self.translator.t('doc.shortage')}: {worst.name} {worst.shortage:,.4f} {worst.unit}")
        else:
            self.requirement_status_label.setText("")

    def _open_add_document_dialog(self):
        dialog = ProductionDocumentDialog(self.product_manager, self.translator, parent=self)
        if dialog.exec_() == QDialog.DialogCode.Accepted:
            data = dialog.get_document_data()
            try:
                doc = self.order_manager.new_document(customer_name=data["customer_name"], items=data["items"])
                saved = self.order_manager.save_document(doc)
                QMessageBox.information(self, self.translator.t("doc.new"), saved.doc_number)
                self.load_documents_data()
            except ValueError as ve:
                QMessageBox.warning(self, "Validation error", str(ve))
            except Exception as e:
                logger.error(f"Error creating production document: {e}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not create document: {e}")

    def _approve_selected_document(self):
        doc = self._selected_document()
        if doc is None or doc.id is None:
            QMessageBox.information(self, self.translator.t("doc.approve"), "Select a document first.")
            return
        try:
            result = self.order_manager.approve_document(doc.id)
            if result.approved:
                QMessageBox.information(self, self.translator.t("doc.approve"), self.translator.t("doc.approved"))
            else:
                QMessageBox.warning(self, self.translator.t("doc.approve"), self.translator.t("doc.shortageWarning"))
            self.load_documents_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error approving document {doc.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not approve document: {e}")

    def _create_purchase_request(self):
        doc = self._selected_document()
        req = self.requirement_model.get_requirement_at_row(self.requirement_view.currentIndex().row())
        if doc is None or req is None or not req.is_shortage:
            QMessageBox.information(self, self.translator.t("doc.createPR"),
                                    "Select a document and one of its short materials.")
            return
        quantity, ok = QInputDialog.getDouble(self, self.translator.t("doc.createPR"), req.name,
                                              float(req.shortage), 0, 1e9, 4)
        if not ok:
            return
        try:
            request = self.order_manager.create_purchase_request(doc.id, req.material_id, Decimal(str(quantity)))
            QMessageBox.information(self, self.translator.t("doc.createPR"), request.po_number)
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error creating purchase request for {doc.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not create purchase request: {e}")

    def _delete_selected_document(self):
        doc = self._selected_document()
        if doc is None or doc.id is None:
            return
        reply = QMessageBox.question(self, self.translator.t("common.delete"), f"{doc.doc_number}?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            try:
                if self.order_manager.delete_document(doc.id):
                    self.load_documents_data()
            except Exception as e:
                logger.error(f"Error deleting document {doc.id}: {e}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not delete document: {e}")
