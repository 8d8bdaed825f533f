# factory_ops/presentation/products_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QDialog, QComboBox, QFormLayout, QDialogButtonBox, QAbstractItemView, QDoubleSpinBox,
    QHeaderView, QInputDialog, QApplication, QSplitter, QLineEdit)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex, QSortFilterProxyModel

from typing import List, Optional, Any, Dict
from decimal import Decimal

from factory_ops.business_logic.entities.bom_item_entity import BomItemEntity
from factory_ops.business_logic.entities.inventory_item_entity import InventoryItemEntity
from factory_ops.business_logic.entities.product_entity import ProductEntity
from factory_ops.business_logic.bom_manager import BomManager
from factory_ops.business_logic.product_manager import ProductManager
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)


class ProductTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[ProductEntity] = []
        self._headers = [translator.t("prod.product"), "Category", "Price", "Cycle (s)", "BOM"]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        product = self._data[index.row()]
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return product.name
            elif col == 1: return product.category or ""
            elif col == 2: return f"{product.sale_price:,.2f}"
            elif col == 3: return str(product.cycle_time_seconds)
            elif col == 4: return str(len(product.bom))
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (2, 3, 4):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[ProductEntity]):
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()

    def get_product_at_row(self, row: int) -> Optional[ProductEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class BomLineTableModel(QAbstractTableModel):
    """Lines of the BOM being edited; saved as a whole through BomManager.set_bom."""

    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._lines: List[BomItemEntity] = []
        self._units: Dict[str, str] = {}
        self._headers = ["#", translator.t("bom.material"), translator.t("bom.qtyPerUnit"), translator.t("common.unit")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._lines)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._lines)):
            return QVariant()
        line = self._lines[index.row()]
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return str(index.row() + 1)
            elif col == 1: return line.material_name or line.material_id
            elif col == 2: return str(line.quantity_per_unit)
            elif col == 3: return self._units.get(line.material_id, "-")
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (0, 2):
                return Qt.AlignmentFlag.AlignCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[BomItemEntity], units: Dict[str, str]):
        self.beginResetModel()
        self._lines = list(new_data)
        self._units = units
        self.endResetModel()

    def add_line(self, line: BomItemEntity):
        self.beginInsertRows(QModelIndex(), self.rowCount(), self.rowCount())
        self._lines.append(line)
        self.endInsertRows()

    def remove_line(self, row: int) -> bool:
        if 0 <= row < self.rowCount():
            self.beginRemoveRows(QModelIndex(), row, row)
            del self._lines[row]
            self.endRemoveRows()
            return True
        return False

    def get_all_lines(self) -> List[BomItemEntity]:
        return self._lines


class BomLineDialog(QDialog):
    def __init__(self, materials: List[InventoryItemEntity], translator: Translator, parent=None):
        super().__init__(parent)
        t = translator.t
        self.setWindowTitle(t("bom.addLine"))
        self.setMinimumWidth(400)

        self.material_combo = QComboBox()
        for m in sorted(materials, key=lambda m: m.name):
            self.material_combo.addItem(f"{m.name} ({m.unit})", m.id)
        self.quantity_spinbox = QDoubleSpinBox()
        self.quantity_spinbox.setDecimals(4)
        self.quantity_spinbox.setMaximum(999999.9999)
        self.quantity_spinbox.setValue(1.0)

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

        form_layout = QFormLayout(self)
        form_layout.addRow(t("bom.material") + ":*", self.material_combo)
        form_layout.addRow(t("bom.qtyPerUnit") + ":*", self.quantity_spinbox)
        form_layout.addRow(self.button_box)
        self.setLayout(form_layout)

    def get_line(self) -> Optional[BomItemEntity]:
        material_id = self.material_combo.currentData()
        if not material_id:
            QMessageBox.warning(self, "Error", "Select a material.")
            return None
        name = self.material_combo.currentText().rsplit(" (", 1)[0]
        return BomItemEntity(
            material_id=material_id,
            material_name=name,
            quantity_per_unit=Decimal(str(self.quantity_spinbox.value())),
        )


class ProductsUI(QWidget):
    def __init__(self, product_manager: ProductManager, bom_manager: BomManager,
                 translator: Translator, parent=None):
        super().__init__(parent)
        self.product_manager = product_manager
        self.bom_manager = bom_manager
        self.translator = translator

        self.product_model = ProductTableModel(translator)
        self.proxy_model = QSortFilterProxyModel(self)
        self.proxy_model.setSourceModel(self.product_model)
        self.proxy_model.setFilterKeyColumn(0)
        self.proxy_model.setFilterCaseSensitivity(Qt.CaseInsensitive)
        self.bom_model = BomLineTableModel(translator)
        self._current_product_id: Optional[str] = None

        self._init_ui()
        self.load_products_data()

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(t("common.search"))
        self.search_input.textChanged.connect(self.proxy_model.setFilterFixedString)
        main_layout.addWidget(self.search_input)

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        self.product_table_view = QTableView(self)
        self.product_table_view.setModel(self.proxy_model)
        self.product_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.product_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.product_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.product_table_view.setSortingEnabled(True)
        self.product_table_view.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.product_table_view.selectionModel().selectionChanged.connect(self._show_selected_bom)
        splitter.addWidget(self.product_table_view)

        bom_panel = QWidget(self)
        bom_layout = QVBoxLayout(bom_panel)
        self.bom_title_label = QLabel("")
        bom_layout.addWidget(self.bom_title_label)
        self.bom_table_view = QTableView(bom_panel)
        self.bom_table_view.setModel(self.bom_model)
        self.bom_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.bom_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.bom_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.bom_table_view.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        bom_layout.addWidget(self.bom_table_view)
        self.cost_label = QLabel("")
        bom_layout.addWidget(self.cost_label)

        bom_buttons = QHBoxLayout()
        self.add_line_button = QPushButton(t("bom.addLine"))
        self.remove_line_button = QPushButton(t("bom.removeLine"))
        self.save_bom_button = QPushButton(t("bom.save"))
        self.copy_bom_button = QPushButton(t("bom.copy"))
        self.add_line_button.clicked.connect(self._add_bom_line)
        self.remove_line_button.clicked.connect(self._remove_bom_line)
        self.save_bom_button.clicked.connect(self._save_bom)
        self.copy_bom_button.clicked.connect(self._copy_bom)
        for button in (self.add_line_button, self.remove_line_button, self.save_bom_button, self.copy_bom_button):
            bom_buttons.addWidget(button)
        bom_layout.addLayout(bom_buttons)
        splitter.addWidget(bom_panel)
        main_layout.addWidget(splitter)

        button_layout = QHBoxLayout()
        self.add_product_button = QPushButton(t("common.add"))
        self.delete_product_button = QPushButton(t("common.delete"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.add_product_button.clicked.connect(self._add_product)
        self.delete_product_button.clicked.connect(self._delete_selected_product)
        self.refresh_button.clicked.connect(self.load_products_data)
        button_layout.addWidget(self.add_product_button)
        button_layout.addWidget(self.delete_product_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("ProductsUI initialized.")

    def load_products_data(self):
        logger.debug("Loading products data...")
        try:
            self.product_model.update_data(self.product_manager.get_all_products())
            self._load_bom(self._current_product_id)
        except Exception as e:
            logger.error(f"Error loading products: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load products: {e}")

    def _selected_product(self) -> Optional[ProductEntity]:
        selection_model = self.product_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            return None
        source_index = self.proxy_model.mapToSource(selection_model.selectedRows()[0])
        return self.product_model.get_product_at_row(source_index.row())

    def _show_selected_bom(self):
        product = self._selected_product()
        self._load_bom(product.id if product else None)

    def _load_bom(self, product_id: Optional[str]):
        product = self.product_manager.get_product_by_id(product_id) if product_id else None
        self._current_product_id = product.id if product else None
        if product is None:
            self.bom_title_label.setText("")
            self.cost_label.setText("")
            self.bom_model.update_data([], {})
            return
        units = {m.id: m.unit for m in self.bom_manager.raw_material_repo.get_all()}
        self.bom_title_label.setText(product.name)
        self.bom_model.update_data(product.bom, units)
        cost = self.bom_manager.calculate_material_cost(product.id)
        self.cost_label.setText(f"{self.translator.t('bom.cost')}: {cost:,.4f}")

    def _add_product(self):
        name, ok = QInputDialog.getText(self, self.translator.t("common.add"), self.translator.t("prod.product"))
        if not ok:
            return
        try:
            self.product_manager.create_product(name)
            self.load_products_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error creating product '{name}': {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not create product: {e}")

    def _delete_selected_product(self):
        product = self._selected_product()
        if product is None:
            QMessageBox.information(self, "No selection", "Select a product first.")
            return
        reply = QMessageBox.question(self, self.translator.t("common.delete"), f"{product.name}?",
                                     QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            try:
                self.product_manager.delete_product(product.id)
                self._current_product_id = None
                self.load_products_data()
            except Exception as e:
                logger.error(f"Error deleting product {product.id}: {e}", exc_info=True)
                QMessageBox.critical(self, "Error", f"Could not delete product: {e}")

    def _add_bom_line(self):
        if not self._current_product_id:
            QMessageBox.information(self, "No selection", "Select a product first.")
            return
        dialog = BomLineDialog(self.bom_manager.raw_material_repo.get_all(), self.translator, self)
        if dialog.exec_() == QDialog.DialogCode.Accepted:
            line = dialog.get_line()
            if line:
                self.bom_model.add_line(line)

    def _remove_bom_line(self):
        selection_model = self.bom_table_view.selectionModel()
        if selection_model and selection_model.hasSelection():
            self.bom_model.remove_line(selection_model.selectedRows()[0].row())

    def _save_bom(self):
        if not self._current_product_id:
            return
        items_data = [{"material_id": line.material_id, "quantity_per_unit": line.quantity_per_unit}
                      for line in self.bom_model.get_all_lines()]
        try:
            self.bom_manager.set_bom(self._current_product_id, items_data)
            self.load_products_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error saving BOM for {self._current_product_id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not save BOM: {e}")

    def _copy_bom(self):
        if not self._current_product_id:
            return
        QApplication.clipboard().setText(self.bom_manager.bom_as_text(self._current_product_id))
