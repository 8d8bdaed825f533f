# factory_ops/presentation/maintenance_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QTableView, QPushButton, QHBoxLayout, QMessageBox, QDialog,
    QFormLayout, QLineEdit, QComboBox, QDoubleSpinBox, QDialogButtonBox, QAbstractItemView,
    QHeaderView, QInputDialog)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex
from PyQt5.QtGui import QColor

from typing import Dict, List, Optional, Any
from decimal import Decimal

from factory_ops.business_logic.entities.machine_entity import MachineEntity
from factory_ops.business_logic.machine_manager import MachineManager
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import MACHINE_BROKEN, MACHINE_RUNNING
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)

MAINTENANCE_TYPES = ["PM", "Repair", "Mold Change"]


class MachineTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[MachineEntity] = []
        self._downtime: Dict[str, Decimal] = {}
        self._headers = [translator.t("prod.machine"), translator.t("common.status"),
                         translator.t("mc.location"), translator.t("mc.downtime")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        machine = self._data[index.row()]
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return machine.name
            elif col == 1: return machine.status
            elif col == 2: return machine.location
            elif col == 3: return f"{self._downtime.get(machine.id, Decimal('0')):,.1f}"
        elif role == Qt.ItemDataRole.BackgroundRole:
            if machine.status == MACHINE_BROKEN:
                return QColor("#fee2e2")
            if machine.status == MACHINE_RUNNING:
                return QColor("#dcfce7")
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[MachineEntity], downtime: Dict[str, Decimal]):
        self.beginResetModel()
        self._data = new_data
        self._downtime = downtime
        self.endResetModel()

    def get_machine_at_row(self, row: int) -> Optional[MachineEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class MaintenanceDialog(QDialog):
    def __init__(self, machine: MachineEntity, translator: Translator, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"{translator.t('mc.logMaintenance')}: {machine.name}")
        self.setMinimumWidth(400)

        self.technician_edit = QLineEdit()
        self.type_combo = QComboBox()
        self.type_combo.addItems(MAINTENANCE_TYPES)
        self.downtime_spinbox = QDoubleSpinBox()
        self.downtime_spinbox.setDecimals(1)
        self.downtime_spinbox.setMaximum(9999)
        self.description_edit = QLineEdit()

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

        form_layout = QFormLayout(self)
        form_layout.addRow("Technician:", self.technician_edit)
        form_layout.addRow("Type:", self.type_combo)
        form_layout.addRow(translator.t("mc.downtime") + ":", self.downtime_spinbox)
        form_layout.addRow("Description:", self.description_edit)
        form_layout.addRow(self.button_box)
        self.setLayout(form_layout)

    def get_maintenance_data(self) -> Dict[str, Any]:
        return {
            "technician": self.technician_edit.text().strip(),
            "maintenance_type": self.type_combo.currentText(),
            "downtime_hours": Decimal(str(self.downtime_spinbox.value())),
            "description": self.description_edit.text().strip(),
        }


class MaintenanceUI(QWidget):
    def __init__(self, machine_manager: MachineManager, settings_manager: SettingsManager,
                 translator: Translator, parent=None):
        super().__init__(parent)
        self.machine_manager = machine_manager
        self.settings_manager = settings_manager
        self.translator = translator
        self.table_model = MachineTableModel(translator)
        self._init_ui()
        self.load_machines_data()

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        self.machine_table_view = QTableView(self)
        self.machine_table_view.setModel(self.table_model)
        self.machine_table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.machine_table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.machine_table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.machine_table_view.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        main_layout.addWidget(self.machine_table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton(t("mc.add"))
        self.status_button = QPushButton(t("mc.setStatus"))
        self.maintenance_button = QPushButton(t("mc.logMaintenance"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.add_button.clicked.connect(self._add_machine)
        self.status_button.clicked.connect(self._change_status_of_selected_machine)
        self.maintenance_button.clicked.connect(self._log_maintenance_for_selected_machine)
        self.refresh_button.clicked.connect(self.load_machines_data)
        button_layout.addWidget(self.add_button)
        button_layout.addWidget(self.status_button)
        button_layout.addWidget(self.maintenance_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)
        logger.info("MaintenanceUI initialized.")

    def load_machines_data(self):
        logger.debug("Loading machines data...")
        try:
            self.table_model.update_data(self.machine_manager.get_all_machines(),
                                         self.machine_manager.downtime_by_machine())
        except Exception as e:
            logger.error(f"Error loading machines: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load machines: {e}")

    def _selected_machine(self) -> Optional[MachineEntity]:
        selection_model = self.machine_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a machine first.")
            return None
        return self.table_model.get_machine_at_row(selection_model.selectedRows()[0].row())

    def _run(self, action, error_text: str):
        try:
            action()
            self.load_machines_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"{error_text}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"{error_text}: {e}")

    def _add_machine(self):
        name, ok = QInputDialog.getText(self, self.translator.t("mc.add"), self.translator.t("prod.machine"))
        if ok:
            self._run(lambda: self.machine_manager.add_machine(name), "Could not add machine")

    def _change_status_of_selected_machine(self):
        machine = self._selected_machine()
        if machine is None:
            return
        statuses = self.settings_manager.get_machine_statuses()
        current = statuses.index(machine.status) if machine.status in statuses else 0
        status, ok = QInputDialog.getItem(self, self.translator.t("mc.setStatus"), machine.name,
                                          statuses, current, False)
        if ok:
            self._run(lambda: self.machine_manager.update_status(machine.id, status),
                      "Could not change machine status")

    def _log_maintenance_for_selected_machine(self):
        machine = self._selected_machine()
        if machine is None:
            return
        dialog = MaintenanceDialog(machine, self.translator, self)
        if dialog.exec_() == QDialog.DialogCode.Accepted:
            data = dialog.get_maintenance_data()
            self._run(lambda: self.machine_manager.log_maintenance(machine.id, **data),
                      "Could not log maintenance")
