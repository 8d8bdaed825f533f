# factory_ops/presentation/production_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QAbstractItemView, QHeaderView, QInputDialog, QGroupBox, QFormLayout, QSpinBox, QDoubleSpinBox)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex
from PyQt5.QtGui import QColor

from typing import List, Optional, Any
from decimal import Decimal

from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.business_logic.production_manager import JobProgress, ProductionManager
from factory_ops.business_logic.settings_manager import SettingsManager
from factory_ops.constants import DATE_FORMAT, JobHealth
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)

HEALTH_COLORS = {
    JobHealth.COMPLETED: QColor("#dcfce7"),
    JobHealth.NEAR_COMPLETION: QColor("#dbeafe"),
    JobHealth.NOT_STARTED: QColor("#f1f5f9"),
}


class JobProgressTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[JobProgress] = []
        self._headers = [translator.t("doc.number"), translator.t("doc.customer"), translator.t("prod.product"),
                         translator.t("prod.target"), translator.t("prod.produced"),
                         translator.t("prod.progress"), translator.t("common.status")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        job = self._data[index.row()]
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return job.doc_number
            elif col == 1: return job.customer
            elif col == 2: return job.product_name
            elif col == 3: return f"{job.target:,.0f}"
            elif col == 4: return f"{job.total_produced:,.0f}"
            elif col == 5: return f"{job.progress:.1f}%"
            elif col == 6: return job.health.value
        elif role == Qt.ItemDataRole.BackgroundRole:
            color = HEALTH_COLORS.get(job.health)
            if color:
                return color
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (3, 4, 5):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[JobProgress]):
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()


class MoldingLogTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[MoldingLogEntity] = []
        self._headers = [translator.t("common.date"), "Job", translator.t("prod.product"),
                         translator.t("prod.machine"), translator.t("prod.produced"), translator.t("common.status")]

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()
        log = self._data[index.row()]
        col = index.column()
        if role == Qt.ItemDataRole.DisplayRole:
            if col == 0: return log.date.strftime(DATE_FORMAT) if log.date else ""
            elif col == 1: return log.job_id
            elif col == 2: return log.product_name
            elif col == 3: return log.machine
            elif col == 4: return f"{log.quantity_produced:,.0f}"
            elif col == 5: return log.status
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col == 4:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._headers):
                return self._headers[section]
        return QVariant()

    def update_data(self, new_data: List[MoldingLogEntity]):
        self.beginResetModel()
        self._data = new_data
        self.endResetModel()

    def get_log_at_row(self, row: int) -> Optional[MoldingLogEntity]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


class ProductionUI(QWidget):
    def __init__(self, production_manager: ProductionManager, settings_manager: SettingsManager,
                 translator: Translator, parent=None):
        super().__init__(parent)
        self.production_manager = production_manager
        self.settings_manager = settings_manager
        self.translator = translator
        self.job_model = JobProgressTableModel(translator)
        self.log_model = MoldingLogTableModel(translator)
        self._init_ui()
        self.load_production_data()

    @staticmethod
    def _table(model, parent) -> QTableView:
        view = QTableView(parent)
        view.setModel(model)
        view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        view.horizontalHeader().setStretchLastSection(True)
        return view

    def _init_ui(self):
        t = self.translator.t
        main_layout = QVBoxLayout(self)

        main_layout.addWidget(QLabel(t("prod.jobs")))
        self.job_table_view = self._table(self.job_model, self)
        main_layout.addWidget(self.job_table_view)

        main_layout.addWidget(QLabel(t("prod.logs")))
        self.log_table_view = self._table(self.log_model, self)
        main_layout.addWidget(self.log_table_view)

        button_layout = QHBoxLayout()
        self.set_step_button = QPushButton(t("prod.setStep"))
        self.add_output_button = QPushButton(t("prod.addOutput"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.set_step_button.clicked.connect(self._set_step_of_selected_log)
        self.add_output_button.clicked.connect(self._record_output_of_selected_log)
        self.refresh_button.clicked.connect(self.load_production_data)
        button_layout.addWidget(self.set_step_button)
        button_layout.addWidget(self.add_output_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)

        simulation_group = QGroupBox(t("prod.simulate"))
        simulation_form = QFormLayout(simulation_group)
        self.machines_spinbox = QSpinBox()
        self.machines_spinbox.setRange(0, 100)
        self.machines_spinbox.setValue(2)
        self.hours_spinbox = QDoubleSpinBox()
        self.hours_spinbox.setRange(0, 24)
        self.hours_spinbox.setValue(8)
        self.days_spinbox = QSpinBox()
        self.days_spinbox.setRange(0, 365)
        self.days_spinbox.setValue(7)
        self.simulate_button = QPushButton(t("prod.simulate"))
        self.simulate_button.clicked.connect(self._run_simulation)
        self.simulation_result_label = QLabel("")
        simulation_form.addRow(t("prod.machines"), self.machines_spinbox)
        simulation_form.addRow(t("prod.hoursPerDay"), self.hours_spinbox)
        simulation_form.addRow(t("prod.targetDays"), self.days_spinbox)
        simulation_form.addRow(self.simulate_button, self.simulation_result_label)
        main_layout.addWidget(simulation_group)

        self.setLayout(main_layout)
        logger.info("ProductionUI initialized.")

    def load_production_data(self):
        logger.debug("Loading production data...")
        try:
            self.job_model.update_data(self.production_manager.get_job_progress())
            self.log_model.update_data(self.production_manager.get_logs())
        except Exception as e:
            logger.error(f"Error loading production data: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load production data: {e}")

    def _selected_log(self) -> Optional[MoldingLogEntity]:
        selection_model = self.log_table_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a production log first.")
            return None
        return self.log_model.get_log_at_row(selection_model.selectedRows()[0].row())

    def _update_log(self, log: MoldingLogEntity, update_data):
        try:
            self.production_manager.update_log(log.id, update_data)
            self.load_production_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error updating production log {log.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not update production log: {e}")

    def _set_step_of_selected_log(self):
        log = self._selected_log()
        if log is None:
            return
        steps = self.settings_manager.get_production_steps()
        current = steps.index(log.status) if log.status in steps else 0
        step, ok = QInputDialog.getItem(self, self.translator.t("prod.setStep"), log.job_id, steps, current, False)
        if ok:
            self._update_log(log, {"status": step})

    def _record_output_of_selected_log(self):
        log = self._selected_log()
        if log is None:
            return
        added, ok = QInputDialog.getDouble(self, self.translator.t("prod.addOutput"),
                                           f"{log.product_name} ({log.job_id})", 0, 0, 1e9, 0)
        if ok and added > 0:
            self._update_log(log, {"quantity_produced": log.quantity_produced + Decimal(str(added))})

    def _run_simulation(self):
        try:
            result = self.production_manager.simulate_capacity(
                self.production_manager.remaining_work(), self.machines_spinbox.value(),
                Decimal(str(self.hours_spinbox.value())), self.days_spinbox.value())
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
            return
        text = (f"{result.total_units:,.0f} pcs, {result.days_needed:.1f} d, "
                f"{result.percent_finishable:.0f}% ({result.units_finishable:,} pcs)")
        self.simulation_result_label.setText(text)
        self.simulation_result_label.setStyleSheet("color: #dc2626;" if result.is_overload else "")
