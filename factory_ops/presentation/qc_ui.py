# factory_ops/presentation/qc_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QTableView, QPushButton, QHBoxLayout, QMessageBox,
    QAbstractItemView, QHeaderView, QLabel)
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex

from typing import List, Optional, Any

from factory_ops.business_logic.entities.molding_log_entity import MoldingLogEntity
from factory_ops.business_logic.qc_manager import QCManager
from factory_ops.constants import DATE_FORMAT, QCDestination
from factory_ops.utils.i18n import Translator

import logging
logger = logging.getLogger(__name__)


class PendingJobTableModel(QAbstractTableModel):
    def __init__(self, translator: Translator, parent=None):
        super().__init__(parent)
        self._data: List[MoldingLogEntity] = []
        self._headers = ["Job", translator.t("inv.itemName"), translator.t("common.date"),
                         "Machine", translator.t("common.quantity"), "Rejected"]

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
            if col == 0:
                return log.job_id
            elif col == 1:
                return log.product_name
            elif col == 2:
                return log.date.strftime(DATE_FORMAT) if log.date else ""
            elif col == 3:
                return log.machine
            elif col == 4:
                return f"{log.quantity_produced:,.0f}"
            elif col == 5:
                return f"{log.quantity_rejected:,.0f}"
        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if col in (4, 5):
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignCenter | Qt.AlignmentFlag.AlignVCenter
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


class QCUI(QWidget):
    def __init__(self, qc_manager: QCManager, translator: Translator, parent=None):
        super().__init__(parent)
        self.qc_manager = qc_manager
        self.translator = translator
        self.table_model = PendingJobTableModel(translator)
        self._init_ui()
        self.load_pending_jobs()

    def _init_ui(self):
        t = self.translator.t
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(t("qc.pending")))

        self.jobs_view = QTableView(self)
        self.jobs_view.setModel(self.table_model)
        self.jobs_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.jobs_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.jobs_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        header = self.jobs_view.horizontalHeader()
        if header:
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self.jobs_view)

        button_layout = QHBoxLayout()
        self.to_finished_button = QPushButton(t("qc.toFinished"))
        self.to_component_button = QPushButton(t("qc.toComponent"))
        self.refresh_button = QPushButton(t("common.refresh"))
        self.to_finished_button.clicked.connect(lambda: self._process_selected_job(QCDestination.FINISHED))
        self.to_component_button.clicked.connect(lambda: self._process_selected_job(QCDestination.COMPONENT))
        self.refresh_button.clicked.connect(self.load_pending_jobs)
        button_layout.addWidget(self.to_finished_button)
        button_layout.addWidget(self.to_component_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        layout.addLayout(button_layout)
        logger.info("QCUI initialized.")

    def load_pending_jobs(self):
        try:
            jobs = self.qc_manager.get_pending_jobs()
            self.table_model.update_data(jobs)
            logger.debug(f"{len(jobs)} jobs waiting for QC.")
        except Exception as e:
            logger.error(f"Error loading QC jobs: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not load QC jobs: {e}")

    def _process_selected_job(self, destination: QCDestination):
        selection_model = self.jobs_view.selectionModel()
        if not selection_model or not selection_model.hasSelection():
            QMessageBox.information(self, "No selection", "Select a job first.")
            return
        log = self.table_model.get_log_at_row(selection_model.selectedRows()[0].row())
        if log is None or log.id is None:
            return
        try:
            result = self.qc_manager.process_job(log.id, destination)
            QMessageBox.information(self, self.translator.t("nav.qc"),
                                    f"{result.stocked_item.name}: {result.stocked_item.quantity:,.0f}")
            self.load_pending_jobs()
        except ValueError as ve:
            QMessageBox.warning(self, "Validation error", str(ve))
        except Exception as e:
            logger.error(f"Error processing QC job {log.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Error", f"Could not process job: {e}")
