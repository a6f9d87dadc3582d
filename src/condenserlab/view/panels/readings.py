"""
Observation Table Panel
"""
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGroupBox, QTableWidget,
    QTableWidgetItem, QHeaderView, QFileDialog, QMessageBox, QAbstractItemView
)
from PySide6.QtCore import Qt, Signal

from condenserlab.controller.clock import Stopwatch
from condenserlab.controller.session import CalculationOutcome, LabSession
from condenserlab.model.errors import InvalidInput
from condenserlab.model.io import IOManager

logger = logging.getLogger(__name__)

COLUMNS = ["Time (s)", "θ₀", "θₜ", "R (MΩ)", ""]


class ReadingsPanel(QWidget):
    # Emitted whenever the table or the chat changed (tip/reset messages)
    readings_changed = Signal()
    experiment_reset = Signal()

    def __init__(self, session: LabSession, stopwatch: Stopwatch) -> None:
        super().__init__()
        self.session = session
        self.stopwatch = stopwatch

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- Actions ---
        hbox = QHBoxLayout()
        self.btn_record = QPushButton("Record Reading")
        self.btn_record.setMinimumHeight(36)
        self.btn_record.clicked.connect(self.on_record_clicked)
        hbox.addWidget(self.btn_record)

        self.btn_reset = QPushButton("Reset Exp")
        self.btn_reset.setMinimumHeight(36)
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        hbox.addWidget(self.btn_reset)
        layout.addLayout(hbox)

        # --- Table ---
        grp = QGroupBox("Observation Table")
        inner = QVBoxLayout(grp)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        inner.addWidget(self.table)

        self.lbl_message = QLabel("No readings recorded yet. Close K1 to charge, then Open K1 & Close K2 to leak.")
        self.lbl_message.setWordWrap(True)
        self.lbl_message.setStyleSheet("color: gray;")
        inner.addWidget(self.lbl_message)

        self.lbl_mean = QLabel("")
        self.lbl_mean.setAlignment(Qt.AlignCenter)
        inner.addWidget(self.lbl_mean)

        self.btn_export = QPushButton("Export CSV...")
        self.btn_export.clicked.connect(self.on_export_clicked)
        self.btn_export.setEnabled(False)
        inner.addWidget(self.btn_export)

        layout.addWidget(grp)

    # --- SLOTS ---

    def on_record_clicked(self) -> None:
        reading = self.session.record(self.stopwatch.elapsed_seconds)
        self._set_message(f"Recorded reading #{reading.id}.", "gray")
        self.refresh()
        self.readings_changed.emit()

    def on_reset_clicked(self) -> None:
        self.session.reset()
        self._set_message("Experiment reset.", "gray")
        self.refresh()
        self.experiment_reset.emit()
        self.readings_changed.emit()

    def on_calculate(self, reading_id: int) -> None:
        try:
            outcome = self.session.calculate(reading_id)
        except InvalidInput as e:
            self._set_message(f"Cannot calculate ({e.field}): {e.message}", "red")
            return
        except KeyError:
            logger.warning(f"Calculate requested for missing reading {reading_id}")
            return

        if outcome is CalculationOutcome.DEFERRED:
            self._set_message("No measurable leakage yet. Let the condenser leak longer.", "orange")
        else:
            self._set_message("", "gray")
        self.refresh()

    def on_delete(self, reading_id: int) -> None:
        self.session.delete(reading_id)
        self.refresh()

    def on_export_clicked(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(self, "Export readings", "readings.csv", "CSV (*.csv)")
        if not file_path:
            return
        try:
            IOManager.export_readings_csv(self.session.readings, file_path)
        except OSError as e:
            logger.exception("Failed to export readings")
            QMessageBox.critical(self, "Export Error", str(e))

    # --- HELPERS ---

    def _set_message(self, text: str, color: str) -> None:
        self.lbl_message.setText(text)
        self.lbl_message.setStyleSheet(f"color: {color};")

    def refresh(self) -> None:
        readings = self.session.readings
        self.table.setRowCount(len(readings))

        for row, r in enumerate(readings):
            for col, text in enumerate((f"{r.time_seconds:g}", f"{r.initial_deflection:g}", f"{r.final_deflection:g}")):
                item = QTableWidgetItem(text)
                item.setTextAlignment(Qt.AlignCenter)
                self.table.setItem(row, col, item)

            if r.display_r is not None:
                self.table.removeCellWidget(row, 3)
                item = QTableWidgetItem(f"{r.display_r:.2f}")
                item.setTextAlignment(Qt.AlignCenter)
                item.setForeground(Qt.darkGreen)
                self.table.setItem(row, 3, item)
            else:
                self.table.setItem(row, 3, QTableWidgetItem(""))
                btn_calc = QPushButton("Calc")
                btn_calc.clicked.connect(lambda _=False, rid=r.id: self.on_calculate(rid))
                self.table.setCellWidget(row, 3, btn_calc)

            btn_del = QPushButton("✕")
            btn_del.setToolTip("Delete reading")
            btn_del.clicked.connect(lambda _=False, rid=r.id: self.on_delete(rid))
            self.table.setCellWidget(row, 4, btn_del)

        mean = self.session.mean_resistance()
        self.lbl_mean.setText("" if mean is None else f"<b>Mean R = {mean:.2f} MΩ</b>")
        self.btn_export.setEnabled(bool(readings))
