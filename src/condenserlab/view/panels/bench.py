"""
Lab Bench Panel
"""
from typing import Optional, Tuple

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout
)
from PySide6.QtCore import Qt

from condenserlab.controller.session import LabSession
from condenserlab.model.state import CircuitSnapshot
from condenserlab.view.widgets.galvanometer import GalvanometerWidget


def _key_style(closed: bool) -> str:
    color = "green" if closed else "red"
    return f"color: {color}; font-weight: bold;"


class BenchPanel(QWidget):
    def __init__(self, session: LabSession) -> None:
        super().__init__()
        self.session = session
        self._shown_keys: Optional[Tuple[bool, bool]] = None
        snap = session.snapshot

        layout = QHBoxLayout(self)

        # --- Apparatus ---
        grp = QGroupBox("Apparatus")
        form = QFormLayout(grp)
        form.addRow("DC Battery:", QLabel(f"+ {snap.max_voltage:g} div -"))
        form.addRow("Condenser:", QLabel(f"{snap.capacitance:g} µF"))
        form.addRow("High Resistance Box:", QLabel("R = ? MΩ"))

        self.btn_k1 = QPushButton("K1 (Charge)")
        self.btn_k1.setCheckable(True)
        self.btn_k1.setMinimumHeight(40)
        self.btn_k1.clicked.connect(self.on_k1_clicked)
        self.lbl_k1 = QLabel()
        form.addRow(self.btn_k1, self.lbl_k1)

        self.btn_k2 = QPushButton("K2 (Leak)")
        self.btn_k2.setCheckable(True)
        self.btn_k2.setMinimumHeight(40)
        self.btn_k2.clicked.connect(self.on_k2_clicked)
        self.lbl_k2 = QLabel()
        form.addRow(self.btn_k2, self.lbl_k2)

        hint = QLabel("Close K1 to charge, then open K1 and close K2 to leak.")
        hint.setWordWrap(True)
        hint.setStyleSheet("color: gray;")
        form.addRow(hint)

        layout.addWidget(grp)

        # --- Galvanometer ---
        right = QVBoxLayout()
        self.galvanometer = GalvanometerWidget(max_value=snap.max_voltage)
        right.addWidget(self.galvanometer)

        self.lbl_deflection = QLabel()
        self.lbl_deflection.setAlignment(Qt.AlignCenter)
        self.lbl_deflection.setStyleSheet("font-family: monospace; font-size: 14px;")
        right.addWidget(self.lbl_deflection)
        layout.addLayout(right, 1)

        self.update_from_snapshot(snap)

    # --- SLOTS ---

    def on_k1_clicked(self) -> None:
        self.session.toggle_k1()
        self.update_from_snapshot(self.session.snapshot)

    def on_k2_clicked(self) -> None:
        self.session.toggle_k2()
        self.update_from_snapshot(self.session.snapshot)

    def update_from_snapshot(self, snap: CircuitSnapshot) -> None:
        keys = (snap.k1_closed, snap.k2_closed)
        if keys != self._shown_keys:
            self._show_keys(keys)

        self.galvanometer.set_value(snap.capacitor_voltage)
        self.lbl_deflection.setText(f"θ = {snap.capacitor_voltage:5.1f} / {snap.max_voltage:g}")

    def _show_keys(self, keys: Tuple[bool, bool]) -> None:
        self._shown_keys = keys
        for btn, lbl, closed in (
            (self.btn_k1, self.lbl_k1, keys[0]),
            (self.btn_k2, self.lbl_k2, keys[1]),
        ):
            btn.blockSignals(True)
            btn.setChecked(closed)
            btn.blockSignals(False)
            lbl.setText("CLOSED" if closed else "OPEN")
            lbl.setStyleSheet(_key_style(closed))
