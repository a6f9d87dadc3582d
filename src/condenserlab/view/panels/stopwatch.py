"""
Stopwatch Panel
"""
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QStyle, QGroupBox
from PySide6.QtCore import Qt, QTimer

from condenserlab.config import STOPWATCH_TICK_MS
from condenserlab.controller.clock import Stopwatch
from condenserlab.utils import format_stopwatch


class StopwatchPanel(QWidget):
    def __init__(self, stopwatch: Stopwatch | None = None) -> None:
        super().__init__()
        self.stopwatch = stopwatch or Stopwatch()

        # Display Timer (reads the stopwatch, never drives physics)
        self.timer = QTimer(self)
        self.timer.setInterval(STOPWATCH_TICK_MS)
        self.timer.timeout.connect(self.refresh)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        grp = QGroupBox("Stopwatch")
        inner = QVBoxLayout(grp)

        self.lbl_time = QLabel(format_stopwatch(0.0))
        self.lbl_time.setAlignment(Qt.AlignCenter)
        self.lbl_time.setStyleSheet(
            "font-family: monospace; font-size: 26px; color: #22c55e; background: #111827; padding: 6px;"
        )
        inner.addWidget(self.lbl_time)

        hbox = QHBoxLayout()
        self.btn_toggle = QPushButton()
        self.btn_toggle.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
        self.btn_toggle.clicked.connect(self.on_toggle)
        hbox.addWidget(self.btn_toggle)

        self.btn_reset = QPushButton()
        self.btn_reset.setIcon(self.style().standardIcon(QStyle.SP_BrowserReload))
        self.btn_reset.clicked.connect(self.on_reset)
        hbox.addWidget(self.btn_reset)
        inner.addLayout(hbox)

        layout.addWidget(grp)

    def on_toggle(self) -> None:
        self.stopwatch.toggle()
        if self.stopwatch.running:
            self.timer.start()
        else:
            self.timer.stop()
        self.refresh()
        self.update_icon()

    def on_reset(self) -> None:
        self.stopwatch.reset()
        self.timer.stop()
        self.refresh()
        self.update_icon()

    def refresh(self) -> None:
        self.lbl_time.setText(format_stopwatch(self.stopwatch.elapsed_seconds))

    def update_icon(self) -> None:
        if self.stopwatch.running:
            self.btn_toggle.setIcon(self.style().standardIcon(QStyle.SP_MediaPause))
        else:
            self.btn_toggle.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))

    def stop(self) -> None:
        self.timer.stop()
