"""
Main Application Window
=======================
The primary GUI container that holds the bench, the live plot and the side
panels (stopwatch, observation table, assistant).

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Scheduling: It owns the physics frame timer. The stopwatch panel owns its
   own display timer; the two are never linked.
3. Teardown: Both timers are stopped in closeEvent before the widgets go away.
"""
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction

from condenserlab.config import FRAME_INTERVAL_MS
from condenserlab.controller.clock import FrameClock, Stopwatch
from condenserlab.controller.gateway import AssistantGateway
from condenserlab.controller.session import LabSession
from condenserlab.view.panels.assistant import AssistantPanel
from condenserlab.view.panels.bench import BenchPanel
from condenserlab.view.panels.readings import ReadingsPanel
from condenserlab.view.panels.stopwatch import StopwatchPanel
from condenserlab.view.widgets.deflection_plot import DeflectionPlotWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Condenser Lab: High Resistance by Leakage"


class MainWindow(QMainWindow):
    def __init__(self, session: LabSession, gateway: AssistantGateway) -> None:
        super().__init__()
        self.session = session
        self.gateway = gateway
        self.frame_clock = FrameClock()
        self.stopwatch = Stopwatch()

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Bench + Plot ---
        left = QWidget()
        left_layout = QVBoxLayout(left)
        self.bench_panel = BenchPanel(self.session)
        left_layout.addWidget(self.bench_panel, 1)

        self.plot = DeflectionPlotWidget()
        self.plot.set_max_deflection(self.session.snapshot.max_voltage)
        left_layout.addWidget(self.plot, 1)
        splitter.addWidget(left)

        # --- RIGHT SIDE: Controls ---
        right = QWidget()
        right_layout = QVBoxLayout(right)
        self.stopwatch_panel = StopwatchPanel(self.stopwatch)
        right_layout.addWidget(self.stopwatch_panel)

        self.readings_panel = ReadingsPanel(self.session, self.stopwatch)
        right_layout.addWidget(self.readings_panel, 2)

        self.assistant_panel = AssistantPanel(self.session, self.gateway, self.stopwatch)
        right_layout.addWidget(self.assistant_panel, 1)
        splitter.addWidget(right)

        # Set initial proportions (sidebar 400 px like the lab sheet)
        splitter.setSizes([1000, 400])

        # --- SIGNAL CONNECTIONS ---
        self.readings_panel.readings_changed.connect(self.assistant_panel.refresh)
        self.readings_panel.experiment_reset.connect(self.on_experiment_reset)

        self._create_actions()
        self._create_menus()

        # --- PHYSICS FRAME LOOP ---
        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(FRAME_INTERVAL_MS)
        self.frame_timer.timeout.connect(self.on_frame)
        self.frame_timer.start()
        logger.info("Frame loop started.")

    def _create_actions(self) -> None:
        self.act_export_plot = QAction("Export Plot...", self)
        self.act_export_plot.triggered.connect(self.on_export_plot)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_export_plot)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SLOTS ---

    def on_frame(self) -> None:
        dt = self.frame_clock.tick()
        snap = self.session.advance(dt)
        self.bench_panel.update_from_snapshot(snap)
        self.plot.append(snap)
        self.plot.refresh(snap)

    def on_experiment_reset(self) -> None:
        self.bench_panel.update_from_snapshot(self.session.snapshot)
        self.plot.clear()

    def on_export_plot(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save plot as image", "deflection.png", "PNG image (*.png);;JPEG image (*.jpg)"
        )
        if not file_path:
            return
        try:
            self.plot.export_image(file_path)
        except Exception as e:
            logger.exception("Failed to export plot")
            QMessageBox.critical(self, "Export Error", f"Could not export the plot:\n{str(e)}")

    def closeEvent(self, event) -> None:
        # Unsubscribe the periodic callbacks before the session/widgets are destroyed
        self.frame_timer.stop()
        self.stopwatch_panel.stop()
        self.assistant_panel.shutdown()
        self.gateway.close()
        logger.info("Frame loop stopped.")
        super().closeEvent(event)
