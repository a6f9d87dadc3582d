"""Live deflection trace with the theoretical leakage curve overlaid."""
from __future__ import annotations

from collections import deque
import logging

import numpy as np
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from PySide6.QtWidgets import QVBoxLayout, QWidget

from condenserlab.controller.physics import decay_curve
from condenserlab.model.state import CircuitSnapshot

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 30.0
MAX_POINTS = 4000


class DeflectionPlotWidget(QWidget):
    """Rolling plot of the galvanometer deflection against simulation time."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._times: deque[float] = deque(maxlen=MAX_POINTS)
        self._values: deque[float] = deque(maxlen=MAX_POINTS)

        # Start of the current leakage interval (time, deflection), None while not leaking
        self._leak_start: tuple[float, float] | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setLabel('bottom', 'Time [s]', color='black')
        self.plot_widget.setLabel('left', 'Deflection', color='black')
        self.plot_widget.setTitle('Condenser Deflection', color='black', size='11pt')
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        self.plot_widget.addLegend(offset=(10, 10))

        self.trace = self.plot_widget.plot([], [], pen=pg.mkPen(color='#1f77b4', width=2), name='Measured')
        self.theory = self.plot_widget.plot(
            [], [],
            pen=pg.mkPen(color='#d62728', width=1, style=pg.QtCore.Qt.DashLine),
            name='v0·exp(-t/RC)',
        )

        layout.addWidget(self.plot_widget)

    def set_max_deflection(self, max_value: float) -> None:
        self.plot_widget.setYRange(0, max_value * 1.05)

    def append(self, snap: CircuitSnapshot) -> None:
        self._times.append(snap.sim_time)
        self._values.append(snap.capacitor_voltage)

        leaking = snap.k2_closed and not snap.k1_closed
        if leaking and self._leak_start is None:
            self._leak_start = (snap.sim_time, snap.capacitor_voltage)
        elif not leaking:
            self._leak_start = None

    def refresh(self, snap: CircuitSnapshot) -> None:
        """Redraw the visible window. Cheap enough to call every frame."""
        if not self._times:
            return
        t = np.fromiter(self._times, dtype=float)
        v = np.fromiter(self._values, dtype=float)
        visible = t >= t[-1] - WINDOW_SECONDS
        self.trace.setData(t[visible], v[visible])

        if self._leak_start is not None:
            t0, v0 = self._leak_start
            tt = np.linspace(t0, max(t[-1], t0), 100)
            self.theory.setData(tt, decay_curve(tt - t0, v0, snap.resistance, snap.capacitance))
        else:
            self.theory.setData([], [])

    def clear(self) -> None:
        self._times.clear()
        self._values.clear()
        self._leak_start = None
        self.trace.setData([], [])
        self.theory.setData([], [])

    def export_image(self, file_path: str) -> None:
        exporter = ImageExporter(self.plot_widget.plotItem)
        exporter.parameters()['width'] = 1920
        exporter.export(file_path)
        logger.info(f"Plot exported to {file_path}")
