"""Painted galvanometer dial. The needle sweeps 120° over 0..max deflection."""
from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from condenserlab.utils import needle_angle, NEEDLE_SWEEP_DEG

TICK_COUNT = 11


class GalvanometerWidget(QWidget):
    def __init__(self, max_value: float, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.max_value = max_value
        self.value = 0.0
        self.setMinimumSize(180, 180)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def set_value(self, value: float) -> None:
        if value != self.value:
            self.value = value
            self.update()

    def paintEvent(self, event) -> None:
        side = min(self.width(), self.height())
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.translate(self.width() / 2, self.height() / 2)
        painter.scale(side / 200.0, side / 200.0)

        # Dial face
        painter.setPen(QPen(QColor("#4b5563"), 4))
        painter.setBrush(QBrush(QColor("#f3f4f6")))
        painter.drawEllipse(QRectF(-95, -95, 190, 190))

        # Ticks and labels; 0 deg points straight up
        painter.setFont(QFont("Sans", 7, QFont.Bold))
        for i in range(TICK_COUNT):
            angle = -NEEDLE_SWEEP_DEG / 2 + i * NEEDLE_SWEEP_DEG / (TICK_COUNT - 1)
            painter.save()
            painter.translate(0, 20)
            painter.rotate(angle)
            painter.setPen(QPen(QColor("#1f2937"), 1.5))
            painter.drawLine(QPointF(0, -88), QPointF(0, -78))
            if i % 2 == 0:
                painter.setPen(QColor("#4b5563"))
                painter.drawText(QRectF(-12, -76, 24, 12), Qt.AlignCenter, str(i * 10))
            painter.restore()

        # Needle
        painter.save()
        painter.translate(0, 20)
        painter.rotate(needle_angle(self.value, self.max_value))
        painter.setPen(QPen(QColor("#dc2626"), 3, Qt.SolidLine, Qt.RoundCap))
        painter.drawLine(QPointF(0, 0), QPointF(0, -82))
        painter.restore()

        # Pivot
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor("#1f2937")))
        painter.drawEllipse(QPointF(0, 20), 5, 5)

        painter.setPen(QColor("#6b7280"))
        painter.setFont(QFont("Monospace", 7, QFont.Bold))
        painter.drawText(QRectF(-60, 45, 120, 14), Qt.AlignCenter, "GALVANOMETER")
        painter.end()
