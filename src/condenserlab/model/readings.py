"""
Observation Table (Reading Ledger)
==================================
Ordered collection of the readings the student captured.

Why is this file needed?
------------------------
1. Bookkeeping: Each reading is an independent snapshot of (t, theta_0,
   theta_t); nothing points back to the live circuit.
2. Identity: Ids come from a session-wide counter and are never reused, even
   after delete or clear.
"""
from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
from typing import Iterator, Optional

from condenserlab.config import DISPLAY_DECIMALS
from condenserlab.model.state import CircuitSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reading:
    """One row of the observation table."""
    id: int
    time_seconds: float
    initial_deflection: float  # theta_0
    final_deflection: float  # theta_t
    calculated_r: Optional[float] = None  # MΩ, full precision

    @property
    def display_r(self) -> Optional[float]:
        """Calculated resistance rounded for the table."""
        if self.calculated_r is None:
            return None
        return round(self.calculated_r, DISPLAY_DECIMALS)


class ReadingLedger:
    """Append-only (except delete) list of readings, insertion order preserved."""

    def __init__(self) -> None:
        self._readings: list[Reading] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(tuple(self._readings))

    def record(self, snapshot: CircuitSnapshot, stopwatch_seconds: float) -> Reading:
        """Capture the current deflection against the measured leakage time."""
        reading = Reading(
            id=next(self._ids),
            time_seconds=round(max(float(stopwatch_seconds), 0.0), 2),
            initial_deflection=snapshot.max_voltage,
            final_deflection=round(max(snapshot.capacitor_voltage, 0.0), 1),
        )
        self._readings.append(reading)
        logger.debug(f"Reading appended: {reading}")
        return reading

    def delete(self, reading_id: int) -> bool:
        """Remove a reading. Unknown ids are ignored; returns whether one was removed."""
        for i, r in enumerate(self._readings):
            if r.id == reading_id:
                del self._readings[i]
                return True
        return False

    def list(self) -> tuple[Reading, ...]:
        return tuple(self._readings)

    def get(self, reading_id: int) -> Reading:
        for r in self._readings:
            if r.id == reading_id:
                return r
        raise KeyError(reading_id)

    def replace(self, reading: Reading) -> None:
        """Swap in an updated copy of an existing reading (same id)."""
        for i, r in enumerate(self._readings):
            if r.id == reading.id:
                self._readings[i] = reading
                return
        raise KeyError(reading.id)

    def clear(self) -> None:
        """Drop all readings. The id counter keeps running."""
        self._readings.clear()
