"""
Circuit State (Data Model)
==========================
This module defines the live state of the leakage circuit.

Why is this file needed?
------------------------
1. State Management: It holds the key positions, the condenser voltage and
   the fixed circuit constants in one place.
2. Decoupling: The session owns the only mutable instance; views only ever
   receive a frozen CircuitSnapshot.

Classes:
    CircuitState: Mutable record advanced by the physics integrator.
    CircuitSnapshot: Immutable copy handed to readers.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from condenserlab.config import BATTERY_DEFLECTION, CAPACITANCE_UF, CHARGE_RATE, RESISTANCE_MOHM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircuitSnapshot:
    """Read-only view of the circuit at one instant."""
    k1_closed: bool
    k2_closed: bool
    capacitor_voltage: float
    max_voltage: float
    capacitance: float
    resistance: float
    charge_rate: float
    sim_time: float

    @property
    def time_constant(self) -> float:
        """RC of the leakage path in seconds (MΩ x µF)."""
        return self.resistance * self.capacitance


@dataclass
class CircuitState:
    """
    State of the condenser circuit.

    K1 closes the charging path (battery -> condenser), K2 closes the leakage
    path through the high resistance. Both may be closed; charging dominates.
    """
    k1_closed: bool = False
    k2_closed: bool = False
    capacitor_voltage: float = 0.0
    max_voltage: float = BATTERY_DEFLECTION
    capacitance: float = CAPACITANCE_UF  # µF
    resistance: float = RESISTANCE_MOHM  # MΩ, hidden from the student
    charge_rate: float = CHARGE_RATE  # 1/s
    sim_time: float = 0.0

    def __post_init__(self) -> None:
        for name in ("max_voltage", "capacitance", "resistance", "charge_rate"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        if self.capacitor_voltage < 0.0:
            raise ValueError(f"capacitor_voltage must be non-negative, got {self.capacitor_voltage!r}")
        if self.sim_time < 0.0:
            raise ValueError(f"sim_time must be non-negative, got {self.sim_time!r}")

    @property
    def time_constant(self) -> float:
        return self.resistance * self.capacitance

    def snapshot(self) -> CircuitSnapshot:
        return CircuitSnapshot(
            k1_closed=self.k1_closed,
            k2_closed=self.k2_closed,
            capacitor_voltage=self.capacitor_voltage,
            max_voltage=self.max_voltage,
            capacitance=self.capacitance,
            resistance=self.resistance,
            charge_rate=self.charge_rate,
            sim_time=self.sim_time,
        )

    def discharge(self) -> None:
        """Open both keys and empty the condenser. Constants and sim time are kept."""
        self.k1_closed = False
        self.k2_closed = False
        self.capacitor_voltage = 0.0
        logger.debug("Circuit discharged.")
