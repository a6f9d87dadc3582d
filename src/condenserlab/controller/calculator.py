"""
Resistance Calculator
=====================
R = t / (C * ln(theta_0 / theta_t))

With C in µF and t in seconds the result is in MΩ.
"""
from __future__ import annotations

from dataclasses import replace
import logging
import math
from typing import Iterable, Optional

import numpy as np

from condenserlab.config import MIN_DEFLECTION_RATIO, MIN_FINAL_DEFLECTION
from condenserlab.model.errors import InvalidInput
from condenserlab.model.readings import Reading

logger = logging.getLogger(__name__)


def _validate(reading: Reading, capacitance: float) -> None:
    if reading.final_deflection <= MIN_FINAL_DEFLECTION:
        raise InvalidInput(
            "final_deflection",
            f"Deflection {reading.final_deflection} is too small to measure (must exceed {MIN_FINAL_DEFLECTION}).",
        )
    if reading.initial_deflection <= 0.0:
        raise InvalidInput(
            "initial_deflection",
            f"Initial deflection must be positive, got {reading.initial_deflection}.",
        )
    if capacitance <= 0.0:
        raise InvalidInput("capacitance", f"Capacitance must be positive, got {capacitance}.")


def is_deferred(reading: Reading) -> bool:
    """True when no measurable leakage happened yet (ratio too close to 1)."""
    if reading.final_deflection <= 0.0:
        return False
    return reading.initial_deflection / reading.final_deflection <= MIN_DEFLECTION_RATIO


def calculate(reading: Reading, capacitance: float) -> Reading:
    """
    Derive the leakage resistance of one reading.

    Raises:
        InvalidInput: deflections (or capacitance) outside the log domain.

    Returns:
        A copy with `calculated_r` set, or the reading itself when the
        calculation is deferred.
    """
    _validate(reading, capacitance)

    if is_deferred(reading):
        logger.debug(f"Reading {reading.id}: deflection ratio too close to 1, deferred.")
        return reading

    ratio = reading.initial_deflection / reading.final_deflection
    value = reading.time_seconds / (capacitance * math.log(ratio))
    return replace(reading, calculated_r=value)


def mean_resistance(readings: Iterable[Reading]) -> Optional[float]:
    """Average of the calculated resistances, None when nothing was calculated."""
    values = [r.calculated_r for r in readings if r.calculated_r is not None]
    if not values:
        return None
    return float(np.mean(values))
