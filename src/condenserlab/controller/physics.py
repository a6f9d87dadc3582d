"""
Physics Integrator
==================
Advances the condenser voltage by one frame.

Why is this file needed?
------------------------
1. Charging: with K1 closed the condenser approaches the battery deflection
   through the low resistance charging path (explicit Euler step).
2. Leakage: with only K2 closed it discharges through the unknown high
   resistance, v(t) = v0 * exp(-t / RC). The step is exact for any dt.
3. Hold: with both keys open there is no path and the charge is kept.

The function is pure: it returns a new CircuitState and never raises, so the
frame loop cannot be interrupted by it.
"""
from __future__ import annotations

from dataclasses import replace
import math
from typing import TYPE_CHECKING, Union

import numpy as np

from condenserlab.model.state import CircuitState

if TYPE_CHECKING:
    import numpy.typing as npt


def step(state: CircuitState, dt: float) -> CircuitState:
    """Return the state after `dt` seconds of real time."""
    dt = max(float(dt), 0.0)
    v = state.capacitor_voltage

    if state.k1_closed:
        # Charging path wins when both keys are closed.
        # Factor capped at 1: a long frame lands on the asymptote, never past it.
        factor = min(state.charge_rate * dt, 1.0)
        v = v + (state.max_voltage - v) * factor
    elif state.k2_closed:
        v = v * math.exp(-dt / state.time_constant)

    return replace(
        state,
        capacitor_voltage=max(0.0, v),
        sim_time=state.sim_time + dt,
    )


def decay_curve(
    times: Union[float, "npt.ArrayLike"],
    v0: float,
    resistance: float,
    capacitance: float,
) -> "npt.NDArray[np.float64]":
    """Closed-form leakage curve v0 * exp(-t / RC), used for the theory overlay."""
    t = np.clip(np.asarray(times, dtype=float), 0.0, None)
    return v0 * np.exp(-t / (resistance * capacitance))
