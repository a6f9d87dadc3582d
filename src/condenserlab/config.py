"""
Configuration & Lab Constants
=============================
This module serves as the central registry for the experiment constants and
the environment-driven settings.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (battery deflection, rate constants,
   timer intervals) scattered throughout the code.
2. Deployment: It resolves the assistant credential from the process
   environment, so a missing key only disables the assistant.

Exports:
    CAPACITANCE_UF (float): Known capacitance of the condenser.
    RESISTANCE_MOHM (float): The hidden "unknown" resistance.
    BATTERY_DEFLECTION (float): Fully-charged galvanometer deflection.
    GatewaySettings: Assistant endpoint settings.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Physics Constants
CAPACITANCE_UF: float = 1.0
RESISTANCE_MOHM: float = 5.0  # The unknown value
BATTERY_DEFLECTION: float = 100.0  # Arbitrary units for deflection (0-100 scale)
CHARGE_RATE: float = 15.0  # 1/s, charging goes through the low resistance path

# Scheduling
FRAME_INTERVAL_MS: int = 16  # ~60 Hz physics frames
STOPWATCH_TICK_MS: int = 100  # stopwatch display refresh

# Resistance calculator thresholds
MIN_FINAL_DEFLECTION: float = 0.1
MIN_DEFLECTION_RATIO: float = 1.001
DISPLAY_DECIMALS: int = 2

# Assistant
API_KEY_ENV = "API_KEY"
MODEL_ENV = "CONDENSERLAB_MODEL"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class GatewaySettings:
    """Connection settings for the AI lab assistant."""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 30.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewaySettings":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get(API_KEY_ENV) or None,
            model=env.get(MODEL_ENV) or DEFAULT_MODEL,
        )
