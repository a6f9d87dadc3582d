"""
Lab Session (Controller)
========================
The single owner of the simulation state.

Why is this file needed?
------------------------
1. Ownership: CircuitState, the observation table and the chat history live
   here and are only changed through the operations below. Views read frozen
   snapshots and tuples.
2. Workflow: It encodes the experiment procedure (charge with K1, leak with
   K2, record, calculate) plus the tutor messages that accompany it.
3. Single-slot chat: at most one assistant request is outstanding; a second
   question is rejected, not queued.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Optional

from condenserlab.controller import calculator
from condenserlab.controller.gateway import build_context
from condenserlab.controller.physics import step
from condenserlab.model.chat import ChatHistory, ChatMessage, ChatRole
from condenserlab.model.readings import Reading, ReadingLedger
from condenserlab.model.state import CircuitSnapshot, CircuitState

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome to the Physics Lab! To begin, ensure K2 is open and close K1 to charge the condenser."
)
FIRST_READING_TIP = (
    "Great! You've recorded a reading. Use the 'Calc R' button to compute the resistance using the formula."
)
RESET_MESSAGE = "Experiment reset. Ready for a new trial."


class CalculationOutcome(Enum):
    CALCULATED = "calculated"
    DEFERRED = "deferred"


class LabSession:
    def __init__(self, circuit: Optional[CircuitState] = None) -> None:
        self._circuit = circuit if circuit is not None else CircuitState()
        self._ledger = ReadingLedger()
        self._chat = ChatHistory()
        self._awaiting_response = False
        self._has_shown_tip = False

        self._chat.append(ChatRole.ASSISTANT, WELCOME_MESSAGE)

    # --- READ-ONLY VIEWS ---

    @property
    def snapshot(self) -> CircuitSnapshot:
        return self._circuit.snapshot()

    @property
    def readings(self) -> tuple[Reading, ...]:
        return self._ledger.list()

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self._chat.list()

    @property
    def awaiting_response(self) -> bool:
        return self._awaiting_response

    def mean_resistance(self) -> Optional[float]:
        return calculator.mean_resistance(self._ledger)

    def context(self, stopwatch_seconds: float) -> str:
        return build_context(self.snapshot, len(self._ledger), stopwatch_seconds)

    # --- CIRCUIT ---

    def toggle_k1(self) -> bool:
        self._circuit.k1_closed = not self._circuit.k1_closed
        logger.info(f"K1 {'closed' if self._circuit.k1_closed else 'opened'}.")
        return self._circuit.k1_closed

    def toggle_k2(self) -> bool:
        self._circuit.k2_closed = not self._circuit.k2_closed
        logger.info(f"K2 {'closed' if self._circuit.k2_closed else 'opened'}.")
        return self._circuit.k2_closed

    def advance(self, dt: float) -> CircuitSnapshot:
        """Apply one physics frame. Called by the frame timer only."""
        self._circuit = step(self._circuit, dt)
        return self._circuit.snapshot()

    # --- OBSERVATION TABLE ---

    def record(self, stopwatch_seconds: float) -> Reading:
        reading = self._ledger.record(self._circuit.snapshot(), stopwatch_seconds)
        logger.info(
            f"Recorded reading {reading.id}: t={reading.time_seconds} s, "
            f"theta0={reading.initial_deflection}, theta_t={reading.final_deflection}"
        )
        if not self._has_shown_tip:
            self._has_shown_tip = True
            self._chat.append(ChatRole.ASSISTANT, FIRST_READING_TIP)
        return reading

    def delete(self, reading_id: int) -> None:
        if self._ledger.delete(reading_id):
            logger.info(f"Deleted reading {reading_id}.")
        else:
            logger.debug(f"Delete ignored, no reading {reading_id}.")

    def calculate(self, reading_id: int) -> CalculationOutcome:
        """
        Compute R for one reading.

        Raises:
            KeyError: unknown reading id.
            InvalidInput: the reading is outside the log domain; nothing is changed.
        """
        reading = self._ledger.get(reading_id)
        updated = calculator.calculate(reading, self._circuit.capacitance)
        if updated is reading:
            logger.info(f"Calculation for reading {reading_id} deferred (no measurable leakage yet).")
            return CalculationOutcome.DEFERRED

        self._ledger.replace(updated)
        logger.info(f"Reading {reading_id}: R = {updated.display_r} MΩ")
        return CalculationOutcome.CALCULATED

    def reset(self) -> None:
        """Open both keys, empty the condenser and clear the table."""
        self._circuit.discharge()
        self._ledger.clear()
        self._chat.append(ChatRole.ASSISTANT, RESET_MESSAGE)
        logger.info("Experiment reset.")

    # --- ASSISTANT ---

    def begin_question(self, text: str) -> Optional[str]:
        """
        Accept a question for the assistant.

        Returns the cleaned question, or None when it is blank or another
        request is still outstanding.
        """
        question = text.strip()
        if not question:
            return None
        if self._awaiting_response:
            logger.info("Question rejected, assistant is still answering.")
            return None

        self._chat.append(ChatRole.USER, question)
        self._awaiting_response = True
        return question

    def finish_question(self, answer: str) -> None:
        """Append the assistant answer, whatever happened on the bench meanwhile."""
        self._chat.append(ChatRole.ASSISTANT, answer)
        self._awaiting_response = False
