"""
AI Lab Assistant Gateway
========================
Sends the student's question, together with a text snapshot of the bench, to
the Gemini `generateContent` REST endpoint and returns the answer text.

Why is this file needed?
------------------------
1. Isolation: The rest of the application only sees `ask(question, context)
   -> str`. Transport details stay here.
2. Graceful degradation: `ask` never raises. A missing API key, a network
   error or a malformed response all turn into a fixed, readable message that
   the chat shows as an assistant bubble.

A single attempt is made per call; callers serialize requests themselves.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from condenserlab.config import GatewaySettings
from condenserlab.model.errors import GatewayUnavailable
from condenserlab.model.state import CircuitSnapshot

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI Assistant Unavailable: Please ensure API_KEY is set in your environment variables."
CONNECTION_ERROR_MESSAGE = "I'm having trouble connecting to the lab server right now. Please try again."
EMPTY_RESPONSE_MESSAGE = "I couldn't generate a response at the moment."

PROMPT_TEMPLATE = """You are a helpful, encouraging Physics Laboratory Instructor for undergraduate students.
The student is performing the 'Measurement of High Resistance by Leakage of Condenser' experiment.

Current Experiment Context:
{context}

Student Question: {question}

Provide a clear, concise (under 100 words if possible), and educational answer.
If they ask for the answer to the calculation, guide them through the formula: R = t / (C * ln(theta0/thetat)) instead of just giving the number.
Format math clearly."""


def build_context(snapshot: CircuitSnapshot, reading_count: int, stopwatch_seconds: float) -> str:
    """Plain-text rendering of the bench for the assistant prompt."""
    def key_state(closed: bool) -> str:
        return "CLOSED" if closed else "OPEN"

    return "\n".join([
        "Simulation Status:",
        f"- Capacitor Voltage (Deflection): {snapshot.capacitor_voltage:.1f} / {snapshot.max_voltage:g}",
        f"- Key K1 (Charging): {key_state(snapshot.k1_closed)}",
        f"- Key K2 (Leaking): {key_state(snapshot.k2_closed)}",
        f"- Known Capacitance: {snapshot.capacitance:g} µF",
        f"- Unknown Resistance: (Hidden value: {snapshot.resistance:g} MΩ)",
        f"- Stopwatch Time: {stopwatch_seconds:.2f} s",
        f"- Readings Taken: {reading_count}",
    ])


class AssistantGateway:
    def __init__(self, settings: GatewaySettings, client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(base_url=self.settings.base_url, timeout=self.settings.timeout_s)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def ask(self, question: str, context: str) -> str:
        if not self.settings.has_credentials:
            logger.warning("API_KEY not found in environment variables.")
            return UNAVAILABLE_MESSAGE

        try:
            text = self._generate(PROMPT_TEMPLATE.format(context=context, question=question))
        except GatewayUnavailable as e:
            logger.error(f"Assistant request failed: {e}")
            return CONNECTION_ERROR_MESSAGE

        return text or EMPTY_RESPONSE_MESSAGE

    def _generate(self, prompt: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = self._get_client().post(
                f"/models/{self.settings.model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self.settings.api_key or ""},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, RuntimeError) as e:
            # RuntimeError: the client was closed while the app shut down
            raise GatewayUnavailable(str(e)) from e

        return _extract_text(data)


def _extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate ("" when there is none)."""
    try:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts).strip()
    except (TypeError, AttributeError) as e:
        raise GatewayUnavailable(f"Unexpected response shape: {e}") from e
