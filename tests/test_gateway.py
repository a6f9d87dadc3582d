import json

import httpx
import pytest

from condenserlab.config import GatewaySettings
from condenserlab.controller.gateway import (
    CONNECTION_ERROR_MESSAGE, EMPTY_RESPONSE_MESSAGE, UNAVAILABLE_MESSAGE, AssistantGateway, build_context
)
from condenserlab.model.state import CircuitState


def make_gateway(handler, api_key="test-key"):
    settings = GatewaySettings(api_key=api_key, base_url="https://example.test/v1beta")
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url=settings.base_url)
    return AssistantGateway(settings, client=client)


def answer(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.mark.parametrize("question", ["", "What is RC?", "x" * 500])
def test_missing_credentials_returns_fallback(question):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=answer("should not happen"))

    gateway = make_gateway(handler, api_key=None)
    assert gateway.ask(question, "context") == UNAVAILABLE_MESSAGE
    assert calls == []


def test_blank_api_key_counts_as_missing():
    assert not GatewaySettings(api_key="   ").has_credentials


def test_successful_answer():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=answer("Use R = t / (C ln ratio)."))

    gateway = make_gateway(handler)
    text = gateway.ask("How do I compute R?", "Readings Taken: 3")

    assert text == "Use R = t / (C ln ratio)."
    assert seen["url"] == "https://example.test/v1beta/models/gemini-2.5-flash:generateContent"
    assert seen["key"] == "test-key"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "How do I compute R?" in prompt
    assert "Readings Taken: 3" in prompt


def test_multiple_parts_are_joined():
    payload = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "student."}]}}]}
    gateway = make_gateway(lambda request: httpx.Response(200, json=payload))
    assert gateway.ask("hi", "ctx") == "Hello student."


def test_upstream_error_returns_fallback():
    gateway = make_gateway(lambda request: httpx.Response(500, json={"error": "boom"}))
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE


def test_network_failure_returns_fallback():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    gateway = make_gateway(handler)
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE


def test_malformed_json_returns_fallback():
    gateway = make_gateway(lambda request: httpx.Response(200, content=b"not json"))
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE


def test_unexpected_shape_returns_fallback():
    gateway = make_gateway(lambda request: httpx.Response(200, json=["not", "a", "dict"]))
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE


def test_empty_answer_returns_placeholder():
    gateway = make_gateway(lambda request: httpx.Response(200, json={"candidates": []}))
    assert gateway.ask("hi", "ctx") == EMPTY_RESPONSE_MESSAGE


def test_settings_from_env():
    settings = GatewaySettings.from_env({"API_KEY": "abc", "CONDENSERLAB_MODEL": "gemini-test"})
    assert settings.api_key == "abc"
    assert settings.model == "gemini-test"
    assert settings.has_credentials

    empty = GatewaySettings.from_env({})
    assert empty.api_key is None
    assert not empty.has_credentials


def test_build_context_contains_required_facts():
    snap = CircuitState(k1_closed=True, capacitor_voltage=63.21).snapshot()
    context = build_context(snap, reading_count=2, stopwatch_seconds=4.5)
    for fact in [
        "63.2 / 100",
        "K1 (Charging): CLOSED",
        "K2 (Leaking): OPEN",
        "Known Capacitance: 1 µF",
        "Stopwatch Time: 4.50 s",
        "Readings Taken: 2",
    ]:
        assert fact in context


def test_invalid_model_name_returns_fallback():
    settings = GatewaySettings(api_key="test-key", model="gemini\x00bad", base_url="https://example.test/v1beta")
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=answer("unused"))),
        base_url=settings.base_url,
    )
    gateway = AssistantGateway(settings, client=client)
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE


def test_closed_client_returns_fallback():
    gateway = make_gateway(lambda request: httpx.Response(200, json=answer("unused")))
    gateway._client.close()
    assert gateway.ask("hi", "ctx") == CONNECTION_ERROR_MESSAGE
