import pytest

from condenserlab.controller.session import (
    FIRST_READING_TIP, RESET_MESSAGE, WELCOME_MESSAGE, CalculationOutcome, LabSession
)
from condenserlab.model.chat import ChatRole
from condenserlab.model.errors import InvalidInput


def charge_and_leak(session: LabSession, leak_seconds: float) -> None:
    session.toggle_k1()
    session.advance(10.0)
    session.toggle_k1()
    session.toggle_k2()
    session.advance(leak_seconds)


def test_starts_with_welcome_message(session):
    assert session.messages[0].role is ChatRole.ASSISTANT
    assert session.messages[0].text == WELCOME_MESSAGE
    assert not session.awaiting_response


def test_toggle_keys(session):
    assert session.toggle_k1() is True
    assert session.snapshot.k1_closed
    assert session.toggle_k1() is False
    assert session.toggle_k2() is True
    assert session.snapshot.k2_closed


def test_snapshot_is_read_only(session):
    snap = session.snapshot
    with pytest.raises(AttributeError):
        snap.capacitor_voltage = 50.0


def test_advance_charges_condenser(session):
    session.toggle_k1()
    snap = session.advance(0.05)
    assert 0.0 < snap.capacitor_voltage < snap.max_voltage
    assert snap.sim_time == pytest.approx(0.05)


def test_record_uses_latest_state(session):
    charge_and_leak(session, 5.0)
    reading = session.record(5.0)
    assert reading.final_deflection == round(session.snapshot.capacitor_voltage, 1)
    assert reading.initial_deflection == 100.0


def test_first_record_shows_tip_once(session):
    session.record(0.0)
    session.record(0.0)
    tips = [m for m in session.messages if m.text == FIRST_READING_TIP]
    assert len(tips) == 1


def test_calculate_resistance_recovers_hidden_value(session):
    charge_and_leak(session, 5.0)
    reading = session.record(5.0)

    assert session.calculate(reading.id) is CalculationOutcome.CALCULATED
    calculated = session.readings[0].calculated_r
    assert calculated == pytest.approx(session.snapshot.resistance, abs=0.01)
    assert session.mean_resistance() == pytest.approx(calculated)


def test_calculate_deferred_without_leakage(session):
    session.toggle_k1()
    session.advance(10.0)
    reading = session.record(0.0)
    assert session.calculate(reading.id) is CalculationOutcome.DEFERRED
    assert session.readings[0].calculated_r is None


def test_calculate_invalid_leaves_ledger_unchanged(session):
    reading = session.record(3.0)  # uncharged condenser, deflection 0
    before = session.readings
    with pytest.raises(InvalidInput):
        session.calculate(reading.id)
    assert session.readings == before


def test_calculate_unknown_id(session):
    with pytest.raises(KeyError):
        session.calculate(42)


def test_delete(session):
    a = session.record(1.0)
    b = session.record(2.0)
    session.delete(a.id)
    session.delete(a.id)
    assert [r.id for r in session.readings] == [b.id]


def test_reset(session):
    charge_and_leak(session, 1.0)
    old = session.record(1.0)
    session.reset()

    snap = session.snapshot
    assert not snap.k1_closed and not snap.k2_closed
    assert snap.capacitor_voltage == 0.0
    assert session.readings == ()
    assert session.messages[-1].text == RESET_MESSAGE
    assert session.record(0.0).id > old.id


def test_question_slot_rejects_overlap(session):
    assert session.begin_question("   ") is None
    assert session.begin_question("  What is RC?  ") == "What is RC?"
    assert session.awaiting_response
    assert session.begin_question("Another one") is None

    session.finish_question("RC is the time constant.")
    assert not session.awaiting_response
    roles = [m.role for m in session.messages[-2:]]
    assert roles == [ChatRole.USER, ChatRole.ASSISTANT]
    assert session.begin_question("Another one") == "Another one"


def test_answer_applied_after_state_changes(session):
    session.begin_question("Why?")
    session.reset()
    session.finish_question("Because.")
    assert session.messages[-1].text == "Because."


def test_context_mentions_bench_facts(session):
    session.toggle_k2()
    session.record(0.0)
    context = session.context(12.346)
    assert "0.0 / 100" in context
    assert "K1 (Charging): OPEN" in context
    assert "K2 (Leaking): CLOSED" in context
    assert "1 µF" in context
    assert "Readings Taken: 1" in context
    assert "12.35 s" in context
