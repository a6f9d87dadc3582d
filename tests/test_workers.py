import threading
import time

from PySide6.QtCore import QCoreApplication

from condenserlab.controller.workers import AssistantWorker, WorkerRegistry


class ScriptedGateway:
    """Answers after an optional delay, without any network."""

    def __init__(self, answer="ok", delay=0.0, error=None):
        self.answer = answer
        self.delay = delay
        self.error = error
        self.release = threading.Event()

    def ask(self, question, context):
        if self.delay:
            self.release.wait(self.delay)
        if self.error is not None:
            raise self.error
        return self.answer


def pump_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate() and time.monotonic() < deadline:
        QCoreApplication.processEvents()
        time.sleep(0.01)
    return predicate()


def test_worker_delivers_answer(qapp):
    answers = []
    registry = WorkerRegistry()
    worker = AssistantWorker(ScriptedGateway(answer="RC is tau."), "q", "ctx")
    worker.answer_ready.connect(answers.append)
    registry.start(worker)

    assert pump_until(lambda: answers and len(registry) == 0)
    assert answers == ["RC is tau."]
    assert not worker.isRunning()


def test_worker_turns_unexpected_errors_into_fallback(qapp):
    from condenserlab.controller.gateway import CONNECTION_ERROR_MESSAGE

    answers = []
    registry = WorkerRegistry()
    worker = AssistantWorker(ScriptedGateway(error=KeyError("boom")), "q", "ctx")
    worker.answer_ready.connect(answers.append)
    registry.start(worker)

    assert pump_until(lambda: answers and len(registry) == 0)
    assert answers == [CONNECTION_ERROR_MESSAGE]


def test_registry_keeps_worker_until_thread_ends(qapp):
    gateway = ScriptedGateway(delay=5.0)
    registry = WorkerRegistry()
    worker = AssistantWorker(gateway, "q", "ctx")
    registry.start(worker)

    QCoreApplication.processEvents()
    assert len(registry) == 1
    gateway.release.set()
    assert pump_until(lambda: len(registry) == 0)
    assert not worker.isRunning()


def test_shutdown_joins_slow_request_and_drops_answer(qapp):
    answers = []
    gateway = ScriptedGateway(answer="late", delay=0.3)
    registry = WorkerRegistry()
    worker = AssistantWorker(gateway, "q", "ctx")
    worker.answer_ready.connect(answers.append)
    registry.start(worker)

    registry.shutdown()

    assert not worker.isRunning()
    assert len(registry) == 0
    for _ in range(5):
        QCoreApplication.processEvents()
    assert answers == []
