"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling latent tasks.

Why is this file needed?
------------------------
1. Responsiveness: If we wait for the assistant on the main thread, the GUI
   freezes and the galvanometer stops moving. The request is pushed to a
   background thread while physics keeps running.
2. Signals: They provide a safe way to hand the answer back to the GUI thread
   using Qt Signals.

3. Lifetime: A QThread must not be destroyed while it runs. WorkerRegistry
   holds a reference until the thread has really finished, and on shutdown
   silences and joins whatever is still in flight.

Classes:
    AssistantWorker: Runs one AssistantGateway.ask call.
    WorkerRegistry: Keeps running workers alive.
"""
import logging
from PySide6.QtCore import QObject, QThread, Signal, Slot

from condenserlab.controller.gateway import AssistantGateway, CONNECTION_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class AssistantWorker(QThread):
    # Emitted exactly once with the text to append to the chat
    answer_ready = Signal(str)

    def __init__(self, gateway: AssistantGateway, question: str, context: str) -> None:
        super().__init__()
        self.gateway = gateway
        self.question = question
        self.context = context

    def run(self) -> None:
        logger.info("Asking the lab assistant in background thread...")
        try:
            answer = self.gateway.ask(self.question, self.context)
        except Exception:
            # The gateway already converts its own failures; this guards the slot contract.
            logger.exception("Unexpected error in AssistantWorker")
            answer = CONNECTION_ERROR_MESSAGE
        self.answer_ready.emit(answer)


class WorkerRegistry(QObject):
    def __init__(self, parent: QObject = None) -> None:
        super().__init__(parent)
        self._workers: list[QThread] = []

    def __len__(self) -> int:
        return len(self._workers)

    def start(self, worker: QThread) -> None:
        self._workers.append(worker)
        worker.finished.connect(self._on_finished)
        worker.start()

    @Slot()
    def _on_finished(self) -> None:
        worker = self.sender()
        if worker in self._workers:
            # finished is emitted from inside the thread; join before dropping the reference
            worker.wait()
            self._workers.remove(worker)

    def shutdown(self) -> None:
        """Drop pending results and block until every worker thread has ended."""
        for worker in self._workers:
            worker.blockSignals(True)
        for worker in self._workers:
            if worker.isRunning():
                logger.info("Waiting for the assistant request to finish before closing...")
            worker.wait()
        self._workers.clear()
