"""
AI Lab Assistant Panel
"""
from __future__ import annotations

import html
import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLineEdit, QPushButton, QTextBrowser

from condenserlab.controller.clock import Stopwatch
from condenserlab.controller.gateway import AssistantGateway
from condenserlab.controller.session import LabSession
from condenserlab.controller.workers import AssistantWorker, WorkerRegistry
from condenserlab.model.chat import ChatRole

logger = logging.getLogger(__name__)


class AssistantPanel(QWidget):
    def __init__(self, session: LabSession, gateway: AssistantGateway, stopwatch: Stopwatch) -> None:
        super().__init__()
        self.session = session
        self.gateway = gateway
        self.stopwatch = stopwatch
        self.workers = WorkerRegistry(self)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        grp = QGroupBox("AI Lab Assistant")
        inner = QVBoxLayout(grp)

        self.chat_view = QTextBrowser()
        self.chat_view.setOpenExternalLinks(False)
        inner.addWidget(self.chat_view)

        hbox = QHBoxLayout()
        self.input = QLineEdit()
        self.input.setPlaceholderText("Ask about the formula, procedure...")
        self.input.returnPressed.connect(self.on_submit)
        hbox.addWidget(self.input)

        self.btn_send = QPushButton("Send")
        self.btn_send.clicked.connect(self.on_submit)
        hbox.addWidget(self.btn_send)
        inner.addLayout(hbox)

        layout.addWidget(grp)
        self.refresh()

    def on_submit(self) -> None:
        question = self.session.begin_question(self.input.text())
        if question is None:
            return

        self.input.clear()
        context = self.session.context(self.stopwatch.elapsed_seconds)

        worker = AssistantWorker(self.gateway, question, context)
        worker.answer_ready.connect(self.on_answer)
        self.workers.start(worker)
        self.refresh()

    def on_answer(self, answer: str) -> None:
        """Runs in the main thread via Qt's signal/slot mechanism."""
        self.session.finish_question(answer)
        logger.info("Assistant answer received.")
        self.refresh()

    def refresh(self) -> None:
        bubbles = []
        for msg in self.session.messages:
            text = html.escape(msg.text).replace("\n", "<br>")
            if msg.role is ChatRole.USER:
                bubbles.append(
                    f'<p align="right"><span style="background:#4f46e5; color:white;">&nbsp;{text}&nbsp;</span></p>'
                )
            else:
                bubbles.append(f'<p><span style="background:#e5e7eb;">&nbsp;{text}&nbsp;</span></p>')

        awaiting = self.session.awaiting_response
        if awaiting:
            bubbles.append('<p><i style="color:gray;">Thinking...</i></p>')

        self.chat_view.setHtml("".join(bubbles))
        self.chat_view.verticalScrollBar().setValue(self.chat_view.verticalScrollBar().maximum())
        self.btn_send.setEnabled(not awaiting)

    def shutdown(self) -> None:
        """Join the in-flight request; its answer is discarded."""
        self.workers.shutdown()
