"""Conversation with the lab assistant."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


class ChatHistory:
    """Append-only ordered sequence of chat messages."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(tuple(self._messages))

    def append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self._messages.append(message)
        return message

    def list(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)
