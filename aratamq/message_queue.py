"""A FIFO message queue that dispatches to consumers in round-robin order."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Optional

from .consumer import Consumer
from .message import Message

_log = logging.getLogger(__name__)


class QueueError(RuntimeError):
    """Raised for invalid queue operations."""


class Queue:
    """Holds messages and hands them to registered consumers in turn."""

    def __init__(self, name: str, *, max_retries: int = 3, retry_delay: float = 0.1) -> None:
        self._name = name
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._messages: deque[Message] = deque()
        self._consumers: list[Consumer] = []
        self._next = 0

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Queue({self._name!r})"

    def enqueue(self, message: Message) -> None:
        """Add *message*; dispatch at once if consumers are registered."""
        self._messages.append(message)
        if self._consumers:
            self.dispatch_message()

    def dequeue(self) -> Message:
        """Remove and return the oldest message."""
        if not self._messages:
            raise QueueError("Cannot dequeue from empty queue")
        return self._messages.popleft()

    def _position(self, consumer: Consumer) -> Optional[int]:
        return next(
            (pos for pos, known in enumerate(self._consumers) if known is consumer), None
        )

    def register_consumer(self, consumer: Consumer) -> None:
        if self._position(consumer) is not None:
            raise QueueError("Consumer already registered")
        self._consumers.append(consumer)
        if len(self._consumers) == 1:
            self._next = 0

    def unregister_consumer(self, consumer: Consumer) -> None:
        position = self._position(consumer)
        if position is None:
            raise QueueError("Consumer not registered")
        del self._consumers[position]
        if position < self._next:
            self._next -= 1

    def dispatch_message(self) -> None:
        """Deliver every pending message, one consumer after another."""
        if not self._messages:
            raise QueueError("Cannot dispatch message from empty queue")
        if not self._consumers:
            raise QueueError("No consumers registered")
        while self._messages:
            message = self._messages[0]
            if self._next >= len(self._consumers):
                self._next = 0
            consumer = self._consumers[self._next]
            for _ in range(self._max_retries):
                if consumer.consume(message):
                    self._messages.popleft()
                    break
                time.sleep(self._retry_delay)
                _log.warning(
                    "Consumer %r rejected message %s", consumer, message.metadata.message_id
                )
            self._next += 1

    def is_empty(self) -> bool:
        return not self._messages

    def __len__(self) -> int:
        return len(self._messages)