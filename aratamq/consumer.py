"""Interface for objects that receive messages from a queue."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .message import Message


class Consumer(ABC):
    """Receives messages dispatched by a queue."""

    @abstractmethod
    def consume(self, message: Message) -> bool:
        """Handle *message*; return True if it was accepted."""
        raise NotImplementedError