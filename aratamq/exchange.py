"""Exchanges that route messages to bound queues: direct, fanout and topic."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from .message import Message
from .message_queue import Queue
from .utils import split_words, validate_routing_key, validate_routing_pattern


class ExchangeType(Enum):
    """Kinds of exchange a broker can create."""

    DIRECT = "direct"
    FANOUT = "fanout"
    TOPIC = "topic"
    HEADERS = "headers"


class ExchangeError(RuntimeError):
    """Raised when a binding or route does not exist or conflicts."""


class Exchange(ABC):
    """Base class of all exchanges: a named router of messages to queues."""

    def __init__(self, name: str, exchange_type: ExchangeType) -> None:
        self._name = name
        self._type = exchange_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def exchange_type(self) -> ExchangeType:
        return self._type

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    @abstractmethod
    def bind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        """Bind *queue* to this exchange under *binding_key*."""

    @abstractmethod
    def unbind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        """Remove the binding of *queue* under *binding_key*."""

    @abstractmethod
    def route_message(self, message: Message, routing_key: Optional[str] = None) -> None:
        """Deliver *message* to the queues that *routing_key* selects."""


def _require(key: Optional[str], what: str) -> str:
    if key is None:
        raise ValueError(f"{what} is required")
    return key


class DirectExchange(Exchange):
    """Routes each message to the single queue bound to its exact key."""

    def __init__(self, name: str) -> None:
        super().__init__(name, ExchangeType.DIRECT)
        self._routing_table: dict[str, Queue] = {}

    def bind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        key = _require(binding_key, "Routing key")
        validate_routing_key(key)
        if key in self._routing_table:
            raise ExchangeError(
                f"Routing key '{key}' already bound to a queue in exchange '{self._name}'"
            )
        self._routing_table[key] = queue

    def unbind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        key = _require(binding_key, "Routing key")
        validate_routing_key(key)
        bound = self._routing_table.get(key)
        if bound is None:
            raise ExchangeError(
                f"Routing key '{key}' not bound to any queue in exchange '{self._name}'"
            )
        if bound is not queue:
            raise ExchangeError(
                f"Queue '{queue.name}' not bound to routing key '{key}' "
                f"in exchange '{self._name}'"
            )
        del self._routing_table[key]

    def route_message(self, message: Message, routing_key: Optional[str] = None) -> None:
        key = _require(routing_key, "Routing key")
        validate_routing_key(key)
        self.get_queue(key).enqueue(message)

    def get_queue(self, routing_key: str) -> Queue:
        """Return the queue bound to *routing_key*."""
        try:
            return self._routing_table[routing_key]
        except KeyError:
            raise ExchangeError(
                f"No queue bound to routing key '{routing_key}' in exchange '{self._name}'"
            ) from None

    @property
    def routing_table_size(self) -> int:
        return len(self._routing_table)


class FanoutExchange(Exchange):
    """Routes every message to all bound queues; keys are not allowed."""

    def __init__(self, name: str) -> None:
        super().__init__(name, ExchangeType.FANOUT)
        self._queues: dict[Queue, None] = {}

    def bind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        if binding_key is not None:
            raise ValueError("Fanout exchange does not support binding keys")
        self._queues[queue] = None

    def unbind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        if binding_key is not None:
            raise ValueError("Fanout exchange does not support binding keys")
        if queue not in self._queues:
            raise ExchangeError("Queue not bound to exchange")
        del self._queues[queue]

    def route_message(self, message: Message, routing_key: Optional[str] = None) -> None:
        if routing_key is not None:
            raise ValueError("Fanout exchange does not support routing keys")
        for queue in list(self._queues):
            queue.enqueue(message)

    @property
    def queue_count(self) -> int:
        return len(self._queues)


class TopicExchange(Exchange):
    """Routes messages to queues whose binding pattern matches the key.

    Patterns are dot-separated words; ``*`` matches exactly one word and a
    single ``#`` at the start or end matches any run of words.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name, ExchangeType.TOPIC)
        self._binding_table: dict[str, dict[Queue, None]] = {}

    def try_match_pattern(self, pattern: str, routing_key: str) -> bool:
        """Return True if *routing_key* matches *pattern*."""
        pattern_words = split_words(pattern, ".")
        routing_words = split_words(routing_key, ".")

        if pattern_words[0] == "#":
            suffix = pattern_words[1:]
            if len(routing_words) < len(suffix):
                return False
            return routing_words[len(routing_words) - len(suffix):] == suffix

        if pattern_words[-1] == "#":
            prefix = pattern_words[:-1]
            if len(routing_words) < len(prefix):
                return False
            return routing_words[: len(prefix)] == prefix

        if len(pattern_words) != len(routing_words):
            return False
        return all(
            expected in ("*", actual)
            for expected, actual in zip(pattern_words, routing_words)
        )

    def bind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        pattern = _require(binding_key, "Routing pattern")
        try:
            validate_routing_pattern(pattern)
        except ValueError as exc:
            raise ValueError(f"Invalid routing pattern: {pattern}. {exc}") from exc
        self._binding_table.setdefault(pattern, {})[queue] = None

    def unbind_queue(self, queue: Queue, binding_key: Optional[str] = None) -> None:
        pattern = _require(binding_key, "Routing pattern")
        try:
            validate_routing_pattern(pattern)
            queues = self._binding_table.get(pattern)
            if queues is None:
                raise ValueError(f"No binding found for pattern: {pattern}")
            if queue not in queues:
                raise ValueError(f"Queue not found in binding for pattern: {pattern}")
        except ValueError as exc:
            raise ValueError(f"Invalid routing pattern: {pattern}. {exc}") from exc
        del queues[queue]
        if not queues:
            del self._binding_table[pattern]

    def route_message(self, message: Message, routing_key: Optional[str] = None) -> None:
        key = _require(routing_key, "Routing key")
        try:
            validate_routing_key(key)
            targets = [
                queues
                for pattern, queues in self._binding_table.items()
                if self.try_match_pattern(pattern, key)
            ]
            if not targets:
                raise ValueError(f"No matching pattern found for routing key: {key}")
        except ValueError as exc:
            raise ValueError(f"Error routing message: {exc}") from exc
        for queues in targets:
            for queue in list(queues):
                queue.enqueue(message)

    def _bound(self, pattern: str) -> dict[Queue, None]:
        try:
            if pattern not in self._binding_table:
                raise ValueError(f"No binding found for pattern: {pattern}")
            validate_routing_pattern(pattern)
        except ValueError as exc:
            raise ValueError(f"Invalid routing pattern: {pattern}. {exc}") from exc
        return self._binding_table[pattern]

    def get_queues(self, pattern: str) -> set[Queue]:
        """Return the queues bound under *pattern*."""
        return set(self._bound(pattern))

    def get_queue_size(self, pattern: str) -> int:
        """Return how many queues are bound under *pattern*."""
        return len(self._bound(pattern))